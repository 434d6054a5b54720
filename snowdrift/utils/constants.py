# Maximum accepted length of a long URL (characters)
MAX_URL_LENGTH = 2000

# Accepted long URL schemes
ALLOWED_URL_SCHEMES = frozenset({'http', 'https'})

# Codec defaults
DEFAULT_HASH_SALT = 'salt'
SHORT_CODE_MIN_LENGTH = 4
LONG_CODE_MIN_LENGTH = 12
CODE_PERMUTATION_MULTIPLIER = 1315423911

# Default prefix prepended to codes to form absolute short URLs
DEFAULT_URL_PREFIX = 'http://localhost:3000/'

# Storage backends
MEMORY_BACKEND = 'memory'
REDIS_BACKEND = 'redis'
S3_BACKEND = 's3'

# Environment variable names
APP_ENV_ENV = 'APP_ENV'
APP_NAME_ENV = 'APP_NAME'
LOG_LEVEL_ENV = 'LOG_LEVEL'
BACKEND_ENV = 'SNOWDRIFT_BACKEND'
HASH_SALT_ENV = 'SNOWDRIFT_HASH_SALT'
URL_PREFIX_ENV = 'SNOWDRIFT_URL_PREFIX'
ALLOWED_ORIGINS_ENV = 'SNOWDRIFT_ALLOWED_ORIGINS'
ROOT_REDIRECT_ENV = 'SNOWDRIFT_ROOT_REDIRECT'

# Redis: connection details
REDIS_HOST_ENV = 'REDIS_HOST'
REDIS_PORT_ENV = 'REDIS_PORT'
REDIS_DB_ENV = 'REDIS_DB'
REDIS_USERNAME_ENV = 'REDIS_USERNAME'
REDIS_PASSWORD_ENV = 'REDIS_PASSWORD'  # noqa: S105

# S3: bucket holding link objects
S3_BUCKET_ENV = 'S3_BUCKET'
AWS_REGION_ENV = 'AWS_REGION'

# LocalStack: endpoint URL environment variable for local development
LOCALSTACK_ENDPOINT_ENV = 'LOCALSTACK_ENDPOINT'

# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
