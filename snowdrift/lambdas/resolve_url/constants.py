# Logged events / error codes
MISSING_CODE = 'MISSING_CODE'
LINK_NOT_FOUND = 'LINK_NOT_FOUND'
ORIGIN_NOT_ALLOWED = 'ORIGIN_NOT_ALLOWED'
LINK_RESOLUTION_FAILED = 'LINK_RESOLUTION_FAILED'
RESOLVE_SUCCESS = 'RESOLVE_SUCCESS'
ROOT_REDIRECT = 'ROOT_REDIRECT'
CORS_PREFLIGHT = 'CORS_PREFLIGHT'
