# Logged events / error codes
INVALID_JSON_BODY = 'INVALID_JSON_BODY'
MISSING_LONG_URL = 'MISSING_LONG_URL'
INVALID_OBSCURE_FLAG = 'INVALID_OBSCURE_FLAG'
INVALID_LONG_URL = 'INVALID_LONG_URL'
ORIGIN_NOT_ALLOWED = 'ORIGIN_NOT_ALLOWED'
LINK_CREATION_FAILED = 'LINK_CREATION_FAILED'
SHORTEN_SUCCESS = 'SHORTEN_SUCCESS'
