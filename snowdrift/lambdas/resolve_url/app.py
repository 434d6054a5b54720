import logging
from typing import Any

from snowdrift.dao.exceptions import DataStoreError, LinkNotFoundError
from snowdrift.utils import get_short_url, guarantee_500_response
from snowdrift.utils.config import load_config, load_engine
from snowdrift.lambdas.responses import (
    HTML_CONTENT_TYPE,
    JSON_CONTENT_TYPE,
    allowed_origin,
    cors_headers,
    negotiate,
    request_headers,
    response_200,
    response_301,
    response_302,
    response_400,
    response_404,
    response_500,
)
from snowdrift.lambdas.resolve_url.constants import (
    MISSING_CODE,
    LINK_NOT_FOUND,
    ORIGIN_NOT_ALLOWED,
    LINK_RESOLUTION_FAILED,
    RESOLVE_SUCCESS,
    ROOT_REDIRECT,
    CORS_PREFLIGHT,
)


logger = logging.getLogger(__name__)

PREFLIGHT_MAX_AGE = 3600


def preflight(event: dict[str, Any], config) -> dict[str, Any]:
    """Answer a CORS preflight (OPTIONS /) request"""
    allowed, origin = allowed_origin(event, config.allowed_origins)
    if not allowed:
        logger.info('Preflight from disallowed origin. Responding with 400.', extra={'origin': origin, 'event': CORS_PREFLIGHT})
        return response_400(message=f"origin '{origin}' not allowed", error_code=ORIGIN_NOT_ALLOWED)
    if origin is None:
        return response_200({})
    return response_200(
        {},
        headers={
            **cors_headers(origin),
            'Access-Control-Allow-Methods': 'GET, POST',
            'Access-Control-Max-Age': str(PREFLIGHT_MAX_AGE),
        },
    )


@guarantee_500_response
def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Handle incoming API Gateway requests to resolve short URLs

    This Lambda handler follows this procedure to resolve codes:
    - Step 0: Answer CORS preflight (OPTIONS /) and root (GET /) requests
    - Step 1: Check the request's Origin against the allowed CORS origins
    - Step 2: Extract code from request path
    - Step 3: Resolve the code to its long URL
    - Step 4: Redirect client, or describe the link when JSON is preferred

    HTTP responses:
        200: Link description (Accept prefers application/json)
            long_url, short_url
        301: Redirect to the long URL
            headers:
                Location: long URL
        302: GET / redirects to the configured root redirect
        400: Disallowed origin or missing code
        404: Unknown code
        500: Internal server error

    Example:
        >>> event = {'httpMethod': 'GET', 'pathParameters': {'code': 'bDx9'}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        301
        >>> response['headers']['Location']
        'https://example.com/my-page'
    """
    config = load_config()

    # 0- CORS preflight and root redirect
    if (event.get('httpMethod') or '').upper() == 'OPTIONS':
        return preflight(event, config)

    code = (event.get('pathParameters') or {}).get('code')
    if not code and (event.get('path') or '/') == '/':
        if config.root_redirect:
            logger.info('Redirecting root request. Responding with 302.', extra={'event': ROOT_REDIRECT})
            return response_302(location=config.root_redirect)
        return response_404(message='no root redirect configured')

    # 1- Check CORS origin
    allowed, origin = allowed_origin(event, config.allowed_origins)
    if not allowed:
        logger.info('Origin not allowed. Responding with 400.', extra={'origin': origin, 'event': ORIGIN_NOT_ALLOWED})
        return response_400(message=f"origin '{origin}' not allowed", error_code=ORIGIN_NOT_ALLOWED)
    headers = cors_headers(origin)

    # 2- Extract code from request's path
    if not code:
        logger.info("Missing 'code' in path. Responding with 400.", extra={'event': MISSING_CODE})
        return response_400(message="missing 'code' in path", error_code=MISSING_CODE, headers=headers)
    short_url = get_short_url(code, config.url_prefix)

    # 3- Resolve the code
    try:
        link = load_engine().resolve(code, request=event)
    except LinkNotFoundError:
        logger.info('Link not found. Responding with 404.', extra={'code': code, 'event': LINK_NOT_FOUND})
        return response_404(message=f"short url {short_url} doesn't exist", error_code=LINK_NOT_FOUND, headers=headers)
    except DataStoreError:
        logger.warning('Failed to resolve link. Responding with 500.', extra={'code': code, 'event': LINK_RESOLUTION_FAILED})
        return response_500(error_code=LINK_RESOLUTION_FAILED)

    # 4- Redirect, or describe the link
    accept = request_headers(event).get('accept')
    if negotiate(accept, [HTML_CONTENT_TYPE, JSON_CONTENT_TYPE]) == JSON_CONTENT_TYPE:
        logger.info('Describing link. Responding with 200.', extra={'code': code, 'event': RESOLVE_SUCCESS})
        return response_200({'long_url': link.long_url, 'short_url': short_url}, headers=headers)

    logger.info('Redirecting client to long URL. Responding with 301.', extra={'code': code, 'event': RESOLVE_SUCCESS})
    return response_301(location=link.long_url, headers=headers)
