import json
import base64
import logging
from typing import Any

from snowdrift.models import Flavor
from snowdrift.exceptions import ValidationFailedError
from snowdrift.dao.exceptions import CodeExistsError, DataStoreError
from snowdrift.utils import get_short_url, guarantee_500_response
from snowdrift.utils.config import load_config, load_engine
from snowdrift.lambdas.responses import allowed_origin, cors_headers, response_200, response_400, response_500
from snowdrift.lambdas.shorten_url.constants import (
    INVALID_JSON_BODY,
    MISSING_LONG_URL,
    INVALID_OBSCURE_FLAG,
    INVALID_LONG_URL,
    ORIGIN_NOT_ALLOWED,
    LINK_CREATION_FAILED,
    SHORTEN_SUCCESS,
)


logger = logging.getLogger(__name__)


def _request_body(event: dict[str, Any]) -> str:
    body = event.get('body') or '{}'
    if event.get('isBase64Encoded'):
        body = base64.b64decode(body).decode('utf-8')
    return body


@guarantee_500_response
def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Handle incoming API Gateway requests to shorten URLs

    This Lambda handler follows this procedure to shorten URLs:
    - Step 1: Check the request's Origin against the allowed CORS origins
    - Step 2: Extract long URL and obscure flag from request body
    - Step 3: Shorten the long URL (idempotent per long URL)
    - Step 4: Respond to user with 200 success

    HTTP responses:
        200: Successful URL shortening
            long_url: original url (provided in request)
            short_url: short url (new or previously created)
        400: Bad client request
            message: invalid JSON, missing/invalid long_url, invalid obscure flag
            or disallowed origin
        500: Internal server error
            message: indicate the server experienced an internal error

    Args:
        event (dict[str, Any]):
            API Gateway event payload in Lambda Proxy format.
        context (Any):
            AWS Lambda context object containing runtime information.

    Returns:
        dict[str, Any]:
            JSON-serializable response following API Gateway Lambda Proxy
            output format.

    Example:
        >>> event = {'body': '{"long_url": "https://example.com"}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        200
        >>> json.loads(response['body'])['short_url']
        'http://localhost:3000/bDx9'
    """
    config = load_config()

    # 1- Check CORS origin
    allowed, origin = allowed_origin(event, config.allowed_origins)
    if not allowed:
        logger.info('Origin not allowed. Responding with 400.', extra={'origin': origin, 'event': ORIGIN_NOT_ALLOWED})
        return response_400(message=f"origin '{origin}' not allowed", error_code=ORIGIN_NOT_ALLOWED)
    headers = cors_headers(origin)

    # 2- Extract long URL and obscure flag from request body
    try:
        request_body = json.loads(_request_body(event))
    except (json.JSONDecodeError, UnicodeDecodeError, ValueError):
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': INVALID_JSON_BODY})
        return response_400(message='invalid JSON body', error_code=INVALID_JSON_BODY, headers=headers)
    if not isinstance(request_body, dict):
        request_body = {}

    long_url = request_body.get('long_url')
    if not long_url or not isinstance(long_url, str):
        logger.info("Missing 'long_url' in body. Responding with 400.", extra={'event': MISSING_LONG_URL})
        return response_400(message="missing 'long_url' in JSON body", error_code=MISSING_LONG_URL, headers=headers)

    obscure = request_body.get('obscure')
    if obscure is not None and not isinstance(obscure, bool):
        logger.info("Invalid 'obscure' flag. Responding with 400.", extra={'event': INVALID_OBSCURE_FLAG})
        return response_400(message="'obscure' must be a boolean", error_code=INVALID_OBSCURE_FLAG, headers=headers)

    # 3- Shorten the long URL
    try:
        link = load_engine().shorten(long_url, Flavor.from_obscure(obscure), request=event)
    except ValidationFailedError as e:
        logger.info('Invalid long URL. Responding with 400.', extra={'event': INVALID_LONG_URL, 'reason': str(e)})
        return response_400(message=str(e), error_code=INVALID_LONG_URL, headers=headers)
    except (CodeExistsError, DataStoreError):
        # Already routed to the engine's error reporter
        logger.warning('Failed to create link. Responding with 500.', extra={'event': LINK_CREATION_FAILED})
        return response_500(error_code=LINK_CREATION_FAILED)

    # 4- Return successful response to user
    short_url = get_short_url(link.code, config.url_prefix)
    logger.info('Shortened long URL. Responding with 200.', extra={'code': link.code, 'event': SHORTEN_SUCCESS})
    return response_200({'long_url': link.long_url, 'short_url': short_url}, headers=headers)
