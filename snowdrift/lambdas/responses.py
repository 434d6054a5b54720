"""API Gateway response builders shared by the lambda handlers

Functions:
    request_headers(event) -> dict[str, str]
        Lower-cased request headers.
    allowed_origin(event, allowed_origins) -> tuple[bool, str | None]
        CORS origin check.
    negotiate(accept, offers) -> str | None
        Pick the best offered media type for an Accept header.
    response_200 / response_301 / response_302 / response_400 / response_404 / response_500
        Build Lambda proxy responses.
"""

import re
import json
from typing import Any


JSON_CONTENT_TYPE = 'application/json'
HTML_CONTENT_TYPE = 'text/html'


def request_headers(event: dict[str, Any]) -> dict[str, str]:
    return {k.lower(): v for k, v in (event.get('headers') or {}).items() if v is not None}


def allowed_origin(event: dict[str, Any], allowed_origins: re.Pattern | None) -> tuple[bool, str | None]:
    """Check the request's Origin header against the allowed origins

    Returns:
        tuple[bool, str | None]:
            (allowed, origin). The pattern may match anywhere in the origin; anchor
            it with ^ and $ to require a full match. Requests without an Origin
            header are always allowed.
            When allowed_origins is None every origin is allowed.
    """
    origin = request_headers(event).get('origin')
    if not origin:
        return True, None
    if allowed_origins is None or allowed_origins.search(origin):
        return True, origin
    return False, origin


def cors_headers(origin: str | None) -> dict[str, str]:
    return {'Access-Control-Allow-Origin': origin} if origin else {}


def _parse_accept(accept: str) -> list[tuple[str, str, float]]:
    ranges = []
    for part in accept.split(','):
        media_range, *params = [p.strip() for p in part.split(';')]
        if '/' not in media_range:
            continue
        q = 1.0
        for param in params:
            name, _, value = param.partition('=')
            if name.strip().lower() == 'q':
                try:
                    q = float(value)
                except ValueError:
                    q = 0.0
        type_, _, subtype = media_range.lower().partition('/')
        ranges.append((type_, subtype, q))
    return ranges


def negotiate(accept: str | None, offers: list[str]) -> str | None:
    """Pick the offered media type the Accept header prefers

    More specific ranges win over wildcards, then higher q values,
    then earlier offers. Returns None if nothing is acceptable.

    Example:
        >>> negotiate('application/json, text/*;q=0.5', ['text/html', 'application/json'])
        'application/json'
        >>> negotiate('', ['text/html', 'application/json']) is None
        True
    """
    best, best_q = None, 0.0
    ranges = _parse_accept(accept or '')
    for offer in offers:
        offer_type, _, offer_subtype = offer.lower().partition('/')
        q, specificity = 0.0, -1
        for type_, subtype, range_q in ranges:
            if type_ == offer_type and subtype == offer_subtype:
                match = 2
            elif type_ == offer_type and subtype == '*':
                match = 1
            elif type_ == '*' and subtype == '*':
                match = 0
            else:
                continue
            if match > specificity:
                q, specificity = range_q, match
        if q > best_q:
            best, best_q = offer, q
    return best


def _response(status: int, body: dict | None = None, headers: dict[str, str] | None = None) -> dict:
    return {
        'statusCode': status,
        'headers': {'Content-Type': JSON_CONTENT_TYPE, **(headers or {})},
        'body': json.dumps(body if body is not None else {}),
    }


def response_200(body: dict, headers: dict[str, str] | None = None) -> dict:
    return _response(200, body, headers)


def response_301(*, location: str, headers: dict[str, str] | None = None) -> dict:
    return _response(301, headers={'Location': location, **(headers or {})})


def response_302(*, location: str, headers: dict[str, str] | None = None) -> dict:
    return _response(302, headers={'Location': location, **(headers or {})})


def response_400(message: str | None = None, error_code: str | None = None, headers: dict[str, str] | None = None) -> dict:
    base = 'Bad Request'
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return _response(400, body, headers)


def response_404(message: str | None = None, error_code: str | None = None, headers: dict[str, str] | None = None) -> dict:
    base = 'Not Found'
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return _response(404, body, headers)


def response_500(message: str | None = None, error_code: str | None = None) -> dict:
    base = 'Internal Server Error'
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return _response(500, body)
