"""Translate uncaught helper errors into JSON error responses.

Handlers that let a DecodeError escape get a 400 envelope, an EncodeError
becomes a 500 with the details kept in the log. Either way the request is
tagged for the access log. Handlers that catch these errors themselves are
unaffected.
"""

from __future__ import annotations

import logging
from http import HTTPStatus

from aiohttp import web

from restful.access_log import OUTCOME_KEY
from restful.errors import DecodeError, EncodeError
from restful.jsonio import error_json

logger = logging.getLogger(__name__)


@web.middleware
async def json_error_middleware(
    request: web.Request,
    handler: web.RequestHandler,
) -> web.StreamResponse:
    try:
        return await handler(request)
    except DecodeError as exc:
        request[OUTCOME_KEY] = "decode_error"
        logger.debug("Rejected body for %s %s: %s", request.method, request.path, exc)
        return error_json(exc)
    except EncodeError:
        request[OUTCOME_KEY] = "encode_error"
        logger.exception("Failed to encode response for %s %s", request.method, request.path)
        return error_json("internal server error", HTTPStatus.INTERNAL_SERVER_ERROR)
