"""Access logging middleware.

One record per request on the ``restful.access`` logger:

    POST /people 400 1.2ms decode_error

Records carry ``method``, ``path``, ``status``, ``duration_ms`` and
``outcome`` attributes. The outcome is "ok" unless a later middleware
tagged the request (see OUTCOME_KEY), or "http_error" for a raised
web.HTTPException. Anything but "ok" is logged at WARNING.
"""

from __future__ import annotations

import logging
import time

from aiohttp import web

logger = logging.getLogger("restful.access")

# Request key under which middlewares record how a request ended
OUTCOME_KEY = "restful.outcome"


def _log(request: web.Request, status: int, start: float, outcome: str) -> None:
    duration_ms = round((time.monotonic() - start) * 1000, 1)
    logger.log(
        logging.INFO if outcome == "ok" else logging.WARNING,
        "%s %s %d %.1fms %s",
        request.method,
        request.path,
        status,
        duration_ms,
        outcome,
        extra={
            "method": request.method,
            "path": request.path,
            "status": status,
            "duration_ms": duration_ms,
            "outcome": outcome,
        },
    )


@web.middleware
async def access_log_middleware(
    request: web.Request,
    handler: web.RequestHandler,
) -> web.StreamResponse:
    start = time.monotonic()
    try:
        response = await handler(request)
    except web.HTTPException as exc:
        _log(request, exc.status, start, "http_error")
        raise

    _log(request, response.status, start, request.get(OUTCOME_KEY, "ok"))
    return response
