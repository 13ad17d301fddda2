"""JSON request and response helpers for aiohttp handlers.

    read_json   -- decode exactly one JSON document from a request body
    write_json  -- build a JSON response with status and extra headers
    error_json  -- build the {"error": "<message>"} envelope response

Error responses follow the format:
  {"error": "body must not be empty"}

The helpers hold no state, never log and never translate their own
failures into responses. DecodeError and EncodeError go to the caller.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from http import HTTPStatus
from typing import Any

from aiohttp import hdrs, web
from multidict import CIMultiDict

from restful.binding import bind, to_jsonable
from restful.config import DEFAULT_MAX_BODY_BYTES
from restful.errors import DecodeError, EncodeError

JSON_CONTENT_TYPE = "application/json"

HeaderSet = Mapping[str, str | Iterable[str]]


def dumps(data: Any) -> bytes:
    """Serialize ``data`` to compact UTF-8 JSON.

    No whitespace between tokens and no trailing newline. Dataclasses and
    pydantic models are written as objects through pydantic serialization.

    Raises:
        EncodeError: ``data`` holds an unsupported type, a circular
            reference, NaN or infinity.
    """
    try:
        text = json.dumps(
            data,
            ensure_ascii=False,
            separators=(",", ":"),
            allow_nan=False,
            default=to_jsonable,
        )
        return text.encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise EncodeError(f"cannot encode {type(data).__name__} as JSON: {exc}") from exc


async def read_json(
    request: web.Request,
    target: Any = None,
    *,
    max_bytes: int | None = None,
) -> Any:
    """Decode a single JSON document from the request body.

    Args:
        request: Incoming aiohttp request.
        target: Destination. None returns the decoded value. A type
            (dataclass, model, int, list[str], ...) is validated strictly;
            an instance is populated in place. See restful.binding.bind.
        max_bytes: Body size limit. Defaults to the app's
            ``Config.max_body_bytes``, or 1 MiB without a config.

    Returns:
        The decoded (and bound) value.

    Raises:
        DecodeError: Body is empty, too large, not UTF-8, malformed,
            followed by trailing data, or does not fit ``target``.
    """
    limit = max_bytes if max_bytes is not None else _max_body_bytes(request)
    too_large = f"body must not be larger than {limit} bytes"

    if request.content_length is not None and request.content_length > limit:
        raise DecodeError(too_large)
    try:
        body = await request.read()
    except web.HTTPRequestEntityTooLarge as exc:
        raise DecodeError(too_large) from exc
    if len(body) > limit:
        raise DecodeError(too_large)

    if not body.strip():
        raise DecodeError("body must not be empty")

    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeError("body must be UTF-8 encoded") from exc
    try:
        value = json.loads(text)
    except json.JSONDecodeError as exc:
        if exc.msg == "Extra data":
            raise DecodeError("body must only contain a single JSON value") from exc
        raise DecodeError(
            f"body contains badly-formed JSON (at character {exc.pos})"
        ) from exc

    return bind(value, target, raw=text)


def write_json(
    status: int,
    data: Any,
    headers: HeaderSet | None = None,
) -> web.Response:
    """Create a JSON response.

    Caller headers are applied first, every value of every entry in order.
    Content-Type is then forced to application/json, replacing any
    caller-supplied value.

    Args:
        status: HTTP status code, used as given.
        data: Response payload.
        headers: Header name to a value or a sequence of values.

    Returns:
        aiohttp response whose body is exactly ``dumps(data)``.

    Raises:
        EncodeError: ``data`` cannot be represented as JSON. Raised before
            any response is built.
    """
    body = dumps(data)

    out: CIMultiDict[str] = CIMultiDict()
    for name, values in (headers or {}).items():
        if isinstance(values, str):
            values = (values,)
        for value in values:
            out.add(name, value)
    out[hdrs.CONTENT_TYPE] = JSON_CONTENT_TYPE

    return web.Response(status=status, body=body, headers=out)


def error_json(
    err: BaseException | str,
    status: int = HTTPStatus.BAD_REQUEST,
) -> web.Response:
    """Create a JSON error response.

    Args:
        err: Exception (or message) whose text becomes the error message.
        status: HTTP status code (default 400).

    Returns:
        aiohttp response with body ``{"error": "<message>"}``.
    """
    return write_json(status, {"error": str(err)})


def _max_body_bytes(request: web.Request) -> int:
    config = request.app.get("config")
    return config.max_body_bytes if config else DEFAULT_MAX_BODY_BYTES
