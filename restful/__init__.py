"""JSON request/response helpers for aiohttp.

Provides consistent JSON decoding and response formatting for API handlers.
"""

from __future__ import annotations

from restful.errors import DecodeError, EncodeError, RestfulError
from restful.jsonio import JSON_CONTENT_TYPE, dumps, error_json, read_json, write_json

__all__ = [
    "JSON_CONTENT_TYPE",
    "DecodeError",
    "EncodeError",
    "RestfulError",
    "dumps",
    "error_json",
    "read_json",
    "write_json",
]
