"""Shared pytest fixtures for the restful test suite.

Provides:
- Config with a small, known body limit
- aiohttp test client wired to an app from create_app, plus test routes
  that exercise the helpers the way application handlers would
"""

from __future__ import annotations

from dataclasses import dataclass

import pytest
import pytest_asyncio

from aiohttp import web

from restful import DecodeError, error_json, read_json, write_json
from restful.app import create_app
from restful.config import Config


@dataclass
class Person:
    name: str = ""
    age: int = 0


def _make_config(**overrides) -> Config:
    """Create a test Config with safe defaults."""
    defaults = dict(
        max_body_bytes=1024,
        log_level="INFO",
        log_format="text",
        configure_logging=False,
        env_file="",
    )
    defaults.update(overrides)
    return Config(**defaults)


async def _decode_person(request: web.Request) -> web.Response:
    """Decode into Person; DecodeError is left to the middleware."""
    person = await read_json(request, Person)
    return write_json(200, person)


async def _decode_value(request: web.Request) -> web.Response:
    """Decode without a target and report failures explicitly."""
    try:
        value = await read_json(request)
    except DecodeError as exc:
        cause = type(exc.__cause__).__name__ if exc.__cause__ else None
        return write_json(422, {"error": str(exc), "cause": cause})
    return write_json(200, {"value": value})


async def _echo_headers(request: web.Request) -> web.Response:
    """Respond with headers described by the request body."""
    body = await read_json(request, dict)
    return write_json(body.get("status", 200), body.get("data"), body.get("headers"))


async def _fail(request: web.Request) -> web.Response:
    status = int(request.query["status"]) if "status" in request.query else None
    if status is None:
        return error_json(ValueError("test"))
    return error_json(ValueError("test"), status)


async def _unencodable(request: web.Request) -> web.Response:
    return write_json(200, {"tags": {"a", "b"}})


def _build_app(config: Config | None = None) -> web.Application:
    """Build the app the same way applications do, with test routes."""
    if config is None:
        config = _make_config()

    app = create_app(config)
    app.router.add_post("/people", _decode_person)
    app.router.add_post("/decode", _decode_value)
    app.router.add_post("/echo", _echo_headers)
    app.router.add_get("/fail", _fail)
    app.router.add_get("/unencodable", _unencodable)
    return app


@pytest.fixture
def config():
    """Default test config (1 KiB body limit)."""
    return _make_config()


@pytest_asyncio.fixture
async def client(aiohttp_client, config):
    """aiohttp test client for the helper routes."""
    app = _build_app(config)
    return await aiohttp_client(app)


@pytest_asyncio.fixture
async def make_client(aiohttp_client):
    """Factory for test clients built from a customized config."""

    async def _make(**overrides):
        return await aiohttp_client(_build_app(_make_config(**overrides)))

    return _make
