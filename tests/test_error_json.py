"""Tests for error_json."""

from __future__ import annotations

from http import HTTPStatus

import pytest

from restful import error_json


def test_default_status_is_bad_request():
    resp = error_json(RuntimeError("test"))
    assert resp.status == 400
    assert resp.body == b'{"error":"test"}'
    assert resp.headers["Content-Type"] == "application/json"


def test_explicit_status_is_used():
    resp = error_json(RuntimeError("test"), 500)
    assert resp.status == 500
    assert resp.body == b'{"error":"test"}'
    assert resp.headers["Content-Type"] == "application/json"


def test_http_status_enum_is_accepted():
    assert error_json("gone", HTTPStatus.GONE).status == 410


def test_plain_message_and_escaping():
    resp = error_json('bad "quote" é')
    assert resp.body == '{"error":"bad \\"quote\\" é"}'.encode("utf-8")


# ---- Over HTTP ----

@pytest.mark.asyncio
async def test_without_status_over_http(client):
    resp = await client.get("/fail")
    assert resp.status == 400
    assert resp.headers["Content-Type"] == "application/json"
    assert await resp.read() == b'{"error":"test"}'


@pytest.mark.asyncio
async def test_with_status_over_http(client):
    resp = await client.get("/fail?status=500")
    assert resp.status == 500
    assert resp.headers["Content-Type"] == "application/json"
    assert await resp.read() == b'{"error":"test"}'
