# File: tests/test_fetcher.py
from __future__ import annotations

import re

import pytest
import pytest_asyncio
from aiohttp import web
from conftest import serve_app, text_handler
from site_warmer.config import HttpSettings
from site_warmer.crawler.fetcher import Fetcher, create_session


@pytest_asyncio.fixture
async def server(unused_tcp_port: int):
    app = web.Application()
    seen_agents: list[str] = []

    async def ok(request):
        seen_agents.append(request.headers.get("User-Agent", ""))
        return web.Response(text="hello")

    app.router.add_get("/ok", ok)
    app.router.add_get("/broken", text_handler("oops", status=500))
    app.router.add_get("/slow", text_handler(delay=1.0))

    async for url in serve_app(app, unused_tcp_port):
        yield url, seen_agents


@pytest.mark.asyncio()
async def test_success_logs_response_time(server, http_settings, crawl_log):
    base, agents = server
    async with create_session(http_settings) as session:
        result = await Fetcher(session).fetch(f"{base}/ok")

    assert result.ok
    assert result.status == 200
    assert result.elapsed >= 0
    assert agents == ["TestAgent/1.0"]
    messages = [r.getMessage() for r in crawl_log.records]
    assert any(re.fullmatch(rf"response time: \d+ ms for requesting {base}/ok", m) for m in messages)


@pytest.mark.asyncio()
async def test_server_error_status_is_not_a_failure(server, http_settings, crawl_log):
    base, _ = server
    async with create_session(http_settings) as session:
        result = await Fetcher(session).fetch(f"{base}/broken")

    assert result.ok
    assert result.status == 500
    assert not [r for r in crawl_log.records if r.levelname == "ERROR"]


@pytest.mark.asyncio()
async def test_connection_error_is_logged_not_raised(unused_tcp_port, http_settings, crawl_log):
    url = f"http://localhost:{unused_tcp_port}/nothing-listens-here"
    async with create_session(http_settings) as session:
        result = await Fetcher(session).fetch(url)

    assert not result.ok
    assert result.status is None
    errors = [r.getMessage() for r in crawl_log.records if r.levelname == "ERROR"]
    assert len(errors) == 1
    assert errors[0].startswith(f"[ERROR] could not crawl URL '{url}': ")


@pytest.mark.asyncio()
async def test_timeout_is_a_transport_failure(server, crawl_log):
    base, _ = server
    async with create_session(HttpSettings(timeout=0.2)) as session:
        result = await Fetcher(session).fetch(f"{base}/slow")

    assert not result.ok
    errors = [r.getMessage() for r in crawl_log.records if r.levelname == "ERROR"]
    assert errors and f"'{base}/slow'" in errors[0]
