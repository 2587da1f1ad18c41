# File: tests/conftest.py
from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from dataclasses import dataclass, field

import pytest
from aiohttp import web
from site_warmer.config import HttpSettings
from site_warmer.logger import LOGGER_NAME, configure


@dataclass
class RequestRecorder:
    """Collects what a test server saw: paths, order of events, concurrency."""

    hits: list[str] = field(default_factory=list)
    events: list[tuple[str, str]] = field(default_factory=list)
    active: int = 0
    peak: int = 0
    completed: int = 0

    def middleware(self):
        @web.middleware
        async def record(request: web.Request, handler):
            self.hits.append(request.path)
            self.events.append(("start", request.path))
            self.active += 1
            self.peak = max(self.peak, self.active)
            try:
                return await handler(request)
            finally:
                self.active -= 1
                self.completed += 1
                self.events.append(("end", request.path))

        return record


async def serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "localhost", port)
    await site.start()
    try:
        yield f"http://localhost:{port}"
    finally:
        await runner.cleanup()


def html_page(*hrefs: str) -> web.Response:
    body = "".join(f'<a href="{h}">{h}</a>' for h in hrefs)
    return web.Response(text=f"<html><body>{body}</body></html>", content_type="text/html")


def text_handler(text: str = "ok", delay: float = 0.0, status: int = 200):
    async def handler(_):
        if delay:
            await asyncio.sleep(delay)
        return web.Response(text=text, status=status)

    return handler


@pytest.fixture(autouse=True)
def fresh_logger():
    """Rebind the project logger to the current stdout for every test."""
    configure(level="DEBUG")
    yield


@pytest.fixture()
def crawl_log(caplog):
    """caplog wired to the project logger (which does not propagate)."""
    lg = logging.getLogger(LOGGER_NAME)
    lg.addHandler(caplog.handler)
    caplog.set_level(logging.DEBUG, logger=LOGGER_NAME)
    yield caplog
    lg.removeHandler(caplog.handler)


@pytest.fixture()
def recorder() -> RequestRecorder:
    return RequestRecorder()


@pytest.fixture()
def http_settings() -> HttpSettings:
    return HttpSettings(timeout=2.0, user_agent="TestAgent/1.0")
