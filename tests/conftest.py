# File: tests/conftest.py
from __future__ import annotations

import copy
from collections.abc import AsyncIterator
from typing import Any, Dict, List, Optional

import pytest
import pytest_asyncio
from aiohttp import web

from page_roast.config import RoastConfig

LANDING_HTML = """<!DOCTYPE html>
<html>
<head>
  <title>Acme Analytics</title>
  <style>body { color: red; }</style>
  <script>window.tracking = "<h1>not a heading</h1>";</script>
</head>
<body>
  <h1>Grow <span>Fast</span></h1>
  <p>Analytics   for   teams that ship.</p>
  <a class="btn btn-primary" href="/signup">Start free trial</a>
  <button>Book a demo</button>
  <a href="/about">About</a>
</body>
</html>"""

VALID_RESULT: Dict[str, Any] = {
    "score": 80,
    "headline": {
        "rating": "good",
        "feedback": "The headline states the outcome clearly.",
        "suggestion": "Add a timeframe to the promise.",
    },
    "cta": {"rating": "needs-work", "feedback": "Two competing CTAs split attention."},
    "trustSignals": {
        "rating": "bad",
        "feedback": "No testimonials or logos are visible.",
        "suggestion": "Add customer logos under the hero.",
    },
    "clarity": {"rating": "good", "feedback": "Visitors understand the offer quickly."},
    "overall": "Strong headline, weak social proof.",
    "quickWins": ["Add logos", "Pick one primary CTA"],
}


async def _serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "localhost", port)
    await site.start()
    try:
        yield f"http://localhost:{port}"
    finally:
        await runner.cleanup()


class FakeBackend:
    """Scriptable stand-in for the chat-completions endpoint."""

    def __init__(self) -> None:
        self.content: str = ""
        self.status: int = 200
        self.raw_body: Optional[str] = None
        self.calls: List[Dict[str, Any]] = []
        self.auth_headers: List[str] = []
        self.url: str = ""

    async def handle(self, request: web.Request) -> web.Response:
        self.calls.append(await request.json())
        self.auth_headers.append(request.headers.get("Authorization", ""))
        if self.status != 200:
            return web.Response(status=self.status, text="upstream exploded")
        if self.raw_body is not None:
            return web.Response(text=self.raw_body, content_type="application/json")
        return web.json_response(
            {"choices": [{"index": 0, "message": {"role": "assistant", "content": self.content}}]}
        )


@pytest.fixture()
def valid_result() -> Dict[str, Any]:
    """A fresh copy of a schema-conformant evaluation (score 80)."""
    return copy.deepcopy(VALID_RESULT)


@pytest.fixture()
def landing_html() -> str:
    return LANDING_HTML


@pytest.fixture()
def demo_config() -> RoastConfig:
    """Config without a credential: every evaluation is the demo one."""
    return RoastConfig(api_key=None, timeout=2.0)


@pytest_asyncio.fixture
async def target_site(unused_tcp_port_factory) -> AsyncIterator[str]:
    """Target website with a landing page, a broken page and a tiny page."""
    app = web.Application()

    async def landing(_):
        return web.Response(text=LANDING_HTML, content_type="text/html")

    async def tiny(_):
        return web.Response(
            text="<title>Acme</title><h1>Grow Fast</h1><button>Sign Up</button>",
            content_type="text/html",
        )

    async def broken(_):
        return web.Response(status=500, text="oops")

    app.router.add_get("/", landing)
    app.router.add_get("/tiny", tiny)
    app.router.add_get("/broken", broken)

    async for url in _serve_app(app, unused_tcp_port_factory()):
        yield url


@pytest_asyncio.fixture
async def fake_backend(unused_tcp_port_factory) -> AsyncIterator[FakeBackend]:
    backend = FakeBackend()
    app = web.Application()
    app.router.add_post("/v1/chat/completions", backend.handle)
    async for base in _serve_app(app, unused_tcp_port_factory()):
        backend.url = f"{base}/v1/chat/completions"
        yield backend


@pytest.fixture()
def backend_config(fake_backend: FakeBackend) -> RoastConfig:
    """Config with a credential, pointed at the fake backend."""
    return RoastConfig(api_key="sk-test", api_url=fake_backend.url, timeout=2.0)
