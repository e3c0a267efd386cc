# File: page_roast/web.py
"""page_roast.web: aiohttp-приложение с JSON-операцией ``POST /api/roast`` и простой формой."""

from __future__ import annotations

from typing import Any, AsyncIterator, Dict

from aiohttp import ClientSession, ClientTimeout, web
from jinja2 import Environment

from page_roast.config import RoastConfig
from page_roast.engine import RoastEngine, RoastResponse
from page_roast.logger import logger
from page_roast.report.html_report import build_environment, report_context

__all__ = ["create_app", "run_app", "SOURCE_HEADER"]

#: internal marker telling a real analysis (backend) from a canned one (demo/fallback)
SOURCE_HEADER = "X-Roast-Source"

CONFIG_KEY = web.AppKey("config", RoastConfig)
SESSION_KEY = web.AppKey("session", ClientSession)
JINJA_KEY = web.AppKey("jinja", Environment)


def _engine(request: web.Request) -> RoastEngine:
    return RoastEngine(request.app[CONFIG_KEY], request.app[SESSION_KEY])


def _headers(response: RoastResponse) -> Dict[str, str]:
    return {SOURCE_HEADER: response.source.value} if response.source else {}


async def roast_api(request: web.Request) -> web.Response:
    try:
        body: Any = await request.json()
    except ValueError:
        body = None
    response = await _engine(request).handle(body)
    return web.json_response(response.body, status=response.status, headers=_headers(response))


def _render_index(request: web.Request, status: int = 200, **context: Any) -> web.Response:
    context.setdefault("url", "")
    html = request.app[JINJA_KEY].get_template("index.html.j2").render(**context)
    return web.Response(text=html, status=status, content_type="text/html")


async def index(request: web.Request) -> web.Response:
    return _render_index(request)


async def index_submit(request: web.Request) -> web.Response:
    form = await request.post()
    value = form.get("url")
    url = value if isinstance(value, str) else ""
    response = await _engine(request).handle({"url": url})
    if response.evaluation is None:
        return _render_index(request, response.status, url=url, error=response.body["error"])
    resp = _render_index(request, **report_context(response.evaluation.result, url))
    resp.headers.update(_headers(response))
    return resp


async def _client_session(app: web.Application) -> AsyncIterator[None]:
    app[SESSION_KEY] = ClientSession(timeout=ClientTimeout(total=app[CONFIG_KEY].timeout))
    yield
    await app[SESSION_KEY].close()


def create_app(config: RoastConfig) -> web.Application:
    """Собирает приложение; одна сессия aiohttp на всё время жизни процесса."""
    app = web.Application()
    app[CONFIG_KEY] = config
    app[JINJA_KEY] = build_environment()
    app.cleanup_ctx.append(_client_session)
    app.router.add_get("/", index)
    app.router.add_post("/", index_submit)
    app.router.add_post("/api/roast", roast_api)
    return app


def run_app(config: RoastConfig, host: str = "127.0.0.1", port: int = 8080) -> None:
    mode = "backend" if config.is_configured else "demo (no API key)"
    logger.info("Serving PageRoast on http://%s:%s, evaluation mode: %s", host, port, mode)
    web.run_app(create_app(config), host=host, port=port, print=None)
