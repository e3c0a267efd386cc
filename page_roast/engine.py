# File: page_roast/engine.py
"""page_roast.engine: оркестрация конвейера «страница → сигналы → запрос → оценка»."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from aiohttp import ClientSession, ClientTimeout

from page_roast.config import RoastConfig
from page_roast.crawler.fetcher import PageFetcher
from page_roast.errors import BackendError, FetchError, InputError, NotConfiguredError, RoastError
from page_roast.evaluation import EvaluationBackend, build_request, fallback
from page_roast.logger import logger
from page_roast.models import Evaluation, EvaluationSource
from page_roast.parser.html_parser import extract_signals

__all__ = ["RoastEngine", "RoastResponse", "validate_url", "roast"]


@dataclass(frozen=True, slots=True)
class RoastResponse:
    """Ответ входной операции: HTTP-статус, JSON-тело и внутренняя метка источника."""

    status: int
    body: Dict[str, Any] = field(default_factory=dict)
    evaluation: Optional[Evaluation] = None

    @property
    def source(self) -> Optional[EvaluationSource]:
        return self.evaluation.source if self.evaluation else None


def validate_url(url: Any) -> str:
    """Rejects missing, non-string and blank URLs before any I/O happens."""
    if not isinstance(url, str) or not url.strip():
        raise InputError("URL is missing or blank")
    return url.strip()


class RoastEngine:
    """Фасад для веб-приложения, CLI и тестов.

    Используется как асинхронный контекстный менеджер. Если сессия aiohttp
    передана снаружи (веб-приложение делит одну сессию между запросами),
    движок её не закрывает.
    """

    def __init__(self, config: RoastConfig, session: Optional[ClientSession] = None) -> None:
        self.config = config
        self.session = session
        self._owns_session = False

    async def __aenter__(self) -> RoastEngine:
        if self.session is None:
            self.session = ClientSession(timeout=ClientTimeout(total=self.config.timeout))
            self._owns_session = True
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    async def run(self, url: Any, timeout: Optional[float] = None) -> Evaluation:
        """Прогоняет конвейер для одного URL.

        Raises InputError or FetchError. Backend failures never escape: they
        are replaced by the fallback result and tagged via ``source``.
        """
        url = validate_url(url)
        if self.session is None:
            raise RuntimeError("Session not initialized")
        client_timeout = ClientTimeout(total=timeout) if timeout else None

        page = await PageFetcher(self.session, self.config).fetch(url, client_timeout)
        signals = extract_signals(page.content, url)
        payload = build_request(signals)

        backend = EvaluationBackend(self.config, self.session)
        try:
            result = await backend.evaluate(payload, client_timeout)
        except NotConfiguredError:
            logger.info("No backend credential, returning demo evaluation for %s", url)
            return Evaluation(fallback(), EvaluationSource.demo, signals)
        except BackendError as exc:
            logger.warning("Backend evaluation failed for %s (%s): %s", url, exc.kind.value, exc)
            return Evaluation(fallback(), EvaluationSource.fallback, signals)

        logger.info("Roasted %s: score %d", url, result.score)
        return Evaluation(result, EvaluationSource.backend, signals)

    async def handle(self, body: Any) -> RoastResponse:
        """Входная операция: ``{"url": ...}`` → результат или ``{"error": ...}``."""
        url = body.get("url") if isinstance(body, Mapping) else None
        try:
            evaluation = await self.run(url)
        except (InputError, FetchError) as exc:
            logger.info("Roast rejected for %r: %s", url, exc)
            return RoastResponse(400, {"error": exc.public_message})
        except Exception:
            logger.exception("Roast failed for %r", url)
            return RoastResponse(500, {"error": RoastError.public_message})
        return RoastResponse(200, evaluation.result.to_dict(), evaluation)


def roast(url: str, config: RoastConfig, timeout: Optional[float] = None) -> Evaluation:
    """Синхронная обёртка для CLI: один прогон конвейера с общим таймаутом."""

    async def _runner() -> Evaluation:
        async with RoastEngine(config) as engine:
            return await engine.run(url, timeout=timeout)

    try:
        if timeout:
            return asyncio.run(asyncio.wait_for(_runner(), timeout=timeout))
        return asyncio.run(_runner())
    except asyncio.TimeoutError:
        logger.error("Roast did not finish within %s seconds", timeout)
        raise
