"""Adapter for the OpenAI-compatible chat-completions evaluation backend.

One call per :meth:`EvaluationBackend.evaluate`, no retries. Every failure is
reported as a :class:`~page_roast.errors.BackendError` subclass so the caller
can substitute the fallback result.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any, Optional

from aiohttp import ClientError, ClientSession, ClientTimeout
from pydantic import ValidationError

from page_roast.config import RoastConfig
from page_roast.errors import BackendUnavailableError, MalformedResponseError, NotConfiguredError
from page_roast.evaluation.prompt import RequestPayload
from page_roast.logger import logger
from page_roast.models import EvaluationResult

__all__ = ["EvaluationBackend", "extract_json_block", "parse_evaluation"]


def extract_json_block(text: str) -> Optional[str]:
    """Return the first top-level ``{...}`` substring of *text*, or None.

    Models like to wrap their JSON in prose or code fences. Braces inside JSON
    string literals are skipped, so ``{"a": "}"}`` is returned whole.
    """
    start = text.find("{")
    if start < 0:
        return None
    depth = 0
    in_string = False
    escaped = False
    for pos in range(start, len(text)):
        char = text[pos]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[start : pos + 1]
    # unbalanced, typically a reply cut off by max_tokens
    return None


def parse_evaluation(content: str) -> EvaluationResult:
    """Parse the backend's free-text reply into a validated EvaluationResult."""
    block = extract_json_block(content)
    if block is None:
        raise MalformedResponseError("No JSON object in backend reply")
    try:
        data = json.loads(block)
    except json.JSONDecodeError as exc:
        raise MalformedResponseError(f"Invalid JSON in backend reply: {exc}") from exc
    try:
        return EvaluationResult.model_validate(data)
    except ValidationError as exc:
        raise MalformedResponseError(
            f"Backend reply does not match the evaluation shape: {exc.error_count()} error(s)"
        ) from exc


def _message_content(data: Any) -> str:
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as exc:
        raise MalformedResponseError("Unexpected completion envelope") from exc
    if not isinstance(content, str):
        raise MalformedResponseError("Completion content is not text")
    return content


class EvaluationBackend:
    """Calls the evaluation model with the credential from :class:`RoastConfig`."""

    def __init__(self, config: RoastConfig, session: Optional[ClientSession]) -> None:
        self.config = config
        self.session = session

    @property
    def is_configured(self) -> bool:
        return self.config.is_configured

    def _request_body(self, payload: RequestPayload) -> dict[str, Any]:
        return {
            "model": self.config.model,
            "messages": payload.messages(),
            "temperature": self.config.temperature,
            "max_tokens": self.config.max_tokens,
        }

    async def evaluate(
        self, payload: RequestPayload, timeout: Optional[ClientTimeout] = None
    ) -> EvaluationResult:
        if self.config.api_key is None:
            raise NotConfiguredError("No evaluation backend credential configured")
        if self.session is None:
            raise RuntimeError("Session not initialized")

        timeout = timeout or ClientTimeout(total=self.config.timeout)
        headers = {"Authorization": f"Bearer {self.config.api_key.get_secret_value()}"}
        url = str(self.config.api_url)
        try:
            async with self.session.post(
                url, json=self._request_body(payload), headers=headers, timeout=timeout
            ) as resp:
                if not 200 <= resp.status < 300:
                    detail = await resp.text(errors="replace")
                    logger.warning("Evaluation backend HTTP %s: %s", resp.status, detail[:500])
                    raise BackendUnavailableError(
                        f"Backend answered HTTP {resp.status}", status=resp.status
                    )
                try:
                    data = await resp.json(content_type=None)
                except ValueError as exc:
                    raise MalformedResponseError("Backend response body is not JSON") from exc
        except asyncio.TimeoutError as exc:
            logger.warning("Evaluation backend timed out after %ss", timeout.total)
            raise BackendUnavailableError("Backend timed out") from exc
        except ClientError as exc:
            logger.warning("Evaluation backend unreachable: %s", exc)
            raise BackendUnavailableError(f"Backend unreachable: {exc}") from exc

        result = parse_evaluation(_message_content(data))
        logger.debug("Backend evaluation parsed, score=%d", result.score)
        return result
