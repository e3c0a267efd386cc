# File: page_roast/utils.py
"""page_roast.utils: мелкие функции для URL и нормализации текста."""

from __future__ import annotations

import re
from typing import Sequence
from urllib.parse import urlparse

from page_roast.logger import logger

__all__: Sequence[str] = (
    "is_http_url",
    "collapse_whitespace",
    "truncate",
)

_WS_RE = re.compile(r"\s+")


def is_http_url(url: str) -> bool:
    """Проверяет, что URL использует http(s) и содержит хост."""
    try:
        parsed = urlparse(url)
    except ValueError as exc:
        logger.debug("URL parse error %s: %s", url, exc)
        return False
    valid = parsed.scheme in ("http", "https") and bool(parsed.netloc)
    logger.debug("URL valid: %s -> %s", url, valid)
    return valid


def collapse_whitespace(text: str) -> str:
    """Сводит любые пробельные последовательности к одному пробелу и обрезает края."""
    return _WS_RE.sub(" ", text).strip()


def truncate(text: str, limit: int) -> str:
    """Обрезает строку до ``limit`` символов, не оставляя хвостового пробела."""
    return text[:limit].rstrip() if len(text) > limit else text
