"""Logging for PageRoast.

Everything goes to stderr (``page-roast roast`` prints its JSON on stdout) and,
optionally, to a rotating file. The same handlers are attached to the aiohttp
server loggers so ``page-roast serve`` writes its access log next to ours.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, List, Tuple, Union

_DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_LOGGER_NAME: Final[str] = "PageRoast"

#: loggers of ``aiohttp.web`` that ``serve`` emits through
SERVER_LOGGERS: Final[Tuple[str, ...]] = ("aiohttp.access", "aiohttp.server")

_LevelT = Union[int, str]


def _build_handlers(log_file: str | Path | None, fmt: str) -> List[logging.Handler]:
    formatter = logging.Formatter(fmt)
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(
                filename=str(log_file),
                maxBytes=5 * 1024 * 1024,
                backupCount=3,
                encoding="utf-8",
            )
        )
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def _attach(lg: logging.Logger, handlers: List[logging.Handler], level: _LevelT, replace: bool) -> None:
    lg.setLevel(level)
    if replace:
        for old in list(lg.handlers):
            lg.removeHandler(old)
            old.close()
    for handler in handlers:
        lg.addHandler(handler)
    lg.propagate = False


def configure(
    *,
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = _DEFAULT_FORMAT,
    replace_handlers: bool = True,
) -> logging.Logger:
    """(Re)configure the project logger and the aiohttp server loggers.

    With ``replace_handlers=False`` the new handlers are added to the existing
    ones instead of replacing them. Returns the project logger.
    """
    handlers = _build_handlers(log_file, log_format)
    project = logging.getLogger(_LOGGER_NAME)
    _attach(project, handlers, level, replace_handlers)
    for name in SERVER_LOGGERS:
        _attach(logging.getLogger(name), handlers, level, replace_handlers)
    return project


def init_logging(
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = _DEFAULT_FORMAT,
) -> logging.Logger:
    return configure(level=level, log_file=log_file, log_format=log_format)


logger: logging.Logger = init_logging()

__all__ = ["logger", "configure", "init_logging", "SERVER_LOGGERS"]
