"""Logger setup: stderr/file handlers shared with the aiohttp server loggers."""
import logging
from logging.handlers import RotatingFileHandler

import pytest

from page_roast.logger import SERVER_LOGGERS, configure, init_logging


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    init_logging()


def test_replaces_handlers_and_wires_server_loggers():
    configure(level="DEBUG")
    project = configure(level="WARNING")
    assert project.level == logging.WARNING
    assert len(project.handlers) == 1
    assert not project.propagate
    for name in SERVER_LOGGERS:
        server = logging.getLogger(name)
        assert server.handlers == project.handlers
        assert server.level == logging.WARNING


def test_log_file_written(tmp_path):
    log_file = tmp_path / "roast.log"
    project = configure(level="INFO", log_file=log_file, log_format="%(name)s %(message)s")
    assert any(isinstance(h, RotatingFileHandler) for h in project.handlers)

    project.info("roasting %s", "acme.test")
    logging.getLogger("aiohttp.access").info("GET / 200")
    for handler in project.handlers:
        handler.flush()

    text = log_file.read_text(encoding="utf-8")
    assert "PageRoast roasting acme.test" in text
    assert "aiohttp.access GET / 200" in text


def test_append_keeps_existing_handlers():
    configure()
    project = configure(replace_handlers=False)
    assert len(project.handlers) == 2
