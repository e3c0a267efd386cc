# File: page_roast/report/__init__.py
"""page_roast.report: сохранение результата оценки в JSON и HTML (используется CLI и тестами)."""

from __future__ import annotations

from page_roast.report.html_report import DEFAULT_TEMPLATE_DIR, render_html
from page_roast.report.json_report import render_json

__all__ = ["render_json", "render_html", "DEFAULT_TEMPLATE_DIR"]
