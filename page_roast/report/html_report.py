# File: page_roast/report/html_report.py
"""page_roast.report.html_report: Генерация HTML-отчёта с помощью Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from page_roast.models import DIMENSIONS, EvaluationResult

#: шаблоны, поставляемые вместе с пакетом
DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"

DIMENSION_TITLES = {
    "headline": "Headline",
    "cta": "Call to Action",
    "trustSignals": "Trust Signals",
    "clarity": "Clarity",
}


def build_environment(template_dir: Union[Path, str] = DEFAULT_TEMPLATE_DIR) -> Environment:
    return Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )


def report_context(result: EvaluationResult, url: str = "") -> dict[str, Any]:
    """Контекст шаблона: балл, измерения в порядке отображения, резюме и quick wins."""
    return {
        "url": url,
        "score": result.score,
        "dimensions": [
            {"key": key, "title": DIMENSION_TITLES[key], "assessment": result.dimension(key)}
            for key in DIMENSIONS
        ],
        "overall": result.overall,
        "quick_wins": list(result.quick_wins),
    }


def render_html(
    result: EvaluationResult,
    template_dir: Union[Path, str],
    output_path: Union[Path, str],
    *,
    url: str = "",
) -> Path:
    """Рендерит HTML-отчёт из шаблона и сохраняет его по указанному пути.

    Args:
        result: объект EvaluationResult.
        template_dir: директория с Jinja2-шаблонами (нужен ``report.html.j2``).
        output_path: путь к итоговому HTML-файлу.
        url: адрес оценённой страницы для заголовка отчёта.

    Returns:
        Path до сохранённого HTML-файла.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    template = build_environment(template_dir).get_template("report.html.j2")
    html_content = template.render(**report_context(result, url))
    output_path.write_text(html_content, encoding="utf-8")

    return output_path
