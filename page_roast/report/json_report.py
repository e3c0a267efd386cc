# page_roast/report/json_report.py

"""
Генерация JSON-отчёта для проекта PageRoast.

Сериализация EvaluationResult в файл с теми же именами полей, что и в ответе API.
"""
import json
from pathlib import Path

from page_roast.models import EvaluationResult


def render_json(result: EvaluationResult, output_path: Path | str, *, pretty: bool = True) -> Path:
    """
    Сохраняет результат оценки в формате JSON по указанному пути.

    :param result: объект EvaluationResult
    :param output_path: путь к JSON-файлу
    :param pretty: отступ 2 вместо однострочного JSON
    :return: Path сохранённого файла

    Пример:
    ```python
    from page_roast.report.json_report import render_json
    report_path = render_json(evaluation.result, 'reports/roast.json')
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(result.to_dict(), f, ensure_ascii=False, indent=2 if pretty else None)

    return output
