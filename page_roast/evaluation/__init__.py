"""page_roast.evaluation: запрос к бэкенду оценки, разбор ответа и резервный результат."""

from page_roast.evaluation.backend import EvaluationBackend, extract_json_block, parse_evaluation
from page_roast.evaluation.fallback import FALLBACK_SCORE, fallback
from page_roast.evaluation.prompt import RequestPayload, build_request

__all__ = [
    "EvaluationBackend",
    "extract_json_block",
    "parse_evaluation",
    "FALLBACK_SCORE",
    "fallback",
    "RequestPayload",
    "build_request",
]
