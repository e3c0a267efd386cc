"""Canned evaluation used in demo mode and whenever the backend lets us down."""

from __future__ import annotations

from typing import Any, Dict

from page_roast.models import EvaluationResult

__all__ = ["FALLBACK_SCORE", "fallback"]

FALLBACK_SCORE = 62

_FALLBACK: Dict[str, Any] = {
    "score": FALLBACK_SCORE,
    "headline": {
        "rating": "needs-work",
        "feedback": (
            "Your headline describes what you do, but doesn't clearly communicate the benefit "
            "to the visitor. It's feature-focused rather than outcome-focused."
        ),
        "suggestion": 'Try: "Get [specific result] in [timeframe], without [common pain point]"',
    },
    "cta": {
        "rating": "needs-work",
        "feedback": (
            'Found generic CTA text like "Submit" or "Learn More". These don\'t create urgency '
            "or clearly state what happens next."
        ),
        "suggestion": (
            "Use action-oriented text that previews the value: "
            '"Start My Free Trial" or "Get My Custom Quote"'
        ),
    },
    "trustSignals": {
        "rating": "bad",
        "feedback": (
            "Limited social proof visible. No testimonials, client logos, or specific results "
            "that would build credibility with new visitors."
        ),
        "suggestion": (
            "Add 2-3 short testimonials with names and photos, or display logos of "
            "recognizable clients/publications."
        ),
    },
    "clarity": {
        "rating": "good",
        "feedback": (
            "The page structure is reasonably clear and visitors can understand what you offer. "
            "The value proposition could be more specific about outcomes."
        ),
    },
    "overall": (
        "This page has decent bones but is missing key conversion elements. The biggest issues "
        "are weak CTAs and lack of social proof. These are quick fixes that could significantly "
        "improve conversion rates. Focus on making the headline benefit-driven and adding "
        "credibility markers."
    ),
    "quickWins": [
        "Change CTA button text from generic to specific action + benefit",
        "Add 2-3 customer testimonials with photos above the fold",
        "Rewrite headline to focus on the outcome/transformation, not the service",
    ],
}


def fallback() -> EvaluationResult:
    """Return the fixed, schema-conformant evaluation. Deterministic, cannot fail."""
    return EvaluationResult.model_validate(_FALLBACK)
