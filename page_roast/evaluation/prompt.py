"""Builds the evaluation request sent to the chat-completions backend."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

from page_roast.models import SignalBundle

__all__ = ["SYSTEM_INSTRUCTION", "OUTPUT_SCHEMA", "RequestPayload", "build_request"]

SYSTEM_INSTRUCTION = (
    "You are a landing page conversion expert. "
    "Always respond with valid JSON only, no markdown."
)

_NONE_FOUND = "None found"

OUTPUT_SCHEMA = """{
  "score": <number 0-100>,
  "headline": {
    "rating": "<good|needs-work|bad>",
    "feedback": "<2-3 sentences>",
    "suggestion": "<optional specific improvement>"
  },
  "cta": {
    "rating": "<good|needs-work|bad>",
    "feedback": "<2-3 sentences>",
    "suggestion": "<optional specific improvement>"
  },
  "trustSignals": {
    "rating": "<good|needs-work|bad>",
    "feedback": "<2-3 sentences about social proof, testimonials, credibility>",
    "suggestion": "<optional specific improvement>"
  },
  "clarity": {
    "rating": "<good|needs-work|bad>",
    "feedback": "<2-3 sentences about value proposition clarity>",
    "suggestion": "<optional specific improvement>"
  },
  "overall": "<3-4 sentence summary of the biggest issues and strengths>",
  "quickWins": ["<actionable improvement 1>", "<actionable improvement 2>", "<actionable improvement 3>"]
}"""

# Concatenation instead of str.format: page text may contain braces.
_INTRO = (
    "You are an expert conversion rate optimization specialist. "
    "Analyze this landing page and provide a brutally honest but constructive roast.\n\n"
)
_OUTRO = (
    "Be specific, reference actual content from the page, and be direct about problems. "
    "Don't be mean, but don't sugarcoat issues either."
)


@dataclass(frozen=True, slots=True)
class RequestPayload:
    system: str
    prompt: str

    def messages(self) -> List[Dict[str, str]]:
        return [
            {"role": "system", "content": self.system},
            {"role": "user", "content": self.prompt},
        ]


def render_page_content(bundle: SignalBundle) -> str:
    return "\n".join(
        (
            f"URL: {bundle.url}",
            f"Title: {bundle.title}",
            f"Main Headings (H1): {bundle.headings_text or _NONE_FOUND}",
            f"Buttons/CTAs: {bundle.ctas_text or _NONE_FOUND}",
            f"Page Content: {bundle.body_text}",
        )
    )


def build_request(bundle: SignalBundle) -> RequestPayload:
    """Serialize *bundle* into the fixed roast prompt. Pure, no I/O."""
    prompt = (
        _INTRO
        + render_page_content(bundle)
        + "\n\nProvide your analysis in the following JSON format (no markdown, just valid JSON):\n"
        + OUTPUT_SCHEMA
        + "\n\n"
        + _OUTRO
    )
    return RequestPayload(system=SYSTEM_INSTRUCTION, prompt=prompt)
