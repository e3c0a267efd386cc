"""Signal extraction for PageRoast.

Turns raw landing-page HTML into a :class:`~page_roast.models.SignalBundle`:

* title    — first ``<title>`` text or ``""`` if absent.
* headings — text of every ``<h1>`` (nested markup included), in order.
* ctas     — ``<button>`` texts and ``<a class="…btn…">`` texts in document
  order, at most :data:`MAX_CTAS`.
* body     — visible text with ``<script>``/``<style>`` removed first, at most
  :data:`MAX_BODY_CHARS` characters.

The goal is **not** full HTML correctness. BeautifulSoup with the stdlib
``html.parser`` backend is lenient enough for typical marketing pages. Marked
sections it rejects (``<![b]``) are escaped and the page is parsed again;
anything still rejected degrades to an empty bundle instead of an exception.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Iterable, List, Optional

from bs4 import BeautifulSoup, ParserRejectedMarkup
from bs4.element import Tag

from page_roast.logger import logger
from page_roast.models import SignalBundle
from page_roast.utils import collapse_whitespace, truncate

__all__: Sequence[str] = ("MAX_CTAS", "MAX_BODY_CHARS", "extract_signals")

MAX_CTAS = 10
MAX_BODY_CHARS = 8000

_ANGLE_BRACKETS = str.maketrans({"<": " ", ">": " "})


def _clean(text: str) -> str:
    # decoded entities (&lt;) must not smuggle markup characters into signals
    return collapse_whitespace(text.translate(_ANGLE_BRACKETS))


def _texts(tags: Iterable[Any]) -> List[str]:
    out: List[str] = []
    for tag in tags:
        if not isinstance(tag, Tag):
            continue
        text = _clean(tag.get_text())
        if text:
            out.append(text)
    return out


def _is_cta(tag: Tag) -> bool:
    if tag.name == "button":
        return True
    classes = tag.get("class") or []
    if isinstance(classes, str):
        classes = [classes]
    return "btn" in " ".join(classes)


def _outermost_ctas(soup: BeautifulSoup) -> List[Tag]:
    # find_all walks the tree in document order, so buttons and links interleave;
    # a CTA nested in another CTA (<a class="btn"><button>) is the same action
    picked: List[Tag] = []
    seen: set[int] = set()
    for tag in soup.find_all(["button", "a"]):
        if not isinstance(tag, Tag) or not _is_cta(tag):
            continue
        if any(id(parent) in seen for parent in tag.parents):
            continue
        seen.add(id(tag))
        picked.append(tag)
    return picked


def _parse(html: str, url: str) -> Optional[BeautifulSoup]:
    """Parse leniently; a rejected marked section is neutralised and parsed again."""
    try:
        return BeautifulSoup(html, "html.parser")
    except ParserRejectedMarkup as exc:
        logger.warning("Rejected markup from %s, retrying without marked sections: %s", url, exc)
    try:
        return BeautifulSoup(html.replace("<![", "&lt;!["), "html.parser")
    except ParserRejectedMarkup as exc:
        logger.warning("Unparseable markup from %s: %s", url, exc)
        return None


def extract_signals(html: str, url: str) -> SignalBundle:
    """Extract the conversion-relevant signals of one page. Never raises."""
    soup = _parse(html or "", url)
    if soup is None:
        return SignalBundle(url=url)

    title_tag = soup.find("title")
    title = _clean(title_tag.get_text()) if isinstance(title_tag, Tag) else ""

    headings = _texts(soup.find_all("h1"))

    ctas = _texts(_outermost_ctas(soup))[:MAX_CTAS]

    for element in soup(["script", "style"]):
        element.decompose()
    body_text = truncate(_clean(soup.get_text(" ")), MAX_BODY_CHARS)

    logger.debug(
        "Extracted from %s: title=%r, %d headings, %d ctas, %d body chars",
        url,
        title,
        len(headings),
        len(ctas),
        len(body_text),
    )
    return SignalBundle(
        url=url,
        title=title,
        headings=tuple(headings),
        ctas=tuple(ctas),
        body_text=body_text,
    )
