# page_roast/crawler/models.py
"""
Data models for the PageRoast page fetcher.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class PageData:
    """Holds the requested URL, HTTP status and decoded HTML of a fetched page."""

    url: str
    content: str
    status: int = 200
