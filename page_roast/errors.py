"""page_roast.errors: типизированные ошибки каждого этапа конвейера."""

from __future__ import annotations

from enum import Enum


class RoastError(RuntimeError):
    """Base class for every anticipated pipeline failure."""

    #: message safe to show to the caller; details stay in the logs
    public_message: str = "Analysis failed"


class InputError(RoastError):
    public_message = "URL is required"


class FetchError(RoastError):
    public_message = "Could not fetch page content"

    def __init__(self, message: str, *, url: str, status: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status = status


class BackendErrorKind(str, Enum):
    not_configured = "not_configured"
    unavailable = "unavailable"
    malformed_response = "malformed_response"


class BackendError(RoastError):
    """Evaluation backend failure; always recovered with the fallback result."""

    kind: BackendErrorKind


class NotConfiguredError(BackendError):
    kind = BackendErrorKind.not_configured


class BackendUnavailableError(BackendError):
    kind = BackendErrorKind.unavailable

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class MalformedResponseError(BackendError):
    kind = BackendErrorKind.malformed_response


__all__ = [
    "RoastError",
    "InputError",
    "FetchError",
    "BackendErrorKind",
    "BackendError",
    "NotConfiguredError",
    "BackendUnavailableError",
    "MalformedResponseError",
]
