"""Fetch-level failures. Extractors downstream of a successful fetch never raise."""

from __future__ import annotations


class ExtractionError(Exception):
    """Base class for failures that abort an extraction call."""

    def __init__(self, url: str, message: str) -> None:
        super().__init__(message)
        self.url = url
        self.message = message


class InputError(ExtractionError):
    """The URL itself is unusable; retrying will not help."""


class InvalidUrl(InputError):
    pass


class InvalidProtocol(InputError):
    pass


class SSRFBlocked(InputError):
    pass


class NetworkError(ExtractionError):
    """The request was attempted and failed. Callers may retry the whole call."""


class FetchTimeout(NetworkError):
    pass


class HtmlTooLarge(NetworkError):
    pass


class FetchFailed(NetworkError):
    pass
