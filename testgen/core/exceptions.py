from __future__ import annotations

from typing import Optional


class TestGenError(Exception):
    """Base class for every error raised by the generation pipeline."""


class InvalidInputError(TestGenError):
    """
    Raised when a required input (collection text, page identifier,
    entity list) is missing or blank.
    """


class AnalysisError(TestGenError):
    """
    Raised when raw input cannot be turned into entities.

    The message is ``"<prefix>: <cause message>"`` so callers can report it
    without walking the exception chain; the original exception stays
    available on ``cause`` and as ``__cause__``.
    """

    def __init__(self, prefix: str, cause: Optional[BaseException] = None) -> None:
        message = f"{prefix}: {cause}" if cause is not None else prefix
        super().__init__(message)
        self.prefix = prefix
        self.cause = cause
