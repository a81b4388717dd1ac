"""Exceptions raised by the identity document pipeline.

Both errors are recoverable: the orchestrator turns a ``PreprocessError``
into a "too small" outcome and the sweep scores a ``RecognitionError``
as an empty, zero-confidence candidate.
"""

from typing import Any


class IDCardOCRError(Exception):
    """Base exception for all pipeline errors.

    Args:
        message: Human-readable error message.
        details: Additional context for logging.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class PreprocessError(IDCardOCRError):
    """The source image is undecodable or too small to run OCR on."""

    def __init__(
        self,
        message: str,
        width: int | None = None,
        height: int | None = None,
    ) -> None:
        details = (
            {"width": width, "height": height}
            if width is not None and height is not None
            else None
        )
        super().__init__(message, details=details)
        self.width = width
        self.height = height


class RecognitionError(IDCardOCRError):
    """The OCR engine failed or timed out for one recognition mode."""

    def __init__(self, message: str, mode: str | None = None) -> None:
        super().__init__(message, details={"mode": mode} if mode else None)
        self.mode = mode
