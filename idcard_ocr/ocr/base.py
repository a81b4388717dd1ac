"""OCR engine contract shared by the recognition sweep and its engines.

Any engine (Tesseract, a remote service, a test double) plugs into the
pipeline by implementing ``OCREngine.recognize``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import StrEnum

import numpy as np

DEFAULT_CHAR_WHITELIST = (
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789 "
)


class RecognitionMode(StrEnum):
    """Page segmentation strategies tried by the sweep.

    Members are declared in the default sweep order.
    """

    AUTO_OSD = "auto_osd"
    SINGLE_LINE = "single_line"
    SINGLE_BLOCK = "single_block"
    SPARSE_TEXT = "sparse_text"
    AUTO = "auto"
    SINGLE_COLUMN = "single_column"
    SPARSE_TEXT_OSD = "sparse_text_osd"
    RAW_LINE = "raw_line"

    @property
    def psm(self) -> int:
        """Tesseract ``--psm`` value for this mode."""
        return _PSM_BY_MODE[self]


_PSM_BY_MODE: dict[RecognitionMode, int] = {
    RecognitionMode.AUTO_OSD: 1,
    RecognitionMode.SINGLE_LINE: 7,
    RecognitionMode.SINGLE_BLOCK: 6,
    RecognitionMode.SPARSE_TEXT: 11,
    RecognitionMode.AUTO: 3,
    RecognitionMode.SINGLE_COLUMN: 4,
    RecognitionMode.SPARSE_TEXT_OSD: 12,
    RecognitionMode.RAW_LINE: 13,
}


@dataclass(frozen=True)
class RecognitionOptions:
    """Per-call engine settings."""

    mode: RecognitionMode = RecognitionMode.AUTO
    char_whitelist: str = DEFAULT_CHAR_WHITELIST
    preserve_interword_spaces: bool = True


@dataclass(frozen=True)
class Recognition:
    """Raw engine output: page text and a 0-100 confidence."""

    text: str
    confidence: float


class OCREngine(ABC):
    """Port for the OCR capability used by the recognition sweep."""

    @abstractmethod
    def recognize(
        self,
        image: np.ndarray,
        lang: str | None = None,
        options: RecognitionOptions | None = None,
    ) -> Recognition:
        """Recognize text in a preprocessed image.

        Args:
            image: Single-channel image as a numpy array.
            lang: Language hint. Defaults to the engine default.
            options: Mode, whitelist and spacing settings.

        Returns:
            Recognized text and confidence.

        Raises:
            RecognitionError: If the engine fails or times out.
        """
