"""Loading of uploaded document photos.

Reads image dimensions without decoding the full pixel buffer, and decodes
pixels on demand for the preprocessing pipeline.
"""

import io
from dataclasses import dataclass
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from idcard_ocr.exceptions import PreprocessError
from idcard_ocr.utils.logger import get_logger

logger = get_logger(__name__)

_DECODE_ERRORS = (OSError, UnidentifiedImageError, Image.DecompressionBombError)


@dataclass(frozen=True)
class DocumentImage:
    """An immutable reference to a document photo and its pixel size."""

    source: Path | bytes
    width: int
    height: int

    def _open(self) -> Image.Image:
        if isinstance(self.source, bytes):
            return Image.open(io.BytesIO(self.source))
        return Image.open(self.source)

    def to_array(self) -> np.ndarray:
        """Decode the image into an RGB numpy array.

        Raises:
            PreprocessError: If the pixel data cannot be decoded.
        """
        try:
            with self._open() as img:
                return np.array(img.convert("RGB"))
        except _DECODE_ERRORS as exc:
            raise PreprocessError(f"Cannot decode image: {exc}") from exc


def load_document_image(source: Path | str | bytes) -> DocumentImage:
    """Create a ``DocumentImage`` from a file path or raw bytes.

    Args:
        source: Path to an image file, or its raw bytes.

    Returns:
        Document image with its width and height.

    Raises:
        PreprocessError: If the source is missing, not a decodable image, or
            claims a pixel count above Pillow's decompression-bomb limit.
    """
    if isinstance(source, str):
        source = Path(source)

    try:
        if isinstance(source, bytes):
            with Image.open(io.BytesIO(source)) as img:
                width, height = img.size
        else:
            with Image.open(source) as img:
                width, height = img.size
    except _DECODE_ERRORS as exc:
        logger.warning("Unreadable document image: %s", exc)
        raise PreprocessError(f"Cannot read image: {exc}") from exc

    logger.debug("Loaded document image %dx%d", width, height)
    return DocumentImage(source=source, width=width, height=height)
