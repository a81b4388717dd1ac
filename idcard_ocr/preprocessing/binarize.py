"""Fixed-cutoff binarization for document images.

The cutoff drives how Tesseract segments glyphs, so it is the first
setting to revisit if recognition quality regresses.
"""

import cv2
import numpy as np

from idcard_ocr.utils.logger import get_logger

from .enhance import to_gray

logger = get_logger(__name__)


def binarize_threshold(image: np.ndarray, threshold: int = 100) -> np.ndarray:
    """Collapse an image to pure black and white at a luminance cutoff.

    Args:
        image: Input image (RGB or grayscale).
        threshold: Pixels at or above this become 255, the rest 0.

    Returns:
        Binary image with pixel values 0 or 255.
    """
    gray = to_gray(image)
    # THRESH_BINARY keeps only pixels strictly above its cutoff.
    _, binary = cv2.threshold(gray, threshold - 1, 255, cv2.THRESH_BINARY)
    logger.debug("Applied binary threshold at %d", threshold)
    return binary
