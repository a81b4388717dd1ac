"""Speckle suppression for document images."""

import cv2
import numpy as np

from idcard_ocr.utils.logger import get_logger

logger = get_logger(__name__)


def denoise_median(image: np.ndarray, kernel_size: int = 5) -> np.ndarray:
    """Apply a median (rank) filter to remove speckle while keeping edges.

    Args:
        image: Input image as a numpy array.
        kernel_size: Side of the square neighbourhood (must be odd).

    Returns:
        Denoised image.

    Raises:
        ValueError: If ``kernel_size`` is even or smaller than 3.
    """
    if kernel_size < 3 or kernel_size % 2 == 0:
        raise ValueError(f"Median kernel size must be odd and >= 3: {kernel_size}")
    result = cv2.medianBlur(image, kernel_size)
    logger.debug("Applied median denoise with kernel_size=%d", kernel_size)
    return result
