"""Geometric normalization for document photos."""

import cv2
import numpy as np

from idcard_ocr.utils.logger import get_logger

logger = get_logger(__name__)


def fit_within(image: np.ndarray, max_dimension: int = 1800) -> np.ndarray:
    """Shrink an image to fit inside a square bounding box.

    Aspect ratio is preserved and images already inside the box are
    returned unchanged (never upscaled).

    Args:
        image: Input image (color or grayscale).
        max_dimension: Side length of the bounding box in pixels.

    Returns:
        Resized image, or the input if no resize was needed.
    """
    h, w = image.shape[:2]
    scale = min(1.0, max_dimension / w, max_dimension / h)
    if scale >= 1.0:
        return image

    new_size = (max(1, round(w * scale)), max(1, round(h * scale)))
    result = cv2.resize(image, new_size, interpolation=cv2.INTER_AREA)
    logger.debug("Resized %dx%d -> %dx%d", w, h, new_size[0], new_size[1])
    return result
