"""Grayscale conversion, sharpening and tonal adjustment for ID photos.

Camera-phone shots of ID cards are soft and unevenly lit; these steps
push glyph ink and card background apart before median filtering
and thresholding.
"""

import cv2
import numpy as np

from idcard_ocr.utils.logger import get_logger

logger = get_logger(__name__)


def to_gray(image: np.ndarray) -> np.ndarray:
    """Convert an RGB image to grayscale if it has color channels.

    Args:
        image: Input image (RGB or grayscale).

    Returns:
        Single-channel image.
    """
    if len(image.shape) == 3:
        return cv2.cvtColor(image, cv2.COLOR_RGB2GRAY)
    return image


def sharpen(image: np.ndarray, sigma: float = 3.0, amount: float = 1.0) -> np.ndarray:
    """Emphasize edges with an unsharp mask.

    Args:
        image: Grayscale input image.
        sigma: Gaussian blur radius of the mask.
        amount: Weight of the detail layer added back.

    Returns:
        Sharpened image of the same shape and dtype.
    """
    blurred = cv2.GaussianBlur(image, (0, 0), sigma)
    result = cv2.addWeighted(image, 1.0 + amount, blurred, -amount, 0)
    logger.debug("Applied unsharp mask (sigma=%.1f, amount=%.1f)", sigma, amount)
    return result


def adjust_brightness_contrast(
    image: np.ndarray,
    brightness: float = 1.3,
    contrast: float = 2.5,
) -> np.ndarray:
    """Scale brightness, then stretch contrast around mid-grey.

    Args:
        image: Grayscale input image.
        brightness: Multiplier applied to every pixel.
        contrast: Multiplier applied to the distance from 128.

    Returns:
        Adjusted ``uint8`` image, clipped to [0, 255].
    """
    pixels = image.astype(np.float32) * brightness
    pixels = (pixels - 128.0) * contrast + 128.0
    result = np.clip(pixels, 0, 255).astype(np.uint8)
    logger.debug(
        "Applied brightness x%.2f, contrast x%.2f", brightness, contrast
    )
    return result
