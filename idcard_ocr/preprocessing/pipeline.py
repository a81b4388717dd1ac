"""Image normalization pipeline for identity document OCR.

Runs resize, grayscale, sharpen, brightness/contrast, median and
threshold in a fixed order. Resizing comes first so the filters run on
a bounded pixel count and act with a consistent magnitude.
"""

from pathlib import Path

import cv2
import numpy as np

from idcard_ocr.exceptions import PreprocessError
from idcard_ocr.utils.config import PreprocessingConfig
from idcard_ocr.utils.logger import get_logger

from .binarize import binarize_threshold
from .denoise import denoise_median
from .enhance import adjust_brightness_contrast, sharpen, to_gray
from .loader import DocumentImage
from .resize import fit_within

logger = get_logger(__name__)


class PreprocessingPipeline:
    """Turns a document photo into a binarized image ready for OCR.

    Args:
        config: Preprocessing configuration with the filter constants.
    """

    def __init__(self, config: PreprocessingConfig | None = None) -> None:
        self.config = config or PreprocessingConfig()

    def check_dimensions(self, document: DocumentImage) -> None:
        """Reject images too small for OCR.

        Raises:
            PreprocessError: If either side is below ``min_dimension``.
        """
        minimum = self.config.min_dimension
        if document.width < minimum or document.height < minimum:
            raise PreprocessError(
                "Image too small for OCR",
                width=document.width,
                height=document.height,
            )

    def process(
        self, document: DocumentImage, output_path: Path | None = None
    ) -> np.ndarray:
        """Run the full preprocessing pipeline on a document image.

        The source is never modified; a new array is returned and, when
        ``output_path`` is given, also written there as an image file.

        Args:
            document: Source document image.
            output_path: Optional destination for the processed image.

        Returns:
            Binarized single-channel image.

        Raises:
            PreprocessError: If the image is undecodable or too small.
        """
        self.check_dimensions(document)
        image = document.to_array()

        result = fit_within(image, self.config.max_dimension)
        result = to_gray(result)
        result = sharpen(result, sigma=self.config.sharpen_sigma)
        result = adjust_brightness_contrast(
            result,
            brightness=self.config.brightness,
            contrast=self.config.contrast,
        )
        result = denoise_median(result, self.config.median_kernel_size)
        result = binarize_threshold(result, self.config.threshold)

        if output_path is not None:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            cv2.imwrite(str(output_path), result)
            logger.info("Processed image saved at %s", output_path)

        logger.info(
            "Preprocessing complete: %dx%d -> %dx%d",
            document.width,
            document.height,
            result.shape[1],
            result.shape[0],
        )
        return result
