"""Tesseract OCR engine wrapper for identity document recognition.

Runs Tesseract with a restricted character set and a chosen page
segmentation mode, and reports a page confidence on a 0-100 scale.
"""

import numpy as np
import pytesseract
from PIL import Image

from idcard_ocr.exceptions import RecognitionError
from idcard_ocr.utils.logger import get_logger

from .base import OCREngine, Recognition, RecognitionOptions

logger = get_logger(__name__)


def build_tesseract_config(options: RecognitionOptions) -> str:
    """Render recognition options as a Tesseract command-line config.

    Args:
        options: Mode, whitelist and spacing settings.

    Returns:
        Config string for pytesseract's ``config`` argument.
    """
    parts = [f"--psm {options.mode.psm}"]
    if options.char_whitelist:
        parts.append(f'-c "tessedit_char_whitelist={options.char_whitelist}"')
    if options.preserve_interword_spaces:
        parts.append("-c preserve_interword_spaces=1")
    return " ".join(parts)


class TesseractEngine(OCREngine):
    """Wrapper around Tesseract OCR for the recognition sweep.

    Args:
        tesseract_cmd: Path to the Tesseract executable.
            If ``None``, uses the system default.
        default_lang: Default OCR language code.
        timeout_seconds: Per-call time limit; ``0`` disables it.
    """

    def __init__(
        self,
        tesseract_cmd: str | None = None,
        default_lang: str = "eng",
        timeout_seconds: float = 0,
    ) -> None:
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd
        self.default_lang = default_lang
        self.timeout_seconds = timeout_seconds

    def recognize(
        self,
        image: np.ndarray,
        lang: str | None = None,
        options: RecognitionOptions | None = None,
    ) -> Recognition:
        """Recognize text and compute the mean word confidence.

        Args:
            image: Preprocessed image as a numpy array.
            lang: OCR language code. Defaults to the engine default.
            options: Mode, whitelist and spacing settings.

        Returns:
            Recognized text with a confidence between 0 and 100.

        Raises:
            RecognitionError: If Tesseract fails, is missing, or times out.
        """
        lang = lang or self.default_lang
        options = options or RecognitionOptions()
        config = build_tesseract_config(options)
        pil_image = Image.fromarray(image)

        try:
            text = pytesseract.image_to_string(
                pil_image, lang=lang, config=config, timeout=self.timeout_seconds
            )
            data = pytesseract.image_to_data(
                pil_image,
                lang=lang,
                config=config,
                timeout=self.timeout_seconds,
                output_type=pytesseract.Output.DICT,
            )
        except (pytesseract.TesseractError, RuntimeError, OSError) as exc:
            raise RecognitionError(
                f"Tesseract failed: {exc}", mode=options.mode.value
            ) from exc

        total_conf = 0.0
        word_count = 0
        for raw_conf, word in zip(data["conf"], data["text"]):
            conf = float(raw_conf)
            if conf > 0 and word.strip():
                total_conf += conf
                word_count += 1

        confidence = total_conf / word_count if word_count > 0 else 0.0
        logger.debug(
            "Tesseract psm %d read %d words (confidence %.1f)",
            options.mode.psm,
            word_count,
            confidence,
        )
        return Recognition(text=text, confidence=confidence)
