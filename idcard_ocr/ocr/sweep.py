"""Multi-mode recognition sweep with best-candidate selection.

No single page segmentation mode reads every card layout and photo well,
so the sweep recognizes the same preprocessed image under each configured
mode and keeps the candidate whose text yields a name with the highest
engine confidence.
"""

import re
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

import numpy as np

from idcard_ocr.exceptions import RecognitionError
from idcard_ocr.extraction.field_extractor import FieldExtractor
from idcard_ocr.extraction.grammar import DocumentKind
from idcard_ocr.utils.logger import get_logger

from .base import (
    DEFAULT_CHAR_WHITELIST,
    OCREngine,
    Recognition,
    RecognitionMode,
    RecognitionOptions,
)

logger = get_logger(__name__)

_NON_PRINTABLE = re.compile(r"[^\x20-\x7E\n]")
_SPACE_RUNS = re.compile(r" +")
_NEWLINE_RUNS = re.compile(r"\n{2,}")


@dataclass(frozen=True)
class RecognitionCandidate:
    """One mode's normalized OCR output and the name found in it."""

    mode: RecognitionMode
    text: str
    confidence: float
    name: str | None = None


@dataclass
class SweepResult:
    """Every candidate of a sweep, in mode order, and the selected one."""

    candidates: list[RecognitionCandidate] = field(default_factory=list)
    best: RecognitionCandidate | None = None

    @property
    def text(self) -> str:
        """Normalized text of the selected candidate, or ``""``."""
        return self.best.text if self.best else ""


def normalize_ocr_text(text: str) -> str:
    """Strip non-printable characters and collapse blank space.

    Keeps printable ASCII and newlines, collapses space runs to one space
    and runs of newlines to one newline.
    """
    text = _NON_PRINTABLE.sub("", text)
    text = _SPACE_RUNS.sub(" ", text)
    return _NEWLINE_RUNS.sub("\n", text)


def select_best(
    candidates: list[RecognitionCandidate],
) -> RecognitionCandidate | None:
    """Pick the named candidate with the strictly highest confidence.

    Candidates without a name are never eligible. On equal confidence the
    earlier candidate is kept.
    """
    best: RecognitionCandidate | None = None
    best_confidence = 0.0
    for candidate in candidates:
        if candidate.name and candidate.confidence > best_confidence:
            best = candidate
            best_confidence = candidate.confidence
    return best


class RecognitionSweep:
    """Runs OCR under every configured mode and selects the best reading.

    Args:
        engine: OCR capability used for each recognition.
        extractor: Field extractor whose name heuristics score candidates.
        modes: Modes to try, in order. Defaults to every mode.
        lang: Language hint passed to the engine.
        char_whitelist: Characters the engine may emit.
        preserve_interword_spaces: Keep the engine's inter-word spacing.
        max_workers: Modes recognized concurrently; ``1`` runs them in turn.
    """

    def __init__(
        self,
        engine: OCREngine,
        extractor: FieldExtractor | None = None,
        modes: list[RecognitionMode] | None = None,
        lang: str = "eng",
        char_whitelist: str = DEFAULT_CHAR_WHITELIST,
        preserve_interword_spaces: bool = True,
        max_workers: int = 1,
    ) -> None:
        self.engine = engine
        self.extractor = extractor or FieldExtractor()
        self.modes = list(modes) if modes is not None else list(RecognitionMode)
        self.lang = lang
        self.char_whitelist = char_whitelist
        self.preserve_interword_spaces = preserve_interword_spaces
        self.max_workers = max_workers

    def sweep(self, image: np.ndarray, kind: DocumentKind) -> str:
        """Return the normalized text of the best candidate, or ``""``."""
        return self.run(image, kind).text

    def run(self, image: np.ndarray, kind: DocumentKind) -> SweepResult:
        """Recognize ``image`` under every mode and select the best candidate.

        Args:
            image: Preprocessed document image.
            kind: Document kind whose name heuristics score candidates.

        Returns:
            All candidates in mode order and the selected one.
        """
        if self.max_workers > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                recognitions = list(
                    executor.map(lambda mode: self._recognize(image, mode), self.modes)
                )
        else:
            recognitions = [self._recognize(image, mode) for mode in self.modes]

        candidates = []
        for mode, recognition in zip(self.modes, recognitions):
            text = normalize_ocr_text(recognition.text)
            confidence = recognition.confidence or 0.0
            name = self.extractor.extract_name(text, kind)
            logger.debug(
                "%s OCR (%s): confidence %.1f, name %r",
                kind.value,
                mode.value,
                confidence,
                name,
            )
            candidates.append(
                RecognitionCandidate(
                    mode=mode,
                    text=text,
                    confidence=confidence,
                    name=name,
                )
            )

        best = select_best(candidates)
        if best is None:
            logger.info("%s sweep found no candidate with a name", kind.value)
        else:
            logger.info(
                "%s sweep selected %s (confidence %.1f)",
                kind.value,
                best.mode.value,
                best.confidence,
            )
        return SweepResult(candidates=candidates, best=best)

    def _recognize(self, image: np.ndarray, mode: RecognitionMode) -> Recognition:
        options = RecognitionOptions(
            mode=mode,
            char_whitelist=self.char_whitelist,
            preserve_interword_spaces=self.preserve_interword_spaces,
        )
        try:
            return self.engine.recognize(image, lang=self.lang, options=options)
        except RecognitionError as exc:
            logger.warning("Recognition failed for mode %s: %s", mode.value, exc)
        except Exception as exc:
            logger.warning(
                "OCR engine error for mode %s: %s: %s",
                mode.value,
                type(exc).__name__,
                exc,
            )
        return Recognition(text="", confidence=0.0)
