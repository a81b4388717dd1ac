"""Identity document processing pipeline.

Combines image preprocessing, the recognition sweep, and field extraction
into one interface that turns Aadhaar and PAN photos into structured
records.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from idcard_ocr.exceptions import PreprocessError
from idcard_ocr.extraction.field_extractor import FieldExtractor, ParsedFields
from idcard_ocr.extraction.grammar import DocumentKind
from idcard_ocr.preprocessing.loader import load_document_image
from idcard_ocr.preprocessing.pipeline import PreprocessingPipeline
from idcard_ocr.utils.config import AppConfig
from idcard_ocr.utils.logger import get_logger

from .base import OCREngine, RecognitionMode
from .sweep import RecognitionSweep
from .tesseract_engine import TesseractEngine

logger = get_logger(__name__)

TOO_SMALL_MESSAGE = "Image too small for OCR."


class OutcomeStatus(StrEnum):
    """How processing of a submitted document ended."""

    EXTRACTED = "extracted"
    TOO_SMALL = "too_small"


@dataclass(frozen=True)
class DocumentOutcome:
    """Result for one submitted document.

    ``fields`` is set when ``status`` is ``EXTRACTED``; a ``TOO_SMALL``
    outcome carries only the sentinel message.
    """

    kind: DocumentKind
    status: OutcomeStatus
    fields: ParsedFields | None = None
    raw_text: str = ""
    mode: RecognitionMode | None = None
    confidence: float = 0.0

    @property
    def message(self) -> str | None:
        """Sentinel message for documents that could not be read."""
        return TOO_SMALL_MESSAGE if self.status == OutcomeStatus.TOO_SMALL else None


class IdentityDocumentProcessor:
    """End-to-end pipeline for Aadhaar and PAN photos.

    Args:
        config: Application configuration object.
        engine: OCR engine to run the sweep with. Defaults to a
            ``TesseractEngine`` built from ``config.ocr``.
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        engine: OCREngine | None = None,
    ) -> None:
        self.config = config or AppConfig()
        self.engine = engine or TesseractEngine(
            tesseract_cmd=self.config.ocr.tesseract_cmd,
            default_lang=self.config.ocr.default_lang,
            timeout_seconds=self.config.ocr.timeout_seconds,
        )
        self.preprocessing = PreprocessingPipeline(self.config.preprocessing)
        self.extractor = FieldExtractor(
            preserve_name_glyphs=self.config.extraction.preserve_name_glyphs
        )
        modes = self.config.ocr.modes
        self.sweep = RecognitionSweep(
            engine=self.engine,
            extractor=self.extractor,
            modes=modes,
            lang=self.config.ocr.default_lang,
            char_whitelist=self.config.ocr.char_whitelist,
            preserve_interword_spaces=self.config.ocr.preserve_interword_spaces,
            max_workers=len(modes) if self.config.pipeline.parallel_sweep else 1,
        )

    def process(
        self,
        source: Path | str | bytes,
        kind: DocumentKind,
        filename: str = "document",
        processed_path: Path | None = None,
    ) -> DocumentOutcome:
        """Process one document photo.

        Args:
            source: Path to the image, or its raw bytes.
            kind: Which document the photo shows.
            filename: Display name for logging.
            processed_path: Optional destination for the preprocessed image.

        Returns:
            ``TOO_SMALL`` if the image cannot be read or is below the
            minimum size (OCR is not run), otherwise ``EXTRACTED``.
        """
        logger.info("Processing %s document: %s", kind.value, filename)
        try:
            document = load_document_image(source)
            processed = self.preprocessing.process(document, output_path=processed_path)
        except PreprocessError as exc:
            logger.warning("Skipping OCR for %s: %s", filename, exc)
            return DocumentOutcome(kind=kind, status=OutcomeStatus.TOO_SMALL)

        result = self.sweep.run(processed, kind)
        fields = self.extractor.extract(result.text, kind)

        logger.info(
            "Extracted %s fields from %s: name=%s, number=%s",
            kind.value,
            filename,
            "found" if fields.name else "absent",
            "found" if fields.identifier_number else "absent",
        )
        return DocumentOutcome(
            kind=kind,
            status=OutcomeStatus.EXTRACTED,
            fields=fields,
            raw_text=result.text,
            mode=result.best.mode if result.best else None,
            confidence=result.best.confidence if result.best else 0.0,
        )

    def process_documents(
        self,
        sources: dict[DocumentKind, Path | str | bytes | None],
        processed_paths: dict[DocumentKind, Path] | None = None,
    ) -> dict[DocumentKind, DocumentOutcome | None]:
        """Process the documents of one request, in parallel.

        Args:
            sources: Image per document kind; ``None`` for kinds not
                submitted.
            processed_paths: Optional destination per kind for the
                preprocessed image.

        Returns:
            Outcome per kind, ``None`` where nothing was submitted.
        """
        submitted = {kind: src for kind, src in sources.items() if src is not None}
        outcomes: dict[DocumentKind, DocumentOutcome | None] = {
            kind: None for kind in sources
        }
        if not submitted:
            return outcomes

        workers = min(self.config.pipeline.max_workers, len(submitted))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = {
                kind: executor.submit(
                    self.process,
                    src,
                    kind,
                    kind.value,
                    (processed_paths or {}).get(kind),
                )
                for kind, src in submitted.items()
            }
            for kind, future in futures.items():
                outcomes[kind] = future.result()
        return outcomes
