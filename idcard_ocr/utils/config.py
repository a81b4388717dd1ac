"""Configuration management for the identity document OCR system.

Loads and validates YAML configuration with defaults for preprocessing,
the OCR sweep, field extraction, and request-level concurrency.
"""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator

from idcard_ocr.ocr.base import DEFAULT_CHAR_WHITELIST, RecognitionMode

logger = logging.getLogger(__name__)


class PreprocessingConfig(BaseModel):
    """Configuration for the image normalization pipeline."""

    max_dimension: int = Field(default=1800, gt=0)
    min_dimension: int = Field(default=3, ge=1)
    sharpen_sigma: float = Field(default=3.0, gt=0)
    brightness: float = Field(default=1.3, gt=0)
    contrast: float = Field(default=2.5, gt=0)
    median_kernel_size: int = Field(default=5, ge=3)
    threshold: int = Field(default=100, ge=0, le=255)

    @field_validator("median_kernel_size")
    @classmethod
    def _odd_kernel(cls, value: int) -> int:
        if value % 2 == 0:
            raise ValueError("median_kernel_size must be odd")
        return value


class OCRConfig(BaseModel):
    """Configuration for the Tesseract recognition sweep."""

    tesseract_cmd: str | None = None
    default_lang: str = "eng"
    char_whitelist: str = DEFAULT_CHAR_WHITELIST
    preserve_interword_spaces: bool = True
    modes: list[RecognitionMode] = Field(default_factory=lambda: list(RecognitionMode))
    timeout_seconds: float = Field(default=30.0, ge=0)


class ExtractionConfig(BaseModel):
    """Configuration for name and identifier parsing."""

    preserve_name_glyphs: bool = True


class PipelineConfig(BaseModel):
    """Configuration for per-request scheduling."""

    max_workers: int = Field(default=2, ge=1)
    parallel_sweep: bool = False


class AppConfig(BaseModel):
    """Top-level application configuration."""

    preprocessing: PreprocessingConfig = Field(default_factory=PreprocessingConfig)
    ocr: OCRConfig = Field(default_factory=OCRConfig)
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)
    log_level: str = "INFO"


def load_config(path: Path | None = None) -> AppConfig:
    """Load configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file.
            Defaults to configs/config.yaml.

    Returns:
        Validated application configuration.
    """
    if path is None:
        path = Path("configs/config.yaml")

    if path.exists():
        logger.info("Loading configuration from %s", path)
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
        return AppConfig(**raw)

    logger.info("No config file found at %s, using defaults", path)
    return AppConfig()
