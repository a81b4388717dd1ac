"""Tests for configuration loading and validation."""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from idcard_ocr.ocr.base import RecognitionMode
from idcard_ocr.utils.config import (
    AppConfig,
    ExtractionConfig,
    OCRConfig,
    PipelineConfig,
    PreprocessingConfig,
    load_config,
)


class TestPreprocessingConfig:
    """Tests for PreprocessingConfig defaults and overrides."""

    def test_defaults(self) -> None:
        cfg = PreprocessingConfig()
        assert cfg.max_dimension == 1800
        assert cfg.min_dimension == 3
        assert cfg.sharpen_sigma == 3.0
        assert cfg.brightness == 1.3
        assert cfg.contrast == 2.5
        assert cfg.median_kernel_size == 5
        assert cfg.threshold == 100

    def test_override(self) -> None:
        cfg = PreprocessingConfig(threshold=120, median_kernel_size=3)
        assert cfg.threshold == 120
        assert cfg.median_kernel_size == 3

    def test_even_median_kernel_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PreprocessingConfig(median_kernel_size=4)

    def test_threshold_out_of_range_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PreprocessingConfig(threshold=300)


class TestOCRConfig:
    """Tests for OCRConfig defaults and overrides."""

    def test_defaults(self) -> None:
        cfg = OCRConfig()
        assert cfg.default_lang == "eng"
        assert cfg.tesseract_cmd is None
        assert cfg.preserve_interword_spaces is True
        assert cfg.timeout_seconds == 30.0
        assert cfg.char_whitelist.endswith(" ")

    def test_default_mode_order(self) -> None:
        cfg = OCRConfig()
        assert [mode.psm for mode in cfg.modes] == [1, 7, 6, 11, 3, 4, 12, 13]

    def test_modes_from_names(self) -> None:
        cfg = OCRConfig(modes=["single_line", "auto"])
        assert cfg.modes == [RecognitionMode.SINGLE_LINE, RecognitionMode.AUTO]

    def test_unknown_mode_rejected(self) -> None:
        with pytest.raises(ValidationError):
            OCRConfig(modes=["upside_down"])


class TestAppConfig:
    """Tests for the top-level AppConfig."""

    def test_defaults(self) -> None:
        cfg = AppConfig()
        assert isinstance(cfg.preprocessing, PreprocessingConfig)
        assert isinstance(cfg.ocr, OCRConfig)
        assert isinstance(cfg.extraction, ExtractionConfig)
        assert isinstance(cfg.pipeline, PipelineConfig)
        assert cfg.extraction.preserve_name_glyphs is True
        assert cfg.pipeline.max_workers == 2
        assert cfg.pipeline.parallel_sweep is False
        assert cfg.log_level == "INFO"

    def test_nested_override(self) -> None:
        cfg = AppConfig(
            extraction=ExtractionConfig(preserve_name_glyphs=False),
            log_level="DEBUG",
        )
        assert cfg.extraction.preserve_name_glyphs is False
        assert cfg.log_level == "DEBUG"


class TestLoadConfig:
    """Tests for the load_config function."""

    def test_load_repository_config(self) -> None:
        path = Path(__file__).parent.parent / "configs" / "config.yaml"
        cfg = load_config(path)
        assert cfg.ocr.default_lang == "eng"
        assert cfg.ocr.modes == list(RecognitionMode)

    def test_load_missing_file_returns_defaults(self) -> None:
        cfg = load_config(Path("/nonexistent/path/config.yaml"))
        assert isinstance(cfg, AppConfig)
        assert cfg.preprocessing.threshold == 100

    def test_load_custom_yaml(self, tmp_path: Path) -> None:
        config_data = {
            "preprocessing": {"threshold": 90},
            "ocr": {"modes": ["sparse_text"], "timeout_seconds": 5},
            "pipeline": {"parallel_sweep": True},
            "log_level": "DEBUG",
        }
        config_file = tmp_path / "config.yaml"
        with open(config_file, "w") as f:
            yaml.dump(config_data, f)

        cfg = load_config(config_file)
        assert cfg.preprocessing.threshold == 90
        assert cfg.ocr.modes == [RecognitionMode.SPARSE_TEXT]
        assert cfg.ocr.timeout_seconds == 5
        assert cfg.pipeline.parallel_sweep is True
        assert cfg.log_level == "DEBUG"

    def test_load_empty_yaml(self, tmp_path: Path) -> None:
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")
        cfg = load_config(config_file)
        assert isinstance(cfg, AppConfig)
