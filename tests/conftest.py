"""Shared test fixtures for the identity document OCR test suite."""

import io
import struct
import zlib
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from idcard_ocr.exceptions import RecognitionError
from idcard_ocr.ocr.base import OCREngine, Recognition, RecognitionMode


class ScriptedEngine(OCREngine):
    """OCR engine returning a fixed reading (or error) per mode."""

    def __init__(
        self,
        readings: dict[RecognitionMode, Recognition | Exception] | None = None,
    ) -> None:
        self.readings = readings or {}
        self.calls: list[RecognitionMode] = []

    def recognize(self, image, lang=None, options=None) -> Recognition:
        self.calls.append(options.mode)
        reading = self.readings.get(options.mode, Recognition(text="", confidence=0.0))
        if isinstance(reading, Exception):
            raise reading
        return reading


def make_png_bytes(width: int = 300, height: int = 200, color: bool = True) -> bytes:
    """Encode a synthetic card-like image as PNG bytes."""
    shape = (height, width, 3) if color else (height, width)
    image = np.full(shape, 230, dtype=np.uint8)
    image[height // 4 : height // 2, width // 8 : width - width // 8] = 20
    buf = io.BytesIO()
    Image.fromarray(image).save(buf, format="PNG")
    return buf.getvalue()


def _png_chunk(tag: bytes, data: bytes) -> bytes:
    crc = zlib.crc32(tag + data) & 0xFFFFFFFF
    return struct.pack(">I", len(data)) + tag + data + struct.pack(">I", crc)


def make_oversized_png_bytes(width: int = 20000, height: int = 20000) -> bytes:
    """Build a tiny PNG whose header claims a huge pixel size."""
    header = struct.pack(">IIBBBBB", width, height, 8, 0, 0, 0, 0)
    return (
        b"\x89PNG\r\n\x1a\n"
        + _png_chunk(b"IHDR", header)
        + _png_chunk(b"IDAT", zlib.compress(b"\x00"))
        + _png_chunk(b"IEND", b"")
    )


@pytest.fixture
def png_bytes() -> bytes:
    """A 300x200 color document photo as PNG bytes."""
    return make_png_bytes()


@pytest.fixture
def tiny_png_bytes() -> bytes:
    """A 2x2 image, too small for OCR."""
    return make_png_bytes(width=2, height=2)


@pytest.fixture
def oversized_png_bytes() -> bytes:
    """A PNG header claiming 20000x20000, above the decompression-bomb limit."""
    return make_oversized_png_bytes()


@pytest.fixture
def png_file(tmp_path: Path, png_bytes: bytes) -> Path:
    """A document photo written to disk."""
    path = tmp_path / "card.png"
    path.write_bytes(png_bytes)
    return path


@pytest.fixture
def scripted_engine() -> type[ScriptedEngine]:
    """The scripted engine class, for building per-test readings."""
    return ScriptedEngine


@pytest.fixture
def recognition_error() -> RecognitionError:
    """A per-mode OCR failure."""
    return RecognitionError("Tesseract failed: boom", mode="auto")


@pytest.fixture
def make_png():
    """Factory for synthetic PNG bytes of a chosen size."""
    return make_png_bytes
