"""Heuristic name and identifier extraction from noisy OCR text.

One extractor serves every document kind; the identifier pattern and the
name anchors come from the kind's ``DocumentGrammar``. Name rules run in a
fixed order and the first rule that yields a name wins:

1. the line right above the identifier line,
2. the line right after a line containing "name",
3. the first line that looks like a name,
4. the line right after the kind's birth or relation marker.
"""

from collections.abc import Callable
from dataclasses import dataclass

from idcard_ocr.utils.logger import get_logger

from .grammar import DocumentGrammar, DocumentKind, get_grammar
from .name_filter import is_likely_name

logger = get_logger(__name__)

# Identifiers are numeric where these glyphs usually appear, so OCR's
# letter/digit confusions are resolved in favour of digits.
_CONFUSION_TABLE = str.maketrans({"O": "0", "o": "0", "l": "1", "I": "1"})


@dataclass(frozen=True)
class ParsedFields:
    """Structured fields recovered from one document."""

    name: str | None = None
    identifier_number: str | None = None


def correct_confusions(text: str) -> str:
    """Replace letters OCR commonly confuses with digits.

    Maps ``O``/``o`` to ``0`` and ``l``/``I`` to ``1``, character for
    character, so line structure and positions are unchanged.
    """
    return text.translate(_CONFUSION_TABLE)


def split_lines(text: str) -> list[str]:
    """Split text into trimmed, non-empty lines, keeping their order."""
    return [line.strip() for line in text.split("\n") if line.strip()]


class FieldExtractor:
    """Extracts the holder's name and document number from OCR text.

    The confusion correction always feeds identifier matching. With
    ``preserve_name_glyphs`` enabled, name rules read the uncorrected line
    at the same index, so names like "SUNITA" are not turned into
    "SUN1TA". Disabling it reads names from the corrected text as well.

    Args:
        preserve_name_glyphs: Read name candidates from uncorrected text.
    """

    def __init__(self, preserve_name_glyphs: bool = True) -> None:
        self.preserve_name_glyphs = preserve_name_glyphs

    def extract(self, text: str, kind: DocumentKind | str) -> ParsedFields:
        """Parse OCR text into a ``ParsedFields`` record.

        Args:
            text: Normalized OCR text of one document.
            kind: Which document grammar to apply.

        Returns:
            Parsed fields; either may be ``None`` when nothing matched.
        """
        grammar = get_grammar(kind)
        corrected = correct_confusions(text)
        corrected_lines = split_lines(corrected)
        name_lines = split_lines(text) if self.preserve_name_glyphs else corrected_lines

        logger.debug("%s OCR lines: %s", grammar.kind.value, corrected_lines)

        identifier = self._find_identifier(corrected, grammar)
        name = self._find_name(name_lines, corrected_lines, identifier, grammar)
        return ParsedFields(name=name, identifier_number=identifier)

    def extract_name(self, text: str, kind: DocumentKind | str) -> str | None:
        """Run only the name heuristics, as used to score sweep candidates."""
        return self.extract(text, kind).name

    @staticmethod
    def _find_identifier(text: str, grammar: DocumentGrammar) -> str | None:
        match = grammar.identifier_pattern.search(text)
        if match is None:
            return None
        return grammar.normalize_identifier(match.group(0))

    def _find_name(
        self,
        name_lines: list[str],
        corrected_lines: list[str],
        identifier: str | None,
        grammar: DocumentGrammar,
    ) -> str | None:
        rules: list[Callable[[], str | None]] = [
            lambda: _adjacent_to_identifier(
                name_lines, corrected_lines, identifier, grammar
            ),
            lambda: _after_marker(name_lines, lambda line: "name" in line.lower()),
            lambda: next((line for line in name_lines if is_likely_name(line)), None),
            lambda: _after_marker(
                name_lines,
                lambda line: grammar.name_marker_pattern.search(line) is not None,
            ),
        ]
        for rule in rules:
            name = rule()
            if name:
                return name
        return None


def _adjacent_to_identifier(
    name_lines: list[str],
    corrected_lines: list[str],
    identifier: str | None,
    grammar: DocumentGrammar,
) -> str | None:
    if not identifier:
        return None
    idx = next(
        (
            i
            for i, line in enumerate(corrected_lines)
            if grammar.is_identifier_line(line, identifier)
        ),
        -1,
    )
    if idx > 0 and is_likely_name(name_lines[idx - 1]):
        return name_lines[idx - 1]
    return None


def _after_marker(lines: list[str], is_marker: Callable[[str], bool]) -> str | None:
    for i, line in enumerate(lines):
        if is_marker(line) and i + 1 < len(lines) and is_likely_name(lines[i + 1]):
            return lines[i + 1]
    return None
