"""Per-kind identifier grammars and name anchors.

Aadhaar and PAN cards share every parsing step except the identifier
pattern, how the identifier's line is recognized, and the marker that
precedes the holder's name in the last-resort rule.
"""

import re
from dataclasses import dataclass
from enum import StrEnum


class DocumentKind(StrEnum):
    """Supported identity documents."""

    AADHAAR = "aadhaar"
    PAN = "pan"


@dataclass(frozen=True)
class DocumentGrammar:
    """Identifier and name-anchor rules for one document kind."""

    kind: DocumentKind
    identifier_pattern: re.Pattern[str]
    identifier_format: str
    digits_only: bool
    name_marker_pattern: re.Pattern[str]
    name_marker_description: str

    def normalize_identifier(self, match: str) -> str:
        """Reduce a raw identifier match to its canonical form."""
        if self.digits_only:
            return re.sub(r"\D", "", match)
        return match

    def is_identifier_line(self, line: str, identifier: str) -> bool:
        """Whether ``line`` is the line the identifier was printed on."""
        if self.digits_only:
            return re.sub(r"\D", "", line) == identifier
        return identifier in line


GRAMMARS: dict[DocumentKind, DocumentGrammar] = {
    DocumentKind.AADHAAR: DocumentGrammar(
        kind=DocumentKind.AADHAAR,
        identifier_pattern=re.compile(r"[0-9]{4}[ \-]?[0-9]{4}[ \-]?[0-9]{4}"),
        identifier_format="12 digits, printed as 3 groups of 4",
        digits_only=True,
        name_marker_pattern=re.compile(r"DOB|Year", re.IGNORECASE),
        name_marker_description="line after date or year of birth",
    ),
    DocumentKind.PAN: DocumentGrammar(
        kind=DocumentKind.PAN,
        identifier_pattern=re.compile(r"[A-Z]{5}[0-9]{4}[A-Z]"),
        identifier_format="5 letters, 4 digits, 1 letter",
        digits_only=False,
        name_marker_pattern=re.compile(r"Father|S/O|D/O|W/O", re.IGNORECASE),
        name_marker_description="line after a father/spouse relation marker",
    ),
}


def get_grammar(kind: DocumentKind | str) -> DocumentGrammar:
    """Look up the grammar for a document kind.

    Raises:
        ValueError: If ``kind`` is not a supported document kind.
    """
    return GRAMMARS[DocumentKind(kind)]
