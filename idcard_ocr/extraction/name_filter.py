"""Predicate separating plausible personal names from card labels and noise."""

import re

_NAME_PATTERN = re.compile(r"[A-Za-z ]{3,}")

_LABEL_DENYLIST = frozenset(
    label.casefold()
    for label in (
        "MALE",
        "FEMALE",
        "DOB",
        "YEAR",
        "GOVERNMENT",
        "INDIA",
        "AADHAAR",
        "UNIQUE IDENTIFICATION AUTHORITY",
        "INCOME TAX DEPARTMENT",
        "Permanent Account Number",
        "GOVT",
    )
)


def is_likely_name(line: str) -> bool:
    """Return True if a text line could be a person's name.

    A name is at least three letters or spaces and nothing else, and is
    not one of the fixed labels printed on Aadhaar and PAN cards. This is
    a best-effort heuristic, not a validator.

    Args:
        line: A single trimmed line of OCR text.

    Returns:
        Whether the line passes the filter.
    """
    if not _NAME_PATTERN.fullmatch(line):
        return False
    return line.casefold() not in _LABEL_DENYLIST
