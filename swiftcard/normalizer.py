"""
Line normalization for raw OCR text.

Turns whatever the OCR engine produced (a text block, a list of lines or
nothing at all) into an ordered list of cleaned lines.
"""

import re
from collections.abc import Iterable
from typing import List, Optional, Sequence, Union

RawText = Optional[Union[str, bytes, Sequence[str], Iterable]]

MIN_LINE_LENGTH = 2

# Only digits, whitespace and phone/numbering punctuation
NOISE_LINE_PATTERN = re.compile(r"^[\d\s\-\+\(\)\.#/]+$")


def coerce_raw_text(raw: RawText):
    """Return None, a string or a list of lines.

    Iterables such as generators are materialized so they can be read
    more than once.
    """
    if isinstance(raw, bytes):
        return raw.decode("utf-8", errors="replace")
    if raw is None or isinstance(raw, (str, list, tuple)):
        return raw
    if isinstance(raw, Iterable):
        return list(raw)
    return str(raw)


def join_raw_text(raw: RawText) -> str:
    """Return the passthrough text for a raw OCR input.

    Args:
        raw: Text block, sequence of lines or None

    Returns:
        The original string, the lines joined with newlines, or "" for None
    """
    raw = coerce_raw_text(raw)
    if raw is None:
        return ""
    if isinstance(raw, str):
        return raw
    return "\n".join("" if line is None else str(line) for line in raw)


def split_lines(raw: RawText) -> List[str]:
    """Split raw input into lines without any filtering."""
    raw = coerce_raw_text(raw)
    if raw is None:
        return []
    if isinstance(raw, str):
        return raw.splitlines()
    lines = []
    for item in raw:
        if item is None:
            continue
        # A sequence element may itself hold several OCR lines
        lines.extend(str(item).splitlines())
    return lines


def is_noise_line(line: str) -> bool:
    """Check if a line is made of digits and punctuation only."""
    return bool(NOISE_LINE_PATTERN.match(line))


def clean_lines(raw: RawText, drop_noise: bool = False) -> List[str]:
    """Trim lines and drop blank, too-short and (optionally) noise lines.

    Order is preserved since later passes use it as a layout hint.

    Args:
        raw: Text block, sequence of lines or None
        drop_noise: Also drop lines that are mostly numbers/punctuation

    Returns:
        Cleaned lines in their original order
    """
    cleaned = []
    for line in split_lines(raw):
        line = line.strip()
        if len(line) < MIN_LINE_LENGTH:
            continue
        if drop_noise and is_noise_line(line):
            continue
        cleaned.append(line)
    return cleaned
