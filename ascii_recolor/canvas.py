"""
Canvas metrics and line normalization for ascii art.

Widths are counted in grapheme clusters after removing placeholder tokens,
so a flag emoji or a letter followed by a combining accent occupies one
column, and ``${c1}`` occupies none.
"""

from __future__ import annotations

import logging
from typing import Final

import regex

from .errors import DimensionOverflowError, MissingColorStateError
from .scanner import SCANNER

__all__ = [
    "MAX_DIMENSION",
    "ascii_size",
    "fill_starting",
    "grapheme_len",
    "graphemes",
    "normalize_ascii",
]

logger = logging.getLogger(__name__)

# Width and height must each fit in one unsigned byte
MAX_DIMENSION: Final[int] = 255

# Extended grapheme cluster
GRAPHEME_PATTERN: Final[regex.Pattern[str]] = regex.compile(r"\X")


def graphemes(text: str) -> list[str]:
    """Split text into extended grapheme clusters."""
    return GRAPHEME_PATTERN.findall(text)


def grapheme_len(text: str) -> int:
    """Count extended grapheme clusters in text."""
    return len(graphemes(text))


def ascii_size(asc: str) -> tuple[int, int]:
    """
    Measure ascii art in display columns and rows.

    Placeholder tokens are removed before measuring, so they contribute no
    width. Width is the longest line in grapheme clusters; height is the
    number of lines (an empty string is one empty line).

    Args:
        asc: Ascii art, placeholders allowed

    Returns:
        Tuple of (width, height)

    Raises:
        DimensionOverflowError: If width or height exceeds MAX_DIMENSION

    Example:
        >>> ascii_size("${c1}abc\\n${c2}de")
        (3, 2)
    """
    lines = SCANNER.strip(asc).split("\n")
    width = max(grapheme_len(line) for line in lines)
    height = len(lines)

    if width > MAX_DIMENSION:
        msg = f"Ascii art width {width} exceeds maximum of {MAX_DIMENSION}"
        raise DimensionOverflowError(msg)
    if height > MAX_DIMENSION:
        msg = f"Ascii art height {height} exceeds maximum of {MAX_DIMENSION}"
        raise DimensionOverflowError(msg)

    return width, height


def normalize_ascii(asc: str) -> str:
    """
    Pad every line with trailing spaces so all lines share one width.

    Raises:
        DimensionOverflowError: If the art is too large to measure
    """
    width, _ = ascii_size(asc)
    return "\n".join(
        line + " " * (width - ascii_size(line)[0]) for line in asc.split("\n")
    )


def fill_starting(asc: str) -> str:
    """
    Make every line start with an explicit placeholder.

    Neofetch art only writes a placeholder where the color changes, so a line
    without one keeps the color that was active at the end of the previous
    line. This carries that token forward onto the start of such lines.

    A line counts as already starting with a placeholder when only spaces
    precede its first token.

    Args:
        asc: Ascii art

    Returns:
        Ascii art where each line begins with a placeholder

    Raises:
        MissingColorStateError: If a line needs a carried placeholder but no
                                earlier line contained one

    Example:
        >>> fill_starting("${c1}...\\n...")
        '${c1}...\\n${c1}...'
    """
    last: str | None = None
    filled: list[str] = []

    for lineno, line in enumerate(asc.split("\n"), start=1):
        matches = list(SCANNER.find_iter(line))

        starts_with_placeholder = bool(matches) and not line[: matches[0].start].strip(" ")
        if starts_with_placeholder:
            filled.append(line)
        else:
            if last is None:
                msg = (
                    f"Line {lineno} has no starting color placeholder and no previous "
                    "line provides one"
                )
                raise MissingColorStateError(msg)
            filled.append(last + line)

        # The last placeholder on this line is active for the next one
        if matches:
            last = matches[-1].token

    return "\n".join(filled)
