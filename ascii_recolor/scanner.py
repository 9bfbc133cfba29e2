"""
Placeholder scanner for neofetch-style ascii art.

Ascii art shipped with neofetch marks color changes with six literal tokens,
``${c1}`` through ``${c6}``. Every other part of the engine (size
measurement, line-state filling and all alignment strategies) goes through
the single scanner defined here, so they all agree on the same grammar.

The scanner compiles one alternation of the six escaped tokens and is
immutable once built. A module-level instance, SCANNER, is shared by the
whole process.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Final

from .errors import InvalidPlaceholderError

__all__ = [
    "NEOFETCH_COLOR_PATTERNS",
    "SLOT_COUNT",
    "PlaceholderMatch",
    "PlaceholderScanner",
    "SCANNER",
    "parse_slot",
    "placeholder",
    "validate_slot",
]

# =============================================================================
# CONSTANTS
# =============================================================================

SLOT_COUNT: Final[int] = 6

# Literal tokens, index i holds the token for slot i + 1
NEOFETCH_COLOR_PATTERNS: Final[tuple[str, ...]] = tuple(
    f"${{c{slot}}}" for slot in range(1, SLOT_COUNT + 1)
)

# Length of the "${c" prefix and "}" suffix around the slot digit
_PREFIX_LEN: Final[int] = len("${c")
_SUFFIX_LEN: Final[int] = len("}")


# =============================================================================
# SLOT HELPERS
# =============================================================================


def validate_slot(slot: int) -> int:
    """
    Check that a color slot is one of the six neofetch slots.

    Args:
        slot: 1-indexed slot number

    Returns:
        The slot, unchanged

    Raises:
        InvalidPlaceholderError: If slot is not an int in 1-6
    """
    # bool is an int subclass, but True is not a slot
    if isinstance(slot, bool) or not isinstance(slot, int) or not 1 <= slot <= SLOT_COUNT:
        msg = f"Invalid color slot: {slot!r}. Expected an integer 1-{SLOT_COUNT}"
        raise InvalidPlaceholderError(msg)
    return slot


def parse_slot(text: str) -> int:
    """
    Parse the slot digit found between ``${c`` and ``}``.

    Raises:
        InvalidPlaceholderError: If text is not a number in 1-6
    """
    try:
        slot = int(text)
    except ValueError:
        msg = f"Invalid color slot text: {text!r}"
        raise InvalidPlaceholderError(msg) from None
    return validate_slot(slot)


def placeholder(slot: int) -> str:
    """Return the literal token for a slot, e.g. ``placeholder(2) == "${c2}"``."""
    return NEOFETCH_COLOR_PATTERNS[validate_slot(slot) - 1]


# =============================================================================
# SCANNER
# =============================================================================


@dataclass(frozen=True, slots=True)
class PlaceholderMatch:
    """
    One placeholder occurrence inside a line.

    Attributes:
        slot: Slot number 1-6
        start: Character offset of the "$"
        end: Character offset just past the closing "}"
    """

    slot: int
    start: int
    end: int

    @property
    def token(self) -> str:
        return NEOFETCH_COLOR_PATTERNS[self.slot - 1]

    def __len__(self) -> int:
        return self.end - self.start


class PlaceholderScanner:
    """
    Multi-pattern search and replace over the six placeholder tokens.

    All offsets are character (code point) offsets into the Python string.
    Matches never overlap and are reported left to right.

    Example:
        >>> scanner = PlaceholderScanner()
        >>> [m.slot for m in scanner.find_iter("${c1}ab${c3}c")]
        [1, 3]
        >>> scanner.strip("${c1}ab${c3}c")
        'abc'
    """

    __slots__ = ("_pattern",)

    def __init__(self) -> None:
        alternation = "|".join(re.escape(token) for token in NEOFETCH_COLOR_PATTERNS)
        self._pattern: re.Pattern[str] = re.compile(alternation)

    def _to_match(self, m: re.Match[str]) -> PlaceholderMatch:
        slot = parse_slot(m.group()[_PREFIX_LEN:-_SUFFIX_LEN])
        return PlaceholderMatch(slot=slot, start=m.start(), end=m.end())

    def find_iter(self, line: str) -> Iterator[PlaceholderMatch]:
        """Yield every placeholder in line, left to right."""
        for m in self._pattern.finditer(line):
            yield self._to_match(m)

    def find_next(self, line: str, pos: int = 0) -> PlaceholderMatch | None:
        """Return the first placeholder starting at or after pos, if any."""
        m = self._pattern.search(line, pos)
        return self._to_match(m) if m else None

    def replace_all(self, text: str, replacements: Sequence[str]) -> str:
        """
        Replace every token in a single pass.

        Args:
            text: Text containing placeholder tokens
            replacements: Six strings, replacements[i] substitutes slot i + 1.
                          Empty strings remove the token.

        Raises:
            ValueError: If replacements does not hold exactly six entries
        """
        if len(replacements) != SLOT_COUNT:
            msg = f"Expected {SLOT_COUNT} replacements, got {len(replacements)}"
            raise ValueError(msg)
        return self._pattern.sub(
            lambda m: replacements[self._to_match(m).slot - 1],
            text,
        )

    def strip(self, text: str) -> str:
        """
        Remove every placeholder token from text.

        Removal repeats until no token is left, so tokens formed by joining
        the text around a removed one are removed too.
        """
        while True:
            text, count = self._pattern.subn("", text)
            if not count:
                return text


# Shared, never mutated after import
SCANNER: Final[PlaceholderScanner] = PlaceholderScanner()
