"""
Color alignment strategies for recoloring neofetch ascii art.

An alignment decides how a gradient profile is laid over the art:

1. HORIZONTAL: one color per row, so the art shows horizontal stripes.
2. VERTICAL: one color per column, so the stripes run top to bottom.
3. CUSTOM: each placeholder slot gets a fixed palette color, no spreading.

Horizontal and vertical alignments can carry a fore/back pair. The "fore"
slot (usually the outline) is drawn in a neutral color that reads well on
the terminal theme, and only the "back" slot (usually the fill) gets the
gradient. Without a pair, the art's own placeholders are discarded and the
whole art is painted with the gradient.

Usage:
    >>> alignment = Vertical(fore_back=(2, 1))
    >>> colored = recolor_ascii(
    ...     alignment, art, ProfilePreset.RAINBOW.profile, AnsiMode.RGB, TerminalTheme.DARK
    ... )
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TypeAlias

from .canvas import ascii_size, fill_starting, grapheme_len
from .color_profile import (
    RESET,
    AnsiMode,
    ColorProfile,
    ForegroundBackground,
    TerminalTheme,
    neutral_color,
)
from .errors import InvalidColorIndexError, ProfileSpreadError
from .scanner import SCANNER, SLOT_COUNT, placeholder, validate_slot

__all__ = [
    "ColorAlignment",
    "Custom",
    "ForeBackPair",
    "Horizontal",
    "Vertical",
    "recolor_ascii",
]

logger = logging.getLogger(__name__)

# =============================================================================
# TYPE ALIASES
# =============================================================================

# (fore slot, back slot), both 1-6
ForeBackPair: TypeAlias = tuple[int, int]


def _validate_fore_back(fore_back: ForeBackPair | None) -> None:
    if fore_back is None:
        return
    fore, back = fore_back
    validate_slot(fore)
    validate_slot(back)


# =============================================================================
# ALIGNMENT VARIANTS
# =============================================================================


@dataclass(frozen=True, slots=True)
class Horizontal:
    """
    One gradient color per row.

    Attributes:
        fore_back: Optional (fore slot, back slot) pair

    Raises:
        InvalidPlaceholderError: If a slot in fore_back is outside 1-6
    """

    fore_back: ForeBackPair | None = None

    def __post_init__(self) -> None:
        _validate_fore_back(self.fore_back)

    def recolor_ascii(
        self,
        asc: str,
        color_profile: ColorProfile,
        color_mode: AnsiMode,
        theme: TerminalTheme,
    ) -> str:
        return recolor_ascii(self, asc, color_profile, color_mode, theme)


@dataclass(frozen=True, slots=True)
class Vertical:
    """
    One gradient color per column, stripes aligned across rows.

    Attributes:
        fore_back: Optional (fore slot, back slot) pair

    Raises:
        InvalidPlaceholderError: If a slot in fore_back is outside 1-6
    """

    fore_back: ForeBackPair | None = None

    def __post_init__(self) -> None:
        _validate_fore_back(self.fore_back)

    def recolor_ascii(
        self,
        asc: str,
        color_profile: ColorProfile,
        color_mode: AnsiMode,
        theme: TerminalTheme,
    ) -> str:
        return recolor_ascii(self, asc, color_profile, color_mode, theme)


@dataclass(frozen=True, slots=True)
class Custom:
    """
    Fixed slot to palette mapping.

    Palette indices are 0-based positions in the deduplicated profile. They
    are checked when the alignment is applied, since the palette size is
    only known then.

    Attributes:
        colors: Mapping of slot (1-6) to palette index (0-based)

    Raises:
        InvalidPlaceholderError: If a key is outside 1-6

    Example:
        >>> Custom({1: 0, 3: 2})
    """

    colors: Mapping[int, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for slot, index in self.colors.items():
            validate_slot(slot)
            if isinstance(index, bool) or not isinstance(index, int) or index < 0:
                msg = f"Invalid palette index {index!r} for color slot {slot}"
                raise InvalidColorIndexError(msg)
        object.__setattr__(self, "colors", MappingProxyType(dict(self.colors)))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Custom):
            return NotImplemented
        return dict(self.colors) == dict(other.colors)

    def __hash__(self) -> int:
        return hash(frozenset(self.colors.items()))

    def recolor_ascii(
        self,
        asc: str,
        color_profile: ColorProfile,
        color_mode: AnsiMode,
        theme: TerminalTheme,
    ) -> str:
        return recolor_ascii(self, asc, color_profile, color_mode, theme)


ColorAlignment: TypeAlias = Horizontal | Vertical | Custom


# =============================================================================
# RECOLORING
# =============================================================================


def recolor_ascii(
    alignment: ColorAlignment,
    asc: str,
    color_profile: ColorProfile,
    color_mode: AnsiMode,
    theme: TerminalTheme,
) -> str:
    """
    Recolor neofetch ascii art with a color profile.

    Args:
        alignment: Horizontal, Vertical or Custom alignment
        asc: Ascii art containing ``${c1}``..``${c6}`` placeholders
        color_profile: Gradient to apply
        color_mode: 8-bit or 24-bit escapes
        theme: Terminal theme, picks the neutral color for fore slots

    Returns:
        The art with every placeholder replaced by ANSI escapes, ready to
        hand to a fetch backend

    Raises:
        ProfileSpreadError: If the profile is empty
        MissingColorStateError: If the art has a line with no color state
        DimensionOverflowError: If the art is larger than 255x255
        InvalidColorIndexError: If a custom mapping exceeds the palette
    """
    logger.debug("Recoloring ascii with %r (%s, %s)", alignment, color_mode.value, theme.value)

    if len(color_profile) == 0:
        msg = f"Cannot recolor ascii with {type(alignment).__name__} alignment: empty color profile"
        raise ProfileSpreadError(msg)

    if isinstance(alignment, Custom):
        return _recolor_custom(alignment, asc, color_profile, color_mode)

    if alignment.fore_back is None:
        return _recolor_gradient(alignment, asc, color_profile, color_mode)

    if isinstance(alignment, Horizontal):
        return _recolor_horizontal_fore_back(
            alignment.fore_back, asc, color_profile, color_mode, theme
        )
    if isinstance(alignment, Vertical):
        return _recolor_vertical_fore_back(
            alignment.fore_back, asc, color_profile, color_mode, theme
        )

    msg = f"Unknown color alignment: {alignment!r}"
    raise TypeError(msg)


def _recolor_horizontal_fore_back(
    fore_back: ForeBackPair,
    asc: str,
    color_profile: ColorProfile,
    color_mode: AnsiMode,
    theme: TerminalTheme,
) -> str:
    fore, back = fore_back
    asc = fill_starting(asc)
    _, height = ascii_size(asc)
    logger.debug("Horizontal fore/back %s over %d rows", fore_back, height)

    # Only the literal token is replaced, the inserted escapes never contain one
    neutral = neutral_color(theme).to_ansi(color_mode, ForegroundBackground.FOREGROUND)
    asc = asc.replace(placeholder(fore), neutral)

    # Art "background" is still terminal foreground text
    colors = color_profile.with_length(height).colors
    back_token = placeholder(back)
    lines = [
        line.replace(back_token, colors[i].to_ansi(color_mode, ForegroundBackground.FOREGROUND))
        + RESET
        for i, line in enumerate(asc.split("\n"))
    ]

    # Slots other than fore/back vanish
    return SCANNER.strip("\n".join(lines))


def _recolor_vertical_fore_back(
    fore_back: ForeBackPair,
    asc: str,
    color_profile: ColorProfile,
    color_mode: AnsiMode,
    theme: TerminalTheme,
) -> str:
    fore, back = fore_back
    asc = fill_starting(asc)
    width, _ = ascii_size(asc)
    logger.debug("Vertical fore/back %s over %d columns", fore_back, width)

    # Shared by every line so stripes line up
    column_colors = color_profile.with_length(width).colors
    neutral = neutral_color(theme).to_ansi(color_mode, ForegroundBackground.FOREGROUND)

    out_lines: list[str] = []
    for lineno, line in enumerate(asc.split("\n"), start=1):
        matches = list(SCANNER.find_iter(line))
        if not matches:
            msg = f"Line {lineno} has no color placeholder after filling starting colors"
            raise RuntimeError(msg)

        # Leading spaces before the first placeholder stay plain
        parts: list[str] = [line[: matches[0].start]]

        for current, following in zip(matches, [*matches[1:], None]):
            end = following.start if following is not None else len(line)
            txt = line[current.end : end]
            if not txt:
                continue

            # Columns are counted on the placeholder-free line, so a cluster
            # split by a placeholder takes one column
            start_col = grapheme_len(SCANNER.strip(line[: current.end]))
            end_col = grapheme_len(SCANNER.strip(line[:end]))
            if end_col == start_col:
                # Combining marks continue the previous column
                start_col = max(start_col - 1, 0)
                end_col = start_col + 1

            if current.slot == fore:
                parts.append(f"{neutral}{txt}{RESET}")
            elif current.slot == back:
                span_profile = ColorProfile(column_colors[start_col:end_col])
                parts.append(
                    span_profile.color_text(
                        txt, color_mode, ForegroundBackground.FOREGROUND, space_only=False
                    )
                )
            else:
                parts.append(txt)

        out_lines.append("".join(parts))

    return "\n".join(out_lines)


def _recolor_gradient(
    alignment: Horizontal | Vertical,
    asc: str,
    color_profile: ColorProfile,
    color_mode: AnsiMode,
) -> str:
    asc = SCANNER.strip(asc)
    width, height = ascii_size(asc)
    lines = asc.split("\n")

    if isinstance(alignment, Horizontal):
        logger.debug("Horizontal gradient over %d rows", height)
        colors = color_profile.with_length(height).colors
        return "\n".join(
            f"{colors[i].to_ansi(color_mode, ForegroundBackground.FOREGROUND)}{line}{RESET}"
            for i, line in enumerate(lines)
        )

    logger.debug("Vertical gradient over %d columns", width)
    column_colors = color_profile.with_length(width).colors
    out_lines: list[str] = []
    for line in lines:
        line_width = grapheme_len(line)
        if line_width == 0:
            out_lines.append(line)
            continue
        line_profile = ColorProfile(column_colors[:line_width])
        out_lines.append(
            line_profile.color_text(
                line, color_mode, ForegroundBackground.FOREGROUND, space_only=False
            )
        )
    return "\n".join(out_lines)


def _recolor_custom(
    alignment: Custom,
    asc: str,
    color_profile: ColorProfile,
    color_mode: AnsiMode,
) -> str:
    asc = fill_starting(asc)
    palette = color_profile.unique_colors().colors

    # Slots are 1-indexed, replacements and palette are 0-indexed
    replacements = [""] * SLOT_COUNT
    for slot, index in alignment.colors.items():
        if index >= len(palette):
            msg = (
                f"Custom color slot {slot} maps to palette index {index}, "
                f"but the palette only has {len(palette)} colors"
            )
            raise InvalidColorIndexError(msg)
        replacements[slot - 1] = palette[index].to_ansi(
            color_mode, ForegroundBackground.FOREGROUND
        )
    logger.debug("Custom mapping %s over %d palette colors", dict(alignment.colors), len(palette))

    asc = SCANNER.replace_all(asc, replacements)

    # Keep the last color from bleeding into whatever prints next
    return "\n".join(f"{line}{RESET}" for line in asc.split("\n"))
