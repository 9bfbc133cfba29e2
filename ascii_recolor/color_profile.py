"""
Gradient color profiles and ANSI color rendering.

A color profile is an ordered list of RGB colors, usually the stripes of a
pride flag. The recoloring engine needs only a handful of operations from it:

- spread it to a target length (one color per row or per column)
- remove duplicate colors (to get a palette for custom mappings)
- turn a color into an ANSI escape, or color a whole run of text

Two color modes are supported:

1. 8BIT: 256-color escapes (``ESC[38;5;Nm``), colors snapped to the xterm
   6x6x6 cube or the 24-step grayscale ramp.
2. RGB: 24-bit truecolor escapes (``ESC[38;2;R;G;Bm``).
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Final, TypeAlias

from .canvas import graphemes
from .errors import ProfileSpreadError, ValidationError

__all__ = [
    "AnsiMode",
    "ColorProfile",
    "ForegroundBackground",
    "ProfilePreset",
    "RESET",
    "RGB",
    "TerminalTheme",
    "neutral_color",
    "parse_custom_profile",
]

# =============================================================================
# TYPE ALIASES
# =============================================================================

HexColor: TypeAlias = str  # "#RRGGBB" or "#RGB"

# =============================================================================
# CONSTANTS
# =============================================================================

HEX_COLOR_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^#?(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$"
)

# Default foreground + default background
RESET: Final[str] = "\x1b[39m\x1b[49m"


# =============================================================================
# ENUMS
# =============================================================================


class AnsiMode(Enum):
    """Escape flavor used to render colors."""

    EIGHT_BIT = "8bit"
    RGB = "rgb"


class ForegroundBackground(Enum):
    """Whether a color is emitted as terminal foreground or background."""

    FOREGROUND = "foreground"
    BACKGROUND = "background"


class TerminalTheme(Enum):
    """Terminal background brightness."""

    LIGHT = "light"
    DARK = "dark"


# =============================================================================
# DATA CLASSES
# =============================================================================


@dataclass(frozen=True, slots=True)
class RGB:
    """
    Immutable 24-bit color.

    Attributes:
        r: Red channel 0-255
        g: Green channel 0-255
        b: Blue channel 0-255

    Example:
        >>> RGB.from_hex("#ff5555")
        RGB(r=255, g=85, b=85)
    """

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b):
            if not 0 <= channel <= 255:
                msg = f"Color channel must be 0-255, got {channel}"
                raise ValidationError(msg)

    @classmethod
    def from_hex(cls, hex_color: HexColor) -> RGB:
        """
        Parse a hex color.

        Accepts "#RRGGBB", "#RGB", and both without the leading "#".

        Raises:
            ValidationError: If the string is not a hex color
        """
        if not HEX_COLOR_PATTERN.match(hex_color):
            msg = f"Invalid hex color format: {hex_color!r}. Expected #RRGGBB"
            raise ValidationError(msg)

        digits = hex_color.lstrip("#")
        if len(digits) == 3:
            digits = "".join(c * 2 for c in digits)
        return cls(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))

    def to_hex(self) -> HexColor:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def to_ansi_256(self) -> int:
        """
        Snap this color to the nearest xterm 256-color index.

        Pure grays use the 24-step grayscale ramp (232-255), with black and
        white mapped to the cube corners 16 and 231. Everything else uses the
        6x6x6 color cube (16-231).
        """
        r, g, b = self.r, self.g, self.b
        if r == g == b:
            if r < 8:
                return 16
            if r > 248:
                return 231
            return round((r - 8) / 247 * 24) + 232
        return (
            16
            + 36 * round(r / 255 * 5)
            + 6 * round(g / 255 * 5)
            + round(b / 255 * 5)
        )

    def to_ansi(
        self,
        mode: AnsiMode,
        role: ForegroundBackground = ForegroundBackground.FOREGROUND,
    ) -> str:
        """
        Render this color as an ANSI escape prefix (no trailing reset).

        Args:
            mode: 8-bit or 24-bit escapes
            role: Emit as foreground (38) or background (48)

        Example:
            >>> RGB(255, 0, 0).to_ansi(AnsiMode.RGB)
            '\\x1b[38;2;255;0;0m'
        """
        code = 38 if role is ForegroundBackground.FOREGROUND else 48
        if mode is AnsiMode.RGB:
            return f"\x1b[{code};2;{self.r};{self.g};{self.b}m"
        return f"\x1b[{code};5;{self.to_ansi_256()}m"


@dataclass(frozen=True, slots=True)
class ColorProfile:
    """
    Ordered gradient of colors.

    Attributes:
        colors: Tuple of RGB colors, first to last

    Example:
        >>> profile = ColorProfile.from_hex(["#ff0000", "#0000ff"])
        >>> len(profile.with_length(5))
        5
    """

    colors: tuple[RGB, ...]

    def __post_init__(self) -> None:
        # Accept any sequence but store a tuple so the profile stays hashable
        if not isinstance(self.colors, tuple):
            object.__setattr__(self, "colors", tuple(self.colors))

    @classmethod
    def from_hex(cls, hex_colors: Sequence[HexColor]) -> ColorProfile:
        return cls(tuple(RGB.from_hex(h) for h in hex_colors))

    def __len__(self) -> int:
        return len(self.colors)

    def __getitem__(self, index: int) -> RGB:
        return self.colors[index]

    def with_weights(self, weights: Sequence[int]) -> ColorProfile:
        """
        Repeat each color by its weight.

        Args:
            weights: One non-negative count per color

        Raises:
            ValueError: If weights and colors differ in length
        """
        if len(weights) != len(self.colors):
            msg = f"Expected {len(self.colors)} weights, got {len(weights)}"
            raise ValueError(msg)
        return ColorProfile(
            tuple(color for color, weight in zip(self.colors, weights) for _ in range(weight))
        )

    def with_length(self, length: int) -> ColorProfile:
        """
        Spread the profile to exactly length colors.

        Every color is repeated length // len(profile) times. Leftover slots
        are handed out symmetrically: an odd leftover gives the center color
        one more, then pairs are added to the first and last colors, moving
        inwards. This keeps flags looking balanced at any size.

        Args:
            length: Target number of colors, at least 1

        Raises:
            ProfileSpreadError: If the profile is empty or length is < 1
        """
        preset_len = len(self.colors)
        if preset_len == 0:
            raise ProfileSpreadError("Cannot spread an empty color profile")
        if length < 1:
            msg = f"Cannot spread color profile to length {length}"
            raise ProfileSpreadError(msg)

        center_i = preset_len // 2
        repeats, extras = divmod(length, preset_len)
        weights = [repeats] * preset_len

        if extras % 2 == 1:
            extras -= 1
            weights[center_i] += 1

        border_i = 0
        while extras > 0:
            extras -= 2
            weights[border_i] += 1
            weights[-(border_i + 1)] += 1
            border_i += 1

        return self.with_weights(weights)

    def unique_colors(self) -> ColorProfile:
        """Drop repeated colors, keeping the first occurrence of each."""
        return ColorProfile(tuple(dict.fromkeys(self.colors)))

    def color_text(
        self,
        text: str,
        mode: AnsiMode,
        role: ForegroundBackground = ForegroundBackground.FOREGROUND,
        space_only: bool = False,
    ) -> str:
        """
        Color text as a left-to-right gradient, one color per grapheme.

        An escape is only written when the color changes, and a single reset
        closes the run.

        Args:
            text: Text to color
            mode: Escape flavor
            role: Foreground or background escapes
            space_only: Only color spaces, leave other graphemes untouched
                        (useful with background role to paint stripes)

        Raises:
            ProfileSpreadError: If the profile is empty or text is empty
        """
        clusters = graphemes(text)
        colors = self.with_length(len(clusters)).colors

        parts: list[str] = []
        previous: RGB | None = None
        for i, cluster in enumerate(clusters):
            if space_only and cluster != " ":
                # Close the colored run of spaces before plain text
                if i > 0 and clusters[i - 1] == " ":
                    parts.append(RESET)
                previous = None
            elif colors[i] != previous:
                parts.append(colors[i].to_ansi(mode, role))
                previous = colors[i]
            parts.append(cluster)

        parts.append(RESET)
        return "".join(parts)


def neutral_color(theme: TerminalTheme) -> RGB:
    """Readable fixed color for the theme: white on dark, black on light."""
    if theme is TerminalTheme.LIGHT:
        return RGB(0, 0, 0)
    return RGB(255, 255, 255)


# =============================================================================
# PRESETS
# =============================================================================


class ProfilePreset(Enum):
    """
    Built-in color profiles from pride flags.

    Repeated entries act as weights, e.g. the bisexual flag has a double
    width pink and blue stripe.

    Usage:
        >>> profile = ProfilePreset.TRANSGENDER.profile
    """

    RAINBOW = ("#E50000", "#FF8D00", "#FFEE00", "#028121", "#004CFF", "#770088")

    TRANSGENDER = ("#55CDFD", "#F6AAB7", "#FFFFFF", "#F6AAB7", "#55CDFD")

    NONBINARY = ("#FCF431", "#FCFCFC", "#9D59D2", "#282828")

    AGENDER = ("#000000", "#BABABA", "#FFFFFF", "#BAF484", "#FFFFFF", "#BABABA", "#000000")

    BISEXUAL = ("#D60270", "#D60270", "#9B4F96", "#0038A8", "#0038A8")

    PANSEXUAL = ("#FF1C8D", "#FFD700", "#1AB3FF")

    LESBIAN = ("#D62800", "#FF9B56", "#FFFFFF", "#D462A6", "#A40062")

    ASEXUAL = ("#000000", "#A4A4A4", "#FFFFFF", "#810081")

    AROMANTIC = ("#3BA740", "#A8D47A", "#FFFFFF", "#ABABAB", "#000000")

    GENDERFLUID = ("#FE76A2", "#FFFFFF", "#BF12D7", "#000000", "#303CBE")

    @property
    def profile(self) -> ColorProfile:
        return ColorProfile.from_hex(self.value)


def parse_custom_profile(profile_str: str) -> ColorProfile:
    """
    Parse a custom profile from a comma-separated list of hex colors.

    Format Rules:
        - Colors are hex: #RRGGBB or #RGB
        - At least one color
        - Whitespace around colors is trimmed

    Args:
        profile_str: e.g. "#ff0000, #00ff00, #0000ff"

    Raises:
        ValidationError: If any color is malformed or none is given

    Example:
        >>> len(parse_custom_profile("#ff0000,#0000ff"))
        2
    """
    parts = [part.strip() for part in profile_str.split(",") if part.strip()]
    if not parts:
        raise ValidationError("Custom profile must have at least 1 color")
    return ColorProfile.from_hex(parts)
