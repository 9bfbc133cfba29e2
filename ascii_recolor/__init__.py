"""
Recolor neofetch ascii art with gradient color profiles.

Ascii art from neofetch marks colors with ``${c1}``..``${c6}`` placeholders.
This package rewrites those placeholders into ANSI escapes using one of
three alignments:

1. Horizontal: one profile color per row
2. Vertical: one profile color per column
3. Custom: each placeholder slot mapped to a fixed palette color

Usage:
    >>> from ascii_recolor import Horizontal, ProfilePreset, AnsiMode, TerminalTheme
    >>> art = "${c1}###\\n${c2}###"
    >>> colored = Horizontal().recolor_ascii(
    ...     art, ProfilePreset.TRANSGENDER.profile, AnsiMode.RGB, TerminalTheme.DARK
    ... )
"""

from .alignment import ColorAlignment, Custom, ForeBackPair, Horizontal, Vertical, recolor_ascii
from .canvas import ascii_size, fill_starting, normalize_ascii
from .color_profile import (
    RESET,
    RGB,
    AnsiMode,
    ColorProfile,
    ForegroundBackground,
    ProfilePreset,
    TerminalTheme,
    parse_custom_profile,
)
from .distros import fore_back
from .errors import (
    BackendError,
    DimensionOverflowError,
    InvalidColorIndexError,
    InvalidPlaceholderError,
    MissingColorStateError,
    ProfileSpreadError,
    RecolorError,
    ValidationError,
)
from .scanner import NEOFETCH_COLOR_PATTERNS, SCANNER, PlaceholderScanner

__version__ = "1.0.0"

__all__ = [
    # Alignments
    "ColorAlignment",
    "Custom",
    "ForeBackPair",
    "Horizontal",
    "Vertical",
    "recolor_ascii",
    "fore_back",
    # Canvas
    "ascii_size",
    "fill_starting",
    "normalize_ascii",
    # Colors
    "RESET",
    "RGB",
    "AnsiMode",
    "ColorProfile",
    "ForegroundBackground",
    "ProfilePreset",
    "TerminalTheme",
    "parse_custom_profile",
    # Scanner
    "NEOFETCH_COLOR_PATTERNS",
    "SCANNER",
    "PlaceholderScanner",
    # Errors
    "BackendError",
    "DimensionOverflowError",
    "InvalidColorIndexError",
    "InvalidPlaceholderError",
    "MissingColorStateError",
    "ProfileSpreadError",
    "RecolorError",
    "ValidationError",
]
