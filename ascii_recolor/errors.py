"""
Exception hierarchy for the ascii recoloring engine.

Every error raised by this package derives from RecolorError, so callers can
catch a single class and decide whether to abort or fall back to printing the
art uncolored.
"""

from __future__ import annotations

__all__ = [
    "RecolorError",
    "InvalidPlaceholderError",
    "MissingColorStateError",
    "ProfileSpreadError",
    "DimensionOverflowError",
    "InvalidColorIndexError",
    "ValidationError",
    "BackendError",
]


class RecolorError(Exception):
    """
    Base exception for all recoloring errors.

    Catching this exception will catch all package-specific errors.
    """


class InvalidPlaceholderError(RecolorError):
    """
    Raised when a color slot is outside 1-6.

    The scanner only recognizes the six literal tokens, so inside the engine
    this signals a broken invariant. It is also raised when a user-supplied
    fore/back pair or custom mapping names a slot that does not exist.
    """


class MissingColorStateError(RecolorError):
    """
    Raised when a line has no leading placeholder and no earlier line
    provided one to carry forward.
    """


class ProfileSpreadError(RecolorError):
    """Raised when a color profile is empty or is spread to length zero."""


class DimensionOverflowError(RecolorError):
    """Raised when ascii art is wider or taller than 255 columns/rows."""


class InvalidColorIndexError(RecolorError):
    """Raised when a custom mapping points past the end of the palette."""


class ValidationError(RecolorError):
    """
    Raised when user input validation fails.

    This includes:
    - Invalid hex color format
    - Unknown preset, color mode, theme or backend names
    - Malformed configuration files
    """


class BackendError(RecolorError):
    """
    Raised when a fetch backend cannot be run.

    This includes:
    - neofetch/fastfetch not installed or not found
    - Subprocess execution failures
    - Timeout while running the backend
    """
