"""
Recommended fore/back slot pairs for distro ascii art.

Some distro logos are drawn as an outline in one slot around a fill in
another. For those, keeping the outline neutral and painting only the fill
with the gradient reads much better than recoloring everything.
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Final

from .alignment import ForeBackPair

__all__ = ["FORE_BACK_DISTROS", "fore_back", "normalize_distro_name"]

_SEPARATORS: Final[re.Pattern[str]] = re.compile(r"[\s_\-!/]+")


def normalize_distro_name(distro: str) -> str:
    """
    Reduce a distro name to a lookup key.

    Case, whitespace and the separators ``_ - ! /`` are ignored, so
    "Pop!_OS", "pop-os" and "POP OS" are the same distro.
    """
    return _SEPARATORS.sub("", distro).lower()


_OUTLINE_2_FILL_1: Final[tuple[str, ...]] = (
    "Anarchy",
    "ArchStrike",
    "Astra Linux",
    "Chapeau",
    "Fedora",
    "GalliumOS",
    "KrassOS",
    "Kubuntu",
    "Lubuntu",
    "openEuler",
    "Peppermint",
    "Pop!_OS",
    "Ubuntu Cinnamon",
    "Ubuntu Kylin",
    "Ubuntu MATE",
    "Ubuntu_old",
    "Ubuntu Studio",
    "Ubuntu Sway",
    "Ultramarine Linux",
    "Univention",
    "Vanilla",
    "Xubuntu",
)

_OUTLINE_1_FILL_2: Final[tuple[str, ...]] = ("Antergos",)

# Display name -> (fore, back)
FORE_BACK_DISTROS: Final[MappingProxyType[str, ForeBackPair]] = MappingProxyType(
    {
        **{name: (2, 1) for name in _OUTLINE_2_FILL_1},
        **{name: (1, 2) for name in _OUTLINE_1_FILL_2},
    }
)

_LOOKUP: Final[dict[str, ForeBackPair]] = {
    normalize_distro_name(name): pair for name, pair in FORE_BACK_DISTROS.items()
}


def fore_back(distro: str) -> ForeBackPair | None:
    """
    Get the recommended (fore, back) pair for a distro.

    Returns:
        The pair, or None when the distro's ascii is not suited to a
        fore/back split (including unknown distros)

    Example:
        >>> fore_back("Fedora")
        (2, 1)
        >>> fore_back("Arch Linux") is None
        True
    """
    return _LOOKUP.get(normalize_distro_name(distro))
