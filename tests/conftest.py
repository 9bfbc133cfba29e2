"""Shared pytest fixtures for ascii_recolor tests."""

from __future__ import annotations

import pytest

from ascii_recolor.color_profile import ColorProfile

from .colors import BLUE, GREEN, RED

# ============================================================================
# Color Fixtures
# ============================================================================


@pytest.fixture
def rgb_profile() -> ColorProfile:
    """Three distinct colors: red, green, blue."""
    return ColorProfile((RED, GREEN, BLUE))


@pytest.fixture
def two_color_profile() -> ColorProfile:
    """Red and green, spreads to [R, R, G, G] at width 4."""
    return ColorProfile((RED, GREEN))


@pytest.fixture
def empty_profile() -> ColorProfile:
    return ColorProfile(())


# ============================================================================
# Ascii Fixtures
# ============================================================================


@pytest.fixture
def three_row_art() -> str:
    """Three rows, one placeholder at the top, carried down."""
    return "${c1}###\n###\n###"


@pytest.fixture
def outlined_art() -> str:
    """Outline in slot 2 around a fill in slot 1, like the Fedora logo."""
    return "${c2}/${c1}##${c2}\\\n${c2}|${c1}##${c2}|\n${c2}\\__/"
