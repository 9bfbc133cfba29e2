"""Tests for color alignment strategies."""

import pytest

from ascii_recolor.alignment import Custom, Horizontal, Vertical, recolor_ascii
from ascii_recolor.color_profile import RESET, AnsiMode, ColorProfile, TerminalTheme
from ascii_recolor.errors import (
    InvalidColorIndexError,
    InvalidPlaceholderError,
    MissingColorStateError,
    ProfileSpreadError,
)
from ascii_recolor.scanner import NEOFETCH_COLOR_PATTERNS

from .colors import BLACK, BLUE, GREEN, RED, WHITE, fg

DARK = TerminalTheme.DARK
LIGHT = TerminalTheme.LIGHT
RGB_MODE = AnsiMode.RGB


def assert_no_placeholders(text: str) -> None:
    for token in NEOFETCH_COLOR_PATTERNS:
        assert token not in text


class TestAlignmentConstruction:
    """Tests for building alignment variants."""

    def test_defaults(self):
        assert Horizontal().fore_back is None
        assert Vertical().fore_back is None
        assert dict(Custom().colors) == {}

    @pytest.mark.parametrize("pair", [(0, 1), (2, 7)])
    def test_invalid_fore_back_slot(self, pair):
        with pytest.raises(InvalidPlaceholderError):
            Horizontal(fore_back=pair)
        with pytest.raises(InvalidPlaceholderError):
            Vertical(fore_back=pair)

    def test_invalid_custom_slot(self):
        with pytest.raises(InvalidPlaceholderError):
            Custom({7: 0})

    def test_negative_custom_index(self):
        with pytest.raises(InvalidColorIndexError):
            Custom({1: -1})

    def test_custom_is_immutable_and_comparable(self):
        source = {1: 0}
        custom = Custom(source)
        source[2] = 1

        assert dict(custom.colors) == {1: 0}
        assert custom == Custom({1: 0})
        assert hash(custom) == hash(Custom({1: 0}))
        with pytest.raises(TypeError):
            custom.colors[3] = 1


class TestHorizontalGradient:
    """Tests for horizontal alignment without a fore/back pair."""

    def test_one_color_per_row(self, rgb_profile, three_row_art):
        result = recolor_ascii(Horizontal(), three_row_art, rgb_profile, RGB_MODE, DARK)
        rows = result.split("\n")

        spread = rgb_profile.with_length(3)
        assert len(rows) == 3
        for i, row in enumerate(rows):
            assert row == f"{fg(spread[i])}###{RESET}"
            assert row.count(RESET) == 1

    def test_existing_placeholders_are_discarded(self, rgb_profile):
        art = "${c1}a${c2}b\n${c3}c${c4}d\n${c5}e${c6}f"
        result = Horizontal().recolor_ascii(art, rgb_profile, RGB_MODE, DARK)

        assert result == "\n".join(
            [f"{fg(RED)}ab{RESET}", f"{fg(GREEN)}cd{RESET}", f"{fg(BLUE)}ef{RESET}"]
        )

    def test_art_without_placeholders(self, two_color_profile):
        result = recolor_ascii(Horizontal(), "ab\ncd", two_color_profile, RGB_MODE, DARK)
        assert result == f"{fg(RED)}ab{RESET}\n{fg(GREEN)}cd{RESET}"

    def test_8bit_mode(self, two_color_profile):
        result = recolor_ascii(Horizontal(), "${c1}x", two_color_profile, AnsiMode.EIGHT_BIT, DARK)
        assert result == f"\x1b[38;5;46mx{RESET}"


class TestVerticalGradient:
    """Tests for vertical alignment without a fore/back pair."""

    def test_one_color_per_column(self, two_color_profile):
        result = recolor_ascii(Vertical(), "${c1}abcd\n${c2}efgh", two_color_profile, RGB_MODE, DARK)
        assert result == "\n".join(
            [f"{fg(RED)}ab{fg(GREEN)}cd{RESET}", f"{fg(RED)}ef{fg(GREEN)}gh{RESET}"]
        )

    def test_short_lines_share_column_colors(self, two_color_profile):
        result = recolor_ascii(Vertical(), "${c1}ab\n${c2}a", two_color_profile, RGB_MODE, DARK)
        assert result == f"{fg(RED)}a{fg(GREEN)}b{RESET}\n{fg(RED)}a{RESET}"

    def test_empty_line_left_alone(self, two_color_profile):
        result = recolor_ascii(Vertical(), "ab\n\ncd", two_color_profile, RGB_MODE, DARK)
        assert result.split("\n")[1] == ""


class TestHorizontalForeBack:
    """Tests for horizontal alignment with a fore/back pair."""

    def test_fore_neutral_back_row_color(self, two_color_profile):
        art = "${c1}AA${c2}BB\n${c1}CC"
        result = recolor_ascii(
            Horizontal(fore_back=(2, 1)), art, two_color_profile, RGB_MODE, DARK
        )
        assert result == "\n".join(
            [
                f"{fg(RED)}AA{fg(WHITE)}BB{RESET}",
                f"{fg(GREEN)}CC{RESET}",
            ]
        )

    def test_light_theme_uses_black(self, two_color_profile):
        result = recolor_ascii(
            Horizontal(fore_back=(2, 1)), "${c2}x", two_color_profile, RGB_MODE, LIGHT
        )
        assert result == f"{fg(BLACK)}x{RESET}"

    def test_carried_back_slot_gets_each_row_color(self, rgb_profile, outlined_art):
        result = recolor_ascii(
            Horizontal(fore_back=(2, 1)), outlined_art, rgb_profile, RGB_MODE, DARK
        )
        rows = result.split("\n")

        assert rows[0] == f"{fg(WHITE)}/{fg(RED)}##{fg(WHITE)}\\{RESET}"
        assert rows[1] == f"{fg(WHITE)}|{fg(GREEN)}##{fg(WHITE)}|{RESET}"
        assert rows[2] == f"{fg(WHITE)}\\__/{RESET}"

    def test_other_slots_are_stripped(self, two_color_profile):
        art = "${c1}a${c3}b${c6}c"
        result = recolor_ascii(
            Horizontal(fore_back=(2, 1)), art, two_color_profile, RGB_MODE, DARK
        )
        assert result == f"{fg(GREEN)}abc{RESET}"
        assert_no_placeholders(result)

    def test_missing_color_state(self, two_color_profile):
        with pytest.raises(MissingColorStateError):
            recolor_ascii(Horizontal(fore_back=(2, 1)), "ab", two_color_profile, RGB_MODE, DARK)


class TestVerticalForeBack:
    """Tests for vertical alignment with a fore/back pair."""

    def test_fore_span_neutral_back_span_gradient(self, two_color_profile):
        result = recolor_ascii(
            Vertical(fore_back=(1, 2)), "${c1}AA${c2}BB", two_color_profile, RGB_MODE, DARK
        )
        # Width 4 spreads [R, G] to [R, R, G, G]; BB sits in columns 2-3
        assert result == f"{fg(WHITE)}AA{RESET}{fg(GREEN)}BB{RESET}"

    def test_gradient_span_is_not_fragmented(self, rgb_profile):
        result = recolor_ascii(
            Vertical(fore_back=(1, 2)), "${c2}abc${c1}d", rgb_profile, RGB_MODE, DARK
        )
        # Width 4 spreads to [R, G, G, B]
        assert result == f"{fg(RED)}a{fg(GREEN)}bc{RESET}{fg(WHITE)}d{RESET}"
        assert result.count(RESET) == 2

    def test_stripes_align_across_rows(self, two_color_profile):
        art = "${c2}AB${c1}CD\n${c1}AB${c2}CD"
        result = recolor_ascii(Vertical(fore_back=(1, 2)), art, two_color_profile, RGB_MODE, DARK)
        rows = result.split("\n")

        assert rows[0] == f"{fg(RED)}AB{RESET}{fg(WHITE)}CD{RESET}"
        assert rows[1] == f"{fg(WHITE)}AB{RESET}{fg(GREEN)}CD{RESET}"

    def test_column_offsets_count_graphemes(self, two_color_profile):
        accented = "e\u0301"
        art = "${c1}" + accented + "${c2}B"
        result = recolor_ascii(Vertical(fore_back=(1, 2)), art, two_color_profile, RGB_MODE, DARK)
        assert result == f"{fg(WHITE)}{accented}{RESET}{fg(GREEN)}B{RESET}"

    def test_untargeted_slot_is_plain(self, rgb_profile):
        art = "${c1}A${c3}B${c2}C"
        result = recolor_ascii(Vertical(fore_back=(1, 2)), art, rgb_profile, RGB_MODE, DARK)
        assert result == f"{fg(WHITE)}A{RESET}B{fg(BLUE)}C{RESET}"

    def test_leading_spaces_stay_plain(self, two_color_profile):
        art = "  ${c2}AB"
        result = recolor_ascii(Vertical(fore_back=(1, 2)), art, two_color_profile, RGB_MODE, DARK)
        assert result == f"  {fg(GREEN)}AB{RESET}"

    def test_leading_spaces_advance_column(self, rgb_profile):
        # Width 4 spreads to [R, G, G, B], so AB sits on columns 2 and 3
        art = "  ${c2}AB"
        result = recolor_ascii(Vertical(fore_back=(1, 2)), art, rgb_profile, RGB_MODE, DARK)
        assert result == f"  {fg(GREEN)}A{fg(BLUE)}B{RESET}"

    def test_placeholder_inside_grapheme_cluster(self, two_color_profile):
        art = "${c1}e${c2}\u0301"
        result = recolor_ascii(Vertical(fore_back=(1, 2)), art, two_color_profile, RGB_MODE, DARK)
        assert result == f"{fg(WHITE)}e{RESET}{fg(GREEN)}\u0301{RESET}"

    def test_carried_slot(self, two_color_profile):
        art = "${c1}AB${c2}\nCD"
        result = recolor_ascii(Vertical(fore_back=(1, 2)), art, two_color_profile, RGB_MODE, DARK)
        assert result == f"{fg(WHITE)}AB{RESET}\n{fg(RED)}C{fg(GREEN)}D{RESET}"
        assert_no_placeholders(result)

    def test_missing_color_state(self, two_color_profile):
        with pytest.raises(MissingColorStateError):
            recolor_ascii(Vertical(fore_back=(1, 2)), "AB", two_color_profile, RGB_MODE, DARK)


class TestCustom:
    """Tests for custom slot to palette mappings."""

    def test_mapped_and_unmapped_slots(self, rgb_profile):
        art = "${c1}a${c2}b${c3}c\n${c4}d${c5}e${c6}f"
        result = recolor_ascii(Custom({1: 0, 3: 2}), art, rgb_profile, RGB_MODE, DARK)

        assert result == f"{fg(RED)}ab{fg(BLUE)}c{RESET}\ndef{RESET}"
        assert_no_placeholders(result)

    def test_carried_slot_is_mapped(self, rgb_profile):
        result = recolor_ascii(Custom({1: 1}), "${c1}a\nb", rgb_profile, RGB_MODE, DARK)
        assert result == f"{fg(GREEN)}a{RESET}\n{fg(GREEN)}b{RESET}"

    def test_same_index_on_multiple_slots(self, rgb_profile):
        result = recolor_ascii(Custom({1: 2, 2: 2}), "${c1}a${c2}b", rgb_profile, RGB_MODE, DARK)
        assert result == f"{fg(BLUE)}a{fg(BLUE)}b{RESET}"

    def test_empty_mapping_strips_everything(self, rgb_profile):
        result = recolor_ascii(Custom({}), "${c1}a${c2}b\nc", rgb_profile, RGB_MODE, DARK)
        assert result == f"ab{RESET}\nc{RESET}"

    def test_slot_six_maps_to_last_replacement(self, rgb_profile):
        result = recolor_ascii(Custom({6: 0}), "${c6}x", rgb_profile, RGB_MODE, DARK)
        assert result == f"{fg(RED)}x{RESET}"

    def test_palette_is_deduplicated(self):
        profile = ColorProfile((RED, RED, GREEN, GREEN, RED))
        result = recolor_ascii(Custom({1: 1}), "${c1}x", profile, RGB_MODE, DARK)
        assert result == f"{fg(GREEN)}x{RESET}"

        with pytest.raises(InvalidColorIndexError, match="palette index 2"):
            recolor_ascii(Custom({1: 2}), "${c1}x", profile, RGB_MODE, DARK)

    def test_no_spreading(self, rgb_profile):
        art = "\n".join(["${c1}x"] * 10)
        result = recolor_ascii(Custom({1: 0}), art, rgb_profile, RGB_MODE, DARK)
        assert set(result.split("\n")) == {f"{fg(RED)}x{RESET}"}

    def test_missing_color_state(self, rgb_profile):
        with pytest.raises(MissingColorStateError):
            recolor_ascii(Custom({1: 0}), "x", rgb_profile, RGB_MODE, DARK)


class TestEmptyProfile:
    """Every alignment fails on an empty profile before substituting."""

    @pytest.mark.parametrize(
        "alignment",
        [
            Horizontal(),
            Vertical(),
            Horizontal(fore_back=(2, 1)),
            Vertical(fore_back=(2, 1)),
            Custom({1: 0}),
            Custom(),
        ],
    )
    def test_spread_failure(self, alignment, empty_profile):
        with pytest.raises(ProfileSpreadError):
            recolor_ascii(alignment, "${c1}ab\n${c2}cd", empty_profile, RGB_MODE, DARK)

    def test_fails_before_checking_art(self, empty_profile):
        # Art that would otherwise fail with MissingColorStateError
        with pytest.raises(ProfileSpreadError):
            recolor_ascii(Horizontal(fore_back=(2, 1)), "ab", empty_profile, RGB_MODE, DARK)
