"""Unit tests for special-episode classification and episode extraction."""

import re

import pytest

from core.episode_match import (
    classify,
    extract,
    extract_default,
    parse_episode_number,
    parse_leading_number,
    compile_custom_pattern,
    PatternError,
    _compile_patterns,
)
from core.models_fs import NamingMode


class TestClassify:
    """Tests for classify()."""

    @pytest.mark.parametrize(
        "filename",
        [
            "Show - Special 01.mkv",
            "show SPECIAL.mkv",
            "Show OVA.mkv",
            "Show ova 2.mkv",
            "Show Extra.mkv",
            "Show - Bonus Clip.mkv",
            "Show SP01.mkv",
            "Show sp2.mkv",
        ],
    )
    def test_special_markers(self, filename):
        """Any marker, in any case, makes the file a special."""
        assert classify(filename) is True

    @pytest.mark.parametrize(
        "filename",
        [
            "Show - 01.mkv",
            "Show.S01E05.720p.mkv",
            "Show - Episode 12.mkv",
            "Spring Show - 03.mkv",
            "Show SP.mkv",
        ],
    )
    def test_regular_episodes(self, filename):
        """Filenames without markers are regular episodes."""
        assert classify(filename) is False

    def test_special_with_episode_number(self):
        """A special can still carry an episode number."""
        assert classify("Show SP01.mkv") is True
        assert extract("Show SP01.mkv") == 1

    def test_broken_pattern_is_skipped(self):
        """Patterns that fail to compile are left out, the rest still compile."""
        compiled = _compile_patterns([("broken", r"([0-9]+"), ("ok", r"OVA")], re.IGNORECASE)

        assert [name for name, _ in compiled] == ["ok"]


class TestExtractDefault:
    """Tests for the built-in pattern cascade."""

    @pytest.mark.parametrize(
        "filename,expected",
        [
            ("Show - Episode 12.mkv", 12),
            ("Show.E07.mkv", 7),
            ("Show S2 - 10.mkv", 10),
            ("Show SP3.mkv", 3),
            ("Show - 5.mkv", 5),
            ("Show Ep 3.mkv", 3),
            ("Show Ep12.mkv", 12),
            ("Show.S01E05.720p.mkv", 5),
            ("Show S2 08.mkv", 8),
            ("[Group] Show 07 [1080p].mkv", 7),
            ("Show - 123.mkv", 123),
            ("Show - 7", 7),
        ],
    )
    def test_cascade(self, filename, expected):
        """Each cascade pattern yields its episode number."""
        assert extract(filename) == expected

    def test_not_found(self):
        """No pattern and no isolated pair means absent, not zero."""
        assert extract("RandomName.mkv") is None

    def test_first_pattern_wins(self):
        """The cascade stops at the first usable match."""
        assert extract("Show Episode 3 - 12.mkv") == 3

    def test_single_digit_padding_keeps_value(self):
        """Padding single digits does not change the number."""
        assert extract("Show - 5.mkv") == 5
        assert extract("Show - 05.mkv") == 5

    def test_two_digit_fallback(self):
        """An isolated two-digit run is used when the cascade finds nothing."""
        assert extract("Show_12_v2.mkv") == 12

    def test_fallback_skips_three_digit_runs(self):
        """Pairs inside longer digit runs are not isolated."""
        assert extract("Show_123_45.mkv") == 45

    def test_fallback_uses_first_pair_only(self):
        """A leading "00" pair is not skipped in favour of a later pair."""
        assert extract("Show_00_12.mkv") is None

    def test_three_digit_number_without_marker(self):
        """A bare three-digit number matches neither the cascade nor the fallback."""
        assert extract("Show 123.mkv") is None

    def test_year_is_not_an_episode(self):
        """Four-digit runs contain no isolated pair."""
        assert extract("Show.2019.mkv") is None

    def test_zero_is_never_emitted(self):
        """A zero match is not usable and nothing else matches."""
        assert extract("Show - Episode 0.mkv") is None

    def test_zero_falls_through_to_later_pattern(self):
        """A zero match lets later patterns supply the number."""
        assert extract_default("Show Episode 0 - 04.mkv") == 4

    def test_cascade_is_case_sensitive(self):
        """Lower-case markers are not cascade markers."""
        assert extract("show episode 100.mkv") is None
        assert extract("Show Episode 100.mkv") == 100

    def test_default_mode_object(self):
        """An explicit default mode runs the same cascade."""
        assert extract("Show.E07.mkv", NamingMode()) == 7


class TestExtractCustom:
    """Tests for custom pattern mode."""

    def test_second_group_wins(self):
        """Season-Episode convention: group 2 is the episode."""
        mode = NamingMode(r"S([0-9]+)E([0-9]+)")

        assert extract("Show S01E09.mkv", mode) == 9

    def test_single_group(self):
        """With one group, it is the episode."""
        assert extract("Show Episode 4.mkv", NamingMode(r"Episode ([0-9]+)")) == 4

    def test_optional_second_group_not_participating(self):
        """Group 1 is used when group 2 does not participate."""
        mode = NamingMode(r"- ([0-9]+)(?:v([0-9]+))?")

        assert extract("Show - 07.mkv", mode) == 7
        assert extract("Show - 07v2.mkv", mode) == 2

    def test_no_group(self):
        """A pattern without groups never yields an episode."""
        assert extract("Show 12.mkv", NamingMode(r"Show")) is None

    def test_no_match(self):
        """No match means absent."""
        assert extract("Show 12.mkv", NamingMode(r"Episode ([0-9]+)")) is None

    def test_non_numeric_group(self):
        """A captured word is not an episode number."""
        assert extract("Show Pilot.mkv", NamingMode(r"Show (\w+)")) is None

    def test_group_with_leading_space(self):
        """Whitespace at the start of the group is ignored."""
        assert extract("Show Episode 12.mkv", NamingMode(r"Episode( [0-9]+)")) == 12

    def test_group_with_trailing_text(self):
        """Digits at the start of the group are used, the rest is ignored."""
        assert extract("Show 12v2.mkv", NamingMode(r"([0-9]+v[0-9])")) == 12

    def test_zero_group(self):
        assert extract("Show Episode 00.mkv", NamingMode(r"Episode ([0-9]+)")) is None

    def test_digit_class_shorthand(self):
        """Python regex syntax such as \\d is accepted."""
        mode = NamingMode(r"Season (\d+)-Episode (\d+)")

        assert extract("Show Season 2-Episode 14.mkv", mode) == 14

    def test_invalid_pattern_raises(self):
        """Compile failures are configuration errors, not 'not found'."""
        with pytest.raises(PatternError, match="Error compiling custom pattern"):
            extract("Show S01E09.mkv", NamingMode(r"S([0-9]+E([0-9]+)"))

    def test_empty_pattern_raises(self):
        """An empty custom pattern is rejected."""
        with pytest.raises(PatternError):
            compile_custom_pattern("")

    def test_long_pattern_raises(self):
        """Patterns must stay below the maximum length."""
        with pytest.raises(PatternError):
            compile_custom_pattern("a" * 256)

    def test_pattern_error_is_value_error(self):
        """Callers can catch PatternError as ValueError."""
        assert issubclass(PatternError, ValueError)


class TestParseEpisodeNumber:
    """Tests for parse_episode_number()."""

    def test_plain_digits(self):
        assert parse_episode_number("09") == 9
        assert parse_episode_number("123") == 123

    def test_rejects_zero_and_missing(self):
        assert parse_episode_number("00") is None
        assert parse_episode_number(None) is None
        assert parse_episode_number("") is None

    def test_rejects_non_decimal(self):
        assert parse_episode_number("1a") is None
        assert parse_episode_number("²") is None


class TestParseLeadingNumber:
    """Tests for parse_leading_number()."""

    def test_leading_digits(self):
        assert parse_leading_number(" 12") == 12
        assert parse_leading_number("12v2") == 12
        assert parse_leading_number("007") == 7

    def test_no_leading_digits(self):
        assert parse_leading_number("v2") is None
        assert parse_leading_number("") is None
        assert parse_leading_number(None) is None
        assert parse_leading_number(" 0x") is None
