"""Tests for text, number and date helpers."""

from datetime import datetime, timezone

import pytest

from review_dashboard.pipeline.text_utils import (
    extract_location,
    format_display_date,
    initials,
    parse_timestamp,
    round_half_up,
    short_property_name,
    slugify,
    to_iso,
)


class TestInitials:
    def test_two_words(self):
        assert initials("Sophie Anderson") == "SA"

    def test_single_word_takes_two_letters(self):
        assert initials("Madonna") == "MA"

    def test_uses_first_and_last_word(self):
        assert initials("Marta Garcia Lopez") == "ML"

    def test_lowercase_is_upper_cased(self):
        assert initials("jane doe") == "JD"

    def test_empty_name(self):
        assert initials("") == "??"

    def test_whitespace_only_name(self):
        assert initials("   ") == "??"

    def test_none(self):
        assert initials(None) == "??"

    def test_single_character_name(self):
        assert initials("X") == "X"


class TestShortPropertyName:
    def test_splits_on_hyphen(self):
        assert short_property_name("2B Shoreditch Heights - Modern Loft") == "2B Shoreditch Heights"

    def test_splits_on_en_dash(self):
        assert short_property_name("Le Marais Studio – Charming Hideaway") == "Le Marais Studio"

    def test_splits_on_em_dash_without_spaces(self):
        assert short_property_name("Kreuzberg Loft—Industrial Chic") == "Kreuzberg Loft"

    def test_no_separator_keeps_name(self):
        assert short_property_name("  Seaside Cottage ") == "Seaside Cottage"

    def test_empty_name_placeholder(self):
        assert short_property_name("") == "Unknown Property"


class TestExtractLocation:
    def test_known_keyword(self):
        assert extract_location("2B Shoreditch Heights - Modern Loft") == "Shoreditch"

    def test_multi_word_keyword(self):
        assert extract_location("Gothic Quarter Retreat - 1BR") == "Gothic Quarter"

    def test_case_insensitive_returns_listing_text(self):
        assert extract_location("flat in kreuzberg") == "kreuzberg"

    def test_unknown_place(self):
        assert extract_location("Seaside Cottage - Cornwall") is None

    def test_keyword_inside_word_does_not_match(self):
        assert extract_location("Parisienne Suite") is None


class TestRoundHalfUp:
    @pytest.mark.parametrize(
        "value,digits,expected",
        [(3.45, 1, 3.5), (4.5, 0, 5.0), (2.5, 0, 3.0), (4.44, 1, 4.4), (3.5, 1, 3.5)],
    )
    def test_rounds_halves_up(self, value, digits, expected):
        assert round_half_up(value, digits) == expected


class TestTimestamps:
    def test_provider_format_is_utc(self):
        parsed = parse_timestamp("2020-08-21 22:45:14")
        assert parsed == datetime(2020, 8, 21, 22, 45, 14, tzinfo=timezone.utc)

    def test_iso_with_z(self):
        parsed = parse_timestamp("2024-01-08T18:30:00Z")
        assert parsed == datetime(2024, 1, 8, 18, 30, tzinfo=timezone.utc)

    def test_offset_converted_to_utc(self):
        parsed = parse_timestamp("2024-01-08T20:30:00+02:00")
        assert parsed == datetime(2024, 1, 8, 18, 30, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value", ["", "yesterday", "21/08/2020", "2020-13-45 00:00:00"])
    def test_unparseable(self, value):
        assert parse_timestamp(value) is None

    def test_display_format(self):
        assert format_display_date(datetime(2020, 8, 1, tzinfo=timezone.utc)) == "1 Aug 2020"

    def test_iso_output(self):
        moment = datetime(2020, 8, 21, 22, 45, 14, tzinfo=timezone.utc)
        assert to_iso(moment) == "2020-08-21T22:45:14.000Z"


def test_slugify():
    assert slugify("Le Marais  Studio") == "le-marais-studio"
