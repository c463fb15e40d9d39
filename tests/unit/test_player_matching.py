"""
Unit tests for player name normalization and similarity scoring.

Tests the building blocks of name matching: turning typed names into a
canonical form, and scoring how close two names are.
"""

import pytest

from dinkrank.players.aliases import extract_last_name, normalize_name, parse_name_list
from dinkrank.players.similarity import ratio, token_set_ratio


class TestNormalizeName:
    """Tests for name normalization."""

    def test_lowercase(self):
        """Test that names are lowercased."""
        assert normalize_name("Francisco CASTILLO") == "francisco castillo"

    def test_remove_accents(self):
        """Test accent removal."""
        assert normalize_name("José Núñez") == "jose nunez"
        assert normalize_name("Jiří Veselý") == "jiri vesely"

    def test_diacritic_and_case_insensitive(self):
        assert normalize_name("José Núñez") == normalize_name("Jose Nunez") == normalize_name("JOSE NUNEZ")

    def test_punctuation_becomes_space(self):
        """Test . , ' ’ - split words."""
        assert normalize_name("Mary-Jane O'Brien") == "mary jane brien"
        assert normalize_name("D’Angelo Russell") == "angelo russell"
        assert normalize_name("Castillo,Francisco") == "castillo francisco"

    def test_initials_dropped(self):
        """Test single-character tokens are removed."""
        assert normalize_name("J. Smith") == "smith"
        assert normalize_name("Smith J") == "smith"

    def test_only_initials(self):
        """Test a name made only of initials normalizes to nothing."""
        assert normalize_name("J. K.") == ""

    def test_whitespace_cleanup(self):
        """Test multiple spaces are collapsed."""
        assert normalize_name("Big    Show") == "big show"
        assert normalize_name("  Big Show\t") == "big show"

    def test_empty_string(self):
        """Test empty string handling."""
        assert normalize_name("") == ""
        assert normalize_name("   ") == ""
        assert normalize_name(None) == ""

    @pytest.mark.parametrize("name", [
        "José Núñez",
        "Mary-Jane O'Brien",
        "J. K. Rowling",
        "  BIG   show ",
        "",
        "a.b.c",
    ])
    def test_idempotent(self, name):
        once = normalize_name(name)
        assert normalize_name(once) == once


class TestExtractLastName:
    """Tests for last name extraction."""

    def test_simple_name(self):
        assert extract_last_name("Francisco Castillo") == "castillo"

    def test_hyphenated_name(self):
        assert extract_last_name("Anna-Lena Friedsam") == "friedsam"

    def test_single_name(self):
        assert extract_last_name("Madonna") == "madonna"

    def test_empty(self):
        assert extract_last_name("") == ""
        assert extract_last_name("J.") == ""


class TestParseNameList:
    """Tests for splitting a pasted list of names."""

    def test_comma_separated(self):
        assert parse_name_list("Big Show, Francisco Castillo") == ["Big Show", "Francisco Castillo"]

    def test_mixed_separators(self):
        assert parse_name_list("Ann Lee|Bob Ray\nCara Diaz,Dan Eve") == [
            "Ann Lee", "Bob Ray", "Cara Diaz", "Dan Eve",
        ]

    def test_empty_entries_dropped(self):
        assert parse_name_list(" ,\n\n| Big Show ,, ") == ["Big Show"]

    def test_empty(self):
        assert parse_name_list("") == []
        assert parse_name_list(None) == []


class TestRatio:
    """Tests for edit-distance similarity."""

    def test_identical(self):
        assert ratio("castillo", "castillo") == 100

    def test_both_empty(self):
        assert ratio("", "") == 100

    def test_empty_vs_non_empty(self):
        assert ratio("", "castillo") == 0
        assert ratio("castillo", "") == 0

    def test_single_typo(self):
        # one insertion over eight characters
        assert ratio("castilo", "castillo") == 88

    def test_classic_example(self):
        assert ratio("kitten", "sitting") == 57

    def test_rounds_half_up(self):
        # three substitutions over eight characters is exactly 62.5
        assert ratio("abcdefgh", "abcdexyz") == 63

    def test_symmetric(self):
        assert ratio("big show", "big shaw") == ratio("big shaw", "big show")


class TestTokenSetRatio:
    """Tests for word-set similarity."""

    def test_word_order_ignored(self):
        assert token_set_ratio("castillo francisco", "francisco castillo") == 100

    def test_extra_name_rewarded(self):
        # every word of the first name appears in the second
        assert token_set_ratio("castillo francisco", "castillo francisco jose") == 100

    def test_duplicate_words_collapsed(self):
        assert token_set_ratio("big big show", "show big") == 100

    def test_misspelling(self):
        assert token_set_ratio("francsco castilo", "francisco castillo") == 89

    def test_different_players(self):
        assert token_set_ratio("big show", "francisco castillo") < 50

    def test_both_empty(self):
        assert token_set_ratio("", "") == 100

    @pytest.mark.parametrize("a, b", [
        ("francsco castilo", "francisco castillo"),
        ("maria lopez", "maria elena lopez"),
        ("big show", "show big man"),
        ("ann lee", "bob ray"),
        ("", "big show"),
    ])
    def test_symmetric(self, a, b):
        assert token_set_ratio(a, b) == token_set_ratio(b, a)
