"""Unit tests for string helpers."""

import re

import pytest

from careernavigate.utils.text import clean_name, generate_id, strip_surrounding_quotes


class TestCleanName:
    """Tests for clean_name function."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("Jane Doe", "Jane_Doe"),
            ("Anne-Marie O'Brien", "Anne_Marie_O_Brien"),
            ("R2D2", "R2D2"),
            ("", ""),
        ],
    )
    def test_clean_name(self, value, expected):
        """Test every non-alphanumeric character becomes an underscore."""
        assert clean_name(value) == expected

    def test_non_ascii_letters_replaced(self):
        """Test accented letters count as non-alphanumeric."""
        assert clean_name("Zoë") == "Zo_"


class TestStripSurroundingQuotes:
    """Tests for strip_surrounding_quotes function."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ('"quoted"', "quoted"),
            ("'single'", "single"),
            ('"left only', "left only"),
            ('say "hi" now', 'say "hi" now'),
            ('""', ""),
        ],
    )
    def test_strip_surrounding_quotes(self, value, expected):
        """Test only one leading and one trailing quote are removed."""
        assert strip_surrounding_quotes(value) == expected


class TestGenerateId:
    """Tests for generate_id function."""

    def test_generate_id(self):
        """Test ids are distinct UUID strings."""
        first, second = generate_id(), generate_id()

        assert first != second
        assert re.fullmatch(r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}", first)
