"""
Tests for general utility helpers.

Tests cover:
- is_empty predicate
- Scalar/sequence normalisation
- Enum value extraction
"""

import pytest
from enum import Enum

from core.utils import enum_to_value, is_empty, is_sequence, to_list


class Color(str, Enum):
    rojo = "rojo"


class TestIsEmpty:
    """Tests for is_empty."""

    @pytest.mark.parametrize("value", [None, "", b"", [], (), {}, set()])
    def test_empty_values(self, value):
        """Test empty values."""
        assert is_empty(value) is True

    @pytest.mark.parametrize("value", [0, False, 0.0, "a", [None], {"a": 1}, object()])
    def test_non_empty_values(self, value):
        """Test values with content, numbers and booleans."""
        assert is_empty(value) is False


class TestToList:
    """Tests for to_list and is_sequence."""

    def test_scalar_wrapped(self):
        """Test scalars become single-element lists."""
        assert to_list(5) == [5]
        assert to_list("abc") == ["abc"]
        assert to_list(None) == [None]

    def test_sequences_copied(self):
        """Test sequences become new lists."""
        original = [1, 2]
        result = to_list(original)

        assert result == [1, 2]
        assert result is not original
        assert to_list((1, 2)) == [1, 2]

    def test_strings_are_not_sequences(self):
        """Test strings count as scalars."""
        assert is_sequence("abc") is False
        assert is_sequence({"a": 1}) is False
        assert is_sequence({1}) is True


class TestEnumToValue:
    """Tests for enum_to_value."""

    def test_enum(self):
        """Test enums are unwrapped."""
        assert enum_to_value(Color.rojo) == "rojo"

    def test_plain_value(self):
        """Test other values pass through."""
        assert enum_to_value(3) == 3
