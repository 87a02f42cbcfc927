"""Tests for document number formatting and parsing."""

import pytest

from docseq.core.modules.numbering.utils import (
    build_document_number,
    format_document_number,
    normalize_affix,
    parse_document_number,
)
from docseq.errors import InvalidKeyError, InvalidValueError, ParseError, ValidationError


class TestFormatDocumentNumber:
    """Tests for format_document_number function."""

    def test_pads_to_width(self):
        """Test that sequences are zero-padded to the default width of 5."""
        assert format_document_number("MO", 42) == "MO00042"
        assert format_document_number("LOT", 3, 5) == "LOT00003"
        assert format_document_number("PO", 1) == "PO00001"

    def test_custom_width(self):
        """Test non-default widths."""
        assert format_document_number("CO", 7, 3) == "CO007"
        assert format_document_number("CO", 7, 1) == "CO7"

    def test_overflow_is_not_truncated(self):
        """Test that sequences wider than the padding are kept whole."""
        assert format_document_number("PO", 123456, 5) == "PO123456"
        assert format_document_number("MO", 99999, 5) == "MO99999"
        assert format_document_number("MO", 100000, 5) == "MO100000"

    def test_affix_appended_after_sequence(self):
        """Test that a customer affix follows the padded number."""
        assert format_document_number("CO", 42, 5, "ACME") == "CO00042ACME"
        assert format_document_number("CO", 42, 5, "  ACME ") == "CO00042ACME"
        assert format_document_number("CO", 42, 5, "") == "CO00042"

    def test_invalid_prefix(self):
        """Test that malformed prefixes are rejected."""
        with pytest.raises(InvalidKeyError):
            format_document_number("", 1)
        with pytest.raises(InvalidKeyError):
            format_document_number("M0", 1)
        with pytest.raises(InvalidKeyError):
            format_document_number("1MO", 1)

    def test_invalid_sequence_and_width(self):
        """Test that negative sequences and non-positive widths are rejected."""
        with pytest.raises(InvalidValueError):
            format_document_number("MO", -1)
        with pytest.raises(InvalidValueError):
            format_document_number("MO", 1, 0)
        with pytest.raises(InvalidValueError):
            format_document_number("MO", True)  # type: ignore[arg-type]


class TestParseDocumentNumber:
    """Tests for parse_document_number function."""

    def test_parses_prefix_and_sequence(self):
        """Test a plain document number."""
        number = parse_document_number("MO00042")
        assert number.prefix == "MO"
        assert number.sequence == 42
        assert number.width == 5
        assert number.affix == ""

    def test_parses_overflowed_number(self):
        """Test numbers longer than the usual width."""
        number = parse_document_number("PO123456")
        assert number.prefix == "PO"
        assert number.sequence == 123456

    def test_parses_affix(self):
        """Test that a trailing customer affix is split off."""
        number = parse_document_number("CO00042ACME")
        assert (number.prefix, number.sequence, number.affix) == ("CO", 42, "ACME")
        assert number.formatted == "CO00042ACME"

    def test_surrounding_whitespace_ignored(self):
        """Test that surrounding whitespace is stripped."""
        assert parse_document_number("  LOT00003 ").sequence == 3

    @pytest.mark.parametrize(
        "value", ["", "   ", "MO", "00042", "MO-", "MO 00042", "MO00042 X", "42MO", "MO\u0664\u0662", "MO\uff14\uff12"]
    )
    def test_malformed_input_raises(self, value):
        """Test that malformed input raises instead of returning a default."""
        with pytest.raises(ParseError):
            parse_document_number(value)

    def test_parse_error_is_validation_error(self):
        """Test that ParseError is reported to users like other validation errors."""
        with pytest.raises(ValidationError):
            parse_document_number("not a number")

    @pytest.mark.parametrize(
        ("prefix", "sequence", "width"),
        [("MO", 1, 5), ("PO", 123456, 5), ("LOT", 0, 3), ("CO", 42, 8), ("Batch_", 9, 1)],
    )
    def test_round_trip(self, prefix, sequence, width):
        """Test that parsing a formatted number gives back prefix and sequence."""
        number = parse_document_number(format_document_number(prefix, sequence, width))
        assert (number.prefix, number.sequence) == (prefix, sequence)


class TestBuildDocumentNumber:
    """Tests for build_document_number and normalize_affix."""

    def test_build_returns_model(self):
        """Test that the model exposes the formatted string."""
        number = build_document_number("MO", 42)
        assert number.model_dump() == {"prefix": "MO", "sequence": 42, "width": 5, "affix": "", "formatted": "MO00042"}

    def test_normalize_affix(self):
        """Test affix normalization."""
        assert normalize_affix(None) == ""
        assert normalize_affix("   ") == ""
        assert normalize_affix(" X1 ") == "X1"

    def test_affix_must_start_with_letter(self):
        """Test that affixes that would merge into the sequence are rejected."""
        with pytest.raises(InvalidValueError):
            normalize_affix("1A")
        with pytest.raises(InvalidValueError):
            normalize_affix("A B")
