"""Tests for the parse and format grammar of each native kind.

Every kind has one textual grammar.  Parsing must reject anything outside
it (including whitespace and digit underscores); formatting must produce
the canonical text that parses back to the same value.
"""

import math
import struct

import pytest

from typed_env.errors import EncodeError, ParseError, ParseReason
from typed_env.grammar import DELIMITER, format_scalar, join, parse_scalar, split
from typed_env.kinds import Kind

INT8_MAX = 127
INT8_MIN = -128
UINT8_MAX = 255
INT64_MAX = 2**63 - 1
UINT64_MAX = 2**64 - 1


def _single(value: float) -> float:
    """Round a float to single precision, as the FLOAT32 kind does."""
    return struct.unpack("<f", struct.pack("<f", value))[0]


# ---------------------------------------------------------------------------
# Booleans
# ---------------------------------------------------------------------------


class TestBool:
    """Verify the boolean grammar."""

    @pytest.mark.parametrize("text", ["1", "t", "T", "true", "True", "TRUE", "yes", "on"])
    def test_true_words(self, text: str) -> None:
        """Truthy words should parse as True, ignoring case."""
        assert parse_scalar(Kind.BOOL, text) is True

    @pytest.mark.parametrize("text", ["0", "f", "F", "false", "False", "no", "off"])
    def test_false_words(self, text: str) -> None:
        """Falsy words should parse as False, ignoring case."""
        assert parse_scalar(Kind.BOOL, text) is False

    def test_malformed(self) -> None:
        """An unknown word should fail naming the text and the grammar."""
        with pytest.raises(ParseError) as info:
            parse_scalar(Kind.BOOL, "truth")
        assert info.value.text == "truth"
        assert info.value.kind is Kind.BOOL
        assert info.value.reason is ParseReason.SYNTAX
        assert str(info.value) == 'parse bool: parsing "truth": invalid syntax'

    def test_format(self) -> None:
        """Booleans should format as true / false."""
        assert format_scalar(Kind.BOOL, True) == "true"  # noqa: FBT003
        assert format_scalar(Kind.BOOL, False) == "false"  # noqa: FBT003


# ---------------------------------------------------------------------------
# Integers
# ---------------------------------------------------------------------------


class TestIntegers:
    """Verify signed and unsigned integer grammars."""

    def test_signed(self) -> None:
        """Signed kinds should accept an optional sign."""
        assert parse_scalar(Kind.INT, "10") == 10  # noqa: PLR2004
        assert parse_scalar(Kind.INT, "-10") == -10  # noqa: PLR2004
        assert parse_scalar(Kind.INT, "+10") == 10  # noqa: PLR2004

    def test_signed_bounds(self) -> None:
        """The extremes of a width should parse; one beyond should not."""
        assert parse_scalar(Kind.INT8, "127") == INT8_MAX
        assert parse_scalar(Kind.INT8, "-128") == INT8_MIN
        with pytest.raises(ParseError) as info:
            parse_scalar(Kind.INT8, "128")
        assert info.value.reason is ParseReason.RANGE

    def test_int_is_64_bits(self) -> None:
        """INT should hold exactly 64-bit values."""
        assert parse_scalar(Kind.INT, str(INT64_MAX)) == INT64_MAX
        with pytest.raises(ParseError):
            parse_scalar(Kind.INT, str(INT64_MAX + 1))

    def test_unsigned_bounds(self) -> None:
        """Unsigned kinds should hold zero up to 2**bits - 1."""
        assert parse_scalar(Kind.UINT8, "255") == UINT8_MAX
        assert parse_scalar(Kind.UINT, str(UINT64_MAX)) == UINT64_MAX
        with pytest.raises(ParseError):
            parse_scalar(Kind.UINT8, "256")

    @pytest.mark.parametrize("text", ["-1", "+1"])
    def test_unsigned_rejects_sign(self, text: str) -> None:
        """Unsigned kinds should not accept any sign."""
        with pytest.raises(ParseError) as info:
            parse_scalar(Kind.UINT16, text)
        assert info.value.reason is ParseReason.SYNTAX

    @pytest.mark.parametrize("text", ["", " 10", "10 ", "1_000", "0x10", "1.0", "ten"])
    def test_rejects_non_decimal(self, text: str) -> None:
        """Only plain base-10 digits should parse."""
        with pytest.raises(ParseError):
            parse_scalar(Kind.INT32, text)

    def test_format(self) -> None:
        """Integers should format in base 10."""
        assert format_scalar(Kind.INT, -42) == "-42"
        assert format_scalar(Kind.UINT64, UINT64_MAX) == str(UINT64_MAX)

    def test_format_rejects_bool(self) -> None:
        """A bool is not an integer value for encoding."""
        with pytest.raises(EncodeError):
            format_scalar(Kind.INT, True)  # noqa: FBT003


# ---------------------------------------------------------------------------
# Floats
# ---------------------------------------------------------------------------


class TestFloats:
    """Verify the float grammar in both precisions."""

    @pytest.mark.parametrize(
        ("text", "value"),
        [("10.0", 10.0), ("10", 10.0), ("-2.5", -2.5), (".5", 0.5), ("1e3", 1000.0), ("4.2E-1", 0.42)],
    )
    def test_float64(self, text: str, value: float) -> None:
        """Decimal and scientific notation should parse."""
        assert parse_scalar(Kind.FLOAT64, text) == value

    def test_special_values(self) -> None:
        """Infinity and NaN should parse, ignoring case."""
        assert parse_scalar(Kind.FLOAT64, "inf") == math.inf
        assert parse_scalar(Kind.FLOAT64, "-Infinity") == -math.inf
        assert math.isnan(parse_scalar(Kind.FLOAT64, "NaN"))

    def test_float64_overflow(self) -> None:
        """A literal too large for a double is a range error."""
        with pytest.raises(ParseError) as info:
            parse_scalar(Kind.FLOAT64, "1e400")
        assert info.value.reason is ParseReason.RANGE

    def test_float32_rounds(self) -> None:
        """FLOAT32 should round to single precision."""
        assert parse_scalar(Kind.FLOAT32, "0.1") == _single(0.1)
        assert parse_scalar(Kind.FLOAT32, "10.0") == 10.0  # noqa: PLR2004

    def test_float32_overflow(self) -> None:
        """A value beyond the single-precision range is a range error."""
        with pytest.raises(ParseError) as info:
            parse_scalar(Kind.FLOAT32, "1e39")
        assert info.value.reason is ParseReason.RANGE

    @pytest.mark.parametrize("text", ["", "1,5", " 1.5", "1_0.5", "1.5f", "e5", "--1"])
    def test_rejects_malformed(self, text: str) -> None:
        """Anything outside the grammar should fail."""
        with pytest.raises(ParseError):
            parse_scalar(Kind.FLOAT64, text)

    @pytest.mark.parametrize(
        ("value", "text"),
        [(10.0, "10"), (4.2, "4.2"), (-0.5, "-0.5"), (1e16, "1e+16"), (math.inf, "inf"), (-math.inf, "-inf")],
    )
    def test_format_float64(self, value: float, text: str) -> None:
        """Floats should format in their shortest form, without a trailing .0."""
        assert format_scalar(Kind.FLOAT64, value) == text

    def test_format_nan(self) -> None:
        """NaN should format as nan."""
        assert format_scalar(Kind.FLOAT64, math.nan) == "nan"

    def test_format_float32_is_shortest(self) -> None:
        """A float32 should format as the shortest text that round-trips."""
        assert format_scalar(Kind.FLOAT32, _single(0.1)) == "0.1"
        assert format_scalar(Kind.FLOAT32, 10.0) == "10"

    def test_format_accepts_int(self) -> None:
        """An int value should format as a float."""
        assert format_scalar(Kind.FLOAT64, 3) == "3"

    def test_format_float32_overflow(self) -> None:
        """A double too large for single precision cannot be formatted as one."""
        with pytest.raises(ParseError):
            format_scalar(Kind.FLOAT32, 1e300)


# ---------------------------------------------------------------------------
# Complex numbers
# ---------------------------------------------------------------------------


class TestComplex:
    """Verify the complex grammar."""

    @pytest.mark.parametrize(
        ("text", "value"),
        [
            ("420+69i", complex(420, 69)),
            ("1-2i", complex(1, -2)),
            ("(1+2i)", complex(1, 2)),
            ("3i", complex(0, 3)),
            ("-3i", complex(0, -3)),
            ("5", complex(5, 0)),
            ("1+i", complex(1, 1)),
            ("1e3+2e-3i", complex(1000, 0.002)),
            ("2+3j", complex(2, 3)),
        ],
    )
    def test_parse(self, text: str, value: complex) -> None:
        """The a+bi form and its short forms should parse."""
        assert parse_scalar(Kind.COMPLEX128, text) == value

    def test_complex64_parts_are_single(self) -> None:
        """COMPLEX64 parts should be rounded to single precision."""
        value = parse_scalar(Kind.COMPLEX64, "0.1+0.1i")
        assert value == complex(_single(0.1), _single(0.1))

    @pytest.mark.parametrize("text", ["", "i+1", "1+2", "1+xi", "(1+2i", "1 + 2i"])
    def test_rejects_malformed(self, text: str) -> None:
        """Malformed complex text should fail with the full input."""
        with pytest.raises(ParseError) as info:
            parse_scalar(Kind.COMPLEX128, text)
        assert info.value.text == text

    def test_format(self) -> None:
        """Complex values should format as a+bi."""
        assert format_scalar(Kind.COMPLEX128, complex(420, 69)) == "420+69i"
        assert format_scalar(Kind.COMPLEX128, complex(1.5, -2)) == "1.5-2i"
        assert format_scalar(Kind.COMPLEX128, 3) == "3+0i"

    def test_format_parses_back(self) -> None:
        """Formatted complex values should parse back to the same value."""
        value = complex(-1e-7, 2.5e20)
        assert parse_scalar(Kind.COMPLEX128, format_scalar(Kind.COMPLEX128, value)) == value


# ---------------------------------------------------------------------------
# Strings and lists
# ---------------------------------------------------------------------------


class TestStringAndLists:
    """Verify the string identity grammar and delimiter handling."""

    def test_string_is_identity(self) -> None:
        """Strings should pass through untouched, whitespace included."""
        assert parse_scalar(Kind.STRING, "  spaced  ") == "  spaced  "
        assert format_scalar(Kind.STRING, "text") == "text"

    def test_format_string_rejects_other_types(self) -> None:
        """Only str values should format as strings."""
        with pytest.raises(EncodeError):
            format_scalar(Kind.STRING, 1)

    def test_delimiter_is_comma(self) -> None:
        """The list delimiter should be a comma."""
        assert DELIMITER == ","

    def test_split_keeps_empty_segments(self) -> None:
        """Splitting should keep empty segments and not trim."""
        assert split("a,,b") == ["a", "", "b"]
        assert split(" a , b") == [" a ", " b"]

    def test_split_empty_is_one_segment(self) -> None:
        """The empty string should split into one empty segment."""
        assert split("") == [""]

    def test_join(self) -> None:
        """Joining should use the delimiter."""
        assert join(["1", "2"]) == "1,2"
        assert join([]) == ""

    def test_join_rejects_delimiter_in_element(self) -> None:
        """An element containing the delimiter would not round-trip."""
        with pytest.raises(EncodeError, match="delimiter"):
            join(["a,b", "c"])
