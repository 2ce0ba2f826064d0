"""Grammar — locale-free parse and format rules for every native kind.

Each kind has exactly one textual grammar, used in both directions:

- **parse** turns text into a value, raising ``ParseError`` on mismatch.
- **format** turns a value into its *canonical* text — the form that
  parses back to the same value.

The rules are strict on purpose.  Python's own ``int()`` and ``float()``
accept surrounding whitespace and ``1_000``-style underscores; an
environment variable holding ``" 10"`` is far more likely a typo than
intent, so both are rejected here.

Lists are handled by splitting on a fixed ``DELIMITER`` and joining with
the same character, so ``format`` followed by ``parse`` is symmetric.
"""

import math
import re
import struct
from typing import Any

from typed_env.errors import EncodeError, ParseError, ParseReason
from typed_env.kinds import Family, Kind

DELIMITER = ","

_TRUE_WORDS = frozenset({"1", "t", "true", "y", "yes", "on"})
_FALSE_WORDS = frozenset({"0", "f", "false", "n", "no", "off"})

_SIGNED_RE = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_RE = re.compile(r"[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_SPECIAL_FLOAT_RE = re.compile(r"[+-]?(?:inf|infinity|nan)", re.IGNORECASE)

_IMAGINARY_UNITS = ("i", "j")
_SINGLE_BITS = 32
_MAX_FLOAT32_DIGITS = 9


# ---------------------------------------------------------------------------
# Parsing — text → value
# ---------------------------------------------------------------------------


def parse_scalar(kind: Kind, text: str) -> Any:
    """Parse *text* according to *kind*'s grammar.

    Args:
        kind: The target scalar kind.
        text: The raw text, not trimmed.

    Returns:
        A ``str``, ``bool``, ``int``, ``float`` or ``complex``.

    Raises:
        ParseError: If the text is malformed or out of range.

    """
    match kind.family:
        case Family.STRING:
            return text
        case Family.BOOL:
            return _parse_bool(kind, text)
        case Family.SIGNED:
            return _parse_int(kind, text, _SIGNED_RE, signed=True)
        case Family.UNSIGNED:
            return _parse_int(kind, text, _UNSIGNED_RE, signed=False)
        case Family.FLOAT:
            return _parse_float(kind, text, text, kind.bits)
        case Family.COMPLEX:
            return _parse_complex(kind, text)


def split(text: str) -> list[str]:
    """Split a list value into its raw segments.

    Segments are not trimmed and empty segments are kept, so ``""``
    yields ``[""]`` and ``"a,,b"`` yields ``["a", "", "b"]``.
    """
    return text.split(DELIMITER)


def _parse_bool(kind: Kind, text: str) -> bool:
    word = text.lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise ParseError(kind, text)


def _parse_int(kind: Kind, text: str, pattern: re.Pattern[str], *, signed: bool) -> int:
    if pattern.fullmatch(text) is None:
        raise ParseError(kind, text)
    value = int(text)
    if signed:
        low, high = -(1 << (kind.bits - 1)), (1 << (kind.bits - 1)) - 1
    else:
        low, high = 0, (1 << kind.bits) - 1
    if not low <= value <= high:
        raise ParseError(kind, text, ParseReason.RANGE)
    return value


def _parse_float(kind: Kind, text: str, part: str, bits: int) -> float:
    """Parse *part* as a float of the given width.

    *text* is the full input, used in error messages; for complex
    numbers *part* is only the real or imaginary half.
    """
    special = _SPECIAL_FLOAT_RE.fullmatch(part) is not None
    if not special and _FLOAT_RE.fullmatch(part) is None:
        raise ParseError(kind, text)
    value = float(part)
    if math.isinf(value) and not special:
        raise ParseError(kind, text, ParseReason.RANGE)
    if bits == _SINGLE_BITS:
        try:
            value = _to_float32(value)
        except OverflowError:
            raise ParseError(kind, text, ParseReason.RANGE) from None
    return value


def _parse_complex(kind: Kind, text: str) -> complex:
    body = text
    if body.startswith("(") and body.endswith(")"):
        body = body[1:-1]
    part_bits = kind.bits // 2
    if not body.endswith(_IMAGINARY_UNITS):
        return complex(_parse_float(kind, text, body, part_bits), 0.0)

    body = body[:-1]
    cut = _imaginary_start(body)
    real_text, imag_text = body[:cut], body[cut:]
    # A bare unit ("i", "+i", "3-i") means a coefficient of one.
    if imag_text in ("", "+", "-"):
        imag_text += "1"
    real = _parse_float(kind, text, real_text, part_bits) if real_text else 0.0
    imag = _parse_float(kind, text, imag_text, part_bits)
    return complex(real, imag)


def _imaginary_start(body: str) -> int:
    """Return the index where the imaginary half of *body* starts.

    That is the last sign that is not the first character and not an
    exponent sign.  With no such sign the whole body is imaginary.
    """
    for index in range(len(body) - 1, 0, -1):
        if body[index] in "+-" and body[index - 1] not in "eE":
            return index
    return 0


def _to_float32(value: float) -> float:
    """Round *value* to the nearest single-precision float."""
    return struct.unpack("<f", struct.pack("<f", value))[0]


# ---------------------------------------------------------------------------
# Formatting — value → canonical text
# ---------------------------------------------------------------------------


def format_scalar(kind: Kind, value: object) -> str:
    """Format *value* as the canonical text for *kind*.

    Raises:
        EncodeError: If *value* is not a Python value of *kind*'s family.
        ParseError: If a number does not fit in the kind's float precision
            (a float32 overflow, or an int too large for any float).

    """
    match kind.family:
        case Family.STRING if isinstance(value, str):
            return value
        case Family.BOOL if isinstance(value, bool):
            return "true" if value else "false"
        case Family.SIGNED | Family.UNSIGNED if _is_integer(value):
            return str(value)
        case Family.FLOAT if _is_real(value):
            return _format_float(kind, _widen(kind, value, float), kind.bits)
        case Family.COMPLEX if _is_real(value) or isinstance(value, complex):
            return _format_complex(kind, _widen(kind, value, complex))
        case _:
            msg = f"Cannot encode {type(value).__name__} value as {kind}"
            raise EncodeError(msg)


def join(texts: list[str]) -> str:
    """Join formatted list elements with the delimiter.

    Raises:
        EncodeError: If an element contains the delimiter and so would
            not split back into the same elements.

    """
    for text in texts:
        if DELIMITER in text:
            msg = f"List element {text!r} contains the delimiter {DELIMITER!r}"
            raise EncodeError(msg)
    return DELIMITER.join(texts)


def _is_integer(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_real(value: object) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def _widen(kind: Kind, value: Any, convert: type[float] | type[complex]) -> Any:
    """Convert an int or float for formatting; too large is a range error."""
    try:
        return convert(value)
    except OverflowError:
        raise ParseError(kind, str(value), ParseReason.RANGE) from None


def _format_float(kind: Kind, value: float, bits: int) -> str:
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = _shortest_float32(kind, value) if bits == _SINGLE_BITS else repr(value)
    return text.removesuffix(".0")


def _shortest_float32(kind: Kind, value: float) -> str:
    """Return the shortest decimal that rounds back to the same float32."""
    try:
        single = _to_float32(value)
    except OverflowError:
        raise ParseError(kind, repr(value), ParseReason.RANGE) from None
    for digits in range(1, _MAX_FLOAT32_DIGITS + 1):
        candidate = float(f"{single:.{digits}g}")
        if _to_float32(candidate) == single:
            return repr(candidate)
    return repr(single)


def _format_complex(kind: Kind, value: complex) -> str:
    part_bits = kind.bits // 2
    real = _format_float(kind, value.real, part_bits)
    imag = _format_float(kind, value.imag, part_bits)
    sign = "" if imag.startswith("-") else "+"
    return f"{real}{sign}{imag}i"
