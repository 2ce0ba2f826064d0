"""Encoder — turn a typed value into its canonical string.

This is the decoder run backwards, with the same dispatch order:

1. **Scalar or list of scalars** — formatted with the same grammar the
   decoder parses, lists joined with the same delimiter.
2. **Capability** — a value with a ``to_text`` method.
3. **Unsupported** — anything else.

Without an explicit target the kind comes from the value's own type
(``True`` → ``bool``, ``10`` → ``int``).  Either way the formatted text is
parsed back with that kind before it is returned, which both enforces
range limits (``300`` is no ``int8``, ``2**64`` is no ``int``) and
guarantees the text will round-trip.
"""

from typing import Any

from typed_env.capabilities import TextEncodable
from typed_env.decoder import decode
from typed_env.errors import EncodeError, UnsupportedTypeError
from typed_env.grammar import format_scalar, join
from typed_env.kinds import Kind, ListOf, list_kind, native_kind, scalar_kind

ENCODE_CAPABILITY = "to_text"


def encode(value: object, target: object = None) -> str:
    """Convert *value* into the string stored in the environment.

    Args:
        value: The value to encode.
        target: Optional kind or list descriptor to encode *value* as.

    Returns:
        The canonical text.

    Raises:
        EncodeError: If a native value has no canonical text form.
        ParseError: If *value* is out of range for its kind.
        AggregateParseError: If list elements are out of range for their kind.
        UnsupportedTypeError: If *value* cannot be encoded at all.

    Anything raised by a ``to_text`` implementation propagates as is.

    """
    if target is not None:
        return _encode_as(value, target)

    kind = native_kind(value)
    if kind is not None:
        return _encode_as(value, kind)

    if type(value) in (list, tuple):
        element = _element_kind(value)  # type: ignore[arg-type]
        return "" if element is None else _encode_as(value, ListOf(element))

    return _encode_capability(value, type(value))


def _encode_as(value: object, target: object) -> str:
    kind = scalar_kind(target)
    if kind is not None:
        text = format_scalar(kind, value)
        decode(text, kind)
        return text

    element = list_kind(target)
    if element is not None:
        if type(value) not in (list, tuple):
            msg = f"Cannot encode {type(value).__name__} value as a list"
            raise EncodeError(msg)
        text = join([format_scalar(element, item) for item in value])  # type: ignore[attr-defined]
        if text:
            decode(text, target)
        return text

    return _encode_capability(value, target)


def _element_kind(values: list[Any] | tuple[Any, ...]) -> Kind | None:
    """Return the one native kind shared by *values*, or None if empty."""
    kinds: set[Kind] = set()
    for item in values:
        kind = native_kind(item)
        if kind is None:
            msg = f"Cannot encode {type(item).__name__} list element; use str, bool, int, float or complex"
            raise EncodeError(msg)
        kinds.add(kind)
    if len(kinds) > 1:
        names = ", ".join(sorted(kinds))
        msg = f"List elements must share one kind, got {names}"
        raise EncodeError(msg)
    return kinds.pop() if kinds else None


def _encode_capability(value: object, target: object) -> str:
    if not isinstance(value, TextEncodable):
        raise UnsupportedTypeError(target, ENCODE_CAPABILITY)
    text = value.to_text()
    if not isinstance(text, str):
        msg = f"{ENCODE_CAPABILITY}() returned {type(text).__name__}, not str"
        raise EncodeError(msg)
    return text
