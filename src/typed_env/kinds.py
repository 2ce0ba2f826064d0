"""Kinds — the closed set of types the library converts natively.

An environment variable is always a string.  To hand a caller something
more useful, we need to know what they asked for.  Callers can describe
that target in several ways:

- a ``Kind`` member (``Kind.INT8``, ``Kind.FLOAT32``, ...) — the precise
  form, covering every bit width;
- a builtin type — ``str``, ``bool``, ``int``, ``float``, ``complex``;
- a list descriptor — ``ListOf(Kind.INT16)`` or simply ``list[int]``;
- any class that knows how to build itself from text (see
  ``typed_env.capabilities``).

This module normalises the first three into a ``Kind`` or a list element
``Kind`` and leaves everything else to the capability check.

Key design properties:
    - **Identity, not subclassing** — ``int`` maps to ``Kind.INT`` but a
      subclass of ``int`` does not.  A subclass is a user type and must
      bring its own ``from_text``.
    - **StrEnum for kinds** so a kind prints as its grammar name
      (``"int8"``, ``"complex64"``).
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, get_args, get_origin


class Family(StrEnum):
    """Grammar families shared by kinds of different widths."""

    STRING = "string"
    BOOL = "bool"
    SIGNED = "signed"
    UNSIGNED = "unsigned"
    FLOAT = "float"
    COMPLEX = "complex"


class Kind(StrEnum):
    """Every scalar kind the decoder and encoder handle natively.

    ``INT`` and ``UINT`` are 64 bits wide.  Complex kinds are named by
    their total width, so ``COMPLEX64`` holds two 32-bit floats.
    """

    STRING = "string"
    BOOL = "bool"
    INT = "int"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT = "uint"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    COMPLEX64 = "complex64"
    COMPLEX128 = "complex128"

    @property
    def family(self) -> Family:
        """Return the grammar family this kind belongs to."""
        return _FAMILIES[self]

    @property
    def bits(self) -> int:
        """Return the bit width (0 for strings and booleans)."""
        return _BITS[self]


_FAMILIES: dict[Kind, Family] = {
    Kind.STRING: Family.STRING,
    Kind.BOOL: Family.BOOL,
    Kind.INT: Family.SIGNED,
    Kind.INT8: Family.SIGNED,
    Kind.INT16: Family.SIGNED,
    Kind.INT32: Family.SIGNED,
    Kind.INT64: Family.SIGNED,
    Kind.UINT: Family.UNSIGNED,
    Kind.UINT8: Family.UNSIGNED,
    Kind.UINT16: Family.UNSIGNED,
    Kind.UINT32: Family.UNSIGNED,
    Kind.UINT64: Family.UNSIGNED,
    Kind.FLOAT32: Family.FLOAT,
    Kind.FLOAT64: Family.FLOAT,
    Kind.COMPLEX64: Family.COMPLEX,
    Kind.COMPLEX128: Family.COMPLEX,
}

_BITS: dict[Kind, int] = {
    Kind.STRING: 0,
    Kind.BOOL: 0,
    Kind.INT: 64,
    Kind.INT8: 8,
    Kind.INT16: 16,
    Kind.INT32: 32,
    Kind.INT64: 64,
    Kind.UINT: 64,
    Kind.UINT8: 8,
    Kind.UINT16: 16,
    Kind.UINT32: 32,
    Kind.UINT64: 64,
    Kind.FLOAT32: 32,
    Kind.FLOAT64: 64,
    Kind.COMPLEX64: 64,
    Kind.COMPLEX128: 128,
}

_BUILTIN_KINDS: dict[type, Kind] = {
    str: Kind.STRING,
    bool: Kind.BOOL,
    int: Kind.INT,
    float: Kind.FLOAT64,
    complex: Kind.COMPLEX128,
}

_ZERO_VALUES: dict[Family, Any] = {
    Family.STRING: "",
    Family.BOOL: False,
    Family.SIGNED: 0,
    Family.UNSIGNED: 0,
    Family.FLOAT: 0.0,
    Family.COMPLEX: 0j,
}


@dataclass(frozen=True)
class ListOf:
    """Describe a comma-separated list whose elements share one kind.

    Attributes:
        element: The kind of every element.  A builtin type such as
            ``int`` is accepted and normalised to its kind.

    """

    element: Kind

    def __post_init__(self) -> None:
        """Normalise a builtin element type to its kind."""
        kind = scalar_kind(self.element)
        if kind is None:
            msg = f"List elements must be a native scalar kind, got {self.element!r}"
            raise TypeError(msg)
        object.__setattr__(self, "element", kind)

    def __str__(self) -> str:
        """Format as ``list[kind]``."""
        return f"list[{self.element}]"


def scalar_kind(target: object) -> Kind | None:
    """Return the scalar kind *target* names, or None if it names none."""
    if isinstance(target, Kind):
        return target
    if isinstance(target, type):
        return _BUILTIN_KINDS.get(target)
    return None


def list_kind(target: object) -> Kind | None:
    """Return the element kind if *target* describes a list of scalars.

    Both ``ListOf(...)`` and a parametrised ``list[X]`` are recognised.
    A bare ``list`` says nothing about its elements and is not a list
    kind.
    """
    if isinstance(target, ListOf):
        return target.element
    if get_origin(target) is list:
        args = get_args(target)
        if len(args) == 1:
            return scalar_kind(args[0])
    return None


def native_kind(value: object) -> Kind | None:
    """Return the scalar kind of a Python value, matched by exact type."""
    return _BUILTIN_KINDS.get(type(value))


def zero_value(target: object) -> Any:
    """Return the zero value for *target*.

    Native scalars get their empty value and lists get a fresh empty
    list.  Anything else has no meaningful zero, so ``None``.
    """
    kind = scalar_kind(target)
    if kind is not None:
        return _ZERO_VALUES[kind.family]
    if list_kind(target) is not None:
        return []
    return None


def infer_target(fallback: object) -> Any:
    """Work out the target type from a fallback value.

    Scalars map to their builtin type.  A non-empty list maps to
    ``list[X]`` of its first element's type.  Any other object maps to
    its own class, so capability types can be inferred too.

    Raises:
        TypeError: If *fallback* is an empty list (no element to infer from).

    """
    if type(fallback) is list:
        if not fallback:
            msg = "Cannot infer a target type from an empty list fallback"
            raise TypeError(msg)
        return list[type(fallback[0])]  # type: ignore[misc]
    return type(fallback)


def describe(target: object) -> str:
    """Return a short human-readable name for a target descriptor."""
    if isinstance(target, Kind | ListOf):
        return str(target)
    element = list_kind(target)
    if element is not None:
        return f"list[{element}]"
    kind = scalar_kind(target)
    if kind is not None:
        return str(kind)
    if isinstance(target, type):
        return target.__qualname__
    return repr(target)
