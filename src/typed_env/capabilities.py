"""Capabilities — how user types join the conversion dispatch.

The native kinds cover strings, booleans and numbers.  Anything richer
(a URL, a duration, a ``host:port`` pair) brings its own conversion by
implementing one or both of these methods:

- ``from_text(text)`` — a classmethod that builds an instance from the
  raw string, raising on bad input.
- ``to_text()`` — an instance method returning the canonical string.

No registration is needed: the decoder and encoder check for the method
structurally, so any class with the right method takes part.  Whatever
the method returns or raises is passed back to the caller unchanged.

Example::

    @dataclass
    class LogFormat:
        format: str
        prefix: str

        @classmethod
        def from_text(cls, text: str) -> "LogFormat":
            fmt, _, prefix = text.partition(",")
            return cls(format=fmt, prefix=prefix)

        def to_text(self) -> str:
            return f"{self.format},{self.prefix}"
"""

from typing import Protocol, Self, runtime_checkable


@runtime_checkable
class TextDecodable(Protocol):
    """A type that can construct itself from a raw string."""

    @classmethod
    def from_text(cls, text: str) -> Self:
        """Build an instance from *text*, raising if it is invalid."""
        ...


@runtime_checkable
class TextEncodable(Protocol):
    """A value that can render itself as a canonical string."""

    def to_text(self) -> str:
        """Return the canonical string form of this value."""
        ...
