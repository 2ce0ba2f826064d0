"""Errors — everything that can go wrong between a string and a value.

The taxonomy is deliberately small:

- **UnsetError** — the variable is not in the environment at all.  This
  is usually recoverable: the caller's fallback is used instead.
- **ParseError** — the text does not match the target kind's grammar.
- **AggregateParseError** — one or more list elements failed; every
  failure is collected, not just the first.
- **UnsupportedTypeError** — the target is neither a native kind nor
  a type implementing the text capability.
- **EncodeError** — a native value has no canonical text form.
- **EnvAbort** — raised by the ``must_*`` variants to stop the process.

Errors raised by a user's own ``from_text`` / ``to_text`` are not part of
this hierarchy.  They pass through untouched.
"""

from collections.abc import Sequence
from enum import StrEnum

from typed_env.kinds import Kind, describe


class ParseReason(StrEnum):
    """Why a piece of text was rejected."""

    SYNTAX = "invalid syntax"
    RANGE = "value out of range"


class EnvError(Exception):
    """Raise when an environment variable cannot be read or written as typed."""


class UnsetError(EnvError):
    """Raise when a variable is absent from the environment."""

    def __init__(self, key: str) -> None:
        """Create an unset error for *key*."""
        self.key = key
        super().__init__(f"unset env: {key}")


class ParseError(EnvError, ValueError):
    """Raise when text does not match a kind's grammar.

    Attributes:
        kind: The kind whose grammar was attempted.
        text: The offending text, exactly as read.
        reason: Whether the syntax was wrong or the value out of range.

    """

    def __init__(self, kind: Kind, text: str, reason: ParseReason = ParseReason.SYNTAX) -> None:
        """Create a parse error."""
        self.kind = kind
        self.text = text
        self.reason = reason
        super().__init__(f'parse {kind}: parsing "{text}": {reason}')


class AggregateParseError(EnvError, ValueError):
    """Raise when one or more list elements fail to parse.

    Attributes:
        target: The list target being decoded.
        errors: One ``ParseError`` per bad element, in input order.

    """

    def __init__(self, target: object, errors: Sequence[ParseError]) -> None:
        """Create an aggregate error from the individual element errors."""
        self.target = target
        self.errors = tuple(errors)
        details = "; ".join(str(error) for error in self.errors)
        super().__init__(f"parse {describe(target)}: {len(self.errors)} invalid element(s): {details}")


class UnsupportedTypeError(EnvError, TypeError):
    """Raise when a target has neither native support nor the text capability.

    Attributes:
        target: The type that could not be handled.
        capability: The method the type was expected to implement.

    """

    def __init__(self, target: object, capability: str) -> None:
        """Create an unsupported-type error."""
        self.target = target
        self.capability = capability
        super().__init__(f"unsupported type {describe(target)}: does not implement {capability}")


class EncodeError(EnvError, ValueError):
    """Raise when a value cannot be given a canonical text form."""


class EnvAbort(SystemExit):
    """Raise when a ``must_*`` call fails, stopping the process.

    Deriving from ``SystemExit`` means generic ``except Exception``
    handlers let it through.  Left uncaught, the interpreter prints the
    diagnostic and exits with status 1.

    Attributes:
        key: The variable being read or written.
        target: The requested target (or the value's type when writing).
        error: The failure that triggered the abort.

    """

    def __init__(self, key: str, target: object, error: BaseException) -> None:
        """Create an abort carrying the formatted failure."""
        self.key = key
        self.target = target
        self.error = error
        super().__init__(f"env ${key} [{describe(target)}]: {error}")
