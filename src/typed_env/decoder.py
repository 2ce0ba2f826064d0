"""Decoder — turn a raw string into a value of the requested type.

Dispatch runs in a fixed order and the first match wins:

1. **Scalar kind** — ``Kind`` members and the builtin ``str``, ``bool``,
   ``int``, ``float`` and ``complex``.
2. **List of a scalar kind** — ``ListOf(kind)`` or ``list[X]``.  The text
   is split on the delimiter and every segment is parsed; all bad
   segments are reported together.
3. **Capability** — a class with a ``from_text`` classmethod.
4. **Unsupported** — anything else.

The order matters: a ``str`` subclass that also defines ``from_text`` is
*not* native (kinds match by identity), so it reaches step 3 and its own
parser runs.

The decoder is pure — it never touches the environment.  Reading the
variable and deciding what to do with a failure is ``TypedEnv``'s job.
"""

from typing import Any

from typed_env.capabilities import TextDecodable
from typed_env.errors import AggregateParseError, ParseError, UnsupportedTypeError
from typed_env.grammar import parse_scalar, split
from typed_env.kinds import Kind, list_kind, scalar_kind

DECODE_CAPABILITY = "from_text"


def decode(text: str, target: object) -> Any:
    """Convert *text* into a value described by *target*.

    Args:
        text: The raw variable value.
        target: A kind, builtin type, list descriptor or capability type.

    Returns:
        The converted value.

    Raises:
        ParseError: If a scalar does not match its grammar.
        AggregateParseError: If any list element does not match.
        UnsupportedTypeError: If *target* cannot be decoded at all.

    Anything raised by a ``from_text`` implementation propagates as is.

    """
    kind = scalar_kind(target)
    if kind is not None:
        return parse_scalar(kind, text)

    element = list_kind(target)
    if element is not None:
        return _decode_list(text, element, target)

    if isinstance(target, type) and isinstance(target, TextDecodable):
        return target.from_text(text)

    raise UnsupportedTypeError(target, DECODE_CAPABILITY)


def _decode_list(text: str, element: Kind, target: object) -> list[Any]:
    """Parse every segment, collecting failures instead of stopping early."""
    values: list[Any] = []
    errors: list[ParseError] = []
    for segment in split(text):
        try:
            values.append(parse_scalar(element, segment))
        except ParseError as e:
            errors.append(e)
    if errors:
        raise AggregateParseError(target, errors)
    return values
