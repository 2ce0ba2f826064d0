"""Typed access — read and write environment variables as real types.

``TypedEnv`` is the public face of the library.  It glues the pieces
together:

    lookup → decode → Result        (get)
    encode → write  → Result        (set)

Failures are *returned*, not raised.  A ``Result`` carries the value (the
converted value on success, the fallback or zero value on failure), the
error, and an ``Outcome`` that says which kind of failure it was.  That
lets start-up code treat a missing variable as fine while still refusing
a malformed one::

    port, err = env.get("PORT", int, fallback=8080)
    if err is not None and not isinstance(err, UnsetError):
        raise err

The ``must_*`` variants are for code that cannot continue without a valid
value.  They raise ``EnvAbort``, which stops the process unless someone
deliberately catches it.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, NoReturn

from typed_env.capabilities import TextDecodable, TextEncodable
from typed_env.decoder import decode
from typed_env.encoder import encode
from typed_env.env import Environment
from typed_env.errors import (
    AggregateParseError,
    EncodeError,
    EnvAbort,
    EnvError,
    ParseError,
    UnsetError,
    UnsupportedTypeError,
)
from typed_env.kinds import describe, infer_target, zero_value
from typed_env.logging import Logger, LogLevel

DEFAULT_LOG_CAPACITY = 1024


class _Missing:
    """Sentinel type for "no fallback given" (None is a valid fallback)."""

    def __repr__(self) -> str:
        """Return a readable name for signatures and reprs."""
        return "MISSING"


MISSING: Any = _Missing()


class Outcome(StrEnum):
    """How a typed read or write ended.

    - SUCCESS — the value was converted (and, for writes, stored).
    - UNSET — the variable is absent; the fallback was used.
    - PARSE_FAILURE — the text did not match the target's grammar.
    - UNSUPPORTED_TYPE — the target has no native or capability support.
    - CAPABILITY_FAILURE — a user ``from_text`` / ``to_text`` raised.
    - ENCODE_FAILURE — a native value has no canonical text form.
    - WRITE_FAILURE — the platform refused to store the value.
    """

    SUCCESS = "success"
    UNSET = "unset"
    PARSE_FAILURE = "parse_failure"
    UNSUPPORTED_TYPE = "unsupported_type"
    CAPABILITY_FAILURE = "capability_failure"
    ENCODE_FAILURE = "encode_failure"
    WRITE_FAILURE = "write_failure"


_LEVELS: dict[Outcome, LogLevel] = {
    Outcome.SUCCESS: LogLevel.DEBUG,
    Outcome.UNSET: LogLevel.INFO,
    Outcome.PARSE_FAILURE: LogLevel.WARNING,
    Outcome.CAPABILITY_FAILURE: LogLevel.WARNING,
    Outcome.ENCODE_FAILURE: LogLevel.WARNING,
    Outcome.UNSUPPORTED_TYPE: LogLevel.ERROR,
    Outcome.WRITE_FAILURE: LogLevel.ERROR,
}


@dataclass(frozen=True)
class Result:
    """The value and outcome of one typed read or write.

    Unpacks as ``value, error`` for the common two-name style.

    Attributes:
        key: The environment variable involved.
        value: The converted value (reads) or encoded text (writes); the
            fallback, zero value or ``""`` on failure.
        error: The failure, or None on success.
        outcome: Which kind of failure, if any.

    """

    key: str
    value: Any
    error: Exception | None = None
    outcome: Outcome = Outcome.SUCCESS

    @property
    def ok(self) -> bool:
        """Return True if the operation succeeded."""
        return self.outcome is Outcome.SUCCESS

    def __iter__(self) -> Iterator[Any]:
        """Yield ``value`` then ``error``."""
        yield self.value
        yield self.error


def _outcome_of(error: EnvError) -> Outcome:
    """Classify one of our own errors."""
    match error:
        case UnsetError():
            return Outcome.UNSET
        case ParseError() | AggregateParseError():
            return Outcome.PARSE_FAILURE
        case UnsupportedTypeError():
            return Outcome.UNSUPPORTED_TYPE
        case EncodeError():
            return Outcome.ENCODE_FAILURE
        case _:
            return Outcome.CAPABILITY_FAILURE


class TypedEnv:
    """Typed reads and writes over an ``Environment``.

    Every call re-reads the environment; nothing is cached between
    calls.
    """

    def __init__(
        self,
        environment: Environment | None = None,
        logger: Logger | None = None,
    ) -> None:
        """Create a typed accessor.

        Args:
            environment: The store to read and write.  Defaults to the
                process environment.
            logger: Where access events are recorded.  Defaults to a
                fresh logger holding the last ``DEFAULT_LOG_CAPACITY``
                entries.

        """
        self._environment = environment if environment is not None else Environment()
        self._logger = logger if logger is not None else Logger(capacity=DEFAULT_LOG_CAPACITY)

    @property
    def environment(self) -> Environment:
        """Return the underlying string store."""
        return self._environment

    @property
    def logger(self) -> Logger:
        """Return the access log."""
        return self._logger

    # -- Reads ---------------------------------------------------------------

    def get(self, key: str, target: object = None, fallback: Any = MISSING) -> Result:
        """Read *key* and convert it to *target*.

        Args:
            key: The variable name.
            target: A kind, builtin type, list descriptor or capability
                type.  May be omitted when *fallback* is given; the
                target is then inferred from the fallback's type.
            fallback: Value returned when the variable is unset or fails
                to convert.  Without one, the target's zero value is
                used (None for capability types).

        Returns:
            A ``Result`` with the value and outcome.

        Raises:
            TypeError: If neither *target* nor *fallback* is given.

        """
        if target is None:
            if fallback is MISSING:
                msg = "get() needs a target type or a fallback to infer it from"
                raise TypeError(msg)
            target = infer_target(fallback)
        name = describe(target)

        raw = self._environment.lookup(key)
        if raw is None:
            default = zero_value(target) if fallback is MISSING else fallback
            return self._read_failed(key, name, default, UnsetError(key), Outcome.UNSET)

        try:
            value = decode(raw, target)
        except EnvError as e:
            default = zero_value(target) if fallback is MISSING else fallback
            return self._read_failed(key, name, default, e, _outcome_of(e))
        except Exception as e:
            if not isinstance(target, TextDecodable):
                raise
            default = zero_value(target) if fallback is MISSING else fallback
            return self._read_failed(key, name, default, e, Outcome.CAPABILITY_FAILURE)

        self._logger.log(LogLevel.DEBUG, f"decoded ${key} as {name}", source="decoder", key=key)
        return Result(key=key, value=value)

    def must_get(self, key: str, target: object) -> Any:
        """Read *key* as *target*, aborting on any failure.

        An unset variable is a failure here too; there is no fallback.

        Raises:
            EnvAbort: If the read does not succeed.

        """
        result = self.get(key, target)
        if result.error is not None:
            self._abort(key, target, result.error, source="decoder")
        return result.value

    def _read_failed(
        self,
        key: str,
        name: str,
        default: Any,
        error: Exception,
        outcome: Outcome,
    ) -> Result:
        if outcome is Outcome.UNSET:
            message = f"${key} is unset, using fallback"
        else:
            message = f"failed to decode ${key} as {name}: {type(error).__name__}"
        self._logger.log(_LEVELS[outcome], message, source="decoder", key=key)
        return Result(key=key, value=default, error=error, outcome=outcome)

    # -- Writes --------------------------------------------------------------

    def set(self, key: str, value: object, target: object = None) -> Result:
        """Encode *value* and store it under *key*.

        Args:
            key: The variable name.
            value: The value to store.
            target: Optional kind or list descriptor to encode as.

        Returns:
            A ``Result`` whose value is the stored text ("" on failure).

        """
        name = describe(target if target is not None else type(value))
        try:
            text = encode(value, target)
        except EnvError as e:
            return self._write_failed(key, name, e, _outcome_of(e))
        except Exception as e:
            if not isinstance(value, TextEncodable):
                raise
            return self._write_failed(key, name, e, Outcome.CAPABILITY_FAILURE)

        try:
            self._environment.write(key, text)
        except (OSError, ValueError) as e:
            return self._write_failed(key, name, e, Outcome.WRITE_FAILURE)

        self._logger.log(LogLevel.DEBUG, f"encoded ${key} as {name}", source="encoder", key=key)
        return Result(key=key, value=text)

    def must_set(self, key: str, value: object, target: object = None) -> str:
        """Encode and store *value*, aborting on any failure.

        Returns:
            The stored text.

        Raises:
            EnvAbort: If the write does not succeed.

        """
        result = self.set(key, value, target)
        if result.error is not None:
            self._abort(key, target if target is not None else type(value), result.error, source="encoder")
        return result.value

    def _write_failed(self, key: str, name: str, error: Exception, outcome: Outcome) -> Result:
        message = f"failed to encode ${key} as {name}: {type(error).__name__}"
        self._logger.log(_LEVELS[outcome], message, source="encoder", key=key)
        return Result(key=key, value="", error=error, outcome=outcome)

    def _abort(self, key: str, target: object, error: Exception, *, source: str) -> NoReturn:
        abort = EnvAbort(key, target, error)
        self._logger.log(LogLevel.ERROR, f"aborting on ${key}: {type(error).__name__}", source=source, key=key)
        raise abort from error
