"""Typed environment variables — read and write ENVs as real Python types.

Re-exports public symbols so callers can write::

    import typed_env
    from typed_env import Kind, ListOf

    port, err = typed_env.get("PORT", int, fallback=8080)
    hosts = typed_env.must_get("HOSTS", list[str])
    level = typed_env.must_get("LEVEL", Kind.UINT8)
    typed_env.must_set("RETRIES", 3)

The module-level ``get``, ``must_get``, ``set`` and ``must_set`` work on
``default_env``, a ``TypedEnv`` over the process environment.  Build
your own ``TypedEnv`` to read from a different mapping or to keep a
separate access log.
"""

from typed_env.accessor import DEFAULT_LOG_CAPACITY, MISSING, Outcome, Result, TypedEnv
from typed_env.capabilities import TextDecodable, TextEncodable
from typed_env.decoder import DECODE_CAPABILITY, decode
from typed_env.encoder import ENCODE_CAPABILITY, encode
from typed_env.env import Environment
from typed_env.errors import (
    AggregateParseError,
    EncodeError,
    EnvAbort,
    EnvError,
    ParseError,
    ParseReason,
    UnsetError,
    UnsupportedTypeError,
)
from typed_env.grammar import DELIMITER
from typed_env.kinds import Family, Kind, ListOf
from typed_env.logging import LogEntry, Logger, LogLevel

default_env = TypedEnv()

get = default_env.get
must_get = default_env.must_get
set = default_env.set  # noqa: A001
must_set = default_env.must_set

__all__ = [
    "DECODE_CAPABILITY",
    "DEFAULT_LOG_CAPACITY",
    "DELIMITER",
    "ENCODE_CAPABILITY",
    "MISSING",
    "AggregateParseError",
    "EncodeError",
    "EnvAbort",
    "EnvError",
    "Environment",
    "Family",
    "Kind",
    "ListOf",
    "LogEntry",
    "LogLevel",
    "Logger",
    "Outcome",
    "ParseError",
    "ParseReason",
    "Result",
    "TextDecodable",
    "TextEncodable",
    "TypedEnv",
    "UnsetError",
    "UnsupportedTypeError",
    "decode",
    "default_env",
    "encode",
    "get",
    "must_get",
    "must_set",
    "set",
]
