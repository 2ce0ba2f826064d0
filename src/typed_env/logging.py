"""Access logging — an audit trail of typed reads and writes.

Configuration problems are easiest to diagnose when you can see which
variables were read, which were missing, and which failed to parse.  The
logger records one structured entry per operation:

- **LogLevel** — severity levels ordered for filtering (DEBUG < ERROR).
- **LogEntry** — a single structured record (level, message, source, key).
- **Logger** — an append-only log with filtering and clearing.

Design choices:
    - **IntEnum for levels** so they compare naturally with ``<``.
    - **Frozen dataclass for entries** — log records should be immutable.
    - **Optional capacity** — a long-running process that keeps reading
      its configuration would otherwise grow the log without bound; with
      a capacity the oldest entries are dropped first.
    - **No values** — entries name the variable and the target type, never
      the raw value, which may well be a secret.
"""

from collections import deque
from dataclasses import dataclass
from enum import IntEnum


class LogLevel(IntEnum):
    """How noteworthy a read or write was.

    DEBUG marks a clean conversion, INFO an unset variable that fell back,
    WARNING text that failed to convert, and ERROR a type that can never
    convert, a refused write, or an abort.
    """

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass(frozen=True)
class LogEntry:
    """One access to one environment variable.

    Attributes:
        level: How the access ended.
        message: What happened, naming the key and target type only.
        source: ``"decoder"`` for reads, ``"encoder"`` for writes.
        key: The variable that was read or written.

    """

    level: LogLevel
    message: str
    source: str
    key: str = ""

    def __str__(self) -> str:
        """Format as ``[LEVEL] source: message``."""
        return f"[{self.level.name}] {self.source}: {self.message}"


class Logger:
    """Audit trail of environment accesses, oldest first.

    Answers questions like "which variables did start-up read?" or
    "what failed for $PORT?" through ``filter``.  Given a capacity it
    keeps only the most recent entries.
    """

    def __init__(self, capacity: int | None = None) -> None:
        """Create an empty trail.

        Args:
            capacity: How many of the most recent entries to keep, or None
                to keep them all.

        Raises:
            ValueError: If *capacity* is not positive.

        """
        if capacity is not None and capacity <= 0:
            msg = f"Log capacity must be positive, got {capacity}"
            raise ValueError(msg)
        self._entries: deque[LogEntry] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int | None:
        """Return the entry limit (None = unbounded)."""
        return self._entries.maxlen

    @property
    def entries(self) -> list[LogEntry]:
        """Return the retained entries, oldest first."""
        return list(self._entries)

    def log(
        self,
        level: LogLevel,
        message: str,
        *,
        source: str,
        key: str = "",
    ) -> None:
        """Record one access, evicting the oldest entry when full.

        Args:
            level: How the access ended.
            message: Description without the variable's value.
            source: ``"decoder"`` or ``"encoder"``.
            key: The variable accessed.

        """
        self._entries.append(LogEntry(level=level, message=message, source=source, key=key))

    def filter(
        self,
        *,
        min_level: LogLevel | None = None,
        source: str | None = None,
        key: str | None = None,
    ) -> list[LogEntry]:
        """Return the accesses matching every given criterion.

        Args:
            min_level: Keep only accesses at or above this level.
            source: Keep only reads (``"decoder"``) or writes (``"encoder"``).
            key: Keep only accesses to this variable.

        Returns:
            The matching entries, oldest first.

        """
        result = list(self._entries)
        if min_level is not None:
            result = [e for e in result if e.level >= min_level]
        if source is not None:
            result = [e for e in result if e.source == source]
        if key is not None:
            result = [e for e in result if e.key == key]
        return result

    def clear(self) -> None:
        """Forget every recorded access."""
        self._entries.clear()

    def __len__(self) -> int:
        """Return the number of entries currently held."""
        return len(self._entries)
