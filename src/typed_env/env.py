"""Environment — the string-only key/value store everything else reads.

In Unix, every process has an environment: a set of ``KEY=VALUE`` string
pairs inherited from its parent.  Python exposes it as ``os.environ``.

Key properties this library relies on:
    - **Strings only** — both keys and values are strings (no types).
      Giving them types is the decoder's and encoder's job.
    - **Always re-read** — another part of the program may change a
      variable at any time, so nothing read here is cached.
    - **Two primitives** — ``lookup`` is the only read and ``write`` the
      only write; everything typed is built on top of them.

Our ``Environment`` class wraps ``os.environ`` by default, or any plain
mapping you hand it.  Tests use a dict so they never touch the real
process environment.
"""

import os
from collections.abc import MutableMapping


class Environment:
    """A key-value store for environment variables.

    With no mapping the live ``os.environ`` is used, so writes are
    visible to the rest of the process and to child processes.  A
    supplied mapping is used directly (not copied).
    """

    def __init__(self, mapping: MutableMapping[str, str] | None = None) -> None:
        """Create an environment over *mapping*, or over ``os.environ``.

        Args:
            mapping: The backing store.  ``None`` means the process
                environment.

        """
        self._vars: MutableMapping[str, str] = os.environ if mapping is None else mapping

    def lookup(self, key: str) -> str | None:
        """Return the value for *key*, or None if it is not set.

        A variable set to the empty string is present: this returns
        ``""``, not None.
        """
        return self._vars.get(key)

    def write(self, key: str, value: str) -> None:
        """Set *key* to *value* (creates or overwrites).

        Raises:
            ValueError: If the platform rejects the key or value (for
                example an embedded NUL character).
            OSError: If the platform refuses the change.

        """
        self._vars[key] = value
