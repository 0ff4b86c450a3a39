from __future__ import annotations

import threading
from contextlib import AbstractContextManager, nullcontext
from enum import Enum
from typing import Any


class LockMode(Enum):
    """Select locking behavior for container caches and singleton cells.

    Use ``THREAD`` when creators may run from several threads and ``NONE`` for
    single-threaded hosts that do not want to pay for lock acquisition.
    """

    THREAD = "thread"
    """Guard shared maps and singleton cells with ``threading.RLock``."""

    NONE = "none"
    """Disable locking around cache reads/writes."""

    def new_lock(self) -> AbstractContextManager[Any]:
        """Return a fresh lock matching this mode."""
        if self is LockMode.THREAD:
            return threading.RLock()
        return nullcontext()
