"""
Concurrency Gate - reader-writer exclusion for the lexicon

Many readers or one writer, never both. Writers are granted the
exclusive slot in arrival order, and a queued writer holds back new
readers so rebuilds are not starved by a steady query stream.

Design Principles:
- One condition variable, plain counters - no abstractions
- Timeout-based deadlock prevention
- Abandoned requests leave no trace
"""

import logging
import math
import threading
import time
from collections import deque
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Deque, Dict, Iterator, Optional

from .errors import LockTimeoutError

logger = logging.getLogger(__name__)

# Sentinel: "use the gate's configured timeout"
DEFAULT_TIMEOUT = object()


class GateState(str, Enum):
    IDLE = "idle"
    READING = "reading"
    WRITING = "writing"


@dataclass
class GateCounters:
    """Lifetime gate statistics"""

    reads_granted: int = 0
    writes_granted: int = 0
    read_timeouts: int = 0
    write_timeouts: int = 0
    created_at: float = field(default_factory=time.time)

    @property
    def age_seconds(self) -> float:
        return time.time() - self.created_at


class ConcurrencyGate:
    """
    Reader-writer gate

    Features:
    - Concurrent shared (read) access
    - Exclusive (write) access, FIFO among writers
    - Per-call or default timeouts raising LockTimeoutError
    - Not re-entrant: a writer must not take a read permit
    """

    def __init__(
        self,
        write_timeout: Optional[float] = 30.0,
        read_timeout: Optional[float] = 30.0,
    ):
        for name, value in (("write_timeout", write_timeout), ("read_timeout", read_timeout)):
            if value is not None and not _valid_timeout(value):
                raise ValueError(f"{name} must be a finite non-negative number or None")

        self.write_timeout = write_timeout
        self.read_timeout = read_timeout

        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer_active = False
        self._writer_owner: Optional[int] = None
        self._writer_queue: Deque[int] = deque()
        self._next_ticket = 0
        self._counters = GateCounters()

    # ----- state -----

    @property
    def state(self) -> GateState:
        with self._cond:
            return self._state_locked()

    @property
    def active_readers(self) -> int:
        with self._cond:
            return self._readers

    @property
    def waiting_writers(self) -> int:
        with self._cond:
            return len(self._writer_queue)

    def _state_locked(self) -> GateState:
        if self._writer_active:
            return GateState.WRITING
        if self._readers:
            return GateState.READING
        return GateState.IDLE

    # ----- shared access -----

    def acquire_read(self, timeout: Any = DEFAULT_TIMEOUT) -> None:
        """Block until no writer is active or queued, then join the readers"""
        timeout = self.read_timeout if timeout is DEFAULT_TIMEOUT else timeout
        deadline = _deadline(timeout)

        with self._cond:
            while self._writer_active or self._writer_queue:
                if not self._wait(deadline):
                    self._counters.read_timeouts += 1
                    logger.warning(f"Read permit not granted within {timeout:.2f}s")
                    raise LockTimeoutError(f"Read access timed out after {timeout:.2f}s")
            self._readers += 1
            self._counters.reads_granted += 1

    def release_read(self) -> None:
        with self._cond:
            if self._readers <= 0:
                raise RuntimeError("release_read() without a matching acquire_read()")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    # ----- exclusive access -----

    def acquire_write(self, timeout: Any = DEFAULT_TIMEOUT) -> None:
        """Queue for the exclusive slot; granted when first in line and the gate is empty"""
        timeout = self.write_timeout if timeout is DEFAULT_TIMEOUT else timeout
        deadline = _deadline(timeout)

        with self._cond:
            ticket = self._next_ticket
            self._next_ticket += 1
            self._writer_queue.append(ticket)
            try:
                while self._writer_active or self._readers or self._writer_queue[0] != ticket:
                    if not self._wait(deadline):
                        self._counters.write_timeouts += 1
                        logger.warning(f"Write access not granted within {timeout:.2f}s")
                        raise LockTimeoutError(f"Write access timed out after {timeout:.2f}s")
            except BaseException:
                # Abandoned before the grant: drop the ticket and let others re-check
                self._writer_queue.remove(ticket)
                self._cond.notify_all()
                raise

            self._writer_queue.popleft()
            self._writer_active = True
            self._writer_owner = threading.get_ident()
            self._counters.writes_granted += 1

    def release_write(self) -> None:
        with self._cond:
            if not self._writer_active:
                raise RuntimeError("release_write() without a matching acquire_write()")
            self._writer_active = False
            self._writer_owner = None
            self._cond.notify_all()

    # ----- context managers -----

    @contextmanager
    def read(self, timeout: Any = DEFAULT_TIMEOUT) -> Iterator["ConcurrencyGate"]:
        self.acquire_read(timeout)
        try:
            yield self
        finally:
            self.release_read()

    @contextmanager
    def write(self, timeout: Any = DEFAULT_TIMEOUT) -> Iterator["ConcurrencyGate"]:
        self.acquire_write(timeout)
        try:
            yield self
        finally:
            self.release_write()

    def holds_write(self) -> bool:
        """True if the calling thread is the active writer"""
        with self._cond:
            return self._writer_active and self._writer_owner == threading.get_ident()

    def get_statistics(self) -> Dict[str, Any]:
        with self._cond:
            return {
                "state": self._state_locked().value,
                "active_readers": self._readers,
                "waiting_writers": len(self._writer_queue),
                "reads_granted": self._counters.reads_granted,
                "writes_granted": self._counters.writes_granted,
                "read_timeouts": self._counters.read_timeouts,
                "write_timeouts": self._counters.write_timeouts,
                "age_seconds": self._counters.age_seconds,
            }

    def _wait(self, deadline: Optional[float]) -> bool:
        """Wait on the condition; False once the deadline has passed"""
        if deadline is None:
            self._cond.wait()
            return True
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            return False
        self._cond.wait(remaining)
        return True


def _deadline(timeout: Optional[float]) -> Optional[float]:
    if timeout is None:
        return None
    if not _valid_timeout(timeout):
        raise ValueError("timeout must be a finite non-negative number or None")
    return time.monotonic() + timeout


def _valid_timeout(timeout: float) -> bool:
    # None is the only way to wait forever; inf overflows Condition.wait
    return math.isfinite(timeout) and timeout >= 0
