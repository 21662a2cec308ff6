"""
Identity allocation for argument descriptors.

Every Argument receives an integer id at construction. Ids let parsers key
their results by argument without relying on object identity, so they must be
unique and must never be reissued.

Identities
- An allocator owns a counter and hands out its values with a locked
  fetch-and-increment, so concurrent construction never yields duplicates.
- Values handed out by one allocator are strictly increasing; the order in which
  competing threads obtain them is unspecified.
- The counter is bounded by `limit` (sys.maxsize by default, the largest index a
  container can hold). Reaching it is a fatal ExhaustedIdentitiesError.

The module-level `default_identities` allocator is the process default used by
Argument(); hosts that want isolated id spaces pass their own allocator.
"""
import sys
import threading

from .faults import FaultCode, ExhaustedIdentitiesError, trigger


class Identities:
    """
    Thread-safe, monotonically increasing id allocator.

        >>> ids = Identities()
        >>> next(ids), next(ids)
        (0, 1)
    """

    def __init__(self, start=0, /, limit=sys.maxsize):
        if not isinstance(start, int) or not isinstance(limit, int):
            raise TypeError("Identities() bounds must be integers")
        if start > limit:
            raise ValueError("Identities() start cannot exceed its limit")
        self._lock = threading.Lock()
        self._next = start
        self._limit = limit

    def __iter__(self):
        return self

    def __next__(self):
        with self._lock:
            if (identity := self._next) >= self._limit:
                trigger(
                    ExhaustedIdentitiesError(f"all {self._limit} argument ids are taken"),
                    code=FaultCode.EXHAUSTED_IDENTITIES,
                    title="too many arguments",
                    hint="too many arguments were constructed by this allocator",
                )
            self._next = identity + 1
        return identity

    def peek(self):
        """
        Return the id the next allocation would hand out, without consuming it.
        """
        with self._lock:
            return self._next

    @property
    def limit(self):
        return self._limit

    def __repr__(self):
        return f"identities(next={self.peek()}, limit={self._limit})"


default_identities = Identities()


__all__ = (
    "Identities",
    "default_identities",
)
