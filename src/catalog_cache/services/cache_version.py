"""Process-wide cache version token."""

import time
from collections.abc import Callable


class CacheVersion:
    """Strictly increasing version embedded in every served response.

    Starts at the wall-clock time in milliseconds so a restarted process
    never reports a version lower than before the restart. Only the
    invalidation service advances it.

    ``generation`` counts invalidations and moves as soon as one begins,
    before the store is flushed. The visible ``current`` value only moves
    once the flush is done. Cache writers compare ``generation``.
    """

    def __init__(self, initial: int | None = None, clock: Callable[[], float] | None = None) -> None:
        self._clock = clock or time.time
        self._value = initial if initial is not None else self._now_ms()
        self._generation = 0
        self._pending = 0

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    @property
    def current(self) -> int:
        return self._value

    @property
    def generation(self) -> int:
        return self._generation

    def begin_invalidation(self) -> int:
        """Mark an invalidation as started.

        Returns:
            The new generation
        """
        self._generation += 1
        self._pending += 1
        return self._generation

    def advance(self) -> int:
        """Move to a new version, strictly greater than the current one.

        Completes the invalidation opened by ``begin_invalidation``, or
        opens and completes one if none is pending.

        Returns:
            The new version
        """
        if self._pending:
            self._pending -= 1
        else:
            self._generation += 1
        self._value = max(self._value + 1, self._now_ms())
        return self._value
