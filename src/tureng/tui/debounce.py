"""Debounced, generation-tagged autocomplete requests.

The controller owns no timers and no tasks. It tracks when the quiescence
window of the latest edit ends and which request generation is live; the
prompt asks it for the deadline, tells it when the deadline has passed and
asks it whether a completed response may still be used.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable


@dataclass(frozen=True)
class RequestTicket:
    """An autocomplete request that should be issued now."""

    generation: int
    query: str


class DebounceController:
    """Decides when a query edit turns into an autocomplete request.

    Every edit that changes the content fingerprint (re)arms a fixed
    quiescence timer and invalidates the live generation, so a response to
    an older query can never be applied. When the timer elapses
    :meth:`fire` hands out a ticket with a fresh generation, unless the
    query is blank.
    """

    def __init__(
        self,
        delay: float,
        clock: Callable[[], float] = time.monotonic,
        *,
        fingerprint: int | None = None,
    ) -> None:
        if delay <= 0:
            raise ValueError(f"debounce delay must be positive, got {delay}")
        self.delay = delay
        self._clock = clock
        self._deadline: float | None = None
        self._fingerprint: int | None = fingerprint
        self._generation: int = 0
        self._live: int | None = None

    @property
    def armed(self) -> bool:
        return self._deadline is not None

    @property
    def generation(self) -> int:
        return self._generation

    def on_edit(self, fingerprint: int) -> bool:
        """Record an edit; return whether it armed the timer.

        Edits that leave the content unchanged (cursor moves, a backspace on
        an empty buffer) do not touch a pending timer.
        """
        if fingerprint == self._fingerprint:
            return False
        self._fingerprint = fingerprint
        self._deadline = self._clock() + self.delay
        self._invalidate()
        return True

    def remaining(self) -> float | None:
        """Seconds until the timer fires, or ``None`` when disarmed."""
        if self._deadline is None:
            return None
        return max(self._deadline - self._clock(), 0.0)

    def due(self) -> bool:
        return self._deadline is not None and self._clock() >= self._deadline

    def fire(self, query: str) -> RequestTicket | None:
        """Disarm the timer and return the request to issue, if any.

        A blank *query* never produces a request.
        """
        self._deadline = None
        if not query.strip():
            return None
        self._invalidate()
        self._live = self._generation
        return RequestTicket(self._generation, query)

    def is_current(self, generation: int) -> bool:
        """Whether a response tagged with *generation* may be applied."""
        return self._live is not None and generation == self._live

    def complete(self, generation: int) -> None:
        """Mark the live request as answered."""
        if self._live == generation:
            self._live = None

    def cancel(self) -> None:
        """Disarm the timer and invalidate any outstanding request."""
        self._deadline = None
        self._invalidate()

    def _invalidate(self) -> None:
        self._generation += 1
        self._live = None
