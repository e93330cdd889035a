"""Cancellation and deadline signals passed into every API call."""

from __future__ import annotations

import threading
import time

from .exceptions import BentoError, Cancelled, DeadlineExceeded


class Context:
    """A cancellation signal with an optional deadline.

    Contexts form a tree: a child fires when it or any of its ancestors fires,
    and its effective deadline is the earliest deadline along the chain.
    Once fired, ``err()`` keeps returning the same exception instance so
    callers can compare it by identity.

    Example:
        ```python
        from bento import Context

        ctx = Context.background().with_timeout(2.5)
        client.tags.list(ctx=ctx)
        ```
    """

    def __init__(self, parent: Context | None = None, deadline: float | None = None):
        self._parent = parent
        self._deadline = deadline
        self._lock = threading.Lock()
        self._error: BentoError | None = None

    @classmethod
    def background(cls) -> Context:
        """Return a context that never fires on its own."""
        return cls()

    def with_cancel(self) -> Context:
        return Context(parent=self)

    def with_deadline(self, deadline: float) -> Context:
        """Derive a child that expires at ``deadline`` (``time.monotonic()`` clock)."""
        return Context(parent=self, deadline=deadline)

    def with_timeout(self, seconds: float) -> Context:
        """Derive a child that expires ``seconds`` from now."""
        return self.with_deadline(time.monotonic() + seconds)

    @property
    def deadline(self) -> float | None:
        parent_deadline = self._parent.deadline if self._parent is not None else None
        if self._deadline is None:
            return parent_deadline
        if parent_deadline is None:
            return self._deadline
        return min(self._deadline, parent_deadline)

    def cancel(self) -> None:
        with self._lock:
            if self._error is None:
                self._error = Cancelled()

    def remaining(self) -> float | None:
        """Seconds left before the effective deadline, or None without one."""
        deadline = self.deadline
        if deadline is None:
            return None
        return max(0.0, deadline - time.monotonic())

    def err(self) -> BentoError | None:
        """Return the error this context fired with, or None while it is live."""
        with self._lock:
            if self._error is not None:
                return self._error

        if self._parent is not None:
            parent_error = self._parent.err()
            if parent_error is not None:
                return parent_error

        if self._deadline is not None and time.monotonic() >= self._deadline:
            with self._lock:
                if self._error is None:
                    self._error = DeadlineExceeded()
                return self._error
        return None

    def done(self) -> bool:
        return self.err() is not None
