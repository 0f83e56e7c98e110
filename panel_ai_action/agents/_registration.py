"""Thread-safe single-slot registration shared by the backend and queue registries."""

import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Generic, TypeVar

T = TypeVar("T")


class Registration(Generic[T]):
    """Holds at most one registered object behind a lock.

    Args:
        kind: Human-readable name used in error messages, e.g. "Agent backend".
        reset_hint: Name of the public reset function mentioned when
                    registering over an existing object.
        default: Factory called by get() while nothing is registered. When
                 omitted, get() calls on_missing instead.
        on_missing: Factory for the exception raised by get() while nothing
                    is registered and there is no default.
    """

    def __init__(
        self,
        kind: str,
        reset_hint: str,
        *,
        default: Callable[[], T] | None = None,
        on_missing: Callable[[], Exception] | None = None,
    ):
        self.kind = kind
        self.reset_hint = reset_hint
        self._default = default
        self._on_missing = on_missing
        self._current: T | None = None
        self._lock = threading.Lock()

    def register(self, value: T) -> None:
        """Register value.

        Raises:
            RuntimeError: If something is already registered
        """
        with self._lock:
            if self._current is not None:
                raise RuntimeError(
                    f"{self.kind} already registered: {type(self._current).__name__}. Call {self.reset_hint}() first to replace it."
                )
            self._current = value

    def get(self) -> T:
        with self._lock:
            if self._current is None:
                if self._default is None:
                    if self._on_missing is not None:
                        raise self._on_missing()
                    raise LookupError(f"No {self.kind.lower()} registered.")
                self._current = self._default()
            return self._current

    def reset(self) -> None:
        with self._lock:
            self._current = None

    @contextmanager
    def temporary(self, value: T) -> Iterator[T]:
        """Register value for the block, restoring the previous registration on exit."""
        with self._lock:
            previous = self._current
            self._current = value
        try:
            yield value
        finally:
            with self._lock:
                self._current = previous
