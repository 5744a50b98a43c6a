import time
import threading
from typing import Optional
from .exceptions import DeadlineExceededException


class Deadline:
    """Cancellation signal passed down through every network-bound call.

    A deadline can carry an absolute expiry (monotonic clock), a cancel
    event set by another thread, or both. Components call ``check()`` before
    each round trip and ``timeout()`` to bound a socket timeout by the time
    that is left.
    """

    def __init__(self, expires_at: Optional[float] = None, cancel_event: Optional[threading.Event] = None):
        self.expires_at = expires_at
        self.cancel_event = cancel_event

    @classmethod
    def after(cls, seconds: float, cancel_event: Optional[threading.Event] = None) -> "Deadline":
        return cls(time.monotonic() + seconds, cancel_event)

    def remaining(self) -> Optional[float]:
        if self.expires_at is None:
            return None
        return max(0.0, self.expires_at - time.monotonic())

    @property
    def cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()

    def check(self) -> None:
        if self.cancelled:
            raise DeadlineExceededException("Operation cancelled")
        if self.remaining() == 0.0:
            raise DeadlineExceededException()

    def timeout(self, default: float) -> float:
        """Per-call timeout: the configured default, shortened to what is left"""
        self.check()
        left = self.remaining()
        if left is None:
            return default
        return min(default, left)


def check_deadline(deadline: Optional[Deadline]) -> None:
    if deadline is not None:
        deadline.check()
