"""Explicit time budgets passed through every suspending call."""

import time
from dataclasses import dataclass


@dataclass(frozen=True)
class Deadline:
    """A point on the monotonic clock after which work must stop."""

    expires_at: float

    @classmethod
    def after(cls, seconds: float) -> "Deadline":
        return cls(expires_at=time.monotonic() + seconds)

    def remaining(self) -> float:
        return max(0.0, self.expires_at - time.monotonic())

    @property
    def expired(self) -> bool:
        return self.remaining() <= 0.0

    def budget(self, seconds: float, reserve: float = 0.0) -> float:
        """Time a sub-call may use: ``seconds`` capped by what is left after ``reserve``."""
        return max(0.0, min(seconds, self.remaining() - reserve))

    def fraction(self, share: float) -> "Deadline":
        """A tighter deadline holding ``share`` of the remaining time."""
        return Deadline.after(self.remaining() * share)

    def extended(self, seconds: float) -> "Deadline":
        """The same deadline pushed back by ``seconds``."""
        return Deadline(expires_at=self.expires_at + seconds)
