from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Optional

from stockroom.core.errors import StoreUnavailableError


@dataclass(frozen=True)
class Deadline:
    """Absolute point on the monotonic clock after which store calls abort."""

    expires_at: float

    @classmethod
    def after(cls, seconds: float) -> "Deadline":
        return cls(expires_at=time.monotonic() + max(0.0, float(seconds)))

    @property
    def remaining(self) -> float:
        return max(0.0, self.expires_at - time.monotonic())

    @property
    def expired(self) -> bool:
        return time.monotonic() >= self.expires_at

    def check(self, operation: str) -> None:
        if self.expired:
            raise StoreUnavailableError("Timed out during {}".format(operation))


def check_deadline(deadline: Optional[Deadline], operation: str) -> None:
    if deadline is not None:
        deadline.check(operation)


__all__ = ["Deadline", "check_deadline"]
