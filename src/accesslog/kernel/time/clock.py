"""Kernel time – wall-clock start plus monotonic elapsed time."""
from __future__ import annotations

import dataclasses
import time
from datetime import UTC, datetime, timedelta


def utc_now() -> datetime:
    """Shorthand for ``datetime.now(UTC)``."""
    return datetime.now(UTC)


@dataclasses.dataclass(frozen=True)
class Timing:
    """Start of a timed operation.

    ``started_at`` is the wall-clock instant reported as ``@timestamp``;
    ``monotonic`` is the matching :func:`time.monotonic` reading used for the
    duration, so clock adjustments never produce negative durations.
    """

    started_at: datetime
    monotonic: float

    @classmethod
    def start(cls) -> "Timing":
        return cls(started_at=utc_now(), monotonic=time.monotonic())

    @classmethod
    def started_ago(cls, seconds: float) -> "Timing":
        """A timing that began *seconds* ago (handy when replaying calls)."""
        return cls(
            started_at=utc_now() - timedelta(seconds=seconds),
            monotonic=time.monotonic() - seconds,
        )

    def elapsed_ms(self) -> int:
        return max(0, int((time.monotonic() - self.monotonic) * 1000))


__all__ = ["Timing", "utc_now"]
