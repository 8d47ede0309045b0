"""Kernel time – request timing."""
from accesslog.kernel.time.clock import Timing, utc_now

__all__ = ["Timing", "utc_now"]
