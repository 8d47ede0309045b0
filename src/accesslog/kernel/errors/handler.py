"""Handler faults – failures recovered at the middleware boundary."""

from __future__ import annotations

from accesslog.kernel.errors.base import BaseError


class HandlerFault(BaseError):
    """An exception escaped the wrapped handler and was recovered.

    ``str(fault)`` renders as ``PANIC (<origin>): <original error>``, which is
    the text carried in the ``error`` field of the access-error event.
    """

    default_code = "handler_fault"

    def __init__(self, fault: BaseException, origin: str) -> None:
        super().__init__(
            f"PANIC ({origin}): {fault}",
            detail={"origin": origin, "fault_type": type(fault).__name__},
            cause=fault,
        )
        self.fault = fault
        self.origin = origin


__all__ = ["HandlerFault"]
