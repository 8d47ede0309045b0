"""Root error class for the accesslog error hierarchy."""

from __future__ import annotations

from typing import Any


class BaseError(Exception):
    """Root of every error this package raises.

    Args:
        message: Text rendered by ``str()``; for a :class:`HandlerFault` it is
            the ``error`` field of the access-error event.
        code: Machine-readable slug, ``default_code`` when omitted.
        detail: Extra context kept next to the message.
        cause: Exception this error wraps; also chained as ``__cause__``.
    """

    default_code: str = "base_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = detail or {}
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


__all__ = ["BaseError"]
