"""ASGI adapter – locate where a handler fault was raised."""
from __future__ import annotations

import sysconfig
import traceback
from types import FrameType

_STDLIB_DIRS = tuple(
    {sysconfig.get_paths()["stdlib"], sysconfig.get_paths()["platstdlib"]}
)
_THIRD_PARTY_DIRS = ("site-packages", "dist-packages")


def _is_runtime_frame(frame: FrameType) -> bool:
    filename = frame.f_code.co_filename
    if filename.startswith("<frozen "):
        return True
    if any(part in filename for part in _THIRD_PARTY_DIRS):
        return False
    return filename.startswith(_STDLIB_DIRS)


def identify_origin(exc: BaseException) -> str:
    """Return ``<module>.<qualname>:<line>`` of the innermost non-stdlib frame.

    Falls back to ``<file>:<line>`` when the frame has no module name and to
    ``unknown`` when the exception carries no traceback.
    """
    frames = list(traceback.walk_tb(exc.__traceback__))
    if not frames:
        return "unknown"

    frame, lineno = frames[-1]
    for candidate, candidate_lineno in reversed(frames):
        if not _is_runtime_frame(candidate):
            frame, lineno = candidate, candidate_lineno
            break

    module = frame.f_globals.get("__name__")
    if module:
        return f"{module}.{frame.f_code.co_qualname}:{lineno}"
    return f"{frame.f_code.co_filename}:{lineno}"


__all__ = ["identify_origin"]
