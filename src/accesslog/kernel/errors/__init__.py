"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── ConfigError            (accesslog.config.validation)
    │   ├── MissingRequiredSettingError
    │   └── InvalidSettingValueError
    └── HandlerFault           (handler.py)
"""

from accesslog.kernel.errors.base import BaseError
from accesslog.kernel.errors.handler import HandlerFault

__all__ = [
    "BaseError",
    "HandlerFault",
]
