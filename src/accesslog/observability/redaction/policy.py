"""Observability – RedactionPolicy and its process-wide holder.

A :class:`RedactionPolicy` is immutable.  Reconfiguration builds a new one
and swaps it into a :class:`RedactionPolicyHolder`, so a reader sees either
the old lists or the new ones, never a half-written list.
"""
from __future__ import annotations

import dataclasses
import threading
from collections.abc import Iterable

MASK = "*****"


@dataclasses.dataclass(frozen=True)
class RedactionPolicy:
    """Cookie names to drop and query parameters to mask in log events."""

    cookie_blacklist: frozenset[str] = frozenset()
    anonymized_query_params: frozenset[str] = frozenset()

    @classmethod
    def of(
        cls,
        cookie_blacklist: Iterable[str] = (),
        anonymized_query_params: Iterable[str] = (),
    ) -> "RedactionPolicy":
        return cls(frozenset(cookie_blacklist), frozenset(anonymized_query_params))

    def is_cookie_blacklisted(self, name: str) -> bool:
        return name in self.cookie_blacklist

    def is_query_param_anonymized(self, name: str) -> bool:
        return name in self.anonymized_query_params

    def with_cookie_blacklist(self, names: Iterable[str]) -> "RedactionPolicy":
        return dataclasses.replace(self, cookie_blacklist=frozenset(names))

    def with_anonymized_query_params(self, names: Iterable[str]) -> "RedactionPolicy":
        return dataclasses.replace(self, anonymized_query_params=frozenset(names))


class RedactionPolicyHolder:
    """Atomically replaceable handle on the current :class:`RedactionPolicy`."""

    def __init__(self, policy: RedactionPolicy | None = None) -> None:
        self._policy = policy or RedactionPolicy()
        self._lock = threading.Lock()

    def get(self) -> RedactionPolicy:
        return self._policy

    def replace(self, policy: RedactionPolicy) -> None:
        with self._lock:
            self._policy = policy

    def set_cookie_blacklist(self, names: Iterable[str]) -> None:
        """Replace (not extend) the cookie blacklist."""
        with self._lock:
            self._policy = self._policy.with_cookie_blacklist(names)

    def set_anonymized_query_params(self, names: Iterable[str]) -> None:
        """Replace (not extend) the anonymized query parameter names."""
        with self._lock:
            self._policy = self._policy.with_anonymized_query_params(names)

    def reset(self) -> None:
        self.replace(RedactionPolicy())


default_policy = RedactionPolicyHolder()


__all__ = ["MASK", "RedactionPolicy", "RedactionPolicyHolder", "default_policy"]
