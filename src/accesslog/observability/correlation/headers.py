"""Observability – correlation header contract.

Two independent identifiers travel in request headers: the request
correlation id and the user correlation id.  This layer propagates them;
it only mints a request correlation id when explicitly asked to.
"""
from __future__ import annotations

import dataclasses
import random
import string
from collections.abc import Mapping, MutableMapping
from typing import Any

_TOKEN_ALPHABET = string.ascii_letters + string.digits
_TOKEN_LENGTH = 10


@dataclasses.dataclass(frozen=True)
class CorrelationHeaders:
    """Names of the headers carrying the correlation identifiers."""

    request: str = "X-Correlation-Id"
    user: str = "X-User-Correlation-Id"


DEFAULT_HEADERS = CorrelationHeaders()


def get_header(headers: Mapping[str, str], name: str) -> str | None:
    """Case-insensitive header lookup returning ``None`` for empty values.

    Works with plain dicts as well as the case-insensitive header
    containers of starlette and httpx.
    """
    value = headers.get(name)
    if value is None:
        lowered = name.lower()
        for key, candidate in headers.items():
            if key.lower() == lowered:
                value = candidate
                break
    return value or None


def get_correlation_id(headers: Mapping[str, str], header_name: str | None = None) -> str | None:
    return get_header(headers, header_name or DEFAULT_HEADERS.request)


def get_user_correlation_id(headers: Mapping[str, str], header_name: str | None = None) -> str | None:
    return get_header(headers, header_name or DEFAULT_HEADERS.user)


def mint_correlation_id() -> str:
    """Return a 10-character ``[A-Za-z0-9]`` token.

    Uniqueness is probabilistic and the token carries no security meaning.
    """
    return "".join(random.choices(_TOKEN_ALPHABET, k=_TOKEN_LENGTH))


def ensure_correlation_id(
    scope: MutableMapping[str, Any],
    *,
    header_name: str | None = None,
    mint: bool = False,
) -> str | None:
    """Return the request correlation id of an ASGI *scope*.

    When the header is missing and *mint* is set, a fresh token is written
    into ``scope["headers"]`` so that everything downstream reads the same
    value.  Without *mint* a missing id stays missing.
    """
    name = (header_name or DEFAULT_HEADERS.request).lower().encode("latin-1")
    raw_headers: list[tuple[bytes, bytes]] = list(scope.get("headers") or [])
    for key, value in raw_headers:
        if key.lower() == name and value:
            return value.decode("latin-1")

    if not mint:
        return None

    correlation_id = mint_correlation_id()
    raw_headers.append((name, correlation_id.encode("latin-1")))
    scope["headers"] = raw_headers
    return correlation_id


__all__ = [
    "DEFAULT_HEADERS",
    "CorrelationHeaders",
    "ensure_correlation_id",
    "get_correlation_id",
    "get_header",
    "get_user_correlation_id",
    "mint_correlation_id",
]
