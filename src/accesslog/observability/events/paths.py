"""Observability – redacted paths, full URLs and the remote address."""
from __future__ import annotations

from collections.abc import Mapping
from urllib.parse import parse_qsl, unquote_plus, urlencode

from accesslog.observability.correlation import get_header
from accesslog.observability.redaction import MASK, RedactionPolicy


def build_redacted_path(path: str, query: str, policy: RedactionPolicy) -> str:
    """Return ``path?query`` with anonymized parameter values masked.

    Parameter order is kept and the query is percent-decoded for
    readability; no ``?`` is appended when there are no parameters.
    """
    pairs = parse_qsl(query, keep_blank_values=True)
    if not pairs:
        return path
    redacted = [
        (name, MASK if policy.is_query_param_anonymized(name) else value)
        for name, value in pairs
    ]
    return f"{path}?{unquote_plus(urlencode(redacted))}"


def build_full_url(
    scheme: str,
    hostname: str,
    port: int | None,
    path: str,
    query: str,
    policy: RedactionPolicy,
) -> str:
    authority = hostname if port is None else f"{hostname}:{port}"
    return f"{scheme}://{authority}{build_redacted_path(path, query, policy)}"


def _peer_host(peer: str | None) -> str:
    if not peer:
        return ""
    if peer.startswith("["):
        return peer[1:].split("]")[0]
    if peer.count(":") > 1:
        return peer
    return peer.split(":")[0]


def get_remote_ip(headers: Mapping[str, str], peer: str | None) -> str:
    """``X-Cluster-Client-Ip``, then ``X-Real-Ip``, then the peer host.

    The peer host is the address before the port separator; bare and
    bracketed IPv6 addresses are kept whole.
    """
    return (
        get_header(headers, "X-Cluster-Client-Ip")
        or get_header(headers, "X-Real-Ip")
        or _peer_host(peer)
    )


__all__ = ["build_full_url", "build_redacted_path", "get_remote_ip"]
