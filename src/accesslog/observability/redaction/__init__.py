"""Observability – redaction of cookies and query parameters."""
from accesslog.observability.redaction.policy import (
    MASK,
    RedactionPolicy,
    RedactionPolicyHolder,
    default_policy,
)

__all__ = ["MASK", "RedactionPolicy", "RedactionPolicyHolder", "default_policy"]
