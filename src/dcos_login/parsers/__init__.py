"""HTML parsing utilities for login flow responses."""

from .base import Document
from .pages import (
    AuthorizationDecision,
    ClusterIdentity,
    Granted,
    NeedsConfirmation,
    parse_authorization,
    parse_cluster_identity,
    parse_csrf_token,
    parse_token_page,
)

__all__ = [
    "Document",
    "AuthorizationDecision",
    "ClusterIdentity",
    "Granted",
    "NeedsConfirmation",
    "parse_authorization",
    "parse_cluster_identity",
    "parse_csrf_token",
    "parse_token_page",
]
