"""
Authentication Middleware Module - Black Box Interface

Purpose: Gate requests on authentication according to route visibility
Interface: AnonymousAwareAuthMiddleware, RouteVisibilityTable, allow_anonymous
Hidden: Credential extraction, outcome reconciliation, error formatting

Completely independent of the routes it protects: visibility comes from
the allow_anonymous mark on endpoint functions.
"""

from .gate import AnonymousAwareAuthMiddleware, GateDecision, decide
from .visibility import RouteVisibilityTable, allow_anonymous, is_anonymous_allowed

__all__ = [
    "AnonymousAwareAuthMiddleware",
    "GateDecision",
    "RouteVisibilityTable",
    "allow_anonymous",
    "decide",
    "is_anonymous_allowed",
]
