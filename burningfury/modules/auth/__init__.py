"""
Authentication Module - Black Box Interface

Purpose: Validate bearer tokens and API keys
Interface: AuthFactory.build(), Authenticator.authenticate()
Hidden: Scheme selection, signing-key fetching, key formats

This module can be completely replaced with any other auth implementation
without affecting other modules.
"""

from .api_key import ApiKeyValidator
from .factory import AuthFactory
from .interfaces import AuthOutcome, Identity, OutcomeStatus, RequestCredentials
from .selector import AuthScheme, extract_credentials, select_scheme
from .service import AuthenticationService, Authenticator
from .token_validator import TokenValidator

__all__ = [
    "ApiKeyValidator",
    "AuthFactory",
    "AuthOutcome",
    "AuthScheme",
    "AuthenticationService",
    "Authenticator",
    "Identity",
    "OutcomeStatus",
    "RequestCredentials",
    "TokenValidator",
    "extract_credentials",
    "select_scheme",
]
