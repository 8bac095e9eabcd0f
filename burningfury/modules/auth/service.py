"""
Authentication Service Facade following Black Box Design principles.

This module provides:
- A single pipeline composing scheme selection, validation and logging
- Standardized authentication outcomes
- Protocol definitions for swappable implementations
"""

import logging
from typing import Protocol

from .interfaces import AuthOutcome, CredentialValidator, OutcomeStatus, RequestCredentials
from .selector import AuthScheme, select_scheme

logger = logging.getLogger(__name__)


class AuthenticationService(Protocol):
    """Protocol for authentication services."""

    async def authenticate(self, credentials: RequestCredentials) -> AuthOutcome:
        """
        Authenticate a request.

        Args:
            credentials: Credential material extracted from the request

        Returns:
            AuthOutcome with authentication status and details
        """
        ...


class Authenticator:
    """
    Default implementation of AuthenticationService.

    Runs Selector -> Validator and logs the result. Validators are pure
    functions of (credentials, immutable config), so one instance is shared
    by all requests.
    """

    def __init__(self, api_key_validator: CredentialValidator, token_validator: CredentialValidator):
        """
        Initialize with the two credential validators.

        Args:
            api_key_validator: Validator for X-Api-Key / ?api_key= credentials
            token_validator: Validator for Authorization: Bearer credentials
        """
        self._validators = {
            AuthScheme.API_KEY: api_key_validator,
            AuthScheme.TOKEN: token_validator,
        }

    async def authenticate(self, credentials: RequestCredentials) -> AuthOutcome:
        """Select a scheme, validate with it, and log the outcome."""
        scheme = select_scheme(credentials)
        outcome = await self._validators[scheme].validate(credentials)

        if outcome.status is OutcomeStatus.SUCCESS:
            logger.info(
                f"Authenticated via {scheme.value} for {credentials.path}: "
                f"subject={outcome.identity.subject}"
            )
        elif outcome.status is OutcomeStatus.FAILED:
            logger.warning(
                f"Authentication via {scheme.value} failed for {credentials.path}: {outcome.reason}"
            )
        else:
            logger.debug(f"No {scheme.value} credential for {credentials.path}")

        return outcome
