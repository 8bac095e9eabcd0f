"""
API key validator.

Validates static pre-shared keys against an allow-list loaded once at
startup. The key set is immutable for the lifetime of the process.
"""

import logging
from typing import FrozenSet, Iterable

from .interfaces import AuthOutcome, CredentialValidator, Identity, RequestCredentials

logger = logging.getLogger(__name__)

API_KEY_CLIENT_NAME = "ApiKeyClient"
SUBJECT_PREFIX_LENGTH = 8


class ApiKeyValidator(CredentialValidator):
    """Authenticates callers presenting a configured API key."""

    def __init__(self, api_keys: Iterable[str]):
        """
        Initialize with the configured keys.

        Args:
            api_keys: Valid keys; entries are trimmed and blanks dropped
        """
        self.api_keys: FrozenSet[str] = frozenset(
            key.strip() for key in api_keys if key and key.strip()
        )

    @property
    def enabled(self) -> bool:
        return bool(self.api_keys)

    async def validate(self, credentials: RequestCredentials) -> AuthOutcome:
        """
        Verify the API key from the X-Api-Key header or the api_key query parameter.

        Returns:
            NO_RESULT when no keys are configured or no key was offered,
            FAILED for an unknown key, SUCCESS otherwise
        """
        # No configured keys: defer so this scheme never blocks a request
        if not self.api_keys:
            return AuthOutcome.no_result()

        key = credentials.api_key
        if key is None:
            return AuthOutcome.no_result()

        if not key.strip() or key not in self.api_keys:
            logger.warning(f"Invalid API key attempt from {credentials.remote_addr or 'unknown'}")
            return AuthOutcome.failed("invalid api key")

        return AuthOutcome.success(
            Identity(
                subject=f"apikey:{key[:SUBJECT_PREFIX_LENGTH]}",
                method="api_key",
                name=API_KEY_CLIENT_NAME,
                claims={
                    "sub": f"apikey:{key[:SUBJECT_PREFIX_LENGTH]}",
                    "name": API_KEY_CLIENT_NAME,
                    "auth_type": "api_key",
                },
            )
        )
