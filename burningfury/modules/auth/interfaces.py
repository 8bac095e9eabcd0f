"""Authentication interfaces following Black Box Design principles."""
import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Literal, Mapping, Optional, Protocol

AuthMethod = Literal["token", "api_key"]

API_KEY_HEADER = "X-Api-Key"
API_KEY_QUERY_PARAM = "api_key"
NAME_IDENTIFIER_CLAIM = "http://schemas.xmlsoap.org/ws/2005/05/identity/claims/nameidentifier"


@dataclass(frozen=True)
class Identity:
    """Authenticated caller, valid for the lifetime of one request."""
    subject: str
    method: AuthMethod
    name: Optional[str] = None
    email: Optional[str] = None
    claims: Dict[str, str] = field(default_factory=dict)

    @staticmethod
    def stringify_claims(claims: Mapping[str, Any]) -> Dict[str, str]:
        """Render claim values as text; non-string values become JSON."""
        return {
            key: value if isinstance(value, str) else json.dumps(value)
            for key, value in claims.items()
        }


class OutcomeStatus(str, Enum):
    """Result tag of a credential validation."""

    SUCCESS = "success"
    NO_RESULT = "no_result"
    FAILED = "failed"


@dataclass(frozen=True)
class AuthOutcome:
    """Tagged validation result: Success(identity) | NoResult | Failed(reason)."""
    status: OutcomeStatus
    identity: Optional[Identity] = None
    reason: Optional[str] = None

    @classmethod
    def success(cls, identity: Identity) -> "AuthOutcome":
        return cls(OutcomeStatus.SUCCESS, identity=identity)

    @classmethod
    def no_result(cls) -> "AuthOutcome":
        return cls(OutcomeStatus.NO_RESULT)

    @classmethod
    def failed(cls, reason: str) -> "AuthOutcome":
        return cls(OutcomeStatus.FAILED, reason=reason)

    @property
    def ok(self) -> bool:
        return self.status is OutcomeStatus.SUCCESS


@dataclass(frozen=True)
class RequestCredentials:
    """Credential material extracted from a request, nothing validated yet."""
    path: str
    api_key_header: Optional[str] = None
    api_key_query: Optional[str] = None
    authorization: Optional[str] = None
    remote_addr: Optional[str] = None

    @property
    def has_api_key(self) -> bool:
        return self.api_key_header is not None or self.api_key_query is not None

    @property
    def api_key(self) -> Optional[str]:
        if self.api_key_header is not None:
            return self.api_key_header
        return self.api_key_query


class CredentialValidator(Protocol):
    """Protocol for credential validators - allows swappable implementations."""

    async def validate(self, credentials: RequestCredentials) -> AuthOutcome:
        """
        Validate request credentials.

        Expected failures (bad signature, expired token, unknown key) are
        returned as FAILED outcomes, never raised.
        """
        ...
