"""
Bearer token validator implementing CredentialValidator.

This module follows Black Box Design principles:
- Implements the CredentialValidator protocol
- Accepts configuration via dependency injection
- No direct environment variable access
"""

import asyncio
import logging
from typing import Any, Dict, Optional

import jwt
from jwt import PyJWKClient

from ...config.provider import Auth0Config
from .interfaces import (
    NAME_IDENTIFIER_CLAIM,
    AuthOutcome,
    CredentialValidator,
    Identity,
    RequestCredentials,
)

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token of a Bearer Authorization header, or None."""
    if not authorization:
        return None
    if authorization[: len(BEARER_PREFIX)].lower() != BEARER_PREFIX.lower():
        return None
    token = authorization[len(BEARER_PREFIX):].strip()
    return token or None


class TokenValidator(CredentialValidator):
    """
    Validates JWT bearer tokens issued by the identity provider.

    This class is a black box that:
    - Verifies signatures against the provider's published signing keys
    - Requires exact issuer and audience matches
    - Rejects expired tokens with zero clock-skew tolerance
    """

    def __init__(self, config: Auth0Config, jwks_client: Optional[PyJWKClient] = None):
        """
        Initialize token validator with injected config.

        Args:
            config: Identity provider configuration
            jwks_client: Optional pre-built JWKS client (tests inject fakes)
        """
        self.config = config
        self.issuer = config.issuer
        self.audience = config.audience
        self.jwks_uri = config.jwks_uri
        self.algorithms = list(config.algorithms)

        self.jwks_client = jwks_client
        if self.jwks_client is None and config.is_configured:
            self.jwks_client = PyJWKClient(
                self.jwks_uri,
                cache_keys=True,
                lifespan=3600  # Cache keys for 1 hour
            )

    async def validate(self, credentials: RequestCredentials) -> AuthOutcome:
        """
        Validate the bearer token carried by the request.

        Returns:
            NO_RESULT when no bearer token is present, SUCCESS with an
            Identity when the token verifies, FAILED with a reason otherwise
        """
        token = extract_bearer_token(credentials.authorization)
        if token is None:
            return AuthOutcome.no_result()

        if not self.config.is_configured or self.jwks_client is None:
            return AuthOutcome.failed("token authentication is not configured")

        try:
            # PyJWKClient fetches over blocking I/O on a cache miss
            signing_key = await asyncio.to_thread(
                self.jwks_client.get_signing_key_from_jwt, token
            )
            claims = jwt.decode(
                token,
                signing_key.key,
                algorithms=self.algorithms,
                audience=self.audience,
                issuer=self.issuer,
                leeway=0,
                options={
                    "verify_signature": True,
                    "verify_aud": True,
                    "verify_iss": True,
                    "verify_exp": True,
                    "require": ["exp"]
                }
            )
        except jwt.ExpiredSignatureError:
            return AuthOutcome.failed("token expired")
        except jwt.InvalidAudienceError:
            return AuthOutcome.failed(f"invalid audience (expected {self.audience})")
        except jwt.InvalidIssuerError:
            return AuthOutcome.failed(f"invalid issuer (expected {self.issuer})")
        except jwt.InvalidSignatureError:
            return AuthOutcome.failed("invalid signature")
        except jwt.PyJWKClientError as e:
            return AuthOutcome.failed(f"signing key unavailable: {e}")
        except jwt.InvalidTokenError as e:
            return AuthOutcome.failed(f"invalid token: {e}")

        identity = self.build_identity(claims)
        if identity is None:
            return AuthOutcome.failed("token has no subject")
        return AuthOutcome.success(identity)

    @staticmethod
    def build_identity(claims: Dict[str, Any]) -> Optional[Identity]:
        """
        Map verified JWT claims to an Identity.

        Args:
            claims: Decoded token claims

        Returns:
            Identity, or None when the token names no subject
        """
        subject = claims.get("sub") or claims.get(NAME_IDENTIFIER_CLAIM)
        if not subject:
            return None
        return Identity(
            subject=str(subject),
            method="token",
            name=claims.get("name", claims.get("nickname")),
            email=claims.get("email"),
            claims=Identity.stringify_claims(claims),
        )
