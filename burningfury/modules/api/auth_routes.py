"""
Authentication endpoints.

Health, identity echo and identity-provider discovery for clients.
"""

import logging
from datetime import UTC, datetime
from typing import Dict

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ...config.provider import APIConfig, Auth0Config
from ..auth.interfaces import Identity
from ..middleware.visibility import allow_anonymous
from ..players import PlayerStore
from .dependencies import get_identity, get_player_store, require_identity

logger = logging.getLogger(__name__)


def claims_list(identity: Identity) -> list:
    return [{"type": key, "value": value} for key, value in identity.claims.items()]


def create_auth_router(auth0_config: Auth0Config, api_config: APIConfig) -> APIRouter:
    """
    Create the authentication router with injected configuration.

    Args:
        auth0_config: Identity provider configuration
        api_config: API configuration (environment name)

    Returns:
        FastAPI router mounted at /api/auth
    """
    router = APIRouter(prefix="/api/auth", tags=["Authentication"])

    @router.get("/health")
    @allow_anonymous
    async def auth_health(store: PlayerStore = Depends(get_player_store)):
        """
        Report process and storage health.

        Returns:
            200: Service running (storage may still be disconnected)
            500: Health check itself failed
        """
        try:
            storage_ok = await store.ping()
            return {
                "status": "Healthy",
                "timestamp": datetime.now(UTC).isoformat(),
                "message": "BurningFury API is running",
                "database": "Connected" if storage_ok else "Disconnected",
                "environment": api_config.environment,
            }
        except Exception as e:
            logger.error(f"Health check failed: {e}")
            return JSONResponse(
                status_code=500,
                content={
                    "status": "Unhealthy",
                    "timestamp": datetime.now(UTC).isoformat(),
                    "message": "Health check failed",
                },
            )

    @router.get("/validate")
    async def validate(identity: Identity = Depends(require_identity)) -> Dict:
        """Echo the resolved identity and its claims."""
        logger.info(f"Token validated for user {identity.subject}")
        return {
            "valid": True,
            "userId": identity.subject,
            "email": identity.email,
            "name": identity.name,
            "authMethod": identity.method,
            "issuedAt": identity.claims.get("iat"),
            "expiresAt": identity.claims.get("exp"),
            "audience": identity.claims.get("aud"),
            "issuer": identity.claims.get("iss"),
            "allClaims": claims_list(identity),
        }

    @router.get("/config")
    @allow_anonymous
    async def auth_config() -> Dict:
        """
        Get identity provider configuration for clients.

        Returns:
            Domain, audience and the provider's well-known endpoints
        """
        return {
            "domain": auth0_config.domain,
            "audience": auth0_config.audience,
            "tokenEndpoint": auth0_config.token_endpoint,
            "authorizeEndpoint": auth0_config.authorize_endpoint,
            "userInfoEndpoint": auth0_config.userinfo_endpoint,
            "jwksUri": auth0_config.jwks_uri,
        }

    @router.get("/test-anonymous")
    @allow_anonymous
    async def test_anonymous(request: Request) -> Dict:
        """Report whether the caller was authenticated on a public route."""
        identity = get_identity(request)
        return {
            "message": "Anonymous access is working!",
            "timestamp": datetime.now(UTC).isoformat(),
            "isAuthenticated": identity is not None,
            "requestPath": request.url.path,
            "method": request.method,
            "hasAuthorizationHeader": "authorization" in request.headers,
        }

    return router
