"""
Anonymous-Aware Authentication Gate

Authenticates every request before routing, then reconciles the outcome
with the visibility of the routed endpoint. Public routes never fail on a
bad or missing credential; protected routes reject with a structured 401.
"""

import logging
from enum import Enum

from fastapi import Request
from fastapi.responses import JSONResponse

from ..api.errors import INTERNAL_ERROR_MESSAGE, InvalidCredential, Unauthenticated, error_body
from ..auth.interfaces import AuthOutcome, OutcomeStatus
from ..auth.selector import extract_credentials
from ..auth.service import AuthenticationService
from .visibility import RouteVisibilityTable

logger = logging.getLogger(__name__)

NO_CREDENTIAL_MESSAGE = "Authentication required. Please provide a valid credential."
NO_CREDENTIAL_DETAILS = (
    "The request requires authentication. Include a valid Bearer token in the "
    "Authorization header or an API key in the X-Api-Key header."
)
INVALID_CREDENTIAL_MESSAGE = "Authentication failed. The supplied credential is invalid."
INVALID_CREDENTIAL_DETAILS = "The supplied credential could not be verified."


class GateDecision(str, Enum):
    """Per-request gate state."""

    PENDING = "pending"
    ALLOWED = "allowed"
    REJECTED = "rejected"


def decide(outcome: AuthOutcome, is_public: bool) -> GateDecision:
    """Reconcile a validation outcome with the route's visibility."""
    if outcome.status is OutcomeStatus.SUCCESS:
        return GateDecision.ALLOWED
    if is_public:
        return GateDecision.ALLOWED
    return GateDecision.REJECTED


class AnonymousAwareAuthMiddleware:
    """
    Authentication middleware supporting API keys and bearer tokens.

    Register with ``app.middleware("http")(middleware)`` and install
    ``Depends(middleware.enforce)`` as an application dependency. The
    middleware authenticates; ``enforce`` decides once the route is known.
    """

    def __init__(
        self,
        auth_service: AuthenticationService,
        visibility: RouteVisibilityTable,
        suppress_challenge: bool = False,
    ):
        """
        Initialize the gate.

        Args:
            auth_service: Pipeline running scheme selection and validation
            visibility: Endpoint -> public/protected lookup table
            suppress_challenge: Omit WWW-Authenticate on rejections
        """
        self.auth_service = auth_service
        self.visibility = visibility
        self.suppress_challenge = suppress_challenge

    def rejection(self, outcome: AuthOutcome) -> Unauthenticated:
        """Build the 401 error for a rejected request."""
        if outcome.status is OutcomeStatus.FAILED:
            return InvalidCredential(
                INVALID_CREDENTIAL_MESSAGE,
                INVALID_CREDENTIAL_DETAILS,
                challenge=None if self.suppress_challenge else 'Bearer error="invalid_token"',
            )
        return Unauthenticated(
            NO_CREDENTIAL_MESSAGE,
            NO_CREDENTIAL_DETAILS,
            challenge=None if self.suppress_challenge else "Bearer",
        )

    def reject(self, outcome: AuthOutcome) -> JSONResponse:
        """Build the 401 response for a rejected request."""
        return self.rejection(outcome).to_response()

    async def enforce(self, request: Request) -> None:
        """
        Reconcile the request's outcome with the visibility of the routed endpoint.

        Installed as an application-wide dependency, so it runs after routing
        and before the endpoint's own dependencies.

        Raises:
            Unauthenticated: Protected endpoint without a valid credential
        """
        outcome: AuthOutcome = getattr(request.state, "auth_outcome", None) or AuthOutcome.no_result()
        is_public = self.visibility.resolve(request.scope) is True

        if decide(outcome, is_public) is GateDecision.REJECTED:
            logger.info(f"Rejected {request.method} {request.url.path} ({outcome.status.value})")
            raise self.rejection(outcome)

        if outcome.status is OutcomeStatus.FAILED:
            logger.info(
                f"Allowing anonymous access to {request.url.path} despite credential validation failure"
            )

    async def __call__(self, request: Request, call_next):
        """Authenticate the request and attach the outcome for ``enforce``."""
        credentials = extract_credentials(
            path=request.url.path,
            headers=request.headers,
            query_params=request.query_params,
            remote_addr=request.client.host if request.client else None,
        )

        try:
            outcome = await self.auth_service.authenticate(credentials)
        except Exception as e:
            logger.error(f"Error during authentication for {request.url.path}: {e}")
            return JSONResponse(status_code=500, content=error_body(500, INTERNAL_ERROR_MESSAGE))

        request.state.auth_outcome = outcome
        request.state.identity = outcome.identity
        return await call_next(request)
