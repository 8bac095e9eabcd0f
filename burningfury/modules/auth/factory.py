"""
Authentication Factory following Black Box Design principles.

This factory:
- Constructs the authentication stack based on configuration
- Wires dependencies together
- Returns only the service facade (hiding implementation)
"""

import logging

from ...config.provider import ConfigProvider
from .api_key import ApiKeyValidator
from .service import AuthenticationService, Authenticator
from .token_validator import TokenValidator

logger = logging.getLogger(__name__)


class AuthFactory:
    """
    Factory for building the authentication stack.

    This is the composition root that:
    - Creates all auth components
    - Wires them together via dependency injection
    - Returns only the public interface
    """

    @staticmethod
    def build(config_provider: ConfigProvider) -> AuthenticationService:
        """
        Build the complete authentication stack.

        Args:
            config_provider: Configuration provider

        Returns:
            AuthenticationService facade (hides all implementation details)
        """
        auth_config = config_provider.get_auth_config()
        auth0_config = config_provider.get_auth0_config()

        api_key_validator = ApiKeyValidator(auth_config.api_keys)
        token_validator = TokenValidator(auth0_config)

        if auth0_config.is_configured:
            logger.info(f"Bearer token validation enabled for issuer {auth0_config.issuer}")
        else:
            logger.warning("Identity provider not configured - bearer tokens will be rejected")

        if api_key_validator.enabled:
            logger.info(f"API key authentication enabled with {len(api_key_validator.api_keys)} key(s)")
        else:
            logger.info("No API keys configured - API key scheme will defer")

        return Authenticator(api_key_validator=api_key_validator, token_validator=token_validator)
