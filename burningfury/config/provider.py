"""Configuration provider following Black Box Design principles."""
import os
from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Protocol


@dataclass(frozen=True)
class Auth0Config:
    """Identity provider configuration."""
    domain: Optional[str]
    audience: Optional[str]
    algorithms: List[str] = field(default_factory=lambda: ["RS256"])

    @property
    def is_configured(self) -> bool:
        """Check if the identity provider is properly configured."""
        return bool(self.domain) and bool(self.audience)

    def _url(self, path: str) -> Optional[str]:
        if not self.domain:
            return None
        return f"https://{self.domain}/{path}"

    @property
    def issuer(self) -> Optional[str]:
        return self._url("")

    @property
    def jwks_uri(self) -> Optional[str]:
        return self._url(".well-known/jwks.json")

    @property
    def token_endpoint(self) -> Optional[str]:
        return self._url("oauth/token")

    @property
    def authorize_endpoint(self) -> Optional[str]:
        return self._url("authorize")

    @property
    def userinfo_endpoint(self) -> Optional[str]:
        return self._url("userinfo")


@dataclass(frozen=True)
class APIConfig:
    """API configuration."""
    port: int
    host: str
    log_level: str
    environment: str
    cors_origins: List[str]

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"


@dataclass(frozen=True)
class AuthConfig:
    """Authentication configuration."""
    api_keys: FrozenSet[str]
    suppress_challenge: bool = False


@dataclass(frozen=True)
class StorageConfig:
    """Storage configuration."""
    redis_url: str


@dataclass(frozen=True)
class FeedbackConfig:
    """Feedback forwarding configuration."""
    webhook_url: Optional[str]
    rate_limit: int = 10
    rate_window_seconds: int = 3600
    timeout_seconds: float = 10.0


class ConfigProvider(Protocol):
    """Protocol for configuration providers."""

    def get_api_config(self) -> APIConfig:
        """Get API configuration."""
        ...

    def get_auth0_config(self) -> Auth0Config:
        """Get identity provider configuration."""
        ...

    def get_auth_config(self) -> AuthConfig:
        """Get authentication configuration."""
        ...

    def get_storage_config(self) -> StorageConfig:
        """Get storage configuration."""
        ...

    def get_feedback_config(self) -> FeedbackConfig:
        """Get feedback configuration."""
        ...


def parse_api_keys(raw: Optional[str]) -> FrozenSet[str]:
    """Split a comma-separated key list, trimming entries and dropping blanks."""
    if not raw:
        return frozenset()
    return frozenset(key.strip() for key in raw.split(",") if key.strip())


class EnvConfigProvider:
    """Environment-based configuration provider."""

    def get_api_config(self) -> APIConfig:
        """Get API configuration from environment variables."""
        return APIConfig(
            port=int(os.getenv("API_PORT", "8080")),
            host=os.getenv("API_HOST", "0.0.0.0"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            environment=os.getenv("ENVIRONMENT", "production"),
            cors_origins=os.getenv("CORS_ORIGINS", "*").split(","),
        )

    def get_auth0_config(self) -> Auth0Config:
        """Get identity provider configuration from environment variables."""
        return Auth0Config(
            domain=os.getenv("AUTH0_DOMAIN") or None,
            audience=os.getenv("AUTH0_AUDIENCE") or None,
        )

    def get_auth_config(self) -> AuthConfig:
        """Get authentication configuration from environment variables."""
        # An empty key set is valid: the API-key scheme then defers on every request
        return AuthConfig(
            api_keys=parse_api_keys(os.getenv("API_KEYS")),
            suppress_challenge=os.getenv("AUTH_SUPPRESS_CHALLENGE", "false").lower() == "true",
        )

    def get_storage_config(self) -> StorageConfig:
        """Get storage configuration from environment variables."""
        return StorageConfig(redis_url=os.getenv("REDIS_URL", "redis://localhost:6379/0"))

    def get_feedback_config(self) -> FeedbackConfig:
        """Get feedback configuration from environment variables."""
        return FeedbackConfig(
            webhook_url=os.getenv("FEEDBACK_WEBHOOK_URL") or None,
            rate_limit=int(os.getenv("FEEDBACK_RATE_LIMIT", "10")),
            rate_window_seconds=int(os.getenv("FEEDBACK_RATE_WINDOW_SECONDS", "3600")),
            timeout_seconds=float(os.getenv("FEEDBACK_TIMEOUT_SECONDS", "10")),
        )
