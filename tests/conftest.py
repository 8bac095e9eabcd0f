"""
Shared pytest fixtures for BurningFury tests.

This module provides common fixtures including:
- Redis mocks with in-memory data for store tests
- RSA signing keys and a fake JWKS client for bearer token tests
- FastAPI test client wired with stub configuration
"""

import os
import sys
import uuid
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from typing import Any, Dict, Optional
from unittest.mock import AsyncMock, MagicMock

import jwt
import pytest
from cryptography.hazmat.primitives.asymmetric import rsa
from fastapi.testclient import TestClient
from redis.exceptions import WatchError

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from burningfury.config.provider import (
    APIConfig,
    Auth0Config,
    AuthConfig,
    FeedbackConfig,
    StorageConfig,
)
from burningfury.main import create_app
from burningfury.modules.auth import ApiKeyValidator, Authenticator, TokenValidator

AUTH0_DOMAIN = "burningfury.example.auth0.com"
AUTH0_AUDIENCE = "https://api.burningfury.example"
VALID_API_KEY = "bf-test-key-0123456789"


# =============================================================================
# Configuration
# =============================================================================


class StubConfigProvider:
    """ConfigProvider returning fixed test values."""

    def __init__(
        self,
        api_keys=(VALID_API_KEY,),
        suppress_challenge: bool = False,
        environment: str = "production",
        webhook_url: Optional[str] = "https://chat.example.com/api/webhooks/1/abc",
        rate_limit: int = 10,
    ):
        self.api_keys = frozenset(api_keys)
        self.suppress_challenge = suppress_challenge
        self.environment = environment
        self.webhook_url = webhook_url
        self.rate_limit = rate_limit

    def get_api_config(self) -> APIConfig:
        return APIConfig(
            port=8080,
            host="127.0.0.1",
            log_level="INFO",
            environment=self.environment,
            cors_origins=["*"],
        )

    def get_auth0_config(self) -> Auth0Config:
        return Auth0Config(domain=AUTH0_DOMAIN, audience=AUTH0_AUDIENCE)

    def get_auth_config(self) -> AuthConfig:
        return AuthConfig(api_keys=self.api_keys, suppress_challenge=self.suppress_challenge)

    def get_storage_config(self) -> StorageConfig:
        return StorageConfig(redis_url="redis://localhost:6379/15")

    def get_feedback_config(self) -> FeedbackConfig:
        return FeedbackConfig(webhook_url=self.webhook_url, rate_limit=self.rate_limit)


# =============================================================================
# Redis Mocking Infrastructure
# =============================================================================


class FakePipeline:
    """
    Pipeline over the in-memory Redis mock.

    Commands are buffered until ``execute``. After ``watch`` and before
    ``multi`` commands run immediately; ``execute`` raises WatchError when a
    watched key was written in between, like MULTI/EXEC.
    """

    def __init__(self, redis):
        self._redis = redis
        self._stack = []
        self._watched: Dict[str, int] = {}
        self._immediate = False

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        self.reset()

    def reset(self):
        self._stack = []
        self._watched = {}
        self._immediate = False

    async def watch(self, *keys):
        self._watched = {key: self._redis._versions.get(key, 0) for key in keys}
        self._immediate = True

    def multi(self):
        self._immediate = False

    def __getattr__(self, name):
        command = getattr(self._redis, name)

        def call(*args, **kwargs):
            if self._immediate:
                return command(*args, **kwargs)
            self._stack.append((command, args, kwargs))
            return self

        return call

    async def execute(self):
        changed = any(self._redis._versions.get(k, 0) != v for k, v in self._watched.items())
        stack = self._stack
        self.reset()
        if changed:
            raise WatchError("Watched variable changed.")
        return [await command(*args, **kwargs) for command, args, kwargs in stack]


@pytest.fixture
def mock_redis_with_data():
    """
    Redis mock with in-memory data storage for more realistic tests.

    Supports the hash, set, sorted-set, pipeline and WATCH/MULTI operations
    used by the player store and the feedback rate limiter.
    """
    hashes: Dict[str, Dict[str, str]] = {}
    sets: Dict[str, set] = {}
    zsets: Dict[str, Dict[str, float]] = {}
    versions: Dict[str, int] = {}
    ttls: Dict[str, float] = {}

    redis = AsyncMock()

    def touch(key):
        versions[key] = versions.get(key, 0) + 1

    def drop_if_empty(store, key):
        # Redis removes a key once its last member is gone
        if key in store and not store[key]:
            del store[key]
            ttls.pop(key, None)

    async def mock_hset(name, key=None, value=None, mapping=None):
        data = hashes.setdefault(name, {})
        if mapping:
            data.update(mapping)
        if key is not None:
            data[key] = value
        touch(name)
        return len(mapping or {}) + (1 if key is not None else 0)

    async def mock_hgetall(name):
        return dict(hashes.get(name, {}))

    async def mock_exists(*keys):
        return sum(1 for k in keys if k in hashes or k in sets or k in zsets)

    async def mock_delete(*keys):
        count = 0
        for key in keys:
            found = [store.pop(key, None) is not None for store in (hashes, sets, zsets)]
            ttls.pop(key, None)
            if any(found):
                touch(key)
                count += 1
        return count

    async def mock_sadd(name, *values):
        members = sets.setdefault(name, set())
        before = len(members)
        members.update(values)
        touch(name)
        return len(members) - before

    async def mock_srem(name, *values):
        members = sets.get(name, set())
        removed = len(members & set(values))
        members.difference_update(values)
        touch(name)
        drop_if_empty(sets, name)
        return removed

    async def mock_smembers(name):
        return set(sets.get(name, set()))

    async def mock_zadd(name, mapping):
        scores = zsets.setdefault(name, {})
        added = len(set(mapping) - set(scores))
        scores.update(mapping)
        touch(name)
        return added

    async def mock_zrem(name, *members):
        scores = zsets.get(name, {})
        removed = sum(1 for m in members if scores.pop(m, None) is not None)
        touch(name)
        drop_if_empty(zsets, name)
        return removed

    async def mock_zremrangebyscore(name, min_score, max_score):
        scores = zsets.get(name, {})
        doomed = [m for m, s in scores.items() if min_score <= s <= max_score]
        for member in doomed:
            del scores[member]
        touch(name)
        drop_if_empty(zsets, name)
        return len(doomed)

    async def mock_zcard(name):
        return len(zsets.get(name, {}))

    async def mock_zrange(name, start, end, withscores=False):
        ordered = sorted(zsets.get(name, {}).items(), key=lambda item: item[1])
        window = ordered[start:] if end == -1 else ordered[start:end + 1]
        return window if withscores else [m for m, _ in window]

    async def mock_expire(name, seconds):
        if name in zsets or name in hashes or name in sets:
            ttls[name] = seconds
            return True
        return False

    def mock_pipeline(transaction=True):
        return FakePipeline(redis)

    async def mock_transaction(func, *watches, value_from_callable=False):
        async with FakePipeline(redis) as pipe:
            while True:
                try:
                    if watches:
                        await pipe.watch(*watches)
                    value = await func(pipe)
                    result = await pipe.execute()
                    return value if value_from_callable else result
                except WatchError:
                    continue

    redis.hset = mock_hset
    redis.hgetall = mock_hgetall
    redis.exists = mock_exists
    redis.delete = mock_delete
    redis.sadd = mock_sadd
    redis.srem = mock_srem
    redis.smembers = mock_smembers
    redis.zadd = mock_zadd
    redis.zrem = mock_zrem
    redis.zremrangebyscore = mock_zremrangebyscore
    redis.zcard = mock_zcard
    redis.zrange = mock_zrange
    redis.expire = mock_expire
    redis.pipeline = mock_pipeline
    redis.transaction = mock_transaction
    redis.ping = AsyncMock(return_value=True)
    redis._hashes = hashes  # Expose for test assertions
    redis._sets = sets
    redis._zsets = zsets
    redis._versions = versions
    redis._ttls = ttls

    return redis


# =============================================================================
# Bearer Token Infrastructure
# =============================================================================


@pytest.fixture(scope="session")
def rsa_private_key():
    """RSA key pair standing in for the identity provider's signing key."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture
def fake_jwks_client(rsa_private_key):
    """JWKS client returning the test public key for any token."""
    client = MagicMock()
    client.get_signing_key_from_jwt.return_value = SimpleNamespace(key=rsa_private_key.public_key())
    return client


@pytest.fixture
def make_token(rsa_private_key):
    """Factory signing RS256 tokens with valid defaults that tests can override."""

    def _make(key=None, **overrides: Any) -> str:
        now = datetime.now(timezone.utc)
        claims = {
            "sub": "auth0|user-123",
            "name": "Test Raider",
            "email": "raider@example.com",
            "iss": f"https://{AUTH0_DOMAIN}/",
            "aud": AUTH0_AUDIENCE,
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(hours=1)).timestamp()),
        }
        claims.update(overrides)
        claims = {k: v for k, v in claims.items() if v is not None}
        return jwt.encode(claims, key or rsa_private_key, algorithm="RS256", headers={"kid": "test-kid"})

    return _make


# =============================================================================
# Application
# =============================================================================


@pytest.fixture
def config_provider():
    return StubConfigProvider()


@pytest.fixture
def webhook_client():
    """HTTP client mock for the feedback webhook."""
    client = AsyncMock()
    client.post = AsyncMock(return_value=SimpleNamespace(is_success=True, status_code=204))
    return client


@pytest.fixture
def build_client(mock_redis_with_data, fake_jwks_client, webhook_client):
    """Factory creating a TestClient for a given config provider."""
    clients = []

    def _build(provider: StubConfigProvider, raise_server_exceptions: bool = True) -> TestClient:
        auth_service = Authenticator(
            api_key_validator=ApiKeyValidator(provider.get_auth_config().api_keys),
            token_validator=TokenValidator(provider.get_auth0_config(), jwks_client=fake_jwks_client),
        )
        app = create_app(
            config_provider=provider,
            redis_client=mock_redis_with_data,
            http_client=webhook_client,
            auth_service=auth_service,
        )
        client = TestClient(app, raise_server_exceptions=raise_server_exceptions)
        client.__enter__()
        clients.append(client)
        return client

    yield _build

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(build_client, config_provider):
    """TestClient with default stub configuration."""
    return build_client(config_provider)


@pytest.fixture
def auth_headers(make_token):
    return {"Authorization": f"Bearer {make_token()}"}


@pytest.fixture
def api_key_headers():
    return {"X-Api-Key": VALID_API_KEY}


def random_id() -> str:
    return str(uuid.uuid4())


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: Integration tests requiring infrastructure"
    )
