"""
Scheme selection.

Decides which credential validator governs a request from header and query
presence only, before any cryptographic work is done.
"""

from enum import Enum
from typing import Mapping

from .interfaces import API_KEY_HEADER, API_KEY_QUERY_PARAM, RequestCredentials


class AuthScheme(str, Enum):
    """Authentication schemes supported by the API."""

    API_KEY = "api_key"
    TOKEN = "token"


def select_scheme(credentials: RequestCredentials) -> AuthScheme:
    """Pick the API-key scheme when a key is offered anywhere, otherwise the token scheme."""
    if credentials.has_api_key:
        return AuthScheme.API_KEY
    return AuthScheme.TOKEN


def extract_credentials(
    path: str,
    headers: Mapping[str, str],
    query_params: Mapping[str, str],
    remote_addr=None,
) -> RequestCredentials:
    """
    Collect credential material from raw request data.

    Args:
        path: Request path, used for logging
        headers: Case-insensitive header mapping (Starlette Headers)
        query_params: Query parameter mapping
        remote_addr: Client address, used for logging

    Returns:
        RequestCredentials with whatever was present
    """
    return RequestCredentials(
        path=path,
        api_key_header=headers.get(API_KEY_HEADER),
        api_key_query=query_params.get(API_KEY_QUERY_PARAM),
        authorization=headers.get("Authorization"),
        remote_addr=remote_addr,
    )
