"""
Public player endpoints.

Paginated, searchable read-only access without authentication.
"""

import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from ..middleware.visibility import allow_anonymous
from ..players import PlayerStore
from .dependencies import get_player_store
from .errors import NotFound, ValidationFailure
from .models import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, PaginatedResult, Player, SearchParameters

logger = logging.getLogger(__name__)

PAGE_SIZE_PARAM = "pageSize"


def resolve_page_size(
    request: Request,
    page_size: Optional[int] = Query(None, alias=PAGE_SIZE_PARAM, description="Items per page (1-100)"),
) -> int:
    """Read the page size in any letter case (pageSize, PageSize, pagesize)."""
    if page_size is not None:
        return page_size
    for name, value in request.query_params.multi_items():
        if name.lower() == PAGE_SIZE_PARAM.lower():
            try:
                return int(value)
            except ValueError:
                raise ValidationFailure(details=[f"{name}: Input should be a valid integer"])
    return DEFAULT_PAGE_SIZE


def create_public_players_router() -> APIRouter:
    """Create the /api/public/publicplayers router."""
    router = APIRouter(prefix="/api/public/publicplayers", tags=["Public Players"])

    @router.get("", response_model=PaginatedResult[Player])
    @allow_anonymous
    async def search_players(
        search: Optional[str] = Query(None, description="Case-insensitive name filter"),
        page: int = Query(1, description="Page number, starting at 1"),
        page_size: int = Depends(resolve_page_size),
        store: PlayerStore = Depends(get_player_store),
    ):
        """
        Get a page of players, optionally filtered by name.

        Returns:
            200: Paginated result ordered by name
            400: page < 1 or pageSize outside [1, 100]
        """
        if page < 1:
            raise ValidationFailure(details="Page number must be greater than 0")
        if page_size < 1 or page_size > MAX_PAGE_SIZE:
            raise ValidationFailure(details=f"Page size must be between 1 and {MAX_PAGE_SIZE}")

        logger.info(
            f"Public access: Players requested with search '{search}', page {page}, pageSize {page_size}"
        )
        result = await store.list_paginated(SearchParameters(search=search, page=page, page_size=page_size))
        logger.info(f"Public access: Returned {len(result.items)} players out of {result.total_items} total")
        return result

    @router.get("/{player_id}", response_model=Player)
    @allow_anonymous
    async def get_public_player(player_id: uuid.UUID, store: PlayerStore = Depends(get_player_store)):
        """Get a single player. Public."""
        logger.info(f"Public access: Player {player_id} requested")
        player = await store.get(player_id)
        if player is None:
            raise NotFound(f"Player with id {player_id} not found")
        return player

    return router
