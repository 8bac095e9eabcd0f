"""
Player endpoints.

All endpoints require authentication except the full listing.
"""

import logging
import uuid
from typing import Dict, List

from fastapi import APIRouter, Depends, Request, Response

from ..auth.interfaces import Identity
from ..middleware.visibility import allow_anonymous
from ..players import PlayerStore
from .auth_routes import claims_list
from .dependencies import get_player_store, require_identity
from .errors import NotFound
from .models import Player, PlayerInput

logger = logging.getLogger(__name__)


def create_players_router() -> APIRouter:
    """Create the /api/players router."""
    router = APIRouter(prefix="/api/players", tags=["Players"])

    @router.get("", response_model=List[Player])
    @allow_anonymous
    async def list_players(store: PlayerStore = Depends(get_player_store)):
        """Get all players. Public."""
        logger.info("Public access: All players requested")
        return await store.list_all()

    # Registered before /{player_id} so "me" is never read as an id
    @router.get("/me")
    async def current_user(identity: Identity = Depends(require_identity)) -> Dict:
        """Get the authenticated caller's identity."""
        return {
            "userId": identity.subject,
            "email": identity.email,
            "name": identity.name,
            "claims": claims_list(identity),
        }

    @router.get("/{player_id}", response_model=Player)
    async def get_player(
        player_id: uuid.UUID,
        identity: Identity = Depends(require_identity),
        store: PlayerStore = Depends(get_player_store),
    ):
        """
        Get a player by id.

        Returns:
            200: Player
            404: Player not found
            401: Unauthorized
        """
        logger.info(f"User {identity.subject} requested player {player_id}")
        player = await store.get(player_id)
        if player is None:
            raise NotFound(f"Player with id {player_id} not found")
        return player

    @router.post("", response_model=Player, status_code=201)
    async def create_player(
        payload: PlayerInput,
        request: Request,
        response: Response,
        identity: Identity = Depends(require_identity),
        store: PlayerStore = Depends(get_player_store),
    ):
        """
        Create a player.

        Returns:
            201: Player created, Location points at GET /api/players/{id}
            400: Missing or invalid fields
            401: Unauthorized
        """
        logger.info(f"User {identity.subject} attempting to create player")
        player = await store.create(payload)
        response.headers["Location"] = str(request.url_for("get_player", player_id=str(player.id)))
        logger.info(f"User {identity.subject} created player {player.id}")
        return player

    @router.put("/{player_id}", response_model=Player)
    async def update_player(
        player_id: uuid.UUID,
        payload: PlayerInput,
        identity: Identity = Depends(require_identity),
        store: PlayerStore = Depends(get_player_store),
    ):
        """
        Replace a player's fields.

        Returns:
            200: Updated player
            400: Missing or invalid fields
            404: Player not found
        """
        logger.info(f"User {identity.subject} attempting to update player {player_id}")
        player = await store.update(player_id, payload)
        if player is None:
            raise NotFound(f"Player with id {player_id} not found")
        return player

    @router.delete("/{player_id}", status_code=204)
    async def delete_player(
        player_id: uuid.UUID,
        identity: Identity = Depends(require_identity),
        store: PlayerStore = Depends(get_player_store),
    ):
        """
        Delete a player.

        Returns:
            204: Deleted
            404: Player not found
        """
        logger.info(f"User {identity.subject} attempting to delete player {player_id}")
        if not await store.delete(player_id):
            raise NotFound(f"Player with id {player_id} not found")
        logger.info(f"User {identity.subject} deleted player {player_id}")
        return Response(status_code=204)

    return router
