import logging
import uuid
from typing import Dict, List, Optional

from ..api.errors import ValidationFailure
from ..api.models import PaginatedResult, Player, PlayerInput, SearchParameters
from .pagination import paginate

logger = logging.getLogger(__name__)

PLAYER_KEY_PREFIX = "player:"
PLAYER_INDEX_KEY = "players:all"


class PlayerStore:
    def __init__(self, redis_client):
        """
        Initialize player store.

        Args:
            redis_client: Async Redis client (decode_responses=True)
        """
        self.redis = redis_client

    @staticmethod
    def _key(player_id: uuid.UUID) -> str:
        return f"{PLAYER_KEY_PREFIX}{player_id}"

    @staticmethod
    def _to_hash(player: Player) -> Dict[str, str]:
        return {
            "id": str(player.id),
            "region": player.region,
            "realm": player.realm,
            "name": player.name,
            "main_raid": "1" if player.main_raid else "0",
        }

    @staticmethod
    def _from_hash(data: Dict[str, str]) -> Player:
        return Player(
            id=uuid.UUID(data["id"]),
            region=data["region"],
            realm=data["realm"],
            name=data["name"],
            main_raid=data.get("main_raid") == "1",
        )

    @staticmethod
    def _require_fields(data: PlayerInput) -> None:
        if not data.name.strip() or not data.region.strip() or not data.realm.strip():
            raise ValidationFailure(details="Name, Region, and Realm are required")

    async def ping(self) -> bool:
        """Check the storage connection."""
        try:
            return bool(await self.redis.ping())
        except Exception as e:
            logger.error(f"Storage connection check failed: {e}")
            return False

    async def create(self, data: PlayerInput) -> Player:
        """
        Create a player with a fresh server-assigned id.

        Raises:
            ValidationFailure: If name, region or realm is blank
        """
        self._require_fields(data)
        player = Player(id=uuid.uuid4(), **data.model_dump())

        async with self.redis.pipeline(transaction=True) as pipe:
            pipe.hset(self._key(player.id), mapping=self._to_hash(player))
            pipe.sadd(PLAYER_INDEX_KEY, str(player.id))
            await pipe.execute()

        logger.info(f"Player created with id {player.id}")
        return player

    async def get(self, player_id: uuid.UUID) -> Optional[Player]:
        """Get a player, or None if not found."""
        data = await self.redis.hgetall(self._key(player_id))
        if not data:
            return None
        return self._from_hash(data)

    async def update(self, player_id: uuid.UUID, data: PlayerInput) -> Optional[Player]:
        """
        Replace all mutable fields of a player.

        Returns:
            The updated player, or None if no player has this id
        """
        self._require_fields(data)
        key = self._key(player_id)
        player = Player(id=player_id, **data.model_dump())

        async def replace(pipe) -> Optional[Player]:
            # WATCH on key: a concurrent delete aborts EXEC and the check reruns
            if not await pipe.exists(key):
                return None
            pipe.multi()
            pipe.hset(key, mapping=self._to_hash(player))
            return player

        updated = await self.redis.transaction(replace, key, value_from_callable=True)
        if updated is not None:
            logger.info(f"Player {player_id} updated")
        return updated

    async def delete(self, player_id: uuid.UUID) -> bool:
        """Delete a player. Returns False if it did not exist."""
        async with self.redis.pipeline(transaction=True) as pipe:
            pipe.delete(self._key(player_id))
            pipe.srem(PLAYER_INDEX_KEY, str(player_id))
            removed, _ = await pipe.execute()

        if removed:
            logger.info(f"Player with id {player_id} deleted")
        else:
            logger.warning(f"Player with id {player_id} not found for deletion")
        return bool(removed)

    async def list_all(self) -> List[Player]:
        """Get every stored player."""
        ids = await self.redis.smembers(PLAYER_INDEX_KEY)
        players = []
        for player_id in ids:
            data = await self.redis.hgetall(f"{PLAYER_KEY_PREFIX}{player_id}")
            if data:
                players.append(self._from_hash(data))
        return players

    async def list_paginated(self, parameters: SearchParameters) -> PaginatedResult[Player]:
        """Get one page of players matching the search term, ordered by name."""
        return paginate(await self.list_all(), parameters)
