"""
Players Module - Black Box Interface

Purpose: Persist player records and page through them
Interface: PlayerStore (create/get/update/delete/list), paginate()
Hidden: Redis key layout, ordering and filtering rules
"""

from .pagination import paginate
from .store import PlayerStore

__all__ = ["PlayerStore", "paginate"]
