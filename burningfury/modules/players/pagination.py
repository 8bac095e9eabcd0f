"""
Pagination and search over player records.

Pure functions: the same records and parameters always produce the same page.
"""

from typing import Iterable, List

from ..api.models import PaginatedResult, Player, SearchParameters


def sort_key(player: Player):
    """Name ascending, case-insensitive; exact name then id break ties."""
    return (player.name.casefold(), player.name, str(player.id))


def matches(player: Player, search: str) -> bool:
    """Case-insensitive substring match on the player name."""
    return search.casefold() in player.name.casefold()


def paginate(players: Iterable[Player], parameters: SearchParameters) -> PaginatedResult[Player]:
    """
    Select one page of players.

    Args:
        players: Candidate records in any order
        parameters: Search term and paging; normalized before use

    Returns:
        PaginatedResult with the page window and the count of all matches.
        A page past the end yields no items but the same totals.
    """
    params = parameters.normalized()

    candidates: List[Player] = list(players)
    if params.search:
        candidates = [p for p in candidates if matches(p, params.search)]

    total_items = len(candidates)
    offset = (params.page - 1) * params.page_size
    window = sorted(candidates, key=sort_key)[offset:offset + params.page_size]

    return PaginatedResult[Player](
        items=window,
        page=params.page,
        page_size=params.page_size,
        total_items=total_items,
    )
