"""
BurningFury shared data models.

These models define the structure of all data passed between
components in the BurningFury system. JSON uses camelCase; PascalCase
input keys are accepted as well.
"""

import math
import uuid
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator
from pydantic.alias_generators import to_camel

MAX_PAGE_SIZE = 100
DEFAULT_PAGE_SIZE = 10

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base model serializing to camelCase and accepting PascalCase input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def lower_pascal_keys(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {
                (key[:1].lower() + key[1:] if isinstance(key, str) else key): value
                for key, value in data.items()
            }
        return data


# Request Models (API Input)


class PlayerInput(CamelModel):
    """Mutable player fields supplied on create and update."""

    region: str = Field(..., description="Player region", min_length=1, max_length=100)
    realm: str = Field(..., description="Player realm", min_length=1, max_length=100)
    name: str = Field(..., description="Character name", min_length=1, max_length=100)
    main_raid: bool = Field(default=False, description="Member of the main raid team")

    @field_validator("region", "realm", "name")
    @classmethod
    def not_blank(cls, v: str) -> str:
        """Reject whitespace-only values."""
        if not v.strip():
            raise ValueError("must not be empty or whitespace")
        return v


class Feedback(CamelModel):
    """Feedback submission. Forwarded, never stored."""

    name: Optional[str] = Field(None, description="Submitter name")
    anonymous: bool = Field(default=False, description="Hide the submitter name")
    message: str = Field(..., description="Feedback text", min_length=3, max_length=2000)


# Domain / Response Models


class Player(PlayerInput):
    """Stored player record."""

    id: uuid.UUID = Field(..., description="Server-assigned identifier")


class SearchParameters(BaseModel):
    """Search and paging input for player listings."""

    search: Optional[str] = None
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    def normalized(self) -> "SearchParameters":
        """Return a copy with page >= 1, page_size in [1, 100] and a trimmed search term."""
        search = self.search.strip() if self.search is not None else None
        return SearchParameters(
            search=search or None,
            page=max(1, self.page),
            page_size=min(MAX_PAGE_SIZE, max(1, self.page_size)),
        )


class PaginatedResult(CamelModel, Generic[T]):
    """One page of results with total-count metadata."""

    items: List[T] = Field(default_factory=list)
    page: int
    page_size: int
    total_items: int

    @computed_field(alias="totalPages")
    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_items / self.page_size) if self.page_size > 0 else 0

    @computed_field(alias="hasPreviousPage")
    @property
    def has_previous_page(self) -> bool:
        return self.page > 1

    @computed_field(alias="hasNextPage")
    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages


class ErrorResponse(BaseModel):
    """Structured error body."""

    StatusCode: int
    Message: str
    Details: Optional[Any] = None
