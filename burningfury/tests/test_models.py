"""
Unit tests for BurningFury data models.
"""

import uuid

import pytest
from pydantic import ValidationError

from burningfury.modules.api.models import Feedback, PaginatedResult, Player, PlayerInput


class TestPlayerInput:
    """Test PlayerInput model validation."""

    def test_valid_player(self):
        player = PlayerInput(region="EU", realm="Silvermoon", name="Thrall", mainRaid=True)

        assert player.main_raid is True
        assert player.model_dump(by_alias=True) == {
            "region": "EU",
            "realm": "Silvermoon",
            "name": "Thrall",
            "mainRaid": True,
        }

    def test_pascal_case_input(self):
        player = PlayerInput.model_validate({"Region": "US", "Realm": "Area 52", "Name": "Jaina", "MainRaid": True})

        assert player.realm == "Area 52"
        assert player.main_raid is True

    def test_main_raid_defaults_false(self):
        assert PlayerInput(region="EU", realm="Silvermoon", name="Thrall").main_raid is False

    @pytest.mark.parametrize("field", ["region", "realm", "name"])
    def test_required_fields(self, field):
        data = {"region": "EU", "realm": "Silvermoon", "name": "Thrall"}

        with pytest.raises(ValidationError):
            PlayerInput(**dict(data, **{field: ""}))
        with pytest.raises(ValidationError):
            PlayerInput(**dict(data, **{field: "  "}))
        with pytest.raises(ValidationError):
            PlayerInput(**{k: v for k, v in data.items() if k != field})

    def test_length_bounds(self):
        PlayerInput(region="EU", realm="r" * 100, name="Thrall")

        with pytest.raises(ValidationError):
            PlayerInput(region="EU", realm="r" * 101, name="Thrall")


class TestFeedback:
    """Test Feedback model validation."""

    def test_valid_feedback(self):
        feedback = Feedback(name="Thrall", anonymous=False, message="Nice!")

        assert feedback.message == "Nice!"

    def test_name_optional(self):
        assert Feedback(message="Hello there").name is None

    @pytest.mark.parametrize("message", ["", "ab", "x" * 2001])
    def test_message_bounds(self, message):
        with pytest.raises(ValidationError):
            Feedback(message=message)

    def test_message_bounds_inclusive(self):
        Feedback(message="abc")
        Feedback(message="x" * 2000)


class TestPaginatedResult:
    """Test derived pagination metadata."""

    @pytest.mark.parametrize(
        "page,page_size,total_items,total_pages,has_previous,has_next",
        [
            (1, 10, 0, 0, False, False),
            (1, 10, 10, 1, False, False),
            (1, 10, 11, 2, False, True),
            (2, 10, 11, 2, True, False),
            (5, 10, 11, 2, True, False),
        ],
    )
    def test_derived_fields(self, page, page_size, total_items, total_pages, has_previous, has_next):
        result = PaginatedResult[Player](items=[], page=page, page_size=page_size, total_items=total_items)

        assert result.total_pages == total_pages
        assert result.has_previous_page is has_previous
        assert result.has_next_page is has_next


def test_player_requires_id():
    with pytest.raises(ValidationError):
        Player(region="EU", realm="Silvermoon", name="Thrall")

    player = Player(id=str(uuid.uuid4()), region="EU", realm="Silvermoon", name="Thrall")
    assert isinstance(player.id, uuid.UUID)
