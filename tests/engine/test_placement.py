"""Tests for random fleet placement."""

import random

import pytest

from salvo.engine.board import Board
from salvo.engine.errors import PlacementExhaustedError
from salvo.engine.placement import RandomPlacement
from salvo.engine.ship import FLEET, Coordinate, Orientation, Ship, ShipKind


@pytest.mark.parametrize("seed", range(20))
def test_random_placement_is_valid(seed: int) -> None:
    board = Board.with_fleet(RandomPlacement(random.Random(seed)))

    assert sorted(ship.kind.value for ship in board.ships) == sorted(kind.value for kind in FLEET)
    seen: set[Coordinate] = set()
    for ship in board.ships:
        tiles = set(ship.tiles)
        assert len(tiles) == ship.length
        assert all(tile.in_bounds() for tile in tiles)
        assert not (tiles & seen), "Ships should not overlap"
        seen |= tiles

    occupied = {tile.coordinate for tile in board.tiles() if tile.occupied}
    assert occupied == seen


def test_random_placement_is_reproducible() -> None:
    first = Board.with_fleet(RandomPlacement(random.Random(99)))
    second = Board.with_fleet(RandomPlacement(random.Random(99)))
    assert [s.tiles for s in first.ships] == [s.tiles for s in second.ships]


def test_random_placement_gives_up_after_max_attempts() -> None:
    board = Board()
    # Two carriers per row cover the whole grid.
    for y in range(10):
        board.place_ship(Ship(Coordinate(0, y), Orientation.HORIZONTAL, ShipKind.CARRIER))
        board.place_ship(Ship(Coordinate(5, y), Orientation.HORIZONTAL, ShipKind.CARRIER))

    placement = RandomPlacement(random.Random(0), max_attempts=50)
    with pytest.raises(PlacementExhaustedError):
        placement.place(board, [ShipKind.DESTROYER])


def test_max_attempts_must_be_positive() -> None:
    with pytest.raises(ValueError):
        RandomPlacement(max_attempts=0)
