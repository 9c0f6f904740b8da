"""Tests for Tile state."""

from salvo.engine.ship import Coordinate
from salvo.engine.tile import Tile


def test_tile_flags_are_idempotent() -> None:
    tile = Tile(Coordinate(4, 7))
    assert (tile.x, tile.y) == (4, 7)
    assert not tile.occupied and not tile.hit

    tile.occupy()
    tile.occupy()
    tile.mark_hit()
    tile.mark_hit()
    assert tile.occupied and tile.hit
