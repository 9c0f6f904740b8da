"""Tests for Ship domain logic."""

import pytest

from salvo.engine.errors import InvalidKindError, InvalidPlacementError
from salvo.engine.ship import FLEET, Coordinate, Orientation, Ship, ShipKind, footprint


def test_ship_coordinates_horizontal() -> None:
    ship = Ship(Coordinate(0, 0), Orientation.HORIZONTAL, ShipKind.DESTROYER)
    assert ship.coordinates() == [Coordinate(0, 0), Coordinate(1, 0)]


def test_ship_coordinates_vertical() -> None:
    ship = Ship(Coordinate(2, 3), Orientation.VERTICAL, ShipKind.CRUISER)
    assert ship.coordinates() == [Coordinate(2, 3), Coordinate(2, 4), Coordinate(2, 5)]


def test_fleet_lengths() -> None:
    assert [kind.length for kind in FLEET] == [2, 3, 3, 4, 5]
    assert len(FLEET) == 5


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (0, ShipKind.DESTROYER),
        (4, ShipKind.CARRIER),
        ("Submarine", ShipKind.SUBMARINE),
        (ShipKind.BATTLESHIP, ShipKind.BATTLESHIP),
    ],
)
def test_ship_kind_parse(value, expected) -> None:
    assert ShipKind.parse(value) is expected


@pytest.mark.parametrize("value", [5, -1, "frigate", True, None])
def test_invalid_kind_rejected_at_construction(value) -> None:
    with pytest.raises(InvalidKindError):
        Ship(Coordinate(0, 0), Orientation.HORIZONTAL, value)


def test_register_hit_clamps_at_length() -> None:
    ship = Ship(Coordinate(3, 3), Orientation.VERTICAL, ShipKind.CRUISER)
    for expected in (1, 2, 3):
        ship.register_hit()
        assert ship.damage == expected
        assert ship.is_destroyed() is (expected == ship.length)
    ship.register_hit()
    assert ship.damage == ship.length


def test_occupy_tiles_assigned_once() -> None:
    ship = Ship(Coordinate(0, 0), Orientation.HORIZONTAL, ShipKind.DESTROYER)
    ship.occupy_tiles(ship.coordinates())
    assert ship.tiles == (Coordinate(0, 0), Coordinate(1, 0))
    assert ship.occupies(Coordinate(1, 0))
    with pytest.raises(RuntimeError):
        ship.occupy_tiles(ship.coordinates())


def test_occupy_tiles_requires_exact_length() -> None:
    ship = Ship(Coordinate(0, 0), Orientation.HORIZONTAL, ShipKind.DESTROYER)
    with pytest.raises(ValueError):
        ship.occupy_tiles([Coordinate(0, 0)])


def test_overlaps_checks_candidate_footprint() -> None:
    ship = Ship(Coordinate(2, 2), Orientation.HORIZONTAL, ShipKind.CRUISER)
    ship.occupy_tiles(ship.coordinates())
    assert ship.overlaps(Coordinate(3, 0), Orientation.VERTICAL, 3)
    assert not ship.overlaps(Coordinate(5, 0), Orientation.VERTICAL, 5)
    assert not ship.overlaps(Coordinate(2, 3), Orientation.HORIZONTAL, 4)


def test_footprint_and_neighbours() -> None:
    assert footprint(Coordinate(7, 1), Orientation.HORIZONTAL, 3) == (
        Coordinate(7, 1),
        Coordinate(8, 1),
        Coordinate(9, 1),
    )
    assert set(Coordinate(0, 0).neighbours()) == {
        Coordinate(0, -1),
        Coordinate(0, 1),
        Coordinate(-1, 0),
        Coordinate(1, 0),
    }


@pytest.mark.parametrize("orientation", ["horizontal", "Horizontal", " HORIZONTAL "])
def test_orientation_name_is_coerced(orientation) -> None:
    ship = Ship(Coordinate(2, 3), orientation, ShipKind.CRUISER)
    assert ship.orientation is Orientation.HORIZONTAL
    assert ship.coordinates() == [Coordinate(2, 3), Coordinate(3, 3), Coordinate(4, 3)]


@pytest.mark.parametrize("orientation", ["diagonal", "", 1, None])
def test_invalid_orientation_rejected_at_construction(orientation) -> None:
    with pytest.raises(InvalidPlacementError):
        Ship(Coordinate(0, 0), orientation, ShipKind.DESTROYER)
