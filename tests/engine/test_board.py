"""Tests for the Board mechanics."""

import random

import pytest

from salvo.engine.board import Board
from salvo.engine.errors import AlreadyAttackedError, InvalidPlacementError, OutOfBoundsError
from salvo.engine.placement import RandomPlacement
from salvo.engine.ship import Coordinate, Orientation, Ship, ShipKind


def _board_with(*ships: Ship) -> Board:
    board = Board()
    for ship in ships:
        board.place_ship(ship)
    return board


def test_board_has_one_tile_per_coordinate() -> None:
    board = Board()
    tiles = board.tiles()
    assert len(tiles) == 100
    assert len({tile.coordinate for tile in tiles}) == 100
    assert tiles[0].coordinate == Coordinate(0, 0)
    assert tiles[1].coordinate == Coordinate(1, 0)


def test_place_ship_occupies_tiles() -> None:
    ship = Ship(Coordinate(2, 5), Orientation.VERTICAL, ShipKind.SUBMARINE)
    board = _board_with(ship)
    assert ship.tiles == (Coordinate(2, 5), Coordinate(2, 6), Coordinate(2, 7))
    assert all(board.tile(c.x, c.y).occupied for c in ship.tiles)
    assert not board.tile(2, 8).occupied


def test_ship_placement_rejects_overlap_and_bounds() -> None:
    board = _board_with(Ship(Coordinate(0, 0), Orientation.HORIZONTAL, ShipKind.CRUISER))

    with pytest.raises(InvalidPlacementError):
        board.place_ship(Ship(Coordinate(1, 0), Orientation.VERTICAL, ShipKind.DESTROYER))

    with pytest.raises(InvalidPlacementError):
        board.place_ship(Ship(Coordinate(9, 9), Orientation.HORIZONTAL, ShipKind.DESTROYER))

    assert len(board.ships) == 1


def test_sink_reporting() -> None:
    board = _board_with(Ship(Coordinate(0, 0), Orientation.HORIZONTAL, ShipKind.DESTROYER))

    first = board.attack(0, 0)
    assert first.hit is True
    assert first.sunk is None
    assert first.message == "Hit!"

    second = board.attack(1, 0)
    assert second.hit is True
    assert second.sunk is ShipKind.DESTROYER
    assert second.message == "You sunk my destroyer!"


def test_miss_reporting() -> None:
    board = _board_with(Ship(Coordinate(0, 0), Orientation.HORIZONTAL, ShipKind.DESTROYER))
    result = board.attack(5, 5)
    assert not result.hit
    assert result.sunk is None
    assert not result.game_over
    assert result.message == "Miss."
    assert board.tile(5, 5).hit


def test_game_over_only_on_last_hit() -> None:
    board = _board_with(Ship(Coordinate(0, 0), Orientation.HORIZONTAL, ShipKind.CARRIER))
    outcomes = [board.attack(x, 0).game_over for x in range(5)]
    assert outcomes == [False, False, False, False, True]
    assert board.is_lost()


def test_sunk_ship_leaves_fleet_but_tiles_stay_occupied() -> None:
    destroyer = Ship(Coordinate(0, 0), Orientation.HORIZONTAL, ShipKind.DESTROYER)
    carrier = Ship(Coordinate(0, 5), Orientation.HORIZONTAL, ShipKind.CARRIER)
    board = _board_with(destroyer, carrier)

    board.attack(0, 0)
    result = board.attack(1, 0)

    assert result.sunk is ShipKind.DESTROYER
    assert not result.game_over
    assert board.ships == [carrier]
    assert board.tile(0, 0).occupied and board.tile(1, 0).occupied
    assert not board.is_lost()


def test_repeat_attack_rejected_without_mutation() -> None:
    ship = Ship(Coordinate(0, 0), Orientation.HORIZONTAL, ShipKind.CRUISER)
    board = _board_with(ship)
    board.attack(0, 0)
    notifications: list[int] = []
    board.add_observer(lambda: notifications.append(1))

    with pytest.raises(AlreadyAttackedError):
        board.attack(0, 0)

    assert ship.damage == 1
    assert board.attacks == [Coordinate(0, 0)]
    assert board.ships == [ship]
    assert notifications == []


@pytest.mark.parametrize(("x", "y"), [(-1, 0), (0, -1), (10, 0), (0, 10), (11, 11)])
def test_out_of_bounds_attack_rejected(x: int, y: int) -> None:
    board = Board()
    with pytest.raises(OutOfBoundsError):
        board.attack(x, y)
    assert board.attacks == []


def test_attack_log_is_chronological() -> None:
    board = Board()
    for x, y in [(3, 4), (0, 0), (9, 9)]:
        board.attack(x, y)
    assert board.attacks == [Coordinate(3, 4), Coordinate(0, 0), Coordinate(9, 9)]


def test_observers_notified_once_per_attack_in_order() -> None:
    board = _board_with(Ship(Coordinate(0, 0), Orientation.HORIZONTAL, ShipKind.DESTROYER))
    calls: list[str] = []
    board.add_observer(lambda: calls.append("first"))
    board.add_observer(lambda: calls.append("second"))

    board.attack(0, 0)
    assert calls == ["first", "second"]

    board.attack(1, 0)
    assert calls == ["first", "second", "first", "second"]


def test_observer_sees_completed_state() -> None:
    board = _board_with(Ship(Coordinate(0, 0), Orientation.HORIZONTAL, ShipKind.DESTROYER))
    seen: list[tuple[int, bool]] = []
    board.add_observer(lambda: seen.append((len(board.ships), board.is_lost())))
    board.attack(0, 0)
    board.attack(1, 0)
    assert seen == [(1, False), (0, True)]


def test_remove_observer() -> None:
    board = Board()
    calls: list[int] = []

    def observer() -> None:
        calls.append(1)

    board.add_observer(observer)
    board.remove_observer(observer)
    board.attack(0, 0)
    assert calls == []


def test_intact_fleet_is_not_lost() -> None:
    board = Board.with_fleet(RandomPlacement(random.Random(7)))
    assert len(board.ships) == 5
    assert board.attacks == []
    assert not board.is_lost()


def test_damage_is_monotonic_and_bounded() -> None:
    rng = random.Random(11)
    board = Board.with_fleet(RandomPlacement(rng))
    ships = list(board.ships)
    previous = {id(ship): 0 for ship in ships}
    coords = board.unfired_coordinates()
    rng.shuffle(coords)
    for coord in coords:
        board.attack(coord.x, coord.y)
        for ship in ships:
            assert previous[id(ship)] <= ship.damage <= ship.length
            previous[id(ship)] = ship.damage
    assert all(ship.is_destroyed() for ship in ships)
    assert board.is_lost()
    assert board.unfired_coordinates() == []


def test_ship_already_on_a_board_is_rejected() -> None:
    ship = Ship(Coordinate(0, 0), Orientation.HORIZONTAL, ShipKind.DESTROYER)
    first = _board_with(ship)
    second = Board()

    with pytest.raises(InvalidPlacementError):
        second.place_ship(ship)

    assert second.ships == []
    assert not any(tile.occupied for tile in second.tiles())
    assert first.ships == [ship]
    assert ship.tiles == (Coordinate(0, 0), Coordinate(1, 0))


@pytest.mark.parametrize(("x", "y"), [(1.5, 2), (2, 0.0), ("3", 4), (True, 0), (None, 1)])
def test_non_integer_coordinates_rejected(x, y) -> None:
    board = Board()
    with pytest.raises(OutOfBoundsError):
        board.attack(x, y)
    with pytest.raises(OutOfBoundsError):
        board.tile(x, y)
    assert board.attacks == []
    assert not any(tile.hit for tile in board.tiles())


def test_resolve_attack_defers_observers() -> None:
    board = Board()
    calls: list[int] = []
    board.add_observer(lambda: calls.append(len(board.attacks)))

    result = board.resolve_attack(4, 4)
    assert not result.hit
    assert calls == []

    board.notify_observers()
    assert calls == [1]
