"""Single-player board management for the Battleship engine."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

from salvo.telemetry import get_meter, get_tracer

from .errors import AlreadyAttackedError, InvalidPlacementError, OutOfBoundsError
from .ship import GRID_SIZE, Coordinate, Orientation, Ship, ShipKind, footprint
from .tile import Tile

if TYPE_CHECKING:
    from .placement import PlacementStrategy

logger = logging.getLogger(__name__)
tracer = get_tracer("salvo.engine.board")
meter = get_meter("salvo.engine.board")

PLACEMENT_COUNTER = meter.create_counter(
    "salvo_engine_ship_placements",
    unit="1",
    description="Number of attempted ship placements",
)

SHOT_COUNTER = meter.create_counter(
    "salvo_engine_shots",
    unit="1",
    description="Shots received by a board",
)

BoardObserver = Callable[[], None]


@dataclass(frozen=True)
class AttackResult:
    """Outcome of one resolved shot."""

    coordinate: Coordinate
    hit: bool
    sunk: ShipKind | None = None
    game_over: bool = False

    @property
    def message(self) -> str:
        if self.sunk is not None:
            return f"You sunk my {self.sunk.value}!"
        return "Hit!" if self.hit else "Miss."


@dataclass
class Board:
    """Represents a player's 10×10 board and fleet of ships.

    The board owns its tiles and its live fleet. Ships are removed from
    ``ships`` when sunk; their tiles stay occupied.
    """

    owner: str = "unknown"
    ships: list[Ship] = field(default_factory=list)
    _tiles: dict[Coordinate, Tile] = field(init=False, repr=False)
    _attacks: list[Coordinate] = field(default_factory=list, init=False, repr=False)
    _observers: list[BoardObserver] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        self._tiles = {
            Coordinate(x, y): Tile(Coordinate(x, y))
            for y in range(GRID_SIZE)
            for x in range(GRID_SIZE)
        }
        placed, self.ships = list(self.ships), []
        for ship in placed:
            self.place_ship(ship)

    @classmethod
    def with_fleet(cls, placement: PlacementStrategy, owner: str = "unknown") -> Board:
        """Create a board and let ``placement`` populate its fleet."""
        board = cls(owner=owner)
        placement.place(board)
        return board

    @property
    def size(self) -> int:
        return GRID_SIZE

    @property
    def attacks(self) -> list[Coordinate]:
        """Coordinates fired upon, oldest first."""
        return list(self._attacks)

    def is_valid_coordinate(self, coord: Coordinate) -> bool:
        """Check whether a coordinate lies inside the board boundaries."""
        return coord.in_bounds(GRID_SIZE)

    def _checked(self, x: int, y: int) -> Coordinate:
        """Return the coordinate for integer ``(x, y)`` on the grid, else raise OutOfBoundsError."""
        if not all(isinstance(v, int) and not isinstance(v, bool) for v in (x, y)):
            logger.error("coordinate_not_integer", extra={"x": repr(x), "y": repr(y), "owner": self.owner})
            raise OutOfBoundsError(f"({x!r}, {y!r}) is not an integer grid coordinate.")
        coord = Coordinate(x, y)
        if not self.is_valid_coordinate(coord):
            logger.error("shot_out_of_bounds", extra={"x": x, "y": y, "owner": self.owner})
            raise OutOfBoundsError(f"({x}, {y}) is outside the {GRID_SIZE}x{GRID_SIZE} board.")
        return coord

    def tile(self, x: int, y: int) -> Tile:
        return self._tiles[self._checked(x, y)]

    def tiles(self) -> list[Tile]:
        """All tiles in row-major order."""
        return list(self._tiles.values())

    def has_been_attacked(self, coord: Coordinate) -> bool:
        tile = self._tiles.get(coord)
        return tile is not None and tile.hit

    def unfired_coordinates(self) -> list[Coordinate]:
        """Coordinates not yet fired upon, in row-major order."""
        return [coord for coord, tile in self._tiles.items() if not tile.hit]

    def ship_at(self, coord: Coordinate) -> Ship | None:
        """Return the live ship covering ``coord``, if any."""
        for ship in self.ships:
            if ship.occupies(coord):
                return ship
        return None

    def can_place(self, origin: Coordinate, orientation: Orientation, length: int) -> bool:
        """Check a candidate ship footprint against the bounds and the fleet."""
        if not all(self.is_valid_coordinate(c) for c in footprint(origin, orientation, length)):
            return False
        return not any(ship.overlaps(origin, orientation, length) for ship in self.ships)

    def can_place_ship(self, ship: Ship) -> bool:
        """Determine whether a ship can be placed without violating rules."""
        return self.can_place(ship.origin, ship.orientation, ship.length)

    def place_ship(self, ship: Ship) -> Ship:
        """Add ship to the board, occupying its tiles."""
        with tracer.start_as_current_span("board.place_ship") as span:
            span.set_attribute("ship.kind", ship.kind.value)
            span.set_attribute("ship.length", ship.length)
            span.set_attribute("ship.origin.x", ship.origin.x)
            span.set_attribute("ship.origin.y", ship.origin.y)
            span.set_attribute("board.owner", self.owner)
            context = {
                "owner": self.owner,
                "ship_kind": ship.kind.value,
                "orientation": ship.orientation.value,
                "x": ship.origin.x,
                "y": ship.origin.y,
            }
            if ship.tiles:
                PLACEMENT_COUNTER.add(1, attributes={"result": "failed", "owner": self.owner})
                logger.warning("ship_already_placed", extra=context)
                raise InvalidPlacementError(f"{ship.kind.value} has already been placed on a board.")
            if not self.can_place_ship(ship):
                PLACEMENT_COUNTER.add(1, attributes={"result": "failed", "owner": self.owner})
                logger.warning("ship_placement_failed", extra=context)
                raise InvalidPlacementError(
                    f"{ship.kind.value} at ({ship.origin.x}, {ship.origin.y}) "
                    "is out of bounds or overlaps another ship."
                )

            coords = ship.coordinates()
            ship.occupy_tiles(coords)
            for coord in coords:
                self._tiles[coord].occupy()
            self.ships.append(ship)
            PLACEMENT_COUNTER.add(1, attributes={"result": "success", "owner": self.owner})
            logger.info("ship_placed", extra=context)
            return ship

    def attack(self, x: int, y: int) -> AttackResult:
        """Fire at ``(x, y)``, notify observers and report the outcome."""
        result = self.resolve_attack(x, y)
        self.notify_observers()
        return result

    def resolve_attack(self, x: int, y: int) -> AttackResult:
        """Apply a shot at ``(x, y)`` without notifying observers.

        Rejected shots raise before any state changes. Callers that own
        further state (a session's turn) update it before calling
        :meth:`notify_observers`, so a failing observer cannot leave that
        state half-applied.
        """
        with tracer.start_as_current_span("board.attack") as span:
            span.set_attribute("shot.x", repr(x))
            span.set_attribute("shot.y", repr(y))
            span.set_attribute("board.owner", self.owner)
            coord = self._checked(x, y)
            tile = self._tiles[coord]
            if tile.hit:
                logger.error("shot_duplicate", extra={"x": x, "y": y, "owner": self.owner})
                raise AlreadyAttackedError(f"({x}, {y}) has already been targeted.")

            self._attacks.append(coord)
            tile.mark_hit()
            ship = self.ship_at(coord)
            sunk: ShipKind | None = None
            if ship is not None:
                ship.register_hit()
                if ship.is_destroyed():
                    self.ships.remove(ship)
                    sunk = ship.kind
            result = AttackResult(
                coordinate=coord,
                hit=ship is not None,
                sunk=sunk,
                game_over=self.is_lost(),
            )

            outcome = "sunk" if sunk else "hit" if result.hit else "miss"
            span.set_attribute("shot.outcome", outcome)
            SHOT_COUNTER.add(1, attributes={"outcome": outcome, "owner": self.owner})
            logger.info(
                "shot_resolved",
                extra={
                    "x": x,
                    "y": y,
                    "outcome": outcome,
                    "ship_kind": ship.kind.value if ship else None,
                    "game_over": result.game_over,
                    "owner": self.owner,
                },
            )
            return result

    def is_lost(self) -> bool:
        """Check whether the fleet has been sunk entirely."""
        return not self.ships

    def add_observer(self, observer: BoardObserver) -> None:
        self._observers.append(observer)

    def remove_observer(self, observer: BoardObserver) -> None:
        self._observers.remove(observer)

    def notify_observers(self) -> None:
        for observer in list(self._observers):
            observer()
