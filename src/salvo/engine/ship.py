"""Ship domain model for the Battleship engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .errors import InvalidKindError, InvalidPlacementError

GRID_SIZE = 10


@dataclass(frozen=True)
class Coordinate:
    """Immutable board coordinate; ``x`` is the column, ``y`` the row."""

    x: int
    y: int

    def in_bounds(self, size: int = GRID_SIZE) -> bool:
        return 0 <= self.x < size and 0 <= self.y < size

    def neighbours(self) -> list[Coordinate]:
        """Return the orthogonal neighbours (up, down, left, right), unfiltered."""
        return [
            Coordinate(self.x, self.y - 1),
            Coordinate(self.x, self.y + 1),
            Coordinate(self.x - 1, self.y),
            Coordinate(self.x + 1, self.y),
        ]


class Orientation(Enum):
    """Allowed ship orientations."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @classmethod
    def parse(cls, value: Orientation | str) -> Orientation:
        """Accept an ``Orientation`` or its case-insensitive name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise InvalidPlacementError(f"Unknown orientation: {value!r}")


_LENGTHS = {
    "destroyer": 2,
    "submarine": 3,
    "cruiser": 3,
    "battleship": 4,
    "carrier": 5,
}


class ShipKind(Enum):
    """The five fleet classes, in legacy kind-code order."""

    DESTROYER = "destroyer"
    SUBMARINE = "submarine"
    CRUISER = "cruiser"
    BATTLESHIP = "battleship"
    CARRIER = "carrier"

    @property
    def length(self) -> int:
        """Return the number of contiguous cells the ship occupies."""
        return _LENGTHS[self.value]

    @classmethod
    def parse(cls, value: ShipKind | str | int) -> ShipKind:
        """Resolve a kind, a kind name, or a legacy integer code (0-4)."""
        if isinstance(value, ShipKind):
            return value
        if isinstance(value, bool):
            raise InvalidKindError(f"Unknown ship kind: {value!r}")
        if isinstance(value, int):
            members = list(cls)
            if 0 <= value < len(members):
                return members[value]
        elif isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise InvalidKindError(f"Unknown ship kind: {value!r}")


FLEET: tuple[ShipKind, ...] = tuple(ShipKind)


def footprint(origin: Coordinate, orientation: Orientation, length: int) -> tuple[Coordinate, ...]:
    """Return the coordinates a ship of ``length`` would cover from ``origin``."""
    if orientation is Orientation.HORIZONTAL:
        return tuple(Coordinate(origin.x + offset, origin.y) for offset in range(length))
    return tuple(Coordinate(origin.x, origin.y + offset) for offset in range(length))


@dataclass
class Ship:
    """Represents a single ship instance on the board."""

    origin: Coordinate
    orientation: Orientation
    kind: ShipKind
    damage: int = field(default=0, init=False)
    _tiles: tuple[Coordinate, ...] = field(default=(), init=False, repr=False)

    def __post_init__(self) -> None:
        self.kind = ShipKind.parse(self.kind)
        self.orientation = Orientation.parse(self.orientation)

    @property
    def length(self) -> int:
        return self.kind.length

    @property
    def size(self) -> int:
        return self.kind.length

    @property
    def tiles(self) -> tuple[Coordinate, ...]:
        """Coordinates of the board tiles this ship covers, in order from the origin."""
        return self._tiles

    def coordinates(self) -> list[Coordinate]:
        """Return the ordered list of coordinates the ship spans."""
        return list(footprint(self.origin, self.orientation, self.length))

    def occupy_tiles(self, tiles: tuple[Coordinate, ...] | list[Coordinate]) -> None:
        """Bind the ship to its board tiles. Called once, by the placing board."""
        if self._tiles:
            raise RuntimeError("Ship tiles have already been assigned.")
        if len(tiles) != self.length:
            raise ValueError(
                f"{self.kind.value} needs {self.length} tiles, got {len(tiles)}."
            )
        self._tiles = tuple(tiles)

    def occupies(self, coord: Coordinate) -> bool:
        return coord in self._tiles

    def register_hit(self) -> None:
        """Record one point of damage; damage never exceeds length."""
        if self.damage < self.length:
            self.damage += 1

    def is_destroyed(self) -> bool:
        return self.damage == self.length

    def overlaps(self, origin: Coordinate, orientation: Orientation, length: int) -> bool:
        """Return True if a candidate ship would cover any of this ship's tiles."""
        occupied = set(self._tiles)
        return any(coord in occupied for coord in footprint(origin, orientation, length))
