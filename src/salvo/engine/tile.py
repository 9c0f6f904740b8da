"""Grid cell state."""

from __future__ import annotations

from dataclasses import dataclass

from .ship import Coordinate


@dataclass
class Tile:
    """A single board cell: whether a ship covers it and whether it was fired upon."""

    coordinate: Coordinate
    occupied: bool = False
    hit: bool = False

    @property
    def x(self) -> int:
        return self.coordinate.x

    @property
    def y(self) -> int:
        return self.coordinate.y

    def occupy(self) -> None:
        self.occupied = True

    def mark_hit(self) -> None:
        self.hit = True
