"""Fleet placement strategies."""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, Iterable, Protocol

from salvo.telemetry import get_tracer

from .errors import PlacementExhaustedError
from .ship import FLEET, GRID_SIZE, Coordinate, Orientation, Ship, ShipKind

if TYPE_CHECKING:
    from .board import Board

logger = logging.getLogger(__name__)
tracer = get_tracer("salvo.engine.placement")

MAX_PLACEMENT_ATTEMPTS = 10_000


class PlacementStrategy(Protocol):
    """Populates a board with non-overlapping, in-bounds ships."""

    def place(self, board: Board, kinds: Iterable[ShipKind] = FLEET) -> None:
        ...


class RandomPlacement:
    """Rejection-samples a random origin and orientation for each ship."""

    def __init__(self, rng: random.Random | None = None, max_attempts: int = MAX_PLACEMENT_ATTEMPTS) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1.")
        self._rng = rng or random.Random()
        self.max_attempts = max_attempts

    def place(self, board: Board, kinds: Iterable[ShipKind] = FLEET) -> None:
        with tracer.start_as_current_span("placement.random") as span:
            span.set_attribute("board.owner", board.owner)
            for kind in kinds:
                ship = self._sample(board, ShipKind.parse(kind))
                board.place_ship(ship)

    def _sample(self, board: Board, kind: ShipKind) -> Ship:
        orientations = list(Orientation)
        for attempt in range(1, self.max_attempts + 1):
            orientation = self._rng.choice(orientations)
            origin = Coordinate(self._rng.randrange(GRID_SIZE), self._rng.randrange(GRID_SIZE))
            if board.can_place(origin, orientation, kind.length):
                logger.debug(
                    "random_ship_sampled",
                    extra={"ship_kind": kind.value, "attempts": attempt, "owner": board.owner},
                )
                return Ship(origin, orientation, kind)
        logger.error(
            "random_placement_exhausted",
            extra={"ship_kind": kind.value, "attempts": self.max_attempts, "owner": board.owner},
        )
        raise PlacementExhaustedError(
            f"Could not place {kind.value} after {self.max_attempts} attempts."
        )
