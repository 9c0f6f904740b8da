"""Targeting strategies for the computer opponent.

Every strategy returns a coordinate that has not been fired upon yet and
raises ``NoTargetsRemainingError`` once the whole grid has been fired upon.
Strategies read the board they are given and keep no reference to it.
"""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, Callable, Protocol

from salvo.telemetry import get_meter, get_tracer

from .errors import NoTargetsRemainingError
from .ship import Coordinate

if TYPE_CHECKING:
    from .board import Board

logger = logging.getLogger(__name__)
tracer = get_tracer("salvo.engine.strategies")
meter = get_meter("salvo.engine.strategies")

TARGET_COUNTER = meter.create_counter(
    "salvo_engine_targets_selected",
    unit="1",
    description="Targets chosen by computer strategies",
)


class AttackStrategy(Protocol):
    """Chooses the next coordinate for the computer to fire at."""

    name: str

    def next_target(self, board: Board) -> Coordinate:
        ...


def _random_unfired(board: Board, rng: random.Random) -> Coordinate:
    candidates = board.unfired_coordinates()
    if not candidates:
        logger.error("no_targets_remaining", extra={"owner": board.owner})
        raise NoTargetsRemainingError(f"Every tile on {board.owner}'s board has been fired upon.")
    return rng.choice(candidates)


def _record(strategy: str, mode: str, target: Coordinate) -> Coordinate:
    TARGET_COUNTER.add(1, attributes={"strategy": strategy, "mode": mode})
    logger.debug(
        "target_selected",
        extra={"strategy": strategy, "mode": mode, "x": target.x, "y": target.y},
    )
    return target


class RandomAttack:
    """Easy opponent: a uniformly random unfired coordinate."""

    name = "easy"

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def next_target(self, board: Board) -> Coordinate:
        with tracer.start_as_current_span("strategy.random"):
            return _record(self.name, "random", _random_unfired(board, self._rng))


class HuntAdjacentAttack:
    """Medium opponent: fire next to a hit on a ship that is still afloat.

    Hits are scanned in row-major order and the first one with an unfired
    in-bounds neighbour wins, regardless of which hit is most recent. One of
    its unfired neighbours is chosen at random. With no such hit it fires at
    random.
    """

    name = "medium"

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def next_target(self, board: Board) -> Coordinate:
        with tracer.start_as_current_span("strategy.hunt_adjacent") as span:
            for tile in board.tiles():
                if not (tile.hit and tile.occupied):
                    continue
                if board.ship_at(tile.coordinate) is None:
                    continue
                open_neighbours = [
                    coord
                    for coord in tile.coordinate.neighbours()
                    if board.is_valid_coordinate(coord) and not board.has_been_attacked(coord)
                ]
                if open_neighbours:
                    span.set_attribute("hunt.anchor.x", tile.x)
                    span.set_attribute("hunt.anchor.y", tile.y)
                    return _record(self.name, "hunt", self._rng.choice(open_neighbours))
            return _record(self.name, "random", _random_unfired(board, self._rng))


class OmniscientAttack:
    """Unfair opponent: knows where the fleet is and finishes off damaged ships."""

    name = "unfair"

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def next_target(self, board: Board) -> Coordinate:
        with tracer.start_as_current_span("strategy.omniscient"):
            for ship in board.ships:
                if ship.damage == 0:
                    continue
                remaining = [coord for coord in ship.tiles if not board.has_been_attacked(coord)]
                if remaining:
                    return _record(self.name, "cheat", self._rng.choice(remaining))
            return _record(self.name, "random", _random_unfired(board, self._rng))


ATTACK_STRATEGIES: dict[str, Callable[[random.Random | None], AttackStrategy]] = {
    "easy": RandomAttack,
    "random": RandomAttack,
    "medium": HuntAdjacentAttack,
    "hunt": HuntAdjacentAttack,
    "unfair": OmniscientAttack,
    "omniscient": OmniscientAttack,
}


def create_attack_strategy(name: str, rng: random.Random | None = None) -> AttackStrategy:
    """Build a strategy from its configured name."""
    try:
        factory = ATTACK_STRATEGIES[name.strip().lower()]
    except KeyError:
        known = ", ".join(sorted(ATTACK_STRATEGIES))
        raise ValueError(f"Unknown attack strategy {name!r}; expected one of: {known}") from None
    return factory(rng)
