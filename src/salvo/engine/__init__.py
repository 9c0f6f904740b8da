"""Game-state and targeting engine."""

from .board import AttackResult, Board
from .errors import (
    AlreadyAttackedError,
    InvalidKindError,
    InvalidPlacementError,
    NoTargetsRemainingError,
    NotYourTurnError,
    OutOfBoundsError,
    PlacementExhaustedError,
    SalvoError,
    SessionOverError,
)
from .placement import PlacementStrategy, RandomPlacement
from .session import GameSession, SessionState, Side
from .ship import FLEET, GRID_SIZE, Coordinate, Orientation, Ship, ShipKind
from .strategies import (
    AttackStrategy,
    HuntAdjacentAttack,
    OmniscientAttack,
    RandomAttack,
    create_attack_strategy,
)
from .tile import Tile

__all__ = [
    "AlreadyAttackedError",
    "AttackResult",
    "AttackStrategy",
    "Board",
    "Coordinate",
    "FLEET",
    "GRID_SIZE",
    "GameSession",
    "HuntAdjacentAttack",
    "InvalidKindError",
    "InvalidPlacementError",
    "NoTargetsRemainingError",
    "NotYourTurnError",
    "OmniscientAttack",
    "Orientation",
    "OutOfBoundsError",
    "PlacementExhaustedError",
    "PlacementStrategy",
    "RandomAttack",
    "RandomPlacement",
    "SalvoError",
    "SessionOverError",
    "SessionState",
    "Ship",
    "ShipKind",
    "Side",
    "Tile",
    "create_attack_strategy",
]
