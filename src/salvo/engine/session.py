"""Turn orchestration between the human player and the computer."""

from __future__ import annotations

import logging
import random
from enum import Enum

from salvo.telemetry import get_meter, get_tracer

from .board import AttackResult, Board
from .errors import NoTargetsRemainingError, NotYourTurnError, SessionOverError
from .placement import PlacementStrategy, RandomPlacement
from .strategies import AttackStrategy

logger = logging.getLogger(__name__)
tracer = get_tracer("salvo.engine.session")
meter = get_meter("salvo.engine.session")

MOVE_COUNTER = meter.create_counter(
    "salvo_engine_moves",
    unit="1",
    description="Number of moves resolved by a GameSession",
)


class SessionState(Enum):
    """Whose move it is, or who won."""

    PLAYER_TURN = "player_turn"
    COMPUTER_TURN = "computer_turn"
    PLAYER_WON = "player_won"
    COMPUTER_WON = "computer_won"

    @property
    def is_terminal(self) -> bool:
        return self in (SessionState.PLAYER_WON, SessionState.COMPUTER_WON)


class Side(Enum):
    PLAYER = "player"
    COMPUTER = "computer"


class GameSession:
    """Coordinates play between the player's board and the enemy board.

    A hit earns the shooter another shot; a miss hands the turn over.
    Sinking the last ship ends the game. Board observers run after the
    turn has advanced, so they always see the settled state.
    """

    def __init__(self, player_board: Board, enemy_board: Board, attack_strategy: AttackStrategy) -> None:
        self.player_board = player_board
        self.enemy_board = enemy_board
        self.attack_strategy = attack_strategy
        self.state = SessionState.PLAYER_TURN

    @classmethod
    def new(
        cls,
        attack_strategy: AttackStrategy,
        rng: random.Random | None = None,
        placement: PlacementStrategy | None = None,
    ) -> GameSession:
        """Randomly place both fleets and start with the player to move."""
        with tracer.start_as_current_span("session.new"):
            placement = placement or RandomPlacement(rng)
            session = cls(
                Board.with_fleet(placement, owner=Side.PLAYER.value),
                Board.with_fleet(placement, owner=Side.COMPUTER.value),
                attack_strategy,
            )
            logger.info(
                "session_started",
                extra={"strategy": getattr(attack_strategy, "name", type(attack_strategy).__name__)},
            )
            return session

    @property
    def is_over(self) -> bool:
        return self.state.is_terminal

    @property
    def winner(self) -> Side | None:
        if self.state is SessionState.PLAYER_WON:
            return Side.PLAYER
        if self.state is SessionState.COMPUTER_WON:
            return Side.COMPUTER
        return None

    def player_fire(self, x: int, y: int) -> AttackResult:
        """Resolve the player's shot at the enemy board."""
        with tracer.start_as_current_span("session.player_fire") as span:
            span.set_attribute("x", x)
            span.set_attribute("y", y)
            self._require_turn(SessionState.PLAYER_TURN, Side.PLAYER)
            result = self.enemy_board.resolve_attack(x, y)
            self._advance(Side.PLAYER, result)
            span.set_attribute("next_state", self.state.value)
            self.enemy_board.notify_observers()
            return result

    def computer_move(self) -> AttackResult:
        """Let the attack strategy pick a target on the player's board and fire."""
        with tracer.start_as_current_span("session.computer_move") as span:
            self._require_turn(SessionState.COMPUTER_TURN, Side.COMPUTER)
            try:
                target = self.attack_strategy.next_target(self.player_board)
            except NoTargetsRemainingError:
                self.state = (
                    SessionState.COMPUTER_WON if self.player_board.is_lost() else SessionState.PLAYER_WON
                )
                logger.error("computer_out_of_targets", extra={"state": self.state.value})
                raise
            span.set_attribute("x", target.x)
            span.set_attribute("y", target.y)
            result = self.player_board.resolve_attack(target.x, target.y)
            self._advance(Side.COMPUTER, result)
            span.set_attribute("next_state", self.state.value)
            self.player_board.notify_observers()
            return result

    def play_computer_turn(self) -> list[AttackResult]:
        """Run computer moves until the turn passes back or the game ends."""
        results: list[AttackResult] = []
        while self.state is SessionState.COMPUTER_TURN:
            results.append(self.computer_move())
        return results

    def _require_turn(self, expected: SessionState, side: Side) -> None:
        if self.state.is_terminal:
            logger.error("move_rejected_game_over", extra={"side": side.value, "state": self.state.value})
            raise SessionOverError("The game is over.")
        if self.state is not expected:
            logger.error("move_rejected_wrong_turn", extra={"side": side.value, "state": self.state.value})
            raise NotYourTurnError(f"It is not the {side.value}'s turn.")

    def _advance(self, side: Side, result: AttackResult) -> None:
        if result.game_over:
            self.state = SessionState.PLAYER_WON if side is Side.PLAYER else SessionState.COMPUTER_WON
            logger.info("game_finished", extra={"winner": side.value})
        elif not result.hit:
            self.state = SessionState.COMPUTER_TURN if side is Side.PLAYER else SessionState.PLAYER_TURN
        MOVE_COUNTER.add(
            1,
            attributes={"side": side.value, "result": "hit" if result.hit else "miss"},
        )
