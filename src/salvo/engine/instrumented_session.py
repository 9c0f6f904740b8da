"""GameSession with per-game telemetry."""

from __future__ import annotations

import time
from functools import partial
from typing import Callable

from salvo.telemetry import get_logger, get_tracer, record_game_duration, record_game_metric

from .board import AttackResult, Board
from .errors import SalvoError
from .session import GameSession, Side
from .strategies import AttackStrategy


class InstrumentedGameSession(GameSession):
    """Wraps GameSession moves with spans, counters and a game-duration histogram."""

    def __init__(self, player_board: Board, enemy_board: Board, attack_strategy: AttackStrategy) -> None:
        super().__init__(player_board, enemy_board, attack_strategy)
        self._logger = get_logger("salvo.engine")
        self._tracer = get_tracer("salvo.engine")
        self._started_at = time.perf_counter()
        self._strategy_name = getattr(attack_strategy, "name", type(attack_strategy).__name__)
        self._finished = False

    def player_fire(self, x: int, y: int) -> AttackResult:
        return self._instrumented(Side.PLAYER, partial(super().player_fire, x, y))

    def computer_move(self) -> AttackResult:
        return self._instrumented(Side.COMPUTER, super().computer_move)

    def _instrumented(self, side: Side, move: Callable[[], AttackResult]) -> AttackResult:
        with self._tracer.start_as_current_span("salvo.session.move") as span:
            span.set_attribute("side", side.value)
            span.set_attribute("strategy", self._strategy_name)
            try:
                result = move()
            except SalvoError as exc:
                record_game_metric(
                    "salvo_invalid_moves_total",
                    1,
                    {"side": side.value, "reason": type(exc).__name__},
                )
                span.record_exception(exc)
                span.set_attribute("error", True)
                self._logger.error("Rejected %s move: %s", side.value, exc)
                if self.is_over:
                    self._finish_game(span)
                raise

            outcome = "sunk" if result.sunk else "hit" if result.hit else "miss"
            span.set_attribute("x", result.coordinate.x)
            span.set_attribute("y", result.coordinate.y)
            span.set_attribute("outcome", outcome)
            record_game_metric("salvo_shots_total", 1, {"side": side.value, "result": outcome})
            self._logger.info(
                "%s fired at (%d,%d): %s",
                side.value,
                result.coordinate.x,
                result.coordinate.y,
                outcome,
            )

            if self.is_over:
                self._finish_game(span)
            return result

    def _finish_game(self, span) -> None:
        if self._finished:
            return
        self._finished = True
        duration = time.perf_counter() - self._started_at
        winner = self.winner.value if self.winner else "unknown"
        turns = len(self.player_board.attacks) + len(self.enemy_board.attacks)

        record_game_metric("salvo_games_completed_total", 1, {"winner": winner, "strategy": self._strategy_name})
        record_game_duration("salvo_game_duration_seconds", duration, {"winner": winner})

        span.set_attribute("winner", winner)
        span.set_attribute("turns", turns)
        span.set_attribute("duration_ms", duration * 1000)
        self._logger.info("Game finished. Winner=%s turns=%d duration_s=%.3f", winner, turns, duration)
