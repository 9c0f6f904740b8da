"""Command-line driver for playing Battleship against the computer."""

from __future__ import annotations

import argparse
import random
import time
from typing import Callable, Sequence

from salvo.config import GameSettings
from salvo.engine.board import AttackResult, Board
from salvo.engine.errors import InvalidPlacementError, NoTargetsRemainingError
from salvo.engine.instrumented_session import InstrumentedGameSession
from salvo.engine.placement import RandomPlacement
from salvo.engine.session import GameSession, SessionState, Side
from salvo.engine.ship import FLEET, GRID_SIZE, Coordinate, Orientation, Ship, ShipKind
from salvo.engine.strategies import create_attack_strategy
from salvo.telemetry import configure_console_logging, init_telemetry, shutdown_tracing

ROW_LABELS = "ABCDEFGHIJ"

Prompt = Callable[[str], str]
Output = Callable[[str], None]


def coordinate_from_input(text: str) -> Coordinate:
    """Parse ``A5`` (row letter, column number) or ``"x y"`` into a coordinate."""
    cleaned = text.strip().upper()
    if not cleaned:
        raise ValueError("Empty coordinate.")
    if cleaned[0].isalpha():
        if cleaned[0] not in ROW_LABELS:
            raise ValueError(f"Row must be between A and {ROW_LABELS[-1]}.")
        y = ROW_LABELS.index(cleaned[0])
        try:
            x = int(cleaned[1:]) - 1
        except ValueError as exc:
            raise ValueError(f"Column must be a number between 1 and {GRID_SIZE}.") from exc
    else:
        parts = cleaned.split()
        if len(parts) != 2:
            raise ValueError("Use formats like A5 or '3 7'.")
        try:
            x, y = map(int, parts)
        except ValueError as exc:
            raise ValueError("Coordinates must be whole numbers.") from exc
    coord = Coordinate(x, y)
    if not coord.in_bounds():
        raise ValueError(f"Coordinates must be within the {GRID_SIZE}x{GRID_SIZE} board.")
    return coord


def label(coord: Coordinate) -> str:
    return f"{ROW_LABELS[coord.y]}{coord.x + 1}"


def format_board(board: Board, show_ships: bool) -> str:
    header = "    " + " ".join(f"{x + 1:>2}" for x in range(GRID_SIZE))
    rows = [header]
    for y in range(GRID_SIZE):
        symbols = []
        for x in range(GRID_SIZE):
            tile = board.tile(x, y)
            if tile.hit:
                symbol = "X" if tile.occupied else "o"
            else:
                symbol = "S" if show_ships and tile.occupied else "."
            symbols.append(f"{symbol:>2}")
        rows.append(f"{ROW_LABELS[y]} |" + " ".join(symbols))
    return "\n".join(rows)


def describe_shot(side: Side, result: AttackResult) -> str:
    shooter = "You" if side is Side.PLAYER else "The computer"
    return f"{shooter} fired at {label(result.coordinate)}: {result.message}"


class BoardRenderer:
    """Board observer that redraws both grids after every shot."""

    def __init__(self, session: GameSession, output: Output = print) -> None:
        self._session = session
        self._output = output

    def __call__(self) -> None:
        self._output("\nYour Board:")
        self._output(format_board(self._session.player_board, show_ships=True))
        self._output("\nEnemy Waters:")
        self._output(format_board(self._session.enemy_board, show_ships=False))


def _prompt_for_target(board: Board, prompt: Prompt, output: Output) -> Coordinate:
    while True:
        raw = prompt("Enter target coordinate (e.g., A5) or 'q' to quit: ").strip()
        if raw.lower() == "q":
            raise SystemExit("Goodbye!")
        try:
            coord = coordinate_from_input(raw)
        except ValueError as exc:
            output(f"Invalid input: {exc}")
            continue
        if board.has_been_attacked(coord):
            output("That cell has already been targeted. Choose another.")
            continue
        return coord


def _prompt_orientation(kind: ShipKind, prompt: Prompt, output: Output) -> Orientation:
    while True:
        raw = (
            prompt(f"Place your {kind.value.title()} (length {kind.length}). Orientation [H/V]: ")
            .strip()
            .upper()
        )
        if raw in {"H", "HOR", "HORIZONTAL"}:
            return Orientation.HORIZONTAL
        if raw in {"V", "VER", "VERTICAL"}:
            return Orientation.VERTICAL
        output("Please enter H for horizontal or V for vertical.")


def manual_ship_placement(board: Board, prompt: Prompt = input, output: Output = print) -> None:
    for kind in FLEET:
        while True:
            output("\nCurrent layout:")
            output(format_board(board, show_ships=True))
            orientation = _prompt_orientation(kind, prompt, output)
            try:
                origin = coordinate_from_input(prompt("Enter starting coordinate (e.g., A1): "))
                board.place_ship(Ship(origin, orientation, kind))
            except InvalidPlacementError:
                output("Ship cannot be placed there (out of bounds or overlaps). Try again.")
                continue
            except ValueError as exc:
                output(f"Invalid coordinate: {exc}")
                continue
            break


def _prompt_manual_setup(prompt: Prompt, output: Output) -> bool:
    while True:
        raw = prompt("Would you like to place your ships manually? [y/N]: ").strip().lower()
        if raw in {"y", "yes"}:
            return True
        if raw in {"", "n", "no"}:
            return False
        output("Please answer with 'y' or 'n'.")


def build_session(settings: GameSettings, player_board: Board | None = None) -> GameSession:
    rng = random.Random(settings.seed)
    placement = RandomPlacement(rng, max_attempts=settings.max_placement_attempts)
    if player_board is None:
        player_board = Board.with_fleet(placement, owner=Side.PLAYER.value)
    enemy_board = Board.with_fleet(placement, owner=Side.COMPUTER.value)
    return InstrumentedGameSession(player_board, enemy_board, create_attack_strategy(settings.opponent, rng))


def play_game(
    settings: GameSettings,
    prompt: Prompt = input,
    output: Output = print,
    sleep: Callable[[float], None] = time.sleep,
) -> Side | None:
    output("Welcome to Battleship!\n")
    player_board: Board | None = None
    if _prompt_manual_setup(prompt, output):
        player_board = Board(owner=Side.PLAYER.value)
        manual_ship_placement(player_board, prompt, output)
    session = build_session(settings, player_board)

    renderer = BoardRenderer(session, output)
    session.player_board.add_observer(renderer)
    session.enemy_board.add_observer(renderer)
    renderer()

    while not session.is_over:
        if session.state is SessionState.PLAYER_TURN:
            coord = _prompt_for_target(session.enemy_board, prompt, output)
            result = session.player_fire(coord.x, coord.y)
            output(describe_shot(Side.PLAYER, result))
        else:
            sleep(settings.computer_delay_seconds)
            try:
                result = session.computer_move()
            except NoTargetsRemainingError as exc:
                output(f"The computer could not move: {exc}")
                break
            output(describe_shot(Side.COMPUTER, result))

    if session.winner is Side.PLAYER:
        output("\nCongratulations, you won!")
    elif session.winner is Side.COMPUTER:
        output("\nThe computer won this time. Better luck next battle!")
    return session.winner


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Play Battleship via the CLI.")
    parser.add_argument(
        "--seed", type=int, default=None, help="Optional RNG seed for reproducibility."
    )
    parser.add_argument(
        "--log-level", default="WARNING", help="Console log level (default: WARNING)."
    )
    args = parser.parse_args(argv)
    configure_console_logging(args.log_level.upper())
    init_telemetry()
    try:
        play_game(GameSettings.from_env(seed=args.seed))
    finally:
        shutdown_tracing()


if __name__ == "__main__":
    main()
