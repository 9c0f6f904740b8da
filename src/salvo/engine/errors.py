"""Exceptions raised by the Battleship engine."""

from __future__ import annotations


class SalvoError(Exception):
    """Base class for every engine error."""


class OutOfBoundsError(SalvoError, ValueError):
    """A coordinate lies outside the board."""


class AlreadyAttackedError(SalvoError, ValueError):
    """A coordinate has already been fired upon."""


class InvalidKindError(SalvoError, ValueError):
    """A ship kind is not one of the five fleet classes."""


class InvalidPlacementError(SalvoError, ValueError):
    """A ship would leave the board or overlap another ship."""


class PlacementExhaustedError(SalvoError, RuntimeError):
    """Random placement ran out of attempts for a ship."""


class NoTargetsRemainingError(SalvoError, RuntimeError):
    """Every coordinate on the board has been fired upon."""


class SessionOverError(SalvoError, RuntimeError):
    """A move was attempted after the game finished."""


class NotYourTurnError(SalvoError, RuntimeError):
    """A move was attempted out of turn."""
