"""Menu, lobby and game-over screen state: texts, button colours and the start countdown."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple

from .player import PlayerSelection

MAIN_MENU_LIST: Tuple[str, ...] = ("Play Now", "Quit")
WAITING_LIST: Tuple[str, ...] = ("Back",)
BACK_TO_MAIN_MENU = "Back to Main Menu"

GAME_TITLE = "Proof of Duel"
WAITING_PLACEHOLDER = "Waiting for players..."
REQUIRED_PLAYERS = 2
DEFAULT_COUNTDOWN_SECS = 3.0

Rgba = Tuple[float, float, float, float]

TRANSPARENT: Rgba = (0.0, 0.0, 0.0, 0.0)
PRESSED_BACKGROUND: Rgba = (0.8, 0.8, 0.8, 0.15)
HOVERED_BACKGROUND: Rgba = (0.8, 0.8, 0.8, 0.07)

WIN_TEXT = "You Win!"
LOSE_TEXT = "You Lose!"
DRAW_TEXT = "It's a Draw!"


class MainMenuState(Enum):
    MAIN_MENU = "main_menu"
    PLAY_NOW = "play_now"
    JOIN_GAME = "join_game"
    NONE = "none"


class Interaction(Enum):
    """How the pointer currently relates to a button."""

    PRESSED = "pressed"
    HOVERED = "hovered"
    NONE = "none"


@dataclass
class GameStartTimer:
    """One-shot countdown that runs once the lobby is full."""

    duration: float = DEFAULT_COUNTDOWN_SECS
    active: bool = False
    elapsed: float = field(default=0.0, init=False)
    _finished: bool = field(default=False, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.duration < 0:
            raise ValueError(f"countdown duration must not be negative, got {self.duration!r}")

    def tick(self, delta: float) -> None:
        """Advance the countdown by ``delta`` seconds; it stops at its duration."""
        if delta < 0:
            raise ValueError(f"time step must not be negative, got {delta!r}")
        self.elapsed = min(self.elapsed + delta, self.duration)
        if self.elapsed >= self.duration:
            self._finished = True

    def remaining_secs(self) -> float:
        return self.duration - self.elapsed

    def finished(self) -> bool:
        return self._finished

    def reset(self) -> None:
        """Stop the countdown and rewind it to its full duration."""
        self.active = False
        self.elapsed = 0.0
        self._finished = False


@dataclass
class WhoIsWinner:
    """Winner reported by the server: 1, 2, or 0 for a draw."""

    player_number: int = 0

    def reset(self) -> None:
        self.player_number = 0


def button_background(interaction: Interaction) -> Rgba:
    """Background colour of a menu button for the given interaction."""
    if interaction is Interaction.PRESSED:
        return PRESSED_BACKGROUND
    if interaction is Interaction.HOVERED:
        return HOVERED_BACKGROUND
    if interaction is Interaction.NONE:
        return TRANSPARENT
    raise ValueError(f"unknown interaction {interaction!r}")


def game_over_text(winner: int, selection: PlayerSelection) -> str:
    """Headline of the game-over screen as seen by the local player."""
    me = selection.player_number
    if winner in (1, 2) and me in (1, 2):
        return WIN_TEXT if winner == me else LOSE_TEXT
    return DRAW_TEXT


def waiting_text(players_count: int) -> str:
    return f"Waiting for players: {players_count}/{REQUIRED_PLAYERS}"


def countdown_text(timer: GameStartTimer) -> str:
    return f"Game starts in: {math.ceil(timer.remaining_secs())}"