"""Duellists, their hearts and the lock that guards a shot."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .protocol import GRID_SIZE, MAP_SIZE_X, SHOTS_PER_COMMAND, GameOver, UpdateHeartsStatus
from .shooting import ShootingEvent

MAX_HEARTS = 5
HEART_SPACING = 32.0
_LAYER = 100.0

Position = Tuple[float, float, float]


@dataclass
class PlayerSelection:
    """Which player this client plays, as assigned by the server."""

    player_number: int = 0
    client_id: int = 0

    def reset(self) -> None:
        self.player_number = 0
        self.client_id = 0


@dataclass
class PlayersCounting:
    """How many players the lobby has reported so far."""

    count: int = 0

    def reset(self) -> None:
        self.count = 0


@dataclass
class Player:
    client_id: int
    player_number: int
    wallet: str = ""


@dataclass
class PlayerHeartsStatus:
    player_1_hearts: int = MAX_HEARTS
    player_2_hearts: int = MAX_HEARTS

    def reset(self) -> None:
        self.player_1_hearts = MAX_HEARTS
        self.player_2_hearts = MAX_HEARTS


@dataclass(frozen=True)
class PlayerHit:
    player: int


@dataclass
class ShootingLock:
    """Set once this client has typed a full sequence and waits for the shot."""

    locked: bool = False

    def lock(self) -> None:
        self.locked = True

    def unlock(self) -> None:
        self.locked = False

    def is_locked(self) -> bool:
        return self.locked

    def reset(self) -> None:
        self.locked = False


def _side(player_number: int) -> int:
    if player_number == 1:
        return -1
    if player_number == 2:
        return 1
    raise ValueError(f"player number must be 1 or 2, got {player_number!r}")


def player_position(player_number: int) -> Position:
    """Where a player stands: player 1 on the left, player 2 on the right."""
    side = _side(player_number)
    x = (GRID_SIZE * MAP_SIZE_X) / 2.0 - GRID_SIZE * 5.0
    return (side * x, -(GRID_SIZE * 5.0), _LAYER)


def heart_position(player_number: int, index: int) -> Position:
    """Position of a heart relative to its player; hearts run toward the centre."""
    side = _side(player_number)
    if not 0 <= index < MAX_HEARTS:
        raise ValueError(f"heart index must be in 0..{MAX_HEARTS - 1}, got {index!r}")
    return (side * (GRID_SIZE * 2.5 - index * HEART_SPACING), GRID_SIZE * 3.0, _LAYER)


def label_position(player_number: int) -> Position:
    """Position of a player's name label relative to the player."""
    return (_side(player_number) * GRID_SIZE * 0.5, GRID_SIZE * 4.5, _LAYER)


def player_label(player_number: int, selection: PlayerSelection) -> str:
    """Label above a player: "You" for the local player."""
    _side(player_number)
    if selection.player_number == player_number:
        return "You"
    return f"Player {player_number}"


def shooting_response(
    event: ShootingEvent, lock: ShootingLock, hearts: PlayerHeartsStatus
) -> Optional[UpdateHeartsStatus]:
    """Turn a completed, locked shot into the hit report to send.

    Unlocks ``lock`` when the shot fires; returns ``None`` when it does not.
    """
    if event.player not in (1, 2) or not lock.is_locked():
        return None
    if sum(state.is_pressed_correct for state in event.states) != SHOTS_PER_COMMAND:
        return None
    lock.unlock()
    return UpdateHeartsStatus(
        player_1_hearts=hearts.player_1_hearts,
        player_2_hearts=hearts.player_2_hearts,
        who_was_hit=3 - event.player,
    )


def game_over_messages(hearts: PlayerHeartsStatus) -> List[GameOver]:
    """Game-over reports due for the given hearts, in the order they are sent."""
    messages = []
    if hearts.player_1_hearts == 0:
        messages.append(GameOver(winner=2))
    if hearts.player_2_hearts == 0:
        messages.append(GameOver(winner=1))
    if hearts.player_1_hearts == 0 and hearts.player_2_hearts == 0:
        messages.append(GameOver(winner=0))
    return messages