"""State of the five-key sequence a player types to fire."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .keycode import KeyCode, key_label
from .protocol import GRID_SIZE, SHOTS_PER_COMMAND, ShootingStateMessage

KEY_POOL: Tuple["KeyCode", ...] = (KeyCode.KeyQ, KeyCode.KeyW, KeyCode.KeyE, KeyCode.KeyR)
KEY_SPACING = 7.0 + 64.0


@dataclass
class ShootingData:
    key: "KeyCode"
    is_pressed_correct: bool = False


@dataclass(frozen=True)
class ShootingEvent:
    player: int
    states: Tuple[ShootingStateMessage, ...]


@dataclass(frozen=True)
class KeyOutcome:
    """What one key press did to the sequence.

    ``reset_keys`` asks for the keys to be drawn anew; ``completed`` holds the
    states to send once all five keys were typed.
    """

    index: int
    correct: bool
    reset_keys: bool = False
    completed: Optional[Tuple[ShootingStateMessage, ...]] = None


@dataclass
class ShootingStates:
    data: List[ShootingData] = field(default_factory=list)
    current_key_index: int = 0
    wrong_count: int = 0
    rng: random.Random = field(default_factory=random.Random, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.data:
            self.data = self._draw()
        elif len(self.data) != SHOTS_PER_COMMAND:
            raise ValueError(f"a sequence holds {SHOTS_PER_COMMAND} keys, got {len(self.data)}")

    def _draw(self) -> List[ShootingData]:
        return [ShootingData(self.rng.choice(KEY_POOL)) for _ in range(SHOTS_PER_COMMAND)]

    def is_last_key(self) -> bool:
        return self.current_key_index == SHOTS_PER_COMMAND

    def reset_current_key_index(self) -> None:
        self.current_key_index = 0

    def next_key(self) -> None:
        self.current_key_index = min(self.current_key_index + 1, SHOTS_PER_COMMAND)

    def wrong_key_increment(self) -> None:
        self.wrong_count += 1

    def randomize_keys(self) -> None:
        """Draw new keys in place and clear their pressed flags."""
        for data in self.data:
            data.key = self.rng.choice(KEY_POOL)
            data.is_pressed_correct = False

    def reset(self) -> None:
        self.data = self._draw()
        self.current_key_index = 0
        self.wrong_count = 0

    def to_message(self) -> Tuple[ShootingStateMessage, ...]:
        return tuple(ShootingStateMessage(key_label(d.key), d.is_pressed_correct) for d in self.data)

    def press_key(self, key: object) -> Optional[KeyOutcome]:
        """Apply a key press; returns ``None`` when the press is not judged."""
        index = self.current_key_index
        if index >= len(self.data) or not isinstance(key, KeyCode):
            return None
        current = self.data[index]
        correct = key is current.key
        if correct:
            current.is_pressed_correct = True
            self.next_key()
        else:
            self.wrong_key_increment()
            self.reset_current_key_index()

        completed = None
        if self.is_last_key():
            completed = self.to_message()
            self.reset_current_key_index()
        return KeyOutcome(index=index, correct=correct, reset_keys=not correct, completed=completed)


def shooting_key_position(index: int) -> Tuple[float, float, float]:
    """Screen position of the shooting key at ``index``."""
    return (-GRID_SIZE * 5.0 + index * KEY_SPACING, -GRID_SIZE, 100.0)