"""The duel client: game flow, key handling and the pygame window."""

from __future__ import annotations

import argparse
import random
from typing import Dict, List, Optional, Sequence, Tuple

from .connection import ClientSession, ServerConnection
from .keycode import KeyCode, key_label
from .player import (
    MAX_HEARTS,
    PlayerHit,
    ShootingLock,
    game_over_messages,
    heart_position,
    label_position,
    player_label,
    player_position,
    shooting_response,
)
from .protocol import (
    SERVER_HOST,
    SERVER_PORT,
    ConnectionState,
    GameState,
    ShootingCommand,
)
from .screens import (
    BACK_TO_MAIN_MENU,
    GAME_TITLE,
    MAIN_MENU_LIST,
    WAITING_LIST,
    WAITING_PLACEHOLDER,
    Interaction,
    MainMenuState,
    button_background,
    countdown_text,
    game_over_text,
    waiting_text,
)
from .shooting import ShootingEvent, ShootingStates, shooting_key_position
from .protocol import GRID_SIZE

WINDOW_SIZE = (1280, 640)
GUN_SHOT_OFFSET = GRID_SIZE * 5.0


class DuelGame:
    """State machine of the client, independent of how it is drawn."""

    def __init__(
        self,
        connection: Optional[object] = None,
        rng: Optional[random.Random] = None,
        countdown: float = 3.0,
    ) -> None:
        self.connection = connection if connection is not None else ServerConnection()
        self.state = GameState.MAIN_MENU
        self.menu_state = MainMenuState.MAIN_MENU
        self.connection_state = ConnectionState.IDLE
        self.session = ClientSession()
        self.session.game_start_timer.duration = countdown
        self.shooting = ShootingStates(rng=rng or random.Random())
        self.lock = ShootingLock()
        self.status_text = WAITING_PLACEHOLDER
        self.result_text = ""
        self.gun_shots: List[Tuple[float, float, float]] = []
        self.hits: List[int] = []
        self.music_playing = False
        self.running = True

    # -- buttons ---------------------------------------------------------
    def buttons(self) -> Tuple[str, ...]:
        if self.state is GameState.GAME_OVER:
            return (BACK_TO_MAIN_MENU,)
        if self.state is GameState.MAIN_MENU:
            if self.menu_state is MainMenuState.MAIN_MENU:
                return MAIN_MENU_LIST
            if self.menu_state is MainMenuState.PLAY_NOW:
                return WAITING_LIST
        return ()

    def _press(self, name: str) -> None:
        if name not in self.buttons():
            return
        if name == "Play Now":
            self.menu_state = MainMenuState.PLAY_NOW
            self.status_text = WAITING_PLACEHOLDER
            self.connection.open()
            self.connection_state = ConnectionState.CONNECTED
        elif name == "Quit":
            self._disconnect()
            self.running = False
        elif name == "Back":
            self._disconnect()
            self.session.player_selection.reset()
            self.menu_state = MainMenuState.MAIN_MENU
            self.state = GameState.MAIN_MENU
        elif name == BACK_TO_MAIN_MENU:
            self._disconnect()
            self.session.reset()
            self.shooting.reset()
            self.lock.reset()
            self.hits.clear()
            self.menu_state = MainMenuState.MAIN_MENU
            self.state = GameState.MAIN_MENU

    def _disconnect(self) -> None:
        if self.connection_state is ConnectionState.CONNECTED:
            self.connection.close()
        self.connection_state = ConnectionState.IDLE

    # -- state transitions -----------------------------------------------
    def _enter(self, state: GameState) -> None:
        if state is self.state:
            return
        if self.state is GameState.IN_GAME:
            self.music_playing = False
            self.gun_shots.clear()
        self.state = state
        if state is GameState.IN_GAME:
            self.music_playing = True
        elif state is GameState.GAME_OVER:
            self.session.game_start_timer.reset()
            self.result_text = game_over_text(
                self.session.who_is_winner.player_number, self.session.player_selection
            )

    # -- input -----------------------------------------------------------
    def handle_key(self, key: object) -> None:
        """React to one key press in the current screen."""
        if self.state is GameState.IN_GAME:
            outcome = self.shooting.press_key(key)
            if outcome is None:
                return
            if outcome.reset_keys:
                self.shooting.randomize_keys()
            if outcome.completed is not None:
                self.lock.lock()
                self.connection.send(
                    ShootingCommand(self.session.player_selection.player_number, outcome.completed)
                )
            return
        buttons = self.buttons()
        if key is KeyCode.Enter and buttons:
            self._press(buttons[0])
        elif key is KeyCode.Escape and buttons:
            self._press(buttons[-1])

    # -- per-frame update ------------------------------------------------
    def update(self, delta: float) -> None:
        """Advance the game by ``delta`` seconds."""
        if self.connection_state is ConnectionState.CONNECTED:
            for channel, message in self.connection.poll():
                for event in self.session.apply(channel, message):
                    self._handle_event(event)
            if self.session.next_state is not None:
                self._enter(self.session.next_state)
                self.session.next_state = None

        timer = self.session.game_start_timer
        if self.state is GameState.MAIN_MENU and self.menu_state is MainMenuState.PLAY_NOW:
            if not timer.active:
                self.status_text = waiting_text(self.session.players_counting.count)
            else:
                timer.tick(delta)
                self.status_text = countdown_text(timer)
                if timer.finished():
                    timer.active = False
                    self.menu_state = MainMenuState.NONE
                    self._enter(GameState.IN_GAME)

    def _handle_event(self, event: object) -> None:
        if self.state is not GameState.IN_GAME:
            return
        hearts = self.session.hearts
        if isinstance(event, ShootingEvent):
            report = shooting_response(event, self.lock, hearts)
            if report is not None:
                side = -1.0 if event.player == 2 else 1.0
                self.gun_shots.append((side * GUN_SHOT_OFFSET, 0.0, 1000.0))
                self.connection.send(report)
                self.shooting.randomize_keys()
        elif isinstance(event, PlayerHit):
            if event.player in (1, 2):
                self.hits.append(event.player)
                for message in game_over_messages(hearts):
                    self.connection.send(message)

    # -- window ----------------------------------------------------------
    def run(self) -> None:
        """Open the window and play until it is closed."""
        import pygame

        pygame.init()
        screen = pygame.display.set_mode(WINDOW_SIZE, pygame.RESIZABLE)
        pygame.display.set_caption(GAME_TITLE)
        fonts = {size: pygame.font.Font(None, size) for size in (28, 36, 48, 64, 94)}
        keymap = _pygame_keymap(pygame)
        clock = pygame.time.Clock()
        try:
            while self.running:
                rects = self._button_rects(pygame, screen)
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self.running = False
                    elif event.type == pygame.KEYDOWN and event.key in keymap:
                        self.handle_key(keymap[event.key])
                    elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                        for name, rect in rects.items():
                            if rect.collidepoint(event.pos):
                                self._press(name)
                                break
                self.update(clock.tick(60) / 1000.0)
                self._draw(pygame, screen, fonts, self._button_rects(pygame, screen))
                pygame.display.flip()
        finally:
            self._disconnect()
            pygame.quit()

    def _button_rects(self, pygame, screen) -> Dict[str, object]:
        width, height = screen.get_size()
        names = self.buttons()
        return {
            name: pygame.Rect(width // 2 - 251, height // 2 + i * 110, 502, 88)
            for i, name in enumerate(names)
        }

    def _draw(self, pygame, screen, fonts, rects) -> None:
        white = (255, 255, 255)
        screen.fill((0, 0, 0))
        width, height = screen.get_size()

        def blit(text, size, center):
            surface = fonts[size].render(text, True, white)
            screen.blit(surface, surface.get_rect(center=center))

        def world(pos):
            return (width / 2 + pos[0], height / 2 - pos[1])

        if self.state is GameState.IN_GAME:
            for number in (1, 2):
                px, py, _ = player_position(number)
                centre = world((px, py))
                pygame.draw.rect(screen, white, pygame.Rect(0, 0, 48, 64).move(
                    centre[0] - 24, centre[1] - 32), 2)
                hearts = getattr(self.session.hearts, f"player_{number}_hearts")
                for i in range(MAX_HEARTS):
                    hx, hy, _ = heart_position(number, i)
                    filled = 0 if i < hearts else 2
                    pygame.draw.circle(screen, (200, 30, 30), world((px + hx, py + hy)), 10, filled)
                lx, ly, _ = label_position(number)
                blit(player_label(number, self.session.player_selection), 28, world((px + lx, py + ly)))
            for i, data in enumerate(self.shooting.data):
                x, y, _ = shooting_key_position(i)
                colour = (40, 160, 60) if data.is_pressed_correct else white
                rect = pygame.Rect(0, 0, 64, 64)
                rect.center = world((x, y))
                pygame.draw.rect(screen, colour, rect, 2)
                blit(key_label(data.key), 36, rect.center)
        else:
            if self.state is GameState.GAME_OVER:
                blit(self.result_text, 64, (width / 2, height / 4))
            elif self.menu_state is MainMenuState.PLAY_NOW:
                blit(self.status_text, 64, (width / 2, height / 4))
            else:
                blit(GAME_TITLE, 94, (width / 2, height / 4))
            mouse = pygame.mouse.get_pos()
            pressed = pygame.mouse.get_pressed()[0]
            for name, rect in rects.items():
                if rect.collidepoint(mouse):
                    interaction = Interaction.PRESSED if pressed else Interaction.HOVERED
                else:
                    interaction = Interaction.NONE
                r, g, b, a = button_background(interaction)
                fill = pygame.Surface(rect.size, pygame.SRCALPHA)
                fill.fill((int(r * 255), int(g * 255), int(b * 255), int(a * 255)))
                screen.blit(fill, rect.topleft)
                pygame.draw.rect(screen, white, rect, 2)
                blit(name, 48 if self.state is GameState.MAIN_MENU else 36, rect.center)


def _pygame_keymap(pygame) -> Dict[int, KeyCode]:
    keymap = {getattr(pygame, f"K_{c}"): KeyCode[f"Key{c.upper()}"] for c in "abcdefghijklmnopqrstuvwxyz"}
    keymap.update({getattr(pygame, f"K_{d}"): KeyCode[f"Digit{d}"] for d in range(10)})
    keymap.update(
        {
            pygame.K_RETURN: KeyCode.Enter,
            pygame.K_ESCAPE: KeyCode.Escape,
            pygame.K_SPACE: KeyCode.Space,
            pygame.K_TAB: KeyCode.Tab,
            pygame.K_BACKSPACE: KeyCode.Backspace,
            pygame.K_UP: KeyCode.ArrowUp,
            pygame.K_DOWN: KeyCode.ArrowDown,
            pygame.K_LEFT: KeyCode.ArrowLeft,
            pygame.K_RIGHT: KeyCode.ArrowRight,
            pygame.K_LSHIFT: KeyCode.ShiftLeft,
            pygame.K_RSHIFT: KeyCode.ShiftRight,
        }
    )
    return keymap


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Play a duel.")
    parser.add_argument("--host", default=SERVER_HOST, help="server address")
    parser.add_argument("--port", type=int, default=SERVER_PORT, help="server port")
    args = parser.parse_args(argv)
    DuelGame(ServerConnection(args.host, args.port)).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())