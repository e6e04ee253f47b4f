import random

from proofofduel.app import DuelGame
from proofofduel.keycode import KeyCode
from proofofduel.protocol import (
    ConnectionState,
    GameOver,
    GameState,
    IsGameReadyToStart,
    PlayerSelectionMessage,
    ShootingCommand,
    ShootingStateMessage,
    UpdateHeartsStatus,
)
from proofofduel.screens import MainMenuState


class FakeConnection:
    def __init__(self):
        self.opened = False
        self.closed = False
        self.sent = []
        self.inbox = []

    def open(self):
        self.opened = True

    def close(self):
        self.closed = True

    def send(self, message):
        self.sent.append(message)

    def poll(self):
        messages, self.inbox = self.inbox, []
        return messages


def in_game(player=1):
    conn = FakeConnection()
    game = DuelGame(conn, rng=random.Random(3))
    game.handle_key(KeyCode.Enter)
    conn.inbox += [(0, PlayerSelectionMessage(player, 7)), (0, IsGameReadyToStart(True))]
    game.update(0.0)
    game.update(3.0)
    return game, conn


def type_sequence(game):
    for data in list(game.shooting.data):
        game.handle_key(data.key)


def test_play_now_opens_connection():
    conn = FakeConnection()
    game = DuelGame(conn)
    game.handle_key(KeyCode.Enter)
    assert conn.opened
    assert game.menu_state is MainMenuState.PLAY_NOW
    assert game.connection_state is ConnectionState.CONNECTED


def test_lobby_waiting_text_then_game_starts():
    conn = FakeConnection()
    game = DuelGame(conn)
    game.handle_key(KeyCode.Enter)
    conn.inbox.append((0, PlayerSelectionMessage(1, 7)))
    game.update(0.0)
    assert game.status_text == "Waiting for players: 1/2"
    conn.inbox.append((0, IsGameReadyToStart(True)))
    game.update(0.0)
    game.update(3.0)
    assert game.state is GameState.IN_GAME
    assert game.menu_state is MainMenuState.NONE
    assert game.music_playing


def test_full_sequence_sends_command_and_locks():
    game, conn = in_game()
    type_sequence(game)
    assert game.lock.is_locked()
    command = conn.sent[-1]
    assert isinstance(command, ShootingCommand)
    assert command.player_number == 1
    assert all(state.is_pressed_correct for state in command.states)


def test_wrong_key_counts_and_sends_nothing():
    game, conn = in_game()
    wrong = next(k for k in (KeyCode.KeyQ, KeyCode.KeyW) if k is not game.shooting.data[0].key)
    game.handle_key(wrong)
    assert game.shooting.wrong_count == 1
    assert game.shooting.current_key_index == 0
    assert conn.sent == []


def test_shot_reports_hit_on_opponent():
    game, conn = in_game()
    type_sequence(game)
    states = tuple(ShootingStateMessage("Q", True) for _ in range(5))
    conn.inbox.append((1, ShootingCommand(1, states)))
    game.update(0.016)
    assert conn.sent[-1] == UpdateHeartsStatus(5, 5, 2)
    assert not game.lock.is_locked()
    assert len(game.gun_shots) == 1


def test_last_heart_lost_sends_game_over():
    game, conn = in_game()
    conn.inbox.append((2, UpdateHeartsStatus(0, 5, 1)))
    game.update(0.016)
    assert conn.sent == [GameOver(2)]
    assert game.hits == [1]


def test_game_over_then_back_to_menu():
    game, conn = in_game(player=1)
    conn.inbox.append((0, GameOver(1)))
    game.update(0.016)
    assert game.state is GameState.GAME_OVER
    assert game.result_text == "You Win!"
    assert game.gun_shots == []
    game.handle_key(KeyCode.Enter)
    assert game.state is GameState.MAIN_MENU
    assert game.menu_state is MainMenuState.MAIN_MENU
    assert game.connection_state is ConnectionState.IDLE
    assert game.session.player_selection.player_number == 0
    assert conn.closed


def test_escape_on_main_menu_quits():
    game = DuelGame(FakeConnection())
    game.handle_key(KeyCode.Escape)
    assert game.running is False