import socket
import time

import pytest

from proofofduel.connection import ClientSession, ServerConnection
from proofofduel.player import PlayerHit
from proofofduel.protocol import (
    GameOver,
    GameState,
    IsGameReadyToStart,
    PlayerSelectionMessage,
    ServerChannel,
    ShootingCommand,
    ShootingStateMessage,
    UpdateHeartsStatus,
    decode_client_message,
    encode_message,
)
from proofofduel.shooting import ShootingEvent

STATES = tuple(ShootingStateMessage("Q", True) for _ in range(5))


def test_player_selection_on_lobby_channel():
    session = ClientSession()
    session.apply(0, PlayerSelectionMessage(2, 42))
    assert session.player_selection.player_number == 2
    assert session.player_selection.client_id == 42
    assert session.players_counting.count == 1


def test_player_selection_on_other_channel_ignored():
    session = ClientSession()
    session.apply(1, PlayerSelectionMessage(2, 42))
    assert session.player_selection.player_number == 0
    assert session.players_counting.count == 0


def test_ready_activates_timer_only_on_lobby():
    session = ClientSession()
    session.apply(1, IsGameReadyToStart(True))
    assert session.game_start_timer.active is False
    session.apply(0, IsGameReadyToStart(True))
    assert session.game_start_timer.active is True


def test_shooting_command_becomes_event():
    session = ClientSession()
    assert session.apply(0, ShootingCommand(1, STATES)) == []
    assert session.apply(1, ShootingCommand(1, STATES)) == [ShootingEvent(1, STATES)]


def test_hearts_update_sets_hearts_and_hits():
    session = ClientSession()
    events = session.apply(2, UpdateHeartsStatus(3, 5, 1))
    assert events == [PlayerHit(1)]
    assert (session.hearts.player_1_hearts, session.hearts.player_2_hearts) == (3, 5)


def test_game_over_and_reset():
    session = ClientSession()
    session.apply(0, PlayerSelectionMessage(1, 9))
    session.apply(3, GameOver(2))
    assert session.who_is_winner.player_number == 2
    assert session.next_state is GameState.GAME_OVER
    session.reset()
    assert session.next_state is None
    assert session.who_is_winner.player_number == 0
    assert session.player_selection.player_number == 0
    assert session.players_counting.count == 0


def test_send_without_open_raises():
    with pytest.raises(ConnectionError):
        ServerConnection("127.0.0.1", 1).send(GameOver(1))


def test_round_trip_over_socket():
    with socket.create_server(("127.0.0.1", 0)) as server:
        port = server.getsockname()[1]
        with ServerConnection("127.0.0.1", port) as conn:
            peer, _ = server.accept()
            with peer:
                conn.send(GameOver(1))
                line = peer.makefile("rb").readline()
                assert decode_client_message(line) == (0, GameOver(1))

                peer.sendall(
                    encode_message(UpdateHeartsStatus(4, 5, 1), ServerChannel.UPDATE_HEARTS_STATUS)
                )
                received = []
                deadline = time.monotonic() + 5
                while not received and time.monotonic() < deadline:
                    received = conn.poll()
                    time.sleep(0.01)
                assert received == [(2, UpdateHeartsStatus(4, 5, 1))]
        assert conn.is_open is False