"""Client side of the duel protocol: applying server messages and the socket link."""

from __future__ import annotations

import logging
import select
import socket
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from .player import PlayerHeartsStatus, PlayerHit, PlayersCounting, PlayerSelection
from .protocol import (
    SERVER_HOST,
    SERVER_PORT,
    ClientChannel,
    GameOver,
    GameState,
    IsGameReadyToStart,
    PlayerSelectionMessage,
    ProtocolError,
    ShootingCommand,
    UpdateHeartsStatus,
    decode_server_message,
    encode_message,
)
from .screens import GameStartTimer, WhoIsWinner
from .shooting import ShootingEvent

log = logging.getLogger(__name__)

ClientEvent = Union[ShootingEvent, PlayerHit]


@dataclass
class ClientSession:
    """Everything the client learns from the server during one match."""

    player_selection: PlayerSelection = field(default_factory=PlayerSelection)
    players_counting: PlayersCounting = field(default_factory=PlayersCounting)
    game_start_timer: GameStartTimer = field(default_factory=GameStartTimer)
    hearts: PlayerHeartsStatus = field(default_factory=PlayerHeartsStatus)
    who_is_winner: WhoIsWinner = field(default_factory=WhoIsWinner)
    next_state: Optional[GameState] = None

    def apply(self, channel: int, message: object) -> List[ClientEvent]:
        """Apply one server message; returns the game events it raises."""
        if isinstance(message, PlayerSelectionMessage):
            if channel == 0:
                self.player_selection.player_number = message.player_number
                self.player_selection.client_id = message.client_id
                self.players_counting.count += 1
        elif isinstance(message, IsGameReadyToStart):
            if message.is_ready and not self.game_start_timer.active and channel == 0:
                self.game_start_timer.active = True
        elif isinstance(message, ShootingCommand):
            if channel == 1:
                return [ShootingEvent(message.player_number, message.states)]
        elif isinstance(message, UpdateHeartsStatus):
            if channel == 2:
                self.hearts.player_1_hearts = message.player_1_hearts
                self.hearts.player_2_hearts = message.player_2_hearts
                return [PlayerHit(message.who_was_hit)]
        elif isinstance(message, GameOver):
            self.who_is_winner.player_number = message.winner
            self.next_state = GameState.GAME_OVER
        return []

    def reset(self) -> None:
        """Forget the match, ready for a new lobby."""
        self.player_selection.reset()
        self.players_counting.reset()
        self.game_start_timer.reset()
        self.hearts.reset()
        self.who_is_winner.reset()
        self.next_state = None


class ServerConnection:
    """Line-oriented TCP link to the duel server that never blocks on reads."""

    def __init__(self, host: str = SERVER_HOST, port: int = SERVER_PORT, timeout: float = 5.0):
        self.host = host
        self.port = port
        self.timeout = timeout
        self._sock: Optional[socket.socket] = None
        self._pending = b""

    @property
    def is_open(self) -> bool:
        return self._sock is not None

    def open(self) -> None:
        if self._sock is not None:
            return
        self._sock = socket.create_connection((self.host, self.port), timeout=self.timeout)
        self._pending = b""

    def _require(self) -> socket.socket:
        if self._sock is None:
            raise ConnectionError("connection to the server is not open")
        return self._sock

    def send(self, message: object) -> None:
        self._require().sendall(encode_message(message, ClientChannel.LOBBY))  # type: ignore[arg-type]

    def poll(self) -> List[Tuple[int, object]]:
        """Return every complete message received so far as ``(channel, message)``."""
        sock = self._require()
        while True:
            ready, _, _ = select.select([sock], [], [], 0)
            if not ready:
                break
            chunk = sock.recv(4096)
            if not chunk:
                self.close()
                break
            self._pending += chunk
        *lines, self._pending = self._pending.split(b"\n")
        messages: List[Tuple[int, object]] = []
        for line in lines:
            if not line.strip():
                continue
            try:
                messages.append(decode_server_message(line))
            except ProtocolError as exc:
                log.warning("server sent a bad message: %s", exc)
        return messages

    def close(self) -> None:
        if self._sock is not None:
            self._sock.close()
            self._sock = None

    def __enter__(self) -> "ServerConnection":
        self.open()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()