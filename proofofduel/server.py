"""Lobby and relay server that pairs two duellists and forwards their moves."""

from __future__ import annotations

import argparse
import asyncio
import itertools
import logging
from contextlib import suppress
from typing import Dict, List, Optional, Sequence, Tuple

from .player import Player
from .protocol import (
    LOCAL_BIND_IP,
    SERVER_PORT,
    GameOver,
    IsGameReadyToStart,
    PlayerSelectionMessage,
    ProtocolError,
    ServerChannel,
    ShootingCommand,
    UpdateHeartsStatus,
    decode_client_message,
    encode_message,
)

log = logging.getLogger(__name__)

MAX_PLAYERS = 2

# (recipient client id, or None for every client; channel; message)
_Delivery = Tuple[Optional[int], ServerChannel, object]


class DuelServer:
    """Assigns player numbers and relays messages between the two players."""

    def __init__(self) -> None:
        self.players: Dict[int, Player] = {}
        self.address: Optional[Tuple[str, int]] = None
        self.listening = asyncio.Event()
        self._writers: Dict[int, asyncio.StreamWriter] = {}
        self._ids = itertools.count(1)

    def connect(self, client_id: int) -> List[_Delivery]:
        """Admit a client; raises ConnectionRefusedError once two players are in."""
        if len(self.players) >= MAX_PLAYERS:
            raise ConnectionRefusedError(f"lobby is full, refusing client {client_id}")
        taken = {player.player_number for player in self.players.values()}
        player_number = 1 if 1 not in taken else 2
        self.players[client_id] = Player(client_id, player_number)

        deliveries: List[_Delivery] = [
            (client_id, ServerChannel.LOBBY, PlayerSelectionMessage(player_number, client_id))
        ]
        if len(self.players) == MAX_PLAYERS:
            deliveries.append((None, ServerChannel.LOBBY, IsGameReadyToStart(True)))
        return deliveries

    def handle_message(self, client_id: int, message: object) -> List[_Delivery]:
        """Deliveries caused by a message from ``client_id``; none from strangers."""
        if client_id not in self.players:
            return []
        if isinstance(message, ShootingCommand):
            return [(None, ServerChannel.SHOOTING, message)]
        if isinstance(message, UpdateHeartsStatus):
            p1, p2 = message.player_1_hearts, message.player_2_hearts
            if message.who_was_hit == 1:
                p1 = max(p1 - 1, 0)
            elif message.who_was_hit == 2:
                p2 = max(p2 - 1, 0)
            else:
                return []
            update = UpdateHeartsStatus(p1, p2, message.who_was_hit)
            return [(None, ServerChannel.UPDATE_HEARTS_STATUS, update)]
        if isinstance(message, GameOver):
            return [(None, ServerChannel.LOBBY, message)]
        return []

    async def serve(self, host: str = LOCAL_BIND_IP, port: int = SERVER_PORT) -> None:
        """Listen on ``host:port`` until cancelled."""
        server = await asyncio.start_server(self._handle_client, host, port)
        self.address = server.sockets[0].getsockname()[:2]
        self.listening.set()
        log.info("listening on %s:%s", *self.address)
        try:
            async with server:
                await server.serve_forever()
        finally:
            self.listening.clear()
            for writer in list(self._writers.values()):
                writer.close()
            self._writers.clear()

    async def _handle_client(
        self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter
    ) -> None:
        client_id = next(self._ids)
        try:
            deliveries = self.connect(client_id)
        except ConnectionRefusedError as exc:
            log.info("%s", exc)
            writer.close()
            with suppress(ConnectionError):
                await writer.wait_closed()
            return

        self._writers[client_id] = writer
        try:
            await self._dispatch(deliveries)
            while line := await reader.readline():
                try:
                    _, message = decode_client_message(line)
                except ProtocolError as exc:
                    log.warning("client %s sent a bad message: %s", client_id, exc)
                    continue
                await self._dispatch(self.handle_message(client_id, message))
        except ConnectionError:
            pass
        finally:
            self._writers.pop(client_id, None)
            writer.close()

    async def _dispatch(self, deliveries: Sequence[_Delivery]) -> None:
        for recipient, channel, message in deliveries:
            data = encode_message(message, channel)  # type: ignore[arg-type]
            if recipient is None:
                targets = list(self._writers.values())
            else:
                targets = [w for w in (self._writers.get(recipient),) if w is not None]
            for target in targets:
                with suppress(ConnectionError):
                    target.write(data)
                    await target.drain()


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Run the duel lobby server.")
    parser.add_argument("--host", default=LOCAL_BIND_IP, help="address to bind")
    parser.add_argument("--port", type=int, default=SERVER_PORT, help="port to listen on")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)
    with suppress(KeyboardInterrupt):
        asyncio.run(DuelServer().serve(args.host, args.port))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())