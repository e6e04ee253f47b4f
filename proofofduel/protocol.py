"""Game states, network channels and the messages exchanged between client and server.

Messages travel as JSON lines: ``{"channel": <n>, "message": {"<Variant>": {...}}}``.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from enum import Enum, IntEnum
from typing import Any, ClassVar, Dict, Tuple, Type, Union

GRID_SIZE = 32.0
MAP_SIZE_X = 40
MUSIC_VOLUME = 0.8
AUDIO_SCALE = 1.0 / 100.0

SERVER_HOST = "127.0.0.1"
LOCAL_BIND_IP = "0.0.0.0"
SERVER_PORT = 6000

SHOTS_PER_COMMAND = 5
_MAX_U64 = 2**64 - 1
_MAX_CHANNEL = 255


class ProtocolError(ValueError):
    """Raised when a message cannot be encoded or decoded."""


class GameState(Enum):
    MAIN_MENU = "main_menu"
    IN_GAME = "in_game"
    GAME_OVER = "game_over"


class ConnectionState(Enum):
    IDLE = "idle"
    CONNECTED = "connected"


class ChannelKind(Enum):
    ORDERED_RELIABLE = "ordered_reliable"
    UNORDERED_RELIABLE = "unordered_reliable"
    UNRELIABLE = "unreliable"


class ServerChannel(IntEnum):
    LOBBY = 0
    SHOOTING = 1
    UPDATE_HEARTS_STATUS = 2
    GAME_OVER = 3

    @classmethod
    def channels_configuration(cls) -> Tuple[ChannelKind, ...]:
        """Kinds of the channels the server opens, in channel-id order."""
        return (
            ChannelKind.ORDERED_RELIABLE,
            ChannelKind.UNORDERED_RELIABLE,
            ChannelKind.UNRELIABLE,
        )


class ClientChannel(IntEnum):
    LOBBY = 0
    SHOOTING = 1
    UPDATE_HEARTS_STATUS = 2
    GAME_OVER = 3

    @classmethod
    def channels_configuration(cls) -> Tuple[ChannelKind, ...]:
        """Kinds of the channels the client opens, in channel-id order."""
        return (ChannelKind.ORDERED_RELIABLE,)


def _uint(value: Any, name: str, maximum: int = _MAX_U64) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= maximum:
        raise ProtocolError(f"{name} must be an unsigned integer, got {value!r}")
    return value


def _bool(value: Any, name: str) -> bool:
    if not isinstance(value, bool):
        raise ProtocolError(f"{name} must be a boolean, got {value!r}")
    return value


def _fields(fields: Any, names: Tuple[str, ...], tag: str) -> Dict[str, Any]:
    if not isinstance(fields, dict) or set(fields) != set(names):
        raise ProtocolError(f"{tag} expects fields {sorted(names)}, got {fields!r}")
    return fields


@dataclass(frozen=True)
class ShootingStateMessage:
    key: str
    is_pressed_correct: bool

    @classmethod
    def _from_fields(cls, fields: Any) -> "ShootingStateMessage":
        fields = _fields(fields, ("key", "is_pressed_correct"), "shooting state")
        if not isinstance(fields["key"], str):
            raise ProtocolError(f"key must be a string, got {fields['key']!r}")
        return cls(fields["key"], _bool(fields["is_pressed_correct"], "is_pressed_correct"))


@dataclass(frozen=True)
class PlayerSelectionMessage:
    player_number: int
    client_id: int
    tag: ClassVar[str] = "PlayerSelection"

    @classmethod
    def _from_fields(cls, fields: Any) -> "PlayerSelectionMessage":
        fields = _fields(fields, ("player_number", "client_id"), cls.tag)
        return cls(
            _uint(fields["player_number"], "player_number"),
            _uint(fields["client_id"], "client_id"),
        )


@dataclass(frozen=True)
class IsGameReadyToStart:
    is_ready: bool
    tag: ClassVar[str] = "IsGameReadyToStart"

    @classmethod
    def _from_fields(cls, fields: Any) -> "IsGameReadyToStart":
        fields = _fields(fields, ("is_ready",), cls.tag)
        return cls(_bool(fields["is_ready"], "is_ready"))


@dataclass(frozen=True)
class ShootingCommand:
    player_number: int
    states: Tuple[ShootingStateMessage, ...]
    tag: ClassVar[str] = "ShootingCommand"

    def __post_init__(self) -> None:
        states = tuple(self.states)
        if len(states) != SHOTS_PER_COMMAND:
            raise ProtocolError(
                f"a shooting command holds {SHOTS_PER_COMMAND} states, got {len(states)}"
            )
        object.__setattr__(self, "states", states)

    @classmethod
    def _from_fields(cls, fields: Any) -> "ShootingCommand":
        fields = _fields(fields, ("player_number", "states"), cls.tag)
        states = fields["states"]
        if not isinstance(states, list):
            raise ProtocolError(f"states must be a list, got {states!r}")
        return cls(
            _uint(fields["player_number"], "player_number"),
            tuple(ShootingStateMessage._from_fields(state) for state in states),
        )


@dataclass(frozen=True)
class UpdateHeartsStatus:
    player_1_hearts: int
    player_2_hearts: int
    who_was_hit: int
    tag: ClassVar[str] = "UpdateHeartsStatus"

    @classmethod
    def _from_fields(cls, fields: Any) -> "UpdateHeartsStatus":
        names = ("player_1_hearts", "player_2_hearts", "who_was_hit")
        fields = _fields(fields, names, cls.tag)
        return cls(*(_uint(fields[name], name) for name in names))


@dataclass(frozen=True)
class GameOver:
    winner: int
    tag: ClassVar[str] = "GameOver"

    @classmethod
    def _from_fields(cls, fields: Any) -> "GameOver":
        fields = _fields(fields, ("winner",), cls.tag)
        return cls(_uint(fields["winner"], "winner"))


ServerMessage = Union[
    PlayerSelectionMessage, IsGameReadyToStart, ShootingCommand, UpdateHeartsStatus, GameOver
]
ClientMessage = Union[ShootingCommand, UpdateHeartsStatus, GameOver]

_SERVER_MESSAGES: Dict[str, Type[Any]] = {
    cls.tag: cls
    for cls in (
        PlayerSelectionMessage,
        IsGameReadyToStart,
        ShootingCommand,
        UpdateHeartsStatus,
        GameOver,
    )
}
_CLIENT_MESSAGES: Dict[str, Type[Any]] = {
    cls.tag: cls for cls in (ShootingCommand, UpdateHeartsStatus, GameOver)
}


def encode_message(message: ServerMessage, channel: int = 0) -> bytes:
    """Encode a message sent on ``channel`` as one JSON line."""
    if type(message) not in _SERVER_MESSAGES.values():
        raise ProtocolError(f"cannot encode {message!r}")
    channel = _uint(int(channel) if isinstance(channel, IntEnum) else channel, "channel", _MAX_CHANNEL)
    document = {"channel": channel, "message": {message.tag: asdict(message)}}
    return (json.dumps(document, separators=(",", ":")) + "\n").encode("utf-8")


def _decode(line: Union[bytes, str], allowed: Dict[str, Type[Any]]) -> Tuple[int, Any]:
    try:
        document = json.loads(line)
    except ValueError as exc:
        raise ProtocolError(f"malformed message: {exc}") from exc
    if not isinstance(document, dict) or set(document) != {"channel", "message"}:
        raise ProtocolError(f"malformed envelope: {document!r}")
    channel = _uint(document["channel"], "channel", _MAX_CHANNEL)
    body = document["message"]
    if not isinstance(body, dict) or len(body) != 1:
        raise ProtocolError(f"malformed message body: {body!r}")
    ((tag, fields),) = body.items()
    cls = allowed.get(tag)
    if cls is None:
        raise ProtocolError(f"unknown message variant {tag!r}")
    return channel, cls._from_fields(fields)


def decode_server_message(line: Union[bytes, str]) -> Tuple[int, ServerMessage]:
    """Decode a line sent by the server into ``(channel, message)``."""
    return _decode(line, _SERVER_MESSAGES)


def decode_client_message(line: Union[bytes, str]) -> Tuple[int, ClientMessage]:
    """Decode a line sent by a client into ``(channel, message)``."""
    return _decode(line, _CLIENT_MESSAGES)