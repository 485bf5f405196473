"""Game packets: the typed records carried after a game packet header.

A game packet on the wire is a header (type and payload size) followed by
the payload. ``GamePacket.pack`` and ``GamePacket.unpack`` deal with the
payload only; ``encode_game_packet`` and ``parse_game_packet`` add and
read the header.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, ClassVar, Optional

from sopot.rfproto import (
    EntityAmpFlags,
    GamePacketHeader,
    GamePacketType,
    GameType,
    JoinDenyReason,
    LeftReason,
    PlayerFlags,
    ProtocolError,
    ProtocolVersion,
    ServerFlags,
    Vector,
    Weapon,
    read_cstring,
    write_cstring,
)

_U8 = struct.Struct("<B")
_U32 = struct.Struct("<I")
_FLOAT = struct.Struct("<f")
_GAME_INFO_COUNTS = struct.Struct("<BBB")
_NEW_PLAYER = struct.Struct("<BIHII")
_CHAT_LINE = struct.Struct("<BB")
_NETGAME_HEAD = struct.Struct("<BB")
_NETGAME_TAIL = struct.Struct("<ff")
_PLAYER_STATS = struct.Struct("<BHBhBB")
_CTF_DROPPED_HEAD = struct.Struct("<BBB")
_SOUND_HEAD = struct.Struct("<H")
_GLASS_KILL_HEAD = struct.Struct("<iB")
_GLASS_KILL_TAIL = struct.Struct("<3f")

ITEM_BITMAP_SIZE = 25

_PACKET_CLASSES: dict[int, type["GamePacket"]] = {}


def _maybe_enum(enum_type: type[Enum], value: Any) -> Any:
    try:
        return enum_type(value)
    except ValueError:
        return value


def _pack(layout: struct.Struct, *values: Any, what: str) -> bytes:
    try:
        return layout.pack(*values)
    except struct.error as exc:
        raise ProtocolError(f"cannot encode {what}: {exc}") from exc


class _Reader:
    """Sequential reader over a payload."""

    def __init__(self, data: bytes, what: str) -> None:
        self._data = bytes(data)
        self._what = what
        self.offset = 0

    def take(self, layout: struct.Struct) -> tuple:
        remaining = len(self._data) - self.offset
        if remaining < layout.size:
            raise ProtocolError(
                f"{self._what} truncated: needs {layout.size} bytes at offset {self.offset}, got {remaining}"
            )
        values = layout.unpack_from(self._data, self.offset)
        self.offset += layout.size
        return values

    def raw(self, size: int) -> bytes:
        remaining = len(self._data) - self.offset
        if remaining < size:
            raise ProtocolError(
                f"{self._what} truncated: needs {size} bytes at offset {self.offset}, got {remaining}"
            )
        chunk = self._data[self.offset:self.offset + size]
        self.offset += size
        return chunk

    def cstring(self) -> str:
        text, self.offset = read_cstring(self._data, self.offset)
        return text

    def vector(self) -> Vector:
        vec, self.offset = Vector.unpack(self._data, self.offset)
        return vec


@dataclass
class GamePacket:
    """Base of all game packets.

    A packet with a fixed layout describes it in ``_LAYOUT``, whose values
    follow the order of the dataclass fields; other packets override
    ``pack`` and ``unpack``.
    """

    TYPE: ClassVar[GamePacketType]
    _LAYOUT: ClassVar[Optional[struct.Struct]] = None
    _ENUMS: ClassVar[dict[str, type[Enum]]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if "TYPE" in cls.__dict__:
            _PACKET_CLASSES[int(cls.TYPE)] = cls

    def __post_init__(self) -> None:
        for name, enum_type in self._ENUMS.items():
            setattr(self, name, _maybe_enum(enum_type, getattr(self, name)))

    def pack(self) -> bytes:
        """Encode the payload (without the header)."""
        if self._LAYOUT is None:
            raise TypeError(f"{type(self).__name__} has no fixed layout")
        values = [getattr(self, f.name) for f in fields(self)]
        return _pack(self._LAYOUT, *values, what=type(self).__name__)

    @classmethod
    def unpack(cls, payload: bytes) -> GamePacket:
        """Decode a payload (without the header); bytes past the record are ignored."""
        if cls._LAYOUT is None:
            raise TypeError(f"{cls.__name__} has no fixed layout")
        return cls(*_Reader(payload, cls.__name__).take(cls._LAYOUT))


@dataclass
class GameInfoPacket(GamePacket):
    version: int
    name: str
    game_type: int
    players_count: int
    max_players_count: int
    level: str
    mod: str = ""
    flags: int = 0

    TYPE: ClassVar[GamePacketType] = GamePacketType.GAME_INFO
    _ENUMS: ClassVar[dict[str, type[Enum]]] = {
        "version": ProtocolVersion,
        "game_type": GameType,
        "flags": ServerFlags,
    }

    def pack(self) -> bytes:
        what = type(self).__name__
        return b"".join(
            (
                _pack(_U8, self.version, what=what),
                write_cstring(self.name),
                _pack(_GAME_INFO_COUNTS, self.game_type, self.players_count, self.max_players_count, what=what),
                write_cstring(self.level),
                write_cstring(self.mod),
                _pack(_U8, self.flags, what=what),
            )
        )

    @classmethod
    def unpack(cls, payload: bytes) -> GameInfoPacket:
        reader = _Reader(payload, cls.__name__)
        (version,) = reader.take(_U8)
        name = reader.cstring()
        game_type, players_count, max_players_count = reader.take(_GAME_INFO_COUNTS)
        level = reader.cstring()
        mod = reader.cstring()
        (flags,) = reader.take(_U8)
        return cls(version, name, game_type, players_count, max_players_count, level, mod, flags)


@dataclass
class JoinDenyPacket(GamePacket):
    reason: int

    TYPE: ClassVar[GamePacketType] = GamePacketType.JOIN_DENY
    _LAYOUT: ClassVar[Optional[struct.Struct]] = _U8
    _ENUMS: ClassVar[dict[str, type[Enum]]] = {"reason": JoinDenyReason}


@dataclass
class NewPlayerPacket(GamePacket):
    id: int
    ip: int
    port: int
    flags: int
    rate: int
    name: str

    TYPE: ClassVar[GamePacketType] = GamePacketType.NEW_PLAYER
    _ENUMS: ClassVar[dict[str, type[Enum]]] = {"flags": PlayerFlags}

    def pack(self) -> bytes:
        head = _pack(
            _NEW_PLAYER, self.id, self.ip, self.port, self.flags, self.rate, what=type(self).__name__
        )
        return head + write_cstring(self.name)

    @classmethod
    def unpack(cls, payload: bytes) -> NewPlayerPacket:
        reader = _Reader(payload, cls.__name__)
        player_id, ip, port, flags, rate = reader.take(_NEW_PLAYER)
        return cls(player_id, ip, port, flags, rate, reader.cstring())


@dataclass
class LeftGamePacket(GamePacket):
    player_id: int
    reason: int

    TYPE: ClassVar[GamePacketType] = GamePacketType.LEFT_GAME
    _LAYOUT: ClassVar[Optional[struct.Struct]] = struct.Struct("<BB")
    _ENUMS: ClassVar[dict[str, type[Enum]]] = {"reason": LeftReason}


@dataclass
class StateInfoRequestPacket(GamePacket):
    level: str

    TYPE: ClassVar[GamePacketType] = GamePacketType.STATE_INFO_REQUEST

    def pack(self) -> bytes:
        return write_cstring(self.level)

    @classmethod
    def unpack(cls, payload: bytes) -> StateInfoRequestPacket:
        return cls(_Reader(payload, cls.__name__).cstring())


@dataclass
class ChatLinePacket(GamePacket):
    player_id: int
    is_team_msg: bool
    message: str

    TYPE: ClassVar[GamePacketType] = GamePacketType.CHAT_LINE

    def pack(self) -> bytes:
        head = _pack(_CHAT_LINE, self.player_id, int(self.is_team_msg), what=type(self).__name__)
        return head + write_cstring(self.message)

    @classmethod
    def unpack(cls, payload: bytes) -> ChatLinePacket:
        reader = _Reader(payload, cls.__name__)
        player_id, is_team_msg = reader.take(_CHAT_LINE)
        return cls(player_id, bool(is_team_msg), reader.cstring())


@dataclass
class NameChangePacket(GamePacket):
    player_id: int
    name: str

    TYPE: ClassVar[GamePacketType] = GamePacketType.NAME_CHANGE

    def pack(self) -> bytes:
        return _pack(_U8, self.player_id, what=type(self).__name__) + write_cstring(self.name)

    @classmethod
    def unpack(cls, payload: bytes) -> NameChangePacket:
        reader = _Reader(payload, cls.__name__)
        (player_id,) = reader.take(_U8)
        return cls(player_id, reader.cstring())


@dataclass
class RespawnRequestPacket(GamePacket):
    character: int
    player_id: int

    TYPE: ClassVar[GamePacketType] = GamePacketType.RESPAWN_REQUEST
    _LAYOUT: ClassVar[Optional[struct.Struct]] = struct.Struct("<IB")


@dataclass
class LeaveLimboPacket(GamePacket):
    level: str
    level_checksum: int

    TYPE: ClassVar[GamePacketType] = GamePacketType.LEAVE_LIMBO

    def pack(self) -> bytes:
        return write_cstring(self.level) + _pack(_U32, self.level_checksum, what=type(self).__name__)

    @classmethod
    def unpack(cls, payload: bytes) -> LeaveLimboPacket:
        reader = _Reader(payload, cls.__name__)
        level = reader.cstring()
        (checksum,) = reader.take(_U32)
        return cls(level, checksum)


@dataclass
class TeamChangePacket(GamePacket):
    player_id: int
    team: int  # 0 - red, 1 - blue

    TYPE: ClassVar[GamePacketType] = GamePacketType.TEAM_CHANGE
    _LAYOUT: ClassVar[Optional[struct.Struct]] = struct.Struct("<BB")


@dataclass
class PlayerStats:
    """Per-player entry of a netgame update."""

    player_id: int
    ping: int
    score: int
    captures: int = 0
    unknown: int = 0xFF
    unknown2: int = 0

    SIZE: ClassVar[int] = _PLAYER_STATS.size

    def pack(self) -> bytes:
        return _pack(
            _PLAYER_STATS,
            self.player_id,
            self.ping,
            self.unknown,
            self.score,
            self.captures,
            self.unknown2,
            what="player stats",
        )

    @classmethod
    def unpack(cls, data: bytes, offset: int = 0) -> tuple[PlayerStats, int]:
        """Read stats at offset; return them and the offset after them."""
        reader = _Reader(data, "player stats")
        reader.offset = offset
        player_id, ping, unknown, score, captures, unknown2 = reader.take(_PLAYER_STATS)
        return cls(player_id, ping, score, captures, unknown, unknown2), reader.offset


@dataclass
class NetgameUpdatePacket(GamePacket):
    players: list[PlayerStats] = field(default_factory=list)
    level_time: float = 0.0
    time_limit: float = 0.0
    unknown: int = 0x07

    TYPE: ClassVar[GamePacketType] = GamePacketType.NETGAME_UPDATE

    def pack(self) -> bytes:
        what = type(self).__name__
        return b"".join(
            (
                _pack(_NETGAME_HEAD, self.unknown, len(self.players), what=what),
                *(player.pack() for player in self.players),
                _pack(_NETGAME_TAIL, self.level_time, self.time_limit, what=what),
            )
        )

    @classmethod
    def unpack(cls, payload: bytes) -> NetgameUpdatePacket:
        reader = _Reader(payload, cls.__name__)
        unknown, player_count = reader.take(_NETGAME_HEAD)
        players = []
        for _ in range(player_count):
            stats, reader.offset = PlayerStats.unpack(payload, reader.offset)
            players.append(stats)
        level_time, time_limit = reader.take(_NETGAME_TAIL)
        return cls(players, level_time, time_limit, unknown)


@dataclass
class RateChangePacket(GamePacket):
    player_id: int
    rate: int

    TYPE: ClassVar[GamePacketType] = GamePacketType.RATE_CHANGE
    _LAYOUT: ClassVar[Optional[struct.Struct]] = struct.Struct("<BH")


@dataclass
class TriggerActivatePacket(GamePacket):
    uid: int
    entity_handle: int

    TYPE: ClassVar[GamePacketType] = GamePacketType.TRIGGER_ACTIVATE
    _LAYOUT: ClassVar[Optional[struct.Struct]] = struct.Struct("<II")


@dataclass
class ClutterKillPacket(GamePacket):
    uid: int
    unknown: int = 0

    TYPE: ClassVar[GamePacketType] = GamePacketType.CLUTTER_KILL
    _LAYOUT: ClassVar[Optional[struct.Struct]] = struct.Struct("<II")


@dataclass
class CtfFlagPickedUpPacket(GamePacket):
    player_id: int
    flags_red: int
    flags_blue: int

    TYPE: ClassVar[GamePacketType] = GamePacketType.CTF_FLAG_PICKED_UP
    _LAYOUT: ClassVar[Optional[struct.Struct]] = struct.Struct("<BBB")


@dataclass
class CtfFlagCapturedPacket(GamePacket):
    team: int
    player_id: int
    flags_red: int
    flags_blue: int

    TYPE: ClassVar[GamePacketType] = GamePacketType.CTF_FLAG_CAPTURED
    _LAYOUT: ClassVar[Optional[struct.Struct]] = struct.Struct("<BBBB")


@dataclass
class CtfFlagReturnedPacket(GamePacket):
    team: int
    player_id: int
    flags_red: int
    flags_blue: int

    TYPE: ClassVar[GamePacketType] = GamePacketType.CTF_FLAG_RETURNED
    _LAYOUT: ClassVar[Optional[struct.Struct]] = struct.Struct("<BBBB")


@dataclass
class CtfFlagDroppedPacket(GamePacket):
    team: int
    flags_red: int
    flags_blue: int
    pos: Vector = field(default_factory=Vector)

    TYPE: ClassVar[GamePacketType] = GamePacketType.CTF_FLAG_DROPPED

    def pack(self) -> bytes:
        head = _pack(
            _CTF_DROPPED_HEAD, self.team, self.flags_red, self.flags_blue, what=type(self).__name__
        )
        return head + self.pos.pack()

    @classmethod
    def unpack(cls, payload: bytes) -> CtfFlagDroppedPacket:
        reader = _Reader(payload, cls.__name__)
        team, flags_red, flags_blue = reader.take(_CTF_DROPPED_HEAD)
        return cls(team, flags_red, flags_blue, reader.vector())


@dataclass
class RemoteChargeKillPacket(GamePacket):
    entity_handle: int
    player_id: int

    TYPE: ClassVar[GamePacketType] = GamePacketType.REMOTE_CHARGE_KILL
    _LAYOUT: ClassVar[Optional[struct.Struct]] = struct.Struct("<IB")


@dataclass
class ItemUpdatePacket(GamePacket):
    """Bitmap of visible static level items; up to 200 items fit."""

    level_items_bitmap: bytes = bytes(ITEM_BITMAP_SIZE)

    TYPE: ClassVar[GamePacketType] = GamePacketType.ITEM_UPDATE

    def is_visible(self, index: int) -> bool:
        """Tell whether the item with the given bit index is visible."""
        if not 0 <= index < ITEM_BITMAP_SIZE * 8:
            raise IndexError(f"item index out of range: {index}")
        return bool(self.level_items_bitmap[index // 8] & (1 << (index % 8)))

    def pack(self) -> bytes:
        if len(self.level_items_bitmap) != ITEM_BITMAP_SIZE:
            raise ProtocolError(
                f"item bitmap must be {ITEM_BITMAP_SIZE} bytes, got {len(self.level_items_bitmap)}"
            )
        return bytes(self.level_items_bitmap)

    @classmethod
    def unpack(cls, payload: bytes) -> ItemUpdatePacket:
        return cls(_Reader(payload, cls.__name__).raw(ITEM_BITMAP_SIZE))


@dataclass
class ItemApplyPacket(GamePacket):
    """Item pickup; weapon, ammo and clip_ammo are 0xFFFFFFFF when not given."""

    item_handle: int
    entity_handle: int
    weapon: int = 0xFFFFFFFF
    ammo: int = 0xFFFFFFFF
    clip_ammo: int = 0xFFFFFFFF

    TYPE: ClassVar[GamePacketType] = GamePacketType.ITEM_APPLY
    _LAYOUT: ClassVar[Optional[struct.Struct]] = struct.Struct("<IIIII")


@dataclass
class ReloadPacket(GamePacket):
    entity_handle: int
    weapon: int
    clip_ammo: int
    ammo: int

    TYPE: ClassVar[GamePacketType] = GamePacketType.RELOAD
    _LAYOUT: ClassVar[Optional[struct.Struct]] = struct.Struct("<IIII")
    _ENUMS: ClassVar[dict[str, type[Enum]]] = {"weapon": Weapon}


@dataclass
class ReloadRequestPacket(GamePacket):
    weapon: int

    TYPE: ClassVar[GamePacketType] = GamePacketType.RELOAD_REQUEST
    _LAYOUT: ClassVar[Optional[struct.Struct]] = _U32
    _ENUMS: ClassVar[dict[str, type[Enum]]] = {"weapon": Weapon}


@dataclass
class FallDamagePacket(GamePacket):
    force: float

    TYPE: ClassVar[GamePacketType] = GamePacketType.FALL_DAMAGE
    _LAYOUT: ClassVar[Optional[struct.Struct]] = _FLOAT


@dataclass
class SoundPacket(GamePacket):
    """Sound played at a position; a NaN position makes it position independent."""

    sound_id: int
    pos: Vector = field(default_factory=Vector)

    TYPE: ClassVar[GamePacketType] = GamePacketType.SOUND

    def pack(self) -> bytes:
        return _pack(_SOUND_HEAD, self.sound_id, what=type(self).__name__) + self.pos.pack()

    @classmethod
    def unpack(cls, payload: bytes) -> SoundPacket:
        reader = _Reader(payload, cls.__name__)
        (sound_id,) = reader.take(_SOUND_HEAD)
        return cls(sound_id, reader.vector())


@dataclass
class TeamScoresPacket(GamePacket):
    score_red: int
    score_blue: int

    TYPE: ClassVar[GamePacketType] = GamePacketType.TEAM_SCORES
    _LAYOUT: ClassVar[Optional[struct.Struct]] = struct.Struct("<HH")


@dataclass
class GlassKillPacket(GamePacket):
    room_id: int
    explosion: bool
    pos: Vector = field(default_factory=Vector)
    unknown: tuple[float, float, float] = (0.0, 0.0, 0.0)

    TYPE: ClassVar[GamePacketType] = GamePacketType.GLASS_KILL

    def pack(self) -> bytes:
        what = type(self).__name__
        return b"".join(
            (
                _pack(_GLASS_KILL_HEAD, self.room_id, int(self.explosion), what=what),
                self.pos.pack(),
                _pack(_GLASS_KILL_TAIL, *self.unknown, what=what),
            )
        )

    @classmethod
    def unpack(cls, payload: bytes) -> GlassKillPacket:
        reader = _Reader(payload, cls.__name__)
        room_id, explosion = reader.take(_GLASS_KILL_HEAD)
        pos = reader.vector()
        unknown = tuple(reader.take(_GLASS_KILL_TAIL))
        return cls(room_id, bool(explosion), pos, unknown)


# Amp flags are carried inside object updates; kept importable with the other packet enums.
AMP_FLAGS = EntityAmpFlags


def parse_game_packet(data: bytes) -> GamePacket:
    """Decode one game packet (header and payload); bytes after it are ignored."""
    header = GamePacketHeader.unpack(data)
    start = GamePacketHeader.SIZE
    available = len(data) - start
    if available < header.size:
        raise ProtocolError(f"game packet declares {header.size} payload bytes, got {available}")
    packet_class = _PACKET_CLASSES.get(int(header.type))
    if packet_class is None:
        raise ProtocolError(f"unsupported game packet type: 0x{int(header.type):02x}")
    return packet_class.unpack(bytes(data[start:start + header.size]))


def encode_game_packet(packet: GamePacket) -> bytes:
    """Encode a packet with its header."""
    payload = packet.pack()
    return GamePacketHeader(packet.TYPE, len(payload)).pack() + payload