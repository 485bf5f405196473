"""Wire format of the game's network protocol: enumerations and fixed-layout records.

All integers are little-endian and all floats are IEEE 754 single precision.
Strings are zero-terminated and carried as single-byte characters.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum, IntFlag
from typing import ClassVar

MAX_NAME_LEN = 20
MAX_LEVEL_NAME_LEN = 259
MAX_PASSWORD_LEN = 22
TRACKER_HOST = "rf.thqmultiplay.net"
TRACKER_PORT = 18444

SERVER_PLAYER_ID = 0xFF  # player id of the server when it sends a chat message
MAX_MSG_LEN = 0xF9

# First byte of an entity animation state.
OAF_NO_WEAPON = 0x01
OAF_CROUCH = 0x04
OAF_RELOAD = 0x10
OAF_FAST_RELOAD = 0x20

_STRING_ENCODING = "latin-1"


class ProtocolError(ValueError):
    """Raised when bytes do not form a valid protocol record."""


class MainPacketType(IntEnum):
    """First byte of a datagram."""

    GAME = 0x00
    RELIABLE = 0x01
    TRACKER = 0x02


class GamePacketType(IntEnum):
    GAME_INFO_REQUEST = 0x00
    GAME_INFO = 0x01
    JOIN_REQUEST = 0x02
    JOIN_ACCEPT = 0x03
    JOIN_DENY = 0x04
    NEW_PLAYER = 0x05
    PLAYERS = 0x06
    LEFT_GAME = 0x07
    END_GAME = 0x08
    STATE_INFO_REQUEST = 0x09
    STATE_INFO_DONE = 0x0A
    CLIENT_IN_GAME = 0x0B  # sent after joining and when a player leaves the menu
    CHAT_LINE = 0x0C
    NAME_CHANGE = 0x0D
    RESPAWN_REQUEST = 0x0E
    TRIGGER_ACTIVATE = 0x0F
    USE_KEY_PRESSED = 0x10
    PREGAME_BOOLEAN = 0x11
    PREGAME_GLASS = 0x12
    PREGAME_REMOTE_CHARGE = 0x13
    SUICIDE = 0x14
    ENTER_LIMBO = 0x15  # level ended
    LEAVE_LIMBO = 0x16  # level is changing
    TEAM_CHANGE = 0x17
    PING = 0x18
    PONG = 0x19
    NETGAME_UPDATE = 0x1A
    RATE_CHANGE = 0x1B
    SELECT_WEAPON = 0x1C
    CLUTTER_UPDATE = 0x1D
    CLUTTER_KILL = 0x1E
    CTF_FLAG_PICKED_UP = 0x1F
    CTF_FLAG_CAPTURED = 0x20
    CTF_FLAG_UPDATE = 0x21
    CTF_FLAG_RETURNED = 0x22
    CTF_FLAG_DROPPED = 0x23
    REMOTE_CHARGE_KILL = 0x24
    ITEM_UPDATE = 0x25
    OBJECT_UPDATE = 0x26
    OBJECT_KILL = 0x27
    ITEM_APPLY = 0x28
    BOOLEAN = 0x29  # geomod
    MOVER_UPDATE = 0x2A  # unused
    RESPAWN = 0x2B
    ENTITY_CREATE = 0x2C
    ITEM_CREATE = 0x2D
    RELOAD = 0x2E
    RELOAD_REQUEST = 0x2F
    WEAPON_FIRE = 0x30
    FALL_DAMAGE = 0x31
    RCON_REQUEST = 0x32
    RCON = 0x33
    SOUND = 0x34
    TEAM_SCORES = 0x35
    GLASS_KILL = 0x36


class ReliablePacketType(IntEnum):
    REPLY = 0x00
    PACKETS = 0x01
    JOIN_03 = 0x03
    JOIN_05 = 0x05
    JOIN_06 = 0x06


class ProtocolVersion(IntEnum):
    VER_10_11 = 0x87  # 1.0 and 1.1 servers
    VER_12 = 0x89  # 1.2 servers
    VER_13 = 0x91  # 1.3 servers


class GameType(IntEnum):
    DM = 0x00
    CTF = 0x01
    TEAMDM = 0x02
    # Newer types; legacy clients are sent TEAMDM instead to keep them from crashing.
    KOTH = 0x03
    DC = 0x04
    REV = 0x05
    RUN = 0x06
    ESC = 0x07


class ServerFlags(IntFlag):
    DEDICATED = 0x01
    NOT_LAN = 0x02
    PASSWORD = 0x04


class GameOptions(IntFlag):
    DEFAULT = 0x0402
    TEAM_DAMAGE = 0x0240
    FALL_DAMAGE = 0x0080
    WEAPONS_STAY = 0x0010
    FORCE_RESPAWN = 0x0020
    BALANCE_TEAMS = 0x2000


class PlayerFlags(IntFlag):
    UNKNOWN = 0x00000004
    BLUE_TEAM = 0x00000080


class JoinDenyReason(IntEnum):
    SERVER_IS_FULL = 0x01
    NO_ADDITIONAL_PLAYERS = 0x02
    INVALID_PASSWORD = 0x03
    THE_SAME_IP = 0x04
    LEVEL_CHANGING = 0x05
    SERVER_ERROR = 0x06
    DATA_DOESNT_MATCH = 0x07
    UNSUPPORTED_VERSION = 0x08
    UNKNOWN = 0x09
    BANNED = 0x0A


class LeftReason(IntEnum):
    UNKNOWN = 0x00
    NORMAL = 0x01
    KICKED = 0x02
    DATA_INCOMPATIBLE = 0x04
    BETWEEN_LEVELS = 0x05
    EMPTY = 0x06
    NO_LEVEL_FILE = 0x07


class Weapon(IntEnum):
    REMOTE_CHARGE = 0x00
    REMOTE_CHARGE_DETONATOR = 0x01
    CONTROL_BATON = 0x02
    PISTOL = 0x03
    SILENCED_PISTOL = 0x04  # not supported in multiplayer
    SHOTGUN = 0x05
    SNIPER_RIFLE = 0x06
    ROCKET_LAUNCHER = 0x07
    ASSAULT_RIFLE = 0x08
    SUBMACHINE_GUN = 0x09
    SUBMACHINE_GUN_SPECIAL = 0x0A  # not supported in multiplayer
    GRENADE = 0x0B
    FLAMETHROWER = 0x0C
    RIOT_SHIELD = 0x0D
    RAIL_GUN = 0x0E
    HEAVY_MACHINE_GUN = 0x0F
    PRECISION_RIFLE = 0x10
    FUSION_ROCKET_LAUNCHER = 0x11
    VAUSS = 0x12
    TANKBOT_CHAINGUN = 0x13
    TRIBEAM_LASER = 0x14
    LASER = 0x15
    CAPEK_CANE = 0x16
    REEPER_CLAW = 0x17
    BABY_REEPER_CLAW = 0x18
    ROCK_SNAKE_SMASH = 0x19
    ROCK_SNAKE_SPIT = 0x1A
    BIG_ROCK_SNAKE_SMASH = 0x1B
    BIG_ROCK_SNAKE_SPIT = 0x1C
    SEA_CREATURE_SONAR_ATTACK = 0x1D
    DRONE_SMASH = 0x1E
    TANKBOT_SMASH = 0x1F
    MUTANT_ATTACK_1 = 0x20
    MUTANT_ATTACK_2 = 0x21
    HEAP = 0x22
    TORPEDO = 0x23
    APC_MINIGUN = 0x24
    JEEP_GUN = 0x25
    FIGHTER_MINIGUN = 0x26
    DRILL = 0x27
    DRONE_MISSILE = 0x28
    TANKBOT_MISSILE = 0x29
    FIGHTER_ROCKET = 0x2A
    APC_ROCKET = 0x2B
    UNKNOWN = 0xFF


class ObjectUpdateFlags(IntFlag):
    POS_ROT_ANIM = 0x01
    UNKNOWN4 = 0x02
    WEAPON_TYPE = 0x04
    UNKNOWN3 = 0x08
    ALT_FIRE = 0x10
    HEALTH_ARMOR = 0x20
    FIRE = 0x40
    AMP_FLAGS = 0x80


class EntityAmpFlags(IntFlag):
    DAMAGE_AMPLIFIER = 0x01
    INVULNERABILITY = 0x02


class EntityStateFlags(IntFlag):
    WEAPON_HIDDEN = 0x01
    WEAPON_CUSTOM_MODE = 0x02
    CROUCHING = 0x04
    ZOOMING = 0x08
    ATTACK_ANIM0_ACTIVE = 0x10
    ATTACK_ANIM1_ACTIVE = 0x20


class ObjectKillFlags(IntFlag):
    ITEM_UNKNOWN = 0x01
    ITEM = 0x02  # creates an item in place of death


class WeaponFireFlags(IntFlag):
    ALT_FIRE = 0x01
    UNKNOWN = 0x02
    NO_POS_ROT = 0x04


class TrackerPacketType(IntEnum):
    REPLY = 0x01
    SERVER_STOPPED = 0x03
    SERVER_PING = 0x04
    SERVER_LIST_REQUEST = 0x05
    SERVER_LIST = 0x06
    SERVER_LIST_END = 0x07


def _unpack_from(layout: struct.Struct, data: bytes, offset: int, what: str) -> tuple:
    if offset < 0 or len(data) - offset < layout.size:
        raise ProtocolError(
            f"{what} needs {layout.size} bytes at offset {offset}, got {max(len(data) - offset, 0)}"
        )
    return layout.unpack_from(data, offset)


def read_cstring(data: bytes, offset: int = 0) -> tuple[str, int]:
    """Read a zero-terminated string; return it and the offset just past the terminator."""
    end = data.find(b"\0", offset)
    if end < 0:
        raise ProtocolError(f"unterminated string at offset {offset}")
    return data[offset:end].decode(_STRING_ENCODING), end + 1


def write_cstring(text: str) -> bytes:
    """Encode a string with its terminating zero byte."""
    encoded = text.encode(_STRING_ENCODING)
    if b"\0" in encoded:
        raise ProtocolError("string must not contain a zero byte")
    return encoded + b"\0"


_VECTOR = struct.Struct("<3f")
_MATRIX = struct.Struct("<9f")


@dataclass(frozen=True)
class Vector:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    SIZE: ClassVar[int] = _VECTOR.size

    def pack(self) -> bytes:
        return _VECTOR.pack(self.x, self.y, self.z)

    @classmethod
    def unpack(cls, data: bytes, offset: int = 0) -> tuple[Vector, int]:
        """Read a vector at offset; return it and the offset after it."""
        x, y, z = _unpack_from(_VECTOR, data, offset, "vector")
        return cls(x, y, z), offset + _VECTOR.size


def _identity_rows() -> tuple[tuple[float, float, float], ...]:
    return ((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0))


@dataclass(frozen=True)
class Matrix:
    """3x3 rotation matrix stored row by row."""

    rows: tuple[tuple[float, float, float], ...] = field(default_factory=_identity_rows)

    SIZE: ClassVar[int] = _MATRIX.size

    def __post_init__(self) -> None:
        if len(self.rows) != 3 or any(len(row) != 3 for row in self.rows):
            raise ValueError("matrix must have 3 rows of 3 values")
        object.__setattr__(self, "rows", tuple(tuple(float(v) for v in row) for row in self.rows))

    def pack(self) -> bytes:
        return _MATRIX.pack(*(v for row in self.rows for v in row))

    @classmethod
    def unpack(cls, data: bytes, offset: int = 0) -> tuple[Matrix, int]:
        """Read a matrix at offset; return it and the offset after it."""
        values = _unpack_from(_MATRIX, data, offset, "matrix")
        rows = tuple(tuple(values[start:start + 3]) for start in range(0, 9, 3))
        return cls(rows), offset + _MATRIX.size


_GAME_HEADER = struct.Struct("<BH")


@dataclass
class GamePacketHeader:
    """Header of every game packet; size counts the data after the header."""

    type: int
    size: int

    SIZE: ClassVar[int] = _GAME_HEADER.size

    def pack(self) -> bytes:
        try:
            return _GAME_HEADER.pack(int(self.type), self.size)
        except struct.error as exc:
            raise ProtocolError(f"cannot encode game packet header: {exc}") from exc

    @classmethod
    def unpack(cls, data: bytes) -> GamePacketHeader:
        packet_type, size = _unpack_from(_GAME_HEADER, data, 0, "game packet header")
        try:
            packet_type = GamePacketType(packet_type)
        except ValueError:
            pass
        return cls(packet_type, size)


_RELIABLE = struct.Struct("<BBHHI")


@dataclass
class ReliablePacket:
    """Ordered, reliably delivered packet; the datagram starts with MainPacketType.RELIABLE."""

    id: int
    ticks: int
    data: bytes = b""
    type: int = ReliablePacketType.PACKETS
    unknown: int = 0

    HEADER_SIZE: ClassVar[int] = _RELIABLE.size

    def pack(self) -> bytes:
        try:
            header = _RELIABLE.pack(int(self.type), self.unknown, self.id, len(self.data), self.ticks)
        except struct.error as exc:
            raise ProtocolError(f"cannot encode reliable packet: {exc}") from exc
        return header + bytes(self.data)

    @classmethod
    def unpack(cls, data: bytes) -> ReliablePacket:
        packet_type, unknown, packet_id, length, ticks = _unpack_from(_RELIABLE, data, 0, "reliable packet")
        start = _RELIABLE.size
        if len(data) - start < length:
            raise ProtocolError(f"reliable packet declares {length} data bytes, got {len(data) - start}")
        try:
            packet_type = ReliablePacketType(packet_type)
        except ValueError:
            pass
        return cls(packet_id, ticks, bytes(data[start:start + length]), packet_type, unknown)


_RELIABLE_REPLY = struct.Struct("<BBHHIHH")


@dataclass
class ReliableReplyPacket:
    """Acknowledgement of a reliable packet."""

    ticks: int
    packet_id: int
    type: int = ReliablePacketType.REPLY
    unknown: int = 0
    unknown2: int = 0
    len: int = 4
    unknown3: int = 0

    SIZE: ClassVar[int] = _RELIABLE_REPLY.size

    def pack(self) -> bytes:
        try:
            return _RELIABLE_REPLY.pack(
                int(self.type), self.unknown, self.unknown2, self.len, self.ticks, self.packet_id, self.unknown3
            )
        except struct.error as exc:
            raise ProtocolError(f"cannot encode reliable reply: {exc}") from exc

    @classmethod
    def unpack(cls, data: bytes) -> ReliableReplyPacket:
        packet_type, unknown, unknown2, length, ticks, packet_id, unknown3 = _unpack_from(
            _RELIABLE_REPLY, data, 0, "reliable reply"
        )
        return cls(ticks, packet_id, packet_type, unknown, unknown2, length, unknown3)


_TRACKER_HEADER = struct.Struct("<BHIH")


@dataclass
class TrackerHeader:
    """Header of a tracker packet; packet_len is the length of the whole packet."""

    type: int
    seq: int
    packet_len: int
    unknown: int = 0x06

    SIZE: ClassVar[int] = _TRACKER_HEADER.size

    def pack(self) -> bytes:
        try:
            return _TRACKER_HEADER.pack(self.unknown, int(self.type), self.seq, self.packet_len)
        except struct.error as exc:
            raise ProtocolError(f"cannot encode tracker header: {exc}") from exc

    @classmethod
    def unpack(cls, data: bytes) -> TrackerHeader:
        unknown, packet_type, seq, packet_len = _unpack_from(_TRACKER_HEADER, data, 0, "tracker header")
        try:
            packet_type = TrackerPacketType(packet_type)
        except ValueError:
            pass
        return cls(packet_type, seq, packet_len, unknown)


_SERVER_ADDRESS = struct.Struct("<IH")


@dataclass(frozen=True)
class TrackerServerAddress:
    ip: int
    port: int

    SIZE: ClassVar[int] = _SERVER_ADDRESS.size

    def pack(self) -> bytes:
        try:
            return _SERVER_ADDRESS.pack(self.ip, self.port)
        except struct.error as exc:
            raise ProtocolError(f"cannot encode server address: {exc}") from exc

    @classmethod
    def unpack(cls, data: bytes, offset: int = 0) -> tuple[TrackerServerAddress, int]:
        ip, port = _unpack_from(_SERVER_ADDRESS, data, offset, "server address")
        return cls(ip, port), offset + _SERVER_ADDRESS.size


_SERVER_LIST = struct.Struct("<BHIHBI")


@dataclass
class TrackerServerList:
    """A page of the tracker's server list; server_count is the total over all pages."""

    seq: int
    server_count: int
    servers: list[TrackerServerAddress] = field(default_factory=list)
    type: int = TrackerPacketType.SERVER_LIST
    unknown: int = 0x06

    HEADER_SIZE: ClassVar[int] = _SERVER_LIST.size

    def pack(self) -> bytes:
        packet_len = _SERVER_LIST.size + len(self.servers) * _SERVER_ADDRESS.size
        try:
            header = _SERVER_LIST.pack(
                self.unknown, int(self.type), self.seq, packet_len, len(self.servers), self.server_count
            )
        except struct.error as exc:
            raise ProtocolError(f"cannot encode server list: {exc}") from exc
        return header + b"".join(server.pack() for server in self.servers)

    @classmethod
    def unpack(cls, data: bytes) -> TrackerServerList:
        unknown, packet_type, seq, _packet_len, page_count, server_count = _unpack_from(
            _SERVER_LIST, data, 0, "server list"
        )
        servers = []
        offset = _SERVER_LIST.size
        for _ in range(page_count):
            server, offset = TrackerServerAddress.unpack(data, offset)
            servers.append(server)
        try:
            packet_type = TrackerPacketType(packet_type)
        except ValueError:
            pass
        return cls(seq, server_count, servers, packet_type, unknown)