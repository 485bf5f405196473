import pytest

from sopot.packets import (
    ChatLinePacket,
    ClutterKillPacket,
    CtfFlagCapturedPacket,
    CtfFlagDroppedPacket,
    CtfFlagPickedUpPacket,
    CtfFlagReturnedPacket,
    FallDamagePacket,
    GameInfoPacket,
    GlassKillPacket,
    ItemApplyPacket,
    ItemUpdatePacket,
    JoinDenyPacket,
    LeaveLimboPacket,
    LeftGamePacket,
    NameChangePacket,
    NetgameUpdatePacket,
    NewPlayerPacket,
    PlayerStats,
    RateChangePacket,
    ReloadPacket,
    ReloadRequestPacket,
    RemoteChargeKillPacket,
    RespawnRequestPacket,
    SoundPacket,
    StateInfoRequestPacket,
    TeamChangePacket,
    TeamScoresPacket,
    TriggerActivatePacket,
    encode_game_packet,
    parse_game_packet,
)
from sopot.rfproto import (
    SERVER_PLAYER_ID,
    GamePacketHeader,
    GamePacketType,
    GameType,
    JoinDenyReason,
    LeftReason,
    ProtocolError,
    ProtocolVersion,
    ServerFlags,
    Vector,
    Weapon,
)

SAMPLE_PACKETS = [
    GameInfoPacket(ProtocolVersion.VER_12, "Server", GameType.CTF, 3, 8, "ctf01.rfl", "", ServerFlags.DEDICATED),
    JoinDenyPacket(JoinDenyReason.BANNED),
    NewPlayerPacket(4, 0x0100007F, 7755, 0x80, 10000, "Alias"),
    LeftGamePacket(2, LeftReason.KICKED),
    StateInfoRequestPacket("dm02.rfl"),
    ChatLinePacket(1, True, "hello team"),
    NameChangePacket(5, "Parker"),
    RespawnRequestPacket(3, 9),
    LeaveLimboPacket("dm03.rfl", 0xDEADBEEF),
    TeamChangePacket(7, 1),
    NetgameUpdatePacket([PlayerStats(1, 50, -3, 2)], 12.5, 600.0),
    RateChangePacket(2, 5000),
    TriggerActivatePacket(1234, 0x55AA),
    ClutterKillPacket(99, 3),
    CtfFlagPickedUpPacket(3, 1, 2),
    CtfFlagCapturedPacket(1, 3, 2, 3),
    CtfFlagReturnedPacket(0, 4, 1, 1),
    CtfFlagDroppedPacket(1, 0, 2, Vector(1.5, -2.0, 0.25)),
    RemoteChargeKillPacket(0x1234, 6),
    ItemUpdatePacket(bytes(range(25))),
    ItemApplyPacket(11, 12, Weapon.SHOTGUN, 8, 40),
    ReloadPacket(33, Weapon.PISTOL, 24, 12),
    ReloadRequestPacket(Weapon.RAIL_GUN),
    FallDamagePacket(3.5),
    SoundPacket(17, Vector(0.5, 1.0, 2.0)),
    TeamScoresPacket(4, 7),
    GlassKillPacket(12, True, Vector(1.0, 2.0, 3.0), (0.0, 0.5, 1.0)),
]


@pytest.mark.parametrize("packet", SAMPLE_PACKETS, ids=lambda p: type(p).__name__)
def test_round_trip(packet):
    encoded = encode_game_packet(packet)
    assert parse_game_packet(encoded) == packet


@pytest.mark.parametrize("packet", SAMPLE_PACKETS, ids=lambda p: type(p).__name__)
def test_header_describes_payload(packet):
    encoded = encode_game_packet(packet)
    header = GamePacketHeader.unpack(encoded)
    assert header.type == packet.TYPE
    assert header.size == len(encoded) - GamePacketHeader.SIZE
    assert encoded[GamePacketHeader.SIZE:] == packet.pack()


def test_join_deny_wire_bytes():
    encoded = encode_game_packet(JoinDenyPacket(JoinDenyReason.INVALID_PASSWORD))
    assert encoded == bytes([GamePacketType.JOIN_DENY, 1, 0, JoinDenyReason.INVALID_PASSWORD])


def test_chat_line_wire_bytes():
    encoded = encode_game_packet(ChatLinePacket(SERVER_PLAYER_ID, False, "hi"))
    assert encoded == b"\x0c\x05\x00\xff\x00hi\x00"


def test_enum_fields_are_decoded():
    packet = parse_game_packet(encode_game_packet(JoinDenyPacket(3)))
    assert packet.reason is JoinDenyReason.INVALID_PASSWORD


def test_unknown_enum_value_kept_as_int():
    packet = parse_game_packet(bytes([GamePacketType.JOIN_DENY, 1, 0, 0x42]))
    assert packet.reason == 0x42
    assert not isinstance(packet.reason, JoinDenyReason)


def test_game_info_flags():
    info = GameInfoPacket(
        ProtocolVersion.VER_10_11, "Srv", GameType.DM, 0, 4, "dm01.rfl", "mod",
        ServerFlags.PASSWORD | ServerFlags.NOT_LAN,
    )
    parsed = parse_game_packet(encode_game_packet(info))
    assert parsed.flags & ServerFlags.PASSWORD
    assert not parsed.flags & ServerFlags.DEDICATED
    assert parsed.mod == "mod"


def test_netgame_update_players():
    players = [PlayerStats(1, 40, 10, 1), PlayerStats(2, 120, -5, 0)]
    packet = NetgameUpdatePacket(players, 1.0, 2.0)
    parsed = parse_game_packet(encode_game_packet(packet))
    assert parsed.players == players
    assert len(packet.pack()) == 2 + 2 * PlayerStats.SIZE + 8


def test_trailing_bytes_after_packet_ignored():
    encoded = encode_game_packet(TeamScoresPacket(1, 2)) + b"\xaa\xbb"
    assert parse_game_packet(encoded) == TeamScoresPacket(1, 2)


def test_truncated_payload_rejected():
    encoded = encode_game_packet(TeamScoresPacket(1, 2))
    with pytest.raises(ProtocolError):
        parse_game_packet(encoded[:-1])


def test_short_payload_rejected_by_unpack():
    with pytest.raises(ProtocolError):
        TeamScoresPacket.unpack(b"\x01")


def test_unsupported_type_rejected():
    with pytest.raises(ProtocolError):
        parse_game_packet(bytes([GamePacketType.PING, 0, 0]))


def test_unterminated_string_rejected():
    with pytest.raises(ProtocolError):
        StateInfoRequestPacket.unpack(b"dm01")


def test_out_of_range_field_rejected():
    with pytest.raises(ProtocolError):
        TeamChangePacket(300, 0).pack()


def test_item_bitmap_size_checked():
    with pytest.raises(ProtocolError):
        ItemUpdatePacket(b"\x00\x01").pack()


def test_item_visibility():
    packet = ItemUpdatePacket(b"\x01" + bytes(24))
    assert packet.is_visible(0)
    assert not packet.is_visible(1)
    with pytest.raises(IndexError):
        packet.is_visible(200)


def test_player_stats_unpack_offset():
    stats = PlayerStats(9, 30, 4, 1)
    data = b"\x00\x00" + stats.pack()
    parsed, offset = PlayerStats.unpack(data, 2)
    assert parsed == stats
    assert offset == len(data)