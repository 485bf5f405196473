# sopot

Support code for the RF2 Community Patch (SOPOT): the core config file,
the game's network protocol, a small HTTP client, a watch-dog timer and a
set of utilities. It uses only the standard library and supports Python
3.10 and later.

## Modules

- `sopot.core_config`: `AlpineCoreConfig` reads and writes the
  `rf2patch_system.ini` file. It knows the `VerticalSync` setting; other
  keys (except those starting with `AFCC`) are kept in `orphaned_lines` and
  written back under `[OrphanedSettings]`. `string_to_bool` and
  `bool_to_string` convert the file's flag values.
- `sopot.cfgvar`: `CfgVar`, a setting whose assigned values pass through an
  optional correcting callback and which keeps a `dirty` flag that is set
  when the value changes.
- `sopot.rfproto`: the protocol's enumerations (`GamePacketType`, `Weapon`,
  `GameType`, `JoinDenyReason`, ...), `Vector` and `Matrix`, and the binary
  layouts `GamePacketHeader`, `ReliablePacket`, `ReliableReplyPacket`,
  `TrackerHeader`, `TrackerServerAddress` and `TrackerServerList`. Malformed
  input raises `ProtocolError`. `read_cstring` and `write_cstring` handle
  zero-terminated strings.
- `sopot.packets`: typed game packets (`GameInfoPacket`, `ChatLinePacket`,
  `NetgameUpdatePacket`, `ItemUpdatePacket`, `GlassKillPacket`, ...), each
  with `pack` and `unpack` for its payload; `encode_game_packet` and
  `parse_game_packet` add and read the header.
- `sopot.http`: `HttpSession` (user agent and timeouts) and `HttpRequest`,
  built on `http.client`. `send` raises `HttpError` for any status other than
  200. `parse_http_url` splits an `http://` or `https://` URL, and
  `encode_uri_component` encodes the same characters as the JavaScript
  function of that name.
- `sopot.watchdog`: `WatchDogTimer` calls a handler from a checker thread
  while `restart()` has not been called within the timeout. It works as a
  context manager, and `paused()` stops it for the duration of a block.
- `sopot.d3d_errors`: `d3d_error_str` names Direct3D result codes.
- `sopot.strings`: trimming, splitting, ASCII case-insensitive matching,
  file name suffix helpers and `StringMatcher`.
- `sopot.optional`: `then` and `then_some`.
- `sopot.perf`: `PerfAggregator` and the `ScopedPerfMonitor` context manager.
- `sopot.mem_pool`: `MemPool`, a pool of reusable objects made page by page.
- `sopot.linked_list`: iteration over intrusive linked lists
  (`iterate_circular`, `iterate_doubly`, `iterate_doubly_reversed`).
- `sopot.os_utils`: OS version, administrator check, CPU brand, program path
  and temporary file names.
- `sopot.version`: product name, version numbers, `version_string`,
  `product_name_version` and `user_agent`.

## Examples

String helpers:

```python
from sopot.strings import StringMatcher, split_once_whitespace, string_split, trim

trim("  map01.rfl \t")                     # "map01.rfl"
string_split("a  b c", " ")                # ["a", "b", "c"]
split_once_whitespace("kick  player one")  # ("kick", "player one")

matcher = StringMatcher(False).prefix("dm").suffix(".rfl")
matcher("DM-Arena.RFL")                    # True
```

Game packets:

```python
from sopot.packets import ChatLinePacket, encode_game_packet, parse_game_packet

data = encode_game_packet(ChatLinePacket(0xFF, False, "hi"))
# b"\x0c\x05\x00\xff\x00hi\x00"
packet = parse_game_packet(data)
packet.message                             # "hi"
```

URL encoding:

```python
from sopot.http import encode_uri_component

encode_uri_component("a b&c")              # "a%20b%26c"
```

Core config file:

```python
from sopot.core_config import AlpineCoreConfig

config = AlpineCoreConfig()
config.load("rf2patch_system.ini")         # False if the file cannot be opened
config.vsync = True
config.save("rf2patch_system.ini")
```

Watch-dog timer:

```python
from sopot.watchdog import WatchDogTimer

with WatchDogTimer(5000, on_timeout=lambda: print("not responding")) as timer:
    for frame in range(100):
        timer.restart()
```

Timing a block of code:

```python
from sopot.perf import PerfAggregator, ScopedPerfMonitor

render = PerfAggregator.create("render")
with ScopedPerfMonitor(render):
    ...
render.calls                               # 1
```

## What the package does not do

- It has no registry-backed game settings: there is no store for the
  display, audio and multiplayer options, and no detection of the game's
  install path. Only the core config file is read and written.
- It does not catch crashes or start a crash reporter. `WatchDogTimer` only
  calls the handler it is given (by default it logs a message); it does not
  end the process or produce a report.
- It has no command-line program.

## Running the tests

The tests use pytest, declared in the `test` extra:

```
pip install -e .[test]
pytest
```