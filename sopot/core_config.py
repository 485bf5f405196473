"""System-wide configuration file shared by the base game and all mods."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Optional

from sopot.version import AFCC_VERSION, PRODUCT_NAME, product_name_version

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "rf2patch_system.ini"
_ENCODING = {"encoding": "utf-8", "errors": "surrogateescape"}


def string_to_bool(text: str) -> bool:
    """Interpret "1", "true" or "TRUE" as true; anything else as false."""
    return text in ("1", "true", "TRUE")


def bool_to_string(value: bool) -> str:
    """Render a flag as "1" or "0"."""
    return str(int(bool(value)))


def _parse_settings(lines: Iterable[str]) -> dict[str, str]:
    settings: dict[str, str] = {}
    for raw in lines:
        line = raw[:-1] if raw.endswith("\n") else raw
        if not line or line[0] in ";[":
            continue
        key, sep, value = line.partition("=")
        if sep and value:
            settings[key] = value
    return settings


@dataclass
class AlpineCoreConfig:
    """Core settings plus lines this client did not recognise, kept so they survive a save."""

    vsync: bool = False
    orphaned_lines: list[str] = field(default_factory=list)

    def load(self, filename: str = DEFAULT_FILENAME) -> bool:
        """Read settings from a file; return False if it cannot be opened."""
        try:
            with open(filename, **_ENCODING) as file:
                settings = _parse_settings(file)
        except OSError:
            logger.warning("Failed to open %s core config: %s", PRODUCT_NAME, filename)
            return False

        processed = set()
        if "VerticalSync" in settings:
            self.vsync = string_to_bool(settings["VerticalSync"])
            processed.add("VerticalSync")

        self.orphaned_lines.extend(
            f"{key}={value}"
            for key, value in settings.items()
            if key not in processed and not key.startswith("AFCC")
        )
        logger.info("Loaded %s core config from %s", PRODUCT_NAME, filename)
        return True

    def save(self, filename: str = DEFAULT_FILENAME, now: Optional[datetime] = None) -> None:
        """Write the settings; a file that cannot be opened is logged and skipped."""
        stamp = (now or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")
        parts = [
            f"; {PRODUCT_NAME} System Config File",
            f"\n\n; This file is automatically generated by {PRODUCT_NAME}.\n",
            "; Unlike rf2patch_settings.ini, this file is used by the base game and all mods.\n",
            "; Unless you really know what you are doing, manually editing it is NOT recommended.\n",
            "; Any edits made while the game or launcher are running will be discarded.\n\n",
            "\n[Metadata]\n",
            "; DO NOT edit this section.\n",
            f"AFCCTimestamp={stamp}\n",
            f"AFCCClientVersion={product_name_version()}\n",
            f"AFCCFileVersion={AFCC_VERSION}\n",
        ]
        if self.orphaned_lines:
            parts.append("\n[OrphanedSettings]\n")
            parts.append(f"; Items in this section were unrecognized by your {PRODUCT_NAME} client.\n")
            parts.append(f"; They could be malformed or may require a newer version of {PRODUCT_NAME}.\n")
            parts.extend(f"{line}\n" for line in self.orphaned_lines)
        parts.append("\n[Configuration]\n")
        parts.append(f"VerticalSync={bool_to_string(self.vsync)}\n")

        try:
            with open(filename, "w", **_ENCODING) as file:
                file.write("".join(parts))
        except OSError:
            logger.warning("Failed to write %s core config: %s", PRODUCT_NAME, filename)
            return
        logger.info("Saved %s core config to %s", PRODUCT_NAME, filename)