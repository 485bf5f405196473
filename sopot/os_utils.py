"""Facts about the operating system, the processor and the running program."""

from __future__ import annotations

import logging
import os
import platform
import re
import sys
import tempfile
from typing import Optional

logger = logging.getLogger(__name__)

_CPUINFO_PATH = "/proc/cpuinfo"


def os_version() -> str:
    """Return the operating system version as dot-separated numbers."""
    if sys.platform == "win32":
        ver = sys.getwindowsversion()
        return f"{ver.major}.{ver.minor}.{ver.build}"
    match = re.match(r"\d+(?:\.\d+)*", platform.release())
    if match is None:
        raise RuntimeError("cannot determine the operating system version")
    return match.group(0)


def is_current_user_admin() -> bool:
    """Tell whether the current process runs with administrator rights."""
    if sys.platform == "win32":
        import winreg

        # This key of the local service account is readable only by administrators.
        try:
            with winreg.OpenKey(winreg.HKEY_USERS, "S-1-5-19"):
                return True
        except OSError:
            return False
    geteuid = getattr(os, "geteuid", None)
    return geteuid is not None and geteuid() == 0


def process_elevation_type() -> str:
    """Return "full" for an elevated process, "default" otherwise, "unknown" if the check fails."""
    try:
        admin = is_current_user_admin()
    except Exception:
        logger.error("Checking process elevation failed", exc_info=True)
        return "unknown"
    return "full" if admin else "default"


def _cpu_brand_windows() -> Optional[str]:
    import winreg

    try:
        with winreg.OpenKey(
            winreg.HKEY_LOCAL_MACHINE, "HARDWARE\\DESCRIPTION\\System\\CentralProcessor\\0"
        ) as key:
            value, _ = winreg.QueryValueEx(key, "ProcessorNameString")
            return str(value)
    except OSError:
        return None


def _cpu_brand_cpuinfo() -> Optional[str]:
    try:
        with open(_CPUINFO_PATH, encoding="utf-8", errors="replace") as file:
            for line in file:
                key, colon, value = line.partition(":")
                if colon and key.strip() == "model name":
                    return value
    except OSError:
        return None
    return None


def cpu_brand() -> str:
    """Return the processor's brand string (manufacturer, model, clock speed), or "" if unknown."""
    brand = _cpu_brand_windows() if sys.platform == "win32" else _cpu_brand_cpuinfo()
    if brand is None:
        brand = platform.processor()
    return brand.strip()


def module_pathname() -> str:
    """Return the absolute path of the running program."""
    path = sys.argv[0] if sys.argv and sys.argv[0] else sys.executable
    return os.path.abspath(path) if path else ""


def module_dir(pathname: Optional[str] = None) -> str:
    """Return the directory part of a path, keeping the trailing separator.

    A path without any separator is returned unchanged. Without an argument,
    the path of the running program is used.
    """
    if pathname is None:
        pathname = module_pathname()
    last_sep = max(pathname.rfind("\\"), pathname.rfind("/"))
    if last_sep < 0:
        return pathname
    return pathname[:last_sep + 1]


def temp_path_name(prefix: str, directory: Optional[str] = None) -> str:
    """Create a new empty temporary file whose name starts with up to 3 characters of prefix."""
    try:
        fd, path = tempfile.mkstemp(prefix=prefix[:3], suffix=".tmp", dir=directory)
    except OSError as exc:
        raise RuntimeError("failed to create a temporary file") from exc
    os.close(fd)
    return path