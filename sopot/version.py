"""Product name, version numbers and the strings built from them."""

from __future__ import annotations

from enum import IntEnum


class VersionType(IntEnum):
    """Release stage of a build."""

    DEV = 0
    ALPHA = 1
    BETA = 2
    RC = 3
    RELEASE = 4


PRODUCT_NAME = "RF2 Community Patch (SOPOT)"
VERSION_MAJOR = 0
VERSION_MINOR = 1
VERSION_PATCH = 0
VERSION_TYPE = VersionType.DEV
VERSION_TYPE_REVISION = 1

# Versions of the configuration file formats managed by the patch.
ADS_VERSION = 2
AFS_VERSION = 1
AFCC_VERSION = 1

MAXIMUM_RFL_VERSION = 295

_SUFFIX_TAGS = {
    VersionType.ALPHA: "-alpha",
    VersionType.BETA: "-beta",
    VersionType.RC: "-rc",
}


def version_suffix(version_type: VersionType | int, revision: int) -> str:
    """Return the suffix appended to the numeric version for a release stage."""
    try:
        stage = VersionType(version_type)
    except ValueError:
        raise ValueError(f"Unknown version type: {version_type!r}") from None
    if stage is VersionType.DEV:
        return "-dev"
    if stage is VersionType.RELEASE:
        return ""
    return f"{_SUFFIX_TAGS[stage]}{revision}"


def version_string() -> str:
    """Return the full version, e.g. ``major.minor.patch`` plus the stage suffix."""
    suffix = version_suffix(VERSION_TYPE, VERSION_TYPE_REVISION)
    return f"{VERSION_MAJOR}.{VERSION_MINOR}.{VERSION_PATCH}{suffix}"


def product_name_version() -> str:
    """Return the product name followed by its version."""
    return f"{PRODUCT_NAME} {version_string()}"


def user_agent(suffix: str) -> str:
    """Return an HTTP user agent naming the product, its version and a component."""
    return f"{PRODUCT_NAME} v{version_string()} {suffix}"