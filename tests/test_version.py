import pytest

from sopot.version import (
    PRODUCT_NAME,
    VersionType,
    product_name_version,
    user_agent,
    version_string,
    version_suffix,
)


def test_version_string_of_current_build():
    assert version_string() == "0.1.0-dev"


def test_dev_suffix_ignores_revision():
    assert version_suffix(VersionType.DEV, 5) == "-dev"


def test_release_has_no_suffix():
    assert version_suffix(VersionType.RELEASE, 3) == ""


@pytest.mark.parametrize(
    "stage, tag",
    [(VersionType.ALPHA, "-alpha"), (VersionType.BETA, "-beta"), (VersionType.RC, "-rc")],
)
def test_prerelease_suffix_carries_revision(stage, tag):
    suffix = version_suffix(stage, 7)
    assert suffix.startswith(tag)
    assert suffix[len(tag):] == str(7)


def test_suffix_accepts_plain_int():
    assert version_suffix(int(VersionType.DEV), 1) == version_suffix(VersionType.DEV, 1)


def test_unknown_version_type_rejected():
    with pytest.raises(ValueError):
        version_suffix(99, 1)


def test_product_name_version_joins_name_and_version():
    text = product_name_version()
    assert text.startswith(PRODUCT_NAME + " ")
    assert text.endswith(version_string())
    assert len(text) == len(PRODUCT_NAME) + 1 + len(version_string())


def test_user_agent_layout():
    component = "Launcher"
    agent = user_agent(component)
    assert agent.startswith(PRODUCT_NAME)
    assert (" v" + version_string() + " ") in agent
    assert agent.endswith(" " + component)