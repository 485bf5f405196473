import os

import pytest

from sopot.os_utils import (
    cpu_brand,
    is_current_user_admin,
    module_dir,
    module_pathname,
    os_version,
    process_elevation_type,
    temp_path_name,
)


def test_module_dir_keeps_trailing_backslash():
    assert module_dir("C:\\games\\rf2.exe") == "C:\\games\\"


def test_module_dir_with_forward_slashes():
    assert module_dir("/opt/game/bin") == "/opt/game/"


def test_module_dir_without_separator_is_unchanged():
    assert module_dir("rf2.exe") == "rf2.exe"


def test_module_dir_of_running_program():
    directory = module_dir()
    assert module_pathname().startswith(directory)
    assert directory.endswith(("/", "\\"))


def test_module_pathname_is_absolute():
    path = module_pathname()
    assert os.path.isabs(path) is True


def test_temp_path_name_creates_empty_file(tmp_path):
    path = temp_path_name("abcdef", str(tmp_path))
    assert os.path.dirname(path) == str(tmp_path)
    assert os.path.basename(path).startswith("abc")
    assert os.path.getsize(path) == 0


def test_temp_path_names_are_unique(tmp_path):
    first = temp_path_name("rf", str(tmp_path))
    second = temp_path_name("rf", str(tmp_path))
    assert first != second
    assert os.path.exists(first) and os.path.exists(second)


def test_temp_path_name_in_missing_directory_raises(tmp_path):
    with pytest.raises(RuntimeError):
        temp_path_name("rf", str(tmp_path / "missing"))


def test_os_version_is_dotted_numbers():
    parts = os_version().split(".")
    assert [part for part in parts if not part.isdigit()] == []


def test_elevation_type_agrees_with_admin_check():
    elevation = process_elevation_type()
    assert elevation in {"default", "full", "unknown"}
    assert (elevation == "full") == is_current_user_admin()


def test_cpu_brand_is_stripped():
    brand = cpu_brand()
    assert brand == brand.strip()