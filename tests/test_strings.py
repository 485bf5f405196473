import pytest

from sopot.strings import (
    StringMatcher,
    add_suffix_before_extension,
    ext_from_filename,
    filename_without_ext,
    has_suffix_before_extension,
    icontains,
    iends_with,
    iequals,
    istarts_with,
    ltrim,
    remove_any_suffix_before_extension,
    remove_suffix_before_extension,
    replace_all,
    rtrim,
    split_once_whitespace,
    string_split,
    trim,
)

WS = " \t\r\n\v\f"


def test_trims():
    core = "alpha  beta"
    padded = WS + core + WS
    assert trim(padded) == core
    assert ltrim(padded) == core + WS
    assert rtrim(padded) == WS + core


def test_trim_keeps_non_ascii_space():
    text = "\u00a0x\u00a0"
    assert trim(text) == text


def test_trim_empty_and_blank():
    assert trim(WS) == ""
    assert trim("") == ""


def test_split_once_whitespace():
    head, tail = "cmd", "arg one  two"
    assert split_once_whitespace("  " + head + " \t " + tail + " ") == (head, tail)
    assert split_once_whitespace("  " + head + "\n") == (head, "")


def test_split_once_whitespace_uses_tab():
    head, tail = "kick", "player"
    assert split_once_whitespace(head + "\t" + tail) == (head, tail)


def test_split_once_whitespace_ignores_newline_as_separator():
    text = "a\nb"
    assert split_once_whitespace(text) == (text, "")


def test_string_split_drops_empty_parts():
    parts = ["a", "bb", "ccc"]
    assert string_split("  ".join(parts)) == parts
    assert string_split(",".join(parts) + ",", ",") == parts
    assert string_split(",,,", ",") == []
    assert string_split("") == []


def test_iequals():
    assert iequals("Hello", "hELLO")
    assert not iequals("abc", "abcd")
    assert not iequals("\u00c4", "\u00e4")


def test_istarts_and_iends_with():
    assert istarts_with("FooBar.txt", "foo")
    assert not istarts_with("fo", "foo")
    assert iends_with("Map.RFL", ".rfl")
    assert not iends_with("l", ".rfl")


def test_icontains():
    assert icontains("Hello World", "LO w")
    assert not icontains("abc", "d")
    assert icontains("x", "")
    assert not icontains("", "")


def test_replace_all():
    parts = ["a", "b", "c"]
    assert replace_all("-".join(parts), "-", "+-") == "+-".join(parts)
    text = "nothing here"
    assert replace_all(text, "zz", "y") == text


def test_replace_all_empty_search():
    with pytest.raises(ValueError):
        replace_all("abc", "", "x")


def test_add_suffix_before_extension():
    stem, ext, sfx = "level", ".rfl", "_hd"
    assert add_suffix_before_extension(stem + ext, sfx) == stem + sfx + ext
    assert add_suffix_before_extension(stem, sfx) == stem + sfx
    assert add_suffix_before_extension(stem + ext, "") == stem + ext
    assert add_suffix_before_extension("a.b" + ext, sfx) == "a.b" + sfx + ext


@pytest.mark.parametrize("name", ["level.rfl", "noext", "a.b.c"])
def test_add_then_remove_round_trip(name):
    sfx = "_x"
    added = add_suffix_before_extension(name, sfx)
    assert has_suffix_before_extension(added, sfx, True)
    assert remove_suffix_before_extension(added, sfx, True) == name


def test_remove_suffix_case_handling():
    stem, ext = "level", ".rfl"
    name = stem + "_HD" + ext
    assert remove_suffix_before_extension(name, "_hd") == stem + ext
    assert remove_suffix_before_extension(name, "_hd", case_sensitive=True) == name


def test_remove_suffix_longer_than_stem():
    name = "ab.txt"
    assert remove_suffix_before_extension(name, "abc") == name


def test_remove_any_suffix():
    stem, ext = "level", ".rfl"
    assert remove_any_suffix_before_extension(stem + "_hd" + ext, ["_lo", "_hd"]) == stem + ext
    name = stem + ext
    assert remove_any_suffix_before_extension(name, ["_lo", "_hd"]) == name


def test_has_suffix_before_extension():
    assert has_suffix_before_extension("anything", "")
    assert has_suffix_before_extension("level_HD.rfl", "_hd")
    assert not has_suffix_before_extension("level_HD.rfl", "_hd", case_sensitive=True)
    assert not has_suffix_before_extension("a.txt", "long")
    assert not has_suffix_before_extension("file.hd", "hd")


def test_filename_parts():
    stem, ext = "archive.tar", "gz"
    name = stem + "." + ext
    assert filename_without_ext(name) == stem
    assert ext_from_filename(name) == ext
    assert filename_without_ext("plain") == "plain"
    assert ext_from_filename("plain") == ""


def test_matcher_prefix_and_suffix_case_insensitive():
    matcher = StringMatcher().prefix("dm-").suffix(".rfl")
    assert matcher("DM-Arena.RFL")
    assert not matcher("ctf-arena.rfl")


def test_matcher_exact_case_sensitive():
    matcher = StringMatcher(True).exact("Level")
    assert matcher("Level")
    assert not matcher("level")


def test_matcher_infix():
    assert StringMatcher().infix("ARE")("dm-arena")
    assert not StringMatcher(True).infix("ARE")("dm-arena")


def test_empty_matcher_accepts_everything():
    assert StringMatcher()("anything")
    assert StringMatcher(True)("")


def test_matcher_chaining_returns_same_object():
    matcher = StringMatcher()
    assert matcher.exact("a") is matcher
    assert matcher("A")