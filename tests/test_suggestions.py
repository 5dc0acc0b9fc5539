from dataclasses import dataclass, field

import pytest

from clikit.suggestions import (
    did_you_mean,
    jaro_distance,
    jaro_winkler,
    suggest_command,
    suggest_flag,
)


@dataclass
class _Named:
    name: str
    aliases: list = field(default_factory=list)

    def names(self):
        return [self.name, *self.aliases]


def _flags():
    return [
        _Named("socket", ["s"]),
        _Named("flag", ["fl", "f"]),
        _Named("another-flag", ["b"]),
        _Named("hidden-flag"),
    ]


def _commands():
    return [
        _Named("config", ["c"]),
        _Named("info", ["i", "in"]),
    ]


@pytest.mark.parametrize(
    "a, b, expected",
    [
        ("", "", 1),
        ("a", "", 0),
        ("", "a", 0),
        ("a", "a", 1),
        ("a", "b", 0),
        ("aa", "aa", 1),
        ("aa", "bb", 0),
        ("aaa", "aaa", 1),
        ("aa", "ab", 0.6666666666666666),
        ("aa", "ba", 0.6666666666666666),
        ("ba", "aa", 0.6666666666666666),
        ("ab", "aa", 0.6666666666666666),
    ],
)
def test_jaro_winkler(a, b, expected):
    assert jaro_winkler(a, b) == pytest.approx(expected)


def test_jaro_distance_is_symmetric_and_bounded():
    pairs = [("martha", "marhta"), ("dixon", "dicksonx"), ("help", "hlp")]
    for a, b in pairs:
        forward = jaro_distance(a, b)
        assert forward == pytest.approx(jaro_distance(b, a))
        assert 0.0 <= forward <= 1.0


def test_jaro_winkler_never_below_jaro():
    for a, b in [("help", "hel"), ("config", "conf"), ("socket", "soccer")]:
        assert jaro_winkler(a, b) >= jaro_distance(a, b)


@pytest.mark.parametrize(
    "provided, expected",
    [
        ("", ""),
        ("a", "--another-flag"),
        ("hlp", "--help"),
        ("k", ""),
        ("s", "-s"),
        ("hel", "--help"),
        ("soccer", "--socket"),
    ],
)
def test_suggest_flag(provided, expected):
    assert suggest_flag(_flags(), provided, False) == expected


def test_suggest_flag_hide_help():
    assert suggest_flag(_flags(), "hlp", True) == "--fl"


def test_suggest_flag_without_help_flag():
    assert suggest_flag(_flags(), "hlp", False, None) == "--fl"


def test_suggest_flag_accepts_plain_name_lists():
    assert suggest_flag([["verbose", "v"]], "verbos", True) == "--verbose"


def test_suggest_flag_no_flags():
    assert suggest_flag([], "help", False) == ""


@pytest.mark.parametrize(
    "provided, expected",
    [
        ("", ""),
        ("conf", "config"),
        ("i", "i"),
        ("information", "info"),
        ("inf", "info"),
        ("con", "config"),
    ],
)
def test_suggest_command(provided, expected):
    assert suggest_command(_commands(), provided) == expected


def test_did_you_mean():
    assert did_you_mean("--help") == 'Did you mean "--help"?'