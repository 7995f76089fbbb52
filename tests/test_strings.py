import re

import pytest

from matchcond.strings import MatchStr, MatchStrKind


def test_default_is_any():
    assert MatchStr() == MatchStr.any()
    assert MatchStr().kind is MatchStrKind.ANY


def test_documented_examples():
    assert MatchStr.contains("f").matches("foo")
    assert MatchStr.equal_to("foo").matches("foo")
    assert MatchStr.regex("fo{2,}").matches("foo")
    cond = MatchStr.not_(MatchStr.or_([MatchStr.contains("b"), MatchStr.contains("a")]))
    assert cond.matches("foo")


def test_non_matches():
    assert not MatchStr.contains("z").matches("foo")
    assert not MatchStr.equal_to("foo").matches("food")
    assert not MatchStr.regex("^o").matches("foo")
    assert not MatchStr.not_(MatchStr.any()).matches("foo")


def test_and_or():
    cond = MatchStr.and_([MatchStr.contains("f"), MatchStr.regex("o{2,}$")])
    assert cond.matches("foo")
    assert not cond.matches("fo")
    assert MatchStr.and_([]).matches("x")
    assert not MatchStr.or_([]).matches("x")


def test_regex_searches_anywhere():
    assert MatchStr.regex(r"son\b").matches("Jackson Smith")


def test_invalid_regex_raises():
    with pytest.raises(re.error):
        MatchStr.regex("(").matches("foo")


def test_map_documented():
    assert MatchStr.equal_to(5).map(str) == MatchStr.equal_to("5")


def test_map_nested():
    cond = MatchStr.or_([MatchStr.not_(MatchStr.contains("a")), MatchStr.regex("b"), MatchStr.any()])
    mapped = cond.map(str.upper)
    assert mapped == MatchStr.or_(
        [MatchStr.not_(MatchStr.contains("A")), MatchStr.regex("B"), MatchStr.any()]
    )


def test_to_data_forms():
    assert MatchStr.any().to_data() == "any"
    assert MatchStr.contains("foo").to_data() == {"contains": "foo"}
    assert MatchStr.not_(MatchStr.equal_to("bar")).to_data() == {"not": {"equal_to": "bar"}}


@pytest.mark.parametrize(
    "data",
    [
        "any",
        {"and": [{"contains": "f"}, {"regex": "o{2,}$"}]},
        {"contains": "foo"},
        {"equal_to": "foo"},
        {"not": {"equal_to": "bar"}},
        {"or": [{"not": {"contains": "bar"}}, {"equal_to": "foobar"}]},
        {"regex": "fo{2,}"},
    ],
)
def test_documented_data_round_trips(data):
    assert MatchStr.from_data(data).to_data() == data


@pytest.mark.parametrize(
    "data",
    ["none", {"bogus": "x"}, {"and": "x"}, {"any": "x"}, {"a": 1, "b": 2}, 5, {"contains": 3}],
)
def test_from_data_rejects(data):
    with pytest.raises(ValueError):
        MatchStr.from_data(data)


def test_constructor_type_checks():
    with pytest.raises(TypeError):
        MatchStr.not_("foo")
    with pytest.raises(TypeError):
        MatchStr.and_([MatchStr.any(), "foo"])