from datetime import datetime

import pytest

from matchcond.option import MatchOption, MatchOptionKind


def test_default_is_any():
    assert MatchOption() == MatchOption.any()
    assert MatchOption().kind is MatchOptionKind.ANY


def test_documented_examples():
    assert MatchOption.any().matches(None)
    assert MatchOption.any().matches(1)
    assert MatchOption.equal_to(3).matches(3)
    assert MatchOption.less_than(4).matches(1)
    assert MatchOption.none().matches(None)
    assert MatchOption.not_(
        MatchOption.or_([MatchOption.greater_than(1), MatchOption.less_than(-1)])
    ).matches(0)


@pytest.mark.parametrize(
    "cond",
    [
        MatchOption.equal_to(3),
        MatchOption.greater_than(1),
        MatchOption.less_than(4),
        MatchOption.in_range(0, 10),
    ],
)
def test_missing_value_fails_comparisons(cond):
    assert not cond.matches(None)
    assert MatchOption.not_(cond).matches(None)


def test_none_rejects_present():
    assert not MatchOption.none().matches(0)


def test_some():
    assert MatchOption.some() == MatchOption.not_(MatchOption.none())
    assert MatchOption.some().matches(0)
    assert not MatchOption.some().matches(None)


def test_in_range_bounds():
    cond = MatchOption.in_range(5, 10)
    assert cond.matches(5)
    assert not cond.matches(10)


def test_from_optional():
    assert MatchOption.from_optional(None) == MatchOption.none()
    assert MatchOption.from_optional(7) == MatchOption.equal_to(7)
    assert MatchOption.from_optional(0) == MatchOption.equal_to(0)


def test_map_documented():
    assert MatchOption.equal_to("5").map(int) == MatchOption.equal_to(5)


def test_map_keeps_none():
    cond = MatchOption.or_([MatchOption.none(), MatchOption.in_range("1", "2")])
    assert cond.map(int) == MatchOption.or_([MatchOption.none(), MatchOption.in_range(1, 2)])


def test_and_combination():
    cond = MatchOption.and_([MatchOption.some(), MatchOption.greater_than(2)])
    assert cond.matches(3)
    assert not cond.matches(None)
    assert not cond.matches(2)


def test_child_type_checked():
    with pytest.raises(TypeError):
        MatchOption.or_(["none"])


@pytest.mark.parametrize(
    "data",
    [
        {"and": [{"not": {"equal_to": 3}}, {"in_range": [0, 10]}]},
        "any",
        {"equal_to": 3},
        {"less_than": 3},
        {"greater_than": 3},
        {"in_range": [0, 3]},
        "none",
        {"not": "none"},
        {"or": [{"greater_than": 2}, {"equal_to": 0}]},
    ],
)
def test_data_round_trip(data):
    assert MatchOption.from_data(data).to_data() == data


def test_some_to_data():
    assert MatchOption.some().to_data() == {"not": "none"}


def test_encode_decode_dates():
    data = {"in_range": ["2022-01-01T00:00:00", "2023-01-01T00:00:00"]}
    cond = MatchOption.from_data(data, datetime.fromisoformat)
    assert cond == MatchOption.in_range(datetime(2022, 1, 1), datetime(2023, 1, 1))
    assert cond.to_data(datetime.isoformat) == data


@pytest.mark.parametrize(
    "data",
    ["some", "equal_to", {"none": None}, {"in_range": [1, 2, 3]}, {"or": 1}, [], None],
)
def test_from_data_rejects(data):
    with pytest.raises(ValueError):
        MatchOption.from_data(data)