from dataclasses import dataclass
from datetime import datetime

import pytest

from matchcond.condition import Match, MatchKind


@dataclass(frozen=True)
class Money:
    amount: int
    currency: str

    def exchange(self, currency, rates):
        return Money(self.amount * rates[currency], currency)


def test_default_is_any():
    assert Match() == Match.any()
    assert Match().kind is MatchKind.ANY


def test_documented_examples():
    assert Match.equal_to(3).matches(3)
    assert Match.in_range(5, 10).matches(9)
    assert Match.less_than(4).matches(1)
    assert Match.not_(Match.or_([Match.greater_than(1), Match.less_than(-1)])).matches(0)


@pytest.mark.parametrize("value", [5, 6, 9])
def test_in_range_includes_low(value):
    assert Match.in_range(5, 10).matches(value)


@pytest.mark.parametrize("value", [4, 10, 11])
def test_in_range_excludes_high(value):
    assert not Match.in_range(5, 10).matches(value)


def test_strict_comparisons():
    assert not Match.greater_than(3).matches(3)
    assert not Match.less_than(3).matches(3)
    assert Match.greater_than(3).matches(4)


def test_and_or():
    both = Match.and_([Match.greater_than(0), Match.less_than(10)])
    assert both.matches(5)
    assert not both.matches(10)
    either = Match.or_([Match.equal_to(0), Match.greater_than(2)])
    assert either.matches(0)
    assert not either.matches(1)


def test_empty_and_or():
    assert Match.and_([]).matches(1)
    assert not Match.or_([]).matches(1)


def test_not_any_never_matches():
    assert not Match.not_(Match.any()).matches(42)


def test_map_documented():
    assert Match.equal_to("5").map(int) == Match.equal_to(5)


def test_map_nested():
    cond = Match.not_(Match.and_([Match.in_range("1", "3"), Match.any()]))
    assert cond.map(int) == Match.not_(Match.and_([Match.in_range(1, 3), Match.any()]))


def test_exchange():
    cond = Match.in_range(Money(1, "USD"), Money(5, "USD"))
    result = cond.exchange("EUR", {"EUR": 2})
    assert result == Match.in_range(Money(2, "EUR"), Money(10, "EUR"))


def test_exchange_nested_keeps_any():
    cond = Match.or_([Match.any(), Match.not_(Match.any())])
    assert cond.exchange("EUR", {"EUR": 2}) == cond


def test_hashable():
    assert len({Match.equal_to(1), Match.equal_to(1), Match.any()}) == 2


def test_non_condition_child_rejected():
    with pytest.raises(TypeError):
        Match.and_([3])
    with pytest.raises(TypeError):
        Match.not_(3)


@pytest.mark.parametrize(
    "data",
    [
        {"and": [{"not": {"equal_to": 3}}, {"in_range": [0, 10]}]},
        "any",
        {"equal_to": 3},
        {"less_than": 3},
        {"greater_than": 3},
        {"in_range": [0, 3]},
        {"not": {"equal_to": 3}},
        {"or": [{"greater_than": 2}, {"equal_to": 0}]},
        {"not": "any"},
    ],
)
def test_data_round_trip(data):
    assert Match.from_data(data).to_data() == data


def test_from_data_structure():
    cond = Match.from_data({"and": [{"not": {"equal_to": 3}}, {"in_range": [0, 10]}]})
    assert cond == Match.and_([Match.not_(Match.equal_to(3)), Match.in_range(0, 10)])


def test_encode_decode():
    when = datetime(2022, 1, 1)
    cond = Match.less_than(when)
    data = cond.to_data(datetime.isoformat)
    assert data == {"less_than": "2022-01-01T00:00:00"}
    assert Match.from_data(data, datetime.fromisoformat) == cond


@pytest.mark.parametrize(
    "data",
    [
        "equal_to",
        "bogus",
        {"bogus": 1},
        {"equal_to": 1, "less_than": 2},
        {"in_range": [1]},
        {"in_range": "ab"},
        {"and": "any"},
        {"any": None},
        42,
    ],
)
def test_from_data_rejects(data):
    with pytest.raises(ValueError):
        Match.from_data(data)