# matchcond

`matchcond` lets you describe *which* records you are looking for, rather
than one particular record. Every record type in an invoicing domain
(locations, organizations, contacts, employees, expenses, invoices, jobs and
timesheets) has a counterpart whose fields are conditions instead of values.
A record condition is meant to match when **all** of its fields match; any
field you leave out defaults to "any".

The package has no runtime dependencies.

## Installation

```
pip install matchcond
```

## Building blocks

Four generic, immutable condition types sit underneath every record
condition. Each is built with class methods and combined with `and_`, `or_`
and `not_`; each defaults to `any()`.

| Type | Module | Describes |
|------|--------|-----------|
| `Match` | `matchcond.condition` | a single comparable value |
| `MatchOption` | `matchcond.option` | a value that may be absent (`None`) |
| `MatchStr` | `matchcond.strings` | a string |
| `MatchSet` | `matchcond.sets` | a collection, via conditions on its elements |

Every condition has a `kind` (a member of `MatchKind`, `MatchOptionKind`,
`MatchStrKind` or `MatchSetKind`) and a tuple of `operands`. `map(f)` returns
the same condition with `f` applied to every value it holds.

### Values

```python
from matchcond.condition import Match

Match.equal_to(3).matches(3)            # True
Match.in_range(5, 10).matches(9)        # True: low <= v < high
Match.less_than(4).matches(1)           # True
Match.not_(Match.or_([Match.greater_than(1), Match.less_than(-1)])).matches(0)  # True
Match.equal_to("5").map(int) == Match.equal_to(5)  # True
```

### Optional values

```python
from matchcond.option import MatchOption

MatchOption.none().matches(None)           # True
MatchOption.some().matches(5)              # True: same as not_(none())
MatchOption.greater_than(1).matches(None)  # False: comparisons need a value
MatchOption.from_optional(None) == MatchOption.none()  # True
MatchOption.from_optional(3) == MatchOption.equal_to(3)  # True
```

### Strings

```python
from matchcond.strings import MatchStr

MatchStr.contains("f").matches("foo")   # True
MatchStr.equal_to("foo").matches("foo") # True
MatchStr.regex("fo{2,}").matches("foo") # True, found anywhere with re.search
MatchStr.not_(MatchStr.or_([MatchStr.contains("b"), MatchStr.contains("a")])).matches("foo")  # True
```

An invalid `regex` pattern raises `re.error` when `matches` is called.

### Collections

`MatchSet.contains(condition)` matches a collection in which at least one
element satisfies `condition`. By default an element is tested with
`condition.matches(item)`; pass `element_matches(condition, item)` to decide
it yourself.

```python
from matchcond.condition import Match
from matchcond.sets import MatchSet

items = {1, 3, 5, 7, 9}
MatchSet.or_([MatchSet.contains(Match.equal_to(0)),
              MatchSet.contains(Match.greater_than(3))]).matches(items)    # True
MatchSet.not_(MatchSet.contains(Match.in_range(10, 100))).matches(items)  # True
```

## Record conditions

`matchcond.records` holds `MatchLocation`, `MatchOuterLocation`,
`MatchOrganization`, `MatchContact`, `MatchContactKind`, `MatchEmployee`,
`MatchExpense` and `MatchInvoice`. `matchcond.work` holds `MatchJob` and
`MatchTimesheet`. All are frozen dataclasses.

```python
from matchcond.records import MatchEmployee
from matchcond.strings import MatchStr

hired_non_ceos = MatchEmployee(
    name=MatchStr.regex("^[ABC]"),
    status=MatchStr.equal_to("Hired"),
    title=MatchStr.not_(MatchStr.equal_to("CEO")),
)
```

`MatchLocation`, `MatchOrganization`, `MatchEmployee`, `MatchExpense`,
`MatchJob` and `MatchTimesheet` have `from_id(id_condition)`, which sets only
the `id` field; a plain id becomes `Match.equal_to(id)`.
`MatchContact.from_label(label)` does the same for a contact's label.

A location's enclosing location is a `MatchOuterLocation`: `any()`, `none()`
(there is no outer location) or `some(location)`. A contact's kind is a
`MatchContactKind`: `any()`, `address(location)`, `email(condition)`,
`phone(condition)` or `other(condition)`; left out, the inner condition
matches anything.

## Money

`Match`, `MatchSet`, `MatchExpense`, `MatchInvoice`, `MatchJob` and
`MatchTimesheet` have `exchange(currency, rates)`, which returns a new
condition in which every held value has been replaced by
`value.exchange(currency, rates)`. `MatchExpense` exchanges its `cost`,
`MatchInvoice` its `hourly_rate`, `MatchJob` its invoice and
`MatchTimesheet` its expenses and job. The money values themselves, and what
`currency` and `rates` are, are up to you.

## Plain data

Every condition converts to and from plain Python data (dicts, lists and
strings) with `to_data()` and `from_data(...)`, in the shape you would keep
in a YAML or JSON file:

```python
from matchcond.work import MatchTimesheet

timesheet = MatchTimesheet.from_data({
    "id": "any",
    "employee": {"name": {"regex": "^[JR]on$"}},
    "expenses": {"contains": {"category": {"equal_to": "Travel"}}},
    "time_end": "none",
})
```

- Unit conditions are written as bare strings (`"any"`, and `"none"` for
  optional values); every other condition is a mapping with one key such as
  `equal_to`, `in_range` (a list of two values), `not`, `and` or `or`.
- Record fields that are missing or `None` fall back to "any".
- `Match`, `MatchOption` and `MatchSet` take an optional `encode` for
  `to_data` and `decode` for `from_data` to convert the values they hold.
- Dates and times are `datetime.datetime` values written as ISO 8601 text.
- Job increments are `datetime.timedelta` values written as human-readable
  time. `matchcond.work.parse_duration("1h 30m")` gives
  `timedelta(hours=1, minutes=30)`, and
  `format_duration(timedelta(minutes=15))` gives `"15m"`. Precision below a
  microsecond is dropped; formatting a negative duration raises `ValueError`.
- Expense costs and hourly rates are kept as given when read; when written,
  a value with a `to_data()` method is written through it.

Malformed data raises `ValueError`.

## What the package does not do

- Record conditions describe records but do not test them: there are no
  record types here and no `matches` method on `MatchEmployee`, `MatchJob`
  and the rest. Only `Match`, `MatchOption`, `MatchStr` and `MatchSet`
  evaluate values.
- It has no storage or query backend and does not turn conditions into
  database queries.
- It does not read or write YAML or JSON files itself; load them with the
  library of your choice and pass the result to `from_data`.
- It provides no money type, currencies or exchange rates.

## A word of warning

`not_(any())` never matches anything. It is accepted, but it is almost never
what you want.

## Running the tests

```
pip install -e ".[test]"
pytest
```