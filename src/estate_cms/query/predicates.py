"""
estate_cms.query.predicates

Composable boolean predicate trees.

Responsibilities:
- Represent field comparisons (equality, case-insensitive substring, numeric bounds,
  array membership) and AND/OR/NOT composition as immutable values.
- Evaluate a predicate against an in-memory record.

Field names are plain attribute names; `db.predicates` compiles the same tree into
SQLAlchemy clauses, so nothing here knows about a storage engine.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Eq:
    field: str
    value: Any


@dataclass(frozen=True, slots=True)
class IContains:
    field: str
    value: str


@dataclass(frozen=True, slots=True)
class Gte:
    field: str
    value: float


@dataclass(frozen=True, slots=True)
class Lte:
    field: str
    value: float


@dataclass(frozen=True, slots=True)
class Has:
    """Array-valued field contains `value`."""

    field: str
    value: str


@dataclass(frozen=True, slots=True)
class And:
    terms: tuple[Predicate, ...] = ()


@dataclass(frozen=True, slots=True)
class Or:
    terms: tuple[Predicate, ...] = ()


@dataclass(frozen=True, slots=True)
class Not:
    term: Predicate


Predicate = Eq | IContains | Gte | Lte | Has | And | Or | Not

MATCH_ALL = And()


def all_of(*terms: Predicate) -> Predicate:
    flat: list[Predicate] = []
    for term in terms:
        if isinstance(term, And):
            flat.extend(term.terms)
        else:
            flat.append(term)
    if len(flat) == 1:
        return flat[0]
    return And(tuple(flat))


def any_of(*terms: Predicate) -> Predicate:
    if len(terms) == 1:
        return terms[0]
    return Or(tuple(terms))


def _get(record: Any, field: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(field)
    return getattr(record, field, None)


def matches(predicate: Predicate, record: Any) -> bool:
    match predicate:
        case Eq(field=f, value=v):
            return _get(record, f) == v
        case IContains(field=f, value=v):
            actual = _get(record, f)
            return isinstance(actual, str) and v.casefold() in actual.casefold()
        case Gte(field=f, value=v):
            actual = _get(record, f)
            return actual is not None and actual >= v
        case Lte(field=f, value=v):
            actual = _get(record, f)
            return actual is not None and actual <= v
        case Has(field=f, value=v):
            return v in (_get(record, f) or ())
        case And(terms=terms):
            return all(matches(t, record) for t in terms)
        case Or(terms=terms):
            return any(matches(t, record) for t in terms)
        case Not(term=t):
            return not matches(t, record)
    raise TypeError(f"unsupported predicate: {predicate!r}")


# --- Module Notes -----------------------------------------------------------
# An empty And matches everything and an empty Or matches nothing; the SQL compiler
# mirrors this with true()/false().
