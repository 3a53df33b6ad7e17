"""
estate_cms.query.filters

Declarative filter specs and the list-query builder.

Responsibilities:
- Describe which query-string parameters a listing recognizes and how each one maps to
  a predicate (`FilterParam`, `FilterSpec`).
- Build a `ListQuery` (predicate + sort + pagination) from raw request parameters.

Policy: parameters that a spec does not declare are ignored, never passed through.
Values that cannot be used are ignored too, except numbers and typed ids, which raise
`InvalidFilterValue` so the caller gets a 400 naming the parameter.
"""

from __future__ import annotations

import enum
import math
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from estate_cms.query.pagination import Pagination, paginate
from estate_cms.query.predicates import (
    MATCH_ALL,
    Eq,
    Gte,
    Has,
    IContains,
    Lte,
    Predicate,
    all_of,
    any_of,
)


class MatchKind(enum.StrEnum):
    substring = "substring"
    exact = "exact"
    numeric_range = "numeric-range"
    set_membership = "set-membership"
    boolean = "boolean"


class InvalidFilterValue(ValueError):
    def __init__(self, param: str, value: str, expected: str) -> None:
        super().__init__(f"Invalid value for '{param}': expected {expected}")
        self.param = param
        self.value = value
        self.expected = expected


@dataclass(frozen=True, slots=True)
class FilterParam:
    name: str
    kind: MatchKind
    fields: tuple[str, ...]
    choices: frozenset[str] = frozenset()
    parse: Callable[[str], Any] | None = None

    @property
    def keys(self) -> tuple[str, ...]:
        if self.kind is MatchKind.numeric_range:
            suffix = self.name[:1].upper() + self.name[1:]
            return (f"min{suffix}", f"max{suffix}")
        return (self.name,)


def substring(name: str, *fields: str) -> FilterParam:
    # Several fields form an OR group: the value may appear in any of them.
    return FilterParam(name=name, kind=MatchKind.substring, fields=fields)


def exact(name: str, field: str, *, parse: Callable[[str], Any] | None = None) -> FilterParam:
    return FilterParam(name=name, kind=MatchKind.exact, fields=(field,), parse=parse)


def numeric_range(name: str, field: str) -> FilterParam:
    return FilterParam(name=name, kind=MatchKind.numeric_range, fields=(field,))


def one_of(name: str, field: str, choices: frozenset[str]) -> FilterParam:
    return FilterParam(
        name=name, kind=MatchKind.set_membership, fields=(field,), choices=frozenset(choices)
    )


def boolean(name: str, field: str) -> FilterParam:
    return FilterParam(name=name, kind=MatchKind.boolean, fields=(field,))


@dataclass(frozen=True, slots=True)
class FilterSpec:
    entity: str
    params: tuple[FilterParam, ...]
    sortable: Mapping[str, str]
    default_sort: str = "created_at"
    default_limit: int = 10

    def __post_init__(self) -> None:
        keys = [k for p in self.params for k in p.keys]
        if len(keys) != len(set(keys)):
            raise ValueError(f"{self.entity}: duplicate filter parameter")
        if self.default_sort not in self.sortable.values():
            raise ValueError(f"{self.entity}: default sort {self.default_sort!r} is not sortable")
        object.__setattr__(self, "sortable", MappingProxyType(dict(self.sortable)))

    @property
    def recognized(self) -> frozenset[str]:
        return frozenset(k for p in self.params for k in p.keys) | {
            "sortBy",
            "sortOrder",
            "page",
            "limit",
        }


@dataclass(frozen=True, slots=True)
class Sort:
    field: str
    descending: bool = True


@dataclass(frozen=True, slots=True)
class ListQuery:
    predicate: Predicate
    sort: Sort
    pagination: Pagination


def _present(raw: str | None) -> str | None:
    if raw is None:
        return None
    value = raw.strip()
    return value or None


def _finite(param: str, raw: str) -> float:
    try:
        number = float(raw)
    except ValueError:
        raise InvalidFilterValue(param, raw, "a number") from None
    if not math.isfinite(number):
        raise InvalidFilterValue(param, raw, "a finite number")
    return number


def _translate(param: FilterParam, params: Mapping[str, str]) -> Predicate | None:
    if param.kind is MatchKind.numeric_range:
        min_key, max_key = param.keys
        (target,) = param.fields
        bounds: list[Predicate] = []
        low = _present(params.get(min_key))
        if low is not None:
            bounds.append(Gte(target, _finite(min_key, low)))
        high = _present(params.get(max_key))
        if high is not None:
            # Applied literally: min > max selects nothing.
            bounds.append(Lte(target, _finite(max_key, high)))
        return all_of(*bounds) if bounds else None

    value = _present(params.get(param.name))
    if value is None:
        return None

    match param.kind:
        case MatchKind.substring:
            return any_of(*(IContains(f, value) for f in param.fields))
        case MatchKind.exact:
            if param.parse is not None:
                try:
                    value = param.parse(value)
                except ValueError:
                    raise InvalidFilterValue(param.name, value, "a valid identifier") from None
            return Eq(param.fields[0], value)
        case MatchKind.set_membership:
            if value not in param.choices:
                return None
            return Has(param.fields[0], value)
        case MatchKind.boolean:
            if value not in ("true", "false"):
                return None
            return Eq(param.fields[0], value == "true")
    raise TypeError(f"unsupported match kind: {param.kind!r}")


def build(spec: FilterSpec, raw_params: Mapping[str, str]) -> ListQuery:
    terms = [t for p in spec.params if (t := _translate(p, raw_params)) is not None]
    predicate = all_of(*terms) if terms else MATCH_ALL

    sort_field = spec.sortable.get(raw_params.get("sortBy") or "", spec.default_sort)
    descending = (raw_params.get("sortOrder") or "desc").strip().lower() != "asc"

    return ListQuery(
        predicate=predicate,
        sort=Sort(field=sort_field, descending=descending),
        pagination=paginate(raw_params, default_limit=spec.default_limit),
    )


# --- Module Notes -----------------------------------------------------------
# Specs for each listing live in `query.specs`; they are module-level constants built
# once at import and shared across requests.
