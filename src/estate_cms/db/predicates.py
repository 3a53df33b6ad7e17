"""
estate_cms.db.predicates

Compile `query.predicates` trees into SQLAlchemy clauses.

Responsibilities:
- Resolve predicate field names to mapped columns (unknown names are programming errors).
- Translate comparisons and AND/OR/NOT composition.
- Translate a `Sort` into a stable ORDER BY.
"""

from __future__ import annotations

import json
from typing import Any

from sqlalchemy import JSON, String, and_, cast, false, not_, or_, true
from sqlalchemy.sql.elements import ColumnElement

from estate_cms.query.filters import Sort
from estate_cms.query.predicates import (
    And,
    Eq,
    Gte,
    Has,
    IContains,
    Lte,
    Not,
    Or,
    Predicate,
)


def column(model: type[Any], field: str) -> Any:
    if field not in model.__mapper__.columns:
        raise ValueError(f"{model.__name__} has no column {field!r}")
    return getattr(model, field)


def to_clause(model: type[Any], predicate: Predicate) -> ColumnElement[bool]:
    match predicate:
        case Eq(field=f, value=v):
            col = column(model, f)
            return col.is_(None) if v is None else col == v
        case IContains(field=f, value=v):
            # autoescape: `%` and `_` in user input are literals, not wildcards.
            return column(model, f).icontains(v, autoescape=True)
        case Gte(field=f, value=v):
            return column(model, f) >= v
        case Lte(field=f, value=v):
            return column(model, f) <= v
        case Has(field=f, value=v):
            col = column(model, f)
            if not isinstance(col.type, JSON):
                raise ValueError(f"{model.__name__}.{f} is not an array column")
            # Elements are JSON-encoded strings; matching the quoted form avoids
            # prefix hits ("Luxury" vs "Luxury Villas").
            return cast(col, String).contains(json.dumps(v), autoescape=True)
        case And(terms=terms):
            return and_(*(to_clause(model, t) for t in terms)) if terms else true()
        case Or(terms=terms):
            return or_(*(to_clause(model, t) for t in terms)) if terms else false()
        case Not(term=t):
            return not_(to_clause(model, t))
    raise TypeError(f"unsupported predicate: {predicate!r}")


def order_by(model: type[Any], sort: Sort) -> list[Any]:
    col = column(model, sort.field)
    primary = col.desc() if sort.descending else col.asc()
    # Tie-break on id so pages never overlap when the sort key repeats.
    return [primary, model.id.asc()]


# --- Module Notes -----------------------------------------------------------
# Set-membership values are validated against a closed vocabulary before they get here,
# so they never contain quotes or backslashes that JSON would escape differently.
