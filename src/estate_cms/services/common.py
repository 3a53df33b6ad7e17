"""
estate_cms.services.common

Helpers shared by the entity services.
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from typing import Any

from estate_cms.db.repositories.base import SqlStore
from estate_cms.errors import ConflictError
from estate_cms.query.predicates import Eq, Not, all_of


async def ensure_unique(
    store: SqlStore[Any],
    *,
    noun: str,
    fields: Mapping[str, tuple[str, Any]],
    exclude_id: uuid.UUID | None = None,
) -> None:
    """
    Advisory pre-check: raise `ConflictError` naming the first colliding field.

    `fields` maps column name -> (human label, candidate value); `None` values are skipped.
    The unique constraints in the schema remain the authority (see api.errors).
    """

    for column, (label, value) in fields.items():
        if value is None:
            continue
        predicate = Eq(column, value)
        if exclude_id is not None:
            predicate = all_of(predicate, Not(Eq("id", exclude_id)))
        if await store.find_one(predicate) is not None:
            prefix = f"Another {noun}" if exclude_id is not None else f"{noun.capitalize()}"
            raise ConflictError(f"{prefix} with this {label} already exists")


def apply_changes(entity: Any, changes: Mapping[str, Any]) -> None:
    for name, value in changes.items():
        setattr(entity, name, value)
    entity.touch()
