"""
estate_cms.query.pagination

Offset pagination helpers.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

MAX_LIMIT = 100
# Offsets are bound as signed 64-bit SQL integers.
MAX_OFFSET = 2**63 - 1


@dataclass(frozen=True, slots=True)
class Pagination:
    page: int
    limit: int

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    def meta(self, total: int) -> dict[str, Any]:
        # Shape consumed by the admin UI: {current, pages, total, limit}.
        return {
            "current": self.page,
            "pages": math.ceil(total / self.limit),
            "total": total,
            "limit": self.limit,
        }


def _positive_int(raw: str | None, default: int) -> int:
    if raw is None:
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        return default
    return value if value >= 1 else default


def paginate(
    params: Mapping[str, str], *, default_limit: int, max_limit: int = MAX_LIMIT
) -> Pagination:
    page = _positive_int(params.get("page"), 1)
    limit = min(_positive_int(params.get("limit"), default_limit), max_limit)
    # Far past the last page either way; the query just comes back empty.
    page = min(page, MAX_OFFSET // limit)
    return Pagination(page=page, limit=limit)
