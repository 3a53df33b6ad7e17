"""
estate_cms.auth.catalog

Process-wide permission catalog.

Responsibilities:
- Define every permission key the system understands (dot-namespaced, `<area>.<action>`).
- Validate role edits against the catalog.
- Group permissions by category for admin UIs.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True, slots=True)
class PermissionInfo:
    key: str
    description: str

    @property
    def category(self) -> str:
        return self.key.split(".", 1)[0]


class PermissionCatalog(Mapping[str, str]):
    """
    Immutable mapping of permission key -> human description.

    Built once at import time and shared by reference; there is no mutation API.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[str, str]) -> None:
        self._entries = MappingProxyType(dict(entries))

    def __getitem__(self, key: str) -> str:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def invalid(self, permissions: Iterable[str]) -> list[str]:
        # Preserve caller order so error messages read back the way they were submitted.
        return [p for p in permissions if p not in self._entries]

    def describe(self) -> list[PermissionInfo]:
        return [PermissionInfo(key=k, description=v) for k, v in self._entries.items()]

    def grouped(self) -> dict[str, list[PermissionInfo]]:
        groups: dict[str, list[PermissionInfo]] = {}
        for info in self.describe():
            groups.setdefault(info.category, []).append(info)
        return groups


PERMISSIONS = PermissionCatalog(
    {
        "users.view": "View Users",
        "users.create": "Create Users",
        "users.edit": "Edit Users",
        "users.delete": "Delete Users",
        "roles.view": "View Roles",
        "roles.create": "Create Roles",
        "roles.edit": "Edit Roles",
        "roles.delete": "Delete Roles",
        "agents.view": "View Agents",
        "agents.create": "Create Agents",
        "agents.edit": "Edit Agents",
        "agents.delete": "Delete Agents",
        "developers.view": "View Developers",
        "developers.create": "Create Developers",
        "developers.edit": "Edit Developers",
        "developers.delete": "Delete Developers",
        "properties.view": "View Properties",
        "properties.create": "Create Properties",
        "properties.edit": "Edit Properties",
        "properties.delete": "Delete Properties",
        "system.admin": "System Administration",
        "system.settings": "System Settings",
        "system.logs": "View System Logs",
    }
)


# --- Module Notes -----------------------------------------------------------
# The seeded ADMIN system role is granted every key in PERMISSIONS (see db.seed).
