"""
estate_cms.auth.models

Auth domain models.

Responsibilities:
- Define the authenticated identity type (`Principal`) injected into endpoints.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Authenticated caller identity, resolved once per request and never persisted.
    """

    identity: str
    display_role: str
    permissions: frozenset[str]
    is_active: bool = True

    def has(self, permission: str) -> bool:
        return permission in self.permissions


# --- Module Notes -----------------------------------------------------------
# Keep this model minimal; it is used across API, services and the decision engine.
