"""
estate_cms.db.seed

Startup seeding.

Responsibilities:
- Ensure the ADMIN system role exists and carries every catalog permission.
- Create the bootstrap administrator when configured.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from estate_cms.auth.catalog import PERMISSIONS
from estate_cms.auth.passwords import hash_password
from estate_cms.db.models import Role, StaffUser
from estate_cms.db.repositories.roles import RoleRepo
from estate_cms.db.repositories.users import UserRepo
from estate_cms.domain.vocabulary import SYSTEM_ADMIN_ROLE
from estate_cms.observability.logging import get_logger

log = get_logger(__name__)


async def seed_system_roles(session: AsyncSession) -> Role:
    roles = RoleRepo(session)
    admin = await roles.find_by_name(SYSTEM_ADMIN_ROLE)
    if admin is None:
        admin = await roles.add(
            Role(
                name=SYSTEM_ADMIN_ROLE,
                display_name="Administrator",
                description="Full access to every part of the CMS",
                permissions=list(PERMISSIONS),
                is_system=True,
                is_active=True,
            )
        )
        log.info("seed.role_created", role=admin.name)
    elif set(admin.permissions) != set(PERMISSIONS):
        # Catalog grew since the role was seeded.
        admin.permissions = list(PERMISSIONS)
        admin.touch()
        log.info("seed.role_synced", role=admin.name)
    return admin


async def ensure_bootstrap_admin(
    session: AsyncSession, *, role: Role, email: str, password: str
) -> None:
    users = UserRepo(session)
    if await users.find_by_email(email) is not None:
        return
    await users.add(
        StaffUser(
            first_name="System",
            last_name="Administrator",
            email=email.lower(),
            password_hash=hash_password(password),
            role_id=role.id,
            is_active=True,
        )
    )
    log.info("seed.admin_created", email=email.lower())
