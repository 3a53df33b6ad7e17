"""
estate_cms.db.models

Persistence schema for the CMS.

Responsibilities:
- Define ORM models for staff accounts and their roles, agents, developers and
  property listings.

Array-valued attributes (specializations, languages, permissions, features) are JSON
columns; `db.predicates` knows how to test membership in them.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import JSON, ForeignKey, Index, String, Text, Uuid as SAUuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from estate_cms.db.base import Base, Timestamped, utcnow


class Role(Timestamped, Base):
    __tablename__ = "roles"

    # Stored upper-cased; RoleEquals requirements compare against this exact value.
    name: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    display_name: Mapped[str] = mapped_column(String(128), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    permissions: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    is_active: Mapped[bool] = mapped_column(nullable=False, default=True)
    # System roles can be neither edited nor deleted.
    is_system: Mapped[bool] = mapped_column(nullable=False, default=False)


class StaffUser(Timestamped, Base):
    __tablename__ = "users"

    first_name: Mapped[str] = mapped_column(String(128), nullable=False)
    last_name: Mapped[str] = mapped_column(String(128), nullable=False)
    email: Mapped[str] = mapped_column(String(256), nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(String(128), nullable=False)
    role_id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), ForeignKey("roles.id"), nullable=False, index=True
    )
    phone: Mapped[str | None] = mapped_column(String(64), nullable=True)
    department: Mapped[str | None] = mapped_column(String(128), nullable=True)
    avatar: Mapped[str | None] = mapped_column(String(512), nullable=True)
    is_active: Mapped[bool] = mapped_column(nullable=False, default=True, index=True)
    last_login: Mapped[datetime | None] = mapped_column(nullable=True)

    role: Mapped[Role] = relationship(lazy="joined")


class Agent(Timestamped, Base):
    __tablename__ = "agents"

    first_name: Mapped[str] = mapped_column(String(128), nullable=False)
    last_name: Mapped[str] = mapped_column(String(128), nullable=False)
    email: Mapped[str] = mapped_column(String(256), nullable=False, unique=True)
    phone: Mapped[str] = mapped_column(String(64), nullable=False)
    license_number: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    specializations: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    avatar: Mapped[str | None] = mapped_column(String(512), nullable=True)
    experience: Mapped[int] = mapped_column(nullable=False, default=0)
    languages: Mapped[list[str]] = mapped_column(
        JSON, nullable=False, default=lambda: ["English"]
    )
    city: Mapped[str | None] = mapped_column(String(128), nullable=True)
    commission_rate: Mapped[float] = mapped_column(nullable=False, default=3.0)
    properties_sold: Mapped[int] = mapped_column(nullable=False, default=0)
    total_sales_value: Mapped[float] = mapped_column(nullable=False, default=0.0)
    clients_served: Mapped[int] = mapped_column(nullable=False, default=0)
    average_rating: Mapped[float] = mapped_column(nullable=False, default=0.0)
    is_active: Mapped[bool] = mapped_column(nullable=False, default=True, index=True)
    join_date: Mapped[datetime] = mapped_column(nullable=False, default=utcnow)


class Developer(Timestamped, Base):
    __tablename__ = "developers"

    name: Mapped[str] = mapped_column(String(256), nullable=False)
    email: Mapped[str] = mapped_column(String(256), nullable=False, unique=True)
    phone: Mapped[str] = mapped_column(String(64), nullable=False)
    website: Mapped[str | None] = mapped_column(String(512), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    logo: Mapped[str | None] = mapped_column(String(512), nullable=True)
    contact_name: Mapped[str] = mapped_column(String(256), nullable=False)
    contact_position: Mapped[str | None] = mapped_column(String(128), nullable=True)
    contact_email: Mapped[str | None] = mapped_column(String(256), nullable=True)
    contact_phone: Mapped[str | None] = mapped_column(String(64), nullable=True)
    registration_number: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    license_number: Mapped[str | None] = mapped_column(String(64), nullable=True)
    established_year: Mapped[int | None] = mapped_column(nullable=True)
    specializations: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    city: Mapped[str | None] = mapped_column(String(128), nullable=True)
    total_projects: Mapped[int] = mapped_column(nullable=False, default=0)
    completed_projects: Mapped[int] = mapped_column(nullable=False, default=0)
    ongoing_projects: Mapped[int] = mapped_column(nullable=False, default=0)
    average_rating: Mapped[float] = mapped_column(nullable=False, default=0.0)
    is_active: Mapped[bool] = mapped_column(nullable=False, default=True, index=True)
    is_verified: Mapped[bool] = mapped_column(nullable=False, default=False)


class Property(Timestamped, Base):
    __tablename__ = "properties"

    property_code: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    title: Mapped[str] = mapped_column(String(256), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    status: Mapped[str] = mapped_column(String(64), nullable=False, default="Available")

    address: Mapped[str] = mapped_column(String(512), nullable=False)
    city: Mapped[str] = mapped_column(String(128), nullable=False)
    province: Mapped[str] = mapped_column(String(128), nullable=False)
    zip_code: Mapped[str] = mapped_column(String(32), nullable=False)

    price: Mapped[float] = mapped_column(nullable=False, index=True)
    currency: Mapped[str] = mapped_column(String(8), nullable=False, default="PHP")

    floor_area: Mapped[float] = mapped_column(nullable=False)
    lot_area: Mapped[float | None] = mapped_column(nullable=True)
    bedrooms: Mapped[int] = mapped_column(nullable=False, default=0)
    bathrooms: Mapped[int] = mapped_column(nullable=False, default=0)
    parking: Mapped[int] = mapped_column(nullable=False, default=0)
    year_built: Mapped[int | None] = mapped_column(nullable=True)
    furnishing: Mapped[str] = mapped_column(String(32), nullable=False, default="Unfurnished")
    features: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    main_image: Mapped[str | None] = mapped_column(String(512), nullable=True)

    developer_id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), ForeignKey("developers.id"), nullable=False, index=True
    )
    agent_id: Mapped[uuid.UUID | None] = mapped_column(
        SAUuid(as_uuid=True), ForeignKey("agents.id"), nullable=True, index=True
    )

    slug: Mapped[str] = mapped_column(String(512), nullable=False, unique=True)
    views: Mapped[int] = mapped_column(nullable=False, default=0)
    inquiries: Mapped[int] = mapped_column(nullable=False, default=0)

    is_active: Mapped[bool] = mapped_column(nullable=False, default=True)
    is_featured: Mapped[bool] = mapped_column(nullable=False, default=False)

    developer: Mapped[Developer] = relationship(lazy="joined")
    agent: Mapped[Agent | None] = relationship(lazy="joined")

    __table_args__ = (Index("ix_properties_active_created", "is_active", "created_at"),)


# --- Module Notes -----------------------------------------------------------
# JSON list columns must be reassigned (not mutated in place) for SQLAlchemy to notice
# the change; services always assign fresh lists.
