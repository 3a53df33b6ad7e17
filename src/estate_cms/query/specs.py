"""
estate_cms.query.specs

Filter specs for every listing endpoint.

Field names are ORM attribute names (see `db.models`); public specs never declare
`isActive` because the active predicate is forced by the listing service.
"""

from __future__ import annotations

import uuid

from estate_cms.domain.vocabulary import (
    AGENT_SPECIALIZATIONS,
    DEVELOPER_SPECIALIZATIONS,
)
from estate_cms.query.filters import (
    FilterSpec,
    boolean,
    exact,
    numeric_range,
    one_of,
    substring,
)

STAFF = FilterSpec(
    entity="staff",
    params=(
        substring("search", "first_name", "last_name", "email"),
        exact("role", "role_id", parse=uuid.UUID),
        boolean("isActive", "is_active"),
    ),
    sortable={
        "createdAt": "created_at",
        "firstName": "first_name",
        "lastName": "last_name",
        "email": "email",
        "lastLogin": "last_login",
    },
)

AGENTS = FilterSpec(
    entity="agents",
    params=(
        substring("search", "first_name", "last_name", "email", "license_number"),
        one_of("specialization", "specializations", AGENT_SPECIALIZATIONS),
        substring("city", "city"),
        numeric_range("experience", "experience"),
        boolean("isActive", "is_active"),
    ),
    sortable={
        "createdAt": "created_at",
        "firstName": "first_name",
        "lastName": "last_name",
        "experience": "experience",
        "propertiesSold": "properties_sold",
        "averageRating": "average_rating",
    },
)

PUBLIC_AGENTS = FilterSpec(
    entity="public-agents",
    params=(
        substring("search", "first_name", "last_name"),
        one_of("specialization", "specializations", AGENT_SPECIALIZATIONS),
        substring("city", "city"),
    ),
    sortable={"propertiesSold": "properties_sold", "experience": "experience"},
    default_sort="properties_sold",
    default_limit=20,
)

DEVELOPERS = FilterSpec(
    entity="developers",
    params=(
        substring("search", "name", "contact_name", "email", "registration_number"),
        one_of("specialization", "specializations", DEVELOPER_SPECIALIZATIONS),
        substring("city", "city"),
        boolean("isActive", "is_active"),
        boolean("isVerified", "is_verified"),
    ),
    sortable={
        "createdAt": "created_at",
        "name": "name",
        "establishedYear": "established_year",
        "totalProjects": "total_projects",
        "averageRating": "average_rating",
    },
)

PUBLIC_DEVELOPERS = FilterSpec(
    entity="public-developers",
    params=(
        substring("search", "name"),
        one_of("specialization", "specializations", DEVELOPER_SPECIALIZATIONS),
        boolean("isVerified", "is_verified"),
    ),
    sortable={"totalProjects": "total_projects", "name": "name"},
    default_sort="total_projects",
    default_limit=20,
)

_PROPERTY_SORTABLE = {
    "createdAt": "created_at",
    "price": "price",
    "title": "title",
    "floorArea": "floor_area",
    "bedrooms": "bedrooms",
    "views": "views",
}

PROPERTIES = FilterSpec(
    entity="properties",
    params=(
        substring(
            "search", "title", "description", "property_code", "address", "city", "province"
        ),
        substring("location", "city", "province", "address"),
        exact("status", "status"),
        exact("type", "type"),
        numeric_range("price", "price"),
        numeric_range("bedrooms", "bedrooms"),
        exact("developer", "developer_id", parse=uuid.UUID),
        exact("agent", "agent_id", parse=uuid.UUID),
        boolean("featured", "is_featured"),
        boolean("isActive", "is_active"),
    ),
    sortable=_PROPERTY_SORTABLE,
)

PUBLIC_PROPERTIES = FilterSpec(
    entity="public-properties",
    params=(
        substring("search", "title", "description", "address", "city", "province"),
        substring("location", "city", "province", "address"),
        exact("type", "type"),
        numeric_range("price", "price"),
        numeric_range("bedrooms", "bedrooms"),
        boolean("featured", "is_featured"),
    ),
    sortable=_PROPERTY_SORTABLE,
    default_limit=12,
)
