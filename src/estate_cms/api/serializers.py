"""
estate_cms.api.serializers

Response models for API payloads.

Responsibilities:
- Render ORM rows as camelCase JSON the admin UI and public site consume.
- Attach derived values (full name, formatted price, ...) from `domain.derivations`.
- Strip internal fields from public listing payloads.
- Provide the camelCase base and shared validators for request bodies.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Annotated, Any, ClassVar

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel

from estate_cms.domain import derivations


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


def dump(model: type[ApiModel], obj: Any) -> dict[str, Any]:
    return model.model_validate(obj).model_dump(mode="json", by_alias=True)


class ApiRequest(BaseModel):
    # Request bodies accept camelCase (what the UI sends) or snake_case.
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True
    )

    # Fields an update may explicitly set to null; other nulls mean "leave unchanged".
    clearable: ClassVar[frozenset[str]] = frozenset()

    def changes(self) -> dict[str, Any]:
        return {
            k: v
            for k, v in self.model_dump(exclude_unset=True).items()
            if v is not None or k in self.clearable
        }


def _check_password(value: str) -> str:
    # bcrypt only looks at the first 72 bytes.
    if len(value.encode("utf-8")) > 72:
        raise ValueError("Password must be at most 72 bytes")
    return value


Password = Annotated[str, Field(min_length=6), AfterValidator(_check_password)]


def check_vocabulary(
    values: list[str] | None, allowed: frozenset[str], label: str
) -> list[str] | None:
    if values is None:
        return None
    unknown = sorted(set(values) - allowed)
    if unknown:
        raise ValueError(f"Invalid {label}: {', '.join(unknown)}")
    return list(dict.fromkeys(values))


class RoleOut(ApiModel):
    id: uuid.UUID
    name: str
    display_name: str
    description: str
    permissions: list[str]
    is_active: bool
    is_system: bool
    created_at: datetime
    updated_at: datetime


class StaffOut(ApiModel):
    id: uuid.UUID
    first_name: str
    last_name: str
    email: str
    phone: str | None
    department: str | None
    avatar: str | None
    is_active: bool
    last_login: datetime | None
    created_at: datetime
    role: RoleOut

    @computed_field(alias="fullName")
    @property
    def full_name(self) -> str:
        return derivations.full_name(self.first_name, self.last_name)


class AgentPublicOut(ApiModel):
    id: uuid.UUID
    first_name: str
    last_name: str
    email: str
    phone: str
    specializations: list[str]
    bio: str | None
    avatar: str | None
    experience: int
    languages: list[str]
    city: str | None
    properties_sold: int
    clients_served: int
    average_rating: float

    @computed_field(alias="fullName")
    @property
    def full_name(self) -> str:
        return derivations.full_name(self.first_name, self.last_name)

    @computed_field(alias="title")
    @property
    def title(self) -> str:
        return "Property Investment Consultant"

    @computed_field(alias="experienceLevel")
    @property
    def experience_level(self) -> str:
        return derivations.agent_experience_level(self.experience)

    @computed_field(alias="successRate")
    @property
    def success_rate(self) -> int:
        return derivations.agent_success_rate(self.properties_sold)


class AgentOut(AgentPublicOut):
    license_number: str
    commission_rate: float
    total_sales_value: float
    is_active: bool
    join_date: datetime
    created_at: datetime
    updated_at: datetime


class DeveloperPublicOut(ApiModel):
    id: uuid.UUID
    name: str
    email: str
    phone: str
    website: str | None
    description: str | None
    logo: str | None
    specializations: list[str]
    city: str | None
    established_year: int | None
    total_projects: int
    completed_projects: int
    ongoing_projects: int
    average_rating: float
    is_verified: bool

    @computed_field(alias="completionRate")
    @property
    def completion_rate(self) -> int:
        return derivations.developer_completion_rate(self.completed_projects, self.total_projects)

    @computed_field(alias="experienceLevel")
    @property
    def experience_level(self) -> str:
        return derivations.developer_experience_level(self.established_year)


class DeveloperOut(DeveloperPublicOut):
    contact_name: str
    contact_position: str | None
    contact_email: str | None
    contact_phone: str | None
    registration_number: str
    license_number: str | None
    is_active: bool
    created_at: datetime
    updated_at: datetime


class DeveloperRef(ApiModel):
    id: uuid.UUID
    name: str
    logo: str | None
    email: str
    phone: str


class AgentRef(ApiModel):
    id: uuid.UUID
    first_name: str
    last_name: str
    email: str
    phone: str
    avatar: str | None


class PropertyPublicOut(ApiModel):
    id: uuid.UUID
    property_code: str
    title: str
    description: str
    type: str
    status: str
    address: str
    city: str
    province: str
    zip_code: str
    price: float
    currency: str
    floor_area: float
    lot_area: float | None
    bedrooms: int
    bathrooms: int
    parking: int
    year_built: int | None
    furnishing: str
    features: list[str]
    main_image: str | None
    slug: str
    is_featured: bool
    created_at: datetime
    developer: DeveloperRef
    agent: AgentRef | None

    @computed_field(alias="formattedPrice")
    @property
    def formatted_price(self) -> str:
        return derivations.formatted_price(self.price, self.currency)

    @computed_field(alias="pricePerSqm")
    @property
    def price_per_sqm(self) -> int:
        return derivations.price_per_sqm(self.price, self.floor_area)

    @computed_field(alias="fullAddress")
    @property
    def full_address(self) -> str:
        return derivations.full_address(self.address, self.city, self.province, self.zip_code)

    @computed_field(alias="age")
    @property
    def age(self) -> int | None:
        return derivations.property_age(self.year_built)


class PropertyOut(PropertyPublicOut):
    developer_id: uuid.UUID
    agent_id: uuid.UUID | None
    views: int
    inquiries: int
    is_active: bool
    updated_at: datetime


# --- Module Notes -----------------------------------------------------------
# Public models list their fields explicitly rather than excluding from the staff models,
# so a new internal column never leaks to the public site by default.
