"""
estate_cms.domain.derivations

Pure derived values for agents, developers and properties.

Everything here takes plain values and returns plain values; response models call these
when serializing, so the ORM classes carry no computed behavior of their own.
"""

from __future__ import annotations

import math
import re
from datetime import date

_CURRENCY_SYMBOLS = {"PHP": "₱", "USD": "$", "EUR": "€"}
_SLUG_STRIP = re.compile(r"[^a-z0-9]+")


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def full_name(first_name: str, last_name: str) -> str:
    return f"{first_name} {last_name}".strip()


def agent_experience_level(years: int) -> str:
    if years < 1:
        return "New"
    if years < 3:
        return "Junior"
    if years < 7:
        return "Senior"
    return "Expert"


def agent_success_rate(properties_sold: int) -> int:
    # Placeholder until lead conversion is tracked: two points per sale, capped at 95.
    return min(95, properties_sold * 2)


def developer_completion_rate(completed: int, total: int) -> int:
    if total <= 0:
        return 0
    return _round_half_up(completed / total * 100)


def developer_experience_level(established_year: int | None, today: date | None = None) -> str:
    if established_year is None:
        return "Emerging"
    age = (today or date.today()).year - established_year
    if age < 5:
        return "Emerging"
    if age < 15:
        return "Established"
    if age < 30:
        return "Veteran"
    return "Legacy"


def price_per_sqm(price: float, floor_area: float) -> int:
    if floor_area > 0:
        return _round_half_up(price / floor_area)
    return 0


def formatted_price(price: float, currency: str = "PHP") -> str:
    symbol = _CURRENCY_SYMBOLS.get(currency)
    if symbol is None:
        return f"{currency} {price:,.2f}"
    return f"{symbol}{price:,.2f}"


def full_address(address: str, city: str, province: str, zip_code: str) -> str:
    return f"{address}, {city}, {province} {zip_code}".strip()


def property_age(year_built: int | None, today: date | None = None) -> int | None:
    if not year_built:
        return None
    return (today or date.today()).year - year_built


def listing_slug(title: str, property_code: str) -> str:
    base = _SLUG_STRIP.sub("-", title.lower()).strip("-")
    return f"{base}-{property_code.lower()}"
