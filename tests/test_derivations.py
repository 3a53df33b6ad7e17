from __future__ import annotations

from datetime import date

import pytest

from estate_cms.domain import derivations as d


@pytest.mark.parametrize(
    ("years", "level"),
    [(0, "New"), (1, "Junior"), (2, "Junior"), (3, "Senior"), (6, "Senior"), (7, "Expert")],
)
def test_agent_experience_level(years: int, level: str) -> None:
    assert d.agent_experience_level(years) == level


def test_agent_success_rate_is_capped() -> None:
    assert d.agent_success_rate(0) == 0
    assert d.agent_success_rate(10) == 20
    assert d.agent_success_rate(60) == 95


def test_developer_completion_rate_rounds_half_up() -> None:
    assert d.developer_completion_rate(0, 0) == 0
    assert d.developer_completion_rate(1, 8) == 13  # 12.5
    assert d.developer_completion_rate(7, 10) == 70


def test_developer_experience_level() -> None:
    today = date(2024, 6, 1)
    assert d.developer_experience_level(None, today) == "Emerging"
    assert d.developer_experience_level(2021, today) == "Emerging"
    assert d.developer_experience_level(2015, today) == "Established"
    assert d.developer_experience_level(2000, today) == "Veteran"
    assert d.developer_experience_level(1990, today) == "Legacy"


def test_price_helpers() -> None:
    assert d.price_per_sqm(8_500_000, 50) == 170_000
    assert d.price_per_sqm(100, 0) == 0
    assert d.price_per_sqm(5, 2) == 3  # 2.5 rounds up
    assert d.formatted_price(1234) == "₱1,234.00"
    assert d.formatted_price(1234.5, "USD") == "$1,234.50"
    assert d.formatted_price(99, "JPY") == "JPY 99.00"


def test_address_age_and_slug() -> None:
    assert d.full_address("12 Ayala Ave", "Makati", "Metro Manila", "1226") == (
        "12 Ayala Ave, Makati, Metro Manila 1226"
    )
    assert d.property_age(None) is None
    assert d.property_age(2010, date(2024, 1, 1)) == 14
    assert d.listing_slug("Sunny Loft -- 2BR!", "PRP-01") == "sunny-loft-2br-prp-01"
    assert d.full_name("Ana", "Cruz") == "Ana Cruz"
