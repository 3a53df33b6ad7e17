"""
estate_cms.domain.vocabulary

Closed value sets shared by validation, filter specs and the ORM layer.
"""

from __future__ import annotations

AGENT_SPECIALIZATIONS = frozenset(
    {"Residential", "Commercial", "Industrial", "Luxury", "Investment", "Development"}
)

DEVELOPER_SPECIALIZATIONS = frozenset(
    {
        "Residential",
        "Commercial",
        "Industrial",
        "Mixed-Use",
        "Luxury",
        "Affordable Housing",
        "Condominiums",
        "Subdivisions",
    }
)

PROPERTY_TYPES = frozenset(
    {
        "Condominium",
        "House and Lot",
        "Townhouse",
        "Commercial",
        "Industrial",
        "Lot Only",
        "Apartment",
    }
)

PROPERTY_STATUSES = frozenset(
    {
        "Available",
        "Reserved",
        "Sold",
        "Under Construction",
        "Pre-Selling",
        "Ready for Occupancy",
    }
)

FURNISHING = frozenset({"Unfurnished", "Semi-Furnished", "Fully Furnished"})

SYSTEM_ADMIN_ROLE = "ADMIN"
