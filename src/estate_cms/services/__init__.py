"""
estate_cms.services

Service layer (transaction + validation owner).

Responsibilities:
- Run listing queries through the filter builder and a data store.
- Enforce business rules (uniqueness, system roles, self-protection) and commit.
"""

# Package marker.
