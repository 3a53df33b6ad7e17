"""
estate_cms.query

List-query building.

Responsibilities:
- Storage-agnostic predicate trees (`predicates`).
- Declarative per-entity filter specs and the builder that applies them (`filters`, `specs`).
- Page/limit coercion and pagination metadata (`pagination`).
"""

# Package marker.
