"""
estate_cms.db

Persistence package (SQLAlchemy async).

Responsibilities:
- Provide ORM models, engine/session setup, predicate compilation and repositories.
- Seed system roles on startup.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Repositories implement the data-store contract (`find`/`count`) over compiled
# predicates; swapping the backend means replacing `db.predicates` and `repositories`.
