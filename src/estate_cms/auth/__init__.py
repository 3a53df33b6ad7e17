"""
estate_cms.auth

Authentication/authorization package.

Responsibilities:
- Permission catalog and the pure access decision engine.
- JWT credential verification and principal resolution.
- FastAPI auth dependencies (Principal + permission requirements).
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# `decisions` and `catalog` have no I/O and no FastAPI imports; keep it that way so
# they stay trivially unit-testable.
