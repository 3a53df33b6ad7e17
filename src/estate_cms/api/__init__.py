"""
estate_cms.api

API package for the estate CMS service.

Responsibilities:
- FastAPI app factory and router modules.
- API-layer dependency wiring, request/response models and error handlers.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer should remain thin: request validation + auth + delegation to services.
