"""
estate_cms.api.__main__

Entrypoint for running the API via `python -m estate_cms.api`.
"""

from __future__ import annotations

import uvicorn

from estate_cms.api.app import create_app
from estate_cms.settings import get_settings


def main() -> None:
    settings = get_settings()
    app = create_app(settings=settings)

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,  # structlog
    )


if __name__ == "__main__":
    main()
