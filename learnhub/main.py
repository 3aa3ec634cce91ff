# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Server entry point.

Runs the API with uvicorn using the ``API_`` settings:

    $ learnhub
    $ API_PORT=9000 API_RELOAD=true learnhub
"""

import uvicorn

from learnhub.core.config import Settings, get_settings

APP_FACTORY = "learnhub.api.app:create_app"


def run(settings: Settings | None = None) -> None:
    """Serve the application factory on the configured host and port."""
    settings = settings or get_settings()
    uvicorn.run(
        APP_FACTORY,
        factory=True,
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
