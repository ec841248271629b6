"""Entry point for serving the Conference Central API.

Host and port are read from the environment variables ``HOST`` and
``PORT`` (defaults ``0.0.0.0`` and ``8000``); everything else is
configured through the variables documented in
``conference_central_api/app/core/config.py``.

Usage:
    python run.py
"""
import os

from uvicorn import Config, Server

from conference_central_api.app.core.config import settings
from conference_central_api.app.main import app


def main() -> None:
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    config = Config(app=app, host=host, port=port, reload=False, log_level=settings.log_level.lower())
    Server(config).run()


if __name__ == "__main__":
    try:
        main()
    except (KeyboardInterrupt, SystemExit):
        pass
