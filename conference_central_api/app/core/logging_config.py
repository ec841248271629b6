"""
Logging configuration for the Conference Central API.

``setup_logging`` reads the level and the optional log file from
``Settings`` and attaches handlers to the root logger once.  With
``DEBUG`` enabled the level is forced to ``DEBUG`` and uvicorn's
per‑request access log is kept; otherwise access lines are only
emitted at ``WARNING`` and above so that profile and conference
events are not drowned out.
"""

import logging
from pathlib import Path
from typing import List

from .config import Settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _build_handlers(config: Settings) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if config.log_file:
        log_path = Path(config.log_file).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))
    return handlers


def setup_logging(config: Settings) -> None:
    """Configure the root logger from ``config``.

    Does nothing if the root logger already has handlers, e.g. when
    ``create_app`` runs twice or pytest installed its own capture.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    level_name = "DEBUG" if config.debug else config.log_level.upper()
    root.setLevel(getattr(logging, level_name, logging.INFO))

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in _build_handlers(config):
        handler.setFormatter(formatter)
        root.addHandler(handler)

    if not config.debug:
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
