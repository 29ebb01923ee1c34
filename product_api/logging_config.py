"""
Logging for the product API.

The API writes its own access line per request on ``product_api.access``
(see the middleware in ``main.py``); ``main()`` starts uvicorn with its own
access log off so each request is logged once.  Store and route modules log
through ``logging.getLogger(__name__)`` and end up on the root handlers.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
ACCESS_LOGGER = "product_api.access"


def _handlers(logfile: Optional[str]):
    yield logging.StreamHandler()
    if logfile:
        yield logging.FileHandler(Path(logfile).resolve(), encoding="utf-8")


def setup_logging(level: str = "INFO", logfile: Optional[str] = None, access_log: bool = True) -> None:
    """Attach console/file handlers to the root logger.

    Handlers are only added when the root logger has none yet (pytest and
    repeated ``create_app`` calls hit this path), but the access log switch
    is applied every time.
    """
    logging.getLogger(ACCESS_LOGGER).disabled = not access_log

    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in _handlers(logfile):
        handler.setFormatter(formatter)
        root.addHandler(handler)
