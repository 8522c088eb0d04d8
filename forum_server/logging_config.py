# forum_server/logging_config.py

import logging


LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Configure the root logger once and return the service logger.
    Unknown level names fall back to INFO.
    """
    numeric = getattr(logging, level.strip().upper(), None)
    if not isinstance(numeric, int):
        numeric = logging.INFO

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=numeric, format=LOG_FORMAT)
    else:
        root.setLevel(numeric)

    return logging.getLogger("forum_server")
