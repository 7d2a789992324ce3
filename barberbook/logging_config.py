# barberbook/logging_config.py

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_configured = False


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger once; later calls only adjust the level."""
    global _configured
    root = logging.getLogger()
    if not _configured:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        _configured = True
    root.setLevel(level.upper())
