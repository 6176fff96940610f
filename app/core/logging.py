# app/core/logging.py
import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_configured = False


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger once; later calls only adjust the level."""
    global _configured
    numeric = getattr(logging, str(level).upper(), logging.INFO)
    if not _configured:
        logging.basicConfig(level=numeric, format=LOG_FORMAT)
        _configured = True
    logging.getLogger().setLevel(numeric)
    # chatty third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)
