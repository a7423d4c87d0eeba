# backend/app/logging_setup.py
import logging
from logging.handlers import RotatingFileHandler
import os

LOG_DIR = os.getenv("CLIMATEIO_LOG_DIR", "logs")
LOG_LEVEL = os.getenv("CLIMATEIO_LOG_LEVEL", "INFO").upper()
os.makedirs(LOG_DIR, exist_ok=True)

def setup_logger():
    logger = logging.getLogger("climateio")
    logger.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))

    # uvicorn --reload imports the app twice
    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        "%(asctime)s - [%(levelname)s] - %(name)s - %(message)s"
    )

    handler = RotatingFileHandler(
        os.path.join(LOG_DIR, "backend.log"),
        maxBytes=5_000_000,
        backupCount=3,
        encoding="utf-8"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    stream = logging.StreamHandler()
    stream.setFormatter(formatter)
    logger.addHandler(stream)
    return logger

logger = setup_logger()
