"""
Logging del servicio. El nivel viene de Settings.log_level (LOG_LEVEL).
"""
import logging
import sys

from health_api.config import Settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# librerias que loguean cada request; solo nos interesan sus warnings
NOISY_LOGGERS = ("uvicorn.access", "httpx", "httpcore")


def setup_logging(settings: Settings) -> int:
    """Configura el root logger a stdout y devuelve el nivel numerico aplicado."""
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return level


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
