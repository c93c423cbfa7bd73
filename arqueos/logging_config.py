# arqueos/logging_config.py
"""
Configuración de logging del servicio.
Se puede llamar varias veces: solo inicializa una vez.
"""
import logging
import sys
from typing import Optional

from arqueos.config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_logging_initialized = False


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """Configura el logger raíz 'arqueos' con salida a stdout."""
    global _logging_initialized

    logger = logging.getLogger("arqueos")
    if _logging_initialized:
        return logger

    log_level = getattr(logging, str(level or LOG_LEVEL).upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    handler.setLevel(log_level)

    logger.setLevel(log_level)
    logger.handlers = []
    logger.addHandler(handler)
    logger.propagate = False

    # Uvicorn comparte el mismo formato
    uvicorn_access = logging.getLogger("uvicorn.access")
    uvicorn_access.handlers = []
    uvicorn_access.addHandler(handler)
    uvicorn_access.propagate = False

    _logging_initialized = True
    return logger
