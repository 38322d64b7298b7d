# propvest/storage/__init__.py
import logging

from .base import Storage
from .database import DatabaseStorage
from .memory import MemStorage

logger = logging.getLogger(__name__)

BACKENDS = ("memory", "database")


def build_storage(settings) -> Storage:
    """Instantiate the backend named by ``settings.STORAGE_BACKEND``."""
    backend = settings.STORAGE_BACKEND.lower()

    if backend == "memory":
        logger.info("Using in-memory storage")
        return MemStorage()

    if backend == "database":
        logger.info("Using database storage")
        return DatabaseStorage(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)

    raise ValueError(
        f"Unknown STORAGE_BACKEND {settings.STORAGE_BACKEND!r}; expected one of {BACKENDS}"
    )


__all__ = ["Storage", "MemStorage", "DatabaseStorage", "build_storage"]
