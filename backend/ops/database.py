"""
Storage connection bootstrap.

At startup the process tries to reach the database a fixed number of
times with a fixed delay. When every attempt fails it logs an error and
keeps serving without storage (requests that touch the database fail
with 500 and /health reports "unhealthy").
"""
import logging
import threading
import time
from typing import Callable, Optional

from django.conf import settings
from django.db import DatabaseError, connections

logger = logging.getLogger(__name__)

STORAGE_VARIANTS = {
    "postgresql": "PostgreSQL",
    "sqlite": "SQLite",
}


def storage_variant(alias: str = "default") -> str:
    """Human name of the configured database backend."""
    return STORAGE_VARIANTS.get(connections[alias].vendor, "Unknown")


def connect_with_retry(
    alias: str = "default",
    attempts: Optional[int] = None,
    delay: Optional[float] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> bool:
    """
    Establish the database connection, retrying on failure.

    Returns True once connected, False after the last failed attempt.
    """
    attempts = attempts if attempts is not None else settings.DB_CONNECT_ATTEMPTS
    delay = delay if delay is not None else settings.DB_CONNECT_DELAY

    for attempt in range(1, attempts + 1):
        try:
            connections[alias].ensure_connection()
        except DatabaseError as exc:
            logger.warning(
                "Database connection attempt %s/%s failed: %s",
                attempt, attempts, exc,
                extra={"alias": alias},
            )
            if attempt == attempts:
                logger.error(
                    "Failed to connect to database after all attempts. "
                    "Server will continue running without database.",
                    extra={"alias": alias},
                )
                return False
            sleep(delay)
        else:
            logger.info(
                "Database connected successfully (%s)", storage_variant(alias),
                extra={"alias": alias},
            )
            return True
    return False


def start_background_connect(alias: str = "default") -> threading.Thread:
    """Run connect_with_retry without blocking server startup."""
    thread = threading.Thread(
        target=connect_with_retry,
        kwargs={"alias": alias},
        name="db-connect",
        daemon=True,
    )
    thread.start()
    return thread
