"""Translate SQLAlchemy failures into domain errors.

Repositories wrap their store calls with ``translate_db_errors`` so callers
can tell "a unique constraint said no" (``UniqueViolationError``) apart from
"the store is broken" (``StorageUnavailableError``). Empty results are not
errors and never pass through here.
"""

import functools
from collections.abc import Awaitable, Callable
from typing import ParamSpec, TypeVar

import structlog
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from core.exceptions import StorageUnavailableError, UniqueViolationError
from infrastructure.database.models import PROFILES_EMAIL_CONSTRAINT, PROFILES_HANDLE_INDEX

logger = structlog.get_logger()

P = ParamSpec("P")
R = TypeVar("R")


def unique_violation_constraint(exc: IntegrityError) -> str | None:
    """Name the profile constraint behind a unique violation, if any.

    Postgres reports the constraint name, SQLite the index name or the
    ``table.column`` pair.
    """
    orig = str(exc.orig) if exc.orig else str(exc)
    if "unique" not in orig.lower():
        return None
    if PROFILES_HANDLE_INDEX in orig:
        return "handle"
    if PROFILES_EMAIL_CONSTRAINT in orig or "profiles.email" in orig:
        return "email"
    if "profiles_pkey" in orig or "profiles.id" in orig:
        return "id"
    return None


def translate_db_errors(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
    """Decorator for async repository methods."""

    @functools.wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return await func(*args, **kwargs)
        except IntegrityError as exc:
            constraint = unique_violation_constraint(exc)
            if constraint is None:
                # NOT NULL, FK, CHECK: a bug, not a race. Do not mask it.
                raise
            raise UniqueViolationError(constraint) from exc
        except (DBAPIError, PoolTimeoutError) as exc:
            logger.error(
                "storage_unavailable",
                operation=func.__qualname__,
                error=str(exc),
            )
            raise StorageUnavailableError() from exc

    return wrapper
