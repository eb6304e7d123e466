"""Translation of database driver failures into domain errors."""

import functools
from collections.abc import Awaitable, Callable
from typing import ParamSpec, TypeVar

import logfire
from sqlalchemy.exc import DBAPIError, InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeout

from whistle.domain.error import StorageUnavailable

P = ParamSpec("P")
R = TypeVar("R")


def translate_storage_errors(
    operation: str,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Raise StorageUnavailable when the database cannot be reached.

    Connection loss, refused connections, pool exhaustion and timeouts become
    StorageUnavailable. Integrity and programming errors propagate unchanged.

    Args:
        operation: Name reported in the error and the log event
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            try:
                return await func(*args, **kwargs)
            except (
                OperationalError,
                InterfaceError,
                PoolTimeout,
                OSError,
                TimeoutError,
            ) as e:
                logfire.error(
                    "Storage unavailable", operation=operation, error=str(e)
                )
                raise StorageUnavailable(operation, type(e).__name__) from e
            except DBAPIError as e:
                if not e.connection_invalidated:
                    raise
                logfire.error(
                    "Storage connection invalidated", operation=operation, error=str(e)
                )
                raise StorageUnavailable(operation, "connection invalidated") from e

        return wrapper

    return decorator
