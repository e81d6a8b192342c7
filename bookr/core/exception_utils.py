import functools
import logging
from typing import Any, Callable, Optional, Type, Union

from bookr.core.exceptions import BookrException

logger = logging.getLogger(__name__)


def raise_for_status(
    *,
    condition: bool,
    exception: Type[BookrException],
    detail: Optional[str] = None,
    **kwargs: Any,
) -> None:
    """Raise ``exception`` with ``detail`` when ``condition`` holds."""
    if condition:
        raise exception(detail, **kwargs)


def handle_exceptions(
    default_exception: Union[Type[BookrException], BookrException],
    message: Optional[str] = None,
) -> Callable:
    """
    Decorator for repository coroutines.

    Application errors pass through untouched; anything else is logged and
    re-raised as ``default_exception`` so callers only ever see
    ``BookrException`` subclasses.
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except BookrException:
                raise
            except Exception as e:
                logger.error(
                    f"Unhandled error in {func.__qualname__}: {e}", exc_info=True
                )
                if isinstance(default_exception, BookrException):
                    raise default_exception from e
                raise default_exception(message) from e

        return wrapper

    return decorator
