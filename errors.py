# errors.py
import functools
import logging
from typing import Any, Callable

from httpx import HTTPStatusError, RequestError

logger = logging.getLogger(__name__)


def degrade_on_failure(default_factory: Callable[[], Any], operation: str = None):
    """
    Wrap a coroutine so that any failure is logged and replaced by
    ``default_factory()``.

    Transport errors, unexpected payload shapes and parser errors are all
    treated the same way: the caller always gets a well-formed value back.
    """
    def decorator(func):
        name = operation or func.__name__

        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except HTTPStatusError as e:
                status_code = e.response.status_code if e.response is not None else None
                logger.error(f"HTTP error {status_code} during {name}: {e}")
            except RequestError as e:
                logger.error(f"Network error during {name}: {e}")
            except Exception as e:
                logger.exception(f"Unexpected error during {name}: {e}")
            return default_factory()

        return wrapper

    return decorator
