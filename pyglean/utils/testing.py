"""The test-only gate for operations that must not run in production."""
import functools
import inspect
import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

from ..core.context import Context

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def _context_testing() -> bool:
    return Context.testing


def test_only(is_testing: Optional[Callable[[], bool]] = None) -> Callable[[F], Callable[..., Awaitable[Any]]]:
    """Builds a decorator that turns an operation into a no-op outside tests.

    The decorated operation always becomes a coroutine function, whether it
    was declared with `async def` or is a plain function returning an
    awaitable (such as a Future) or a plain value. Awaiting a call resolves
    to the operation's result, with awaitable results awaited first.

    The testing flag is read on every call, never when decorating, so
    flipping it between calls takes effect immediately. While it is False
    the operation is not invoked and the call resolves to None.

    Args:
        is_testing (Optional[Callable[[], bool]]): Returns the current value
            of the testing flag. Defaults to reading `Context.testing`.

    Returns:
        Callable[[F], Callable[..., Awaitable[Any]]]: The decorator.
    """
    read_flag = is_testing or _context_testing

    def decorator(func: F) -> Callable[..., Awaitable[Any]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            if not read_flag():
                logger.debug(f"Skipping test-only operation {func.__qualname__}.")
                return None
            result = func(*args, **kwargs)
            if inspect.isawaitable(result):
                result = await result
            return result

        return wrapper

    return decorator


# Keep test collectors from mistaking the decorator factory for a test.
test_only.__test__ = False  # type: ignore[attr-defined]
