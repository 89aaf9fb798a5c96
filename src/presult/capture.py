"""Capture boundaries: bridges from raise-based code into the Result algebra.

``from_throwable`` runs a callable and ``from_awaitable`` awaits a pending
value; both turn a raised exception into ``Err`` and a normal outcome into
``Ok``. Cancellation and process-level signals are never converted: they
propagate so that the surrounding task or process can unwind.
"""

from __future__ import annotations

import asyncio
import concurrent.futures
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

import anyio
import structlog

from presult._config import _validate_capture, get_config
from presult._logging import get_logger
from presult.result import Err, Ok

if TYPE_CHECKING:
    from presult.async_.result import AsyncResult

__all__ = [
    'from_awaitable',
    'from_throwable',
    'is_cancellation',
    'must_propagate',
]

_CANCELLATION: tuple[type[BaseException], ...] = (
    asyncio.CancelledError,
    concurrent.futures.CancelledError,
)
_PROCESS_SIGNALS: tuple[type[BaseException], ...] = (
    KeyboardInterrupt,
    SystemExit,
    GeneratorExit,
)


def is_cancellation(exc: BaseException) -> bool:
    """Return True if exc signals cancellation rather than failure.

    Covers asyncio and concurrent.futures cancellation everywhere, and the
    running anyio backend's cancel exception (e.g. ``trio.Cancelled``) when
    called inside an event loop.
    """
    if isinstance(exc, _CANCELLATION):
        return True
    try:
        return isinstance(exc, anyio.get_cancelled_exc_class())
    except RuntimeError:
        # no async library is running in this thread
        return False


def must_propagate(exc: BaseException) -> bool:
    """Return True if exc must never be turned into an Err."""
    return is_cancellation(exc) or isinstance(exc, _PROCESS_SIGNALS)


def _capture_classes(exceptions: tuple[type[BaseException], ...] | None) -> tuple[type[BaseException], ...]:
    if exceptions is None:
        return get_config().capture
    return _validate_capture(exceptions)


def _log_capture(exc: BaseException, boundary: str) -> None:
    # unconfigured structlog would print straight to stdout
    if get_config().log_captures and structlog.is_configured():
        get_logger(__name__).debug(
            'exception_captured',
            error_type=type(exc).__name__,
            boundary=boundary,
        )


def from_throwable[T](
    fn: Callable[[], T],
    *,
    exceptions: tuple[type[BaseException], ...] | None = None,
) -> Ok[T] | Err[BaseException]:
    """Run fn and capture a raised exception as Err.

    Only exceptions of the configured capture classes (``Exception`` by
    default) are captured; anything else, and cancellation in any case,
    propagates unchanged.

    Args:
        fn: Zero-argument callable to run.
        exceptions: Non-empty tuple of exception classes to capture instead of
            the configured ones.

    Returns:
        Ok(fn()) if fn returns normally, Err(exc) if it raises.

    Raises:
        TypeError: If exceptions is given but is not a non-empty tuple of
            exception classes.

    Example:
        ```python
        from_throwable(lambda: int('42'))    # Ok(value=42)
        from_throwable(lambda: int('nope'))  # Err(error=ValueError(...))
        ```
    """
    capture = _capture_classes(exceptions)
    try:
        return Ok(fn())
    except capture as exc:
        if must_propagate(exc):
            raise
        _log_capture(exc, 'sync')
        return Err(exc)


async def capture_awaitable[T](
    awaitable: Awaitable[T],
    *,
    exceptions: tuple[type[BaseException], ...] | None = None,
) -> Ok[T] | Err[BaseException]:
    """Await a pending value, capturing a raised exception as Err.

    This is the coroutine behind ``from_awaitable`` and ``@safe_async``.
    ``exceptions`` overrides the configured capture classes. Cancellation
    propagates.
    """
    capture = _capture_classes(exceptions)
    try:
        value = await awaitable
    except capture as exc:
        if must_propagate(exc):
            raise
        _log_capture(exc, 'async')
        return Err(exc)
    return Ok(value)


def from_awaitable[T](awaitable: Awaitable[T]) -> AsyncResult[T, BaseException]:
    """Lift a pending plain value into an AsyncResult.

    Nothing is awaited until the returned AsyncResult is awaited.

    Args:
        awaitable: Coroutine, future or other awaitable producing T.

    Returns:
        AsyncResult resolving to Ok(value), or Err(exc) if the awaitable raises.

    Example:
        ```python
        async def fetch() -> bytes: ...

        result = await from_awaitable(fetch()).map(len)
        ```
    """
    from presult.async_.result import AsyncResult

    return AsyncResult.from_awaitable(awaitable)
