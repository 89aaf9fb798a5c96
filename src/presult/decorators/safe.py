"""Decorator forms of the capture boundaries.

``@safe`` is ``from_throwable`` applied to every call of a function and
``@safe_async`` is ``from_awaitable`` applied to every call of a coroutine
function. Both are built on ``wrapt`` so that names, docstrings, signatures
and method binding of the wrapped callable survive.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, overload

import wrapt

from presult._config import _validate_capture
from presult.capture import capture_awaitable, from_throwable
from presult.result import Err, Ok

__all__ = ['safe', 'safe_async']

type ExceptionClasses = tuple[type[BaseException], ...]


@overload
def safe[**P, R](func: Callable[P, R], /) -> Callable[P, Ok[R] | Err[Exception]]: ...


@overload
def safe[**P, R](
    func: None = None,
    /,
    *,
    exceptions: ExceptionClasses | None = None,
) -> Callable[[Callable[P, R]], Callable[P, Ok[R] | Err[BaseException]]]: ...


def safe(func: Callable[..., Any] | None = None, /, *, exceptions: ExceptionClasses | None = None) -> Any:
    """Make a function return ``Ok(result)`` or ``Err(exception)`` instead of raising.

    Usable bare (``@safe``) or with an explicit set of exception classes
    (``@safe(exceptions=(KeyError,))``). Without ``exceptions`` the classes
    configured through ``presult.init`` apply. Anything not listed propagates,
    and cancellation propagates even when it is listed.

    Example:
        ```python
        @safe
        def parse_port(raw: str) -> int:
            return int(raw)

        parse_port('8080')  # Ok(value=8080)
        parse_port('http')  # Err(error=ValueError(...))
        ```
    """
    if exceptions is not None:
        _validate_capture(exceptions)

    @wrapt.decorator
    def guard(
        wrapped: Callable[..., Any],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Ok[Any] | Err[BaseException]:
        return from_throwable(lambda: wrapped(*args, **kwargs), exceptions=exceptions)

    return guard if func is None else guard(func)


@overload
def safe_async[**P, R](
    func: Callable[P, Awaitable[R]], /
) -> Callable[P, Awaitable[Ok[R] | Err[Exception]]]: ...


@overload
def safe_async[**P, R](
    func: None = None,
    /,
    *,
    exceptions: ExceptionClasses | None = None,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[Ok[R] | Err[BaseException]]]]: ...


def safe_async(
    func: Callable[..., Awaitable[Any]] | None = None, /, *, exceptions: ExceptionClasses | None = None
) -> Any:
    """Async counterpart of ``safe`` for coroutine functions.

    The decorated function still returns a coroutine; awaiting it yields the
    Result. Cancellation of the awaiting task is re-raised, never wrapped.
    """
    if exceptions is not None:
        _validate_capture(exceptions)

    @wrapt.decorator
    async def guard(
        wrapped: Callable[..., Awaitable[Any]],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Ok[Any] | Err[BaseException]:
        return await capture_awaitable(wrapped(*args, **kwargs), exceptions=exceptions)

    return guard if func is None else guard(func)
