"""AsyncResult: Result combinators over a pending computation.

An AsyncResult wraps one pending computation that resolves to a Result and
exposes the same combinators as Result. Each combinator returns a new
AsyncResult immediately; nothing runs until the chain is awaited.

Example:
    ```python
    async def load_order(order_id: int) -> Result[Order, str]: ...

    summary = await (
        AsyncResult(load_order(7))
        .then(check_stock)
        .map_async(price_order)
        .map(render_summary)
    )
    ```
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Generator
from types import TracebackType
from typing import Any, Self

import anyio

from presult.capture import capture_awaitable, is_cancellation
from presult.errors import SourceAbandonedError
from presult.result import Err, Ok, Result

__all__ = ['AsyncResult']


class _SharedResult[R]:
    """Resolve a computation once and broadcast its outcome to every awaiter.

    The source is a zero-argument factory; its awaitable is only created when
    the first awaiter drives it, so a chain that is never awaited leaves no
    coroutine behind. Later and concurrent awaiters wait on an event and read
    the stored outcome. A raise from the source is re-raised to all of them;
    a cancellation of the driving awaiter reaches only that awaiter, everyone
    else gets SourceAbandonedError.
    """

    __slots__ = ('_done', '_event', '_factory', '_failure', '_failure_tb', '_value')

    def __init__(self, factory: Callable[[], Awaitable[R]] | None) -> None:
        self._factory = factory
        self._event: anyio.Event | None = None
        self._done = factory is None
        self._failure: BaseException | None = None
        self._failure_tb: TracebackType | None = None
        self._value: Any = None

    @classmethod
    def resolved(cls, value: R) -> Self:
        shared = cls(None)
        shared._value = value
        return shared

    async def get(self) -> R:
        if self._factory is not None:
            factory, self._factory = self._factory, None
            return await self._drive(factory)
        if self._event is not None:
            await self._event.wait()
        return self._outcome()

    async def _drive(self, factory: Callable[[], Awaitable[R]]) -> R:
        self._event = event = anyio.Event()
        try:
            self._value = await factory()
        except BaseException as exc:
            self._failure = exc
            self._failure_tb = exc.__traceback__
            raise
        finally:
            self._done = True
            event.set()
        return self._value

    def _outcome(self) -> R:
        failure = self._failure
        if failure is None:
            return self._value
        if is_cancellation(failure):
            raise SourceAbandonedError() from failure
        # reset to the stored traceback so repeated raises do not grow it
        raise failure.with_traceback(self._failure_tb)


class AsyncResult[T, E]:
    """A Result that is not known yet.

    AsyncResult owns a single pending computation producing Result[T, E].
    Combinators (``then``, ``map``, ``map_err``, ``then_err`` and their
    ``*_async`` forms) return new AsyncResult instances whose steps run in
    declaration order once awaited; terminal operations (``match``,
    ``value_or``, ``unsafe_value``, ...) return coroutines.

    The computation is resolved at most once: an AsyncResult can be awaited
    repeatedly and branched into several chains, and every awaiter observes the
    same Result.

    Constructing an AsyncResult from a raw awaitable is the capture boundary:
    if the awaitable raises an exception of the configured capture classes,
    the AsyncResult resolves to Err(exc). Cancellation is never captured: the
    cancelled awaiter sees its own cancellation, other awaiters of the same
    computation get SourceAbandonedError.

    Example:
        ```python
        async def get_data() -> Result[int, str]:
            return Ok(42)

        async def main():
            result = await AsyncResult(get_data()).map(lambda x: x * 2)
            assert result == Ok(84)

        anyio.run(main)
        ```
    """

    __slots__ = ('_shared',)

    _shared: _SharedResult[Result[T, E]]

    def __init__(self, awaitable: Awaitable[Result[T, E]]) -> None:
        """Wrap an awaitable of a Result.

        A raise from ``awaitable`` of one of the configured capture classes
        resolves to Err(exc) instead of reaching the awaiter.
        """
        self._shared = _SharedResult(lambda: _flatten_captured(awaitable))

    @classmethod
    def _of(cls, shared: _SharedResult[Result[T, E]]) -> AsyncResult[T, E]:
        instance = cls.__new__(cls)
        instance._shared = shared
        return instance

    @classmethod
    def _chain(cls, step: Callable[[], Awaitable[Result[T, E]]]) -> AsyncResult[T, E]:
        """Wrap a continuation without a capture boundary; step runs on first await."""
        return cls._of(_SharedResult(step))

    def __await__(self) -> Generator[Any, Any, Result[T, E]]:
        """Resolve the computation and return its Result.

        Every await returns the same Result; the source runs at most once.
        """
        return self._shared.get().__await__()

    # --- Construction ---

    @classmethod
    def ok(cls, value: T) -> AsyncResult[T, E]:
        """Create an already resolved AsyncResult containing Ok(value)."""
        return cls._of(_SharedResult.resolved(Ok(value)))

    @classmethod
    def err(cls, error: E) -> AsyncResult[T, E]:
        """Create an already resolved AsyncResult containing Err(error).

        Raises:
            MissingErrorPayloadError: If error is None.
        """
        return cls._of(_SharedResult.resolved(Err(error)))

    @classmethod
    def from_result(cls, result: Result[T, E]) -> AsyncResult[T, E]:
        """Create an already resolved AsyncResult from a synchronous Result."""
        return cls._of(_SharedResult.resolved(result))

    @classmethod
    def from_awaitable(cls, awaitable: Awaitable[T]) -> AsyncResult[T, BaseException]:
        """Lift an awaitable of a plain value into an AsyncResult.

        Args:
            awaitable: An awaitable producing T; it may fail by raising.

        Returns:
            AsyncResult resolving to Ok(value), or Err(exc) for a captured raise.
        """
        return cls._of(_SharedResult(lambda: capture_awaitable(awaitable)))  # type: ignore[arg-type]

    # --- Queries ---

    async def is_ok(self) -> bool:
        """Resolve and report whether the Result is Ok."""
        return (await self).is_ok()

    async def is_err(self) -> bool:
        """Resolve and report whether the Result is Err."""
        return (await self).is_err()

    # --- Combinators ---

    def then[U](self, f: Callable[[T], Result[U, E]]) -> AsyncResult[U, E]:
        """Bind a Result-returning function; Err skips it.

        Example:
            ```python
            def non_negative(x: int) -> Result[int, str]:
                return Ok(x) if x >= 0 else Err('negative')

            await AsyncResult.ok(-2).then(non_negative)  # Err(error='negative')
            ```
        """

        async def _chained() -> Result[U, E]:
            return (await self).then(f)

        return AsyncResult._chain(_chained)

    def then_async[U](self, f: Callable[[T], Awaitable[Result[U, E]]]) -> AsyncResult[U, E]:
        """Bind a function returning an awaitable Result.

        ``f`` may return a coroutine, a future or another AsyncResult. On Err
        it is never called, so no coroutine is created.
        """

        async def _chained() -> Result[U, E]:
            return await (await self).then_async(f)

        return AsyncResult._chain(_chained)

    def then_err[F](self, f: Callable[[E], Result[T, F]]) -> AsyncResult[T, F]:
        """Error-side then: Err(e) becomes f(e), Ok passes through."""

        async def _recovered() -> Result[T, F]:
            return (await self).then_err(f)

        return AsyncResult._chain(_recovered)

    def then_err_async[F](self, f: Callable[[E], Awaitable[Result[T, F]]]) -> AsyncResult[T, F]:
        """Error-side then_async; f runs only for Err."""

        async def _recovered() -> Result[T, F]:
            return await (await self).then_err_async(f)

        return AsyncResult._chain(_recovered)

    def map[U](self, f: Callable[[T], U]) -> AsyncResult[U, E]:
        """Transform the Ok value."""

        async def _mapped() -> Result[U, E]:
            return (await self).map(f)

        return AsyncResult._chain(_mapped)

    def map_async[U](self, f: Callable[[T], Awaitable[U]]) -> AsyncResult[U, E]:
        """Transform the Ok value with a coroutine function.

        Example:
            ```python
            async def fetch_body(url: str) -> bytes: ...

            size = await AsyncResult.ok(url).map_async(fetch_body).map(len)
            ```
        """

        async def _mapped() -> Result[U, E]:
            return await (await self).map_async(f)

        return AsyncResult._chain(_mapped)

    def map_err[F](self, f: Callable[[E], F]) -> AsyncResult[T, F]:
        """Transform the error."""

        async def _mapped() -> Result[T, F]:
            return (await self).map_err(f)

        return AsyncResult._chain(_mapped)

    def map_err_async[F](self, f: Callable[[E], Awaitable[F]]) -> AsyncResult[T, F]:
        """Transform the error with a coroutine function; Ok skips it."""

        async def _mapped() -> Result[T, F]:
            return await (await self).map_err_async(f)

        return AsyncResult._chain(_mapped)

    # --- Terminal operations ---

    async def match[R](self, on_ok: Callable[[T], R], on_err: Callable[[E], R]) -> R:
        """Resolve and call exactly one of on_ok / on_err with the payload."""
        return (await self).match(on_ok, on_err)

    async def match_async[R](
        self,
        on_ok: Callable[[T], R | Awaitable[R]],
        on_err: Callable[[E], R | Awaitable[R]],
    ) -> R:
        """Like match, but either branch may return an awaitable, which is awaited."""
        return await (await self).match_async(on_ok, on_err)

    async def value_or(self, fallback: T) -> T:
        """Resolve and return the Ok value or the fallback."""
        return (await self).value_or(fallback)

    async def unsafe_value(self) -> T:
        """Resolve and return the Ok value.

        Raises:
            InvalidResultStateError: If the Result is Err.
        """
        return (await self).unsafe_value()

    async def unsafe_error(self) -> E:
        """Resolve and return the Err error.

        Raises:
            InvalidResultStateError: If the Result is Ok.
        """
        return (await self).unsafe_error()

    async def try_pick_value(self) -> tuple[bool, T | None, E | None]:
        """Resolve and look up the value; see Result.try_pick_value."""
        return (await self).try_pick_value()

    async def try_pick_error(self) -> tuple[bool, E | None, T | None]:
        """Resolve and look up the error; see Result.try_pick_error."""
        return (await self).try_pick_error()

    def __repr__(self) -> str:
        shared = self._shared
        if shared._done and shared._failure is None:
            return f'AsyncResult({shared._value!r})'
        return 'AsyncResult(<pending>)'


async def _flatten_captured[T, E](awaitable: Awaitable[Result[T, E]]) -> Result[T, Any]:
    """Await a source of Results, converting a captured raise into Err."""
    captured = await capture_awaitable(awaitable)
    if isinstance(captured, Err):
        return captured
    return captured.value

