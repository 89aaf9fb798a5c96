"""Result type: Ok[T] | Err[E] for explicit error handling.

A ``Result`` is either ``Ok(value)`` or ``Err(error)``. Combinators derive new
Results without raising, so a caller that sticks to ``match``, ``then`` and
``map`` handles both outcomes explicitly.

Example:
    ```python
    from presult import Err, Ok, Result

    def parse_port(raw: str) -> Result[int, str]:
        if not raw.isdigit():
            return Err(f'not a number: {raw!r}')
        return Ok(int(raw))

    parse_port('8080').map(lambda p: p + 1)  # Ok(value=8081)
    parse_port('http').map(lambda p: p + 1)  # Err(error="not a number: 'http'")

    parse_port('80').match(
        lambda port: f'listening on {port}',
        lambda error: f'bad config: {error}',
    )
    ```
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, NoReturn, TypeIs

import msgspec

from presult.errors import InvalidResultStateError, MissingErrorPayloadError
from presult.state import ResultState

if TYPE_CHECKING:
    from presult.async_.result import AsyncResult

__all__ = ['Err', 'Ok', 'Result', 'ResultState', 'err', 'ok', 'to_result']


async def _resolve[R](value: R | Awaitable[R]) -> R:
    if inspect.isawaitable(value):
        return await value
    return value


class Ok[T](msgspec.Struct, frozen=True, gc=False):
    """Success variant of Result containing a value of type T.

    Examples:
        >>> Ok(42).map(lambda x: x * 2)
        Ok(value=84)
        >>> Ok(42).then(lambda x: Err('too big') if x > 10 else Ok(x))
        Err(error='too big')
    """

    value: T

    @property
    def state(self) -> ResultState:
        return ResultState.OK

    def is_ok(self) -> TypeIs[Ok[T]]:
        """Return True since this is Ok.

        This method provides type narrowing - after checking is_ok(),
        the type checker knows the result is Ok[T].
        """
        return True

    def is_err(self) -> TypeIs[Err[object]]:
        """Return False since this is Ok."""
        return False

    def match[R](self, on_ok: Callable[[T], R], on_err: Callable[[Any], R]) -> R:  # noqa: ARG002
        """Call ``on_ok`` with the value and return its result.

        ``on_err`` is never called for Ok.
        """
        return on_ok(self.value)

    def then[U, E](self, f: Callable[[T], Ok[U] | Err[E]]) -> Ok[U] | Err[E]:
        """Apply a function that returns a Result to the contained value.

        Also known as bind or flatmap.

        Args:
            f: Function that takes T and returns Result[U, E].

        Returns:
            The Result returned by f.
        """
        return f(self.value)

    def then_err(self, _f: Callable[[Any], Any]) -> Ok[T]:
        """Return self unchanged since this is Ok."""
        return self

    def map[U](self, f: Callable[[T], U]) -> Ok[U]:
        """Apply a function to the contained value.

        Args:
            f: Function to apply to the Ok value.

        Returns:
            Ok containing the result of applying f to the value.
        """
        return self.then(lambda v: Ok(f(v)))  # type: ignore[return-value]

    def map_err(self, _f: Callable[[Any], Any]) -> Ok[T]:
        """Return self unchanged since this is Ok."""
        return self

    def value_or(self, fallback: T) -> T:  # noqa: ARG002
        """Return the contained value, ignoring the fallback."""
        return self.value

    def unsafe_value(self) -> T:
        """Return the contained value."""
        return self.value

    def unsafe_error(self) -> NoReturn:
        """Raise, since an Ok holds no error.

        Raises:
            InvalidResultStateError: Always, naming the `Ok` state.
        """
        raise InvalidResultStateError(ResultState.OK)

    def try_pick_value(self) -> tuple[bool, T, None]:
        """Look up the value without raising.

        Returns:
            ``(True, value, None)``.
        """
        return True, self.value, None

    def try_pick_error(self) -> tuple[bool, None, T]:
        """Look up the error without raising.

        Returns:
            ``(False, None, value)``.
        """
        return False, None, self.value

    def then_async[U, E](self, f: Callable[[T], Awaitable[Ok[U] | Err[E]]]) -> AsyncResult[U, E]:
        """Chain a continuation that produces a Result asynchronously.

        f is not called until the returned AsyncResult is first awaited.

        Args:
            f: Function that takes T and returns an awaitable of Result[U, E]
                (a coroutine, a future or another AsyncResult).

        Returns:
            AsyncResult that resolves to whatever f's awaitable produces.
        """
        from presult.async_.result import AsyncResult

        return AsyncResult._chain(lambda: f(self.value))

    def then_err_async(self, _f: Callable[[Any], Awaitable[Any]]) -> AsyncResult[T, Any]:
        """Return an already resolved AsyncResult holding self."""
        from presult.async_.result import AsyncResult

        return AsyncResult.from_result(self)

    def map_async[U](self, f: Callable[[T], Awaitable[U]]) -> AsyncResult[U, Any]:
        """Transform the contained value with an async function.

        Returns:
            AsyncResult resolving to ``Ok(await f(value))``.
        """
        from presult.async_.result import AsyncResult

        async def _mapped() -> Ok[U]:
            return Ok(await f(self.value))

        return AsyncResult._chain(_mapped)

    def map_err_async(self, _f: Callable[[Any], Awaitable[Any]]) -> AsyncResult[T, Any]:
        """Return an already resolved AsyncResult holding self."""
        from presult.async_.result import AsyncResult

        return AsyncResult.from_result(self)

    async def match_async[R](
        self,
        on_ok: Callable[[T], R | Awaitable[R]],
        on_err: Callable[[Any], R | Awaitable[R]],  # noqa: ARG002
    ) -> R:
        """Call ``on_ok`` with the value, awaiting its result if it is awaitable."""
        return await _resolve(on_ok(self.value))


class Err[E](msgspec.Struct, frozen=True, gc=False):
    """Error variant of Result containing an error of type E.

    The error payload is opaque to the library; any object except None is
    accepted.

    Examples:
        >>> Err('boom').map(lambda x: x * 2)
        Err(error='boom')
        >>> Err('boom').value_or(0)
        0
    """

    error: E

    def __post_init__(self) -> None:
        if self.error is None:
            raise MissingErrorPayloadError()

    @property
    def state(self) -> ResultState:
        return ResultState.ERR

    def is_ok(self) -> TypeIs[Ok[object]]:
        """Return False since this is Err."""
        return False

    def is_err(self) -> TypeIs[Err[E]]:
        """Return True since this is Err.

        This method provides type narrowing - after checking is_err(),
        the type checker knows the result is Err[E].
        """
        return True

    def match[R](self, on_ok: Callable[[Any], R], on_err: Callable[[E], R]) -> R:  # noqa: ARG002
        """Call ``on_err`` with the error and return its result.

        ``on_ok`` is never called for Err.
        """
        return on_err(self.error)

    def then(self, _f: Callable[[Any], Any]) -> Err[E]:
        """Return self unchanged since this is Err."""
        return self

    def then_err[T, F](self, f: Callable[[E], Ok[T] | Err[F]]) -> Ok[T] | Err[F]:
        """Apply a recovery function to the error.

        Args:
            f: Function that takes the error and returns a new Result.

        Returns:
            The Result returned by f.
        """
        return f(self.error)

    def map(self, _f: Callable[[Any], Any]) -> Err[E]:
        """Return self unchanged since this is Err."""
        return self

    def map_err[F](self, f: Callable[[E], F]) -> Err[F]:
        """Apply a function to the contained error.

        Args:
            f: Function to apply to the error value.

        Returns:
            Err containing the transformed error.
        """
        return self.then_err(lambda e: Err(f(e)))  # type: ignore[return-value]

    def value_or[T](self, fallback: T) -> T:
        """Return the fallback since this is Err."""
        return fallback

    def unsafe_value(self) -> NoReturn:
        """Raise, since an Err holds no value.

        Raises:
            InvalidResultStateError: Always, naming the `Err` state.
        """
        raise InvalidResultStateError(ResultState.ERR)

    def unsafe_error(self) -> E:
        """Return the contained error."""
        return self.error

    def try_pick_value(self) -> tuple[bool, None, E]:
        """Look up the value without raising.

        Returns:
            ``(False, None, error)``.
        """
        return False, None, self.error

    def try_pick_error(self) -> tuple[bool, E, None]:
        """Look up the error without raising.

        Returns:
            ``(True, error, None)``.
        """
        return True, self.error, None

    def then_async(self, _f: Callable[[Any], Awaitable[Any]]) -> AsyncResult[Any, E]:
        """Return an already resolved AsyncResult holding self."""
        from presult.async_.result import AsyncResult

        return AsyncResult.from_result(self)

    def then_err_async[T, F](self, f: Callable[[E], Awaitable[Ok[T] | Err[F]]]) -> AsyncResult[T, F]:
        """Chain an async recovery function on the error.

        Returns:
            AsyncResult that resolves to whatever f's awaitable produces.
        """
        from presult.async_.result import AsyncResult

        return AsyncResult._chain(lambda: f(self.error))

    def map_async(self, _f: Callable[[Any], Awaitable[Any]]) -> AsyncResult[Any, E]:
        """Return an already resolved AsyncResult holding self."""
        from presult.async_.result import AsyncResult

        return AsyncResult.from_result(self)

    def map_err_async[F](self, f: Callable[[E], Awaitable[F]]) -> AsyncResult[Any, F]:
        """Transform the contained error with an async function.

        Returns:
            AsyncResult resolving to ``Err(await f(error))``.
        """
        from presult.async_.result import AsyncResult

        async def _mapped() -> Err[F]:
            return Err(await f(self.error))

        return AsyncResult._chain(_mapped)

    async def match_async[R](
        self,
        on_ok: Callable[[Any], R | Awaitable[R]],  # noqa: ARG002
        on_err: Callable[[E], R | Awaitable[R]],
    ) -> R:
        """Call ``on_err`` with the error, awaiting its result if it is awaitable."""
        return await _resolve(on_err(self.error))


type Result[T, E = Exception] = Ok[T] | Err[E]


def ok[T](value: T) -> Ok[T]:
    """Wrap a value in Ok."""
    return Ok(value)


def err[E](error: E) -> Err[E]:
    """Wrap an error in Err.

    Raises:
        MissingErrorPayloadError: If error is None.
    """
    return Err(error)


def to_result(obj: Any) -> Ok[Any] | Err[Any]:
    """Coerce a bare value or exception into a Result.

    Existing Results pass through unchanged, exception instances become Err,
    and every other object becomes Ok.

    Examples:
        >>> to_result(3)
        Ok(value=3)
        >>> to_result(KeyError('id'))
        Err(error=KeyError('id'))
        >>> to_result(Err('x'))
        Err(error='x')
    """
    if isinstance(obj, Ok | Err):
        return obj
    if isinstance(obj, BaseException):
        return Err(obj)
    return Ok(obj)
