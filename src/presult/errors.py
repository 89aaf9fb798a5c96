"""Library error types.

These are programmer-error signals raised by presult itself. Domain errors are
never represented here: they travel as the opaque payload of ``Err``.
"""

from __future__ import annotations

from presult.state import ResultState

__all__ = [
    'InvalidResultStateError',
    'MissingErrorPayloadError',
    'PResultError',
    'SourceAbandonedError',
]


class PResultError(Exception):
    """Base exception class for presult errors.

    Attributes:
        message (str): A human-readable description of the error.
        code (str | None): An optional error code for programmatic error handling.

    Example:
        ```python
        from presult import Err, PResultError

        try:
            Err('boom').unsafe_value()
        except PResultError as e:
            print(f'presult error occurred: {e}')
        ```
    """

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message: str = message
        self.code: str | None = code

    def __str__(self) -> str:
        """Return a string representation of the error."""
        if self.code:
            return f'[{self.code}] {self.message}'
        return self.message


class InvalidResultStateError(PResultError):
    """Payload of the inactive variant was requested.

    Raised only by ``unsafe_value()`` and ``unsafe_error()``. ``state`` is the
    variant that was actually active.
    """

    def __init__(self, state: ResultState) -> None:
        self.state = state
        other = ResultState.ERR if state is ResultState.OK else ResultState.OK
        super().__init__(
            f'Cannot access result {other.payload} in `{state.label}` state',
            code='invalid_state',
        )


class MissingErrorPayloadError(PResultError, ValueError):
    """``Err`` was constructed without an error payload."""

    def __init__(self) -> None:
        super().__init__('Err requires an error payload, got None', code='missing_error')


class SourceAbandonedError(PResultError):
    """The computation behind a shared AsyncResult was cancelled before it resolved.

    Raised to every awaiter other than the cancelled one, and on any later
    await, so that a task nobody cancelled never ends up cancelled itself. The
    original cancellation is the ``__cause__``.
    """

    def __init__(self) -> None:
        super().__init__(
            'AsyncResult source was cancelled before it resolved',
            code='source_abandoned',
        )
