"""Result variant discriminant."""

from __future__ import annotations

from enum import Enum

__all__ = ['ResultState']


class ResultState(Enum):
    """Which variant of a Result is active."""

    OK = 'ok'
    ERR = 'err'

    @property
    def label(self) -> str:
        """Variant name as it appears in reprs: ``Ok`` or ``Err``."""
        return 'Ok' if self is ResultState.OK else 'Err'

    @property
    def payload(self) -> str:
        """Name of the slot this variant holds: ``value`` or ``error``."""
        return 'value' if self is ResultState.OK else 'error'
