"""Async utilities: AsyncResult and the async capture boundary.

Examples:
    >>> from presult.async_ import AsyncResult
    >>>
    >>> async def fetch(id: int) -> Result[dict, str]:
    ...     return Ok({"id": id})
    >>>
    >>> async def main():
    ...     result = await AsyncResult(fetch(1)).map(lambda d: d["id"])
    ...     missing = await AsyncResult.err("not found").value_or(0)
"""

from presult.async_.result import AsyncResult
from presult.capture import from_awaitable

__all__ = [
    'AsyncResult',
    'from_awaitable',
]
