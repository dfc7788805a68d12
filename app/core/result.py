"""
Explicit success/failure container for store reads.

Store functions raise StorageError; `capture` turns that into a Result so the
service can decide, in one place, which default a failed read degrades to.
"""

from dataclasses import dataclass
from typing import Awaitable, Generic, Optional, TypeVar

from app.core.exceptions import StorageError

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    value: Optional[T] = None
    error: Optional[StorageError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap_or(self, default: T) -> T:
        """Return the value, or `default` when the read failed"""
        return self.value if self.ok else default


async def capture(awaitable: Awaitable[T]) -> Result[T]:
    try:
        return Result(value=await awaitable)
    except StorageError as e:
        return Result(error=e)
