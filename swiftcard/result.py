"""
Tagged success/failure values returned by collaborators.

Replaces success/failure listener pairs: callers get one value back and
branch on ``result.success``.
"""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    @property
    def success(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Failure:
    error: Exception

    @property
    def success(self) -> bool:
        return False

    @property
    def message(self) -> str:
        return str(self.error)

    def unwrap(self) -> Any:
        raise self.error


Result = Union[Success[T], Failure]
