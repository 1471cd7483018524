"""Typed results for pipeline stages.

A stage returns ``Success(value)`` to hand its value to the next stage, or
``Failure(error)`` to stop the pipeline. Callers that prefer exceptions can
call ``unwrap()``.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from stockroom.exceptions import StockroomError

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Failure:
    error: StockroomError

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self):
        raise self.error


Outcome = Success[T] | Failure
