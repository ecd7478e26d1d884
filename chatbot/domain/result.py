"""
Tagged success/failure values returned by the core operations.

Validation, lookup, store and classification failures are expected outcomes
of the training-data and message pipeline, so they travel as values and the
HTTP layer maps each ErrorKind to a status code.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Kinds of failure the core can report."""
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    STORE = "store"
    CLASSIFICATION = "classification"


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    kind: ErrorKind
    message: str = ""

    @property
    def ok(self) -> bool:
        return False


Result = Union[Ok[T], Err]
