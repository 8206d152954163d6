"""Result Values — explicit success/failure returns for boundary calls.

Invariants:
    - A call that can fail for expected reasons returns Ok | Err, never raises for them
    - Err always carries a TaskGateError subclass (typed, loggable)

Design Decisions:
    - Frozen dataclasses with __match_args__: callers pattern-match with `match`/`case`
      instead of try/except around every remote call
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from taskgate.core.errors import TaskGateError

T = TypeVar("T")
E = TypeVar("E", bound=TaskGateError)


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err(Generic[E]):
    error: E


Result = Union[Ok[T], Err[E]]
