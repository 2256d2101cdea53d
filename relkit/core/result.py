"""Ok/Err values for failures the caller is expected to handle.

Git queries, publish commands and config loading return a Result; callers
branch with ``match`` or ``isinstance``:

    match repo.list_tags("*version?1.2.3"):
        case Ok(tags):
            ...
        case Err(error):
            console.error(error.message)

An unreadable descriptor file is not an expected failure and propagates as
OSError.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Never

__all__ = ["Err", "Ok", "Result"]


@dataclass(frozen=True, slots=True)
class Ok[T]:
    value: T

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: object) -> T:
        return self.value

    def map[U](self, f: Callable[[T], U]) -> Ok[U]:
        return Ok(f(self.value))

    def map_err(self, f: Callable[[Never], object]) -> Ok[T]:
        return self


@dataclass(frozen=True, slots=True)
class Err[E]:
    error: E

    def unwrap(self) -> Never:
        raise ValueError(f"called unwrap on Err: {self.error}")

    def unwrap_or[T](self, default: T) -> T:
        return default

    def map(self, f: Callable[[Never], object]) -> Err[E]:
        return self

    def map_err[F](self, f: Callable[[E], F]) -> Err[F]:
        return Err(f(self.error))


type Result[T, E] = Ok[T] | Err[E]
