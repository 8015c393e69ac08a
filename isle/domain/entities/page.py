"""Generic page wrapper returned by listing use cases."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    items: list[T] = field(default_factory=list)
    total: int = 0
    page: int = 0
    size: int = 0

    @property
    def has_next(self) -> bool:
        return (self.page + 1) * self.size < self.total


__all__ = ["Page"]
