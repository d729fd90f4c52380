"""
Values tagged with the position they were matched at
"""
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Spanned(Generic[T]):
    """
    A decoded value plus the character span of its match

    ``start`` and ``end`` index the text given to ``decode``, even when the
    value came from a nested child pattern.

    Example:
        @dataclass
        class Play:
            title: Spanned[str]
            year: Spanned[int]
    """
    value: T
    start: int
    end: int

    def into_inner(self) -> T:
        return self.value
