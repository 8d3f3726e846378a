"""NonEmptyGroup container."""

from collections.abc import Callable, Iterable, Iterator
from typing import Any, Generic, TypeVar

T = TypeVar('T')


class NonEmptyGroup(Generic[T]):
    """An ordered sequence that holds at least one element.

    The constructor requires a first element, so an instance can never be empty.
    Use from_list() when the source is a list that might be empty.

    Example:
        group = NonEmptyGroup(a)
        group.append(b)
        pair = NonEmptyGroup.of_pair(a, b)
        maybe = NonEmptyGroup.from_list(items)  # None if items is empty
    """

    def __init__(self, first: T, *rest: T):
        self._items: list[T] = [first, *rest]

    @classmethod
    def of_pair(cls, first: T, second: T) -> "NonEmptyGroup[T]":
        return cls(first, second)

    @classmethod
    def from_list(cls, items: Iterable[T]) -> "NonEmptyGroup[T] | None":
        """Build a group from an iterable.

        Returns:
            The group, or None if items is empty
        """
        items = list(items)
        if not items:
            return None
        return cls(*items)

    @property
    def first(self) -> T:
        return self._items[0]

    @property
    def items(self) -> tuple[T, ...]:
        """Read-only snapshot of the elements."""
        return tuple(self._items)

    def append(self, value: T) -> None:
        self._items.append(value)

    def sort(self, *, key: Callable[[T], Any] | None = None, reverse: bool = False) -> None:
        """Sort in place (stable)."""
        self._items.sort(key=key, reverse=reverse)  # type: ignore[arg-type]

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> T:
        return self._items[index]

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NonEmptyGroup):
            return NotImplemented
        return self._items == other._items

    def __repr__(self) -> str:
        return f"NonEmptyGroup({', '.join(repr(item) for item in self._items)})"
