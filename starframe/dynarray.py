"""A growable array with explicit capacity, grown in fixed-size steps."""

from __future__ import annotations

from typing import Callable, Generic, Iterator, TypeVar

T = TypeVar("T")

INT16_MAX = 0x7FFF
DEFAULT_ALLOCATION_SIZE = 10


class CapacityError(Exception):
    """Raised when an array would grow beyond its maximum capacity."""


class DynArray(Generic[T]):
    """An array whose capacity grows by ``allocation_size`` slots when full.

    Slots beyond the used length but within the capacity exist and hold
    values produced by ``factory``; they can be read and written with
    :meth:`get` and :meth:`set`. Iteration covers only the used elements.
    """

    def __init__(
        self,
        factory: Callable[[], T] = int,  # type: ignore[assignment]
        allocation_size: int = DEFAULT_ALLOCATION_SIZE,
    ) -> None:
        if allocation_size < 1:
            raise ValueError("allocation_size must be positive")
        self._factory = factory
        self.allocation_size = allocation_size
        self._slots: list[T] = []
        self._used = 0

    @property
    def capacity(self) -> int:
        """Number of slots currently allocated."""
        return len(self._slots)

    def _resize(self, new_capacity: int) -> None:
        if new_capacity > INT16_MAX:
            raise CapacityError(f"capacity {new_capacity} exceeds {INT16_MAX}")
        grown = new_capacity - len(self._slots)
        if grown >= 0:
            self._slots.extend(self._factory() for _ in range(grown))
        else:
            del self._slots[new_capacity:]
            self._used = min(self._used, new_capacity)

    def _autoextend(self) -> None:
        self._resize(self.capacity + self.allocation_size)

    def extend_by(self, added: int) -> None:
        """Grow the capacity by ``added`` slots."""
        if added < 0:
            raise ValueError("added must not be negative")
        if added >= INT16_MAX - self.capacity:
            raise CapacityError(
                f"cannot add {added} slots to capacity {self.capacity}"
            )
        self._resize(self.capacity + added)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self.capacity:
            raise IndexError(f"index {index} outside capacity {self.capacity}")

    def get(self, index: int) -> T:
        """Return the value in slot ``index`` (any slot within capacity)."""
        self._check_index(index)
        return self._slots[index]

    def set(self, index: int, value: T) -> None:
        """Store ``value`` in slot ``index`` (any slot within capacity)."""
        self._check_index(index)
        self._slots[index] = value

    def append(self, value: T) -> int:
        """Store ``value`` after the last used element and return its index."""
        if self._used >= self.capacity:
            self._autoextend()
        index = self._used
        self._slots[index] = value
        self._used += 1
        return index

    def exec_on_all(self, function: Callable[[T], object]) -> None:
        """Call ``function`` on every used element in order."""
        for item in self:
            function(item)

    def __iter__(self) -> Iterator[T]:
        return iter(self._slots[: self._used])

    def __reversed__(self) -> Iterator[T]:
        return reversed(self._slots[: self._used])

    def __len__(self) -> int:
        return self._used

    def copy(self) -> DynArray[T]:
        """Return an independent array with the same slots and length."""
        clone: DynArray[T] = DynArray(self._factory, self.allocation_size)
        clone._slots = list(self._slots)
        clone._used = self._used
        return clone