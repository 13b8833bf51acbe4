"""An array stored as a list of fixed-size segments."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, Iterator, TypeVar

T = TypeVar("T")

DEFAULT_ALLOCATION_SIZE = 10


@dataclass
class Segment(Generic[T]):
    """One block of storage: its size, its items and the index of its first item."""

    size: int
    items: list[T] = field(default_factory=list)
    start_index: int = -1

    @property
    def content(self) -> int:
        return len(self.items)

    @property
    def is_full(self) -> bool:
        return len(self.items) >= self.size


class SegmentedArray(Generic[T]):
    """An array that grows by adding whole segments instead of reallocating.

    Each segment holds up to ``allocation_size`` items. A segment's
    ``start_index`` is the array index of its first item, or -1 when the
    segment is empty (the first segment always starts at 0).
    """

    def __init__(self, allocation_size: int = DEFAULT_ALLOCATION_SIZE) -> None:
        if allocation_size < 1:
            raise ValueError("allocation_size must be positive")
        self.allocation_size = allocation_size
        self.segments: list[Segment[T]] = []
        self._length = 0

    @property
    def capacity(self) -> int:
        """Total number of items the current segments can hold."""
        return sum(segment.size for segment in self.segments)

    def _update_indexes(self) -> None:
        last = -1
        for segment in self.segments:
            if segment.content == 0:
                segment.start_index = -1
            else:
                segment.start_index = last + 1
                last += segment.content
        if self.segments:
            self.segments[0].start_index = 0

    def extend(self) -> None:
        """Add one empty segment of ``allocation_size`` slots."""
        self.segments.append(Segment(self.allocation_size))
        self._update_indexes()

    def append(self, value: T) -> int:
        """Store ``value`` at the end and return its index."""
        if self._length >= self.capacity:
            self.extend()
        target = next(segment for segment in self.segments if not segment.is_full)
        target.items.append(value)
        index = self._length
        self._length += 1
        self._update_indexes()
        return index

    def get(self, index: int) -> T:
        """Return the item at ``index``."""
        if not 0 <= index < self._length:
            raise IndexError(f"index {index} outside length {self._length}")
        for segment in self.segments:
            if segment.content and segment.start_index <= index < (
                segment.start_index + segment.content
            ):
                return segment.items[index - segment.start_index]
        raise IndexError(f"index {index} not found in any segment")

    def __iter__(self) -> Iterator[T]:
        for segment in self.segments:
            yield from segment.items

    def __len__(self) -> int:
        return self._length

    def copy(self) -> SegmentedArray[T]:
        """Return an independent array with the same segments and items."""
        clone: SegmentedArray[T] = SegmentedArray(self.allocation_size)
        clone.segments = [
            Segment(s.size, list(s.items), s.start_index) for s in self.segments
        ]
        clone._length = self._length
        return clone