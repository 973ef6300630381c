from __future__ import annotations

import random
from typing import Generic, Iterator, List, Optional, Sequence, TypeVar


T = TypeVar("T")


class RandomBag(Generic[T]):
    """Draws items without replacement, starting a new round once all are used.

    Every window of ``len(items)`` consecutive draws that starts on a round
    boundary contains each item exactly once. The draw is a partial
    Fisher-Yates shuffle: picked items are swapped behind the ``nums_left``
    boundary, so the same list is reshuffled in place on the next round.
    """

    def __init__(self, items: Sequence[T], rng: Optional[random.Random] = None,
                 seed: Optional[int] = None) -> None:
        if len(items) == 0:
            raise ValueError("RandomBag needs at least one item")
        self._items: List[T] = list(items)
        self.rng = rng if rng is not None else random.Random(seed)
        self.nums_left = len(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def next(self) -> T:
        if self.nums_left <= 0:
            self.nums_left = len(self._items)
        index = self.rng.randrange(self.nums_left)
        result = self._items[index]
        last = self.nums_left - 1
        self._items[index], self._items[last] = self._items[last], self._items[index]
        self.nums_left -= 1
        return result

    def __iter__(self) -> Iterator[T]:
        return self

    def __next__(self) -> T:
        return self.next()
