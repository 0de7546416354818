"""Disjoint-set structure used to cluster duplicate tags."""

from collections.abc import Hashable, Iterable
from typing import Generic, TypeVar

K = TypeVar("K", bound=Hashable)


class UnionFind(Generic[K]):
    """Disjoint-set with path compression.

    Elements are added lazily on first ``find``. ``groups`` partitions
    every element seen so far by representative.
    """

    def __init__(self, items: Iterable[K] = ()) -> None:
        self._parent: dict[K, K] = {}
        for item in items:
            self.add(item)

    def __contains__(self, item: object) -> bool:
        return item in self._parent

    def __len__(self) -> int:
        return len(self._parent)

    def add(self, item: K) -> None:
        if item not in self._parent:
            self._parent[item] = item

    def find(self, item: K) -> K:
        """Return the representative of ``item``'s set, compressing the path."""
        self.add(item)

        root = item
        while self._parent[root] != root:
            root = self._parent[root]

        # Point every node on the walked path straight at the root
        current = item
        while current != root:
            next_node = self._parent[current]
            self._parent[current] = root
            current = next_node

        return root

    def union(self, a: K, b: K) -> K:
        """Merge the sets of ``a`` and ``b``.

        Returns:
            Representative of the merged set
        """
        root_a = self.find(a)
        root_b = self.find(b)
        if root_a != root_b:
            self._parent[root_a] = root_b
        return root_b

    def connected(self, a: K, b: K) -> bool:
        return self.find(a) == self.find(b)

    def groups(self) -> dict[K, list[K]]:
        """Partition all known elements by representative.

        Members keep insertion order inside each group.
        """
        result: dict[K, list[K]] = {}
        for item in list(self._parent):
            result.setdefault(self.find(item), []).append(item)
        return result
