"""Unit tests for UnionFind."""

from taxon.domain.service import UnionFind


class TestUnionFind:
    """Tests for the disjoint-set structure."""

    def test_new_items_are_their_own_representative(self):
        uf = UnionFind(["a", "b"])

        assert uf.find("a") == "a"
        assert not uf.connected("a", "b")
        assert len(uf) == 2

    def test_find_adds_unknown_items(self):
        uf: UnionFind[str] = UnionFind()

        assert "x" not in uf
        uf.find("x")
        assert "x" in uf

    def test_union_is_transitive(self):
        uf: UnionFind[str] = UnionFind()

        uf.union("a", "b")
        uf.union("b", "c")

        assert uf.connected("a", "c")
        assert not uf.connected("a", "d")

    def test_union_of_same_set_is_noop(self):
        uf: UnionFind[int] = UnionFind()
        root = uf.union(1, 2)

        assert uf.union(2, 1) == root
        assert uf.union(1, 1) == root

    def test_groups_partition_every_item(self):
        uf = UnionFind([1, 2, 3, 4, 5])
        uf.union(1, 2)
        uf.union(4, 5)
        uf.union(2, 5)

        groups = sorted(sorted(members) for members in uf.groups().values())

        assert groups == [[1, 2, 4, 5], [3]]

    def test_long_chain_compresses(self):
        uf: UnionFind[int] = UnionFind()
        for i in range(100):
            uf.union(i, i + 1)

        root = uf.find(0)

        assert all(uf.find(i) == root for i in range(101))
