import struct

import pytest

from bdmodel.rtree import RTree
from bdmodel.rtree_store import load, save


def _filled_tree(count=30, dims=2, max_nodes=4):
    tree = RTree(dims, max_nodes)
    for i in range(count):
        low = [i * 3] * dims
        high = [i * 3 + 2] * dims
        tree.insert(low, high, i)
    return tree


def test_file_starts_with_magic(tmp_path):
    path = tmp_path / "tree.bin"
    save(_filled_tree(), path)
    assert path.read_bytes()[:4] == b"RTRE"


def test_header_records_configuration(tmp_path):
    path = tmp_path / "tree.bin"
    tree = RTree(3, 6, 2)
    tree.insert([0, 0, 0], [1, 1, 1], 7)
    save(tree, path)
    header = struct.unpack("<7i", path.read_bytes()[:28])
    assert header[2] == tree.dims
    assert header[5] == tree.max_nodes
    assert header[6] == tree.min_nodes


def test_round_trip_preserves_contents_and_order(tmp_path):
    path = tmp_path / "tree.bin"
    original = _filled_tree()
    save(original, path)
    restored = RTree(2, 4)
    load(restored, path)
    assert len(restored) == len(original)
    assert list(restored) == list(original)


def test_round_trip_preserves_search(tmp_path):
    path = tmp_path / "tree.bin"
    original = _filled_tree()
    save(original, path)
    restored = RTree(2, 4)
    load(restored, path)
    expected = sorted(original.iter_overlapping([10, 10], [40, 40]))
    assert sorted(restored.iter_overlapping([10, 10], [40, 40])) == expected
    assert restored.search([10, 10], [40, 40]) == len(expected)


def test_restored_tree_accepts_updates(tmp_path):
    path = tmp_path / "tree.bin"
    save(_filled_tree(), path)
    restored = RTree(2, 4)
    load(restored, path)
    assert restored.remove([0, 0], [2, 2], 0)
    restored.insert([500, 500], [501, 501], 99)
    assert 0 not in list(restored)
    assert list(restored.iter_overlapping([500, 500], [500, 500])) == [99]


def test_empty_tree_round_trip(tmp_path):
    path = tmp_path / "tree.bin"
    save(RTree(2, 4), path)
    restored = _filled_tree()
    load(restored, path)
    assert len(restored) == 0
    assert list(restored) == []


def test_load_replaces_existing_entries(tmp_path):
    path = tmp_path / "tree.bin"
    small = RTree(2, 4)
    small.insert([0, 0], [1, 1], 42)
    save(small, path)
    target = _filled_tree()
    load(target, path)
    assert list(target) == [42]


def test_incompatible_header_raises_and_leaves_tree_empty(tmp_path):
    path = tmp_path / "tree.bin"
    save(_filled_tree(dims=2), path)
    other = _filled_tree(dims=3)
    with pytest.raises(ValueError):
        load(other, path)
    assert len(other) == 0


def test_different_node_capacity_is_incompatible(tmp_path):
    path = tmp_path / "tree.bin"
    save(_filled_tree(max_nodes=4), path)
    other = RTree(2, 8)
    with pytest.raises(ValueError):
        load(other, path)
    assert len(other) == 0


def test_truncated_file_raises(tmp_path):
    path = tmp_path / "tree.bin"
    save(_filled_tree(), path)
    data = path.read_bytes()
    path.write_bytes(data[: len(data) - 5])
    tree = RTree(2, 4)
    with pytest.raises(ValueError):
        load(tree, path)
    assert len(tree) == 0


def test_missing_file_raises_and_clears(tmp_path):
    tree = _filled_tree()
    with pytest.raises(FileNotFoundError):
        load(tree, tmp_path / "absent.bin")
    assert len(tree) == 0


def test_non_integer_data_cannot_be_saved(tmp_path):
    tree = RTree(2, 4)
    tree.insert([0, 0], [1, 1], "label")
    with pytest.raises(TypeError):
        save(tree, tmp_path / "tree.bin")


def test_oversized_data_cannot_be_saved(tmp_path):
    tree = RTree(2, 4)
    tree.insert([0, 0], [1, 1], 2**70)
    with pytest.raises(OverflowError):
        save(tree, tmp_path / "tree.bin")


def test_fractional_coordinates_survive(tmp_path):
    path = tmp_path / "tree.bin"
    tree = RTree(2, 4)
    tree.insert([0.25, 0.5], [0.75, 1.5], 1)
    tree.insert([5.5, 5.5], [6.5, 6.5], 2)
    save(tree, path)
    restored = RTree(2, 4)
    load(restored, path)
    assert list(restored.iter_overlapping([0.7, 1.4], [0.7, 1.4])) == [1]
    assert list(restored.iter_overlapping([0.8, 1.6], [0.9, 1.7])) == []