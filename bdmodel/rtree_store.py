"""Binary save and load of R-tree contents.

The file starts with a header of seven little-endian 32-bit integers: a
file id spelling ``RTRE``, the data size, the number of dimensions, the
coordinate size, the real-number size and the maximum and minimum branch
counts. Each node follows as its level and branch count, and then for
every branch the low and high corners as doubles and either the child
node or the data item as a signed 64-bit integer.
"""

from __future__ import annotations

import struct
from os import PathLike
from pathlib import Path
from typing import Any, BinaryIO

from .rtree import RTree, _Branch, _Node
from .rtree_rect import Rect

__all__ = ["save", "load"]

_FILE_ID = ord("R") | (ord("T") << 8) | (ord("R") << 16) | (ord("E") << 24)
_DATA_SIZE = struct.calcsize("<q")
_ELEM_SIZE = struct.calcsize("<d")
_ELEM_REAL_SIZE = struct.calcsize("<d")

_INT = struct.Struct("<i")
_DATA = struct.Struct("<q")


def _header(tree: RTree) -> tuple[int, ...]:
    return (
        _FILE_ID,
        _DATA_SIZE,
        tree.dims,
        _ELEM_SIZE,
        _ELEM_REAL_SIZE,
        tree.max_nodes,
        tree.min_nodes,
    )


def _encode_data(data: Any) -> bytes:
    if not isinstance(data, int) or isinstance(data, bool):
        raise TypeError(f"only integer data can be saved, got {type(data).__name__}")
    try:
        return _DATA.pack(data)
    except struct.error as exc:
        raise OverflowError(f"data {data} does not fit in 64 bits") from exc


def _write_node(node: _Node, out: BinaryIO, coords: struct.Struct) -> None:
    out.write(_INT.pack(node.level))
    out.write(_INT.pack(len(node.branches)))
    for branch in node.branches:
        out.write(coords.pack(*branch.rect.low))
        out.write(coords.pack(*branch.rect.high))
        if node.is_leaf:
            out.write(_encode_data(branch.data))
        else:
            _write_node(branch.child, out, coords)


def save(tree: RTree, path: "str | PathLike[str]") -> None:
    """Write the tree's header and nodes to ``path``."""
    coords = struct.Struct(f"<{tree.dims}d")
    with Path(path).open("wb") as out:
        out.write(struct.pack("<7i", *_header(tree)))
        _write_node(tree._root, out, coords)


class _Reader:
    """Reads fixed-size records from a binary stream."""

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream

    def unpack(self, layout: struct.Struct) -> tuple[Any, ...]:
        chunk = self._stream.read(layout.size)
        if len(chunk) != layout.size:
            raise ValueError("unexpected end of R-tree file")
        return layout.unpack(chunk)


def _read_node(reader: _Reader, coords: struct.Struct) -> _Node:
    (level,) = reader.unpack(_INT)
    (count,) = reader.unpack(_INT)
    if level < 0 or count < 0:
        raise ValueError("corrupt R-tree node header")
    node = _Node(level=level)
    for _ in range(count):
        rect = Rect(reader.unpack(coords), reader.unpack(coords))
        if node.is_leaf:
            (data,) = reader.unpack(_DATA)
            node.branches.append(_Branch(rect, data=data))
        else:
            node.branches.append(_Branch(rect, child=_read_node(reader, coords)))
    return node


def load(tree: RTree, path: "str | PathLike[str]") -> None:
    """Replace the tree's contents with those saved at ``path``.

    The tree is emptied first; it stays empty when the file is missing,
    truncated or was written for a tree of a different configuration.
    """
    tree.remove_all()
    coords = struct.Struct(f"<{tree.dims}d")
    with Path(path).open("rb") as stream:
        reader = _Reader(stream)
        header = reader.unpack(struct.Struct("<7i"))
        if header != _header(tree):
            raise ValueError("R-tree file header is not compatible with this tree")
        root = _read_node(reader, coords)
    tree._root = root