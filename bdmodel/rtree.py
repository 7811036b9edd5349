"""An n-dimensional R-tree of bounding boxes with attached data."""

from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Sequence

from .rtree_rect import Rect

__all__ = ["RTree"]

_MAX_DIMS = 20


@dataclass
class _Node:
    """A tree node; level 0 is a leaf whose branches carry data."""

    level: int
    branches: list["_Branch"] = field(default_factory=list)

    @property
    def is_leaf(self) -> bool:
        return self.level == 0


@dataclass
class _Branch:
    """A bounding box with either a child node or a data item."""

    rect: Rect
    child: _Node | None = None
    data: Any = None


def _cover(node: _Node) -> Rect:
    rect = node.branches[0].rect
    for branch in node.branches[1:]:
        rect = rect.combine(branch.rect)
    return rect


def _calc_volume(rect: Rect) -> float:
    return rect.spherical_volume()


class RTree:
    """A bounding-box tree mapping boxes to data items.

    Data items are matched by equality when removed. Boxes whose edges touch
    count as overlapping.
    """

    def __init__(self, dims: int = 2, max_nodes: int = 8, min_nodes: int | None = None) -> None:
        if min_nodes is None:
            min_nodes = max_nodes // 2
        if not 1 <= dims <= _MAX_DIMS:
            raise ValueError(f"dimensions must be between 1 and {_MAX_DIMS}, got {dims}")
        if min_nodes <= 0:
            raise ValueError("min_nodes must be positive")
        if max_nodes <= min_nodes:
            raise ValueError("max_nodes must exceed min_nodes")
        self.dims = dims
        self.max_nodes = max_nodes
        self.min_nodes = min_nodes
        self._root = _Node(level=0)

    # -- helpers ---------------------------------------------------------

    def _rect(self, low: Sequence[float], high: Sequence[float]) -> Rect:
        rect = Rect(tuple(low), tuple(high))
        if rect.dims != self.dims:
            raise ValueError(f"box has {rect.dims} dimensions, tree has {self.dims}")
        return rect

    def _pick_branch(self, rect: Rect, node: _Node) -> int:
        best = 0
        best_incr = -1.0
        best_area = 0.0
        first = True
        for index, branch in enumerate(node.branches):
            area = _calc_volume(branch.rect)
            increase = _calc_volume(rect.combine(branch.rect)) - area
            if increase < best_incr or first:
                best, best_area, best_incr = index, area, increase
                first = False
            elif increase == best_incr and area < best_area:
                best, best_area, best_incr = index, area, increase
        return best

    def _add_branch(self, branch: _Branch, node: _Node) -> _Node | None:
        if len(node.branches) < self.max_nodes:
            node.branches.append(branch)
            return None
        return self._split_node(node, branch)

    def _split_node(self, node: _Node, branch: _Branch) -> _Node:
        buffer = [*node.branches, branch]
        cover = buffer[0].rect
        for item in buffer[1:]:
            cover = cover.combine(item.rect)
        partition = self._choose_partition(buffer, _calc_volume(cover))
        node.branches = [b for b, group in zip(buffer, partition) if group == 0]
        return _Node(level=node.level, branches=[b for b, group in zip(buffer, partition) if group == 1])

    def _choose_partition(self, buffer: list[_Branch], cover_area: float) -> list[int]:
        total = len(buffer)
        min_fill = self.min_nodes
        partition = [-1] * total
        count = [0, 0]
        cover: list[Rect | None] = [None, None]
        area = [0.0, 0.0]

        def classify(index: int, group: int) -> None:
            partition[index] = group
            rect = buffer[index].rect
            cover[group] = rect if count[group] == 0 else rect.combine(cover[group])
            area[group] = _calc_volume(cover[group])
            count[group] += 1

        areas = [_calc_volume(b.rect) for b in buffer]
        worst = -cover_area - 1
        seed0 = seed1 = 0
        for a, b in itertools.combinations(range(total), 2):
            waste = _calc_volume(buffer[a].rect.combine(buffer[b].rect)) - areas[a] - areas[b]
            if waste >= worst:
                worst, seed0, seed1 = waste, a, b
        classify(seed0, 0)
        classify(seed1, 1)

        while (
            count[0] + count[1] < total
            and count[0] < total - min_fill
            and count[1] < total - min_fill
        ):
            biggest = -1.0
            chosen = 0
            better = 0
            for index, item in enumerate(buffer):
                if partition[index] != -1:
                    continue
                growth0 = _calc_volume(item.rect.combine(cover[0])) - area[0]
                growth1 = _calc_volume(item.rect.combine(cover[1])) - area[1]
                diff = growth1 - growth0
                if diff >= 0:
                    group = 0
                else:
                    group = 1
                    diff = -diff
                if diff > biggest:
                    biggest, chosen, better = diff, index, group
                elif diff == biggest and count[group] < count[better]:
                    chosen, better = index, group
            classify(chosen, better)

        if count[0] + count[1] < total:
            group = 1 if count[0] >= total - min_fill else 0
            for index in range(total):
                if partition[index] == -1:
                    classify(index, group)
        return partition

    def _insert_rec(self, branch: _Branch, node: _Node, level: int) -> _Node | None:
        if node.level > level:
            index = self._pick_branch(branch.rect, node)
            target = node.branches[index]
            split = self._insert_rec(branch, target.child, level)
            if split is None:
                target.rect = branch.rect.combine(target.rect)
                return None
            target.rect = _cover(target.child)
            return self._add_branch(_Branch(_cover(split), child=split), node)
        if node.level == level:
            return self._add_branch(branch, node)
        raise RuntimeError("insertion level lies below the node level")

    def _insert(self, branch: _Branch, level: int) -> None:
        split = self._insert_rec(branch, self._root, level)
        if split is not None:
            old = self._root
            self._root = _Node(
                level=old.level + 1,
                branches=[_Branch(_cover(old), child=old), _Branch(_cover(split), child=split)],
            )

    def _remove_rec(self, rect: Rect, data: Any, node: _Node, reinsert: list[_Node]) -> bool:
        if not node.is_leaf:
            for index, branch in enumerate(node.branches):
                if rect.overlaps(branch.rect) and self._remove_rec(rect, data, branch.child, reinsert):
                    if len(branch.child.branches) >= self.min_nodes:
                        branch.rect = _cover(branch.child)
                    else:
                        reinsert.append(branch.child)
                        self._disconnect(node, index)
                    return True
            return False
        for index, branch in enumerate(node.branches):
            if branch.data == data:
                self._disconnect(node, index)
                return True
        return False

    @staticmethod
    def _disconnect(node: _Node, index: int) -> None:
        node.branches[index] = node.branches[-1]
        node.branches.pop()

    # -- public API ------------------------------------------------------

    def insert(self, low: Sequence[float], high: Sequence[float], data: Any) -> None:
        """Add ``data`` with the box from ``low`` to ``high``."""
        self._insert(_Branch(self._rect(low, high), data=data), 0)

    def remove(self, low: Sequence[float], high: Sequence[float], data: Any) -> bool:
        """Remove one entry equal to ``data`` under the box; False if none was found."""
        rect = self._rect(low, high)
        reinsert: list[_Node] = []
        if not self._remove_rec(rect, data, self._root, reinsert):
            return False
        for node in reversed(reinsert):
            for branch in node.branches:
                self._insert(branch, node.level)
        if not self._root.is_leaf and len(self._root.branches) == 1:
            self._root = self._root.branches[0].child
        return True

    def search(
        self,
        low: Sequence[float],
        high: Sequence[float],
        callback: Callable[[Any], bool] | None = None,
    ) -> int:
        """Count entries overlapping the box, passing each to ``callback``.

        A callback returning a false value stops the search; the entry it was
        given is still counted.
        """
        rect = self._rect(low, high)
        found = 0

        def visit(node: _Node) -> bool:
            nonlocal found
            for branch in node.branches:
                if not rect.overlaps(branch.rect):
                    continue
                if node.is_leaf:
                    found += 1
                    if callback is not None and not callback(branch.data):
                        return False
                elif not visit(branch.child):
                    return False
            return True

        visit(self._root)
        return found

    def iter_overlapping(self, low: Sequence[float], high: Sequence[float]) -> Iterator[Any]:
        """Yield the data of every entry overlapping the box."""
        rect = self._rect(low, high)
        stack = [self._root]
        while stack:
            node = stack.pop()
            matching = [b for b in node.branches if rect.overlaps(b.rect)]
            if node.is_leaf:
                yield from (b.data for b in matching)
            else:
                stack.extend(b.child for b in reversed(matching))

    def __iter__(self) -> Iterator[Any]:
        stack = [self._root]
        while stack:
            node = stack.pop()
            if node.is_leaf:
                yield from (b.data for b in node.branches)
            else:
                stack.extend(b.child for b in reversed(node.branches))

    def __len__(self) -> int:
        total = 0
        stack = [self._root]
        while stack:
            node = stack.pop()
            if node.is_leaf:
                total += len(node.branches)
            else:
                stack.extend(b.child for b in node.branches)
        return total

    def remove_all(self) -> None:
        """Drop every entry."""
        self._root = _Node(level=0)

    def nearest_neighbors(
        self,
        point: Sequence[float],
        terminate: Callable[[int, float], bool] | None = None,
        accept: Callable[[Any], bool] | None = None,
        squared_dist: Callable[[Sequence[float], Any], float] | None = None,
    ) -> list[tuple[float, Any]]:
        """Entries in best-first order of distance to ``point``.

        ``terminate(count, next_distance)`` ends the search when true,
        ``accept(data)`` filters results, and ``squared_dist(point, data)``
        measures an entry; by default an entry is measured by its box.
        """
        if len(point) != self.dims:
            raise ValueError(f"point has {len(point)} dimensions, tree has {self.dims}")
        counter = itertools.count()
        queue: list[tuple[float, int, bool, _Branch]] = []

        def push(node: _Node) -> None:
            for branch in node.branches:
                if node.is_leaf and squared_dist is not None:
                    distance = squared_dist(point, branch.data)
                else:
                    distance = branch.rect.min_dist(point)
                heapq.heappush(queue, (distance, next(counter), node.is_leaf, branch))

        result: list[tuple[float, Any]] = []
        push(self._root)
        while queue:
            distance, _, is_leaf, branch = queue[0]
            if terminate is not None and terminate(len(result), distance):
                break
            heapq.heappop(queue)
            if is_leaf:
                if accept is None or accept(branch.data):
                    result.append((distance, branch.data))
            else:
                push(branch.child)
        return result