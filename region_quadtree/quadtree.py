"""
Region quadtree mapping every cell of a fixed integer rectangle to a value.

Uniform regions are stored as a single leaf. Writes subdivide leaves on demand
and merge branches back into leaves as soon as their four quadrants hold the
same value, so the tree is always maximally consolidated between calls.
"""

import logging

from .errors import OutOfBoundsError
from .geometry import (Coordinate, Rectangle, as_coordinate, as_rectangle,
                       contains, rectangle_intersection, split_bounds)

logger = logging.getLogger(__name__)


class Node:
    """
    A quadtree node covering `bounds`.

    A node is either a leaf, holding `value` for every cell of `bounds`, or a
    branch, holding exactly four `children` ordered top-left, top-right,
    bottom-left, bottom-right. `children` is None for a leaf and `value` is
    None for a branch. split() and consolidate() switch a node between the two
    variants in place.
    """
    __slots__ = ("bounds", "value", "children")

    def __init__(self, bounds, value):
        self.bounds = bounds
        self.value = value
        self.children = None

    def __repr__(self):
        if self.is_leaf():
            return "Leaf({}, {!r})".format(self.bounds, self.value)
        return "Branch({}, {})".format(self.bounds, self.children)

    def is_leaf(self):
        return self.children is None

    def is_branch(self):
        return self.children is not None

    def contains(self, point):
        return contains(self.bounds, point)

    def child_containing(self, point):
        for child in self.children:
            if child.contains(point):
                return child
        return None

    def split(self):
        """
        Turns a leaf into a branch of four leaves that inherit its value.
        Does nothing on a branch.

        Raises:
            DegenerateSplitError: the leaf is one coordinate wide or tall.
        """
        if self.is_branch():
            return
        quadrants = split_bounds(self.bounds)
        logger.debug("splitting %s", self.bounds)
        self.children = [Node(b, self.value) for b in quadrants]
        self.value = None

    def consolidate(self):
        """
        Turns a branch into a leaf holding the first child's value. Does
        nothing on a leaf. The caller checks that the children are uniform.
        """
        if self.is_leaf():
            return
        first = self.children[0]
        assert first.is_leaf(), "consolidating a branch whose first child is a branch"
        logger.debug("consolidating %s", self.bounds)
        self.value = first.value
        self.children = None

    def insert_value(self, value, point):
        """
        Writes `value` at a single cell.

        Returns:
        - Whether this node is a leaf after the write.

        Raises:
            OutOfBoundsError: `point` is not inside this node.
            DegenerateSplitError: reaching `point` needs a degenerate split.
                Nodes above the failing one may already have been split.
        """
        if self.bounds.min == point and self.bounds.max == point:
            self.value = value
            return True
        if not self.contains(point):
            raise OutOfBoundsError(point, self.bounds)
        self.split()
        is_leaf = self.child_containing(point).insert_value(value, point)
        if is_leaf and all(c.is_leaf() and c.value == value
                           for c in self.children):
            self.consolidate()
        return self.is_leaf()

    def read_value(self, point):
        if self.is_leaf():
            return self.value
        child = self.child_containing(point)
        if child is None:
            return None
        return child.read_value(point)

    def insert_value_range(self, value, target):
        """
        Writes `value` to every cell of `target` that lies inside this node.
        A node whose bounds equal `target` is replaced by a single leaf,
        dropping its subtree.

        Returns:
        - Whether this node is a leaf after the write.
        """
        if self.bounds == target:
            self.value = value
            self.children = None
            return True
        self.split()
        for child in self.children:
            intersection = rectangle_intersection(child.bounds, target)
            if intersection is not None:
                child.insert_value_range(value, intersection)
        first = self.children[0]
        if all(c.is_leaf() for c in self.children) and all(
                c.value == first.value for c in self.children[1:]):
            self.consolidate()
        return self.is_leaf()

    def check_insert_value(self, point):
        """
        Walks the path insert_value() would take to `point` without changing
        anything, raising DegenerateSplitError if it would need a degenerate
        split.
        """
        node, bounds = self, self.bounds
        while bounds.min != point or bounds.max != point:
            if node is not None and node.is_branch():
                node = node.child_containing(point)
                bounds = node.bounds
            else:
                # Below a leaf every node would be a fresh quadrant.
                bounds = next(b for b in split_bounds(bounds) if contains(b, point))
                node = None

    def check_insert_value_range(self, target):
        """Same as check_insert_value() for insert_value_range()."""
        _check_range(self.bounds, self, target)

    def leaves(self):
        if self.is_leaf():
            yield self.bounds, self.value
            return
        for child in self.children:
            for leaf in child.leaves():
                yield leaf

    def depth(self):
        if self.is_leaf():
            return 0
        return 1 + max(child.depth() for child in self.children)


def _check_range(bounds, node, target):
    # node is None for quadrants that do not exist yet.
    if bounds == target:
        return
    if node is not None and node.is_branch():
        parts = [(child.bounds, child) for child in node.children]
    else:
        parts = [(b, None) for b in split_bounds(bounds)]
    for part_bounds, part in parts:
        intersection = rectangle_intersection(part_bounds, target)
        if intersection is not None:
            _check_range(part_bounds, part, intersection)


class GridIterator:
    """
    Row-major iterator over the value of every cell of a tree.

    Each step is a full lookup from the root. The iterator is forward only and
    cannot be restarted; the tree must not be written while it is in use.
    """

    def __init__(self, tree):
        self._tree = tree
        self._cursor = tree.bounds.min
        self._exhausted = False

    def __iter__(self):
        return self

    def __next__(self):
        if self._exhausted:
            raise StopIteration
        value = self._tree.root.read_value(self._cursor)
        self._advance()
        return value

    def _advance(self):
        lo, hi = self._tree.bounds
        x, y = self._cursor
        if self._cursor == hi:
            self._exhausted = True
        elif x == hi.x:
            self._cursor = Coordinate(lo.x, y + 1)
        else:
            self._cursor = Coordinate(x + 1, y)


class Quadtree:
    """
    Maps every cell of a fixed rectangle to a value.

    Args:
    - min_corner: (x, y) of the smallest corner of the governed rectangle.
    - max_corner: (x, y) of the largest corner, inclusive.
    - default: initial value of every cell.

    Values are shared between nodes, so they should be immutable and compare
    with `==` to a plain bool (ints, strings, tuples, ...).

    Writes into rectangles that are not square with a power-of-two side can
    reach a quadrant one cell wide but several cells tall (or the reverse);
    such a quadrant cannot be split further and writes needing it raise
    DegenerateSplitError. For example Quadtree((0, 0), (8, 8), 0) is 9x9:
    (5, 0) lies in the one-column quadrant [(5, 0), (5, 1)], so
    insert(1, (5, 0)) raises while insert_rect(1, ((5, 0), (5, 1))) works.
    """

    def __init__(self, min_corner, max_corner, default):
        self.default = default
        self._root = Node(Rectangle(min_corner, max_corner), default)

    def __repr__(self):
        return "Quadtree({}, leaves={})".format(self.bounds, self.leaf_count())

    @property
    def root(self):
        return self._root

    @property
    def bounds(self):
        return self._root.bounds

    def __contains__(self, point):
        return contains(self.bounds, as_coordinate(point))

    def __len__(self):
        return self.bounds.area

    def __iter__(self):
        return GridIterator(self)

    def insert(self, value, point):
        """
        Writes `value` at `point`. A failed write leaves the tree unchanged.

        Raises:
            OutOfBoundsError: `point` is outside the governed rectangle.
            DegenerateSplitError: the cell sits in a quadrant that cannot be
                subdivided.
        """
        point = as_coordinate(point)
        if not contains(self.bounds, point):
            raise OutOfBoundsError(point, self.bounds)
        self._root.check_insert_value(point)
        self._root.insert_value(value, point)

    def insert_rect(self, value, rect):
        """
        Writes `value` to every cell of `rect`. Parts of `rect` outside the
        governed rectangle are ignored. A failed write leaves the tree
        unchanged.

        Returns:
        - False if `rect` does not overlap the governed rectangle, so nothing
          was written, else True.

        Raises:
            DegenerateSplitError: the write needs a quadrant that cannot be
                subdivided.
        """
        rect = as_rectangle(rect)
        clipped = rectangle_intersection(rect, self.bounds)
        if clipped is None:
            logger.debug("ignoring write to %s outside %s", rect, self.bounds)
            return False
        self._root.check_insert_value_range(clipped)
        self._root.insert_value_range(value, clipped)
        return True

    def get(self, point):
        """Returns the value at `point`, or None if it is outside the tree."""
        point = as_coordinate(point)
        if not contains(self.bounds, point):
            return None
        return self._root.read_value(point)

    def iter(self):
        return GridIterator(self)

    def items(self):
        """Yields (Coordinate, value) for every cell in row-major order."""
        for point in self.bounds.points():
            yield point, self._root.read_value(point)

    def leaves(self):
        """Yields (Rectangle, value) for every leaf, depth first."""
        return self._root.leaves()

    def leaf_count(self):
        return sum(1 for _ in self._root.leaves())

    def depth(self):
        return self._root.depth()
