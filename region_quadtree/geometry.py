"""
Integer grid geometry for the region quadtree: coordinates, inclusive
rectangles, and the midpoint subdivision used to build quadrants.
"""

import operator
from collections import namedtuple

from .errors import DegenerateSplitError, InvalidRectangleError

Coordinate = namedtuple("Coordinate", "x y")

_RectangleBase = namedtuple("Rectangle", "min max")


def as_coordinate(point):
    """
    Coerces an (x, y) pair into a Coordinate. Components must be integers
    (numpy integer scalars are accepted); floats raise TypeError.
    """
    if isinstance(point, Coordinate):
        return point
    x, y = point
    return Coordinate(operator.index(x), operator.index(y))


class Rectangle(_RectangleBase):
    """
    An axis-aligned rectangle of grid cells, inclusive on both corners.

    Args:
    - min_corner: (x, y) of the corner with the smallest coordinates.
    - max_corner: (x, y) of the corner with the largest coordinates.

    Raises:
        InvalidRectangleError: min_corner lies past max_corner on some axis.
    """
    __slots__ = ()

    def __new__(cls, min_corner, max_corner):
        min_corner = as_coordinate(min_corner)
        max_corner = as_coordinate(max_corner)
        if min_corner.x > max_corner.x or min_corner.y > max_corner.y:
            raise InvalidRectangleError(
                "Invalid rectangle: min={} max={}".format(min_corner, max_corner))
        return super(Rectangle, cls).__new__(cls, min_corner, max_corner)

    @property
    def width(self):
        return self.max.x - self.min.x + 1

    @property
    def height(self):
        return self.max.y - self.min.y + 1

    @property
    def area(self):
        return self.width * self.height

    def is_single_point(self):
        return self.min == self.max

    def points(self):
        """Iterates over every cell of the rectangle in row-major order."""
        for y in range(self.min.y, self.max.y + 1):
            for x in range(self.min.x, self.max.x + 1):
                yield Coordinate(x, y)


def as_rectangle(rect):
    if isinstance(rect, Rectangle):
        return rect
    min_corner, max_corner = rect
    return Rectangle(min_corner, max_corner)


def contains(bounds, point):
    """
    Returns whether `bounds` contains `point`, inclusive on all four sides.
    """
    return (bounds.min.x <= point[0] <= bounds.max.x and
            bounds.min.y <= point[1] <= bounds.max.y)


def split_rectangle(bounds, h_mid, v_mid):
    """
    Partitions `bounds` at column `h_mid` and row `v_mid`.

    Cells with x <= h_mid go to the left half and cells with y <= v_mid to the
    top half. Only non-empty sub-rectangles are emitted.

    Returns:
    - A list of up to four Rectangles ordered top-left, top-right,
      bottom-left, bottom-right.
    """
    lo, hi = bounds
    # corners: top-left, top-right, bottom-left, bottom-right
    corners = (lo, Coordinate(hi.x, lo.y), Coordinate(lo.x, hi.y), hi)
    result = []
    if corners[0].x <= h_mid and corners[0].y <= v_mid:
        result.append(Rectangle(lo, (h_mid, v_mid)))
    if corners[1].x > h_mid and corners[1].y <= v_mid:
        result.append(Rectangle((h_mid + 1, lo.y), (hi.x, v_mid)))
    if corners[2].x <= h_mid and corners[2].y > v_mid:
        result.append(Rectangle((lo.x, v_mid + 1), (h_mid, hi.y)))
    if corners[3].x > h_mid and corners[3].y > v_mid:
        result.append(Rectangle((h_mid + 1, v_mid + 1), hi))
    return result


def midpoints(bounds):
    # Floor division: on odd spans the lower half gets the extra cell.
    h_mid = (bounds.min.x + bounds.max.x) // 2
    v_mid = (bounds.min.y + bounds.max.y) // 2
    return h_mid, v_mid


def split_bounds(bounds):
    """
    Splits `bounds` into its four quadrants at the midpoint.

    Raises:
        DegenerateSplitError: `bounds` is a single coordinate wide or tall,
            so it has no four non-empty quadrants.
    """
    if bounds.max.x - bounds.min.x <= 0 or bounds.max.y - bounds.min.y <= 0:
        raise DegenerateSplitError(bounds)
    h_mid, v_mid = midpoints(bounds)
    return split_rectangle(bounds, h_mid, v_mid)


def rectangle_intersection(left, right):
    """
    Returns the overlap of two rectangles, or None if they do not overlap.
    """
    x_range = (max(left.min.x, right.min.x), min(left.max.x, right.max.x))
    if x_range[0] > x_range[1]:
        return None
    y_range = (max(left.min.y, right.min.y), min(left.max.y, right.max.y))
    if y_range[0] > y_range[1]:
        return None
    return Rectangle((x_range[0], y_range[0]), (x_range[1], y_range[1]))
