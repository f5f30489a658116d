"""
Exceptions raised by the quadtree engine.
"""


class QuadtreeError(ValueError):
    """Base class for invalid arguments detected by the quadtree."""


class InvalidRectangleError(QuadtreeError):
    """A rectangle whose min corner lies past its max corner on some axis."""


class DegenerateSplitError(QuadtreeError):
    """
    Raised when a rectangle is one coordinate wide or tall and would have to
    be subdivided.
    """

    def __init__(self, bounds):
        self.bounds = bounds
        super(DegenerateSplitError, self).__init__(
            "node is too fine to split: {}".format(bounds))


class OutOfBoundsError(QuadtreeError):
    """A point lies outside the rectangle governed by the tree."""

    def __init__(self, point, bounds):
        self.point = point
        self.bounds = bounds
        super(OutOfBoundsError, self).__init__(
            "point {} is outside the governed rectangle {}".format(point, bounds))
