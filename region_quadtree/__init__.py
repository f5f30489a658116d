from .errors import (QuadtreeError, InvalidRectangleError, DegenerateSplitError,
                     OutOfBoundsError)
from .geometry import Coordinate, Rectangle, rectangle_intersection, split_rectangle
from .quadtree import Quadtree, GridIterator

__version__ = '0.1.0'
name = 'region_quadtree'
