"""
Conversion between quadtrees and rasters: numpy arrays, torch tensors and
image files.

Cell (x, y) of a tree maps to array[y - origin_y, x - origin_x], so rows are
y and columns are x. Multichannel pixels are stored in the tree as tuples of
Python scalars.
"""

import logging

import numpy as np
import torch
from skimage import io

from .geometry import Rectangle, split_bounds
from .quadtree import Quadtree

logger = logging.getLogger(__name__)


def _pixel_value(pixel):
    if np.ndim(pixel) == 0:
        return pixel.item()
    return tuple(pixel.tolist())


def from_array(array, origin=(0, 0), default=None):
    """
    Builds a quadtree holding the pixels of a 2D or 3D array.

    Args:
    - array: numpy array with shape [height, width] or
        [height, width, channels].
    - origin: (x, y) coordinate of array[0, 0].
    - default: default value of the tree. Defaults to the value of the
        top-left pixel.

    Returns:
    - A Quadtree governing [origin, origin + (width - 1, height - 1)].

    Raises:
        ValueError: the array is empty or has an unsupported rank.
        DegenerateSplitError: a one-pixel-wide (or tall) quadrant of the
            array is not uniform. Square arrays with a power-of-two side
            never raise.
    """
    array = np.asarray(array)
    if array.ndim not in (2, 3):
        raise ValueError(
            "expected an array of shape [height, width] or "
            "[height, width, channels], got {}".format(array.shape))
    height, width = array.shape[:2]
    if height == 0 or width == 0:
        raise ValueError("cannot build a quadtree from an empty array")

    ox, oy = origin
    bounds = Rectangle((ox, oy), (ox + width - 1, oy + height - 1))
    if default is None:
        default = _pixel_value(array[0, 0])
    tree = Quadtree(bounds.min, bounds.max, default)

    # Walk the same quadrants the tree uses so each uniform block is a
    # single write to an existing or freshly split node.
    pending = [bounds]
    while pending:
        block = pending.pop()
        pixels = array[block.min.y - oy:block.max.y - oy + 1,
                       block.min.x - ox:block.max.x - ox + 1]
        first = pixels[0, 0]
        # A single pixel is uniform even when it does not equal itself (NaN).
        if block.is_single_point() or np.all(pixels == first):
            value = _pixel_value(first)
            if value != default:
                tree.insert_rect(value, block)
        else:
            pending.extend(split_bounds(block))

    logger.debug("built %r from array of shape %s", tree, array.shape)
    return tree


def to_array(tree, dtype=None):
    """
    Renders every cell of a tree into a numpy array.

    Returns:
    - An array of shape [height, width] for scalar values, or
      [height, width, channels] for tuple values.
    """
    bounds = tree.bounds
    channels = None
    if isinstance(tree.default, tuple):
        channels = len(tree.default)
    shape = (bounds.height, bounds.width)
    if channels is not None:
        shape = shape + (channels,)
    if dtype is None:
        dtype = np.asarray(tree.default).dtype
    array = np.empty(shape, dtype=dtype)
    ox, oy = bounds.min
    for rect, value in tree.leaves():
        array[rect.min.y - oy:rect.max.y - oy + 1,
              rect.min.x - ox:rect.max.x - ox + 1] = value
    return array


def from_tensor(tensor, origin=(0, 0), default=None):
    """
    Same as from_array() for a [height, width] or [height, width, channels]
    tensor. The tensor is detached and moved to the cpu first.
    """
    return from_array(tensor.detach().cpu().numpy(), origin, default)


def to_tensor(tree, dtype=None):
    """
    Renders a tree into a tensor.

    Args:
    - dtype: numpy dtype of the intermediate array, which fixes the tensor
        dtype. Inferred from the tree's default value when None.
    """
    return torch.from_numpy(to_array(tree, dtype))


def load_image(filename, origin=(0, 0)):
    """
    Reads an image file with skimage.io into a quadtree. Pixel values are
    stored unscaled (e.g. uint8 tuples for an RGB png).
    """
    image = io.imread(filename)
    return from_array(image, origin)


def save_image(tree, filename, dtype=np.uint8):
    image = to_array(tree, dtype)
    io.imsave(filename, image, check_contrast=False)
