"""
Example 1: Compressing an image into a quadtree and drawing its leaves.
"""

import os
import argparse

import numpy as np
from skimage import io
import matplotlib.pyplot as plt
import matplotlib.patches as patches

from region_quadtree import raster_utils

current_dir = os.path.dirname(os.path.realpath(__file__))
data_dir = os.path.join(current_dir, '.')


def synthetic_image(size=128):
    """A few flat shapes on a flat background."""
    image = np.zeros([size, size, 3], dtype=np.uint8)
    image[...] = [30, 30, 60]
    yy, xx = np.mgrid[0:size, 0:size]
    disc = (xx - size * 0.35) ** 2 + (yy - size * 0.4) ** 2 < (size * 0.2) ** 2
    image[disc] = [230, 180, 40]
    image[size // 2:size - 8, size // 2:size - 16] = [40, 160, 220]
    return image


def pad_to_power_of_two(image):
    # Square power-of-two rasters never need a degenerate split.
    side = 1
    while side < max(image.shape[:2]):
        side *= 2
    pad = [(0, side - image.shape[0]), (0, side - image.shape[1])]
    pad += [(0, 0)] * (image.ndim - 2)
    return np.pad(image, pad, mode='edge')


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument('-i', '--filename_input', type=str, default=None)
    parser.add_argument('-o', '--filename_output', type=str, default=os.path.join(data_dir, 'example1.png'))
    parser.add_argument('-p', '--filename_plot', type=str, default=os.path.join(data_dir, 'example1_leaves.png'))
    args = parser.parse_args()

    if args.filename_input is None:
        image = synthetic_image()
    else:
        image = io.imread(args.filename_input)
        if image.ndim == 3:
            image = image[..., :3]
    height, width = image.shape[:2]
    image = pad_to_power_of_two(image)

    tree = raster_utils.from_array(image)
    print("{} pixels stored in {} leaves (depth {})".format(
        len(tree), tree.leaf_count(), tree.depth()))

    result_image = raster_utils.to_array(tree, np.uint8)[:height, :width]
    io.imsave(args.filename_output, result_image, check_contrast=False)

    fig, ax = plt.subplots()
    ax.imshow(result_image)
    for rect, _ in tree.leaves():
        if rect.min.x >= width or rect.min.y >= height:
            continue
        ax.add_patch(patches.Rectangle(
            (rect.min.x - 0.5, rect.min.y - 0.5), rect.width, rect.height,
            fill=False, linewidth=0.3, edgecolor='white'))
    ax.set_axis_off()
    fig.savefig(args.filename_plot, dpi=200, bbox_inches='tight')
    plt.show()
