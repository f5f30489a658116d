"""
Example 2: Painting random rectangles into a quadtree, one video frame per
stroke, and plotting how many leaves the tree needs along the way.
"""

import os
import argparse
import random

import numpy as np
import imageio
import matplotlib.pyplot as plt

import region_quadtree as rq
from region_quadtree import raster_utils

current_dir = os.path.dirname(os.path.realpath(__file__))
data_dir = os.path.join(current_dir, '.')

PALETTE = [
    (20, 20, 20),
    (230, 60, 60),
    (60, 200, 90),
    (60, 110, 230),
    (240, 220, 80),
]

if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument('-s', '--size', type=int, default=128,
                        help='canvas side, a power of two')
    parser.add_argument('-n', '--strokes', type=int, default=200)
    parser.add_argument('--seed', type=int, default=0)
    parser.add_argument('-o', '--filename_output', type=str, default=os.path.join(data_dir, 'example2.gif'))
    args = parser.parse_args()

    rng = random.Random(args.seed)
    size = args.size
    tree = rq.Quadtree((0, 0), (size - 1, size - 1), PALETTE[0])

    writer = imageio.get_writer(args.filename_output, mode='I')
    leaf_counts = []
    for stroke in range(args.strokes):
        x0, y0 = rng.randint(-size // 4, size), rng.randint(-size // 4, size)
        w, h = rng.randint(1, size // 3), rng.randint(1, size // 3)
        # partly outside rectangles are clipped to the canvas
        rect = ((x0, y0), (x0 + w, y0 + h))
        if rng.random() < 0.1:
            # now and then flood the whole canvas
            rect = tree.bounds
        tree.insert_rect(rng.choice(PALETTE), rect)
        leaf_counts.append(tree.leaf_count())

        if stroke % 5 == 0:
            writer.append_data(raster_utils.to_array(tree, np.uint8))
            print("stroke {} of {}: {} leaves".format(
                stroke, args.strokes, leaf_counts[-1]))
    writer.close()

    x = np.arange(0, args.strokes, 1)
    y = np.array(leaf_counts)
    plt.plot(x, y)
    plt.xlabel("stroke")
    plt.ylabel("leaves")
    plt.show()
