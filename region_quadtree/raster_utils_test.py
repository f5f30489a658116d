import math
import os
import tempfile
import unittest

import numpy as np
import torch
from skimage import io

from region_quadtree import raster_utils
from region_quadtree import raster_test_utils
from region_quadtree.errors import DegenerateSplitError


class RasterTest(unittest.TestCase):
    def setUp(self):
        # 4x4 RGB image: red top-left quadrant, blue elsewhere, one green
        # pixel in the bottom-right corner.
        self.image = np.zeros([4, 4, 3], dtype=np.uint8)
        self.image[..., 2] = 255
        self.image[0:2, 0:2] = [255, 0, 0]
        self.image[3, 3] = [0, 255, 0]

    def testFromArrayStoresPixelsAsTuples(self):
        tree = raster_utils.from_array(self.image)
        self.assertEqual(tree.bounds, ((0, 0), (3, 3)))
        self.assertEqual(tree.get((0, 0)), (255, 0, 0))
        self.assertEqual(tree.get((2, 0)), (0, 0, 255))
        self.assertEqual(tree.get((3, 3)), (0, 255, 0))
        self.assertIsInstance(tree.get((0, 0))[0], int)

    def testFromArrayIsConsolidated(self):
        tree = raster_utils.from_array(self.image)
        # TL, TR and BL are uniform; BR splits into four cells.
        self.assertEqual(tree.leaf_count(), 7)
        self.assertEqual(tree.depth(), 2)

    def testArrayRoundTrip(self):
        tree = raster_utils.from_array(self.image)
        np.testing.assert_array_equal(
            raster_utils.to_array(tree, np.uint8), self.image)

    def testScalarArray(self):
        mask = np.zeros([8, 8], dtype=bool)
        mask[2:6, 1:3] = True
        tree = raster_utils.from_array(mask)
        self.assertIs(tree.get((1, 2)), True)
        self.assertIs(tree.get((0, 0)), False)
        result = raster_utils.to_array(tree)
        self.assertEqual(result.dtype, np.bool_)
        np.testing.assert_array_equal(result, mask)

    def testLargeUniformRegionsAreCompact(self):
        image = np.zeros([64, 64], dtype=np.uint8)
        image[16:32, 32:48] = 200
        tree = raster_utils.from_array(image)
        self.assertEqual(tree.leaf_count(), 7)
        np.testing.assert_array_equal(raster_utils.to_array(tree), image)

    def testOrigin(self):
        tree = raster_utils.from_array(self.image, origin=(10, 20))
        self.assertEqual(tree.bounds, ((10, 20), (13, 23)))
        self.assertEqual(tree.get((10, 20)), (255, 0, 0))
        self.assertEqual(tree.get((13, 23)), (0, 255, 0))
        self.assertIsNone(tree.get((0, 0)))
        np.testing.assert_array_equal(
            raster_utils.to_array(tree, np.uint8), self.image)

    def testExplicitDefault(self):
        tree = raster_utils.from_array(self.image, default=(0, 0, 255))
        self.assertEqual(tree.default, (0, 0, 255))
        np.testing.assert_array_equal(
            raster_utils.to_array(tree, np.uint8), self.image)

    def testOddSizedArrayWithUniformThinQuadrants(self):
        image = np.zeros([3, 3], dtype=np.int64)
        image[0, 0] = 1
        tree = raster_utils.from_array(image)
        np.testing.assert_array_equal(raster_utils.to_array(tree), image)

    def testNanPixel(self):
        image = np.zeros([4, 4], dtype=np.float32)
        image[1, 1] = np.nan
        tree = raster_utils.from_array(image)
        self.assertTrue(math.isnan(tree.get((1, 1))))
        self.assertEqual(tree.get((0, 0)), 0.0)
        # assert_array_equal treats NaNs in the same place as equal
        np.testing.assert_array_equal(
            raster_utils.to_array(tree, np.float32), image)

    def testUnrepresentableArrayRaises(self):
        # the [(2, 0), (2, 1)] column holds two different values
        image = np.arange(9).reshape([3, 3])
        with self.assertRaises(DegenerateSplitError):
            raster_utils.from_array(image)

    def testRejectsBadShapes(self):
        with self.assertRaises(ValueError):
            raster_utils.from_array(np.zeros([4]))
        with self.assertRaises(ValueError):
            raster_utils.from_array(np.zeros([0, 4]))

    def testTensorRoundTrip(self):
        tensor = torch.tensor(self.image)
        tree = raster_utils.from_tensor(tensor)
        self.assertEqual(tree.get((3, 3)), (0, 255, 0))
        result = raster_utils.to_tensor(tree, np.uint8)
        self.assertEqual(result.dtype, torch.uint8)
        self.assertTrue(torch.equal(result, tensor))

    def testBoolTensor(self):
        tensor = torch.zeros([8, 8], dtype=torch.bool)
        tensor[4:, 4:] = True
        tree = raster_utils.from_tensor(tensor)
        self.assertEqual(tree.leaf_count(), 4)
        self.assertTrue(torch.equal(raster_utils.to_tensor(tree), tensor))

    def testLoadImage(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            path = os.path.join(tmp_dir, "quadrants.png")
            io.imsave(path, self.image, check_contrast=False)
            tree = raster_utils.load_image(path)
            self.assertEqual(tree.get((0, 0)), (255, 0, 0))
            raster_test_utils.expect_image_file_and_raster_are_near(
                self, path, raster_utils.to_array(tree, np.uint8))

    def testSaveImage(self):
        tree = raster_utils.from_array(self.image)
        tree.insert_rect((255, 255, 255), ((0, 0), (3, 0)))
        expected = self.image.copy()
        expected[0, :] = 255
        with tempfile.TemporaryDirectory() as tmp_dir:
            path = os.path.join(tmp_dir, "painted.png")
            raster_utils.save_image(tree, path)
            np.testing.assert_array_equal(io.imread(path), expected)
            raster_test_utils.expect_image_file_and_raster_are_near(
                self, path, raster_utils.to_array(tree, np.uint8))


if __name__ == "__main__":
    unittest.main()
