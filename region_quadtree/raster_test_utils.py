import os
import tempfile

import numpy as np
from skimage import io


def expect_image_file_and_raster_are_near(test_instance,
                                          baseline_path,
                                          result_image,
                                          max_outlier_fraction=0.0,
                                          pixel_error_threshold=0):
    """Compares a rendered quadtree raster with an image on disk.

    The images are considered identical if at most max_outlier_fraction of
    the pixels have a channel differing by more than pixel_error_threshold.

    Args:
      test_instance: a python unittest.TestCase instance.
      baseline_path: path to the reference image on disk.
      result_image: numpy array from raster_utils.to_array().
      max_outlier_fraction: the maximum fraction of outlier pixels allowed.
      pixel_error_threshold: pixel values are considered different if their
        difference exceeds this amount, in the units of the baseline image.
    """
    baseline_image = io.imread(baseline_path)

    test_instance.assertEqual(baseline_image.shape, result_image.shape,
                              "Images shapes {} and {} do not match."
                              .format(baseline_image.shape, result_image.shape))

    diff_image = np.abs(baseline_image.astype(np.int64) -
                        result_image.astype(np.int64))
    outlier_channels = diff_image > pixel_error_threshold
    if outlier_channels.ndim == 3:
        outlier_pixels = np.any(outlier_channels, axis=2)
    else:
        outlier_pixels = outlier_channels
    outlier_count = np.count_nonzero(outlier_pixels)
    outlier_fraction = outlier_count / np.prod(baseline_image.shape[:2])
    images_match = outlier_fraction <= max_outlier_fraction

    outputs_dir = tempfile.gettempdir()
    base_prefix = os.path.splitext(os.path.basename(baseline_path))[0]
    result_output_path = os.path.join(outputs_dir, base_prefix + "_result.png")
    diff_output_path = os.path.join(outputs_dir, base_prefix + "_diff.png")

    message = ("{} does not match. ({} of pixels are outliers, {} is allowed.)."
               " Result image written to {}, Diff written to {}"
               .format(
                   baseline_path, outlier_fraction,
                   max_outlier_fraction, result_output_path, diff_output_path))

    if not images_match:
        io.imsave(result_output_path, result_image, check_contrast=False)
        io.imsave(diff_output_path, np.clip(diff_image, 0, 255).astype(np.uint8),
                  check_contrast=False)

    test_instance.assertTrue(images_match, msg=message)
