"""arrays - Unit test"""

import logging
import unittest

import numpy as np
import numpy.testing as npt
import pandas as pd

from taiclock import arrays, convert, native
from taiclock.utils import enable_logging

logger = logging.getLogger(__name__)
enable_logging(extra_loggers=[__name__])


class ArraysTestCase(unittest.TestCase):
    def test_find_mapping_path_fake(self):
        fmap = dict(
            tai=dict(
                tai="tai2tai",
                unix="tai2unix",
                utc="tai2utc",
            ),
            unix=dict(
                tai="unix2tai",
                unix="unix2unix",
                dt64="unix2dt64",
            ),
            utc=dict(
                tai="utc2tai",
            ),
            dt64=dict(
                unix="dt642unix",
                dt64="dt642dt64",
            ),
        )

        self.assertListEqual(["unix2unix"], arrays.find_mapping_path(fmap, "unix", "unix"))
        self.assertListEqual(["tai2unix", "unix2dt64"], arrays.find_mapping_path(fmap, "tai", "dt64"))
        self.assertListEqual(["utc2tai", "tai2unix", "unix2dt64"], arrays.find_mapping_path(fmap, "utc", "dt64"))
        self.assertListEqual(["utc2tai", "tai2utc"], arrays.find_mapping_path(fmap, "utc", "utc"))
        with self.assertRaisesRegex(ValueError, "Unsupported"):
            arrays.find_mapping_path(fmap, "mjd", "tai")
        with self.assertRaisesRegex(ValueError, "Unable to find"):
            fmap["tai"].pop("unix")
            arrays.find_mapping_path(fmap, "utc", "dt64")

    def test_find_mapping_path_realish(self):
        funcs = arrays.find_mapping_path(convert.conversions, "unix", "dt64")
        self.assertListEqual([native.unix2tai, native.tai2datetime64], funcs)

        unix = np.array([915148800000000, 915148800000001])
        npt.assert_array_equal(unix.astype("M8[us]"), arrays.apply_conversions(funcs, unix))

    def test_input_as_array_scalars(self):
        self.assertEqual(np.int64(5), arrays.noop_int64(5))
        self.assertEqual(np.float64(5.5), arrays.noop_float64(5.5))
        self.assertEqual("abc", arrays.noop_str("abc"))
        self.assertEqual(np.datetime64("2000-01-01", "us"), arrays.noop_dt64(np.datetime64("2000-01-01")))

        obj = object()
        self.assertIs(obj, arrays.noop_object(obj))

    def test_input_as_array_containers(self):
        out = arrays.noop_int64([1, 2, 3])
        self.assertIsInstance(out, np.ndarray)
        self.assertEqual(np.int64, out.dtype)

        out = arrays.noop_int64(np.array([1.0, 2.0]))
        self.assertEqual(np.int64, out.dtype)

        out = arrays.noop_int64(pd.Series([1, 2]))
        self.assertIsInstance(out, pd.Series)

        out = arrays.noop_float64(np.zeros((2, 3), dtype=np.int64))
        self.assertEqual((2, 3), out.shape)
        self.assertEqual(np.float64, out.dtype)

        objs = [object(), object()]
        out = arrays.noop_object(objs)
        self.assertEqual(object, out.dtype)
        self.assertIs(objs[1], out[1])

    def test_input_as_array_keywords(self):
        @arrays.InputAsArray(np.int64)
        def add(times, offset=0):
            return times + offset

        self.assertEqual(3, add(1, offset=2))
        # Unknown keywords are dropped.
        self.assertEqual(1, add(1, scale="UTC"))

        @arrays.InputAsArray(np.int64, filter_keywords=False, defaults=dict(offset=10))
        def add_default(times, offset=0):
            return times + offset

        self.assertEqual(11, add_default(1))
        self.assertEqual(3, add_default(1, offset=2))
        with self.assertRaises(TypeError):
            add_default(1, scale="UTC")


if __name__ == "__main__":
    unittest.main()
