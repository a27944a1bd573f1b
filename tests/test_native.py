"""native - Unit test"""

import logging
import unittest

import numpy as np
import numpy.testing as npt
import pandas as pd

from taiclock import native, utils
from taiclock.errors import RangeError

logger = logging.getLogger(__name__)
utils.enable_logging(extra_loggers=[__name__])

SEC = 1000000

# 1999-01-01T00:00:00Z in TAI and Unix microseconds.
T1999 = 1293840032000000
U1999 = 915148800000000


class NativeUnixTestCase(unittest.TestCase):
    def setUp(self):
        self.tai = np.array([T1999 - SEC - 1, T1999 - SEC, T1999 - 500000, T1999, T1999 + 1])

    def test_tai2unix(self):
        expected = [U1999 - 1, U1999, U1999 + 500000, U1999, U1999 + 1]
        npt.assert_array_equal(expected, native.tai2unix(self.tai))

    def test_tai2unix_freeze(self):
        expected = [U1999 - 1, U1999, U1999, U1999, U1999 + 1]
        npt.assert_array_equal(expected, native.tai2unix(self.tai, freeze=True))
        # The input is not modified.
        self.assertEqual(T1999 - 500000, self.tai[2])

    def test_unix2tai(self):
        unix = [U1999 - 1, U1999, U1999 + 1]
        npt.assert_array_equal([T1999 - SEC - 1, T1999, T1999 + 1], native.unix2tai(unix))

    def test_scalars(self):
        self.assertEqual(U1999, native.tai2unix(T1999))
        self.assertEqual(T1999, native.unix2tai(U1999))
        self.assertTrue(np.isscalar(native.unix2tai(U1999)))

    def test_matches_scalar_conversions(self):
        from taiclock import leapsecond

        tai = np.arange(T1999 - 3 * SEC, T1999 + 3 * SEC, 123457)
        npt.assert_array_equal([leapsecond.tai_to_unix(int(t)) for t in tai], native.tai2unix(tai))
        npt.assert_array_equal([leapsecond.tai_to_unix(int(t), freeze=True) for t in tai], native.tai2unix(tai, freeze=True))

        unix = np.arange(U1999 - 3 * SEC, U1999 + 3 * SEC, 123457)
        npt.assert_array_equal([leapsecond.unix_to_tai(int(u)) for u in unix], native.unix2tai(unix))

    def test_is_leap_second(self):
        npt.assert_array_equal([False, True, True, False, False], native.is_leap_second(self.tai))

    def test_containers(self):
        npt.assert_array_equal([U1999, U1999 + 1], native.tai2unix([T1999, T1999 + 1]))
        npt.assert_array_equal([U1999, U1999 + 1], native.tai2unix(pd.Series([T1999, T1999 + 1])))

        # Shape is kept.
        out = native.tai2unix(np.array([[T1999, T1999 + 1], [T1999 + 2, T1999 + 3]]))
        self.assertEqual((2, 2), out.shape)
        self.assertEqual(U1999 + 3, out[1, 1])

        # Empty arrays.
        self.assertEqual(0, native.tai2unix(np.array([], dtype=np.int64)).size)

    def test_before_1972(self):
        with self.assertRaises(RangeError):
            native.tai2unix([T1999, 0])
        with self.assertRaises(RangeError):
            native.unix2tai([-1])


class NativeDT64TestCase(unittest.TestCase):
    def test_tai2datetime64(self):
        tai = [T1999 - SEC - 1, T1999 - SEC, T1999 - 1, T1999, T1999 + 43200 * SEC]
        expected = np.array(
            [
                "1998-12-31T23:59:59.999999",
                "1999-01-01",  # Leap seconds are rounded up.
                "1999-01-01",
                "1999-01-01",
                "1999-01-01T12:00:00",
            ],
            dtype="M8[us]",
        )
        npt.assert_array_equal(expected, native.tai2datetime64(tai))
        self.assertEqual(np.datetime64("1999-01-01", "us"), native.tai2datetime64(T1999))

    def test_tai2datetime64_no_ceil(self):
        with self.assertRaises(RangeError):
            native.tai2datetime64([T1999, T1999 - 1], ceil_leapseconds=False)
        self.assertEqual(np.datetime64("1999-01-01", "us"), native.tai2datetime64(T1999, ceil_leapseconds=False))

    def test_datetime642tai(self):
        self.assertEqual(T1999, native.datetime642tai(np.datetime64("1999-01-01", "us")))
        npt.assert_array_equal(
            [T1999 - SEC - 1, T1999],
            native.datetime642tai(np.array(["1998-12-31T23:59:59.999999", "1999-01-01"], dtype="M8[us]")),
        )
        # Other precisions are converted.
        self.assertEqual(T1999, native.datetime642tai(np.datetime64("1999-01-01", "D")))

    def test_round_trip(self):
        tai = np.arange(T1999 + 1, T1999 + 86400 * SEC, 3600 * SEC + 1)
        npt.assert_array_equal(tai, native.datetime642tai(native.tai2datetime64(tai)))


if __name__ == "__main__":
    unittest.main()
