"""convert - Unit test"""

import logging
import unittest

import numpy as np
import numpy.testing as npt

from taiclock import utils
from taiclock.convert import adapt, conversions
from taiclock.errors import FormatError, RangeError
from taiclock.taitime import TaiTime

logger = logging.getLogger(__name__)
utils.enable_logging(extra_loggers=[__name__])

SEC = 1000000

# 1999-01-01T00:00:00Z in TAI and Unix microseconds.
T1999 = 1293840032000000
U1999 = 915148800000000


class AdaptTestCase(unittest.TestCase):
    def test_utc(self):
        self.assertEqual("1999-01-01T00:00:00.000000Z", adapt(T1999, "tai", "utc"))
        self.assertEqual("1998-12-31T23:59:60.500Z", adapt(T1999 - 500000, "tai", "iso", decimals=3))
        self.assertEqual(T1999 - 500000, adapt("1998-12-31T23:59:60.5Z", "utc", "tai"))
        self.assertEqual(T1999 - 500000, adapt("1998-12-31T23:59:60.5Z", "iso"))

    def test_utc_to_utc_reformats(self):
        self.assertEqual("1998-12-31T23:59:60Z", adapt("1998-12-31T23:59:60.5Z", "utc", "utc", decimals=0))

    def test_container_types(self):
        out = adapt([T1999, T1999 + SEC], "tai", "unix")
        self.assertIsInstance(out, list)
        self.assertEqual([U1999, U1999 + SEC], out)

        out = adapt((T1999,), "tai", "unix")
        self.assertIsInstance(out, tuple)
        self.assertEqual((U1999,), out)

        out = adapt(np.array([T1999]), "tai", "unix")
        self.assertIsInstance(out, np.ndarray)
        npt.assert_array_equal([U1999], out)

    def test_unix(self):
        self.assertEqual(U1999, adapt(T1999 - 500000, "tai", "unix", freeze=True))
        self.assertEqual(U1999 + 500000, adapt(T1999 - 500000, "tai", "unix"))
        self.assertEqual(T1999, adapt(U1999, "unix", "tai"))
        self.assertEqual("1999-01-01T00:00:00.000000Z", adapt(U1999, "unix", "utc"))

    def test_taitime(self):
        self.assertEqual(TaiTime(T1999), adapt(T1999, "tai", "taitime"))
        self.assertEqual([TaiTime(T1999), TaiTime(1)], adapt([T1999, 1], "tai", "taitime"))
        self.assertEqual(U1999, adapt(TaiTime(T1999), "taitime", "unix"))
        self.assertEqual([T1999, 5], adapt([TaiTime(T1999), TaiTime(5)], "taitime", "tai"))

    def test_dt64(self):
        self.assertEqual(np.datetime64("1999-01-01", "us"), adapt(T1999 - 1, "tai", "dt64"))
        with self.assertRaises(RangeError):
            adapt(T1999 - 1, "tai", "dt64", ceil_leapseconds=False)
        self.assertEqual(T1999, adapt(np.datetime64("1999-01-01"), "dt64", "tai"))
        self.assertEqual(U1999, adapt(np.datetime64("1999-01-01"), "dt64", "unix"))

    def test_day_counts(self):
        self.assertEqual(-365.0, adapt(T1999, "tai", "mjd2000"))
        self.assertEqual(-365.0, adapt(T1999 - 1, "tai", "mjd2000"))
        self.assertEqual(51179.0, adapt(T1999, "tai", "mjd"))
        self.assertEqual(T1999, adapt(51179.0, "mjd", "tai"))
        self.assertEqual(51179.0, adapt(-365.0, "mjd2000", "mjd"))
        self.assertAlmostEqual(-365.0 + 32 / 86400, adapt(T1999, "tai", "mjd2000", scale="TAI"), delta=1.2e-11)
        self.assertEqual("1999-01-01T00:00:00.000000Z", adapt(-365.0, "mjd2000", "utc"))

    def test_cuc(self):
        self.assertEqual(1514764836 * SEC, adapt(1514764836 * 65536, "cuc", "tai"))
        self.assertEqual([1514764836 * 65536 + 32768], adapt([1514764836 * SEC + 500000], "tai", "cuc"))
        self.assertEqual("2006-01-01T00:00:03.000000Z", adapt(1514764836 * 65536, "cuc", "utc"))

    def test_identity(self):
        self.assertEqual(T1999, adapt(T1999, "tai", "tai"))
        self.assertEqual(T1999, adapt(T1999, to="tai"))
        self.assertEqual(-365.0, adapt(-365.0, "mjd2000", "mjd2000"))

    def test_every_format_reaches_every_other(self):
        for src in conversions:
            for dst in conversions:
                value = adapt(T1999 + 1, "tai", src)
                back = adapt(adapt(value, src, dst), dst, "tai")
                # Day counts lose sub-microsecond precision; everything else is exact.
                self.assertLessEqual(abs(int(back) - (T1999 + 1)), 1, (src, dst))

    def test_errors(self):
        with self.assertRaises(ValueError):
            adapt(0)
        with self.assertRaises(ValueError):
            adapt(0, "bogus", "tai")
        with self.assertRaises(ValueError):
            adapt(0, "tai", "bogus")
        with self.assertRaises(FormatError):
            adapt("not a time", "utc", "tai")
        with self.assertRaises(RangeError):
            adapt(0, "tai", "utc")


if __name__ == "__main__":
    unittest.main()
