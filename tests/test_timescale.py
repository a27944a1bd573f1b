"""timescale - Unit test"""

import logging
import unittest

from taiclock import utils
from taiclock.errors import FormatError
from taiclock.timescale import TimeScale, tdb_minus_tt

logger = logging.getLogger(__name__)
utils.enable_logging(extra_loggers=[__name__])

DAY = 86400000000


class TimeScaleTestCase(unittest.TestCase):
    def test_identity_scales(self):
        for scale in (TimeScale.TAI, TimeScale.UTC):
            self.assertEqual(123456789, scale.tai_to_scale(123456789))
            self.assertEqual(123456789, scale.scale_to_tai(123456789))

    def test_tt(self):
        self.assertEqual(32184000, TimeScale.TT.tai_to_scale(0))
        self.assertEqual(-32184000, TimeScale.TT.scale_to_tai(0))

    def test_tdb_correction_bounds(self):
        for day in range(0, 40000, 7):
            offset = tdb_minus_tt(day * DAY)
            self.assertIsInstance(offset, int)
            self.assertLessEqual(abs(offset), 1657, day)

    def test_tdb_round_trip(self):
        for day in range(10000, 30000, 13):
            tai = day * DAY + 123456
            tdb = TimeScale.TDB.tai_to_scale(tai)
            self.assertLessEqual(abs(TimeScale.TDB.scale_to_tai(tdb) - tai), 1, day)

    def test_labels(self):
        self.assertEqual("Z", TimeScale.UTC.label)
        self.assertEqual("Z", TimeScale.UTC.suffix)
        self.assertEqual(" TAI", TimeScale.TAI.label)
        self.assertEqual("TDB", TimeScale.TDB.suffix)
        self.assertTrue(TimeScale.UTC.is_leap_aware)
        self.assertFalse(TimeScale.TT.is_leap_aware)

    def test_parse(self):
        self.assertIs(TimeScale.TT, TimeScale.parse("tt"))
        self.assertIs(TimeScale.UTC, TimeScale.parse(" UTC "))
        self.assertIs(TimeScale.TDB, TimeScale.parse(TimeScale.TDB))
        with self.assertRaises(FormatError):
            TimeScale.parse("GPS")


if __name__ == "__main__":
    unittest.main()
