"""unixtime - Unit test"""

import datetime
import logging
import unittest

from taiclock import utils
from taiclock.errors import RangeError
from taiclock.taitime import TaiTime
from taiclock.unixtime import datetime_to_tai, tai_to_datetime, tai_to_unix_time, unix_to_tai_time

logger = logging.getLogger(__name__)
utils.enable_logging(extra_loggers=[__name__])

SEC = 1000000

# 1999-01-01T00:00:00Z in TAI and Unix microseconds.
T1999 = 1293840032000000
U1999 = 915148800000000


class UnixTimeTestCase(unittest.TestCase):
    def test_unix(self):
        self.assertEqual(U1999, tai_to_unix_time(TaiTime(T1999)))
        self.assertEqual(TaiTime(T1999), unix_to_tai_time(U1999))
        self.assertEqual(TaiTime(T1999 - 1000001), unix_to_tai_time(U1999 - 1))

    def test_unix_leap_second(self):
        leap = TaiTime(T1999 - 500000)
        self.assertEqual(U1999 + 500000, tai_to_unix_time(leap))
        self.assertEqual(U1999, tai_to_unix_time(leap, freeze=True))

    def test_before_1972(self):
        with self.assertRaises(RangeError):
            tai_to_unix_time(TaiTime(0))
        with self.assertRaises(RangeError):
            unix_to_tai_time(0)


class DatetimeTestCase(unittest.TestCase):
    def test_tai_to_datetime(self):
        utc = datetime.timezone.utc
        self.assertEqual(datetime.datetime(1999, 1, 1, tzinfo=utc), tai_to_datetime(TaiTime(T1999)))
        self.assertEqual(
            datetime.datetime(1998, 12, 31, 23, 59, 59, 999999, tzinfo=utc), tai_to_datetime(TaiTime(T1999 - SEC - 1))
        )

        # Leap seconds become the start of the next day.
        self.assertEqual(datetime.datetime(1999, 1, 1, tzinfo=utc), tai_to_datetime(TaiTime(T1999 - SEC)))
        self.assertEqual(datetime.datetime(1999, 1, 1, tzinfo=utc), tai_to_datetime(TaiTime(T1999 - 1)))

        self.assertIs(utc, tai_to_datetime(TaiTime(T1999)).tzinfo)

    def test_datetime_to_tai(self):
        self.assertEqual(TaiTime(T1999), datetime_to_tai(datetime.datetime(1999, 1, 1)))
        self.assertEqual(TaiTime(T1999), datetime_to_tai(datetime.datetime(1999, 1, 1, tzinfo=datetime.timezone.utc)))
        self.assertEqual(TaiTime(T1999 + 7), datetime_to_tai(datetime.datetime(1999, 1, 1, 0, 0, 0, 7)))

        plus_one = datetime.timezone(datetime.timedelta(hours=1))
        self.assertEqual(TaiTime(T1999), datetime_to_tai(datetime.datetime(1999, 1, 1, 1, tzinfo=plus_one)))

    def test_round_trip(self):
        for offset in range(-3 * SEC, 3 * SEC, 333333):
            t = TaiTime(T1999 + offset)
            if -SEC <= offset < 0:
                continue  # Leap second.
            self.assertEqual(t, datetime_to_tai(tai_to_datetime(t)))

    def test_datetime_before_1972(self):
        with self.assertRaises(RangeError):
            datetime_to_tai(datetime.datetime(1971, 12, 31))


if __name__ == "__main__":
    unittest.main()
