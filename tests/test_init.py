"""taiclock - Unit test"""

import unittest

import taiclock


class TaiClockPkgTestCase(unittest.TestCase):
    def test_api_import(self):
        for name in taiclock.__all__:
            self.assertTrue(hasattr(taiclock, name), name)

    def test_readme_example(self):
        utc = taiclock.SimpleTimeFormat("UTC", taiclock.FormatConfig(decimals=1))
        t = utc.parse("2016-12-31T23:59:60.5Z")
        self.assertTrue(taiclock.leapsecond.is_leap_second(int(t)))
        self.assertEqual("2017-01-01T00:00:00.5Z", utc.format(t.add_seconds(1)))

    def test_errors_are_value_errors(self):
        self.assertTrue(issubclass(taiclock.FormatError, ValueError))
        self.assertTrue(issubclass(taiclock.RangeError, ValueError))
        self.assertFalse(issubclass(taiclock.ConfigurationError, ValueError))


if __name__ == "__main__":
    unittest.main()
