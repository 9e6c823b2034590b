import time
import unittest
from datetime import datetime, timezone

from cantofal.util.time import canto_date_to_timestamp, now_timestamp, parse_canto_date


class TestUtilTime(unittest.TestCase):
    def test_now_timestamp_is_current(self) -> None:
        self.assertLessEqual(abs(now_timestamp() - int(time.time())), 1)

    def test_parse_canto_date_with_millis(self) -> None:
        dt = parse_canto_date("20210315093012345")
        self.assertEqual(dt, datetime(2021, 3, 15, 9, 30, 12, 345000, tzinfo=timezone.utc))

    def test_parse_canto_date_without_millis(self) -> None:
        dt = parse_canto_date("20210315093012")
        self.assertEqual(dt, datetime(2021, 3, 15, 9, 30, 12, tzinfo=timezone.utc))

    def test_parse_canto_date_empty(self) -> None:
        self.assertIsNone(parse_canto_date(None))
        self.assertIsNone(parse_canto_date(""))

    def test_parse_canto_date_rejects_garbage(self) -> None:
        with self.assertRaises(ValueError):
            parse_canto_date("2021-03-15")

    def test_canto_date_to_timestamp(self) -> None:
        expected = int(datetime(2021, 3, 15, 9, 30, 12, tzinfo=timezone.utc).timestamp())
        self.assertEqual(canto_date_to_timestamp("20210315093012345"), expected)
        self.assertEqual(canto_date_to_timestamp(20210315093012345), expected)
        self.assertEqual(canto_date_to_timestamp("nope"), 0)
        self.assertEqual(canto_date_to_timestamp(None), 0)


if __name__ == "__main__":
    unittest.main()
