import unittest
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from clockface import ClockFace


class TestClockFace(unittest.TestCase):
    def test_first_tick_sets_everything(self) -> None:
        face = ClockFace()
        r = face.tick(datetime(2022, 10, 13, 9, 5, 7))   # a Thursday
        self.assertEqual(r.clock_text, "09:05:07")
        self.assertEqual(r.day_text, "Thursday")
        self.assertEqual(r.date_text, "13-10-2022")
        self.assertEqual(r.today_key, "2022-10-13")
        self.assertEqual(face.today_key, "2022-10-13")

    def test_same_day_only_updates_clock(self) -> None:
        face = ClockFace()
        t = datetime(2022, 10, 13, 23, 59, 58)
        face.tick(t)
        r = face.tick(t + timedelta(seconds=1))
        self.assertEqual(r.clock_text, "23:59:59")
        self.assertIsNone(r.day_text)
        self.assertIsNone(r.date_text)
        self.assertIsNone(r.today_key)
        self.assertEqual(face.today_key, "2022-10-13")

    def test_midnight_rolls_day_and_key(self) -> None:
        face = ClockFace()
        t = datetime(2022, 12, 31, 23, 59, 59)
        face.tick(t)
        r = face.tick(t + timedelta(seconds=1))
        self.assertEqual(r.clock_text, "00:00:00")
        self.assertEqual(r.day_text, "Sunday")
        self.assertEqual(r.date_text, "01-01-2023")
        self.assertEqual(face.today_key, "2023-01-01")

    def test_uses_the_wall_clock_of_the_given_zone(self) -> None:
        face = ClockFace()
        utc = datetime(2022, 10, 13, 23, 30, tzinfo=ZoneInfo("UTC"))
        r = face.tick(utc.astimezone(ZoneInfo("Europe/London")))
        self.assertEqual(r.clock_text, "00:30:00")
        self.assertEqual(r.today_key, "2022-10-14")
        self.assertEqual(r.day_text, "Friday")


if __name__ == "__main__":
    unittest.main()
