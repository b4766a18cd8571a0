# clockface.py

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

# Fixed English names so the kiosk doesn't follow the system locale
DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday",
             "Friday", "Saturday", "Sunday")


@dataclass(frozen=True)
class ClockReading:
    clock_text: str
    day_text: Optional[str] = None     # only set when the day changed
    date_text: Optional[str] = None
    today_key: Optional[str] = None


class ClockFace:
    """
    Formats the time every tick and the day/date only when the day rolls
    over. The rollover check compares weekdays, which change exactly when
    the date does.
    """

    def __init__(self):
        self._last_weekday = None
        self.today_key = ""

    def tick(self, now: datetime) -> ClockReading:
        clock_text = f"{now.hour:02d}:{now.minute:02d}:{now.second:02d}"

        wd = now.weekday()
        if wd == self._last_weekday:
            return ClockReading(clock_text)
        self._last_weekday = wd

        # YYYY-MM-DD matches the date prefix of events.txt
        self.today_key = f"{now.year:04d}-{now.month:02d}-{now.day:02d}"
        return ClockReading(
            clock_text,
            day_text=DAY_NAMES[wd],
            date_text=f"{now.day:02d}-{now.month:02d}-{now.year:04d}",
            today_key=self.today_key,
        )
