# cli.py
import argparse
from datetime import datetime
from zoneinfo import ZoneInfo

from agenda import load_agenda
from clockface import ClockFace


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="piclock", description="Clock and calendar kiosk")
    p.add_argument("-t", "--test", action="store_true",
                   help="test mode: short cycles and no calendar fetch")
    p.add_argument("--config", metavar="PATH", help="config.json to use instead of the default")
    p.add_argument("--dump", action="store_true",
                   help="print the current agenda from the calendar files and exit")
    return p


def parse_args(argv=None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def dump_agenda(settings, now=None, out=print) -> int:
    """Headless look at what the kiosk would show right now."""
    now = now or datetime.now(ZoneInfo(settings.tz_name))
    reading = ClockFace().tick(now)
    out(f"{reading.clock_text}  {reading.day_text}  {reading.date_text}")

    result = load_agenda(settings.events_path, settings.response_path, reading.today_key)
    for i, rec in enumerate(result.slots):
        out(f"  [{i}] {rec.color.value:<7} {rec.text}")
    return 0 if result.fetched else 1
