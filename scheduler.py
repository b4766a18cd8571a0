# scheduler.py

from pathlib import Path
from typing import Optional, Tuple

from agenda import AgendaResult, load_agenda

# ---------- Timing (in ticks of one second) ----------
INITIAL_TICKS = 25      # let the window come up before the first fetch
FETCH_AT = 10           # start the helper this many ticks before parsing
REFRESH_TICKS = 12      # manual refresh: fetch in 2s, parse in 12s
LONG_CYCLE = 60 * 60    # normal hourly refresh
TEST_CYCLE = 60         # hourly refresh shortened for test mode
RETRY_DELAY = 60 * 2    # quick re-check while the helper is still struggling
MAX_RETRIES = 4         # quick re-checks before falling back to the long cycle


def next_delay(opened: bool, retries: int, test_mode: bool = False) -> Tuple[int, int]:
    """
    Work out (ticks until the next parse, new retry count) after a load.
    An events file that opened resets the retry count, even an empty one;
    a missing file bumps it and asks for a quick re-check until
    MAX_RETRIES failures in a row.
    """
    long_cycle = TEST_CYCLE if test_mode else LONG_CYCLE
    if opened:
        return long_cycle, 0
    retries += 1
    if retries < MAX_RETRIES:
        return RETRY_DELAY, retries
    return long_cycle, retries


class FetchScheduler:
    """
    Countdown that drives the calendar refresh, one tick per second.

    At FETCH_AT ticks the stale output files are removed and the provider
    is asked to start the helper (it must not block). At zero the files
    are parsed and the countdown restarts from the delay picked by
    next_delay(). If the helper is slow the parse sees no events file and
    drops into the retry path.
    """

    def __init__(self, events_path, response_path, provider, *,
                 test_mode: bool = False, initial_ticks: int = INITIAL_TICKS,
                 loader=load_agenda):
        self.events_path = Path(events_path)
        self.response_path = Path(response_path)
        self.provider = provider
        self.test_mode = test_mode
        self.loader = loader

        self.ticks_remaining = initial_ticks
        self.retries = 0

    def tick(self, today: str) -> Optional[AgendaResult]:
        """Advance one tick; returns the new agenda when one was loaded."""
        self.ticks_remaining -= 1

        if self.ticks_remaining == FETCH_AT and not self.test_mode:
            self._start_fetch()

        if self.ticks_remaining > 0:
            return None

        result = self.loader(self.events_path, self.response_path, today)
        self.ticks_remaining, self.retries = next_delay(
            result.opened, self.retries, self.test_mode)
        if not result.opened:
            print(f"[agenda] fetch attempt {self.retries} failed, "
                  f"next check in {self.ticks_remaining}s")
        return result

    def refresh(self):
        """Manual refresh: shorten the countdown, leave the retries alone."""
        self.ticks_remaining = REFRESH_TICKS

    def _clear_stale(self):
        """Remove last run's output so it can't pass for fresh data."""
        for p in (self.response_path, self.events_path):
            try:
                p.unlink(missing_ok=True)
            except OSError as e:
                print(f"[fetch] could not remove {p}: {e}")

    def _start_fetch(self):
        self._clear_stale()
        self.provider.start_fetch()
