# agenda.py

# --- Standard library imports ---
import re                                # Loose sanity check on the date prefix
from dataclasses import dataclass        # Small immutable records for the display
from enum import Enum                    # Color classes understood by the display
from pathlib import Path                 # Events/response file paths
from typing import Optional, Tuple

# ---------- Constants ----------
SLOT_COUNT = 5              # the display always shows exactly this many lines
MAX_LINE = 200              # characters consumed from one raw line
ALL_DAY_MARK = " all day  "

# Substrings in the helper's stderr that mean the OAuth token needs renewing
EXPIRY_TOKENS = ("Token has been expired",)

REAUTH_LINES = (
    "** Token refresh time **",
    "   cd calendar",
    "   rm token.json",
    "   python clock.py",
    "   wait for the browser and agree",
)
FETCH_FAILED = "** Data failed to fetch **"

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class ColorClass(Enum):
    RED = "red"            # today, errors, instructions
    BLUE = "blue"          # any other day
    NEUTRAL = "neutral"    # blank slot


@dataclass(frozen=True)
class DisplayRecord:
    text: str
    color: ColorClass


BLANK = DisplayRecord("", ColorClass.NEUTRAL)


@dataclass(frozen=True)
class AgendaResult:
    """
    Five display slots plus what the events file gave us.
    `opened` drives the retry accounting in the scheduler; `fetched` says
    whether any of the slots came from the file.
    """
    slots: Tuple[DisplayRecord, ...]
    fetched: bool
    opened: bool


# ---------- Parsing ----------
def _clean(line: str) -> str:
    """Cut at the first newline and cap the length like a fixed read buffer."""
    line = line.split("\n", 1)[0]
    if line.endswith("\r"):
        line = line[:-1]
    return line[:MAX_LINE]


def parse_event_line(line: str, today: str) -> Optional[DisplayRecord]:
    """
    Turn one line of events.txt into a display record.

    Shapes written by the helper:
      2022-10-13 Exercise
      2022-10-13T12:00:00+01:00 Lunch with Robin
      2022-11-01T21:00:00Z Recycling
      * something bad happened

    Offsets are fixed: a '+' offset is skipped as 7 characters (sign, HH:MM
    and the space), anything else ('Z') as 2. Nothing is validated; short
    lines simply give shorter text. Returns None for blank lines.
    """
    line = _clean(line)
    if not line.strip():
        return None

    # Errors from the helper go straight through
    if line[0] == "*":
        return DisplayRecord(line, ColorClass.RED)

    date = line[:10]
    if not _DATE_RE.match(date):
        print(f"[agenda] odd date prefix in line: {line!r}")

    if line[10:11] != "T":
        text = date + ALL_DAY_MARK + line[11:]
    else:
        # keep the start time, drop the offset
        start = 26 if line[19:20] == "+" else 21
        text = f"{date} {line[11:19]} {line[start:]}"

    color = ColorClass.RED if text[:10] == today else ColorClass.BLUE
    return DisplayRecord(text, color)


# ---------- Loading ----------
def _skip_rest(f):
    """Drop the remainder of an over-long line a chunk at a time."""
    while True:
        chunk = f.readline(MAX_LINE)
        if not chunk or chunk.endswith("\n"):
            return


def _read_events(events_path: Path, today: str) -> Optional[list]:
    """
    Parse up to SLOT_COUNT lines of the events file.
    Returns None when the file cannot be opened.
    """
    records = []
    try:
        with events_path.open("r", encoding="utf-8", errors="replace") as f:
            for _ in range(SLOT_COUNT):
                raw = f.readline(MAX_LINE + 1)
                if not raw:
                    break
                if not raw.endswith("\n"):
                    _skip_rest(f)
                rec = parse_event_line(raw, today)
                if rec is not None:
                    records.append(rec)
    except FileNotFoundError:
        return None
    except OSError as e:
        print(f"[agenda] cannot read {events_path}: {e}")
        return None
    return records


def token_expired(response_path: Path) -> bool:
    """True if the helper's stderr capture says the token has expired."""
    try:
        with response_path.open("r", encoding="utf-8", errors="replace") as f:
            for line in f:
                if any(tok in line for tok in EXPIRY_TOKENS):
                    return True
    except FileNotFoundError:
        return False
    except OSError as e:
        print(f"[agenda] cannot read {response_path}: {e}")
    return False


def fill_slots(records) -> Tuple[DisplayRecord, ...]:
    """Pad (or cut) to exactly SLOT_COUNT records."""
    records = list(records)[:SLOT_COUNT]
    records.extend([BLANK] * (SLOT_COUNT - len(records)))
    return tuple(records)


def load_agenda(events_path, response_path, today: str) -> AgendaResult:
    """
    Build the five agenda slots from the helper's output files.

    - events.txt opens -> its records, or a single "data failed" line when
      it holds none (opened=True either way)
    - events.txt missing, token expiry in response.edc -> the re-auth
      instructions
    - events.txt missing otherwise -> a single "data failed" line
    Unused slots are blank. response.edc is only read when events.txt
    could not be opened.
    """
    events_path = Path(events_path)
    response_path = Path(response_path)

    records = _read_events(events_path, today)
    if records:
        return AgendaResult(fill_slots(records), fetched=True, opened=True)

    failed = [DisplayRecord(FETCH_FAILED, ColorClass.RED)]
    if records is not None:
        print(f"[agenda] events file {events_path} had no entries")
        return AgendaResult(fill_slots(failed), fetched=False, opened=True)

    print(f"[agenda] no events file at {events_path}")
    if token_expired(response_path):
        print("[agenda] calendar token has expired")
        failed = [DisplayRecord(t, ColorClass.RED) for t in REAUTH_LINES]
    return AgendaResult(fill_slots(failed), fetched=False, opened=False)
