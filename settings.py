# settings.py

# --- Standard library imports ---
import os                    # Environment overrides (PICLOCK_TZ, PICLOCK_CALDIR)
import json                  # Read/parse config.json
from dataclasses import dataclass, field
from typing import Optional
from pathlib import Path

# --- Local timezone detection / override ---
from tzlocal import get_localzone_name    # Detect the machine's IANA timezone name

# Paths
CONFIG_PATH = Path(__file__).with_name("config.json")

# Defaults
DEFAULT_CALDIR = "/home/pi/calendar"
DEFAULT_FETCH_COMMAND = ["python", "clock.py"]
EVENTS_NAME = "events.txt"
RESPONSE_NAME = "response.edc"

# My old screen is 1440x900; leave room for borders and the title bar
WINDOW_W = 1440 - 30
WINDOW_H = 900 - 52


@dataclass
class Settings:
    tz_name: str
    calendar_dir: Path
    fetch_command: list = field(default_factory=lambda: list(DEFAULT_FETCH_COMMAND))
    fetch_timeout: Optional[float] = None     # seconds; None lets the helper take its time
    win_w: int = WINDOW_W
    win_h: int = WINDOW_H
    win_x: int = 0
    win_y: int = 0
    fullscreen: bool = False
    styles: dict = field(default_factory=dict)    # overrides, validated by styles.py

    @property
    def events_path(self) -> Path:
        return self.calendar_dir / EVENTS_NAME

    @property
    def response_path(self) -> Path:
        return self.calendar_dir / RESPONSE_NAME


def _read_config(path: Path) -> dict:
    try:
        with path.open("r", encoding="utf-8") as f:
            cfg = json.load(f)
    except FileNotFoundError:
        # no config.json, just stick with defaults
        return {}
    except (OSError, ValueError) as e:
        print(f"[config] failed to load {path}: {e}")
        return {}
    if not isinstance(cfg, dict):
        print(f"[config] {path} must hold a JSON object; using defaults")
        return {}
    return cfg


def _as_int(value, default):
    # Accept ints or numeric strings; fallback on bad input
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def load_settings(config_path=None, env=None) -> Settings:
    """
    Defaults <- config.json <- environment.
    A broken config.json is reported and ignored; style overrides are
    passed through untouched so a bad style still stops the app at startup.
    """
    env = os.environ if env is None else env
    cfg = _read_config(Path(config_path) if config_path else CONFIG_PATH)

    tz_name = env.get("PICLOCK_TZ") or cfg.get("timezone") or get_localzone_name()
    caldir = env.get("PICLOCK_CALDIR") or cfg.get("calendar_dir") or DEFAULT_CALDIR

    command = cfg.get("fetch_command", DEFAULT_FETCH_COMMAND)
    if isinstance(command, str):
        command = command.split()
    if not isinstance(command, list) or not command or not all(isinstance(c, str) for c in command):
        print(f"[config] bad fetch_command {command!r}; using {DEFAULT_FETCH_COMMAND}")
        command = list(DEFAULT_FETCH_COMMAND)

    timeout = cfg.get("fetch_timeout")
    if timeout is not None:
        try:
            timeout = float(timeout)
            if timeout <= 0:
                timeout = None
        except (TypeError, ValueError):
            print(f"[config] bad fetch_timeout {timeout!r}; ignoring")
            timeout = None

    # --- Normalize the window block with safe fallbacks ---
    win = cfg.get("window") or {}
    if not isinstance(win, dict):
        win = {}

    return Settings(
        tz_name=tz_name,
        calendar_dir=Path(caldir).expanduser(),
        fetch_command=list(command),
        fetch_timeout=timeout,
        win_w=_as_int(win.get("width"), WINDOW_W),
        win_h=_as_int(win.get("height"), WINDOW_H),
        win_x=_as_int(win.get("x"), 0),
        win_y=_as_int(win.get("y"), 0),
        fullscreen=bool(win.get("fullscreen", False)),
        styles=cfg.get("styles") or {},
    )
