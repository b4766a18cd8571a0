# main.py

# --- Standard library imports ---
import sys                   # Exit status for fatal style errors
import threading             # Run the tray icon without blocking the UI
from datetime import datetime
from zoneinfo import ZoneInfo             # IANA timezone support (Python 3.9+)

# --- Third-party / GUI imports ---
import tkinter as tk                     # Tkinter GUI for the kiosk window
from PIL import Image, ImageDraw         # Build an in-memory tray icon image
import pystray                           # System tray icon + menu
from apscheduler.schedulers.background import BackgroundScheduler  # Runs the calendar helper off the UI thread

# --- Local modules ---
from agenda import SLOT_COUNT, BLANK
from clockface import ClockFace
from cli import parse_args, dump_agenda
from scheduler import FetchScheduler
from settings import load_settings
from styles import StyleError, merge_styles
from Providers.script import ScriptProvider

TICK_MS = 1_000


class App:
    def __init__(self, settings, test_mode=False):
        """
        Initialize core state:
        - timezone, clock formatter and fetch countdown
        - the background scheduler the helper runs on
        - Tkinter window, labels and buttons (styles applied up front;
          a bad style stops the app)
        """
        self.settings = settings
        self.tz = ZoneInfo(settings.tz_name)
        self.test_mode = test_mode
        self.icon = None

        # Background job scheduler (runs alongside Tk mainloop).
        # IMPORTANT: pass the timezone NAME to avoid dateutil tzlocal bug paths.
        self.jobs = BackgroundScheduler(timezone=settings.tz_name)
        self.jobs.start()

        self.provider = ScriptProvider(
            settings.fetch_command,
            settings.calendar_dir,
            settings.response_path,
            scheduler=self.jobs,
            timeout=settings.fetch_timeout,
        )
        self.clock = ClockFace()
        self.fetcher = FetchScheduler(
            settings.events_path,
            settings.response_path,
            self.provider,
            test_mode=test_mode,
        )

        # ----- Tkinter window setup -----
        self.tk_root = tk.Tk()
        self.tk_root.title("Pi-Clock" + (" [test]" if test_mode else ""))
        self.tk_root.geometry(f"{settings.win_w}x{settings.win_h}+{settings.win_x}+{settings.win_y}")
        if settings.fullscreen:
            self.tk_root.attributes("-fullscreen", True)

        # A plain frame with absolute placement, like a fixed layout
        self.fixed = tk.Frame(self.tk_root, width=settings.win_w, height=settings.win_h)
        self.fixed.pack(fill="both", expand=True)

        self.close_btn = tk.Button(self.fixed, text="Close", command=self.quit)
        self.refresh_btn = tk.Button(self.fixed, text="Refresh", command=self.refresh)
        self.close_btn.place(x=25, y=15)
        self.refresh_btn.place(x=1140, y=15)

        self.time_lbl = tk.Label(self.fixed)
        self.day_lbl = tk.Label(self.fixed)
        self.date_lbl = tk.Label(self.fixed)
        self.time_lbl.place(x=100, y=70)
        self.day_lbl.place(x=95, y=320)
        self.date_lbl.place(x=720, y=320)

        self.slots = [tk.Label(self.fixed, anchor="w") for _ in range(SLOT_COUNT)]
        for i, lbl in enumerate(self.slots):
            lbl.place(x=60, y=455 + i * 70)

        self._apply_styles()

        self.tk_root.bind("<Escape>", lambda e: self.quit())
        self.tk_root.bind("<F5>", lambda e: self.refresh())

    # ---------- Styles ----------
    def _apply_styles(self):
        """
        Validate and apply the style table. Without it the kiosk is
        unreadable, so any problem is fatal with a pointer to the culprit.
        """
        try:
            self.styles = merge_styles(self.settings.styles)
            bg = self.styles["window"]["bg"]
            self.tk_root.configure(bg=bg)
            self.fixed.configure(bg=bg)

            btn = self.styles["button"]
            for b in (self.close_btn, self.refresh_btn):
                b.configure(fg=btn["fg"], bg=btn["bg"], font=btn["font"],
                            bd=btn.get("border", 0), activebackground=btn["bg"])

            self.time_lbl.configure(**self._label_style("clock"))
            self.day_lbl.configure(**self._label_style("day"))
            self.date_lbl.configure(**self._label_style("day"))
            for lbl in self.slots:
                lbl.configure(text=BLANK.text, **self._label_style(BLANK.color.value))
        except (StyleError, tk.TclError) as e:
            print(f"[style] {e}", file=sys.stderr)
            self.jobs.shutdown(wait=False)
            self.tk_root.destroy()
            sys.exit(1)

    def _label_style(self, name):
        st = self.styles[name]
        return {
            "fg": st["fg"],
            "bg": st.get("bg", self.styles["window"]["bg"]),
            "font": st["font"],
        }

    # ---------- UI ----------
    def show_agenda(self, result):
        """Write the five slots; colours follow each record's class."""
        for lbl, rec in zip(self.slots, result.slots):
            lbl.configure(text=rec.text, **self._label_style(rec.color.value))

    def _tick_ui(self):
        """
        Every second:
        - Update the clock (day and date only when the day changes).
        - Advance the fetch countdown and show a new agenda if one was loaded.
        """
        reading = self.clock.tick(datetime.now(self.tz))
        self.time_lbl.configure(text=reading.clock_text)
        if reading.day_text is not None:
            self.day_lbl.configure(text=reading.day_text)
            self.date_lbl.configure(text=reading.date_text)

        result = self.fetcher.tick(self.clock.today_key)
        if result is not None:
            self.show_agenda(result)

        # Schedule the next tick in ~1 second
        self.tk_root.after(TICK_MS, self._tick_ui)

    # ---------- Tray ----------
    def make_tray_icon(self):
        """
        Build a simple round clock-face tray icon and menu.
        Run the tray icon on a daemon thread so it doesn't block Tk mainloop.
        """
        img = Image.new("RGBA", (64, 64), (0, 0, 0, 0))
        d = ImageDraw.Draw(img)
        d.ellipse((8, 8, 56, 56), fill=(65, 105, 225, 255))         # royal blue
        d.line((32, 32, 32, 16), fill=(255, 255, 255, 255), width=4)
        d.line((32, 32, 44, 32), fill=(255, 255, 255, 255), width=4)

        # Menu actions run on the tray thread; marshal them to Tk
        menu = pystray.Menu(
            pystray.MenuItem("Refresh", lambda: self.tk_root.after(0, self.refresh)),
            pystray.MenuItem("Quit", lambda: self.tk_root.after(0, self.quit)),
        )
        self.icon = pystray.Icon("PiClock", img, "Pi-Clock", menu)
        threading.Thread(target=self.icon.run, daemon=True).start()

    # ---------- Control ----------
    def refresh(self, _=None):
        """Fetch and reparse soon (Refresh button, F5 or tray)."""
        print("[agenda] manual refresh")
        self.fetcher.refresh()

    def quit(self, _=None):
        """Cleanly stop tray + scheduler and close the Tk window."""
        if self.icon:
            self.icon.stop()
        if self.jobs.running:
            self.jobs.shutdown(wait=False)
        self.tk_root.destroy()

    # ---------- Boot ----------
    def run(self):
        """
        App entrypoint:
        - Start the tray icon
        - Start the 1 second tick
        - Enter Tk main loop
        """
        self.make_tray_icon()
        self.tk_root.after(TICK_MS, self._tick_ui)
        self.tk_root.mainloop()


def main(argv=None):
    args = parse_args(argv)
    settings = load_settings(args.config)
    # Quick visibility of the effective timezone and calendar dir at startup
    print(f"[tz] Using timezone: {settings.tz_name}")
    print(f"[config] calendar dir: {settings.calendar_dir}" + (" (test mode)" if args.test else ""))

    if args.dump:
        return dump_agenda(settings)
    App(settings, test_mode=args.test).run()
    return 0


# Only run the app when this file is executed directly (not on import)
if __name__ == "__main__":
    sys.exit(main())
