# providers/script.py

# --- Standard library imports ---
import subprocess            # Run the calendar helper as its own OS process
from pathlib import Path

# --- Third-party imports ---
from apscheduler.schedulers.background import BackgroundScheduler  # Off-thread job runner

from Providers.base import Provider


class ScriptProvider(Provider):
    """
    Runs the calendar helper (default `python clock.py`) from the calendar
    directory with its stderr captured in the response file.

    The process is started from a one-shot APScheduler job so the Tk thread
    never waits on it. Nobody reads the exit status back; the agenda loader
    only looks at the files the helper leaves behind.
    """

    JOB_ID = "calendar-fetch"

    def __init__(self, command, workdir, response_path, scheduler=None, timeout=None):
        self.command = list(command)
        self.workdir = Path(workdir)
        self.response_path = Path(response_path)
        self.timeout = timeout

        # Share the App's scheduler when given one, otherwise run our own
        self._own_scheduler = scheduler is None
        self.scheduler = scheduler
        if self._own_scheduler:
            self.scheduler = BackgroundScheduler()
            self.scheduler.start()

    def start_fetch(self):
        # One fetch at a time: a still-running helper makes APScheduler skip
        # this run (max_instances=1) instead of piling up processes.
        self.scheduler.add_job(
            self.run_helper,
            id=self.JOB_ID,
            replace_existing=True,
            max_instances=1,
            misfire_grace_time=60,
        )

    def run_helper(self):
        """Blocking run of the helper; called from the scheduler thread."""
        print(f"[fetch] running {' '.join(self.command)} in {self.workdir}")
        try:
            with self.response_path.open("w", encoding="utf-8") as err:
                proc = subprocess.run(
                    self.command,
                    cwd=self.workdir,
                    stdout=subprocess.DEVNULL,
                    stderr=err,
                    timeout=self.timeout,
                )
        except (OSError, subprocess.SubprocessError) as e:
            print(f"[fetch] helper did not run: {e}")
            return None
        print(f"[fetch] helper exited with status {proc.returncode}")
        return proc.returncode

    def shutdown(self):
        if self._own_scheduler and self.scheduler.running:
            self.scheduler.shutdown(wait=False)
