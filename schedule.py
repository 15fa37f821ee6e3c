import sys, threading, time

from errors import MintCancelled, ScheduleError
from helpers import get_time_remaining, log

TICK_SECONDS = 1.0

class ScheduleGate:
    """Blocks until a unix start time, drawing a countdown line once per tick.

    The wait is one `Event.wait(delay)`; the countdown runs on its own thread so a
    slow or broken terminal never pushes the mint back. Setting `cancel` (from a
    signal handler) aborts the wait with MintCancelled.
    """

    def __init__(self, cancel=None, clock=time.time, tick=TICK_SECONDS, out=None):
        self.cancel = cancel or threading.Event()
        self.clock = clock
        self.tick = tick
        self.out = out
        self.waiting = False

    def _render(self, start_time):
        remaining = get_time_remaining(start_time, self.clock())
        if remaining.total_seconds <= 0:
            return
        self._write(f"\r! Time remaining: {remaining.formatted}")

    def _write(self, text):
        out = self.out or sys.stdout
        out.write(text)
        out.flush()

    def _run_ticker(self, start_time, stop):
        warned = False
        while not stop.is_set():
            try:
                self._render(start_time)
            except Exception as e:  # display only
                if not warned:
                    log.warning(f"Countdown display failed: {e}")
                    warned = True
            stop.wait(self.tick)

    def delay_for(self, start_time):
        delay = int(start_time) - self.clock()
        if delay < 0:
            raise ScheduleError(f"Start time {start_time} is {-delay:.0f}s in the past")
        return delay

    def wait_until(self, start_time):
        """Return once `start_time` is reached; raise MintCancelled on shutdown."""
        delay = self.delay_for(start_time)
        if self.cancel.is_set():
            raise MintCancelled("Shutdown requested before scheduled mint")
        stop = threading.Event()
        ticker = threading.Thread(target=self._run_ticker, args=(start_time, stop), name="countdown", daemon=True)
        self.waiting = True
        ticker.start()
        try:
            if self.cancel.wait(delay):
                raise MintCancelled("Scheduled mint cancelled")
        finally:
            stop.set()
            ticker.join(timeout=self.tick * 2)
            self.waiting = False
            try:
                self._write("\n")
            except (OSError, ValueError):
                pass
