import json
import math
import time
from pomo.common.logger import log
from pomo.util import format_time

# json.loads accepts NaN and Infinity, and bool is an int subclass, so both need ruling out explicitly.
def _is_finite_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)

# A single countdown. Wall-clock seconds (time.time()) are used throughout rather than monotonic ones, since
# start_time has to mean the same thing after the timer is written to disk and read back by a new process.
class Timer:

    def __init__(self, time_limit, name=None, config=None, id=None, start_time=None, paused_at=None):
        if time_limit <= 0:
            raise ValueError(f"Timer time_limit must be positive, got {time_limit}")
        self.id = id
        self.time_limit = float(time_limit)
        self.config = config
        self.name = name or (config.default_timer_name if config is not None else "Timer")
        self.start_time = start_time
        self.paused_at = paused_at  # remaining seconds frozen at pause time

        log.debug(f"Initialized timer {id} '{self.name}' with limit {self.time_limit}s, start_time {start_time}")

    def __repr__(self):
        return f"Timer(id={self.id!r}, name={self.name!r}, time_limit={self.time_limit!r}, start_time={self.start_time!r})"

    def __str__(self):
        remaining = self.time_remaining()
        status = "paused" if self.is_paused() else ("running" if remaining is not None else "stopped")
        shown = format_time(remaining if remaining is not None else self.time_limit)
        return f"#{self.id} {self.name} {shown} ({status})"

    #region === Countdown ===

    def start(self):
        if self.start_time is None:
            self.start_time = time.time()
            log.debug(f"Started timer {self.id} '{self.name}' at {self.start_time}")
    def stop(self):
        self.start_time = None
        self.paused_at = None
        log.debug(f"Stopped timer {self.id} '{self.name}'")

    # Pausing keeps start_time so the store can still tell which timer was started last.
    def pause(self):
        if self.is_running():
            self.paused_at = self.time_remaining()
            log.debug(f"Paused timer {self.id} '{self.name}' with {self.paused_at}s left")
    # Shifts start_time forward so the countdown picks up where pause() left off.
    def resume(self):
        if self.paused_at is not None:
            self.start_time = time.time() - (self.time_limit - self.paused_at)
            self.paused_at = None
            log.debug(f"Resumed timer {self.id} '{self.name}'")

    def is_paused(self):
        return self.paused_at is not None
    def is_running(self):
        return self.start_time is not None and not self.is_paused() and self.time_remaining() is not None

    def time_elapsed(self):
        if self.start_time is None:
            return None
        if self.paused_at is not None:
            return self.time_limit - self.paused_at
        return time.time() - self.start_time

    # Seconds left, or None when the timer hasn't been started or has already run out.
    def time_remaining(self):
        if self.start_time is None:
            return None
        if self.paused_at is not None:
            return self.paused_at
        remaining = self.time_limit - (time.time() - self.start_time)
        if remaining <= 0:
            return None
        return remaining

    #endregion === Countdown ===

    #region === Storing and Loading ===

    # Serializes the timer to exactly one line of JSON (no trailing newline).
    def store(self):
        return json.dumps({
            "id": self.id,
            "name": self.name,
            "time_limit": self.time_limit,
            "start_time": self.start_time,
            "paused_at": self.paused_at,
        }, separators=(",", ":"))

    # Parses a line produced by store(). Malformed lines give back None rather than raising, so one bad record
    # can't take down a whole load.
    @classmethod
    def load(cls, line, config):
        try:
            data = json.loads(line)
        except json.JSONDecodeError:
            return None
        if not isinstance(data, dict):
            return None

        timer_id = data.get("id")
        # bool is an int subclass
        if not isinstance(timer_id, int) or isinstance(timer_id, bool) or timer_id < 1:
            return None
        time_limit = data.get("time_limit")
        if not _is_finite_number(time_limit) or time_limit <= 0:
            return None

        start_time = data.get("start_time")
        if start_time is not None and not _is_finite_number(start_time):
            return None
        paused_at = data.get("paused_at")
        if paused_at is not None and not _is_finite_number(paused_at):
            return None
        name = data.get("name")
        if name is not None and not isinstance(name, str):
            name = str(name)

        return cls(
            time_limit,
            name=name,
            config=config,
            id=timer_id,
            start_time=start_time,
            paused_at=paused_at
        )

    #endregion === Storing and Loading ===
