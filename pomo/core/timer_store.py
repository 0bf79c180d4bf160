"""In-memory registry of active timers, mirrored to a flat file.

Timers live in a dict keyed by integer ID. Removing a timer leaves a hole
rather than renumbering, and new timers without an ID take the lowest free
one. Every mutation rewrites the whole backing file, one ``Timer.store()``
line per timer.
"""

import threading
from pathlib import Path
from pomo.common.logger import log
from pomo.common.setup import PATHS
from pomo.core.timer import Timer

# Marks "use the process-wide path", since None already means "don't persist".
_DEFAULT_FILE = object()


class TimerStore:

    def __init__(self, config, filename=_DEFAULT_FILE, timer_cls=Timer):
        self.config = config
        if filename is _DEFAULT_FILE:
            filename = PATHS.timers
        self.filename = Path(filename) if filename is not None else None
        self.timer_cls = timer_cls
        self.timers = {}
        self._lock = threading.RLock()

        if self.filename is None:
            log.warning("No timer file available, timers will only be kept in memory.")
        elif self.filename.exists():
            self.load_from_file()
        else:
            log.info(f"Timer file '{self.filename}' not found, creating a new one.")
            self.save_to_file()

    def __len__(self):
        return len(self.timers)

    #region === Identity and Queries ===

    # Lowest positive ID with no timer in it. Linear, but timer counts are small.
    def first_available_id(self):
        timer_id = 1
        while timer_id in self.timers:
            timer_id += 1
        return timer_id

    def len(self):
        return len(self.timers)

    def is_empty(self):
        return self.len() == 0

    def get(self, timer_id):
        return self.timers.get(timer_id)

    def get_all(self):
        return list(self.timers.values())

    # Timer with the newest start_time. Timers that were never started don't count.
    def get_latest(self):
        latest_timer = None
        for timer_id in sorted(self.timers):
            timer = self.timers[timer_id]
            if timer.start_time is None:
                continue
            if latest_timer is None or timer.start_time > latest_timer.start_time:
                latest_timer = timer
        return latest_timer

    # Timer with the least time remaining. Finished and unstarted timers report None and are skipped, not
    # treated as zero.
    def get_first_to_finish(self):
        min_timer = None
        min_time_left = None
        for timer_id in sorted(self.timers):
            timer = self.timers[timer_id]
            time_left = timer.time_remaining()
            if time_left is None:
                continue
            if min_time_left is None or time_left < min_time_left:
                min_timer = timer
                min_time_left = time_left
        return min_timer

    #endregion === Identity and Queries ===

    #region === Mutations ===

    def store(self, timer):
        with self._lock:
            if timer.id is None:
                timer.id = self.first_available_id()
            self.timers[timer.id] = timer
            log.debug(f"Stored timer {timer.id}")
            if self.filename is not None:
                self.save_to_file()

    # Accepts either a timer or its bare ID. Removing an ID that isn't stored is a no-op.
    def remove(self, timer):
        timer_id = timer if isinstance(timer, int) else timer.id
        with self._lock:
            if self.timers.pop(timer_id, None) is not None:
                log.debug(f"Removed timer {timer_id}")
            if self.filename is not None:
                self.save_to_file()

    def pop(self, timer_id=None):
        """Remove and return a timer.

        With an explicit ID, pops that timer (or returns None if there isn't
        one). Without an ID, pops the only timer when exactly one is stored,
        wherever its slot is, and otherwise pops ``get_latest()``. If nothing
        qualifies, nothing is removed and None is returned.
        """
        with self._lock:
            if timer_id is None:
                if self.len() == 1:
                    timer_id = next(iter(self.timers))
                else:
                    latest_timer = self.get_latest()
                    if latest_timer is None:
                        return None
                    timer_id = latest_timer.id

            timer = self.get(timer_id)
            if timer is not None:
                self.remove(timer)
            return timer

    #endregion === Mutations ===

    #region === Saving and Loading ===

    # Rewrites the whole backing file from memory.
    def save_to_file(self):
        if self.filename is None:
            return
        with self._lock:
            self._write_timers(self.timers)

    # Replaces the in-memory timers with whatever the backing file holds. Lines that don't give back a timer with
    # an ID are logged and skipped.
    def load_from_file(self):
        if self.filename is None:
            return
        with self._lock:
            self.timers = {timer.id: timer for timer in self._read_timers()}
            log.info(f"Loaded {self.len()} timers from '{self.filename}'")

    def update_saved_timer(self, timer, delete=False):
        """Reconcile one timer against what's on disk, ignoring memory.

        Re-reads the backing file, drops ``timer`` from it when ``delete`` is
        set or inserts/overwrites it otherwise, and writes the result back.
        The in-memory timers are left alone, so this is the path to use when
        memory and disk may have drifted apart.
        """
        if timer.id is None:
            raise ValueError("Cannot update a saved timer that has no id")
        if self.filename is None:
            log.debug(f"No timer file available, skipping update of saved timer {timer.id}")
            return

        with self._lock:
            log.debug(f"Updating timer {timer.id} in '{self.filename}' with delete: {delete}")
            timers = {}
            if self.filename.exists():
                for existing_timer in self._read_timers():
                    timers[existing_timer.id] = existing_timer

            if delete:
                if timers.pop(timer.id, None) is not None:
                    log.debug(f"Deleted timer {timer.id} from '{self.filename}'")
            else:
                timers[timer.id] = timer
            self._write_timers(timers)

    def _read_timers(self):
        loaded = []
        try:
            # Undecodable bytes become U+FFFD so the line fails to load on its own instead of aborting the read
            with open(self.filename, "r", encoding="utf-8", errors="replace") as f:
                for line in f:
                    line = line.rstrip("\n")
                    if not line.strip():
                        continue
                    timer = self.timer_cls.load(line, self.config)
                    if timer is not None and timer.id is not None:
                        loaded.append(timer)
                    else:
                        log.warning(f"Failed to load timer from line: {line}")
        except OSError:
            log.error(f"Could not open '{self.filename}' for reading")
            raise
        return loaded

    def _write_timers(self, timers):
        try:
            with open(self.filename, "w", encoding="utf-8") as f:
                for timer_id in sorted(timers):
                    f.write(timers[timer_id].store() + "\n")
        except OSError:
            log.error(f"Could not open '{self.filename}' for writing")
            raise
        log.debug(f"Saved {len(timers)} timers to '{self.filename}'")

    #endregion === Saving and Loading ===


_STORE = None

# Process-wide store, built on first use. Later calls hand back the same instance and ignore `config`.
def get_store(config=None):
    global _STORE
    if _STORE is None:
        if config is None:
            from pomo.core.config import load_config
            config = load_config()
        _STORE = TimerStore(config)
    return _STORE
