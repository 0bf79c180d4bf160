import os
from pathlib import Path
from dataclasses import dataclass

# Creates the directory (and any parents) if it isn't there yet, and hands the path back.
def ensure_directory(path: Path):
    path.mkdir(parents=True,exist_ok=True)
    return path

# Picks the host state directory, in order: POMO_STATE_DIR, XDG_STATE_HOME/pomo, ~/.local/state/pomo.
def find_state_dir() -> Path | None:
    override = os.getenv("POMO_STATE_DIR")
    if override:
        return Path(override)
    xdg_state = os.getenv("XDG_STATE_HOME")
    if xdg_state:
        return Path(xdg_state) / "pomo"
    try:
        return Path.home() / ".local" / "state" / "pomo"
    except RuntimeError:
        return None

# Dataclass for accessing paths across program. Every field is None when no usable state directory exists,
# which turns persistence off for the whole process.
@dataclass(frozen=False)
class ProjectPaths:

    state: Path | None
    logs: Path | None
    timers: Path | None
    config: Path | None

    @staticmethod
    def build(state_dir: Path | None = None):
        state_dir = state_dir or find_state_dir()
        if state_dir is None:
            return ProjectPaths(state=None, logs=None, timers=None, config=None)
        try:
            state = ensure_directory(state_dir)
            logs = ensure_directory(state / "logs")
        except OSError:
            return ProjectPaths(state=None, logs=None, timers=None, config=None)

        return ProjectPaths(
            state = state,
            logs = logs,
            timers = state / "pomo_timers.txt",
            config = state / "config.json"
        )
PATHS = ProjectPaths.build()
