import sys
from pomo.common.logger import log, apply_config
from pomo.core.config import load_config
from pomo.core.timer_store import get_store

# Prints every stored timer, plus which one was started last and which one finishes first.
def show_status(store, out=sys.stdout):
    if store.is_empty():
        print("No timers.", file=out)
        return
    for timer in sorted(store.get_all(), key=lambda t: t.id):
        print(timer, file=out)
    latest = store.get_latest()
    if latest is not None:
        print(f"Latest: #{latest.id} {latest.name}", file=out)
    first = store.get_first_to_finish()
    if first is not None:
        print(f"Next to finish: #{first.id} {first.name}", file=out)

# Entry point for `python -m pomo`
def run() -> None:
    try:
        config = load_config()
        apply_config(config)
        show_status(get_store(config))
    except SystemExit:
        raise
    except Exception:
        # Full stack trace, always
        log.exception("Uncaught exception in entrypoint, exiting")
        sys.exit(1)

if __name__ == "__main__":
    run()
