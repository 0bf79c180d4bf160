import logging
from pathlib import Path
from logging.handlers import RotatingFileHandler
from pomo.common.setup import PATHS

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s:%(filename)s:%(lineno)d] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

def get_logger(
        name = "pomo",
        level = logging.INFO,
        log_dir: Path | None = None,
        max_bytes = 1024 * 1024,
        backup_count = 3,
        persistent = True,
        console = False
) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.propagate = False
    logger.setLevel(level)

    log_dir = log_dir or PATHS.logs
    fmt = logging.Formatter(LOG_FORMAT,LOG_DATE_FORMAT)

    # Without a log dir there's nowhere to put the file handlers, only the console one can be attached.
    if log_dir is not None:
        log_dir.mkdir(parents=True,exist_ok=True)

        # Setup persistent handler
        persistent_handler_name = f"{name}:persistent"
        if persistent and not any(h.get_name() == persistent_handler_name for h in logger.handlers):
            persistent_handler = RotatingFileHandler(
                filename=log_dir / f"{name}.log",
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
                delay=True,
            )
            persistent_handler.setLevel(level)
            persistent_handler.setFormatter(fmt)
            persistent_handler.set_name(persistent_handler_name)
            logger.addHandler(persistent_handler)

        # Setup latest-only handler (always overwritten each run)
        latest_handler_name = f"{name}:latest"
        if not any(h.get_name() == latest_handler_name for h in logger.handlers):
            latest_handler = logging.FileHandler(
                filename=log_dir / "latest.log",
                mode="w",             # overwrite on each run
                encoding="utf-8",
                delay=True
            )
            latest_handler.setLevel(level)
            latest_handler.setFormatter(fmt)
            latest_handler.set_name(latest_handler_name)
            logger.addHandler(latest_handler)

    # Setup console handler
    console_handler_name = f"{name}:console"
    if console and not any(h.get_name() == console_handler_name for h in logger.handlers):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(fmt)
        console_handler.set_name(console_handler_name)
        logger.addHandler(console_handler)

    return logger

# Re-applies level/console settings from a loaded PomoConfig to the shared logger.
def apply_config(config):
    level = logging.getLevelName(config.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    logger = get_logger(level=level, console=config.console_log)
    for handler in logger.handlers:
        handler.setLevel(level)
    return logger

log = get_logger(level=logging.DEBUG)
