import json
from dataclasses import dataclass, asdict, fields
from pomo.common.logger import log
from pomo.common.setup import PATHS

#region === Defaults and Paths ===

CONFIG_PATH = PATHS.config

# Default values for every setting, also used to type-check whatever gets loaded from disk.
_CONFIG_DEFAULTS = {
    "default_timer_name": "Timer",
    "log_level": "INFO",
    "console_log": False,
}

# Settings value handed to the store and forwarded untouched to every Timer.load() call.
@dataclass
class PomoConfig:
    default_timer_name: str = _CONFIG_DEFAULTS["default_timer_name"]
    log_level: str = _CONFIG_DEFAULTS["log_level"]
    console_log: bool = _CONFIG_DEFAULTS["console_log"]

    def to_dict(self):
        return asdict(self)

    # Builds a config from a plain dict, ignoring unknown keys. Returns the config and the set of keys that
    # were missing or had the wrong type and so fell back to their default.
    @classmethod
    def from_dict(cls, data):
        defaulted_values = set()
        values = {}
        for field in fields(cls):
            default = _CONFIG_DEFAULTS[field.name]
            value = data.get(field.name, default)
            # bool is an int subclass, so compare exact types
            if type(value) is not type(default):
                defaulted_values.add(field.name)
                value = default
            values[field.name] = value
        return cls(**values), defaulted_values

#endregion === Defaults and Paths ===

#region === Saving and Loading Config ===

# Loads settings from the config file, falling back to defaults for anything missing or malformed.
def load_config(path=None):
    path = path or CONFIG_PATH
    if path is None:
        log.info("No state directory available, using default config.")
        return PomoConfig()
    try:
        if not path.exists():
            log.info(f"No existing config found at '{path}', using default config.")
            return PomoConfig()

        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise TypeError(f"Expected a JSON object in '{path}', got {type(data).__name__}")

        config, defaulted_values = PomoConfig.from_dict(data)
        if defaulted_values:
            log.warning(f"Loaded config from '{path}', but with missing values that were defaulted: {', '.join(sorted(defaulted_values))}")
        else:
            log.info(f"Successfully loaded config from '{path}'.")
        return config
    # Fall back to defaults in case of error, but warn in log
    except (json.JSONDecodeError, OSError, TypeError):
        log.warning(f"Ran into an error while trying to load '{path}', falling back to default config.",exc_info=True)
        return PomoConfig()

# Write the given config to disk.
def save_config(config, path=None):
    path = path or CONFIG_PATH
    if path is None:
        raise RuntimeError("No state directory available, cannot save config.")
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config.to_dict(), f, indent=2)
    log.info(f"Successfully saved config to '{path}'")

#endregion === Saving and Loading Config ===
