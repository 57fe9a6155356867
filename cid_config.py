"""Settings for the content hash API.

Lookup order for each key: environment variable, then KEY=VALUE lines in
the config file, then the default below.
"""

import os
from pathlib import Path
from typing import Dict, Union

CONFIG_FILE = "contenthash_config.txt"

DEFAULTS = {
    "PORT": 5000,
    "MAX_BATCH_SIZE": 10000,
    "CACHE_SIZE": 10000,
    "ENABLE_SWAGGER": True,
}

_TRUE_VALUES = ("1", "true", "yes", "on")


def read_config_file(config_file: str = CONFIG_FILE) -> Dict[str, str]:
    """Read KEY=VALUE pairs, skipping comments and empty lines."""
    values = {}
    config_path = Path(config_file)
    if not config_path.exists():
        return values
    with open(config_path, 'r') as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith('#') and '=' in line:
                key, value = line.split('=', 1)
                values[key.strip()] = value.strip()
    return values


def _coerce(key: str, raw: str, default: Union[int, bool]) -> Union[int, bool]:
    if isinstance(default, bool):
        return raw.strip().lower() in _TRUE_VALUES
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}")


def load_settings(config_file: str = CONFIG_FILE) -> Dict[str, Union[int, bool]]:
    file_values = read_config_file(config_file)
    settings = {}
    for key, default in DEFAULTS.items():
        raw = os.environ.get(key)
        if raw is None:
            raw = file_values.get(key)
        settings[key] = default if raw is None else _coerce(key, raw, default)
    return settings
