import json
import os
from datetime import datetime

DEFAULT_CONFIG_PATH = "config/runtime_config.json"

DEFAULT_CONFIG = {
    "prompt": "dtm> ",
    "output_directory": "logs/",
    "log_file_prefix": "dtm_",
    "log_runs": True,
    "results_directory": "results/",
    "batch_size": 256,
    "warn_on_conflicts": True
}

# Expected types for validation
CONFIG_SCHEMA = {
    "prompt": str,
    "output_directory": str,
    "log_file_prefix": str,
    "log_runs": bool,
    "results_directory": str,
    "batch_size": int,
    "warn_on_conflicts": bool
}

def validate_config(config):
    for key, expected_type in CONFIG_SCHEMA.items():
        if key not in config:
            raise ValueError(f"Missing required configuration key: {key}")
        # bool is an int subclass, keep "batch_size": true out
        if not isinstance(config[key], expected_type) or (expected_type is int and isinstance(config[key], bool)):
            raise TypeError(f"Config key '{key}' expected {expected_type}, got {type(config[key])}.")

    if not config["prompt"].strip():
        raise ValueError("Config key 'prompt' must not be blank.")
    if config["batch_size"] < 1:
        raise ValueError(f"Config key 'batch_size' must be positive, got {config['batch_size']}.")

def load_config(path=DEFAULT_CONFIG_PATH, quiet=False):
    if not os.path.exists(path):
        raise FileNotFoundError(f"Configuration file not found at: {path}")

    with open(path, "r", encoding="utf-8") as f:
        user_config = json.load(f)

    # Merge defaults with overrides
    config = DEFAULT_CONFIG.copy()
    config.update(user_config)

    # Validate schema
    validate_config(config)

    # Validate output directories
    os.makedirs(config["output_directory"], exist_ok=True)
    os.makedirs(config["results_directory"], exist_ok=True)

    if not quiet:
        print(f"[{datetime.now()}] Loaded config:")
        for key, value in config.items():
            print(f"  {key}: {value!r}")

    return config
