import json
import os

CONFIG_PATH = "config.json"

DEFAULT_CONFIG = {
    "host": "127.0.0.1",
    "port": 8000,
    "strip_width_ratio": 0.3,
    "strip_height_ratio": 0.8,
    "strip_top_ratio": 0.1,
    "max_upload_mb": 10
}

def load_config(path=CONFIG_PATH):
    if os.path.exists(path):
        try:
            with open(path, "r", encoding="utf-8") as f:
                return {**DEFAULT_CONFIG, **json.load(f)}
        except (OSError, json.JSONDecodeError) as e:
            print(f"Config {path} unreadable ({e}). Using defaults.")
            return dict(DEFAULT_CONFIG)
    return dict(DEFAULT_CONFIG)

config = load_config()
HOST = config["host"]
PORT = int(config["port"])
STRIP_WIDTH_RATIO = float(config["strip_width_ratio"])
STRIP_HEIGHT_RATIO = float(config["strip_height_ratio"])
STRIP_TOP_RATIO = float(config["strip_top_ratio"])
MAX_UPLOAD_BYTES = int(float(config["max_upload_mb"]) * 1024 * 1024)
