import json
import logging
import os

HOME = os.path.expanduser("~")
XDG_CONFIG_HOME = os.environ.get("XDG_CONFIG_HOME")
CONFIG_HOME = XDG_CONFIG_HOME if XDG_CONFIG_HOME else os.path.join(HOME, ".config")
CONFIG_DIR = os.path.join(CONFIG_HOME, "fieldgrid")
CONFIG_JSON = os.path.join(CONFIG_DIR, "config.json")
LOG_PATH = os.path.join(CONFIG_DIR, "fieldgrid.log")

# default settings
CLIPBOARD_INTERFACE_COMMAND_DEFAULT = None
CLIPBOARD_PASTE_COMMAND_DEFAULT = None
SEARCH_DELAY_SECONDS_DEFAULT = 0.15
LOG_LEVEL_DEFAULT = "WARNING"


def _argv_or_none(value):
    if isinstance(value, list) and value and all(isinstance(item, str) for item in value):
        return list(value)
    return None


def load_config():
    cfg = {
        "CLIPBOARD_INTERFACE_COMMAND": CLIPBOARD_INTERFACE_COMMAND_DEFAULT,
        "CLIPBOARD_PASTE_COMMAND": CLIPBOARD_PASTE_COMMAND_DEFAULT,
        "SEARCH_DELAY_SECONDS": SEARCH_DELAY_SECONDS_DEFAULT,
        "LOG_LEVEL": LOG_LEVEL_DEFAULT,
    }

    if not os.path.exists(CONFIG_JSON):
        return cfg

    try:
        with open(CONFIG_JSON, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        logging.getLogger(__name__).warning("Ignoring unreadable %s: %s", CONFIG_JSON, exc)
        return cfg
    if not isinstance(data, dict):
        return cfg

    copy_cmd = _argv_or_none(data.get("clipboard_interface_command"))
    if copy_cmd:
        cfg["CLIPBOARD_INTERFACE_COMMAND"] = copy_cmd
    paste_cmd = _argv_or_none(data.get("clipboard_paste_command"))
    if paste_cmd:
        cfg["CLIPBOARD_PASTE_COMMAND"] = paste_cmd

    search = data.get("search")
    delay = search.get("delay_seconds") if isinstance(search, dict) else None
    if isinstance(delay, (int, float)) and not isinstance(delay, bool) and delay >= 0:
        cfg["SEARCH_DELAY_SECONDS"] = float(delay)

    level = data.get("log_level")
    if isinstance(level, str) and isinstance(logging.getLevelName(level.upper()), int):
        cfg["LOG_LEVEL"] = level.upper()

    return cfg


def configure_logging(level=LOG_LEVEL_DEFAULT, path=None):
    """Send log records to a file; the curses screen owns the terminal."""
    path = path or LOG_PATH
    try:
        os.makedirs(os.path.dirname(path), exist_ok=True)
    except OSError:
        pass
    logging.basicConfig(
        filename=path,
        level=getattr(logging, str(level).upper(), logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
