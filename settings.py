"""JSON-based settings persistence for the calendar."""

from __future__ import annotations

import json
import logging
import os

from simple_calendar import DEFAULT_CLASSES, SimpleCalendar

logger = logging.getLogger(__name__)

_SETTINGS_PATH = os.environ.get(
    "SIMPLE_CALENDAR_SETTINGS",
    os.path.join(os.path.expanduser("~"), ".simple-calendar-settings.json"),
)

_DEFAULTS = {
    "classes": dict(DEFAULT_CLASSES),
    "week_day_names": None,
    "start_of_week": 0,
    "today": True,
}


def load_settings(path: str | None = None) -> dict:
    """Load settings from disk, returning defaults for missing keys."""
    path = path or _SETTINGS_PATH
    settings = dict(_DEFAULTS)
    settings["classes"] = dict(DEFAULT_CLASSES)
    try:
        with open(path, "r", encoding="utf-8") as f:
            stored = json.load(f)
    except FileNotFoundError:
        return settings
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
        return settings

    if not isinstance(stored, dict):
        logger.warning("Ignoring settings file %s: not a JSON object", path)
        return settings

    if "classes" in stored and isinstance(stored["classes"], dict):
        settings["classes"].update(
            {k: v for k, v in stored["classes"].items() if isinstance(v, str)})
    names = stored.get("week_day_names")
    if isinstance(names, list) and all(isinstance(n, str) for n in names):
        settings["week_day_names"] = names
    if "start_of_week" in stored and isinstance(stored["start_of_week"], (int, str)) \
            and not isinstance(stored["start_of_week"], bool):
        settings["start_of_week"] = stored["start_of_week"]
    if "today" in stored and isinstance(stored["today"], bool):
        settings["today"] = stored["today"]
    return settings


def save_settings(settings: dict, path: str | None = None) -> None:
    """Persist settings to disk."""
    path = path or _SETTINGS_PATH
    with open(path, "w", encoding="utf-8") as f:
        json.dump(settings, f, indent=2)
    logger.debug("Saved settings to %s", path)


def apply_settings(cal: SimpleCalendar, settings: dict) -> None:
    """Push loaded settings into *cal*.

    Unknown class names or a week_day_names list of the wrong length
    raise ConfigError from the calendar's setters.
    """
    cal.set_calendar_classes(settings.get("classes", {}))
    cal.set_week_day_names(settings.get("week_day_names"))
    cal.set_start_of_week(settings.get("start_of_week", 0))
    if not settings.get("today", True):
        cal.set_today(False)
