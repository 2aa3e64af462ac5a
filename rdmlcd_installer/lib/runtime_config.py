from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_SLEEP_AFTER = 900
DEFAULT_LCD_ACTIVE = True


@dataclass(frozen=True)
class RuntimeConfig:
    """Snapshot of the plugin's own settings, read once at install time."""

    sleep_after: int = DEFAULT_SLEEP_AFTER
    lcd_active: bool = DEFAULT_LCD_ACTIVE


def _value(raw: Dict[str, Any], key: str) -> Any:
    # v-conf stores {"type": ..., "value": ...}; accept bare values too.
    entry = raw.get(key)
    if isinstance(entry, dict):
        return entry.get("value")
    return entry


def parse_sleep_after(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        seconds = value
    elif isinstance(value, str):
        try:
            seconds = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if seconds != seconds or seconds < 0 or seconds == float("inf"):
        return None
    return int(seconds)


def parse_lcd_active(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        v = value.strip().lower()
        if v == "true":
            return True
        if v == "false":
            return False
    return None


def load_runtime_config(path: str | Path) -> RuntimeConfig:
    p = Path(path)
    if not p.exists():
        logger.info("No runtime config at %s; using defaults", p)
        return RuntimeConfig()

    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("Unreadable runtime config %s (%s); using defaults", p, e)
        return RuntimeConfig()
    if not isinstance(raw, dict):
        logger.warning("Runtime config %s is not an object; using defaults", p)
        return RuntimeConfig()

    sleep_after = parse_sleep_after(_value(raw, "sleep_after"))
    if sleep_after is None:
        if _value(raw, "sleep_after") is not None:
            logger.warning("Invalid sleep_after %r; using %s", _value(raw, "sleep_after"), DEFAULT_SLEEP_AFTER)
        sleep_after = DEFAULT_SLEEP_AFTER

    lcd_active = parse_lcd_active(_value(raw, "lcd_active"))
    if lcd_active is None:
        if _value(raw, "lcd_active") is not None:
            logger.warning("Invalid lcd_active %r; assuming enabled", _value(raw, "lcd_active"))
        lcd_active = DEFAULT_LCD_ACTIVE

    return RuntimeConfig(sleep_after=sleep_after, lcd_active=lcd_active)
