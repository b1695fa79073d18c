from __future__ import annotations

"""Runtime settings for phrasetime entry scripts.

- Read from the environment only by job scripts, never by the engine.
- Values are threaded explicitly into parse().
"""

import logging
import os
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import Mapping, Optional

from phrasetime.core.clock import CurrentInstant
from phrasetime.core.errors import Iso8601Error
from phrasetime.core.iso8601 import parse_iso8601


_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


@dataclass(frozen=True, slots=True)
class Settings:
    debug: bool = False
    log_level: int = logging.INFO
    currently: Optional[CurrentInstant] = None
    scenarios_path: Optional[Path] = None


def parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


def parse_currently(raw: str) -> CurrentInstant:
    """ISO-8601 reference instant; an explicit offset is converted to UTC."""
    try:
        ts, offset = parse_iso8601(raw)
    except Iso8601Error as e:
        raise ValueError(f"Invalid reference instant {raw!r}: expected ISO-8601") from e
    if offset:
        ts = ts - timedelta(seconds=offset)
    return CurrentInstant.from_datetime(ts)


def parse_log_level(raw: str) -> int:
    level = logging.getLevelName(raw.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {raw!r}")
    return level


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if environ is None else environ

    currently_raw = env.get("PT_CURRENTLY")
    scenarios_raw = env.get("PT_SCENARIOS_YAML")

    return Settings(
        debug=parse_bool("PT_DEBUG", env.get("PT_DEBUG", "")),
        log_level=parse_log_level(env.get("PT_LOG_LEVEL", "INFO")),
        currently=parse_currently(currently_raw) if currently_raw else None,
        scenarios_path=Path(scenarios_raw) if scenarios_raw else None,
    )
