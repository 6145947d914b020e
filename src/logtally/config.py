"""Run configuration: CLI > environment > JSON config file > defaults."""

import json
import logging
import os
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, time
from pathlib import Path
from typing import Any

from logtally.core.errors import ConfigError, InputNotFoundError
from logtally.core.models import FilterCriteria

logger = logging.getLogger(__name__)

ENV_PREFIX = "LOGTALLY_"
DATE_FORMAT = "%d.%m.%Y"
DATE_RE = re.compile(r"^\d{2}\.\d{2}\.\d{4}$", re.ASCII)

OUTPUT_FORMATS = ("text", "ndjson")
SORT_KEYS = ("address", "count")
INDEX_BACKENDS = ("memory", "sqlite")

# Keys understood in config files and as LOGTALLY_<KEY> variables
SETTING_KEYS = (
    "file_log",
    "file_output",
    "address_start",
    "address_mask",
    "time_start",
    "time_end",
    "format",
    "sort_by",
    "index",
    "verbose",
)

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class Settings:
    """Fully resolved configuration for one run."""

    file_log: Path
    file_output: Path
    criteria: FilterCriteria
    output_format: str = "text"
    sort_by: str = "address"
    index: str = "memory"
    verbosity: int = 0
    sources: dict[str, str] = field(default_factory=dict, compare=False)


def parse_date_bound(text: str, end_of_day: bool = False) -> datetime:
    """Parse a ``dd.MM.yyyy`` date into a time window bound.

    Args:
        text: Date text.
        end_of_day: Return the last instant of the day instead of midnight,
            so an end bound covers the whole day.

    Raises:
        ConfigError: If the text is not a valid ``dd.MM.yyyy`` date.
    """
    value = text.strip()
    if not DATE_RE.match(value):
        raise ConfigError(f"expected a dd.MM.yyyy date, got {text!r}")
    try:
        parsed = datetime.strptime(value, DATE_FORMAT)
    except ValueError as exc:
        raise ConfigError(f"invalid date {text!r}: {exc}") from exc
    if end_of_day:
        return datetime.combine(parsed.date(), time.max)
    return parsed


def parse_verbosity(value: Any) -> int:
    """Accept a count, a boolean, or their string forms from env/config."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return max(value, 0)
    text = str(value).strip().lower()
    if text.isdigit():
        return int(text)
    if text in _TRUE:
        return 1
    if text in _FALSE:
        return 0
    raise ConfigError(f"invalid verbose value: {value!r}")


def load_config_file(path: str | Path) -> dict[str, Any]:
    """Read a JSON config object.

    Unknown keys are ignored with a warning.

    Raises:
        ConfigError: If the file cannot be read, is not JSON, or is not an
            object.
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"cannot read config file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"config file {path} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"config file {path} must hold a JSON object")

    for key in data:
        if key not in SETTING_KEYS:
            logger.warning("ignoring unknown config key %r in %s", key, path)
    return {k: v for k, v in data.items() if k in SETTING_KEYS}


def env_settings(environ: Mapping[str, str] | None = None) -> dict[str, str]:
    """Collect ``LOGTALLY_<KEY>`` variables that are set and non-empty."""
    environ = os.environ if environ is None else environ
    values: dict[str, str] = {}
    for key in SETTING_KEYS:
        value = environ.get(ENV_PREFIX + key.upper())
        if value is not None and value != "":
            values[key] = value
    return values


def config_path_from_env(environ: Mapping[str, str] | None = None) -> str | None:
    """Return ``LOGTALLY_CONFIG`` if set."""
    environ = os.environ if environ is None else environ
    return environ.get(ENV_PREFIX + "CONFIG") or None


def _merge(
    cli: Mapping[str, Any],
    env: Mapping[str, Any],
    config: Mapping[str, Any],
) -> tuple[dict[str, Any], dict[str, str]]:
    """Layer the sources, first non-None wins, and remember where each came from."""
    merged: dict[str, Any] = {}
    sources: dict[str, str] = {}
    for key in SETTING_KEYS:
        for name, layer in (("cli", cli), ("env", env), ("config", config)):
            value = layer.get(key)
            if value is not None:
                merged[key] = value
                sources[key] = name
                break
    return merged, sources


def _choice(merged: Mapping[str, Any], key: str, choices: tuple[str, ...]) -> str:
    value = str(merged.get(key, choices[0]))
    if value not in choices:
        raise ConfigError(
            f"invalid {key} {value!r}, expected one of: {', '.join(choices)}"
        )
    return value


def resolve_settings(
    cli: Mapping[str, Any],
    env: Mapping[str, Any] | None = None,
    config: Mapping[str, Any] | None = None,
) -> Settings:
    """Combine the configuration layers into validated Settings.

    Args:
        cli: Values given on the command line, None for options not given.
        env: Values from the environment (see env_settings()).
        config: Values from a config file (see load_config_file()).

    Raises:
        ConfigError: If a required value is missing or a value is invalid.
    """
    merged, sources = _merge(cli, env or {}, config or {})

    missing = [
        key
        for key in ("file_log", "file_output", "time_start", "time_end")
        if merged.get(key) in (None, "")
    ]
    if missing:
        raise ConfigError(f"missing required settings: {', '.join(missing)}")

    time_start = parse_date_bound(str(merged["time_start"]))
    time_end = parse_date_bound(str(merged["time_end"]), end_of_day=True)
    if time_start > time_end:
        raise ConfigError(
            f"time_start {merged['time_start']} is after time_end {merged['time_end']}"
        )

    criteria = FilterCriteria(
        address_start=str(merged.get("address_start") or ""),
        address_mask=str(merged.get("address_mask") or ""),
        time_start=time_start,
        time_end=time_end,
    )

    return Settings(
        file_log=Path(str(merged["file_log"])).expanduser(),
        file_output=Path(str(merged["file_output"])).expanduser(),
        criteria=criteria,
        output_format=_choice(merged, "format", OUTPUT_FORMATS),
        sort_by=_choice(merged, "sort_by", SORT_KEYS),
        index=_choice(merged, "index", INDEX_BACKENDS),
        verbosity=parse_verbosity(merged.get("verbose", 0)),
        sources=sources,
    )


def check_input(path: Path) -> None:
    """Make sure the input log exists and is a regular file.

    Raises:
        InputNotFoundError: If it does not.
    """
    if not path.exists():
        raise InputNotFoundError(f"file '{path}' does not exist")
    if not path.is_file():
        raise InputNotFoundError(f"'{path}' is not a file")
