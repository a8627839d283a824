"""Configuration defaults, config.ini loading and .env loading.

WHY: Newline replacement and cue padding are per-project choices:
one studio wants " / " between subtitle lines in clip names, another
wants a quarter second of handle on every cut. They live in a small
config.ini beside the project instead of in code, and can be overridden
from the environment or the command line.

HOW: python-dotenv loads the .env file on import, so environment
defaults can be kept there. load_config() starts from the environment,
then reads config.ini with dotenv_values(): the file is plain
"key = value" lines, which the dotenv parser already understands
(quoted values keep their spaces). Explicit overrides win last.

RULES:
- Recognised keys: newline_replace, padding_start, padding_end
- Unknown keys are ignored
- Missing or unparseable numbers fall back to the default
- Precedence: defaults < environment < config.ini < explicit overrides
- A missing config.ini is not an error
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional, Union

from dotenv import dotenv_values, load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

DEFAULT_NEWLINE_REPLACE = " "
DEFAULT_PADDING_START = 0.0
DEFAULT_PADDING_END = 0.0

CONFIG_FILENAME = "config.ini"
"""Looked up in the working directory when no explicit path is given."""

ENV_PREFIX = "SRT_SPLITTER_"

SUBTITLE_EXTENSIONS: set[str] = {".srt"}


@dataclass(frozen=True)
class SplitConfig:
    """Options that shape a split run.

    RULES:
    - newline_replace: substituted for every line break inside a cue
    - padding_start: seconds subtracted from each cue start (clamped at 0)
    - padding_end: seconds added to each cue end
    """

    newline_replace: str = DEFAULT_NEWLINE_REPLACE
    padding_start: float = DEFAULT_PADDING_START
    padding_end: float = DEFAULT_PADDING_END


def _to_float(value: Optional[str], default: float) -> float:
    if value is None:
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def apply_values(config: SplitConfig, values: Mapping[str, Optional[str]]) -> SplitConfig:
    """Overlay recognised string values onto ``config``.

    Unknown keys and None values are ignored; numbers that do not parse
    fall back to the built-in default, not to the previous value.
    """
    changes = {}
    if values.get("newline_replace") is not None:
        changes["newline_replace"] = values["newline_replace"]
    if "padding_start" in values and values["padding_start"] is not None:
        changes["padding_start"] = _to_float(values["padding_start"], DEFAULT_PADDING_START)
    if "padding_end" in values and values["padding_end"] is not None:
        changes["padding_end"] = _to_float(values["padding_end"], DEFAULT_PADDING_END)
    return replace(config, **changes)


def config_from_env(environ: Optional[Mapping[str, str]] = None) -> SplitConfig:
    """Build a config from SRT_SPLITTER_* environment variables."""
    environ = os.environ if environ is None else environ
    values = {}
    for key in ("newline_replace", "padding_start", "padding_end"):
        env_key = ENV_PREFIX + key.upper()
        if env_key in environ:
            values[key] = environ[env_key]
    return apply_values(SplitConfig(), values)


def read_config_file(path: Union[str, Path]) -> dict:
    """Read "key = value" lines from a config.ini file.

    Returns an empty dict when the file does not exist.
    """
    path = Path(path)
    if not path.is_file():
        return {}
    return dict(dotenv_values(path, interpolate=False, encoding="utf-8"))


def load_config(
    path: Optional[Union[str, Path]] = None,
    overrides: Optional[Mapping[str, Optional[str]]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> SplitConfig:
    """Resolve the effective SplitConfig.

    Args:
        path: config.ini path. Defaults to ``config.ini`` in the working
            directory.
        overrides: Explicit values (e.g. from CLI flags); None entries
            are skipped.
        environ: Environment mapping, for tests. Defaults to os.environ.

    Returns:
        The merged configuration.
    """
    config = config_from_env(environ)
    config_path = Path(path) if path is not None else Path.cwd() / CONFIG_FILENAME
    config = apply_values(config, read_config_file(config_path))
    if overrides:
        config = apply_values(config, overrides)
    return config
