"""Reading config files into configuration fragments."""
from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path
from typing import Any

import yaml

from todor.config.defaults import EXAMPLE_CONFIG
from todor.config.fragment import ConfigFragment
from todor.errors import CannotAccessFileError, InvalidConfigFileError

# Python 3.11+ has tomllib built-in
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = logging.getLogger(__name__)

FORMATS = ("toml", "json", "yaml")

_SUFFIX_FORMATS = {
    ".toml": "toml",
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
}


def detect_format(path: Path) -> str:
    """Config format for ``path``, by suffix. Unknown suffixes are JSON."""
    return _SUFFIX_FORMATS.get(path.suffix.lower(), "json")


def _decode(text: str, file_format: str) -> Any:
    if file_format == "toml":
        return tomllib.loads(text)
    if file_format == "yaml":
        return yaml.safe_load(text)
    return json.loads(text)


def load_config_file(path: str | Path, file_format: str | None = None) -> ConfigFragment:
    """Decode a config file into a :class:`ConfigFragment`.

    Parameters
    ----------
    path : str | Path
        Path to the config file.
    file_format : str | None
        One of ``"toml"``, ``"json"`` or ``"yaml"``. Detected from the suffix
        when omitted.

    Raises
    ------
    CannotAccessFileError
        If the file cannot be read.
    InvalidConfigFileError
        If the format is unknown or the content cannot be decoded.
    """
    path = Path(path)
    file_format = (file_format or detect_format(path)).lower()
    if file_format not in FORMATS:
        raise InvalidConfigFileError(f"unsupported format '{file_format}'", path)

    if path.is_dir():
        raise CannotAccessFileError(path, "is a directory")
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise CannotAccessFileError(path, str(e)) from e

    if text.strip() in ("", "{}"):
        logger.debug("config file '%s' is empty", path)
        return ConfigFragment(source=path)

    try:
        data = _decode(text, file_format)
    except (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise InvalidConfigFileError(str(e), path) from e

    return ConfigFragment.from_dict(data, path)


def global_config_path() -> Path:
    """Location of the per-user config file.

    ``$XDG_CONFIG_HOME/todor/todor.conf`` when ``XDG_CONFIG_HOME`` is an
    absolute path, ``~/.config/todor/todor.conf`` otherwise.
    """
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home and Path(config_home).is_absolute():
        base = Path(config_home)
    else:
        base = Path.home() / ".config"
    return base / "todor" / "todor.conf"


def load_global_config() -> ConfigFragment | None:
    """Load the per-user config file if it exists."""
    path = global_config_path()
    logger.info("searching for global config in '%s'", path)
    if not path.is_file():
        return None
    logger.info("adding global config file...")
    return load_config_file(path, "json")


def write_example_config(path: str | Path) -> Path:
    """Write an example config file to ``path`` and return the path."""
    path = Path(path)
    path.write_text(EXAMPLE_CONFIG, encoding="utf-8")
    return path
