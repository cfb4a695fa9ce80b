"""Load configuration from YAML settings files.

A settings file mirrors the Configuration accessors:

```yaml
root: /path/to/project
coverage_dir: coverage
project_name: My app
command_name: unit tests
use_merging: true
merge_timeout: 3600
adapters:
  - test_frameworks
filters:
  - vendor/
groups:
  Models: app/models
  Views: app/views
```

Several files can be given; they are deep merged in order, later files
taking precedence (e.g. a user-wide file followed by a project file).
"""

import logging
from pathlib import Path
from typing import Any

import yaml

from .configuration import Configuration
from .exceptions import ConfigFileError
from .utils import deep_merge

logger = logging.getLogger(__name__)

_SCALAR_KEYS = ("root", "coverage_dir", "project_name", "command_name", "use_merging", "merge_timeout")
_KNOWN_KEYS = (*_SCALAR_KEYS, "adapters", "filters", "groups")


def read_settings(path: Path, strict: bool = False) -> dict[str, Any] | None:
    """Read a YAML settings file.

    Args:
        path: Path to YAML file
        strict: Raise instead of warning when the file cannot be read

    Returns:
        Dictionary from YAML or None if file doesn't exist or cannot be read

    Raises:
        ConfigFileError: If strict and the file is unreadable or not a mapping
    """
    if not path.exists():
        return None

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        if strict:
            raise ConfigFileError(f"Failed to read settings from {path}: {e}") from e
        logger.warning(f"Failed to read settings from {path}: {e}")
        return None

    if data is None:
        return {}
    if not isinstance(data, dict):
        if strict:
            raise ConfigFileError(f"Settings in {path} must be a mapping, got {type(data).__name__}")
        logger.warning(f"Ignoring settings in {path}: expected a mapping, got {type(data).__name__}")
        return None
    return data


def apply_settings(config: Configuration, settings: dict[str, Any]) -> Configuration:
    """Apply a settings mapping to config.

    Scalars go through the matching accessor, so their validation applies
    (an invalid merge_timeout is ignored). Adapters load before filters and
    groups are added.

    Args:
        config: Configuration to update
        settings: Parsed settings

    Returns:
        The updated configuration
    """
    for key in settings:
        if key not in _KNOWN_KEYS:
            logger.warning(f"Ignoring unknown setting '{key}'")

    for key in _SCALAR_KEYS:
        if key in settings:
            value = getattr(config, key)(settings[key])
            logger.info(f"Applied setting {key}={settings[key]!r} (now {value!r})")

    for name in settings.get("adapters") or []:
        config.load_adapter(name)

    for pattern in settings.get("filters") or []:
        config.add_filter(str(pattern))

    for name, pattern in (settings.get("groups") or {}).items():
        config.add_group(name, str(pattern))

    return config


def load_settings(config: Configuration, *paths: Path, strict: bool = False) -> Configuration:
    """Merge the settings files at paths in order and apply them to config.

    Missing files are skipped.

    Args:
        config: Configuration to update
        paths: Settings files, lowest priority first
        strict: Raise ConfigFileError for unreadable files instead of skipping them

    Returns:
        The updated configuration
    """
    merged: dict[str, Any] = {}
    for path in paths:
        data = read_settings(Path(path), strict=strict)
        if data:
            merged = deep_merge(merged, data)
    return apply_settings(config, merged)
