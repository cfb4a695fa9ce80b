"""covconfig: configuration and filtering core for code coverage runs.

This library holds the settings of a coverage run (project root, output
directory, formatter, merge policy), the filters that drop source files from
the results, the groups that sort the remaining files for reporting, and the
action run when the coverage run ends.

The measuring engine, the formatters and the result merger are collaborators:
the engine injects them into a Configuration, which is passed around instead
of living in global state.

Public API:
    Configuration: Settings, filters, groups and the at_exit action of a run
    Filter, StringFilter, BlockFilter, parse_filter: Filter construction
    apply_filters, group_files: Filter and group evaluation
    MergePolicy: Staleness rule for merging stored result sets
    load_settings: Apply YAML settings files to a Configuration
    ConfigError, MissingFormatterError, InvalidFilterArgumentError,
    UnknownAdapterError, ConfigFileError: Exception types

Example:
    ```python
    from pathlib import Path
    from covconfig import Configuration, load_settings

    config = Configuration(result_provider=engine.source_files, running=True)
    load_settings(config, Path.home() / ".covconfig.yaml", Path(".covconfig.yaml"))

    config.configure(lambda c: (
        c.add_filter("vendor/"),
        c.add_group("Models", "app/models"),
        c.formatter(HTMLFormatter()),
    ))

    atexit.register(config.at_exit())
    ```
"""

from .adapters import AdapterRegistry
from .configuration import Configuration
from .exceptions import ConfigError
from .exceptions import ConfigFileError
from .exceptions import InvalidFilterArgumentError
from .exceptions import MissingFormatterError
from .exceptions import UnknownAdapterError
from .filters import BlockFilter
from .filters import Filter
from .filters import StringFilter
from .filters import apply_filters
from .filters import group_files
from .filters import parse_filter
from .models import UNSET
from .models import CoverageResult
from .models import HookState
from .models import MergePolicy
from .models import SourceFile
from .settings import load_settings
from .settings import read_settings
from .utils import deep_merge

__version__ = "0.1.0"

__all__ = [
    "AdapterRegistry",
    "Configuration",
    "Filter",
    "StringFilter",
    "BlockFilter",
    "parse_filter",
    "apply_filters",
    "group_files",
    "CoverageResult",
    "HookState",
    "MergePolicy",
    "SourceFile",
    "UNSET",
    "load_settings",
    "read_settings",
    "deep_merge",
    "ConfigError",
    "ConfigFileError",
    "InvalidFilterArgumentError",
    "MissingFormatterError",
    "UnknownAdapterError",
]
