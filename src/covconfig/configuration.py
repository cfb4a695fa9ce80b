"""Per-run coverage configuration."""

import logging
import os
from collections.abc import Callable
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from .adapters import AdapterRegistry
from .exceptions import MissingFormatterError
from .filters import Filter
from .filters import apply_filters
from .filters import group_files
from .filters import parse_filter
from .models import UNSET
from .models import CoverageResult
from .models import Formatter
from .models import HookState
from .models import MergePolicy
from .utils import guess_command_name
from .utils import invocation_string

logger = logging.getLogger(__name__)

DEFAULT_COVERAGE_DIR = "coverage"
DEFAULT_MERGE_TIMEOUT = 600


def _noop() -> None:
    pass


class Configuration:
    """Settings, filters and groups for one coverage run.

    Every setting has a single accessor: calling it with a value sets and
    returns that value, calling it without one returns the cached value,
    computing and caching a default on first access.

    The collaborators are injected so a run can be configured without any
    global state:

    Args:
        command_guesser: Maps the invocation string to a test suite name
        result_provider: Returns the measured source files, or None when there is no result
        usable: Reports whether coverage can be measured in this environment
        running: Whether a coverage run is active (may be flipped later by the engine)
    """

    def __init__(
        self,
        command_guesser: Callable[[str], str] = guess_command_name,
        result_provider: Callable[[], Iterable[Any] | None] | None = None,
        usable: Callable[[], bool] = lambda: True,
        running: bool = False,
    ):
        self.command_guesser = command_guesser
        self.result_provider = result_provider
        self.usable = usable
        self.running = running

        self._root: Any = UNSET
        self._coverage_dir: Any = UNSET
        self._formatter: Any = UNSET
        self._project_name: Any = UNSET
        self._command_name: Any = UNSET
        self._use_merging: Any = UNSET
        self._merge_timeout: Any = UNSET
        self._filters: Any = UNSET
        self._groups: Any = UNSET
        self._adapters: Any = UNSET
        self._at_exit: Callable[[], Any] = _noop
        self._at_exit_state = HookState.UNREGISTERED

    # ===== Paths =====

    def root(self, root: str | os.PathLike | None = UNSET) -> Path:
        """Get or set the project root.

        Defaults to the current working directory. The path is made absolute
        when set and cached until set again.
        """
        if self._root is not UNSET and root in (UNSET, None):
            return self._root
        if root is UNSET or root is None:
            root = os.getcwd()
        self._root = Path(os.path.abspath(os.path.expanduser(os.fspath(root))))
        return self._root

    def coverage_dir(self, directory: str | None = UNSET) -> str:
        """Get or set the output directory name, relative to root (default: "coverage")."""
        if self._coverage_dir is not UNSET and directory in (UNSET, None):
            return self._coverage_dir
        self._coverage_dir = DEFAULT_COVERAGE_DIR if directory is UNSET or directory is None else directory
        return self._coverage_dir

    def coverage_path(self) -> Path:
        """Full path of the output directory, created if missing.

        Returns:
            root / coverage_dir
        """
        path = self.root() / self.coverage_dir()
        path.mkdir(parents=True, exist_ok=True)
        return path

    # ===== Reporting =====

    def formatter(self, formatter: Formatter | None = UNSET) -> Formatter:
        """Get or set the formatter.

        Raises:
            MissingFormatterError: If read before a formatter was set
        """
        if self._formatter is not UNSET and formatter is UNSET:
            return self._formatter
        if formatter is not UNSET and formatter is not None:
            self._formatter = formatter
        if self._formatter is UNSET:
            raise MissingFormatterError(
                "No formatter configured. Please set one with config.formatter(...)"
            )
        return self._formatter

    def project_name(self, name: str | None = UNSET) -> str:
        """Get or set the project name.

        Only strings are accepted. The default is the last segment of root,
        capitalized, with underscores replaced by spaces ("my_app" -> "My app").
        """
        if self._project_name is not UNSET and name is UNSET:
            return self._project_name
        if isinstance(name, str):
            self._project_name = name
        if self._project_name is UNSET:
            self._project_name = self.root().name.capitalize().replace("_", " ")
            logger.debug(f"Derived project name '{self._project_name}' from {self.root()}")
        return self._project_name

    def command_name(self, name: str | None = UNSET) -> str:
        """Get or set the name of the running command (test suite).

        Used to label result sets for merging. When never set, the name is
        guessed once from the process arguments by the command guesser.
        """
        if name is not UNSET and name is not None:
            self._command_name = name
        if self._command_name is UNSET:
            self._command_name = self.command_guesser(invocation_string())
            logger.debug(f"Guessed command name '{self._command_name}'")
        return self._command_name

    def at_exit(self, action: Callable[[], Any] | None = None) -> Callable[[], Any]:
        """Get or set the action run when the coverage run ends.

        Without an active run and without a new action this returns a no-op,
        so no report is produced for a run that never started. A new action
        always replaces the current one. Otherwise the registered action is
        returned, installing the default (format the current result) once.

        Args:
            action: Zero-argument callable to run at exit

        Returns:
            The action to run
        """
        if not self.running and action is None:
            return _noop
        if action is not None:
            self._at_exit = action
            self._at_exit_state = HookState.CUSTOM
            logger.info("Registered custom at_exit action")
        elif self._at_exit_state is HookState.UNREGISTERED:
            self._at_exit = self.format_result
            self._at_exit_state = HookState.DEFAULT
        return self._at_exit

    @property
    def at_exit_state(self) -> HookState:
        return self._at_exit_state

    def result(self) -> CoverageResult | None:
        """Collect the current result and apply filters and groups to it.

        Returns:
            CoverageResult, or None when the result provider has nothing
        """
        if self.result_provider is None:
            return None
        files = self.result_provider()
        if files is None:
            return None
        kept = apply_filters(files, self.filters())
        return CoverageResult(
            command_name=self.command_name(),
            project_name=self.project_name(),
            files=kept,
            groups=group_files(kept, self.groups()),
        )

    def format_result(self) -> Any:
        """Default at_exit action: hand the current result to the formatter."""
        result = self.result()
        if result is None:
            logger.warning("No coverage result available - nothing to format")
            return None
        return self.formatter().format(result)

    # ===== Merging =====

    def use_merging(self, use: bool | None = UNSET) -> bool:
        """Get or set whether result sets of different commands are merged.

        Anything but an explicit False leaves merging enabled.
        """
        if use is not UNSET and use is not None:
            self._use_merging = use
        self._use_merging = self._use_merging is not False
        return self._use_merging

    def merge_timeout(self, seconds: int | None = UNSET) -> int:
        """Get or set the maximum age in seconds of a mergeable result set (default: 600).

        Only positive integers are accepted; other values are ignored and the
        previous value is kept.
        """
        if seconds is not UNSET and seconds is not None:
            if isinstance(seconds, int) and not isinstance(seconds, bool) and seconds > 0:
                self._merge_timeout = seconds
            else:
                logger.warning(f"Ignoring invalid merge timeout {seconds!r} - expected a positive integer")
        if self._merge_timeout is UNSET:
            self._merge_timeout = DEFAULT_MERGE_TIMEOUT
        return self._merge_timeout

    def merge_policy(self) -> MergePolicy:
        """Snapshot of the merge settings for the result merger."""
        return MergePolicy(enabled=self.use_merging(), timeout_seconds=self.merge_timeout())

    # ===== Filters and Groups =====

    def filters(self) -> list[Filter]:
        """Configured filters, in the order they were added."""
        if self._filters is UNSET:
            self._filters = []
        return self._filters

    def groups(self) -> dict[str, Filter]:
        """Configured groups, in the order they were first defined."""
        if self._groups is UNSET:
            self._groups = {}
        return self._groups

    def add_filter(
        self,
        filter_argument: Filter | str | Callable[[Any], bool] | None = None,
        filter_proc: Callable[[Any], bool] | None = None,
    ) -> Filter:
        """Add a filter; files it matches are removed from the results.

        Args:
            filter_argument: Substring of the paths to reject, a predicate, or a Filter instance
            filter_proc: Predicate, used when filter_argument is not given

        Returns:
            The parsed filter

        Raises:
            InvalidFilterArgumentError: If neither argument is usable
        """
        parsed = parse_filter(filter_argument, filter_proc)
        self.filters().append(parsed)
        return parsed

    def add_group(
        self,
        group_name: str,
        filter_argument: Filter | str | Callable[[Any], bool] | None = None,
        filter_proc: Callable[[Any], bool] | None = None,
    ) -> Filter:
        """Define a group; files its filter matches end up in the group.

        Redefining a group replaces its filter.

        Raises:
            InvalidFilterArgumentError: If neither filter argument is usable
        """
        parsed = parse_filter(filter_argument, filter_proc)
        self.groups()[group_name] = parsed
        return parsed

    # ===== Batch Configuration =====

    def adapters(self) -> AdapterRegistry:
        """Registry of named configuration blocks."""
        if self._adapters is UNSET:
            self._adapters = AdapterRegistry()
        return self._adapters

    def load_adapter(self, name: str) -> Any:
        """Apply the named adapter to this configuration.

        Raises:
            UnknownAdapterError: If the adapter is not defined
        """
        return self.adapters().load(name, self)

    def configure(self, block: Callable[["Configuration"], Any]) -> Any:
        """Run a block of configuration calls against this configuration.

        Example:
            ```python
            config.configure(lambda c: c.add_filter("vendor/"))
            ```

        Returns:
            False if coverage is not usable here (the block is not run),
            otherwise whatever the block returns
        """
        if not self.usable():
            logger.info("Coverage is not usable in this environment - skipping configuration")
            return False
        return block(self)
