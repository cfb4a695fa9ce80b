"""Source file filters and the helpers that apply them."""

from abc import ABC
from abc import abstractmethod
from collections.abc import Callable
from collections.abc import Iterable
from collections.abc import Mapping
from typing import Any

from .exceptions import InvalidFilterArgumentError
from .models import FileRecord

UNGROUPED = "Ungrouped"


class Filter(ABC):
    """Base class for filters.

    Subclass and implement ``matches`` to build a custom filter; instances are
    accepted as-is by ``parse_filter``. A filter matching a file excludes it
    from the results, while a group's filter matching a file puts it in that
    group.
    """

    def __init__(self, filter_argument: Any):
        self._filter_argument = filter_argument

    @property
    def filter_argument(self) -> Any:
        return self._filter_argument

    @abstractmethod
    def matches(self, source_file: FileRecord) -> bool:
        """Return True if the filter applies to source_file."""

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and self._filter_argument == other._filter_argument  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self._filter_argument))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._filter_argument!r})"


class StringFilter(Filter):
    """Matches files whose path contains the given string."""

    def matches(self, source_file: FileRecord) -> bool:
        return self._filter_argument in str(source_file.filename)


class BlockFilter(Filter):
    """Matches files for which the given predicate returns a truthy value."""

    def matches(self, source_file: FileRecord) -> bool:
        return bool(self._filter_argument(source_file))


def parse_filter(
    filter_argument: Filter | str | Callable[[FileRecord], bool] | None = None,
    filter_proc: Callable[[FileRecord], bool] | None = None,
) -> Filter:
    """Build a Filter from a filter instance, a string or a predicate.

    Args:
        filter_argument: Filter instance (returned unchanged), substring, or predicate
        filter_proc: Predicate, used when filter_argument is not given

    Returns:
        Filter for the given argument

    Raises:
        InvalidFilterArgumentError: If no usable argument was given
    """
    if isinstance(filter_argument, Filter):
        return filter_argument
    if isinstance(filter_argument, str):
        return StringFilter(filter_argument)
    if callable(filter_argument):
        return BlockFilter(filter_argument)
    if filter_proc is not None and callable(filter_proc):
        return BlockFilter(filter_proc)
    raise InvalidFilterArgumentError("Please specify either a string or a predicate to filter with")


def apply_filters(files: Iterable[Any], filters: Iterable[Filter]) -> list[Any]:
    """Return the files not matched by any filter, in their original order."""
    filters = list(filters)
    return [source_file for source_file in files if not any(f.matches(source_file) for f in filters)]


def group_files(files: Iterable[Any], groups: Mapping[str, Filter]) -> dict[str, list[Any]]:
    """Sort files into the configured groups.

    Every group collects all files its filter matches, so a file can land in
    more than one group. Groups keep their definition order. When at least one
    group is defined, files no group matched are collected under "Ungrouped".

    Args:
        files: Source files that survived filtering
        groups: Group name to Filter mapping

    Returns:
        Group name to list of files mapping
    """
    files = list(files)
    grouped: dict[str, list[Any]] = {}
    grouped_ids: set[int] = set()

    for name, group_filter in groups.items():
        grouped[name] = [source_file for source_file in files if group_filter.matches(source_file)]
        grouped_ids.update(id(source_file) for source_file in grouped[name])

    if groups:
        other_files = [source_file for source_file in files if id(source_file) not in grouped_ids]
        if other_files:
            grouped[UNGROUPED] = other_files

    return grouped
