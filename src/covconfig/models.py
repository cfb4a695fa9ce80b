"""Data models for covconfig."""

import time
from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from typing import Any
from typing import Protocol


class _Unset:
    """Marker for a setting (or argument) that was never given."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


class FileRecord(Protocol):
    """Anything with a filename can be filtered and grouped."""

    filename: str


class Formatter(Protocol):
    """Report renderer consumed by the default completion hook."""

    def format(self, result: "CoverageResult") -> Any: ...


@dataclass(frozen=True)
class SourceFile:
    """A measured source file, identified by its absolute path."""

    filename: str


class HookState(Enum):
    """Completion hook lifecycle.

    UNREGISTERED moves to DEFAULT the first time the hook is needed, and only
    an explicit registration moves it to CUSTOM.
    """

    UNREGISTERED = "unregistered"
    DEFAULT = "default"
    CUSTOM = "custom"


@dataclass(frozen=True)
class MergePolicy:
    """Which stored result sets may be merged with the current run.

    Attributes:
        enabled: Whether result merging is active
        timeout_seconds: Maximum age of a stored result set, in seconds
    """

    enabled: bool = True
    timeout_seconds: int = 600

    def is_eligible(self, created_at: float, now: float | None = None) -> bool:
        """Return True if a result set recorded at ``created_at`` may be merged.

        Args:
            created_at: Unix timestamp the result set was recorded at
            now: Current Unix timestamp (default: time.time())

        Returns:
            False when merging is disabled or the result set is too old
        """
        if not self.enabled:
            return False
        now = time.time() if now is None else now
        return now - created_at < self.timeout_seconds


@dataclass(frozen=True)
class CoverageResult:
    """Filtered and grouped result handed to the formatter."""

    command_name: str
    project_name: str
    files: list[Any]
    groups: dict[str, list[Any]]
    created_at: float = field(default_factory=time.time)
