"""Utility functions for covconfig."""

import sys
from typing import Any


def deep_merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries with overlay precedence.

    Recursively merges nested dictionaries. Non-dict values in overlay
    (including lists of filters) completely replace corresponding values in base.

    Args:
        base: Base dictionary
        overlay: Overlay dictionary (takes precedence)

    Returns:
        New merged dictionary (base and overlay are not modified)

    Examples:
        >>> base = {"coverage_dir": "coverage", "groups": {"Models": "app/models"}}
        >>> overlay = {"groups": {"Views": "app/views"}, "merge_timeout": 60}
        >>> deep_merge(base, overlay)
        {'coverage_dir': 'coverage', 'groups': {'Models': 'app/models', 'Views': 'app/views'}, 'merge_timeout': 60}

        >>> deep_merge({}, {"a": 1})
        {'a': 1}
    """
    result = base.copy()

    for key, value in overlay.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def invocation_string(argv: list[str] | None = None) -> str:
    """Return the program and its arguments as one space-separated string.

    Args:
        argv: Argument vector (default: sys.argv)

    Returns:
        Invocation string, e.g. "pytest tests -q"
    """
    argv = sys.argv if argv is None else argv
    if not argv:
        return ""
    return f"{argv[0]} {' '.join(argv[1:])}"


def guess_command_name(invocation: str) -> str:
    """Fallback command guesser: the invocation itself, stripped.

    Real test-suite detection is supplied by the caller through
    ``Configuration(command_guesser=...)``.
    """
    return invocation.strip()
