"""Exceptions for covconfig."""


class ConfigError(Exception):
    """Base exception for configuration errors."""

    pass


class MissingFormatterError(ConfigError):
    """Formatter was read before one was configured."""

    pass


class InvalidFilterArgumentError(ConfigError, TypeError):
    """Filter argument is neither a Filter, a string nor a predicate."""

    pass


class UnknownAdapterError(ConfigError, KeyError):
    """Requested adapter has not been defined."""

    pass


class ConfigFileError(ConfigError):
    """Error reading a settings file."""

    pass
