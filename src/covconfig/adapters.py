"""Named, reusable configuration blocks."""

import logging
import os
from collections.abc import Callable
from typing import TYPE_CHECKING
from typing import Any

from .exceptions import UnknownAdapterError

if TYPE_CHECKING:
    from .configuration import Configuration

logger = logging.getLogger(__name__)

Adapter = Callable[["Configuration"], Any]


def _root_filter(config: "Configuration") -> None:
    root = str(config.root())
    config.add_filter(lambda source_file: not str(source_file.filename).startswith(root))


def _test_frameworks(config: "Configuration") -> None:
    for pattern in (f"{os.sep}tests{os.sep}", f"{os.sep}test{os.sep}", f"{os.sep}spec{os.sep}", "conftest.py"):
        config.add_filter(pattern)


class AdapterRegistry(dict[str, Adapter]):
    """Adapters by name.

    An adapter is a callable taking the Configuration it configures. The
    registry starts out with the ``root_filter`` and ``test_frameworks``
    adapters.
    """

    def __init__(self):
        super().__init__()
        self.define("root_filter", _root_filter)
        self.define("test_frameworks", _test_frameworks)

    def define(self, name: str, adapter: Adapter) -> Adapter:
        """Register an adapter, replacing any adapter with the same name.

        Args:
            name: Adapter name
            adapter: Callable receiving the Configuration to configure

        Returns:
            The registered adapter
        """
        self[name] = adapter
        return adapter

    def load(self, name: str, config: "Configuration") -> Any:
        """Apply the named adapter to config.

        Raises:
            UnknownAdapterError: If no adapter is defined under name
        """
        if name not in self:
            raise UnknownAdapterError(f"Could not find adapter '{name}'")
        logger.info(f"Loading adapter '{name}'")
        return self[name](config)
