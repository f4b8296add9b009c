"""
Storage layer for smart-shell's configuration tables.

A :class:`StorageBackend` reads and writes whole documents keyed by
filesystem path. :class:`ConfigStore` sits on top of it and applies the
load policy shared by both tables: missing documents are seeded and
persisted, undecodable ones are either reseeded with a warning or rejected,
depending on ``strict``.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, Optional, TypeVar

from smart_shell.errors import ConfigError
from smart_shell.log import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class StorageBackend(ABC):
    """Abstract base class for document storage backends."""

    @abstractmethod
    def read(self, path: Path) -> Optional[Any]:
        """
        Read the document stored at *path*.

        Returns:
            The decoded document, or None if nothing is stored there

        Raises:
            ConfigError: if the stored document cannot be decoded
        """
        pass

    @abstractmethod
    def write(self, path: Path, data: Any) -> None:
        """Replace the document stored at *path* with *data*."""
        pass


class ConfigStore:
    """Loads and saves typed tables through a backend."""

    def __init__(self, backend: StorageBackend, strict: bool = False):
        """
        Args:
            backend: Where documents live
            strict: Raise on malformed documents instead of reseeding them
        """
        self.backend = backend
        self.strict = strict

    def load(self, path: Path, parse: Callable[..., T], seed: Callable[[], T],
             to_dict: Callable[[T], Any]) -> T:
        """
        Load the table at *path*.

        A missing document is replaced by ``seed()``, which is written back
        so the user has a file to edit. A document that cannot be decoded
        raises :class:`ConfigError` in strict mode; otherwise it is logged
        and overwritten with the seed.

        A decoded document is never rewritten here. In strict mode any
        invalid entry raises; otherwise each invalid entry is logged and
        left out of the returned table. A document whose top level has the
        wrong shape raises in both modes.
        """
        try:
            data = self.backend.read(path)
        except ConfigError as e:
            e = _with_path(e, path)
            if self.strict:
                raise e
            logger.warning("Invalid config %s, reseeding with defaults", e)
            return self._seed(path, seed, to_dict)

        if data is None:
            logger.info("No config at %s, creating it", path)
            return self._seed(path, seed, to_dict)

        def skip(error: ConfigError) -> None:
            logger.warning("Ignoring invalid entry in %s: %s", path, error)

        try:
            return parse(data, None if self.strict else skip)
        except ConfigError as e:
            raise _with_path(e, path)

    def _seed(self, path: Path, seed: Callable[[], T], to_dict: Callable[[T], Any]) -> T:
        table = seed()
        self.backend.write(path, to_dict(table))
        return table

    def save(self, path: Path, data: Any) -> None:
        self.backend.write(path, data)


def _with_path(error: ConfigError, path: Path) -> ConfigError:
    if error.path is None:
        return ConfigError(str(error), path)
    return error
