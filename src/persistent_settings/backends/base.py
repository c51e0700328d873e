"""Common contract for settings storage backends"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class SettingsBackend(ABC):
    """Durable storage for a flat set of named values.

    A backend buffers values in memory. :meth:`load` reads durable
    storage in full and :meth:`flush` writes it in full; each opens and
    releases the underlying file or key within the call.
    """

    #: Whether set() accepts native int/bytes/list values instead of strings
    accepts_native_values: bool = False

    def __init__(self):
        self._values: dict[str, tuple[str, Any]] = {}

    @property
    @abstractmethod
    def location(self) -> str:
        """Human readable description of where values are stored"""

    @abstractmethod
    def load(self) -> bool:
        """Read durable storage into memory.

        Returns:
            False if nothing has been stored yet

        Raises:
            OSError: If storage exists but can't be read
        """

    @abstractmethod
    def flush(self) -> None:
        """Write all buffered values to durable storage.

        Raises:
            OSError: If storage can't be written
        """

    def reset(self) -> None:
        """Discard buffered values before a save"""
        self._values.clear()

    def get(self, name: str) -> Optional[Any]:
        """Stored value for ``name``, or None if absent (case-insensitive)"""
        entry = self._values.get(name.lower())
        return None if entry is None else entry[1]

    def set(self, name: str, value: Any) -> None:
        self._values[name.lower()] = (name, value)

    def items(self) -> list[tuple[str, Any]]:
        """Buffered (name, value) pairs in insertion order"""
        return list(self._values.values())
