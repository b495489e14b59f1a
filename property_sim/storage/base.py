"""Key/value storage collaborator."""

from typing import Protocol


class KeyValueStorage(Protocol):
    """Synchronous string store holding one blob per key."""

    def get(self, key: str) -> str | None:
        """Return the stored value, or None if the key is absent."""

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""


class InMemoryStorage:
    """Dictionary-backed storage, mainly for tests and throwaway games."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
