"""Persistence: key/value backends, serialization and save migrations."""

from property_sim.storage.base import InMemoryStorage, KeyValueStorage
from property_sim.storage.json_file import JsonFileStorage
from property_sim.storage.migrations import migrate
from property_sim.storage.serialization import dump_state, load_state

__all__ = [
    "InMemoryStorage",
    "JsonFileStorage",
    "KeyValueStorage",
    "dump_state",
    "load_state",
    "migrate",
]
