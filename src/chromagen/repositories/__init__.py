from chromagen.repositories.interfaces import KeyValueStore
from chromagen.repositories.memory import InMemoryKeyValueStore
from chromagen.repositories.sqlite import SQLiteKeyValueStore

__all__ = [
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "SQLiteKeyValueStore",
]
