from abc import ABC, abstractmethod
from typing import Any


class KeyValueStore(ABC):
    """JSON key-value store with per-key expiry.

    Implementations raise StoreUnavailableError when the backend cannot be
    reached. Writes are last-write-wins; there is no transactional
    read-modify-write.
    """

    @abstractmethod
    def get(self, key: str) -> Any | None:
        pass

    @abstractmethod
    def put(self, key: str, value: Any, ttl_seconds: int | None = None) -> None:
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        pass
