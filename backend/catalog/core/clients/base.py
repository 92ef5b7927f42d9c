from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

ConfigT = TypeVar("ConfigT")


class BaseClient(ABC, Generic[ConfigT]):
    """
    Base interface for clients of external backing services.

    The catalog talks to two of them: the PostgreSQL metadata store and the
    optional Valkey cache.
    """

    def __init__(self, config: ConfigT):
        self.config = config
        self._initialized = False

    @abstractmethod
    async def initialize(self) -> None:
        """Open connections or pools."""
        pass

    @abstractmethod
    async def cleanup(self) -> None:
        """Release connections or pools."""
        pass

    @property
    def is_initialized(self) -> bool:
        """Check if the client has been initialized."""
        return self._initialized

    @abstractmethod
    async def get_metrics(self) -> dict[str, Any]:
        """Report pool or connection statistics."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Return True if the backing service answers."""
        pass
