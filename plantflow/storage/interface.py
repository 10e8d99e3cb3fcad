from abc import ABC, abstractmethod
from typing import Any, Optional


class KeyValueStore(ABC):
    """
    Abstract interface for the durable side channel. Supports both S3 and local filesystem.
    """

    @abstractmethod
    def put(self, key: str, value: Any) -> None:
        """
        Persist a JSON-serializable value under a key, replacing any previous value.

        Args:
            key: Entry name (e.g. "simulationResults")
            value: JSON-serializable document
        """
        pass

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """
        Retrieve the value stored under a key.

        Args:
            key: Entry name

        Returns:
            The stored document, or None if the key is absent
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        Remove a key.

        Args:
            key: Entry name

        Returns:
            True if an entry was removed, False otherwise
        """
        pass
