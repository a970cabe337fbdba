"""
Key-Value Store Interface (Port).

This module defines the raw persistence contract underneath the training
store: an opaque, synchronous get/set store of JSON text blobs keyed by
string, in the spirit of browser localStorage.
"""

from typing import List, Mapping, Optional, Protocol


class KeyValueStore(Protocol):
    """
    Abstract interface for a synchronous string blob store.

    Values are JSON documents serialized to text. Implementations do not
    interpret values; parsing and validation happen in the training store.
    """

    def get(self, key: str) -> Optional[str]:
        """
        Get the raw value stored under a key.

        Args:
            key: Storage key

        Returns:
            Stored text, or None if the key is absent
        """
        ...

    def set(self, key: str, value: str) -> None:
        """
        Store a raw value under a key.

        Args:
            key: Storage key
            value: Serialized JSON text

        Raises:
            StorageError: If the backend cannot persist the value
        """
        ...

    def set_many(self, items: Mapping[str, str]) -> None:
        """
        Store several values as one all-or-nothing write.

        Args:
            items: Mapping of key to serialized JSON text

        Raises:
            StorageError: If the backend cannot persist the values. No
                value is visible after a failure.
        """
        ...

    def keys(self) -> List[str]:
        """
        List all stored keys.

        Returns:
            Keys currently present in the store
        """
        ...
