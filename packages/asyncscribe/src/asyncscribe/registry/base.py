# asyncscribe/registry/base.py


import logging
from threading import RLock
from typing import Any, Callable, Generic, Hashable, TypeVar

from .exceptions import RegistryFrozenError, RegistryLookupError

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
T = TypeVar("T")


class BaseRegistry(Generic[K, T]):
    """Thread-safe store keyed by a stable identity.

    Writes go through ``upsert``: a single locked insert-if-absent that returns
    the stored value. Concurrent callers racing on the same key converge on
    whichever value landed first; nobody overwrites it.
    """

    def __init__(self, *, name: str = "registry") -> None:
        self.name = name
        self._lock = RLock()
        self._store: dict[K, T] = {}
        self._frozen = False

    # --- registration ---

    def upsert(self, key: K, factory: Callable[[], T]) -> tuple[T, bool]:
        """
        Return the value stored under ``key``, creating it with ``factory`` if absent.

        ``factory`` runs while the lock is held, so it is invoked at most once per
        key even under concurrent registration.

        :param key: Identity of the entry.
        :param factory: Zero-argument callable building the value on first sight.
        :return: ``(value, created)`` where ``created`` is True only for the call
            that inserted the value.
        :raises RegistryFrozenError: If the key is new and the registry is frozen.
        """
        with self._lock:
            if key in self._store:
                return self._store[key], False
            if self._frozen:
                raise RegistryFrozenError(f"{self.name} is frozen; cannot add {key!r}")
            value = factory()
            self._store[key] = value
            logger.debug("%s: stored %r", self.name, key)
            return value, True

    def put_if_absent(self, key: K, value: T) -> T:
        """Store ``value`` unless ``key`` is taken; return the stored value either way."""
        stored, _ = self.upsert(key, lambda: value)
        return stored

    # --- retrieval ---

    def get(self, key: K) -> T:
        """
        Return the value stored under ``key``.

        :raises RegistryLookupError: If nothing is registered under ``key``.
        """
        with self._lock:
            try:
                return self._store[key]
            except KeyError as err:
                raise RegistryLookupError(f"{self.name}: {key!r} not registered") from err

    def try_get(self, key: K) -> T | None:
        with self._lock:
            return self._store.get(key)

    def __contains__(self, key: Any) -> bool:
        with self._lock:
            return key in self._store

    # --- enumeration ---

    def count(self) -> int:
        with self._lock:
            return len(self._store)

    def snapshot(self) -> dict[K, T]:
        """Shallow copy of the store, safe to iterate while scans are running."""
        with self._lock:
            return dict(self._store)

    # --- mutation / control ---

    def clear(self) -> None:
        with self._lock:
            if self._frozen:
                raise RegistryFrozenError(f"{self.name} is frozen")
            self._store.clear()

    def freeze(self) -> None:
        """Reject new keys from now on. Existing keys still resolve through ``upsert``."""
        with self._lock:
            self._frozen = True
