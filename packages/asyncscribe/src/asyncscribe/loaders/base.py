"""Loader interface used for candidate discovery."""

from __future__ import annotations

from typing import Any, Iterable

from asyncscribe.exceptions import AsyncScribeError


class DiscoveryError(AsyncScribeError):
    """Raised when a discovery module cannot be imported."""


class BaseLoader:
    """Base loader responsible for enumerating candidate component classes."""

    def import_modules(self, modules: Iterable[str]) -> list[str]:
        raise NotImplementedError

    def discover(self, modules: Iterable[str]) -> list[type[Any]]:
        raise NotImplementedError
