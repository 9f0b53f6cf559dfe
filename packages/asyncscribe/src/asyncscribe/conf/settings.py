"""Mapping-like configuration layered over ``DEFAULTS``.

Lookup order: runtime overrides, constructor layers, then defaults. A module
named by ``ASYNCSCRIBE_CONFIG_MODULE`` may contribute its UPPERCASE names.
"""

import importlib
import os
from collections import ChainMap
from typing import Any, Iterator, Mapping, MutableMapping

from .defaults import DEFAULTS

CONFIG_ENVVAR = "ASYNCSCRIBE_CONFIG_MODULE"

SCANNER_NAMES = (
    "class-channels",
    "class-operations",
    "method-channels",
    "method-operations",
)


def _select(mapping: Mapping[str, Any], namespace: str | None) -> dict[str, Any]:
    """UPPERCASE names, or ``NAMESPACE_``-prefixed names with the prefix stripped."""
    if namespace is None:
        return {name: value for name, value in mapping.items() if name.isupper()}
    prefix = f"{namespace}_"
    return {name.removeprefix(prefix): value for name, value in mapping.items() if name.startswith(prefix)}


class Settings(MutableMapping[str, Any]):
    """Layered scan settings. Writes land in the override layer only."""

    def __init__(self, *layers: Mapping[str, Any]) -> None:
        self._overrides: dict[str, Any] = {}
        self._chain = ChainMap(self._overrides, *map(dict, layers), dict(DEFAULTS))

    def __getitem__(self, key: str) -> Any:
        return self._chain[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._overrides[key] = value

    def __delitem__(self, key: str) -> None:
        del self._overrides[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._chain)

    def __len__(self) -> int:
        return len(self._chain)

    # ---------------- loading ----------------
    def update_from_mapping(self, mapping: Mapping[str, Any], *, namespace: str | None = None) -> None:
        self._overrides.update(_select(mapping, namespace))

    def update_from_object(self, module_name: str, *, namespace: str | None = None) -> None:
        self.update_from_mapping(vars(importlib.import_module(module_name)), namespace=namespace)

    def update_from_envvar(self, envvar: str = CONFIG_ENVVAR, *, namespace: str | None = None) -> bool:
        """Load the module named by ``envvar``; False when the variable is unset."""
        module_name = os.environ.get(envvar, "").strip()
        if module_name:
            self.update_from_object(module_name, namespace=namespace)
        return bool(module_name)

    def as_dict(self) -> dict[str, Any]:
        return {key: self._chain[key] for key in self._chain}

    # ---------------- typed accessors ----------------
    @property
    def scan_workers(self) -> int:
        value = self.get("SCAN_WORKERS")
        workers = 1 if value is None else int(value)
        if workers < 1:
            raise ValueError(f"SCAN_WORKERS must be >= 1 (got {workers})")
        return workers

    @property
    def enabled_scanners(self) -> tuple[str, ...]:
        names = tuple(str(n).strip().lower() for n in self.get("ENABLED_SCANNERS") or ())
        unknown = [n for n in names if n not in SCANNER_NAMES]
        if unknown:
            supported = ", ".join(SCANNER_NAMES)
            raise ValueError(f"unknown scanners {unknown!r}; supported scanners: {supported}")
        return names

    @property
    def placeholders(self) -> dict[str, str]:
        return {str(k): str(v) for k, v in (self.get("PLACEHOLDERS") or {}).items()}
