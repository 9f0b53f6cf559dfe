"""Default loader: import discovery modules and collect the classes they define."""

from __future__ import annotations

import importlib
import importlib.util
import inspect
import logging
import sys
from pathlib import Path
from typing import Any, Iterable

from .base import BaseLoader, DiscoveryError

logger = logging.getLogger(__name__)

_GLOB_CHARS = frozenset("*?[")


class DefaultLoader(BaseLoader):
    """Candidates are the classes defined (not merely imported) in each module.

    Module names may be glob patterns (``"shop.*.listeners"``), matched against
    modules and packages found on ``sys.path``.
    """

    def import_modules(self, modules: Iterable[str]) -> list[str]:
        names = self.expand(modules)
        for name in names:
            try:
                importlib.import_module(name)
            except ModuleNotFoundError as exc:
                if exc.name and (name == exc.name or name.startswith(f"{exc.name}.")):
                    raise DiscoveryError(f"Discovery module '{name}' not found") from exc
                raise DiscoveryError(f"Discovery module '{name}' failed to import: {exc}") from exc
            except Exception as exc:
                raise DiscoveryError(f"Failed to import discovery module '{name}'") from exc
        return names

    def discover(self, modules: Iterable[str]) -> list[type[Any]]:
        found: dict[type[Any], None] = {}
        for name in self.import_modules(modules):
            for value in vars(sys.modules[name]).values():
                if inspect.isclass(value) and value.__module__ == name:
                    found.setdefault(value, None)
        logger.debug("discovered %d candidate classes", len(found))
        return list(found)

    def expand(self, modules: Iterable[str]) -> list[str]:
        """Module names with glob patterns replaced by their matches; order kept, duplicates dropped."""
        names: dict[str, None] = {}
        for module in modules:
            if not module:
                continue
            if _GLOB_CHARS.isdisjoint(module):
                names.setdefault(module, None)
                continue
            matches = self._matching_modules(module)
            if not matches:
                logger.debug("pattern %r matched no modules", module)
            for match in matches:
                names.setdefault(match, None)
        return list(names)

    @staticmethod
    def _matching_modules(pattern: str) -> list[str]:
        parts = pattern.split(".")
        file_pattern = "/".join(parts[:-1] + [f"{parts[-1]}.py"])
        package_pattern = "/".join(parts + ["__init__.py"])

        found: list[str] = []
        for entry in sys.path:
            root = Path(entry) if entry else None
            if root is None or not root.is_dir():
                continue
            candidates = sorted(root.glob(file_pattern)) + sorted(p.parent for p in root.glob(package_pattern))
            for path in candidates:
                module_parts = list(path.relative_to(root).with_suffix("").parts)
                name = ".".join(module_parts)
                if name in found or not all(part.isidentifier() for part in module_parts):
                    continue
                if importlib.util.find_spec(name) is not None:
                    found.append(name)
        return found
