# asyncscribe/app.py
"""A compact application object tying settings, plugins and scanners together.

Lifecycle:

1. ``configure``  -> apply settings from mappings/env/object
2. ``use``        -> register one ``ProtocolPlugin`` per protocol
3. ``discover``   -> import configured discovery modules, collect candidate classes
4. ``scan``       -> run the enabled scanners, return a ``ScanReport``

The component registry is built lazily on first access so configuration
applied before the first scan (``USE_FQN``) is honored.
"""
from __future__ import annotations

import importlib
from dataclasses import dataclass, field
from threading import RLock
from typing import Any, Iterable

from .bindings import BindingFactory
from .conf import Settings
from .headers import AsyncHeadersBuilder, AsyncHeadersNotDocumentedBuilder
from .loaders import BaseLoader, DefaultLoader
from .markers import Marker
from .payload import PayloadTypeExtractor
from .registry import ComponentsService
from .runner import ScanRunner
from .scanners import ClassLevelScanner, MessageBuilder, MethodLevelScanner, Scanner, ScanMode, ScanReport
from .schemas import SchemaGenerator
from .types import OperationAction

__all__ = ["AsyncScribe", "ProtocolPlugin"]


def _import_string(path: str) -> Any:
    module_name, sep, attr = path.partition(":")
    if not sep:
        module_name, _, attr = path.rpartition(".")
    module = importlib.import_module(module_name)
    return getattr(module, attr) if attr else module


@dataclass
class ProtocolPlugin:
    """Markers and binding factory for one protocol.

    ``class_marker`` + ``method_marker`` drive class-level scanning;
    ``listener_marker`` drives method-level scanning (defaults to the class
    marker, as with listeners that can sit on either a class or a method).
    """

    protocol: str
    binding_factory: BindingFactory
    method_marker: Marker
    class_marker: Marker | None = None
    listener_marker: Marker | None = None
    headers_builder: AsyncHeadersBuilder = field(default_factory=AsyncHeadersNotDocumentedBuilder)
    action: OperationAction = OperationAction.RECEIVE

    def __post_init__(self) -> None:
        if self.listener_marker is None:
            self.listener_marker = self.class_marker

    def build_scanners(
        self,
        *,
        components: ComponentsService,
        payload_extractor: PayloadTypeExtractor,
        enabled: Iterable[str],
        placeholders: dict[str, str],
    ) -> list[Scanner]:
        factory = self.binding_factory.with_placeholders(placeholders)
        builder = MessageBuilder(
            binding_factory=factory,
            components=components,
            payload_extractor=payload_extractor,
            headers_builder=self.headers_builder,
        )
        scanners: list[Scanner] = []
        for name in enabled:
            level, _, mode_value = name.partition("-")
            mode = ScanMode(mode_value)
            if level == "class" and self.class_marker is not None:
                scanners.append(
                    ClassLevelScanner(
                        class_marker=self.class_marker,
                        method_marker=self.method_marker,
                        binding_factory=factory,
                        message_builder=builder,
                        mode=mode,
                        action=self.action,
                    )
                )
            elif level == "method" and self.listener_marker is not None:
                scanners.append(
                    MethodLevelScanner(
                        method_marker=self.listener_marker,
                        binding_factory=factory,
                        message_builder=builder,
                        mode=mode,
                        action=self.action,
                    )
                )
        return scanners


@dataclass
class AsyncScribe:
    name: str = "asyncscribe"
    conf: Settings = field(default_factory=Settings)
    loader: BaseLoader = field(default_factory=DefaultLoader)
    plugins: dict[str, ProtocolPlugin] = field(default_factory=dict)

    _components: ComponentsService | None = field(default=None, init=False, repr=False)
    _lock: RLock = field(default_factory=RLock, init=False, repr=False)

    def __post_init__(self) -> None:
        self.conf.update_from_envvar()

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    def configure(self, mapping: dict | None = None, *, namespace: str | None = None) -> AsyncScribe:
        if mapping:
            self.conf.update_from_mapping(mapping, namespace=namespace)
        return self

    def use(self, plugin: ProtocolPlugin) -> ProtocolPlugin:
        if plugin.protocol in self.plugins:
            raise ValueError(f"a plugin for protocol {plugin.protocol!r} is already registered")
        self.plugins[plugin.protocol] = plugin
        return plugin

    @property
    def components(self) -> ComponentsService:
        with self._lock:
            if self._components is None:
                generator = SchemaGenerator(use_fqn=bool(self.conf.get("USE_FQN")))
                self._components = ComponentsService(schema_generator=generator)
            return self._components

    def payload_extractor(self) -> PayloadTypeExtractor:
        envelopes = [
            _import_string(e) if isinstance(e, str) else e for e in self.conf.get("PAYLOAD_ENVELOPES") or ()
        ]
        return PayloadTypeExtractor(envelopes=envelopes)

    # ------------------------------------------------------------------
    # Discovery + scanning
    # ------------------------------------------------------------------
    def discover(self, modules: Iterable[str] | None = None) -> list[type[Any]]:
        paths = tuple(modules) if modules is not None else tuple(self.conf.get("DISCOVERY_PATHS") or ())
        return self.loader.discover(paths)

    def build_scanners(self) -> list[Scanner]:
        if not self.plugins:
            raise LookupError("no protocol plugins registered; call app.use(...) first")
        extractor = self.payload_extractor()
        scanners: list[Scanner] = []
        for plugin in self.plugins.values():
            scanners.extend(
                plugin.build_scanners(
                    components=self.components,
                    payload_extractor=extractor,
                    enabled=self.conf.enabled_scanners,
                    placeholders=self.conf.placeholders,
                )
            )
        return scanners

    def runner(self) -> ScanRunner:
        return ScanRunner(
            self.build_scanners(),
            workers=self.conf.scan_workers,
            raise_on_error=bool(self.conf.get("RAISE_ON_ERROR")),
        )

    def scan(self, candidates: Iterable[type[Any]] | None = None) -> ScanReport:
        """Scan ``candidates`` (default: everything ``discover()`` finds)."""
        classes = list(candidates) if candidates is not None else self.discover()
        return self.runner().run(classes)

    async def ascan(self, candidates: Iterable[type[Any]] | None = None) -> ScanReport:
        classes = list(candidates) if candidates is not None else self.discover()
        return await self.runner().arun(classes)
