# asyncscribe/scanners/report.py
"""Scan output plus the failures collected along the way."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from threading import RLock
from typing import Any, Iterable, Iterator

from asyncscribe.exceptions import AsyncScribeError, ScanError
from asyncscribe.types import ChannelObject, OperationObject

logger = logging.getLogger(__name__)

__all__ = ["ScanFailure", "ScanFailedError", "ScanReport", "failure_scope"]


@dataclass(frozen=True)
class ScanFailure:
    component: type[Any] | None
    method: str | None
    error: ScanError

    @property
    def location(self) -> str:
        return self.error.location

    def __str__(self) -> str:
        return f"{self.location}: {type(self.error).__name__}: {self.error}"


class ScanFailedError(AsyncScribeError):
    """Raised by ``ScanReport.raise_for_failures`` when any unit failed."""

    def __init__(self, failures: Iterable[ScanFailure]) -> None:
        self.failures = tuple(failures)
        lines = "\n".join(f"  - {f}" for f in self.failures)
        super().__init__(f"{len(self.failures)} scan failure(s):\n{lines}")


class ScanReport:
    """Channel and operation entries emitted by scanners, plus failures.

    Entries are kept as emitted, duplicates included; merging same-named
    channels is the document assembler's decision.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self.channels: list[tuple[str, ChannelObject]] = []
        self.operations: list[tuple[str, OperationObject]] = []
        self.failures: list[ScanFailure] = []

    def add_entries(self, entries: Iterable[tuple[str, Any]]) -> None:
        with self._lock:
            for key, descriptor in entries:
                if isinstance(descriptor, OperationObject):
                    self.operations.append((key, descriptor))
                elif isinstance(descriptor, ChannelObject):
                    self.channels.append((key, descriptor))
                else:
                    raise TypeError(f"unexpected scan entry for {key!r}: {type(descriptor).__name__}")

    def add_failure(self, error: ScanError) -> ScanFailure:
        failure = ScanFailure(component=error.component, method=error.method, error=error)
        with self._lock:
            self.failures.append(failure)
        logger.warning("scan failed at %s: %s", failure.location, error)
        return failure

    def merge(self, other: ScanReport) -> None:
        with self._lock:
            self.channels.extend(other.channels)
            self.operations.extend(other.operations)
            self.failures.extend(other.failures)

    @property
    def ok(self) -> bool:
        return not self.failures

    def raise_for_failures(self) -> None:
        if self.failures:
            raise ScanFailedError(self.failures)


@contextmanager
def failure_scope(
    report: ScanReport | None,
    *,
    component: type[Any],
    method: str | None = None,
) -> Iterator[None]:
    """Attribute ``ScanError``s to ``component``/``method``.

    With a report the error is recorded and the block is abandoned; the caller
    continues after the ``with``. Without one the error propagates.
    """
    try:
        yield
    except ScanError as exc:
        exc.bind(component=component, method=method)
        if report is None:
            raise
        report.add_failure(exc)
