# asyncscribe/runner.py
"""Run every configured scanner over a batch of candidate classes.

Each class is scanned into its own report, then reports are merged in candidate
order, so a thread-pooled run emits exactly what a sequential run would. An
unexpected exception while scanning a class discards that class's partial
entries and is recorded against the class; other classes are unaffected.
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Iterable, Sequence

from asgiref.sync import sync_to_async

from asyncscribe.exceptions import ScanError
from asyncscribe.scanners import Scanner, ScanReport
from asyncscribe.tracing import scan_span

logger = logging.getLogger(__name__)

__all__ = ["ScanRunner"]


class ScanRunner:
    def __init__(
        self,
        scanners: Sequence[Scanner],
        *,
        workers: int = 1,
        raise_on_error: bool = False,
    ) -> None:
        self.scanners = tuple(scanners)
        self.workers = max(1, int(workers))
        self.raise_on_error = raise_on_error

    def run(self, candidates: Iterable[type[Any]]) -> ScanReport:
        """Scan ``candidates`` (duplicates ignored) and return the merged report.

        :raises ScanFailedError: If ``raise_on_error`` is set and any unit failed.
        """
        classes = list(dict.fromkeys(candidates))
        with scan_span(
            "asyncscribe.scan.run",
            attributes={
                "asyncscribe.candidates": len(classes),
                "asyncscribe.scanners": [s.name for s in self.scanners],
                "asyncscribe.workers": self.workers,
            },
        ):
            if self.workers > 1 and len(classes) > 1:
                with ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="asyncscribe") as pool:
                    partials = list(pool.map(self.scan_class, classes))
            else:
                partials = [self.scan_class(cls) for cls in classes]

        report = ScanReport()
        for partial in partials:
            report.merge(partial)

        logger.info(
            "scanned %d classes: %d channels, %d operations, %d failures",
            len(classes),
            len(report.channels),
            len(report.operations),
            len(report.failures),
        )
        if self.raise_on_error:
            report.raise_for_failures()
        return report

    async def arun(self, candidates: Iterable[type[Any]]) -> ScanReport:
        return await sync_to_async(self.run)(list(candidates))

    def scan_class(self, component: type[Any]) -> ScanReport:
        """Apply every scanner to one class; the returned report holds only this class."""
        local = ScanReport()
        try:
            for scanner in self.scanners:
                local.add_entries(scanner.scan(component, report=local))
        except Exception as exc:
            if isinstance(exc, ScanError):
                error = exc.bind(component=component)
            else:
                error = ScanError(f"unexpected {type(exc).__name__}: {exc}", component=component)
                error.__cause__ = exc
            isolated = ScanReport()
            isolated.failures.extend(local.failures)
            isolated.add_failure(error)
            return isolated
        return local
