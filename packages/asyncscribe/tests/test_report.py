import pytest

from asyncscribe.exceptions import AsyncScribeError, BindingResolutionError, ScanError, SchemaResolutionError
from asyncscribe.scanners import ScanFailedError, ScanReport, failure_scope
from asyncscribe.types import ChannelObject


class Component:
    pass


def test_bind_fills_only_missing_location():
    error = SchemaResolutionError("bad", method="on_order")
    error.bind(component=Component, method="other")

    assert error.component is Component
    assert error.method == "on_order"
    assert error.location == f"{__name__}.Component.on_order"
    assert ScanError("x").location == "<unknown>"


def test_failure_scope_records_and_continues(caplog):
    report = ScanReport()

    with failure_scope(report, component=Component, method="on_order"):
        raise BindingResolutionError("no channel")

    [failure] = report.failures
    assert (failure.component, failure.method) == (Component, "on_order")
    assert str(failure) == f"{__name__}.Component.on_order: BindingResolutionError: no channel"
    assert "no channel" in caplog.text


def test_failure_scope_without_report_reraises_bound_error():
    with pytest.raises(BindingResolutionError) as excinfo:
        with failure_scope(None, component=Component):
            raise BindingResolutionError("no channel")
    assert excinfo.value.component is Component


def test_failure_scope_leaves_other_errors_alone():
    with pytest.raises(RuntimeError):
        with failure_scope(ScanReport(), component=Component):
            raise RuntimeError("not a scan error")


def test_report_routes_entries_and_raises_aggregate():
    report = ScanReport()
    report.add_entries([("orders", ChannelObject())])
    assert report.channels == [("orders", ChannelObject())]

    with pytest.raises(TypeError):
        report.add_entries([("orders", object())])

    report.add_failure(ScanError("boom", component=Component))
    assert not report.ok
    with pytest.raises(ScanFailedError) as excinfo:
        report.raise_for_failures()
    assert isinstance(excinfo.value, AsyncScribeError)
    assert "1 scan failure(s)" in str(excinfo.value)
