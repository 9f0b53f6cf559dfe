import pytest

from asyncscribe.loaders import DefaultLoader, DiscoveryError

import sample_components


def test_discover_returns_classes_defined_in_module():
    candidates = DefaultLoader().discover(["sample_components"])

    # imported names such as Order are not candidates
    assert candidates == [
        sample_components.OrderEvents,
        sample_components.Refunds,
        sample_components.NotAComponent,
    ]


def test_glob_patterns_expand_against_sys_path():
    loader = DefaultLoader()
    assert "sample_components" in loader.import_modules(["sample_comp*"])


def test_missing_module_raises_discovery_error():
    with pytest.raises(DiscoveryError, match="not found"):
        DefaultLoader().discover(["nonexistent.discovery.module"])


def test_duplicate_and_empty_module_names_are_ignored():
    assert DefaultLoader().import_modules(["sample_components", "", "sample_components"]) == ["sample_components"]
