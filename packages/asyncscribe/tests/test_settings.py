import sys
import types

import pytest

from asyncscribe.conf import CONFIG_ENVVAR, DEFAULTS, SCANNER_NAMES, Settings


def test_defaults_are_visible():
    settings = Settings()

    assert settings["USE_FQN"] is False
    assert settings.scan_workers == 1
    assert settings.enabled_scanners == SCANNER_NAMES
    assert settings.as_dict() == dict(DEFAULTS)


def test_layers_and_overrides_take_precedence():
    settings = Settings({"SCAN_WORKERS": 2})
    assert settings.scan_workers == 2

    settings["SCAN_WORKERS"] = 3
    assert settings.scan_workers == 3

    del settings["SCAN_WORKERS"]
    assert settings.scan_workers == 2


def test_update_from_mapping_keeps_only_uppercase_names():
    settings = Settings()
    settings.update_from_mapping({"USE_FQN": True, "helper": object()})

    assert settings["USE_FQN"] is True
    assert "helper" not in settings


def test_update_from_mapping_with_namespace():
    settings = Settings()
    settings.update_from_mapping({"ASYNCSCRIBE_SCAN_WORKERS": 4, "OTHER_SCAN_WORKERS": 9}, namespace="ASYNCSCRIBE")
    assert settings.scan_workers == 4


def test_config_module_from_envvar(monkeypatch):
    module = types.ModuleType("asyncscribe_test_config")
    module.PLACEHOLDERS = {"env": "prod"}
    module.lowercase = "ignored"
    monkeypatch.setitem(sys.modules, module.__name__, module)
    monkeypatch.setenv(CONFIG_ENVVAR, module.__name__)

    settings = Settings()
    settings.update_from_envvar()

    assert settings.placeholders == {"env": "prod"}
    assert "lowercase" not in settings


def test_invalid_values_are_rejected():
    with pytest.raises(ValueError):
        Settings({"SCAN_WORKERS": 0}).scan_workers
    with pytest.raises(ValueError, match="supported scanners"):
        Settings({"ENABLED_SCANNERS": ["class-channels", "everything"]}).enabled_scanners


def test_scanner_names_are_normalized():
    settings = Settings({"ENABLED_SCANNERS": [" Class-Channels "]})
    assert settings.enabled_scanners == ("class-channels",)
