"""Shared pytest fixtures for asyncscribe tests."""

import pytest

from asyncscribe.conf import CONFIG_ENVVAR
from asyncscribe.registry import ComponentsService
from asyncscribe.scanners import MessageBuilder

from support import StubBindingFactory


@pytest.fixture(autouse=True)
def _no_config_module(monkeypatch):
    monkeypatch.delenv(CONFIG_ENVVAR, raising=False)


@pytest.fixture
def components():
    return ComponentsService()


@pytest.fixture
def binding_factory():
    return StubBindingFactory()


@pytest.fixture
def message_builder(binding_factory, components):
    return MessageBuilder(binding_factory=binding_factory, components=components)
