# asyncscribe/registry/exceptions.py
"""Registry exceptions"""
from asyncscribe.exceptions.base import AsyncScribeError


# ----------------------------------------------------------------------------
# Registry errors
# ----------------------------------------------------------------------------
class RegistryError(AsyncScribeError): ...


class RegistryLookupError(RegistryError, KeyError): ...


class RegistryFrozenError(RuntimeError, RegistryError): ...
