from .defaults import DEFAULTS
from .settings import CONFIG_ENVVAR, SCANNER_NAMES, Settings

__all__ = ["DEFAULTS", "CONFIG_ENVVAR", "SCANNER_NAMES", "Settings"]
