import logging
from importlib import import_module
from importlib.metadata import version

__version__ = version("cob")

logger = logging.getLogger(__name__)

cli = import_module("cob.cli")
core = import_module("cob.core")

__all__ = ["__version__", "cli", "core", "logger"]
