from __future__ import annotations

import logging
from importlib.metadata import version

__version__ = version("cob")

logger = logging.getLogger("cob")

__all__ = ["__version__", "logger"]
