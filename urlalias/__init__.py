"""
urlalias package initializer.
"""

from . import api
from . import manager
from . import storage

__version__ = "0.1.0"

__all__ = ["api", "manager", "storage"]
