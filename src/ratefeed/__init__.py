"""ratefeed package."""

from .cache import RefreshCache
from .classify import Group, classify_key
from .config import Settings, load_settings
from .entries import NormalizedEntry, normalize_entry
from .grouping import build_groups
from .service import create_app

__all__ = [
    "Group",
    "NormalizedEntry",
    "RefreshCache",
    "Settings",
    "build_groups",
    "classify_key",
    "create_app",
    "load_settings",
    "normalize_entry",
]
__version__ = "0.1.0"
