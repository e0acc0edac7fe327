# ========================
# file: uv_mapper/core/settings/__init__.py
# ========================
from .defaults import DEFAULT_SETTINGS
from .model import FilterSettings
from .loader import load_settings, deep_merge
from .validators import validate_dict, clamp_settings

__all__ = [
    "DEFAULT_SETTINGS",
    "FilterSettings",
    "load_settings",
    "deep_merge",
    "validate_dict",
    "clamp_settings",
]
