# ========================
# file: uv_mapper/core/settings/loader.py
# ========================
from __future__ import annotations
import copy
import json
import logging
import os
from typing import Any, Dict, Mapping, Union

from ..errors import NotFoundError
from .defaults import DEFAULT_SETTINGS
from .model import FilterSettings
from .validators import clamp_settings, validate_dict

logger = logging.getLogger(__name__)


def deep_merge(base: Dict[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    """Recursive dict merge. Lists/tuples are replaced, not merged element-wise."""
    out = copy.deepcopy(base)
    for k, v in overrides.items():
        if isinstance(v, Mapping) and isinstance(out.get(k), dict):
            out[k] = deep_merge(out[k], v)
        else:
            out[k] = copy.deepcopy(v)
    return out


def _load_json_file(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def load_settings(
    source: Union[str, Dict[str, Any], None] = None,
    overrides: Mapping[str, Any] | None = None,
    strict: bool = True,
) -> FilterSettings:
    """Load filter settings from a JSON path or dict, merge with defaults and apply overrides.

    Args:
        source: path to a JSON file, raw dict, or None for pure defaults
        overrides: mapping of ad-hoc overrides (last layer)
        strict: validate and raise; with strict=False values are clamped the
            way the host property panel does before validation
    Returns:
        FilterSettings (immutable dataclass)
    """
    if source is None:
        data: Dict[str, Any] = {}
    elif isinstance(source, str):
        if not os.path.isfile(source):
            raise NotFoundError(f"Settings file '{source}' not found")
        data = _load_json_file(source)
    elif isinstance(source, dict):
        data = source
    else:
        raise TypeError("source must be str path, dict or None")

    merged = deep_merge(DEFAULT_SETTINGS, data)
    if overrides:
        merged = deep_merge(merged, overrides)

    if not strict:
        merged = clamp_settings(merged)
    validate_dict(merged)

    region = merged.get("encoded_region")
    settings = FilterSettings(
        seed=merged["seed"],
        width=int(merged["width"]),
        height=int(merged["height"]),
        cell_size_x=int(merged["cell_size_x"]),
        cell_size_y=int(merged["cell_size_y"]),
        encoded_region=tuple(int(v) for v in region) if region is not None else None,
    )
    logger.debug("Settings loaded: %s", settings)
    return settings
