# ========================
# file: uv_mapper/core/settings/validators.py
# ========================
from __future__ import annotations
import copy
from typing import Any, Dict

from ..constants import SETTING_LIMITS
from ..errors import ValidationError


def _require(cond: bool, msg: str) -> None:
    if not cond:
        raise ValidationError(msg)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_dict(cfg: Dict[str, Any]) -> None:
    """Strict validation of a merged settings dict.

    Raises ValidationError on the first failing check.
    """
    _require(isinstance(cfg.get("seed"), str), "seed must be a string")

    for key, (lo, hi) in SETTING_LIMITS.items():
        value = cfg.get(key)
        _require(_is_int(value), f"{key} must be an integer")
        _require(lo <= value <= hi, f"{key} must be in [{lo}, {hi}], got {value}")

    region = cfg.get("encoded_region")
    if region is not None:
        _require(
            isinstance(region, (list, tuple)) and len(region) == 4,
            "encoded_region must be a list [x, y, w, h]",
        )
        _require(all(_is_int(v) for v in region), "encoded_region values must be integers")
        x, y, w, h = region
        _require(x >= 0 and y >= 0, "encoded_region x/y must be >= 0")
        _require(w >= 1 and h >= 1, "encoded_region w/h must be >= 1")
        _require(
            x + w <= cfg["width"] and y + h <= cfg["height"],
            "encoded_region must fit inside width x height",
        )


def clamp_settings(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Host-side coercion: what a property panel would let through.

    Integers are clamped into their limits, the seed becomes a string and a
    malformed encoded_region is dropped. Returns a new dict.
    """
    out = copy.deepcopy(dict(cfg))
    seed = out.get("seed")
    out["seed"] = "" if seed is None else str(seed)

    for key, (lo, hi) in SETTING_LIMITS.items():
        try:
            value = int(out.get(key, lo))
        except (TypeError, ValueError):
            value = lo
        out[key] = min(max(value, lo), hi)

    region = out.get("encoded_region")
    if isinstance(region, str):
        # текстовое поле панели: "24, 36, 1552, 873"
        parts = region.replace(",", " ").split()
        region = parts if parts else None
    if region is None:
        out["encoded_region"] = None
    else:
        try:
            x, y, w, h = (int(v) for v in region)
        except (TypeError, ValueError):
            out["encoded_region"] = None
        else:
            x = min(max(x, 0), out["width"] - 1)
            y = min(max(y, 0), out["height"] - 1)
            w = min(max(w, 1), out["width"] - x)
            h = min(max(h, 1), out["height"] - y)
            out["encoded_region"] = [x, y, w, h]
    return out
