# ==============================================================================
# Файл: uv_mapper/filters/properties.py
# Назначение: Описание свойств фильтра для панели настроек хоста.
# ==============================================================================
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, List, Optional

from ..core.constants import SETTING_LIMITS

KIND_TEXT = "text"
KIND_INT = "int"
KIND_INFO = "info"


@dataclass(frozen=True)
class PropertyDef:
    name: str
    label: str
    kind: str
    min: Optional[int] = None
    max: Optional[int] = None
    step: Optional[int] = None

    def clamp(self, value: Any) -> Any:
        if self.kind != KIND_INT:
            return value
        return min(max(int(value), self.min), self.max)


def _int_prop(name: str, label: str) -> PropertyDef:
    lo, hi = SETTING_LIMITS[name]
    return PropertyDef(name, label, KIND_INT, min=lo, max=hi, step=1)


def shuffle_properties() -> List[PropertyDef]:
    return [
        PropertyDef("seed", "Random seed", KIND_TEXT),
        _int_prop("width", "Width (1920 recommended)"),
        _int_prop("height", "Height (1080 recommended)"),
        _int_prop("cell_size_x", "Cell width (16 recommended)"),
        _int_prop("cell_size_y", "Cell height (16 recommended)"),
        PropertyDef(
            "help_1",
            "Numeric seeds should be within 0 ~ 4294967295. Other numbers and "
            "non-numeric text are turned into a number by hashing.",
            KIND_INFO,
        ),
        PropertyDef("help_2", "Cell width and height work best as multiples of 16.", KIND_INFO),
    ]


def restore_properties() -> List[PropertyDef]:
    props = shuffle_properties()
    props.insert(5, PropertyDef(
        "encoded_region",
        "Encoded region x, y, w, h (empty = whole frame)",
        KIND_TEXT,
    ))
    return props
