# ========================
# file: uv_mapper/core/settings/model.py
# ========================
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from ..types import MapGeometry


@dataclass(frozen=True)
class FilterSettings:
    seed: str
    width: int
    height: int
    cell_size_x: int
    cell_size_y: int
    encoded_region: Optional[Tuple[int, int, int, int]] = None

    @property
    def geometry(self) -> MapGeometry:
        return MapGeometry(self.width, self.height, self.cell_size_x, self.cell_size_y)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seed": self.seed,
            "width": self.width,
            "height": self.height,
            "cell_size_x": self.cell_size_x,
            "cell_size_y": self.cell_size_y,
            "encoded_region": list(self.encoded_region) if self.encoded_region else None,
        }
