# ==============================================================================
# Файл: uv_mapper/core/types.py
# Назначение: Геометрия сетки ячеек и контейнер результата генерации карты.
# ==============================================================================
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

import numpy as np


def _ceil_div(a: int, b: int) -> int:
    return (a + b - 1) // b


@dataclass(frozen=True)
class MapGeometry:
    """Размер изображения и ячейки; всё остальное выводится из них."""

    width: int
    height: int
    cell_size_x: int
    cell_size_y: int

    def __post_init__(self) -> None:
        for name in ("width", "height", "cell_size_x", "cell_size_y"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value < 1:
                raise ValueError(f"MapGeometry.{name} must be an integer >= 1, got {value!r}")
            # np.int64 и пр. приводим к int, чтобы производные поля были int
            object.__setattr__(self, name, int(value))

    @property
    def cell_count_x(self) -> int:
        return _ceil_div(self.width, self.cell_size_x)

    @property
    def cell_count_y(self) -> int:
        return _ceil_div(self.height, self.cell_size_y)

    @property
    def cell_count(self) -> int:
        return self.cell_count_x * self.cell_count_y

    @property
    def last_cell_x(self) -> int:
        return (self.cell_count_x - 1) * self.cell_size_x

    @property
    def last_cell_y(self) -> int:
        return (self.cell_count_y - 1) * self.cell_size_y

    @property
    def last_cell_size_x(self) -> int:
        return self.width - self.last_cell_x

    @property
    def last_cell_size_y(self) -> int:
        return self.height - self.last_cell_y

    def header(self) -> Dict[str, int]:
        return {
            "width": self.width,
            "height": self.height,
            "cell_size_x": self.cell_size_x,
            "cell_size_y": self.cell_size_y,
        }


@dataclass
class UvMapResult:
    """Сгенерированная карта вместе с параметрами, из которых она получена."""

    kind: str
    seed: int
    geometry: MapGeometry
    uv: np.ndarray  # (height, width, 2) float32
    seed_token: Optional[str] = None
    encoded_region: Optional[Tuple[int, int, int, int]] = None
    metrics: Dict[str, Any] = field(default_factory=dict)

    def header(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "seed": self.seed,
            "seed_token": self.seed_token,
            "encoded_region": list(self.encoded_region) if self.encoded_region else None,
            **self.geometry.header(),
        }
