# ========================
# file: uv_mapper/core/settings/defaults.py
# ========================
from __future__ import annotations
from typing import Any, Dict

from ..constants import (
    DEFAULT_CELL_SIZE_X,
    DEFAULT_CELL_SIZE_Y,
    DEFAULT_HEIGHT,
    DEFAULT_SEED,
    DEFAULT_WIDTH,
)

DEFAULT_SETTINGS: Dict[str, Any] = {
    "seed": DEFAULT_SEED,
    "width": DEFAULT_WIDTH,
    "height": DEFAULT_HEIGHT,
    "cell_size_x": DEFAULT_CELL_SIZE_X,
    "cell_size_y": DEFAULT_CELL_SIZE_Y,
    # only read by the restore filter: [x, y, w, h] or None
    "encoded_region": None,
}
