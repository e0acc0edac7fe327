# ==============================================================================
# Файл: uv_mapper/core/export/numpy_exporters.py
# Назначение: Сохранение/загрузка UV-карты с метаданными (NPZ + meta.json).
# ==============================================================================
from __future__ import annotations
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import numpy as np

from ..types import MapGeometry, UvMapResult

logger = logging.getLogger(__name__)


def _ensure_path_exists(path: str) -> None:
    Path(path).parent.mkdir(parents=True, exist_ok=True)


def _atomic_write_json(path: str, data: Dict[str, Any]) -> None:
    _ensure_path_exists(path)
    tmp_path = path + ".tmp"
    with open(tmp_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
    os.replace(tmp_path, path)


def write_raw_uv_map(path_prefix: str, result: UvMapResult) -> None:
    """Пишет <prefix>.meta.json и <prefix>.npz (массив uv)."""
    meta_path = path_prefix + ".meta.json"
    grid_path = path_prefix + ".npz"

    _atomic_write_json(meta_path, result.header())

    _ensure_path_exists(grid_path)
    tmp_path = grid_path + ".tmp"
    with open(tmp_path, "wb") as f:
        np.savez_compressed(f, uv=np.asarray(result.uv, dtype=np.float32))
    os.replace(tmp_path, grid_path)
    logger.info("EXPORT: raw UV map saved: %s(.npz|.meta.json)", path_prefix)


def read_raw_uv_map(path_prefix: str) -> Optional[UvMapResult]:
    """Читает то, что записал write_raw_uv_map. Нет файлов - None."""
    meta_path = path_prefix + ".meta.json"
    grid_path = path_prefix + ".npz"
    if not os.path.exists(meta_path) or not os.path.exists(grid_path):
        return None

    with open(meta_path, "r", encoding="utf-8") as f:
        meta = json.load(f)
    with np.load(grid_path) as data:
        uv = data["uv"].astype(np.float32)

    geometry = MapGeometry(
        width=meta["width"], height=meta["height"],
        cell_size_x=meta["cell_size_x"], cell_size_y=meta["cell_size_y"],
    )
    region = meta.get("encoded_region")
    return UvMapResult(
        kind=meta["kind"],
        seed=meta["seed"],
        geometry=geometry,
        uv=uv,
        seed_token=meta.get("seed_token"),
        encoded_region=tuple(region) if region else None,
    )
