# ==============================================================================
# Файл: uv_mapper/core/export/binary_exporters.py
# Назначение: Запись/чтение UV-карты в "сыром" формате RG32F (.rg32f).
#
# Формат: width * height пар float32 little-endian, построчно сверху вниз,
# ровно в том виде, в каком данные заливаются в текстуру RG32F.
# ==============================================================================
from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Optional

import numpy as np

logger = logging.getLogger(__name__)

RG32F_DTYPE = np.dtype("<f4")


def _ensure_path_exists(path: str) -> None:
    """Убеждается, что директория для файла существует."""
    Path(path).parent.mkdir(parents=True, exist_ok=True)


def uv_map_to_bytes(uv_map: np.ndarray) -> bytes:
    """Плотный буфер RG32F для загрузки в текстуру."""
    if uv_map.ndim != 3 or uv_map.shape[2] != 2:
        raise ValueError(f"uv_map must be (H, W, 2), got shape {uv_map.shape}")
    return np.ascontiguousarray(uv_map, dtype=RG32F_DTYPE).tobytes()


def write_uv_map_rg32f(path: str, uv_map: np.ndarray) -> None:
    """Сохраняет UV-карту в .rg32f (атомарно, через временный файл)."""
    data = uv_map_to_bytes(uv_map)
    _ensure_path_exists(path)
    tmp_path = path + ".tmp"
    try:
        with open(tmp_path, "wb") as f:
            f.write(data)
        os.replace(tmp_path, path)
    except OSError:
        logger.exception("Failed to write RG32F map: %s", path)
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise
    logger.info("EXPORT: RG32F UV map %dx%d saved: %s", uv_map.shape[1], uv_map.shape[0], path)


def read_uv_map_rg32f(path: str, width: int, height: int) -> Optional[np.ndarray]:
    """Читает .rg32f обратно в (height, width, 2). Нет файла - None."""
    if not os.path.exists(path):
        return None
    raw = np.fromfile(path, dtype=RG32F_DTYPE)
    expected = int(width) * int(height) * 2
    if raw.size != expected:
        raise ValueError(
            f"{path}: expected {expected} float32 values for {width}x{height}, got {raw.size}"
        )
    return raw.reshape((int(height), int(width), 2)).astype(np.float32)
