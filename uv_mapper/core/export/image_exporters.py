# ==============================================================================
# Файл: uv_mapper/core/export/image_exporters.py
# Назначение: PNG-превью UV-карты и ввод/вывод кадров через Pillow.
# ==============================================================================
from __future__ import annotations
import logging
import os
from pathlib import Path

import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)


def _ensure_path_exists(path: str) -> None:
    """Убеждается, что директория для файла существует."""
    Path(path).parent.mkdir(parents=True, exist_ok=True)


def _save_png(img: Image.Image, path: str) -> None:
    _ensure_path_exists(path)
    tmp_path = path + ".tmp"
    img.save(tmp_path, format="PNG")
    os.replace(tmp_path, path)


def uv_map_to_rgb(uv_map: np.ndarray) -> np.ndarray:
    """u -> R, v -> G, B = 0. Перемешанные ячейки видны как лоскутное одеяло."""
    h, w = uv_map.shape[:2]
    rgb = np.zeros((h, w, 3), dtype=np.uint8)
    rgb[..., :2] = (np.clip(uv_map, 0.0, 1.0) * 255.0 + 0.5).astype(np.uint8)
    return rgb


def write_uv_map_preview(path: str, uv_map: np.ndarray) -> None:
    _save_png(Image.fromarray(uv_map_to_rgb(uv_map)), path)
    logger.info("EXPORT: UV map preview saved: %s", path)


def load_frame(path: str) -> np.ndarray:
    """Кадр как (H, W, 4) uint8 - тот же RGBA, что отдаёт фильтру хост."""
    with Image.open(path) as img:
        return np.asarray(img.convert("RGBA"), dtype=np.uint8).copy()


def write_frame_png(path: str, frame: np.ndarray) -> None:
    arr = np.asarray(frame)
    if arr.dtype != np.uint8:
        arr = (np.clip(arr, 0.0, 1.0) * 255).astype(np.uint8)
    _save_png(Image.fromarray(arr), path)
    logger.info("EXPORT: frame saved: %s", path)
