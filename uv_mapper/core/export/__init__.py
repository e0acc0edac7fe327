# ==============================================================================
# Файл: uv_mapper/core/export/__init__.py
# Назначение: Точка входа в пакет для экспорта данных.
# ==============================================================================
from __future__ import annotations

from .binary_exporters import read_uv_map_rg32f, uv_map_to_bytes, write_uv_map_rg32f
from .image_exporters import load_frame, uv_map_to_rgb, write_frame_png, write_uv_map_preview
from .numpy_exporters import read_raw_uv_map, write_raw_uv_map

__all__ = [
    "write_uv_map_rg32f",
    "read_uv_map_rg32f",
    "uv_map_to_bytes",
    "write_uv_map_preview",
    "uv_map_to_rgb",
    "load_frame",
    "write_frame_png",
    "write_raw_uv_map",
    "read_raw_uv_map",
]
