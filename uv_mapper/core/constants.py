# ==============================================================================
# Файл: uv_mapper/core/constants.py
# Назначение: Значения по умолчанию, допустимые диапазоны и форматы текстур.
# ==============================================================================
from __future__ import annotations
from typing import Dict, Tuple

# --- Настройки фильтра по умолчанию ---
DEFAULT_SEED = "0"
DEFAULT_WIDTH = 1920
DEFAULT_HEIGHT = 1080
DEFAULT_CELL_SIZE_X = 16
DEFAULT_CELL_SIZE_Y = 16

# --- Допустимые диапазоны (min, max) ---
# Их соблюдает слой настроек, сам генератор карт лишь требует значения >= 1.
SETTING_LIMITS: Dict[str, Tuple[int, int]] = {
    "width": (1, 3840),
    "height": (1, 2160),
    "cell_size_x": (1, 2048),
    "cell_size_y": (1, 2048),
}

# --- Форматы текстур ---
TEXTURE_FORMAT_RG32F = "RG32F"
TEXTURE_FORMAT_RGBA8 = "RGBA8"
TEXTURE_CHANNELS: Dict[str, int] = {
    TEXTURE_FORMAT_RG32F: 2,
    TEXTURE_FORMAT_RGBA8: 4,
}

# --- Виды карт ---
MAP_KIND_SHUFFLE = "shuffle"
MAP_KIND_RESTORE = "restore"

SAMPLE_NEAREST = "nearest"
SAMPLE_BILINEAR = "bilinear"
SAMPLE_MODES = (SAMPLE_NEAREST, SAMPLE_BILINEAR)
