# ==============================================================================
# Файл: uv_mapper/algorithms/uv_map.py
# Назначение: Генерация UV-карты "перемешанных ячеек" и обратной (восстанавливающей).
#
# Изображение режется на ячейки cell_size_x * cell_size_y, ячейки тасуются
# LCG-тасовкой с заданным сидом, и для каждого выходного пикселя считается
# нормированная координата (u, v) пикселя-источника. Карта заливается в
# текстуру RG32F и сэмплируется шейдером: color = source[u * w, v * h].
# ==============================================================================
from __future__ import annotations
import logging
import time
from typing import Optional, Sequence, Tuple

import numpy as np
from numba import njit

from ..core.constants import MAP_KIND_RESTORE, MAP_KIND_SHUFFLE
from ..core.types import MapGeometry, UvMapResult
from ..numerics.rng import string_to_seed, u32

logger = logging.getLogger(__name__)

F32 = np.float32

# Ближайшие к краям значения внутри (0, 1): floor(u * src) для них даёт
# крайний тексель при любом размере источника до 2^24.
UV_HI = np.nextafter(F32(1.0), F32(0.0))
UV_LO = F32(1.0) - UV_HI


@njit(cache=True)
def _shuffle_indices(indices, seed):
    """Та же тасовка, что numerics.rng.shuffle, но для int64-массива."""
    state = np.int64(seed)
    n = indices.shape[0]
    for i in range(n):
        # 0xFFFFFFFF * 1103515245 < 2^63, переполнения int64 нет
        state = (state * 1103515245 + 12345) & 0xFFFFFFFF
        r = state & 0x7FFFFFFF
        j = i + r % (n - i)
        tmp = indices[i]
        indices[i] = indices[j]
        indices[j] = tmp
    return indices


@njit(cache=True)
def _fill_shuffle_uv(mapper_x, mapper_y, width, height, cell_size_x, cell_size_y,
                     cell_count_x, last_cell_x, last_cell_y,
                     last_cell_size_x, last_cell_size_y, uv_lo, uv_hi, out):
    fw = F32(width)
    fh = F32(height)
    half = F32(0.5)
    one = F32(1.0)
    zero = F32(0.0)
    # последняя строка/столбец ячеек может быть уже - её растягиваем обратно
    last_scale_x = F32(cell_size_x) / F32(last_cell_size_x)
    last_scale_y = F32(cell_size_y) / F32(last_cell_size_y)

    for y in range(height):
        row = (y // cell_size_y) * cell_count_x
        scale_y = last_scale_y if y >= last_cell_y else F32(1.0)
        for x in range(width):
            k = row + x // cell_size_x
            mapped_x = mapper_x[k]
            mapped_y = mapper_y[k]
            scale_x = last_scale_x if x >= last_cell_x else F32(1.0)
            new_x = F32(mapped_x * cell_size_x) + F32(x % cell_size_x) * scale_x
            new_y = F32(mapped_y * cell_size_y) + F32(y % cell_size_y) * scale_y
            u = (new_x + half) / fw
            v = (new_y + half) / fh
            # полная ячейка, попавшая на место неполной, вылезает за край
            if u >= one:
                u = uv_hi
            elif u <= zero:
                u = uv_lo
            if v >= one:
                v = uv_hi
            elif v <= zero:
                v = uv_lo
            out[y, x, 0] = u
            out[y, x, 1] = v
    return out


@njit(cache=True)
def _fill_restore_uv(mapper_x, mapper_y, width, height, cell_size_x, cell_size_y,
                     cell_count_x, cell_count_y, last_cell_size_x, last_cell_size_y,
                     region_x, region_y, region_w, region_h, uv_lo, uv_hi, out):
    # декодер считает в float64 и только результат кладёт в float32
    fw = float(width)
    fh = float(height)
    # неполную ячейку при восстановлении наоборот сжимаем
    last_scale_x = float(last_cell_size_x) / float(cell_size_x)
    last_scale_y = float(last_cell_size_y) / float(cell_size_y)

    for y in range(height):
        row = (y // cell_size_y) * cell_count_x
        for x in range(width):
            k = row + x // cell_size_x
            mapped_x = mapper_x[k]
            mapped_y = mapper_y[k]
            scale_x = last_scale_x if mapped_x >= cell_count_x - 1 else 1.0
            scale_y = last_scale_y if mapped_y >= cell_count_y - 1 else 1.0
            new_x = float(mapped_x * cell_size_x) + float(x % cell_size_x) * scale_x
            new_y = float(mapped_y * cell_size_y) + float(y % cell_size_y) * scale_y
            u = F32((region_x + region_w * ((new_x + 0.5) / fw)) / fw)
            v = F32((region_y + region_h * ((new_y + 0.5) / fh)) / fh)
            # сжатая неполная ячейка может заехать за край на долю пикселя
            if u >= F32(1.0):
                u = uv_hi
            elif u <= F32(0.0):
                u = uv_lo
            if v >= F32(1.0):
                v = uv_hi
            elif v <= F32(0.0):
                v = uv_lo
            out[y, x, 0] = u
            out[y, x, 1] = v
    return out


def _as_geometry(width: int, height: int, cell_size_x: int, cell_size_y: int) -> MapGeometry:
    return MapGeometry(int(width), int(height), int(cell_size_x), int(cell_size_y))


def identity_cell_grid(geometry: MapGeometry) -> np.ndarray:
    """Несмешанная сетка: запись i = (i mod cell_count_x, i div cell_count_x)."""
    idx = np.arange(geometry.cell_count, dtype=np.int64)
    return np.stack((idx % geometry.cell_count_x, idx // geometry.cell_count_x), axis=1)


def shuffled_cell_indices(geometry: MapGeometry, seed: int) -> np.ndarray:
    indices = np.arange(geometry.cell_count, dtype=np.int64)
    return _shuffle_indices(indices, u32(int(seed)))


def build_cell_grid(geometry: MapGeometry, seed: int) -> np.ndarray:
    """
    Перемешанная сетка ячеек, форма (cell_count, 2): запись k хранит (x, y)
    ячейки-источника для ячейки k в построчном порядке.
    """
    indices = shuffled_cell_indices(geometry, seed)
    return np.stack((indices % geometry.cell_count_x, indices // geometry.cell_count_x), axis=1)


def inverse_permutation(indices: np.ndarray) -> np.ndarray:
    """k -> v превращает в v -> k."""
    indices = np.asarray(indices, dtype=np.int64)
    inverse = np.empty_like(indices)
    inverse[indices] = np.arange(indices.shape[0], dtype=np.int64)
    return inverse


def generate_uv_map(
        seed: int,
        width: int,
        height: int,
        cell_size_x: int,
        cell_size_y: int,
) -> np.ndarray:
    """
    Строит карту перемешивания: массив (height, width, 2) float32, в [y, x]
    лежит (u, v) пикселя-источника с центровкой по половине пикселя.

    Одинаковые аргументы всегда дают побитово одинаковый результат.
    """
    geometry = _as_geometry(width, height, cell_size_x, cell_size_y)
    t0 = time.perf_counter()

    grid = build_cell_grid(geometry, seed)
    out = np.empty((geometry.height, geometry.width, 2), dtype=np.float32)
    _fill_shuffle_uv(
        np.ascontiguousarray(grid[:, 0]), np.ascontiguousarray(grid[:, 1]),
        geometry.width, geometry.height, geometry.cell_size_x, geometry.cell_size_y,
        geometry.cell_count_x, geometry.last_cell_x, geometry.last_cell_y,
        geometry.last_cell_size_x, geometry.last_cell_size_y, UV_LO, UV_HI, out,
    )

    logger.debug(
        "UV map (shuffle) %dx%d, cells %dx%d of %dx%d, seed=%d: %.1f ms",
        geometry.width, geometry.height, geometry.cell_count_x, geometry.cell_count_y,
        geometry.cell_size_x, geometry.cell_size_y, u32(int(seed)),
        (time.perf_counter() - t0) * 1000.0,
    )
    return out


def _normalize_region(
        encoded_region: Optional[Sequence[int]], width: int, height: int
) -> Tuple[int, int, int, int]:
    # меньше 4 чисел - считаем, что кадр не обрезали
    if encoded_region is None or len(encoded_region) < 4:
        return 0, 0, width, height
    x, y, w, h = (int(v) for v in encoded_region[:4])
    if x < 0 or y < 0 or w < 1 or h < 1 or x + w > width or y + h > height:
        raise ValueError(
            f"encoded_region {(x, y, w, h)} must lie inside the {width}x{height} frame"
        )
    return x, y, w, h


def generate_reverse_uv_map(
        seed: int,
        width: int,
        height: int,
        cell_size_x: int,
        cell_size_y: int,
        encoded_region: Optional[Sequence[int]] = None,
) -> np.ndarray:
    """
    Обратная карта: сэмплируя ею перемешанный кадр, получаем исходный.

    encoded_region = (x, y, w, h) - где внутри кадра width x height лежит
    закодированная область (например, если видео потом обрезали или
    вписали с полями). None - область совпадает со всем кадром.
    """
    geometry = _as_geometry(width, height, cell_size_x, cell_size_y)
    region = _normalize_region(encoded_region, geometry.width, geometry.height)
    t0 = time.perf_counter()

    inverse = inverse_permutation(shuffled_cell_indices(geometry, seed))
    mapper_x = inverse % geometry.cell_count_x
    mapper_y = inverse // geometry.cell_count_x
    out = np.empty((geometry.height, geometry.width, 2), dtype=np.float32)
    _fill_restore_uv(
        mapper_x, mapper_y,
        geometry.width, geometry.height, geometry.cell_size_x, geometry.cell_size_y,
        geometry.cell_count_x, geometry.cell_count_y,
        geometry.last_cell_size_x, geometry.last_cell_size_y,
        region[0], region[1], region[2], region[3], UV_LO, UV_HI, out,
    )

    logger.debug(
        "UV map (restore) %dx%d, region=%s, seed=%d: %.1f ms",
        geometry.width, geometry.height, region, u32(int(seed)),
        (time.perf_counter() - t0) * 1000.0,
    )
    return out


def build_uv_map(
        seed_token: str,
        geometry: MapGeometry,
        kind: str = MAP_KIND_SHUFFLE,
        encoded_region: Optional[Sequence[int]] = None,
) -> UvMapResult:
    """Полный цикл: токен -> сид -> карта, упакованная в UvMapResult."""
    seed = string_to_seed(seed_token)
    t0 = time.perf_counter()
    if kind == MAP_KIND_SHUFFLE:
        uv = generate_uv_map(seed, geometry.width, geometry.height,
                             geometry.cell_size_x, geometry.cell_size_y)
        region = None
    elif kind == MAP_KIND_RESTORE:
        uv = generate_reverse_uv_map(seed, geometry.width, geometry.height,
                                     geometry.cell_size_x, geometry.cell_size_y, encoded_region)
        region = _normalize_region(encoded_region, geometry.width, geometry.height)
    else:
        raise ValueError(f"Unknown UV map kind '{kind}'")

    return UvMapResult(
        kind=kind,
        seed=seed,
        geometry=geometry,
        uv=uv,
        seed_token=seed_token if isinstance(seed_token, str) else None,
        encoded_region=region,
        metrics={
            "cell_count": geometry.cell_count,
            "time_ms": (time.perf_counter() - t0) * 1000.0,
        },
    )
