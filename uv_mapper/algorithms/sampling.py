# ==============================================================================
# Файл: uv_mapper/algorithms/sampling.py
# Назначение: CPU-аналог шейдерного прохода: выборка кадра через UV-карту.
# ==============================================================================
from __future__ import annotations
import numpy as np

from ..core.constants import SAMPLE_BILINEAR, SAMPLE_MODES, SAMPLE_NEAREST


def _check_inputs(frame: np.ndarray, uv_map: np.ndarray) -> None:
    if frame.ndim not in (2, 3):
        raise ValueError(f"frame must be (H, W) or (H, W, C), got shape {frame.shape}")
    if uv_map.ndim != 3 or uv_map.shape[2] != 2:
        raise ValueError(f"uv_map must be (H, W, 2), got shape {uv_map.shape}")


def sample_nearest(frame: np.ndarray, uv_map: np.ndarray) -> np.ndarray:
    """
    Выборка ближайшего текселя с CLAMP_TO_EDGE.

    Args:
        frame: (H, W) или (H, W, C) исходный кадр любого разрешения
        uv_map: (h, w, 2) карта координат в [0, 1]

    Returns:
        Массив (h, w) или (h, w, C) того же dtype, что и frame
    """
    _check_inputs(frame, uv_map)
    src_h, src_w = frame.shape[:2]

    # float64, чтобы (x + 0.5) / w * w не округлилось вниз до x - 1
    u = uv_map[..., 0].astype(np.float64)
    v = uv_map[..., 1].astype(np.float64)
    xi = np.clip(np.floor(u * src_w), 0, src_w - 1).astype(np.intp)
    yi = np.clip(np.floor(v * src_h), 0, src_h - 1).astype(np.intp)
    return frame[yi, xi]


def sample_bilinear(frame: np.ndarray, uv_map: np.ndarray) -> np.ndarray:
    """Билинейная выборка с CLAMP_TO_EDGE; целочисленные кадры округляются обратно."""
    _check_inputs(frame, uv_map)
    src_h, src_w = frame.shape[:2]

    x = uv_map[..., 0].astype(np.float64) * src_w - 0.5
    y = uv_map[..., 1].astype(np.float64) * src_h - 0.5
    x = np.clip(x, 0.0, src_w - 1)
    y = np.clip(y, 0.0, src_h - 1)

    x0 = np.floor(x).astype(np.intp)
    y0 = np.floor(y).astype(np.intp)
    x1 = np.minimum(x0 + 1, src_w - 1)
    y1 = np.minimum(y0 + 1, src_h - 1)
    fx = x - x0
    fy = y - y0

    data = frame.astype(np.float64)
    if data.ndim == 3:
        fx = fx[..., np.newaxis]
        fy = fy[..., np.newaxis]

    result = (data[y0, x0] * (1 - fx) * (1 - fy) +
              data[y0, x1] * fx * (1 - fy) +
              data[y1, x0] * (1 - fx) * fy +
              data[y1, x1] * fx * fy)

    if np.issubdtype(frame.dtype, np.integer):
        info = np.iinfo(frame.dtype)
        return np.clip(np.rint(result), info.min, info.max).astype(frame.dtype)
    return result.astype(frame.dtype)


def sample_frame(frame: np.ndarray, uv_map: np.ndarray, mode: str = SAMPLE_NEAREST) -> np.ndarray:
    """sampled_color = frame[v * src_h, u * src_w] для каждого пикселя карты."""
    if mode == SAMPLE_NEAREST:
        return sample_nearest(frame, uv_map)
    if mode == SAMPLE_BILINEAR:
        return sample_bilinear(frame, uv_map)
    raise ValueError(f"Unknown sample mode '{mode}', expected one of {SAMPLE_MODES}")
