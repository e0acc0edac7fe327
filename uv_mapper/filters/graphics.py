# ==============================================================================
# Файл: uv_mapper/filters/graphics.py
# Назначение: Графический контекст хоста и текстуры, которыми владеет фильтр.
#
# Любое создание/удаление текстуры выполняется только внутри
# `with ctx.enter():` - аналог пары enter_graphics/leave_graphics хоста.
# ==============================================================================
from __future__ import annotations
import itertools
import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, Iterator, Optional

import numpy as np

from ..core.constants import TEXTURE_CHANNELS, TEXTURE_FORMAT_RG32F
from ..core.errors import GraphicsError

logger = logging.getLogger(__name__)


@dataclass
class Texture:
    texture_id: int
    width: int
    height: int
    fmt: str
    data: np.ndarray


class GraphicsContext:
    """Сериализует работу с текстурами и следит за их временем жизни."""

    def __init__(self):
        self._lock = threading.RLock()
        self._depth = 0
        self._owner: Optional[int] = None
        self._textures: Dict[int, Texture] = {}
        self._ids = itertools.count(1)

    @contextmanager
    def enter(self) -> Iterator["GraphicsContext"]:
        self._lock.acquire()
        try:
            if self._depth == 0:
                self._owner = threading.get_ident()
            self._depth += 1
            try:
                yield self
            finally:
                self._depth -= 1
                if self._depth == 0:
                    self._owner = None
        finally:
            self._lock.release()

    @property
    def is_entered(self) -> bool:
        return self._depth > 0 and self._owner == threading.get_ident()

    def _require_entered(self, op: str) -> None:
        if not self.is_entered:
            raise GraphicsError(f"{op} called outside of graphics context")

    @property
    def live_textures(self) -> int:
        return len(self._textures)

    def create_texture(self, width: int, height: int, data: np.ndarray,
                       fmt: str = TEXTURE_FORMAT_RG32F) -> Texture:
        self._require_entered("create_texture")
        channels = TEXTURE_CHANNELS.get(fmt)
        if channels is None:
            raise GraphicsError(f"Unsupported texture format '{fmt}'")
        arr = np.asarray(data)
        if arr.shape != (height, width, channels):
            raise GraphicsError(
                f"Texture data shape {arr.shape} does not match {fmt} {width}x{height}"
            )
        dtype = np.float32 if fmt == TEXTURE_FORMAT_RG32F else np.uint8
        # текстура хранит свою копию: исходный буфер можно выбросить
        tex = Texture(next(self._ids), int(width), int(height), fmt,
                      np.array(arr, dtype=dtype, copy=True))
        self._textures[tex.texture_id] = tex
        logger.debug("Texture #%d created: %s %dx%d", tex.texture_id, fmt, width, height)
        return tex

    def destroy_texture(self, texture: Texture) -> None:
        self._require_entered("destroy_texture")
        if self._textures.pop(texture.texture_id, None) is None:
            raise GraphicsError(f"Texture #{texture.texture_id} is not alive")
        logger.debug("Texture #%d destroyed", texture.texture_id)
