# ==============================================================================
# Файл: uv_mapper/filters/uv_mapper_filter.py
# Назначение: Фильтры "Video UV Mapper": перемешивание ячеек и восстановление.
# ==============================================================================
from __future__ import annotations
import logging
from typing import Any, List, Optional

import numpy as np

from ..algorithms.sampling import sample_frame
from ..algorithms.uv_map import build_uv_map
from ..core.constants import (
    MAP_KIND_RESTORE,
    MAP_KIND_SHUFFLE,
    SAMPLE_NEAREST,
    TEXTURE_FORMAT_RG32F,
)
from ..core.errors import FilterStateError
from ..core.settings import FilterSettings, load_settings
from ..core.types import UvMapResult
from .base import VideoFilter, register
from .graphics import GraphicsContext, Texture
from .properties import PropertyDef, restore_properties, shuffle_properties

logger = logging.getLogger(__name__)


def _resolve_settings(settings: Any) -> FilterSettings:
    if isinstance(settings, FilterSettings):
        return settings
    # значения с панели хоста: сначала зажимаем в допустимые диапазоны
    return load_settings(settings, strict=False)


class UvMapFilterBase(VideoFilter):
    """Держит UV-карту как текстуру RG32F и сэмплирует через неё кадры."""

    map_kind: str = MAP_KIND_SHUFFLE

    def __init__(self, graphics: Optional[GraphicsContext] = None,
                 sample_mode: str = SAMPLE_NEAREST):
        super().__init__(graphics)
        self.sample_mode = sample_mode
        self.settings: Optional[FilterSettings] = None
        self.result: Optional[UvMapResult] = None
        self._texture: Optional[Texture] = None

    @property
    def texture(self) -> Optional[Texture]:
        return self._texture

    def build_map(self, settings: FilterSettings) -> UvMapResult:
        return build_uv_map(settings.seed, settings.geometry, kind=self.map_kind)

    def _upload(self, settings: FilterSettings) -> None:
        # карта всегда пересчитывается целиком
        result = self.build_map(settings)
        g = settings.geometry
        with self.graphics.enter():
            texture = self.graphics.create_texture(g.width, g.height, result.uv, TEXTURE_FORMAT_RG32F)
            old, self._texture = self._texture, texture
            if old is not None:
                self.graphics.destroy_texture(old)
        self.settings = settings
        self.result = result

    def create(self, settings: Any = None) -> "UvMapFilterBase":
        if self._alive:
            raise FilterStateError(f"{self.id}: create() called twice")
        resolved = _resolve_settings(settings)
        self._upload(resolved)
        self._alive = True
        logger.info("%s created: seed=%r -> %d, %dx%d, cell %dx%d",
                    self.id, resolved.seed, self.result.seed, resolved.width,
                    resolved.height, resolved.cell_size_x, resolved.cell_size_y)
        return self

    def update(self, settings: Any) -> None:
        self._require_alive("update")
        resolved = _resolve_settings(settings)
        self._upload(resolved)
        logger.info("%s updated: %s", self.id, resolved.to_dict())

    def render(self, frame: np.ndarray) -> np.ndarray:
        self._require_alive("render")
        with self.graphics.enter():
            uv = self._texture.data
            return sample_frame(frame, uv, self.sample_mode)

    def destroy(self) -> None:
        if not self._alive:
            return
        with self.graphics.enter():
            if self._texture is not None:
                self.graphics.destroy_texture(self._texture)
                self._texture = None
        self._alive = False
        self.result = None
        logger.info("%s destroyed", self.id)


@register
class UvShuffleFilter(UvMapFilterBase):
    id = "uv_mapper.shuffle"
    display_name = "Video UV Mapper"
    map_kind = MAP_KIND_SHUFFLE

    @classmethod
    def get_properties(cls) -> List[PropertyDef]:
        return shuffle_properties()


@register
class UvRestoreFilter(UvMapFilterBase):
    id = "uv_mapper.restore"
    display_name = "Video UV Restorer"
    map_kind = MAP_KIND_RESTORE

    @classmethod
    def get_properties(cls) -> List[PropertyDef]:
        return restore_properties()

    def build_map(self, settings: FilterSettings) -> UvMapResult:
        return build_uv_map(settings.seed, settings.geometry, kind=self.map_kind,
                            encoded_region=settings.encoded_region)
