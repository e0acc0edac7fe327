# ==============================================================================
# Файл: uv_mapper/filters/base.py
# Назначение: Общий интерфейс видеофильтра и реестр реализаций.
#
# Набор возможностей фиксирован (имя, умолчания, свойства, create, update,
# render, destroy); реализации отличаются только тем, что делают внутри.
# ==============================================================================
from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, Type

import numpy as np

from ..core.errors import FilterStateError, UnknownFilterError
from ..core.settings import DEFAULT_SETTINGS
from .graphics import GraphicsContext
from .properties import PropertyDef

logger = logging.getLogger(__name__)


class VideoFilter:
    id: str = "VideoFilter"
    display_name: str = "Video Filter"

    def __init__(self, graphics: Optional[GraphicsContext] = None):
        self.graphics = graphics if graphics is not None else GraphicsContext()
        self._alive = False

    # --- описание для хоста ---
    def get_name(self) -> str:
        return self.display_name

    @classmethod
    def get_defaults(cls) -> Dict[str, Any]:
        return dict(DEFAULT_SETTINGS)

    @classmethod
    def get_properties(cls) -> List[PropertyDef]:
        return []

    # --- жизненный цикл ---
    @property
    def is_alive(self) -> bool:
        return self._alive

    def _require_alive(self, op: str) -> None:
        if not self._alive:
            raise FilterStateError(f"{self.id}: {op}() on a filter that is not created")

    def create(self, settings: Any = None) -> "VideoFilter":
        raise NotImplementedError

    def update(self, settings: Any) -> None:
        raise NotImplementedError

    def render(self, frame: np.ndarray) -> np.ndarray:
        raise NotImplementedError

    def destroy(self) -> None:
        raise NotImplementedError

    def __enter__(self) -> "VideoFilter":
        if not self._alive:
            self.create()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._alive:
            self.destroy()


# — реестр —
REGISTRY: Dict[str, Type[VideoFilter]] = {}


def register(cls: Type[VideoFilter]) -> Type[VideoFilter]:
    REGISTRY[cls.id] = cls
    return cls


def create_filter(
    filter_id: str,
    settings: Any = None,
    graphics: Optional[GraphicsContext] = None,
) -> VideoFilter:
    """Находит фильтр в реестре, создаёт экземпляр и вызывает create()."""
    cls = REGISTRY.get(filter_id)
    if cls is None:
        raise UnknownFilterError(
            f"Unknown filter '{filter_id}', registered: {', '.join(sorted(REGISTRY))}"
        )
    return cls(graphics).create(settings)
