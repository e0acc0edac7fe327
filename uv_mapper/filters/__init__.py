from .base import REGISTRY, VideoFilter, create_filter, register
from .graphics import GraphicsContext, Texture
from .properties import PropertyDef
from .uv_mapper_filter import UvMapFilterBase, UvRestoreFilter, UvShuffleFilter

__all__ = [
    "REGISTRY",
    "VideoFilter",
    "create_filter",
    "register",
    "GraphicsContext",
    "Texture",
    "PropertyDef",
    "UvMapFilterBase",
    "UvShuffleFilter",
    "UvRestoreFilter",
]
