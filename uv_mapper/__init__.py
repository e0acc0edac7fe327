"""Shuffled-cell UV map generator and the video filters built on it."""

from .algorithms.sampling import sample_frame
from .algorithms.uv_map import (
    build_cell_grid,
    build_uv_map,
    generate_reverse_uv_map,
    generate_uv_map,
)
from .core.settings import FilterSettings, load_settings
from .core.types import MapGeometry, UvMapResult
from .filters import GraphicsContext, UvRestoreFilter, UvShuffleFilter, create_filter
from .numerics.rng import LcgRandom, hashcode, prng_next, shuffle, string_to_seed

__all__ = [
    "generate_uv_map",
    "generate_reverse_uv_map",
    "build_cell_grid",
    "build_uv_map",
    "sample_frame",
    "FilterSettings",
    "load_settings",
    "MapGeometry",
    "UvMapResult",
    "GraphicsContext",
    "UvShuffleFilter",
    "UvRestoreFilter",
    "create_filter",
    "LcgRandom",
    "hashcode",
    "prng_next",
    "shuffle",
    "string_to_seed",
]
