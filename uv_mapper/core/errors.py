# ==============================================================================
# Файл: uv_mapper/core/errors.py
# Назначение: Иерархия исключений проекта.
# ==============================================================================


class UvMapperError(Exception):
    """Base error for the uv_mapper package."""


class SettingsError(UvMapperError):
    """Base error for the settings system."""


class ValidationError(SettingsError):
    """Raised when filter settings fail validation."""


class NotFoundError(SettingsError):
    """Raised when a settings file cannot be resolved."""


class GraphicsError(UvMapperError):
    """Raised on misuse of the graphics context or its textures."""


class FilterStateError(UvMapperError):
    """Raised when a filter is used outside of its create/destroy window."""


class UnknownFilterError(UvMapperError):
    """Raised when a filter id is not present in the registry."""
