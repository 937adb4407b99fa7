from typing import Any

from .settings import Settings, get_settings


def env(key: str, default: Any = None) -> Any:
    """Read a configuration value through the cached settings.

    Declared fields win (they carry pydantic validation and type conversion);
    anything else falls back to the raw values kept by ``extra="allow"``.

    Args:
        key: Setting or environment variable name (case insensitive)
        default: Value returned when nothing is configured

    Returns
    -------
        The configured value or ``default``
    """
    settings = get_settings()

    value = getattr(settings, key.upper(), None)
    if value is not None:
        return value

    extras = settings.model_extra or {}
    value = extras.get(key.lower(), extras.get(key.upper()))
    return default if value is None else value


__all__ = ["Settings", "env", "get_settings"]
