"""Configuration loading (YAML + environment overrides)."""

from .config_loader import (
    DocloomSettings,
    JavadocSettings,
    RendererSettings,
    ServerSettings,
    UMLSettings,
    get_config_path,
    get_settings,
    load_unified_config,
    reload_configs,
)

__all__ = [
    "DocloomSettings",
    "JavadocSettings",
    "RendererSettings",
    "ServerSettings",
    "UMLSettings",
    "get_config_path",
    "get_settings",
    "load_unified_config",
    "reload_configs",
]
