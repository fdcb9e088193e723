"""Configuration module - public API.

Centralized configuration management for langpack using Pydantic
BaseSettings.

Exports:
    settings: Singleton Settings instance (main configuration object)
    Settings: Main settings class (for testing/overrides)
    I18nSettings: Resolution engine settings class

Example:
    ```python
    from langpack.configuration import settings

    default_language = settings.i18n.DEFAULT_LANGUAGE
    ```
"""

from langpack.configuration.i18n import I18nSettings
from langpack.configuration.settings import Settings, settings

__all__ = ["Settings", "I18nSettings", "settings"]
