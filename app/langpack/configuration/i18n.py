"""Resolution engine settings."""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator

from langpack.configuration.base import LangPackBaseSettings

# app/lang, next to the langpack package
DEFAULT_LANG_DIR = Path(__file__).resolve().parents[2] / "lang"


class I18nSettings(LangPackBaseSettings):
    """Language package loading and resolution configuration.

    Environment Variables:
        LANG_DIR: Directory holding the YAML language files (default: bundled app/lang)
        LANG_PACKAGE: Package name, files are read as <package>_<code>.yml
        GLOBAL_PACKAGE: Name of the global file, read as <global>.yml
        DEFAULT_LANGUAGE: Code of the language used when a recipient has none
        RANDOM_SEED: Optional seed for the random source used by string pools
        PRELOAD: Whether the factory loads the YAML files immediately

    Example:
        ```python
        from langpack.configuration import settings

        lang_dir = settings.i18n.LANG_DIR
        default = settings.i18n.DEFAULT_LANGUAGE
        ```
    """

    LANG_DIR: Path = Field(default=DEFAULT_LANG_DIR, alias="LANG_DIR")
    LANG_PACKAGE: str = Field(default="langpack", alias="LANG_PACKAGE")
    GLOBAL_PACKAGE: str = Field(default="global", alias="GLOBAL_PACKAGE")
    DEFAULT_LANGUAGE: str = Field(default="en_us", alias="DEFAULT_LANGUAGE")
    RANDOM_SEED: Optional[int] = Field(default=None, alias="RANDOM_SEED")
    PRELOAD: bool = Field(default=True, alias="PRELOAD")

    @field_validator("DEFAULT_LANGUAGE", mode="before")
    @classmethod
    def normalize_default_language(cls, v: str) -> str:
        """Store language codes as lower-case, underscore-separated tags."""
        if not isinstance(v, str) or not v.strip():
            return "en_us"
        return v.strip().replace("-", "_").lower()
