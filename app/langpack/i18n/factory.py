"""Factory functions for creating engine components.

Provides convenience functions for initializing an Engine with
configuration from settings.
"""

import random
from pathlib import Path
from typing import Optional

from langpack.logging import get_module_logger
from langpack.configuration import settings
from langpack.i18n.engine import Engine
from langpack.i18n.loader import YAMLLangLoader
from langpack.i18n.models import LanguageRegistry

logger = get_module_logger()


def create_engine(
    lang_dir: Optional[Path] = None,
    package: Optional[str] = None,
    global_package: Optional[str] = None,
    default_language: Optional[str] = None,
    registry: Optional[LanguageRegistry] = None,
    random_source: Optional[random.Random] = None,
    preload: Optional[bool] = None,
) -> Engine:
    """Create and configure an Engine.

    Unset arguments fall back to ``settings.i18n``.

    Args:
        lang_dir: Directory of YAML language files (default: settings.i18n.LANG_DIR)
        package: Package name loaded as <package>_<code>.yml
        global_package: Global file loaded as <global_package>.yml
        default_language: Default language code
        registry: Language table (default: built-in languages)
        random_source: Random source for pools (default: seeded from settings.i18n.RANDOM_SEED)
        preload: Whether to load the YAML files immediately

    Returns:
        Engine: Configured engine

    Raises:
        ValueError: If lang_dir does not exist and preload is enabled

    Usage:
        # Use defaults (bundled app/lang, preload)
        engine = create_engine()

        # Deterministic pools
        engine = create_engine(random_source=random.Random(42))
    """
    config = settings.i18n
    lang_dir = Path(lang_dir) if lang_dir is not None else config.LANG_DIR
    package = package or config.LANG_PACKAGE
    global_package = global_package or config.GLOBAL_PACKAGE
    preload = config.PRELOAD if preload is None else preload

    if random_source is None:
        random_source = random.Random(config.RANDOM_SEED)

    engine = Engine(
        registry=registry,
        default_language=default_language or config.DEFAULT_LANGUAGE,
        random_source=random_source,
    )

    if preload:
        loader = YAMLLangLoader(lang_dir)
        loader.load_global(engine, global_package)
        loaded = loader.load(engine, package)
        logger.info(
            "engine_created_with_preload",
            lang_dir=str(lang_dir),
            package=package,
            language_count=len(loaded),
        )
    else:
        logger.info("engine_created_lazy", lang_dir=str(lang_dir))

    return engine
