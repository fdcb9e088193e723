"""Language file loading.

Defines the contract for populating an Engine from a source and the
YAML implementation.

YAML layout (``<package>_<code>.yml``, or ``<global>.yml`` for the global
store)::

    command:
      help: "Usage: /lang <test|tests>"       # literal
      not_found: "Unknown command: {command}"
    greeting:
      welcome:                                # string pool
        mode: sequential
        pool:
          - "Hello, {player}!"
          - "Welcome back, {player}!"
      link:                                   # action node
        text: "[Open help]"
        command: "/lang help"
        hover:
          - "Click to open the help page"
    motd:                                     # list -> newline-joined literal
      - "Line one"
      - "Line two"

Nested mappings flatten to dotted field names. A mapping with a ``pool``
key is a pool (keys ``mode``, ``pool``) and one with a ``text`` key is an
action node (keys ``text``, ``command``, ``hover``); any other key next to
them is ignored with a warning.

Loaded ``sequential_reversed`` pools start at their first entry, then wrap
to the last, unlike pools grown one entry at a time with ``StringPool.add``.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from langpack.logging import get_module_logger
from langpack.i18n.engine import Engine
from langpack.i18n.exceptions import LoaderError
from langpack.i18n.values import ActionNode, Literal, PoolMode, Value, join_lines

logger = get_module_logger()

POOL_KEYS = frozenset({"mode", "pool"})
ACTION_KEYS = frozenset({"text", "command", "hover"})


class LangLoader(ABC):
    """Abstract base for language loaders.

    Implementations parse a source and push values into an Engine via
    ``Engine.append`` and ``Engine.append_global``.
    """

    @abstractmethod
    def load(self, engine: Engine, package: str) -> Dict[str, int]:
        """Load a package for every registered language.

        Returns:
            Language code -> number of fields loaded.
        """
        pass

    @abstractmethod
    def load_global(self, engine: Engine, name: str) -> int:
        """Load values into the global store.

        Returns:
            Number of fields loaded.
        """
        pass


class YAMLLangLoader(LangLoader):
    """Loader for YAML language files.

    Attributes:
        lang_dir: Directory containing the YAML files.
    """

    def __init__(self, lang_dir: Path):
        """Initialize YAML loader.

        Args:
            lang_dir: Directory with YAML language files.

        Raises:
            ValueError: If the directory does not exist.
        """
        self.lang_dir = Path(lang_dir)

        if not self.lang_dir.is_dir():
            raise ValueError(f"Language directory not found: {self.lang_dir}")

        logger.info("initialized_yaml_loader", lang_dir=str(self.lang_dir))

    def load(self, engine: Engine, package: str) -> Dict[str, int]:
        """Load ``<package>_<code>.yml`` for every registered language.

        Loading the same package again appends: fields present in the
        files overwrite earlier values, other fields are kept.

        Raises:
            ValueError: If the package name is empty.
            LoaderError: If a file cannot be parsed.
        """
        if not package or not package.strip():
            raise ValueError("Package name must not be empty")

        loaded: Dict[str, int] = {}
        for language in engine.registry:
            path = self.lang_dir / f"{package}_{language.code}.yml"
            if not path.is_file():
                continue
            values = self.parse_file(path, engine)
            loaded[language.code] = engine.append(language, values)

        if not loaded:
            logger.warning("no_language_files_found", package=package, lang_dir=str(self.lang_dir))
        else:
            logger.info("loaded_language_package", package=package, languages=sorted(loaded))
        return loaded

    def load_global(self, engine: Engine, name: str = "global") -> int:
        """Load ``<name>.yml`` into the global store, if present."""
        path = self.lang_dir / f"{name}.yml"
        if not path.is_file():
            logger.warning("global_file_not_found", path=str(path))
            return 0
        return engine.append_global(self.parse_file(path, engine))

    def parse_file(self, path: Path, engine: Engine) -> Dict[str, Value]:
        """Parse one YAML file into field -> Value.

        Raises:
            LoaderError: If the YAML cannot be parsed.
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error("yaml_parse_error", file=str(path), error=str(e))
            raise LoaderError(f"Failed to parse {path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            logger.warning("invalid_yaml_format", file=str(path), expected="dict")
            return {}

        values: Dict[str, Value] = {}
        self._flatten(data, "", values, engine, path)
        return values

    def _flatten(
        self,
        node: Dict[Any, Any],
        prefix: str,
        out: Dict[str, Value],
        engine: Engine,
        source: Path,
    ) -> None:
        for key, child in node.items():
            field = f"{prefix}{str(key).lower()}"
            if isinstance(child, dict):
                if "pool" in child:
                    self._warn_unknown_keys(child, POOL_KEYS, field, source)
                    out[field] = self._build_pool(child, field, engine, source)
                elif "text" in child:
                    self._warn_unknown_keys(child, ACTION_KEYS, field, source)
                    out[field] = self._build_action(child)
                else:
                    self._flatten(child, f"{field}.", out, engine, source)
            elif isinstance(child, list):
                out[field] = Literal(join_lines(child))
            elif child is None:
                out[field] = Literal("")
            else:
                out[field] = Literal(str(child))

    def _warn_unknown_keys(
        self, node: Dict[Any, Any], known: frozenset, field: str, source: Path
    ) -> None:
        ignored = sorted(str(key) for key in node if key not in known)
        if ignored:
            logger.warning(
                "ignored_field_keys", field=field, keys=ignored, file=str(source)
            )

    def _build_pool(
        self, node: Dict[str, Any], field: str, engine: Engine, source: Path
    ):
        mode = PoolMode.RANDOM
        if "mode" in node:
            try:
                mode = PoolMode.from_string(str(node["mode"]))
            except ValueError:
                logger.warning(
                    "invalid_pool_mode",
                    field=field,
                    mode=node["mode"],
                    file=str(source),
                    using=mode.value,
                )

        entries = node.get("pool") or []
        if not isinstance(entries, list):
            entries = [entries]
        return engine.new_pool(mode, ["" if entry is None else str(entry) for entry in entries])

    def _build_action(self, node: Dict[str, Any]) -> ActionNode:
        command: Optional[str] = node.get("command")
        hover = node.get("hover") or []
        if isinstance(hover, str):
            hover = hover.split("\n")
        elif not isinstance(hover, list):
            hover = [hover]
        return ActionNode(
            text=str(node["text"]),
            command=str(command) if command is not None else None,
            hover=tuple("" if line is None else str(line) for line in hover),
        )
