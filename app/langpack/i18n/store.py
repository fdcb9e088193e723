"""Per-language value storage."""

from typing import Any, Dict, Iterator, List, Mapping, Optional

from langpack.i18n.exceptions import InvalidFieldError
from langpack.i18n.values import Value, to_value
from langpack.logging import get_module_logger

logger = get_module_logger()

GLOBAL_STORE_CODE = "global"


def normalize_field(field: str) -> str:
    """Normalize a dotted field name for storage and lookup.

    Args:
        field: Field name (e.g., "Command.Help").

    Returns:
        Stripped, lower-case field name.

    Raises:
        InvalidFieldError: If the field name is not a string or is blank.
    """
    if not isinstance(field, str) or not field.strip():
        raise InvalidFieldError(f"Field name must not be empty: {field!r}")
    return field.strip().lower()


class LanguageStore:
    """Mapping from field name to Value for one language.

    Field names are case-insensitive. Stores are append-only: ``set``
    inserts or overwrites a field and nothing is ever removed. The store
    has no locking of its own; the owning ``Engine`` serializes access.

    Attributes:
        code: Language code, or ``"global"`` for the global store.
    """

    def __init__(self, code: str):
        self.code = code
        self._values: Dict[str, Value] = {}
        logger.debug("language_store_created", code=code)

    def __repr__(self) -> str:
        return f"LanguageStore(code={self.code!r}, fields={len(self._values)})"

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, field: str) -> bool:
        return self.contains(field)

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def lookup(self, field: str) -> Optional[Value]:
        """Get the value stored for a field in this store only.

        Raises:
            InvalidFieldError: If the field name is blank.
        """
        return self._values.get(normalize_field(field))

    def set(self, field: str, value: Any) -> None:
        """Insert or overwrite a field.

        Args:
            field: Field name.
            value: A Value, or a raw object coerced with ``to_value``.

        Raises:
            InvalidFieldError: If the field name is blank.
        """
        self._values[normalize_field(field)] = to_value(value)

    def contains(self, field: str) -> bool:
        if not isinstance(field, str) or not field.strip():
            return False
        return field.strip().lower() in self._values

    def append(self, values: Mapping[str, Any]) -> int:
        """Set many fields at once.

        Every field name is validated before the store changes.

        Returns:
            Number of fields written.
        """
        staged = {normalize_field(field): to_value(value) for field, value in values.items()}
        self._values.update(staged)
        logger.debug("language_store_appended", code=self.code, field_count=len(staged))
        return len(staged)

    def fields(self) -> List[str]:
        return sorted(self._values)
