"""Resolution pipeline: field lookup, fallback, dispatch and binding."""

from typing import Mapping, Optional, Sequence, Tuple, Union

from langpack.i18n.arguments import LangArg
from langpack.i18n.exceptions import EmptyPoolError
from langpack.i18n.models import Language, LanguageRegistry
from langpack.i18n.store import LanguageStore, normalize_field
from langpack.i18n.values import (
    ActionNode,
    Literal,
    RenderedComponent,
    RenderedOutput,
    StringPool,
    Value,
)
from langpack.i18n.walker import Definition, FieldFormatter
from langpack.logging import get_module_logger

logger = get_module_logger()


class Processor:
    """Turns a field, a language and arguments into rendered output.

    Lookup order for a field:
    1. The store of the requested language, then the stores of each
       language in its fallback chain.
    2. The global store.
    3. The field name itself, as literal text.

    Attributes:
        registry: Language table used to follow fallback chains.
        stores: Language code -> LanguageStore (shared with the owner).
        global_store: Store consulted after every language store.
        formatter: Placeholder formatter used for argument binding.
    """

    def __init__(
        self,
        registry: LanguageRegistry,
        stores: Mapping[str, LanguageStore],
        global_store: LanguageStore,
        formatter: Optional[FieldFormatter] = None,
    ):
        self.registry = registry
        self.stores = stores
        self.global_store = global_store
        self.formatter = formatter or FieldFormatter()

    def find(
        self, field: str, language: Union[Language, str]
    ) -> Tuple[Optional[Value], Optional[str]]:
        """Find the stored value for a field, following fallbacks.

        Args:
            field: Field name.
            language: Requested language.

        Returns:
            Tuple of (value, code of the store it came from), or
            (None, None) if no store defines the field.

        Raises:
            InvalidFieldError: If the field name is blank.
            UnknownLanguageError: If the language is not registered.
        """
        key = normalize_field(field)
        for candidate in self.registry.chain(language):
            store = self.stores.get(candidate.code)
            if store is None:
                continue
            value = store.lookup(key)
            if value is not None:
                return value, candidate.code

        value = self.global_store.lookup(key)
        if value is not None:
            return value, self.global_store.code
        return None, None

    def resolve(
        self,
        field: str,
        language: Union[Language, str],
        args: Sequence[LangArg] = (),
    ) -> RenderedOutput:
        """Resolve a field into rendered output.

        A missing field renders as the field name. An empty pool renders
        as empty text.

        Args:
            field: Field name.
            language: Requested language.
            args: Arguments bound into the value.

        Returns:
            RenderedOutput for the delivery collaborator.

        Raises:
            InvalidFieldError: If the field name is blank.
            UnknownLanguageError: If the language is not registered.
        """
        language = self.registry.get(language)
        value, source = self.find(field, language)

        if value is None:
            logger.warning("field_not_found", field=field, language=language.code)
            return RenderedOutput(text=field)

        if source != language.code:
            logger.debug(
                "used_fallback_language",
                field=field,
                requested_language=language.code,
                source=source,
            )

        return self.process(value, Definition(args, self.formatter), field=field)

    def process(
        self, value: Value, definition: Definition, field: Optional[str] = None
    ) -> RenderedOutput:
        """Dispatch on the value variant and bind the arguments.

        Args:
            value: Stored value.
            definition: Bound argument set.
            field: Field name, for logging.

        Returns:
            RenderedOutput.
        """
        match value:
            case Literal():
                return RenderedOutput(text=definition.walk_text(value.text))
            case StringPool():
                try:
                    polled = value.poll()
                except EmptyPoolError:
                    logger.warning("string_pool_empty", field=field)
                    return RenderedOutput(text="")
                return RenderedOutput(text=definition.walk_text(polled))
            case ActionNode():
                return definition.walk(value).render()
            case RenderedComponent():
                return value.output
            case _:
                raise TypeError(f"Unsupported value type: {type(value).__name__}")
