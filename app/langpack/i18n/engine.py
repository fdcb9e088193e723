"""Resolution engine context.

The ``Engine`` owns the language stores, the global store, the language
table and the random source shared by string pools. It is created once
and passed to whatever needs to resolve fields; there is no process-wide
instance.
"""

import random as _random
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from langpack.i18n.arguments import LangArg
from langpack.i18n.cache import ResolutionCache
from langpack.i18n.exceptions import MissingFieldError
from langpack.i18n.models import Language, LanguageRegistry, Recipient
from langpack.i18n.processor import Processor
from langpack.i18n.resolvers import LanguageResolver
from langpack.i18n.store import GLOBAL_STORE_CODE, LanguageStore, normalize_field
from langpack.i18n.values import (
    NEW_LINE,
    ActionNode,
    Literal,
    PoolMode,
    RenderedComponent,
    RenderedOutput,
    StringPool,
    Value,
)
from langpack.i18n.walker import Definition, FieldFormatter
from langpack.logging import bind_resolution_context, get_module_logger

logger = get_module_logger()

Sender = Callable[[Recipient, RenderedOutput], None]


@dataclass
class BroadcastResult:
    """Outcome of one broadcast.

    Attributes:
        field: Broadcast field.
        delivered: Number of recipients the output was handed to.
        languages: Language code -> number of recipients.
        cache_hits: Recipients served from the per-call cache.
        cache_misses: Resolutions actually performed.
    """

    field: str
    delivered: int = 0
    languages: Dict[str, int] = field(default_factory=dict)
    cache_hits: int = 0
    cache_misses: int = 0


class Engine:
    """Language stores plus the resolution pipeline around them.

    Store mutation, resolution and pool polling are serialized by one
    coarse re-entrant lock, which also guards the shared random source.

    Attributes:
        registry: Known languages and fallback links.
        default_language: Language used for recipients without a match.
        random: Random source injected into pools built by the engine.
        global_store: Store consulted after every language chain.
        processor: Resolution pipeline.
        resolver: Recipient locale to language resolution.
    """

    def __init__(
        self,
        registry: Optional[LanguageRegistry] = None,
        default_language: Union[Language, str] = "en_us",
        random_source: Optional[_random.Random] = None,
        formatter: Optional[FieldFormatter] = None,
    ):
        self.registry = registry or LanguageRegistry()
        self.default_language = self.registry.get(default_language)
        self.random = random_source if random_source is not None else _random.Random()
        self.formatter = formatter or FieldFormatter()
        self.global_store = LanguageStore(GLOBAL_STORE_CODE)
        self._stores: Dict[str, LanguageStore] = {}
        self._lock = threading.RLock()
        self.processor = Processor(
            self.registry, self._stores, self.global_store, self.formatter
        )
        self.resolver = LanguageResolver(self.registry, self.default_language)
        logger.info(
            "initialized_engine",
            default_language=self.default_language.code,
            language_count=len(self.registry),
        )

    def language(self, language: Union[Language, str, None]) -> Language:
        """Get a registered language, or the default language for None."""
        if language is None:
            return self.default_language
        return self.registry.get(language)

    def store(self, language: Union[Language, str]) -> Optional[LanguageStore]:
        """Get the store of a language, if one has been created."""
        return self._stores.get(self.language(language).code)

    def _writable_store(self, language: Union[Language, str]) -> LanguageStore:
        code = self.language(language).code
        store = self._stores.get(code)
        if store is None:
            store = LanguageStore(code)
            self._stores[code] = store
        return store

    @property
    def languages(self) -> List[Language]:
        """Languages that have a store."""
        return [self.registry.get(code) for code in self._stores]

    def new_pool(
        self, mode: PoolMode = PoolMode.RANDOM, entries: Optional[Iterable[str]] = None
    ) -> StringPool:
        """Build a string pool sharing the engine's random source."""
        return StringPool(mode=mode, random=self.random, entries=entries)

    def new_action(
        self, text: str, command: Optional[str] = None, hover: Iterable[str] = ()
    ) -> ActionNode:
        return ActionNode(text=text, command=command, hover=tuple(hover))

    def set(self, language: Union[Language, str], field: str, value: Any) -> None:
        """Insert or overwrite a field for a language.

        Raises:
            InvalidFieldError: If the field name is blank.
            UnknownLanguageError: If the language is not registered.
        """
        with self._lock:
            self._writable_store(language).set(field, value)

    def set_many(self, language: Union[Language, str], *fields: LangArg) -> None:
        """Set several fields from key/value pairs."""
        if not fields:
            return
        self.append(language, {arg.key: arg.value for arg in fields})

    def append(self, language: Union[Language, str], values: Mapping[str, Any]) -> int:
        """Bulk-set fields of a language, as done on (re)load.

        Returns:
            Number of fields written.
        """
        with self._lock:
            count = self._writable_store(language).append(values)
        logger.info("appended_language_values", language=self.language(language).code, field_count=count)
        return count

    def set_global(self, field: str, value: Any) -> None:
        with self._lock:
            self.global_store.set(field, value)

    def append_global(self, values: Mapping[str, Any]) -> int:
        with self._lock:
            count = self.global_store.append(values)
        logger.info("appended_global_values", field_count=count)
        return count

    def lookup(self, field: str, language: Union[Language, str, None] = None) -> Optional[Value]:
        """Get the stored value for a field after fallback, or None."""
        with self._lock:
            value, _ = self.processor.find(field, self.language(language))
        return value

    def contains(self, language: Union[Language, str], field: str) -> bool:
        """Check if the store of this exact language defines a field."""
        store = self.store(language)
        return store.contains(field) if store else False

    def _stored(self, language: Union[Language, str], field: str) -> Optional[Value]:
        store = self.store(language)
        if store is None:
            return None
        return store.lookup(field)

    def is_literal(self, language: Union[Language, str], field: str) -> bool:
        return isinstance(self._stored(language, field), Literal)

    def is_string_pool(self, language: Union[Language, str], field: str) -> bool:
        return isinstance(self._stored(language, field), StringPool)

    def is_action_node(self, language: Union[Language, str], field: str) -> bool:
        return isinstance(self._stored(language, field), ActionNode)

    def is_component(self, language: Union[Language, str], field: str) -> bool:
        return isinstance(self._stored(language, field), RenderedComponent)

    def resolve(
        self, field: str, language: Union[Language, str, None] = None, *args: LangArg
    ) -> RenderedOutput:
        """Resolve a field for a language.

        Missing fields render as the field name, empty pools as empty text.

        Raises:
            InvalidFieldError: If the field name is blank.
        """
        with self._lock:
            return self.processor.resolve(field, self.language(language), args)

    def require(
        self, field: str, language: Union[Language, str, None] = None, *args: LangArg
    ) -> RenderedOutput:
        """Resolve a field, failing when no store defines it.

        Raises:
            MissingFieldError: If the field is not defined anywhere in the chain.
        """
        language = self.language(language)
        with self._lock:
            value, _ = self.processor.find(field, language)
            if value is None:
                raise MissingFieldError(
                    f"Field '{normalize_field(field)}' not found for {language.code} or its fallbacks"
                )
            return self.processor.process(value, Definition(args, self.formatter), field=field)

    def get_string(
        self, field: str, language: Union[Language, str, None] = None, *args: LangArg
    ) -> str:
        """Resolve a field to plain text."""
        return self.resolve(field, language, *args).to_plain_text()

    def get_list(
        self, field: str, language: Union[Language, str, None] = None, *args: LangArg
    ) -> List[str]:
        """Resolve a field to plain text and split it into lines.

        Arguments are substituted once, before the split.
        """
        return self.get_string(field, language, *args).split(NEW_LINE)

    def bind(
        self, field: str, language: Union[Language, str, None] = None, *args: LangArg
    ) -> Optional[Value]:
        """Get an argument-bound copy of the stored value, or None.

        The stored template is left untouched.
        """
        value = self.lookup(field, language)
        if value is None:
            return None
        return Definition(args, self.formatter).walk(value)

    def language_of(self, recipient: Recipient) -> Language:
        return self.resolver.resolve_recipient(recipient)

    def message(
        self, recipient: Recipient, field: str, *args: LangArg, send: Sender
    ) -> RenderedOutput:
        """Resolve a field in the recipient's language and hand it to ``send``."""
        output = self.resolve(field, self.language_of(recipient), *args)
        send(recipient, output)
        return output

    def broadcast(
        self,
        field: str,
        recipients: Iterable[Recipient],
        *args: LangArg,
        send: Sender,
    ) -> BroadcastResult:
        """Render a field for many recipients, once per language.

        A fresh ResolutionCache lives exactly as long as this call.

        Args:
            field: Field to render.
            recipients: Delivery targets.
            *args: Arguments bound into the value.
            send: Delivery callback, called once per recipient.

        Returns:
            BroadcastResult with delivery and cache statistics.
        """
        normalize_field(field)
        result = BroadcastResult(field=field)

        with bind_resolution_context(field=field), ResolutionCache() as cache:
            for recipient in recipients:
                language = self.language_of(recipient)
                with self._lock:
                    output = cache.get_or_resolve(field, language, args, self.processor)
                send(recipient, output)
                result.delivered += 1
                result.languages[language.code] = result.languages.get(language.code, 0) + 1

            result.cache_hits = cache.hits
            result.cache_misses = cache.misses
            logger.info(
                "broadcast_completed",
                delivered=result.delivered,
                language_count=len(result.languages),
                cache_hits=result.cache_hits,
            )

        return result
