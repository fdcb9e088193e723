"""Per-call resolution cache for broadcasts."""

from typing import Any, Dict, Sequence, Tuple, Union

from langpack.i18n.arguments import LangArg, fingerprint
from langpack.i18n.models import Language, normalize_code
from langpack.i18n.processor import Processor
from langpack.i18n.store import normalize_field
from langpack.i18n.values import RenderedOutput
from langpack.logging import get_module_logger

logger = get_module_logger()

CacheKey = Tuple[str, str, str]


class ResolutionCache:
    """Memoizes rendered output for the lifetime of one broadcast.

    Entries are keyed by (field, language, argument fingerprint), so the
    same field rendered with different arguments never collides. The
    cache is meant to be created for one broadcast and closed at its end;
    a closed cache refuses further use.

    Example:
        with ResolutionCache() as cache:
            for recipient in recipients:
                output = cache.get_or_resolve(field, language, args, processor)
    """

    def __init__(self):
        self._entries: Dict[CacheKey, RenderedOutput] = {}
        self._closed = False
        self.hits = 0
        self.misses = 0

    def __enter__(self) -> "ResolutionCache":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __len__(self) -> int:
        return len(self._entries)

    @staticmethod
    def key(
        field: str, language: Union[Language, str], args: Sequence[LangArg]
    ) -> CacheKey:
        code = language.code if isinstance(language, Language) else normalize_code(language)
        return (normalize_field(field), code, fingerprint(args))

    def get_or_resolve(
        self,
        field: str,
        language: Union[Language, str],
        args: Sequence[LangArg],
        processor: Processor,
    ) -> RenderedOutput:
        """Return the cached output, resolving it on first use.

        Raises:
            RuntimeError: If the cache has been closed.
        """
        if self._closed:
            raise RuntimeError("ResolutionCache used after its broadcast completed")

        key = self.key(field, language, args)
        cached = self._entries.get(key)
        if cached is not None:
            self.hits += 1
            return cached

        self.misses += 1
        output = processor.resolve(field, language, args)
        self._entries[key] = output
        return output

    def close(self) -> None:
        """Discard every entry and refuse further use."""
        if not self._closed:
            logger.debug("resolution_cache_closed", **self.get_stats())
        self._entries.clear()
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        return {
            "entries": len(self._entries),
            "hits": self.hits,
            "misses": self.misses,
        }
