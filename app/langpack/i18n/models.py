"""Language models for the resolution engine.

Defines the language table (codes, display names, fallback links) and the
recipient handle used by message delivery.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Union

from langpack.i18n.exceptions import FallbackCycleError, UnknownLanguageError


def normalize_code(code: str) -> str:
    """Normalize a language code to the ``xx_yy`` form.

    Accepts BCP 47 style tags (``en-US``) as well as locale codes
    (``en_us``).

    Args:
        code: Raw language code.

    Returns:
        Lower-case, underscore-separated code.
    """
    return code.strip().replace("-", "_").lower()


@dataclass(frozen=True)
class Language:
    """A language tag with an optional fallback.

    Frozen to ensure immutability and hashability for caching.

    Attributes:
        code: Normalized code (e.g., "en_us", "pt_br").
        name: Display name.
        fallback: Code of the language consulted when a field is missing.
    """

    code: str
    name: str
    fallback: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "code", normalize_code(self.code))
        if self.fallback is not None:
            object.__setattr__(self, "fallback", normalize_code(self.fallback))

    def __str__(self) -> str:
        return self.code

    @property
    def language(self) -> str:
        """Get language part of the code (e.g., "en" from "en_us")."""
        return self.code.split("_")[0]

    @property
    def region(self) -> str:
        """Get region part of the code (e.g., "us" from "en_us")."""
        parts = self.code.split("_")
        return parts[1] if len(parts) > 1 else ""

    @property
    def is_root(self) -> bool:
        """True if the language has no fallback."""
        return self.fallback is None


DEFAULT_LANGUAGES = (
    Language("en_us", "English (US)"),
    Language("en_gb", "English (UK)", "en_us"),
    Language("en_au", "English (Australia)", "en_gb"),
    Language("en_ca", "English (Canada)", "en_us"),
    Language("en_nz", "English (New Zealand)", "en_gb"),
    Language("fr_fr", "Français (France)", "en_us"),
    Language("fr_ca", "Français (Canada)", "fr_fr"),
    Language("de_de", "Deutsch (Deutschland)", "en_us"),
    Language("de_at", "Deutsch (Österreich)", "de_de"),
    Language("de_ch", "Deutsch (Schweiz)", "de_de"),
    Language("es_es", "Español (España)", "en_us"),
    Language("es_mx", "Español (México)", "es_es"),
    Language("es_ar", "Español (Argentina)", "es_es"),
    Language("pt_pt", "Português (Portugal)", "en_us"),
    Language("pt_br", "Português (Brasil)", "pt_pt"),
    Language("it_it", "Italiano", "en_us"),
    Language("nl_nl", "Nederlands", "en_us"),
    Language("pl_pl", "Polski", "en_us"),
    Language("ru_ru", "Русский", "en_us"),
    Language("ja_jp", "日本語", "en_us"),
    Language("ko_kr", "한국어", "en_us"),
    Language("zh_cn", "简体中文", "en_us"),
    Language("zh_tw", "繁體中文", "zh_cn"),
)


class LanguageRegistry:
    """The set of known languages and their fallback links.

    The table is validated on construction: every fallback must name a
    registered language and every chain must end at a language without a
    fallback.

    Raises:
        UnknownLanguageError: If a fallback code is not registered.
        FallbackCycleError: If a fallback chain does not terminate.
    """

    def __init__(self, languages: Iterable[Language] = DEFAULT_LANGUAGES):
        self._languages: Dict[str, Language] = {}
        for language in languages:
            self._languages[language.code] = language
        self._validate()

    def _validate(self) -> None:
        for language in self._languages.values():
            seen = [language.code]
            current = language
            while current.fallback is not None:
                if current.fallback not in self._languages:
                    raise UnknownLanguageError(
                        f"Fallback '{current.fallback}' of language '{current.code}' is not registered"
                    )
                if current.fallback in seen:
                    path = " -> ".join(seen + [current.fallback])
                    raise FallbackCycleError(
                        f"Fallback chain for '{language.code}' does not terminate: {path}"
                    )
                seen.append(current.fallback)
                current = self._languages[current.fallback]

    def get(self, language: Union[Language, str]) -> Language:
        """Get a registered language by code.

        Args:
            language: Language or code (any case, ``-`` or ``_`` separated).

        Returns:
            The registered Language.

        Raises:
            UnknownLanguageError: If the code is not registered.
        """
        code = language.code if isinstance(language, Language) else normalize_code(language)
        try:
            return self._languages[code]
        except KeyError as e:
            raise UnknownLanguageError(f"Unsupported language: {code}") from e

    def find(self, code: str) -> Optional[Language]:
        """Get a registered language by code, or None."""
        return self._languages.get(normalize_code(code))

    def chain(self, language: Union[Language, str]) -> List[Language]:
        """Get the fallback chain of a language, starting with itself.

        Bounded by the registry size; termination is guaranteed by the
        validation done at construction.
        """
        current: Optional[Language] = self.get(language)
        result: List[Language] = []
        while current is not None and len(result) <= len(self._languages):
            result.append(current)
            current = self._languages.get(current.fallback) if current.fallback else None
        return result

    def root(self, language: Union[Language, str]) -> Language:
        """Get the last language of a fallback chain."""
        return self.chain(language)[-1]

    @property
    def codes(self) -> List[str]:
        return list(self._languages)

    def __contains__(self, item) -> bool:
        if isinstance(item, Language):
            return item.code in self._languages
        if isinstance(item, str):
            return normalize_code(item) in self._languages
        return False

    def __iter__(self) -> Iterator[Language]:
        return iter(self._languages.values())

    def __len__(self) -> int:
        return len(self._languages)


@dataclass(frozen=True)
class Recipient:
    """A delivery target for rendered output.

    Attributes:
        id: Recipient identifier (user id, channel id, ...).
        locale: Locale reported by the recipient's client, if any.
    """

    id: str
    locale: Optional[str] = None
