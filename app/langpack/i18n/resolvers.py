"""Language resolution for recipients.

Maps locale strings reported by clients (``en-US``, ``en_us``, ``pt-BR``,
``fr``) onto registered languages.
"""

from typing import List, Optional, Union

import structlog

from langpack.i18n.models import Language, LanguageRegistry, Recipient, normalize_code

logger = structlog.get_logger().bind(component="i18n.resolver")


class LanguageResolver:
    """Resolves a recipient's language.

    Resolution order:
    1. Exact match of the locale code
    2. Same language part (e.g., "fr_be" matches "fr_fr")
    3. Default language
    """

    def __init__(self, registry: LanguageRegistry, default_language: Union[Language, str]):
        """Initialize language resolver.

        Args:
            registry: Known languages.
            default_language: Fallback when no match is found.
        """
        self.registry = registry
        self.default_language = registry.get(default_language)
        self.log = logger.bind(default_language=self.default_language.code)

    def resolve(self, locale: Optional[str]) -> Language:
        """Resolve a locale string to a registered language.

        Args:
            locale: Locale string, or None.

        Returns:
            Resolved Language, or the default language if none match.
        """
        if not locale or not locale.strip():
            return self.default_language

        code = normalize_code(locale)
        exact = self.registry.find(code)
        if exact is not None:
            return exact

        matched = LanguageNegotiator.find_best_match([code], self.registry.codes)
        if matched is not None:
            return self.registry.get(matched)

        self.log.debug("no_matching_language", locale=locale)
        return self.default_language

    def resolve_recipient(self, recipient: Recipient) -> Language:
        """Resolve the language of a recipient from its reported locale."""
        return self.resolve(recipient.locale)

    def resolve_from_header(self, accept_language: Optional[str]) -> Language:
        """Resolve language from an Accept-Language style header.

        Parses the header and returns the first registered language in
        preference order.

        Args:
            accept_language: Header value (e.g., "fr-CA,fr;q=0.9,en;q=0.8").

        Returns:
            Resolved Language, or default if none match.
        """
        if not accept_language:
            return self.default_language

        # "en-US,en;q=0.9" -> [("en-US", 1.0), ("en", 0.9)]
        preferences = []
        for part in accept_language.split(","):
            lang_range = part.split(";")[0].strip()
            quality = 1.0

            if ";" in part and "q=" in part:
                try:
                    quality = float(part.split("q=")[1])
                except ValueError:
                    quality = 1.0

            if lang_range and lang_range != "*":
                preferences.append((normalize_code(lang_range), quality))

        ordered = [code for code, _ in sorted(preferences, key=lambda x: x[1], reverse=True)]
        matched = LanguageNegotiator.find_best_match(ordered, self.registry.codes)
        if matched is not None:
            return self.registry.get(matched)

        self.log.debug("no_matching_language_in_header", header=accept_language)
        return self.default_language


class LanguageNegotiator:
    """Language range matching between requested and available codes."""

    @staticmethod
    def matches_language(
        requested: str,
        available: str,
        strict: bool = False,
    ) -> bool:
        """Check if an available code matches a requested code.

        Args:
            requested: Requested code (e.g., "en_us").
            available: Available code (e.g., "en_gb").
            strict: If True, requires exact match. If False, allows language-only match.

        Returns:
            True if the codes match.
        """
        requested = normalize_code(requested)
        available = normalize_code(available)
        if requested == available:
            return True

        if strict:
            return False

        return requested.split("_")[0] == available.split("_")[0]

    @staticmethod
    def find_best_match(
        requested: List[str],
        available: List[str],
        default: Optional[str] = None,
    ) -> Optional[str]:
        """Find the best matching code from available options.

        Args:
            requested: Requested codes in preference order.
            available: Available codes, in priority order for partial matches.
            default: Default if no match found.

        Returns:
            Best matching available code, or default if no match.
        """
        for req_lang in requested:
            for avail_lang in available:
                if LanguageNegotiator.matches_language(req_lang, avail_lang, strict=True):
                    return avail_lang

            for avail_lang in available:
                if LanguageNegotiator.matches_language(req_lang, avail_lang, strict=False):
                    return avail_lang

        return default
