"""Tests for langpack.i18n.resolvers module."""

import pytest

from langpack.i18n.exceptions import UnknownLanguageError
from langpack.i18n.models import LanguageRegistry, Recipient
from langpack.i18n.resolvers import LanguageNegotiator, LanguageResolver
from tests.factories.i18n import make_registry


@pytest.fixture
def resolver():
    return LanguageResolver(make_registry(), "en_us")


class TestLanguageResolver:
    """Tests for LanguageResolver."""

    def test_unknown_default_raises(self):
        """The default language must be registered."""
        with pytest.raises(UnknownLanguageError):
            LanguageResolver(make_registry(), "xx_xx")

    @pytest.mark.parametrize(
        "locale,expected",
        [
            ("en_gb", "en_gb"),
            ("EN-GB", "en_gb"),
            ("fr-CA", "fr_ca"),
            ("fr", "fr_fr"),
            ("fr_be", "fr_fr"),
            ("en_nz", "en_us"),
        ],
    )
    def test_resolve(self, resolver, locale, expected):
        """Exact codes win, then the first code sharing the language."""
        assert resolver.resolve(locale).code == expected

    @pytest.mark.parametrize("locale", [None, "", "   ", "xx_yy"])
    def test_resolve_defaults(self, resolver, locale):
        """Missing or unknown locales resolve to the default language."""
        assert resolver.resolve(locale).code == "en_us"

    def test_resolve_recipient(self, resolver):
        """Recipients resolve through their locale."""
        assert resolver.resolve_recipient(Recipient("u", "en-AU")).code == "en_au"

    def test_resolve_from_header(self, resolver):
        """Headers are matched in quality order."""
        assert resolver.resolve_from_header("de-DE,fr-CA;q=0.9,en;q=0.8").code == "fr_ca"

    def test_resolve_from_header_language_only(self, resolver):
        """Language-only ranges match the first registered code."""
        assert resolver.resolve_from_header("fr;q=0.7,xx;q=0.9").code == "fr_fr"

    def test_resolve_from_header_invalid_quality(self, resolver):
        """Invalid quality values count as 1.0."""
        assert resolver.resolve_from_header("en-GB;q=invalid,fr").code == "en_gb"

    @pytest.mark.parametrize("header", [None, "", "*", "xx-XX"])
    def test_resolve_from_header_defaults(self, resolver, header):
        """Empty, wildcard or unknown headers use the default language."""
        assert resolver.resolve_from_header(header).code == "en_us"

    def test_default_registry(self):
        """Works with the built-in table."""
        resolver = LanguageResolver(LanguageRegistry(), "en_us")
        assert resolver.resolve("pt-BR").code == "pt_br"
        assert resolver.resolve("zh").code == "zh_cn"


class TestLanguageNegotiator:
    """Tests for LanguageNegotiator."""

    def test_matches_language_exact(self):
        """Exact codes match in both modes."""
        assert LanguageNegotiator.matches_language("en-US", "en_us", strict=True)
        assert LanguageNegotiator.matches_language("en_us", "en_us")

    def test_matches_language_partial(self):
        """Language-only matching is disabled in strict mode."""
        assert LanguageNegotiator.matches_language("en_us", "en_gb")
        assert not LanguageNegotiator.matches_language("en_us", "en_gb", strict=True)
        assert not LanguageNegotiator.matches_language("en_us", "fr_fr")

    def test_find_best_match_prefers_exact(self):
        """Exact matches win over earlier partial matches."""
        assert LanguageNegotiator.find_best_match(["en_gb"], ["en_us", "en_gb"]) == "en_gb"

    def test_find_best_match_order(self):
        """Requested order is respected."""
        assert LanguageNegotiator.find_best_match(["de", "fr"], ["en_us", "fr_fr"]) == "fr_fr"

    def test_find_best_match_default(self):
        """The default is returned when nothing matches."""
        assert LanguageNegotiator.find_best_match(["de"], ["en_us"], default="en_us") == "en_us"
        assert LanguageNegotiator.find_best_match(["de"], ["en_us"]) is None
