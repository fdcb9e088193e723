"""Tests for langpack.i18n.engine module."""

import threading
from unittest.mock import MagicMock

import pytest

from langpack.i18n.arguments import LangArg
from langpack.i18n.engine import Engine
from langpack.i18n.exceptions import (
    InvalidFieldError,
    MissingFieldError,
    UnknownLanguageError,
)
from langpack.i18n.models import Recipient
from langpack.i18n.values import (
    ActionNode,
    Literal,
    PoolMode,
    RenderedComponent,
    RenderedOutput,
    StringPool,
)
from tests.factories.i18n import (
    CountingRandom,
    RecordingSender,
    make_engine,
    make_recipients,
    make_registry,
)


class TestEngineSetup:
    """Tests for Engine construction and mutation."""

    def test_default_registry(self):
        """Engines default to the built-in language table."""
        engine = Engine()
        assert engine.default_language.code == "en_us"
        assert "pt_br" in engine.registry

    def test_unknown_default_language(self):
        """An unregistered default language raises UnknownLanguageError."""
        with pytest.raises(UnknownLanguageError):
            Engine(registry=make_registry(), default_language="de_de")

    def test_set_creates_store(self):
        """set() creates the language store on first use."""
        engine = make_engine(populate=False)
        assert engine.store("fr_fr") is None
        engine.set("fr_fr", "a", "b")
        assert engine.store("fr_fr").lookup("a") == Literal("b")
        assert [language.code for language in engine.languages] == ["fr_fr"]

    def test_set_blank_field_raises(self):
        """set() rejects blank fields."""
        with pytest.raises(InvalidFieldError):
            make_engine(populate=False).set("en_us", "", "x")

    def test_set_unknown_language_raises(self):
        """set() rejects unregistered languages."""
        with pytest.raises(UnknownLanguageError):
            make_engine(populate=False).set("xx_xx", "a", "x")

    def test_set_many(self):
        """set_many() stores LangArg pairs."""
        engine = make_engine(populate=False)
        engine.set_many("en_us", LangArg("a", "1"), LangArg("b", "2"))
        assert engine.get_string("a") == "1"
        assert engine.get_string("b") == "2"

    def test_set_many_without_fields(self):
        """set_many() with no fields creates nothing."""
        engine = make_engine(populate=False)
        engine.set_many("en_us")
        assert engine.store("en_us") is None

    def test_append_overwrites_per_field(self):
        """append() overwrites given fields and keeps the others."""
        engine = make_engine(populate=False)
        engine.append("en_us", {"a": "1", "b": "2"})
        engine.append("en_us", {"b": "3"})
        assert engine.get_string("a") == "1"
        assert engine.get_string("b") == "3"

    def test_new_pool_shares_random(self, counting_random):
        """Pools built by the engine use its random source."""
        engine = make_engine(random_source=counting_random, populate=False)
        pool = engine.new_pool(PoolMode.RANDOM, ["x"])
        assert pool.random is counting_random

    def test_new_action(self):
        """new_action() builds an action node."""
        engine = make_engine(populate=False)
        assert engine.new_action("t", "/c", ["h"]) == ActionNode("t", "/c", ("h",))


class TestEngineQueries:
    """Tests for lookup and type predicates."""

    def test_lookup_follows_fallback(self, engine):
        """lookup() returns the value found through the chain."""
        assert engine.lookup("greeting.welcome", "en_au") is engine.store("en_us").lookup(
            "greeting.welcome"
        )

    def test_lookup_missing(self, engine):
        """lookup() returns None when nothing defines the field."""
        assert engine.lookup("nothing.here", "en_us") is None

    def test_contains_is_exact_language(self, engine):
        """contains() does not follow fallbacks."""
        assert engine.contains("en_us", "greeting.welcome")
        assert not engine.contains("en_gb", "greeting.welcome")
        assert not engine.contains("fr_ca", "greeting.hello")

    def test_type_predicates(self, engine):
        """Predicates report the stored variant of the exact language."""
        engine.set("en_us", "component", RenderedOutput("x"))
        assert engine.is_literal("en_us", "greeting.hello")
        assert engine.is_string_pool("en_us", "greeting.welcome")
        assert engine.is_action_node("en_us", "link.help")
        assert engine.is_component("en_us", "component")
        assert not engine.is_string_pool("en_gb", "greeting.welcome")


class TestEngineResolve:
    """Tests for resolution entry points."""

    def test_resolve_defaults_to_default_language(self, engine):
        """resolve() without a language uses the default language."""
        assert engine.resolve("greeting.hello", None, LangArg("name", "Bob")).text == "Hello Bob!"

    def test_resolve_with_fallback(self, engine):
        """en_au uses en_gb's override."""
        assert engine.get_string("greeting.hello", "en_au", LangArg("name", "Bob")) == "Hiya Bob!"

    def test_resolve_global(self, engine):
        """Global fields resolve in every language."""
        assert engine.get_string("prefix", "fr_ca") == "[LangPack]"

    def test_resolve_missing_returns_field(self, engine):
        """Missing fields render as the field name."""
        assert engine.get_string("greeting.missing", "en_us") == "greeting.missing"

    def test_resolve_empty_pool(self, engine):
        """Empty pools render as empty text."""
        assert engine.get_string("empty.pool", "en_us") == ""

    def test_resolve_action(self, engine):
        """Action nodes keep command and hover."""
        output = engine.resolve("link.help", "en_us", LangArg("name", "Ann"), LangArg("topic", "pools"))
        assert output.text == "[Help for Ann]"
        assert output.command == "/help pools"
        assert output.hover == ("Click for pools", "Shown to Ann")

    def test_require_present(self, engine):
        """require() resolves like resolve() when the field exists."""
        assert engine.require("greeting.hello", "fr_fr", LangArg("name", "Zoé")).text == "Bonjour Zoé !"

    def test_require_missing_raises(self, engine):
        """require() raises MissingFieldError for missing fields."""
        with pytest.raises(MissingFieldError):
            engine.require("greeting.missing", "en_us")

    def test_get_list(self, engine):
        """get_list() splits on newlines and binds each line."""
        lines = engine.get_list("motd", "en_us", LangArg("name", "Bob"))
        assert lines == ["Line one Bob", "Line two"]

    def test_get_list_does_not_rescan_argument_text(self, engine):
        """Argument text containing placeholders comes back verbatim."""
        engine.set("en_us", "nested", "{a}\n{b}")
        args = (LangArg("a", "{b}"), LangArg("b", "done"))
        assert engine.get_string("nested", "en_us", *args) == "{b}\ndone"
        assert engine.get_list("nested", "en_us", *args) == ["{b}", "done"]

    def test_get_list_single_line(self, engine):
        """Single-line values give one-element lists."""
        assert engine.get_list("prefix") == ["[LangPack]"]

    def test_bind_returns_copy(self, engine):
        """bind() returns a bound copy and keeps the template."""
        bound = engine.bind("greeting.welcome", "en_us", LangArg("name", "Bob"))
        assert isinstance(bound, StringPool)
        assert bound.entries == ("Welcome, Bob.", "Welcome back, Bob.")
        template = engine.store("en_us").lookup("greeting.welcome")
        assert template.entries == ("Welcome, {name}.", "Welcome back, {name}.")

    def test_bind_missing(self, engine):
        """bind() returns None for missing fields."""
        assert engine.bind("nothing", "en_us") is None

    def test_resolution_does_not_replace_templates(self, engine):
        """Resolving leaves the stored values in place."""
        template = engine.store("en_us").lookup("greeting.hello")
        engine.resolve("greeting.hello", "en_us", LangArg("name", "Bob"))
        assert engine.store("en_us").lookup("greeting.hello") is template
        assert template == Literal("Hello {name}!")

    def test_concurrent_sequential_polls(self):
        """Sequential pools stay consistent under concurrent resolution."""
        engine = make_engine(populate=False)
        engine.set("en_us", "seq", engine.new_pool(PoolMode.SEQUENTIAL, ["a", "b"]))
        results = []

        def worker():
            for _ in range(50):
                results.append(engine.get_string("seq"))

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert results.count("a") == 100
        assert results.count("b") == 100


class TestEngineDelivery:
    """Tests for message() and broadcast()."""

    def test_message_uses_recipient_language(self, engine):
        """message() resolves in the recipient's language and sends once."""
        send = MagicMock()
        recipient = Recipient(id="u1", locale="fr-FR")
        output = engine.message(recipient, "greeting.hello", LangArg("name", "Léa"), send=send)
        assert output.text == "Bonjour Léa !"
        send.assert_called_once_with(recipient, output)

    def test_message_unknown_locale_uses_default(self, engine):
        """Unknown locales fall back to the default language."""
        send = RecordingSender()
        engine.message(Recipient(id="u1", locale="xx-YY"), "greeting.hello", LangArg("name", "A"), send=send)
        assert send.texts() == {"u1": "Hello A!"}

    def test_broadcast_polls_once_per_language(self):
        """Recipients sharing a language reuse one resolution."""
        source = CountingRandom(5)
        engine = make_engine(random_source=source)
        send = RecordingSender()
        recipients = make_recipients(["en_US", "en-us", "fr_FR", "fr-FR", "en_us"])

        result = engine.broadcast("greeting.random", recipients, LangArg("name", "Bob"), send=send)

        assert source.draws == 2
        assert result.delivered == 5
        assert result.cache_misses == 2
        assert result.cache_hits == 3
        assert result.languages == {"en_us": 3, "fr_fr": 2}
        texts = send.texts()
        assert texts["r0"] == texts["r1"] == texts["r4"]
        assert texts["r2"] == texts["r3"]
        assert texts["r2"] in ("Salut Bob", "Coucou Bob")

    def test_broadcast_cache_is_per_call(self):
        """A second broadcast resolves again."""
        source = CountingRandom(5)
        engine = make_engine(random_source=source)
        recipients = make_recipients(["en_us", "en_us"])
        engine.broadcast("greeting.random", recipients, send=RecordingSender())
        engine.broadcast("greeting.random", recipients, send=RecordingSender())
        assert source.draws == 2

    def test_broadcast_sequential_advances_once(self, engine):
        """A sequential pool advances once per language per broadcast."""
        send = RecordingSender()
        engine.broadcast("greeting.welcome", make_recipients(["en_us", "en_us"]), LangArg("name", "A"), send=send)
        assert set(send.texts().values()) == {"Welcome, A."}
        assert engine.get_string("greeting.welcome", "en_us", LangArg("name", "A")) == "Welcome back, A."

    def test_broadcast_fallback_languages(self, engine):
        """Each recipient language follows its own chain."""
        send = RecordingSender()
        recipients = make_recipients(["en_au", "fr_ca", None])
        engine.broadcast("greeting.hello", recipients, LangArg("name", "Kim"), send=send)
        assert send.texts() == {"r0": "Hiya Kim!", "r1": "Bonjour Kim !", "r2": "Hello Kim!"}

    def test_broadcast_missing_field(self, engine):
        """Missing fields are delivered as the field name."""
        send = RecordingSender()
        engine.broadcast("nothing.here", make_recipients(["en_us"]), send=send)
        assert send.texts() == {"r0": "nothing.here"}

    def test_broadcast_blank_field_raises(self, engine):
        """A blank field fails before anything is sent."""
        send = MagicMock()
        with pytest.raises(InvalidFieldError):
            engine.broadcast("", make_recipients(["en_us"]), send=send)
        send.assert_not_called()

    def test_broadcast_no_recipients(self, engine):
        """Broadcasting to nobody delivers nothing."""
        result = engine.broadcast("greeting.hello", [], send=MagicMock())
        assert result.delivered == 0
        assert result.languages == {}

    def test_broadcast_component(self, engine):
        """Components are delivered as given."""
        prebuilt = RenderedOutput("[Click]", "/x")
        engine.set_global("component", RenderedComponent(prebuilt))
        send = RecordingSender()
        engine.broadcast("component", make_recipients(["en_us", "fr_fr"]), send=send)
        assert all(output is prebuilt for _, output in send.sent)
