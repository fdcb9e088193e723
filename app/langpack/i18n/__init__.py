"""Language resolution engine.

Resolves symbolic fields into rendered output for a language, following
language fallbacks, polling string pools and binding named arguments.

Main components:
- models: Language, LanguageRegistry, Recipient
- values: Literal, StringPool, ActionNode, RenderedComponent, RenderedOutput
- walker: FieldFormatter and Definition (argument binding)
- store: LanguageStore
- processor: Processor (resolution pipeline)
- cache: ResolutionCache (per-broadcast memoization)
- engine: Engine context object
- loader: LangLoader and YAMLLangLoader
- resolvers: LanguageResolver and LanguageNegotiator
"""

from langpack.i18n.arguments import LangArg, fingerprint
from langpack.i18n.cache import ResolutionCache
from langpack.i18n.engine import BroadcastResult, Engine
from langpack.i18n.exceptions import (
    EmptyPoolError,
    FallbackCycleError,
    InvalidFieldError,
    LangPackError,
    LanguageConfigError,
    LoaderError,
    MissingFieldError,
    UnknownLanguageError,
)
from langpack.i18n.factory import create_engine
from langpack.i18n.loader import LangLoader, YAMLLangLoader
from langpack.i18n.models import DEFAULT_LANGUAGES, Language, LanguageRegistry, Recipient
from langpack.i18n.processor import Processor
from langpack.i18n.resolvers import LanguageNegotiator, LanguageResolver
from langpack.i18n.service import LangService
from langpack.i18n.store import LanguageStore
from langpack.i18n.values import (
    ActionNode,
    Literal,
    PoolMode,
    RenderedComponent,
    RenderedOutput,
    StringPool,
    Value,
)
from langpack.i18n.walker import Definition, FieldFormatter

__all__ = [
    "ActionNode",
    "BroadcastResult",
    "DEFAULT_LANGUAGES",
    "Definition",
    "EmptyPoolError",
    "Engine",
    "FallbackCycleError",
    "FieldFormatter",
    "InvalidFieldError",
    "LangArg",
    "LangLoader",
    "LangPackError",
    "LangService",
    "Language",
    "LanguageConfigError",
    "LanguageNegotiator",
    "LanguageRegistry",
    "LanguageResolver",
    "LanguageStore",
    "Literal",
    "LoaderError",
    "MissingFieldError",
    "PoolMode",
    "Processor",
    "Recipient",
    "RenderedComponent",
    "RenderedOutput",
    "ResolutionCache",
    "StringPool",
    "UnknownLanguageError",
    "Value",
    "YAMLLangLoader",
    "create_engine",
    "fingerprint",
]
