"""Custom exceptions for the language resolution engine.

Structural and configuration problems (invalid field names, broken
fallback chains) propagate to the caller. Data gaps (missing fields,
empty pools) are absorbed by the resolution pipeline and never raised
from ``Processor.resolve``.
"""


class LangPackError(Exception):
    """Base exception for all language engine errors.

    Example:
        try:
            engine.set(language, field, value)
        except LangPackError as e:
            logger.error("lang_error", error=str(e))
    """

    pass


class InvalidFieldError(LangPackError, ValueError):
    """Raised when a field name is empty or blank.

    Example:
        >>> store.set("   ", Literal("x"))
        Traceback (most recent call last):
        ...
        InvalidFieldError: Field name must not be empty
    """

    pass


class EmptyPoolError(LangPackError, IndexError):
    """Raised by a direct ``StringPool.poll()`` on a pool with no entries.

    Resolution through the processor converts this into empty text.
    """

    pass


class MissingFieldError(LangPackError, KeyError):
    """Raised only by the strict ``Engine.require()`` lookup.

    ``resolve`` never raises it: a missing field degrades to the field
    name itself.
    """

    pass


class LanguageConfigError(LangPackError):
    """Base exception for invalid language tables."""

    pass


class FallbackCycleError(LanguageConfigError):
    """Raised when following fallback links from a language never terminates.

    Example:
        >>> LanguageRegistry([Language("a", "A", "b"), Language("b", "B", "a")])
        Traceback (most recent call last):
        ...
        FallbackCycleError: Fallback chain for 'a' does not terminate: a -> b -> a
    """

    pass


class UnknownLanguageError(LanguageConfigError, KeyError):
    """Raised when a language code (or a fallback code) is not registered."""

    pass


class LoaderError(LangPackError):
    """Raised when a language file cannot be parsed into values."""

    pass
