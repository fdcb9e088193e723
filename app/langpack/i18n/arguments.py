"""Resolution arguments and their fingerprints."""

import hashlib
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Tuple

from langpack.i18n.values import RenderedOutput


@dataclass(frozen=True)
class LangArg:
    """A named argument for one resolution call.

    Attributes:
        key: Placeholder name, matched literally.
        value: Any object; its textual form replaces the placeholder.
    """

    key: str
    value: Any

    @property
    def text(self) -> str:
        """Textual form of the value used for substitution."""
        if isinstance(self.value, RenderedOutput):
            return self.value.to_plain_text()
        return "" if self.value is None else str(self.value)


def to_variables(args: Iterable[LangArg]) -> Dict[str, str]:
    """Build the substitution map of an argument sequence.

    Duplicate keys resolve to the last argument carrying the key.
    """
    variables: Dict[str, str] = {}
    for arg in args:
        variables[arg.key] = arg.text
    return variables


def fingerprint(args: Iterable[LangArg]) -> str:
    """Deterministic fingerprint of an argument set.

    Two argument sequences share a fingerprint when they bind the same
    keys to the same text after duplicate resolution, regardless of order.

    Returns:
        First 16 hex characters of a SHA-256 digest.
    """
    pairs: Tuple[Tuple[str, str], ...] = tuple(sorted(to_variables(args).items()))
    key_string = "|".join(f"{key}={value}" for key, value in pairs)
    return hashlib.sha256(key_string.encode("utf-8")).hexdigest()[:16]
