"""Argument binding for stored values.

Placeholders are written ``{key}`` or ``{{key}}``, where ``key`` is made of
letters, digits, ``_``, ``.`` and ``-``. Substitution is a single
left-to-right pass: replaced text is never scanned again, and placeholders
without a matching argument are left verbatim so values can be bound in
stages.
"""

import re
from typing import Iterable, List, Mapping, Optional, Sequence

from langpack.i18n.arguments import LangArg, to_variables
from langpack.i18n.values import Value

PLACEHOLDER_PATTERN = re.compile(r"\{\{([A-Za-z0-9_.\-]+)\}\}|\{([A-Za-z0-9_.\-]+)\}")


class FieldFormatter:
    """Detects and substitutes placeholders in text."""

    def __init__(self, pattern: re.Pattern = PLACEHOLDER_PATTERN):
        self.pattern = pattern

    def needs_walk(self, text: Optional[str]) -> bool:
        return bool(text) and self.pattern.search(text) is not None

    def needs_walk_any(self, texts: Iterable[str]) -> bool:
        return any(self.needs_walk(text) for text in texts)

    def placeholders(self, text: str) -> List[str]:
        """List placeholder names in order of appearance."""
        return [m.group(1) or m.group(2) for m in self.pattern.finditer(text)]

    def substitute(self, text: str, variables: Mapping[str, str]) -> str:
        """Replace known placeholders in one pass.

        Args:
            text: Template text.
            variables: Placeholder name -> replacement text.

        Returns:
            Text with known placeholders replaced.
        """
        if not variables or not text:
            return text

        def _replace(match: re.Match) -> str:
            name = match.group(1) or match.group(2)
            if name in variables:
                return variables[name]
            return match.group(0)

        return self.pattern.sub(_replace, text)


class Definition:
    """An argument set bound for walking values.

    Walking never mutates the walked value; every walk returns a fresh
    copy of the same variant (or the value itself when nothing needs
    binding).

    Attributes:
        variables: Placeholder name -> replacement text.
        formatter: FieldFormatter used for detection and substitution.
    """

    def __init__(
        self,
        args: Sequence[LangArg] = (),
        formatter: Optional[FieldFormatter] = None,
    ):
        self.variables = to_variables(args)
        self.formatter = formatter or FieldFormatter()

    def __bool__(self) -> bool:
        return bool(self.variables)

    def walk_text(self, text: str) -> str:
        return self.formatter.substitute(text, self.variables)

    def walk_all(self, texts: Iterable[str]) -> List[str]:
        return [self.walk_text(text) for text in texts]

    def walk(self, value: Value) -> Value:
        """Bind the arguments into a value.

        Values without placeholders, and walks with no arguments, return
        the value itself.
        """
        if not self.variables or not value.needs_walk(self.formatter):
            return value
        return value.walk(self)
