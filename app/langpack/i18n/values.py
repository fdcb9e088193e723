"""Stored values and rendered output.

A field in a language store maps to one of four value variants:

- ``Literal``: plain text.
- ``StringPool``: interchangeable strings selected by a polling mode.
- ``ActionNode``: text with an optional command and hover lines.
- ``RenderedComponent``: a pre-built ``RenderedOutput`` handed through as is.

Every variant can report whether it contains placeholders
(``needs_walk``) and produce an argument-bound copy of itself (``walk``).
"""

import random as _random
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Iterable, List, Optional, Sequence, Tuple, Union

from langpack.i18n.exceptions import EmptyPoolError

if TYPE_CHECKING:
    from langpack.i18n.walker import Definition, FieldFormatter

NEW_LINE = "\n"


@dataclass(frozen=True)
class RenderedOutput:
    """Render-ready output handed to the delivery collaborator.

    Attributes:
        text: The rendered text.
        command: Command run when the text is activated, if any.
        hover: Lines shown when the text is hovered.
    """

    text: str
    command: Optional[str] = None
    hover: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "hover", tuple(self.hover))

    def __str__(self) -> str:
        return self.text

    @property
    def has_action(self) -> bool:
        """True if the output carries a command or hover lines."""
        return self.command is not None or bool(self.hover)

    def to_plain_text(self) -> str:
        return self.text


@dataclass(frozen=True)
class Literal:
    """An immutable text template."""

    text: str

    def needs_walk(self, formatter: "FieldFormatter") -> bool:
        return formatter.needs_walk(self.text)

    def walk(self, definition: "Definition") -> "Literal":
        return Literal(definition.walk_text(self.text))


class PoolMode(str, Enum):
    """Polling method of a string pool."""

    RANDOM = "random"
    SEQUENTIAL = "sequential"
    SEQUENTIAL_REVERSED = "sequential_reversed"

    @classmethod
    def from_string(cls, mode_str: str) -> "PoolMode":
        """Convert a mode name to PoolMode, ignoring case.

        Args:
            mode_str: Mode name (e.g., "random", "SEQUENTIAL").

        Returns:
            Matching PoolMode.

        Raises:
            ValueError: If the mode is not supported.
        """
        normalized = mode_str.strip().lower() if isinstance(mode_str, str) else ""
        for mode in cls:
            if mode.value == normalized:
                return mode
        raise ValueError(f"Unsupported pool mode: {mode_str}")


class StringPool:
    """Stores several strings and polls one of them according to a mode.

    ``RANDOM`` draws a uniform index from the injected random source.
    ``SEQUENTIAL`` walks forward from the cursor and wraps to the start.
    ``SEQUENTIAL_REVERSED`` walks backward and wraps to the last entry.

    A pool built from an entry sequence starts its cursor at 0 in every
    mode. ``add()`` resets the cursor to 0, except in
    ``SEQUENTIAL_REVERSED`` mode where it resets to the new last index.
    The two reset rules differ on purpose; existing language packs rely
    on both.

    The cursor is not thread-safe. Pools reached through an ``Engine``
    are polled under the engine lock.

    Attributes:
        mode: Polling mode.
        random: Random source used by ``RANDOM`` mode.
    """

    def __init__(
        self,
        mode: PoolMode = PoolMode.RANDOM,
        random: Optional[_random.Random] = None,
        entries: Optional[Iterable[str]] = None,
    ):
        self.mode = mode
        self.random = random if random is not None else _random.Random()
        self._entries: List[str] = [str(entry) for entry in entries] if entries else []
        self._cursor = 0

    def __repr__(self) -> str:
        return f"StringPool(mode={self.mode.name}, entries={self._entries!r}, cursor={self._cursor})"

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> Tuple[str, ...]:
        return tuple(self._entries)

    @property
    def cursor(self) -> int:
        return self._cursor

    def is_empty(self) -> bool:
        return not self._entries

    def add(self, entry: str) -> None:
        """Add a string to the pool and reset the cursor.

        Args:
            entry: The string to add.
        """
        self._entries.append(str(entry))
        if self.mode == PoolMode.SEQUENTIAL_REVERSED:
            self._cursor = len(self._entries) - 1
        else:
            self._cursor = 0

    def clear(self) -> None:
        """Remove every entry from the pool."""
        self._entries.clear()
        self._cursor = 0

    def roll(self) -> int:
        """Select the index of the next entry and advance the cursor.

        Returns:
            The selected index, or -1 if the pool is empty.
        """
        if not self._entries:
            return -1

        match self.mode:
            case PoolMode.RANDOM:
                return self.random.randrange(len(self._entries))
            case PoolMode.SEQUENTIAL:
                result = self._cursor
                self._cursor += 1
                if self._cursor >= len(self._entries):
                    self._cursor = 0
                return result
            case PoolMode.SEQUENTIAL_REVERSED:
                result = self._cursor
                self._cursor -= 1
                if self._cursor < 0:
                    self._cursor = len(self._entries) - 1
                return result

    def poll(self) -> str:
        """Get the next entry of the pool.

        Raises:
            EmptyPoolError: If the pool has no entries.
        """
        if not self._entries:
            raise EmptyPoolError("The StringPool is empty and cannot poll.")
        return self._entries[self.roll()]

    def get(self) -> str:
        """Poll the pool, returning an empty string when it is empty."""
        if not self._entries:
            return ""
        return self.poll()

    def needs_walk(self, formatter: "FieldFormatter") -> bool:
        return formatter.needs_walk_any(self._entries)

    def walk(self, definition: "Definition") -> "StringPool":
        return StringPool(self.mode, self.random, definition.walk_all(self._entries))


@dataclass(frozen=True)
class ActionNode:
    """Text with an optional command and hover lines.

    Attributes:
        text: Displayed text.
        command: Command run when the text is activated.
        hover: Lines displayed when the text is hovered.
    """

    text: str
    command: Optional[str] = None
    hover: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "hover", tuple(str(line) for line in self.hover))

    def needs_walk(self, formatter: "FieldFormatter") -> bool:
        if formatter.needs_walk(self.text):
            return True
        if self.command is not None and formatter.needs_walk(self.command):
            return True
        return formatter.needs_walk_any(self.hover)

    def walk(self, definition: "Definition") -> "ActionNode":
        command = definition.walk_text(self.command) if self.command is not None else None
        return ActionNode(
            text=definition.walk_text(self.text),
            command=command,
            hover=tuple(definition.walk_all(self.hover)),
        )

    def render(self) -> RenderedOutput:
        return RenderedOutput(text=self.text, command=self.command, hover=self.hover)


@dataclass(frozen=True)
class RenderedComponent:
    """A pre-built output, passed through resolution unchanged."""

    output: RenderedOutput

    def needs_walk(self, formatter: "FieldFormatter") -> bool:
        return False

    def walk(self, definition: "Definition") -> "RenderedComponent":
        return self


Value = Union[Literal, StringPool, ActionNode, RenderedComponent]


def to_value(obj: Any) -> Value:
    """Coerce a raw object into a stored Value.

    Values pass through, ``RenderedOutput`` is wrapped in a
    ``RenderedComponent``, sequences become newline-joined literals and any
    other object becomes a literal of its string form.

    Raises:
        TypeError: If ``obj`` is None.
    """
    if isinstance(obj, (Literal, StringPool, ActionNode, RenderedComponent)):
        return obj
    if isinstance(obj, RenderedOutput):
        return RenderedComponent(obj)
    if obj is None:
        raise TypeError("Cannot store None as a language value")
    if isinstance(obj, (list, tuple)):
        return Literal(join_lines(obj))
    return Literal(str(obj))


def join_lines(lines: Sequence[Any]) -> str:
    """Join a sequence into one string using the newline separator."""
    return NEW_LINE.join("" if line is None else str(line) for line in lines)
