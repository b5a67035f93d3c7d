"""Expression tree for the music interpreter.

Terminal expressions (Note, Rest) interpret themselves directly. Non-terminal
expressions (Sequence, Chord, Repeat) combine the renderings of their children.
"""

from dataclasses import dataclass
from typing import Iterable, Protocol, Tuple, runtime_checkable

VALID_NOTES: Tuple[str, ...] = ("C", "D", "E", "F", "G", "A", "B")
MAX_REPEAT_COUNT = 100

REST_MARKER = "Rest (silence)"
SEQUENCE_SEPARATOR = " -> "
CHORD_SEPARATOR = " + "
REPEAT_SEPARATOR = ", "


@runtime_checkable
class MusicExpression(Protocol):
    """Protocol for anything that can render itself as a description."""

    kind: str

    def render(self) -> str:
        """Render the expression as a descriptive string.

        Returns:
            Human-readable description of what would be played.
        """
        ...


def _validate_children(kind: str, children: Iterable) -> Tuple[MusicExpression, ...]:
    """Freeze and validate the children of a composite expression."""
    if isinstance(children, (str, bytes)):
        raise TypeError(f"{kind} children must be a list of expressions")
    children = tuple(children)
    if not children:
        raise ValueError(f"{kind} must contain at least one expression")
    if not all(isinstance(child, MusicExpression) for child in children):
        raise TypeError("All elements must be valid MusicExpression objects")
    return children


@dataclass(frozen=True)
class Note:
    """A single pitched note."""

    name: str
    kind = "note"

    def __post_init__(self):
        """Validate and normalize the note name."""
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("Note name must be a non-empty string")

        upper_name = self.name.strip().upper()
        if upper_name not in VALID_NOTES:
            raise ValueError(
                f"Invalid note: {self.name}. "
                f"Valid notes are: {', '.join(VALID_NOTES)}"
            )
        object.__setattr__(self, "name", upper_name)

    def render(self) -> str:
        return f"Play note: {self.name}"

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True)
class Rest:
    """A beat of silence."""

    kind = "rest"

    def render(self) -> str:
        return REST_MARKER

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True)
class Sequence:
    """Expressions played one after another."""

    children: Tuple[MusicExpression, ...]
    kind = "sequence"

    def __post_init__(self):
        """Validate sequence children."""
        object.__setattr__(
            self, "children", _validate_children("Sequence", self.children)
        )

    def render(self) -> str:
        return SEQUENCE_SEPARATOR.join(child.render() for child in self.children)

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True)
class Chord:
    """Expressions played at the same time."""

    children: Tuple[MusicExpression, ...]
    kind = "chord"

    def __post_init__(self):
        """Validate chord children."""
        object.__setattr__(self, "children", _validate_children("Chord", self.children))

    def render(self) -> str:
        return f"[{CHORD_SEPARATOR.join(child.render() for child in self.children)}]"

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True)
class Repeat:
    """A single expression repeated a fixed number of times."""

    child: MusicExpression
    count: int
    kind = "repeat"

    def __post_init__(self):
        """Validate the repeated pattern and the repeat count."""
        if not isinstance(self.child, MusicExpression):
            raise TypeError("Pattern must be a valid MusicExpression object")
        if isinstance(self.count, bool) or not isinstance(self.count, int):
            raise TypeError(f"Repeat count must be an integer, got {self.count!r}")
        if self.count <= 0:
            raise ValueError("Repeat count must be a positive integer")
        if self.count > MAX_REPEAT_COUNT:
            raise ValueError(f"Repeat count cannot exceed {MAX_REPEAT_COUNT}")

    def render(self) -> str:
        """Render the child once and repeat the text ``count`` times."""
        result = self.child.render()
        repeated = REPEAT_SEPARATOR.join([result] * self.count)
        return f"Repeat {self.count}x: ({repeated})"

    def __str__(self) -> str:
        return self.render()
