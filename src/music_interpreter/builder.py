"""Builds expressions from user input and stores them in a library."""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Union

from pydantic import ValidationError

from ..logging_config import get_logger
from .expressions import (
    MAX_REPEAT_COUNT,
    Chord,
    MusicExpression,
    Note,
    Repeat,
    Rest,
    Sequence,
)
from .library import ExpressionLibrary
from .models import (
    NamesInput,
    NoteInput,
    RepeatCountInput,
    SaveNameInput,
    validation_message,
)

logger = get_logger(__name__)


@dataclass
class BuildResult:
    """Result from a builder action."""

    success: bool
    message: str
    expression: Optional[MusicExpression] = None
    name: Optional[str] = None
    data: Optional[Dict[str, Any]] = None

    @property
    def rendering(self) -> Optional[str]:
        """Rendering of the built or played expression, if any."""
        return self.expression.render() if self.expression is not None else None


class ExpressionBuilder:
    """Turns raw menu input into expressions saved in an ExpressionLibrary.

    Every action returns a BuildResult instead of raising, so the caller
    only has to decide how to display the outcome.
    """

    def __init__(
        self, library: ExpressionLibrary, max_repeat_count: int = MAX_REPEAT_COUNT
    ):
        """Initialize the builder.

        Args:
            library: Library that created expressions are saved into
            max_repeat_count: Largest repeat count accepted from input
        """
        if not (1 <= max_repeat_count <= MAX_REPEAT_COUNT):
            raise ValueError(
                f"Max repeat count must be 1-{MAX_REPEAT_COUNT}, got {max_repeat_count}"
            )
        self.library = library
        self.max_repeat_count = max_repeat_count

    def create_note(self, note: str, save_as: str) -> BuildResult:
        """Create and save a note.

        Args:
            note: Note letter as typed
            save_as: Name to save the note under

        Returns:
            BuildResult with the created Note on success
        """
        return self._run(
            "note", lambda: self._save(Note(NoteInput(note=note).note), save_as)
        )

    def create_rest(self, save_as: str) -> BuildResult:
        """Create and save a rest."""
        return self._run("rest", lambda: self._save(Rest(), save_as))

    def create_sequence(
        self, names: Union[str, List[str]], save_as: str
    ) -> BuildResult:
        """Create and save a sequence from saved expressions.

        Args:
            names: Comma-separated names or a list of names
            save_as: Name to save the sequence under

        Returns:
            BuildResult with the Sequence; ``data["missing"]`` lists skipped names
        """
        return self._run("sequence", lambda: self._composite(Sequence, names, save_as))

    def create_chord(self, names: Union[str, List[str]], save_as: str) -> BuildResult:
        """Create and save a chord from saved expressions.

        Args:
            names: Comma-separated names or a list of names
            save_as: Name to save the chord under

        Returns:
            BuildResult with the Chord; ``data["missing"]`` lists skipped names
        """
        return self._run("chord", lambda: self._composite(Chord, names, save_as))

    def create_repeat(
        self, name: str, times: Union[str, int], save_as: str
    ) -> BuildResult:
        """Create and save a repeat of a saved expression.

        Args:
            name: Name of the expression to repeat
            times: Repeat count, as typed or as an int
            save_as: Name to save the repeat under

        Returns:
            BuildResult with the Repeat on success
        """

        def build() -> BuildResult:
            pattern = self.find(name)
            count = self.validate_repeat_count(times)
            return self._save(Repeat(pattern, count), save_as)

        return self._run("repeat", build)

    def play(self, name: str) -> BuildResult:
        """Render a saved expression.

        Args:
            name: Name of the expression to play

        Returns:
            BuildResult whose message is the rendering
        """

        def render() -> BuildResult:
            expression = self.find(name)
            return BuildResult(
                success=True,
                message=expression.render(),
                expression=expression,
                name=name.strip(),
            )

        return self._run("play", render)

    def find(self, name: str) -> MusicExpression:
        """Get a saved expression or raise.

        Raises:
            KeyError: If no expression is saved under the name
        """
        expression = self.library.get(name)
        if expression is None:
            raise KeyError(name.strip())
        return expression

    def validate_repeat_count(self, times: Union[str, int]) -> int:
        """Validate a repeat count against this builder's limit.

        Raises:
            ValidationError: If the count is not a number in range
        """
        return RepeatCountInput.model_validate(
            {"count": times}, context={"max_count": self.max_repeat_count}
        ).count

    def _composite(
        self,
        factory: Callable[[List[MusicExpression]], MusicExpression],
        names: Union[str, List[str]],
        save_as: str,
    ) -> BuildResult:
        """Resolve names and build a Sequence or Chord."""
        requested = NamesInput(names=names).names
        expressions, missing = self.library.resolve(requested)
        if missing:
            logger.info(f"Not found, skipping: {', '.join(missing)}")
        if not expressions:
            return BuildResult(
                success=False,
                message="No valid expressions found",
                data={"missing": missing},
            )
        result = self._save(factory(expressions), save_as)
        result.data = {"missing": missing}
        return result

    def _save(self, expression: MusicExpression, save_as: str) -> BuildResult:
        """Validate the save name and store the expression."""
        name = SaveNameInput(name=save_as).name
        replaced = self.library.save(name, expression)
        logger.info(f"Saved {expression.kind} '{name}'")
        return BuildResult(
            success=True,
            message=f"Created: {expression.render()}",
            expression=expression,
            name=name,
            data={"replaced": replaced},
        )

    def _run(self, action: str, build: Callable[[], BuildResult]) -> BuildResult:
        """Run a builder action, converting validation errors to results."""
        try:
            return build()
        except ValidationError as e:
            message = validation_message(e)
        except KeyError as e:
            message = f"Expression '{e.args[0]}' not found"
        except (ValueError, TypeError) as e:
            message = str(e)

        logger.info(f"{action} failed: {message}")
        return BuildResult(success=False, message=message)
