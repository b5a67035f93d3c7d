#!/usr/bin/env python3

"""Interactive command-line interface for the Music Interpreter."""

from typing import IO, Optional

import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt

from . import __version__
from .config import get_config
from .logging_config import PACKAGE_LOGGER, get_logger, set_log_level, setup_logging
from .music_interpreter import BuildResult, ExpressionBuilder, ExpressionLibrary
from .music_interpreter.models import (
    NamesInput,
    NoteInput,
    SaveNameInput,
    validation_message,
)
from .music_interpreter.presets import load_demo_expressions

logger = get_logger(__name__)

MENU_TITLE = "MUSIC INTERPRETER PATTERN - INTERACTIVE DEMO"
MENU_OPTIONS = [
    ("1", "Create a single note"),
    ("2", "Create a rest (silence)"),
    ("3", "Create a sequence (notes in order)"),
    ("4", "Create a chord (notes together)"),
    ("5", "Create a repeat pattern"),
    ("6", "Play a saved expression"),
    ("7", "Show all saved expressions"),
    ("8", "Show pattern explanation"),
    ("9", "Exit"),
]
EXIT_OPTION = MENU_OPTIONS[-1][0]


class LinePrompt(Prompt):
    """Prompt that raises EOFError once its input stream is exhausted."""

    @classmethod
    def get_input(cls, console, prompt, password, stream=None) -> str:
        response = console.input(prompt, password=password, stream=stream)
        if stream is not None and not response:
            raise EOFError
        return response


PATTERN_EXPLANATION = """\
Real-world analogy: musicians reading and playing sheet music

[bold]Pattern Components:[/bold]
1. AbstractExpression (MusicExpression protocol)
   - Defines render(), which every music element implements
2. Terminal Expressions (Note, Rest)
   - Basic building blocks (leaf nodes)
   - Interpret themselves directly
3. Non-Terminal Expressions (Sequence, Chord, Repeat)
   - Composite expressions (branch nodes)
   - Contain other expressions and combine their results
4. Client (this interactive program)
   - Builds the abstract syntax tree
   - Asks the tree to interpret itself

[bold]How it works:[/bold]
- You build musical expressions like building blocks
- Each expression knows how to interpret itself
- Complex music is made by combining simple pieces
- Playing an expression interprets the tree recursively"""


class MusicBuilderSession:
    """Interactive menu session for building and playing music expressions."""

    def __init__(
        self,
        library: Optional[ExpressionLibrary] = None,
        console: Optional[Console] = None,
        stream: Optional[IO[str]] = None,
        max_repeat_count: Optional[int] = None,
        rule_width: Optional[int] = None,
    ):
        """Initialize the session.

        Args:
            library: Library to save expressions into (a new one by default)
            console: Rich console used for all output
            stream: Optional file to read answers from instead of stdin
            max_repeat_count: Largest repeat count accepted (config by default)
            rule_width: Width of the rules around the menu (config by default)
        """
        config = get_config()
        self.library = library if library is not None else ExpressionLibrary()
        self.console = console or Console()
        self.stream = stream
        self.builder = ExpressionBuilder(
            self.library,
            max_repeat_count or config.interpreter.max_repeat_count,
        )
        self.rule_width = rule_width or config.interpreter.rule_width
        self.running = False

    def ask(self, prompt: str) -> str:
        """Ask for one line of input.

        Raises:
            EOFError: If the input is exhausted
        """
        return LinePrompt.ask(prompt, console=self.console, stream=self.stream)

    def run(self) -> None:
        """Run the menu loop until the user exits or input ends."""
        self.console.print(
            "[bold blue]Welcome to the Interactive Music Interpreter "
            "Pattern Demo![/bold blue]"
        )
        self.console.print(
            "Build musical expressions step by step and see how they "
            "interpret themselves."
        )

        self.running = True
        while self.running:
            try:
                self.show_menu()
                choice = self.ask(f"Choose an option (1-{EXIT_OPTION})")
                self.handle_choice(choice)
            except KeyboardInterrupt:
                self.console.print(
                    f"\n[yellow]Use option {EXIT_OPTION} to exit[/yellow]"
                )
            except EOFError:
                self.console.print()
                self.running = False
            except Exception as e:
                logger.exception("Unexpected error in menu loop")
                self.console.print(f"[red]Error: {escape(str(e))}[/red]")

        self.console.print("[blue]Thanks for exploring the Interpreter Pattern![/blue]")

    def show_menu(self) -> None:
        """Print the numbered menu."""
        rule = "=" * self.rule_width
        self.console.print(f"\n{rule}")
        self.console.print(f"[bold]{MENU_TITLE}[/bold]")
        self.console.print(rule)
        for key, label in MENU_OPTIONS:
            self.console.print(f"{key}. {label}")
        self.console.print(rule)

    def handle_choice(self, choice: str) -> None:
        """Dispatch a menu choice.

        Args:
            choice: The option typed by the user
        """
        handlers = {
            "1": self.create_note,
            "2": self.create_rest,
            "3": self.create_sequence,
            "4": self.create_chord,
            "5": self.create_repeat,
            "6": self.play_expression,
            "7": self.show_saved_expressions,
            "8": self.show_explanation,
            EXIT_OPTION: self.exit,
        }

        handler = handlers.get(choice)
        if handler:
            logger.debug(f"Menu choice {choice}")
            handler()
        else:
            self.console.print("[red]Invalid choice. Please try again.[/red]")

    def create_note(self) -> None:
        """Prompt for a note letter until it is valid, then save it."""
        while True:
            raw_note = self.ask("Enter note name (C, D, E, F, G, A, B)")
            try:
                note = NoteInput(note=raw_note).note
                break
            except ValidationError as e:
                self.print_error(validation_message(e))

        self.report(self.builder.create_note(note, self.ask_save_name()))

    def create_rest(self) -> None:
        """Save a rest under a name."""
        self.report(self.builder.create_rest(self.ask_save_name()))

    def create_sequence(self) -> None:
        """Build a sequence from saved expressions."""
        self._create_composite("sequence")

    def create_chord(self) -> None:
        """Build a chord from saved expressions."""
        self._create_composite("chord")

    def _create_composite(self, kind: str) -> None:
        """Prompt for saved names and build a sequence or chord from them."""
        if not self._require_expressions(
            "No expressions available. Create some notes first."
        ):
            return

        self.show_available()
        raw_names = self.ask(f"Enter names for the {kind} (comma-separated)")
        try:
            requested = NamesInput(names=raw_names).names
        except ValidationError as e:
            self.print_error(validation_message(e))
            return

        expressions, missing = self.library.resolve(requested)
        if missing:
            self.console.print(
                "[yellow]Warning: Not found, skipping: "
                f"{escape(', '.join(missing))}[/yellow]"
            )
        if not expressions:
            self.print_error("No valid expressions found")
            return

        found = [name for name in requested if name not in missing]
        save_as = self.ask_save_name()
        if kind == "chord":
            result = self.builder.create_chord(found, save_as)
        else:
            result = self.builder.create_sequence(found, save_as)
        self.report(result)

    def create_repeat(self) -> None:
        """Repeat a saved expression a number of times."""
        if not self._require_expressions(
            "No expressions available. Create some first."
        ):
            return

        self.show_available()
        name = self.ask("Enter expression name to repeat")
        if not self.library.has(name):
            self.print_error(f"Expression '{name}' not found")
            return

        while True:
            raw_count = self.ask(
                f"How many times to repeat? (1-{self.builder.max_repeat_count})"
            )
            try:
                count = self.builder.validate_repeat_count(raw_count)
                break
            except ValidationError as e:
                self.print_error(validation_message(e))

        self.report(self.builder.create_repeat(name, count, self.ask_save_name()))

    def play_expression(self) -> None:
        """Render a saved expression."""
        if not self._require_expressions("No expressions available."):
            return

        self.show_available()
        name = self.ask("Enter expression name to play")
        result = self.builder.play(name)
        if not result.success:
            self.print_error(result.message)
            return

        self.console.print(f"\n[bold]Playing '{escape(result.name)}':[/bold]")
        self.console.print(escape(result.message))

    def show_saved_expressions(self) -> None:
        """Print every saved expression with its rendering."""
        self.console.print()
        self.library.print_table(self.console)

    def show_explanation(self) -> None:
        """Explain the roles of the Interpreter pattern."""
        self.console.print(
            Panel(
                PATTERN_EXPLANATION,
                title="[bold blue]Interpreter Pattern Explanation[/bold blue]",
                border_style="blue",
            )
        )

    def exit(self) -> None:
        """Leave the menu loop."""
        self.running = False

    def show_available(self) -> None:
        """Print the names of the saved expressions."""
        names = self.library.get_names()
        if names:
            self.console.print(f"Available: {escape(', '.join(names))}")
        else:
            self.console.print("(No expressions saved yet)")

    def ask_save_name(self) -> str:
        """Prompt for a save name until a non-empty one is given."""
        while True:
            raw_name = self.ask("Give this expression a name to save it as")
            try:
                return SaveNameInput(name=raw_name).name
            except ValidationError as e:
                self.print_error(validation_message(e))

    def report(self, result: BuildResult) -> None:
        """Print the outcome of a builder action."""
        if not result.success:
            self.print_error(result.message)
            return

        self.console.print(f"[green]{escape(result.message)}[/green]")
        self.console.print(f"[green]Saved as: {escape(result.name)}[/green]")
        if result.data and result.data.get("replaced"):
            self.console.print("[yellow]  (replaced the previous expression)[/yellow]")

    def print_error(self, message: str) -> None:
        """Print a validation or lookup error."""
        self.console.print(f"[red]Error: {escape(message)}[/red]")

    def _require_expressions(self, message: str) -> bool:
        """Print a notice and return False if nothing has been saved yet."""
        if len(self.library) == 0:
            self.console.print(f"[yellow]{message}[/yellow]")
            return False
        return True


@click.command()
@click.version_option(version=__version__, prog_name="music-interpreter")
@click.option(
    "--examples/--no-examples",
    default=None,
    help="Preload demo expressions (c, e, g, rest, c_major, melody, melody_twice).",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Override the log level of the interpreter loggers.",
)
def main(examples: Optional[bool], log_level: Optional[str]):
    """Build and play musical expressions with the Interpreter pattern."""
    setup_logging()

    if log_level:
        for name in ("music_interpreter", "interpreter_cli"):
            set_log_level(f"{PACKAGE_LOGGER}.{name}", log_level)

    session = MusicBuilderSession()

    if examples is None:
        examples = get_config().interpreter.preload_examples
    if examples:
        count = load_demo_expressions(session.library)
        logger.info(f"Preloaded {count} demo expressions")
        session.console.print(f"[blue]Loaded {count} demo expressions[/blue]")

    session.run()


if __name__ == "__main__":
    main()
