"""Named storage for expressions built during a session."""

from typing import Dict, Iterable, List, Optional, Tuple

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..logging_config import get_logger
from .expressions import MusicExpression

logger = get_logger(__name__)


class ExpressionLibrary:
    """Insertion-ordered table of saved expressions.

    Entries are never removed. Saving under an existing name replaces the
    expression but keeps its position.
    """

    def __init__(self):
        """Initialize an empty library."""
        self.expressions: Dict[str, MusicExpression] = {}

    def save(self, name: str, expression: MusicExpression) -> bool:
        """Save an expression under a name.

        Args:
            name: Name to save under (surrounding whitespace is ignored)
            expression: Expression to store

        Returns:
            True if an existing entry was replaced, False if the name is new

        Raises:
            ValueError: If the name is empty
            TypeError: If the value is not an expression
        """
        name = name.strip() if isinstance(name, str) else ""
        if not name:
            raise ValueError("Save name cannot be empty")
        if not isinstance(expression, MusicExpression):
            raise TypeError("Only MusicExpression objects can be saved")

        replaced = name in self.expressions
        self.expressions[name] = expression
        logger.debug(
            f"{'Replaced' if replaced else 'Saved'} {expression.kind} '{name}'"
        )
        return replaced

    def get(self, name: str) -> Optional[MusicExpression]:
        """Get an expression by name.

        Args:
            name: Expression name

        Returns:
            The expression or None if not found
        """
        return self.expressions.get(name.strip())

    def has(self, name: str) -> bool:
        """Check if an expression exists."""
        return name.strip() in self.expressions

    def get_names(self) -> List[str]:
        """Get all saved names in insertion order."""
        return list(self.expressions.keys())

    def items(self) -> List[Tuple[str, MusicExpression]]:
        """Get (name, expression) pairs in insertion order."""
        return list(self.expressions.items())

    def resolve(
        self, names: Iterable[str]
    ) -> Tuple[List[MusicExpression], List[str]]:
        """Look up several expressions at once.

        Args:
            names: Names to look up, in the order the expressions are wanted

        Returns:
            Tuple of (found expressions, names that were not found)
        """
        found: List[MusicExpression] = []
        missing: List[str] = []
        for name in names:
            expression = self.get(name)
            if expression is None:
                missing.append(name)
            else:
                found.append(expression)
        if missing:
            logger.debug(f"Unresolved expression names: {missing}")
        return found, missing

    def print_table(self, console: Console) -> None:
        """Print a formatted table of all saved expressions using Rich."""
        if not self.expressions:
            console.print("[yellow]No expressions saved yet.[/yellow]")
            return

        table = Table(title="Saved Expressions")
        table.add_column("Name", style="cyan")
        table.add_column("Kind", style="green")
        table.add_column("Rendering", style="white")

        for name, expression in self.expressions.items():
            table.add_row(escape(name), expression.kind, escape(expression.render()))
        console.print(table)

    def __len__(self) -> int:
        return len(self.expressions)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)
