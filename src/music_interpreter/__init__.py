"""Interpreter-pattern music expressions and the tools to build them."""

from .builder import BuildResult, ExpressionBuilder
from .expressions import (
    MAX_REPEAT_COUNT,
    VALID_NOTES,
    Chord,
    MusicExpression,
    Note,
    Repeat,
    Rest,
    Sequence,
)
from .library import ExpressionLibrary

__all__ = [
    # Expressions
    "MusicExpression",
    "Note",
    "Rest",
    "Sequence",
    "Chord",
    "Repeat",
    "VALID_NOTES",
    "MAX_REPEAT_COUNT",
    # Session state
    "ExpressionLibrary",
    "ExpressionBuilder",
    "BuildResult",
]
