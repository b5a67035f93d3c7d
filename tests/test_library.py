"""Tests for the ExpressionLibrary class."""

import io

import pytest
from rich.console import Console

from src.music_interpreter import Chord, ExpressionLibrary, Note, Rest
from src.music_interpreter.presets import load_demo_expressions


class TestExpressionLibrary:
    """Test ExpressionLibrary functionality."""

    def setup_method(self):
        """Set up test fixtures."""
        self.library = ExpressionLibrary()

    def test_save_and_get(self):
        """Test saving and retrieving an expression."""
        note = Note("C")
        replaced = self.library.save("c", note)

        assert replaced is False
        assert self.library.get("c") is note
        assert self.library.has("c")
        assert "c" in self.library
        assert len(self.library) == 1

    def test_save_strips_name(self):
        """Test save names are stripped of surrounding whitespace."""
        self.library.save("  melody  ", Rest())
        assert self.library.get_names() == ["melody"]
        assert self.library.get(" melody") is not None

    @pytest.mark.parametrize("name", ["", "   "])
    def test_empty_name_rejected(self, name):
        """Test empty save names are rejected."""
        with pytest.raises(ValueError, match="Save name cannot be empty"):
            self.library.save(name, Rest())
        assert len(self.library) == 0

    def test_non_expression_rejected(self):
        """Test only expressions can be saved."""
        with pytest.raises(TypeError):
            self.library.save("x", "Play note: C")

    def test_get_missing_returns_none(self):
        """Test unknown names return None."""
        assert self.library.get("nothing") is None
        assert "nothing" not in self.library

    def test_insertion_order_preserved(self):
        """Test names are listed in the order they were saved."""
        for name in ["b", "a", "c"]:
            self.library.save(name, Rest())
        assert self.library.get_names() == ["b", "a", "c"]

    def test_overwrite_keeps_position(self):
        """Test re-using a name replaces the expression in place."""
        self.library.save("first", Note("C"))
        self.library.save("second", Note("D"))
        replaced = self.library.save("first", Note("E"))

        assert replaced is True
        assert self.library.get_names() == ["first", "second"]
        assert self.library.get("first").render() == "Play note: E"
        assert len(self.library) == 2

    def test_resolve_reports_missing(self):
        """Test resolve returns found expressions and missing names."""
        c, e = Note("C"), Note("E")
        self.library.save("c", c)
        self.library.save("e", e)

        found, missing = self.library.resolve(["e", "x", "c", "y"])

        assert found == [e, c]
        assert missing == ["x", "y"]

    def test_items(self):
        """Test items returns name/expression pairs."""
        note = Note("G")
        self.library.save("g", note)
        assert self.library.items() == [("g", note)]

    def test_print_table_empty(self):
        """Test the empty library prints a notice."""
        output = io.StringIO()
        self.library.print_table(Console(file=output, width=120, force_terminal=False))
        assert "No expressions saved yet." in output.getvalue()

    def test_print_table_lists_expressions(self):
        """Test the table shows names, kinds and renderings."""
        self.library.save("c_major", Chord([Note("C"), Note("E")]))
        output = io.StringIO()
        self.library.print_table(Console(file=output, width=120, force_terminal=False))

        text = output.getvalue()
        assert "Saved Expressions" in text
        assert "c_major" in text
        assert "chord" in text
        assert "[Play note: C + Play note: E]" in text


def test_load_demo_expressions():
    """Test the demo set is saved in order and renders."""
    library = ExpressionLibrary()
    count = load_demo_expressions(library)

    assert count == 7
    assert library.get_names() == [
        "c",
        "e",
        "g",
        "rest",
        "c_major",
        "melody",
        "melody_twice",
    ]
    assert library.get("c_major").render() == (
        "[Play note: C + Play note: E + Play note: G]"
    )
    assert library.get("melody_twice").render().startswith("Repeat 2x: (Play note: C")
