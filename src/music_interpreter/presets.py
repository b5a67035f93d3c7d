"""Demo expressions that can be preloaded into a session."""

from .expressions import Chord, Note, Repeat, Rest, Sequence
from .library import ExpressionLibrary


def load_demo_expressions(library: ExpressionLibrary) -> int:
    """Save a small set of demo expressions into a library.

    Existing entries with the same names are replaced.

    Args:
        library: Library to populate

    Returns:
        Number of expressions saved
    """
    c, e, g = Note("C"), Note("E"), Note("G")
    rest = Rest()
    melody = Sequence([c, rest, e, g])

    demo = {
        "c": c,
        "e": e,
        "g": g,
        "rest": rest,
        "c_major": Chord([c, e, g]),
        "melody": melody,
        "melody_twice": Repeat(melody, 2),
    }
    for name, expression in demo.items():
        library.save(name, expression)
    return len(demo)
