"""Music Interpreter - An Interpreter-pattern demo over musical expressions."""

__version__ = "0.1.0"

from .config import get_config, get_max_repeat_count

__all__ = ["get_config", "get_max_repeat_count"]
