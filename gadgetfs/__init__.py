"""Error codes, attribute file I/O, names, value types and configuration objects for the Linux configfs USB gadget interface."""

__version__ = "0.3.0"

__all__ = ["attrs", "config", "constants", "errors", "fsio"]