"""School Portal backend: teaching assignments, marks submission and approval."""

__version__ = "1.0.0"
