"""Git-flow release helper for Maven projects."""

__version__ = "1.0.0"
