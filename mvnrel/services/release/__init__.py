"""Git-flow release of a Maven project."""
