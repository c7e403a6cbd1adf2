"""qa-scaffold test suite."""
