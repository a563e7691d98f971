"""zigup CLI command implementations."""
