"""Click command groups registered on the top-level ``linear`` CLI."""
