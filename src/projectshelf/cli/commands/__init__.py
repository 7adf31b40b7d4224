"""CLI command groups for projectshelf."""
