"""Command line interface for projectshelf."""
