"""Command-line interface for the intent relay."""
