"""Command-line interface for the Taboo game."""
