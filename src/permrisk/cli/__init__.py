"""Command-line interface for permrisk."""
