"""Command-line interface for surveystats."""
