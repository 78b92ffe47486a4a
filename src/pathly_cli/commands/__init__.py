"""Command-line commands for Pathly CLI."""
