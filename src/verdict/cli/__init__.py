"""Command-line interface for Verdict."""
