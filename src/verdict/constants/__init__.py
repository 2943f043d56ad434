"""Shared constants for Verdict."""
