"""Command-line interface for SafePlay administration."""
