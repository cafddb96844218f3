"""Shared domain utilities."""
