"""Command line entry point for live scanning."""
