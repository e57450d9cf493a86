"""Application entry points used by the CLI."""
