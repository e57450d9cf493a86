"""Command-line trading client for exchange REST APIs."""

__version__ = "0.1.0"
