"""Command line interface for Blitz."""

from .main import app, main

__all__ = ["app", "main"]
