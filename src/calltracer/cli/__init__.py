"""Command line interface for calltracer."""

from .main import build_parser, main

__all__ = ["build_parser", "main"]
