"""Command-line entry point (``borgmoea run spec.yaml``)."""

from .main import build_parser, main

__all__ = ["build_parser", "main"]
