"""Command-line front end for the student directory."""

from studentdir.cli.main import main

__all__ = ["main"]
