"""
CLI module for the formatter.
"""

from formdata_formatter.cli.format import main as format_main

__all__ = ["format_main"]
