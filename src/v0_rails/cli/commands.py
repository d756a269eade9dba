"""
CLI Command Handlers Facade.

This module re-exports handlers from `v0_rails.cli.handlers` so the entry point
depends on a single module.
"""

from v0_rails.cli.handlers.convert import handle_convert, print_batch_summary

__all__ = [
  "handle_convert",
  "print_batch_summary",
]
