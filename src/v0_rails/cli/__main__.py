"""
Main Entry Point for the v0-rails CLI.

This module handles argument parsing and dispatches to the command handlers
defined in `v0_rails.cli.commands`.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from v0_rails import __version__
from v0_rails.cli import commands


def _flag(parser: argparse.ArgumentParser, name: str, help_text: str) -> None:
  """Boolean flag whose absence means 'use the configured default'."""
  parser.add_argument(name, action=argparse.BooleanOptionalAction, default=None, help=help_text)


def build_parser() -> argparse.ArgumentParser:
  """
  Defines the command line interface.

  Returns:
      argparse.ArgumentParser: Parser with the ``convert`` subcommand.
  """
  parser = argparse.ArgumentParser(
    prog="v0-rails", description="v0-rails: Convert React/JSX components into Rails ViewComponents"
  )
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: CONVERT ---
  cmd_conv = subparsers.add_parser("convert", help="Convert JSX/TSX components matching a glob")
  cmd_conv.add_argument("pattern", help="Input glob, e.g. 'components/**/*.jsx' (quote it)")
  cmd_conv.add_argument("--dest", type=Path, default=None, help="Component output root (default: app/components)")
  cmd_conv.add_argument("--namespace", default=None, help="Ruby namespace (default: Ui)")
  cmd_conv.add_argument("--root", type=Path, default=None, help="Rails project root (default: current directory)")
  cmd_conv.add_argument("--ir-output", type=Path, default=None, help="Dump the IR as JSON to this path")
  _flag(cmd_conv, "--stimulus", "Generate Stimulus controllers")
  _flag(cmd_conv, "--update", "Overwrite existing files, keeping .bak copies")
  _flag(cmd_conv, "--strict", "Abort on the first failing file")
  _flag(cmd_conv, "--tests", "Generate component tests")
  _flag(cmd_conv, "--previews", "Generate component previews")
  _flag(cmd_conv, "--helpers", "Generate view helper modules")
  _flag(cmd_conv, "--dry-run", "Print the IR instead of writing files")
  _flag(cmd_conv, "--verbose", "Log per-file progress and warnings")
  _flag(cmd_conv, "--maintain-hierarchy", "Mirror the source directory layout")
  _flag(cmd_conv, "--enhanced-erb", "Run the enhanced template conversion")
  _flag(cmd_conv, "--slots", "Map markup-valued props to ViewComponent slots")
  return parser


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Parses arguments via argparse and calls the appropriate handler function.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, 10 if any file failed, 1 for failure).
  """
  args = build_parser().parse_args(argv)

  if args.command == "convert":
    return commands.handle_convert(
      args.pattern,
      dest_path=args.dest,
      namespace=args.namespace,
      root_path=args.root,
      ir_output_path=args.ir_output,
      generate_stimulus=args.stimulus,
      update=args.update,
      strict=args.strict,
      generate_tests=args.tests,
      generate_previews=args.previews,
      generate_helpers=args.helpers,
      dry_run=args.dry_run,
      verbose=args.verbose,
      maintain_hierarchy=args.maintain_hierarchy,
      enhanced_erb=args.enhanced_erb,
      detect_slots=args.slots,
    )

  return 0


if __name__ == "__main__":
  sys.exit(main())
