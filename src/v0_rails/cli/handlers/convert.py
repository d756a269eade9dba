"""
Convert Command Handler.

This module implements the logic for the `v0-rails convert` command:

1. Configuration loading (``[tool.v0_rails]`` plus CLI overrides).
2. Batch conversion via the ``BatchRunner``.
3. The batch summary and the exit code.
"""

from typing import Any

from rich.markup import escape
from rich.table import Table

from v0_rails.config import RuntimeConfig
from v0_rails.core.batch import BatchRunner, glob_base
from v0_rails.core.conversion_result import BatchResult
from v0_rails.core.errors import DiscoveryError
from v0_rails.utils.console import console, log_error, log_success, log_warning, set_verbose

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_FILE_ERRORS = 10


def handle_convert(pattern: str, **options: Any) -> int:
  """
  Handles the 'convert' command execution.

  Args:
      pattern: Input glob.
      **options: ``RuntimeConfig`` overrides; ``None`` values fall back to the
          TOML configuration or the defaults.

  Returns:
      int: 0 on success, 10 if any file failed, 1 on a generic failure (bad
      configuration, no matching files, strict-mode abort).
  """
  try:
    config = RuntimeConfig.load(search_path=glob_base(pattern), **options)
  except ValueError as e:
    log_error(f"Invalid configuration: {escape(str(e))}")
    return EXIT_FAILURE

  set_verbose(config.verbose)

  try:
    result = BatchRunner(config).run(pattern)
  except DiscoveryError as e:
    log_error(escape(str(e)))
    return EXIT_FAILURE
  except Exception as e:
    log_error(f"Conversion aborted: {escape(str(e))}")
    return EXIT_FAILURE

  if not config.dry_run:
    print_batch_summary(result)
  return EXIT_FILE_ERRORS if result.has_errors else EXIT_OK


def print_batch_summary(result: BatchResult) -> None:
  """
  Renders a summary table of conversion results to the console.

  Args:
      result: Aggregated batch outcome.
  """
  total = result.success_count + result.error_count
  if result.error_count == 0 and result.warning_count == 0:
    log_success(f"Batch Complete: {result.success_count}/{total} components converted.")
    return

  table = Table(title="Conversion Report")
  table.add_column("File", style="cyan")
  table.add_column("Status", justify="center")
  table.add_column("Issues")

  for entry in result.errors:
    table.add_row(escape(entry.file_path), "[error]Failed[/error]", escape(entry.error))
  for entry in result.warnings:
    table.add_row(escape(entry.file_path), "[warning]Warnings[/warning]", escape("; ".join(entry.warnings)))

  console.print(table)
  console.print(
    f"\n[bold]Summary:[/bold] {result.success_count} converted, "
    f"{result.warning_count} warnings, {result.error_count} errors."
  )
  if result.error_count:
    log_warning(f"{result.error_count} file(s) could not be converted.")
