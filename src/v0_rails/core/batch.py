"""
Batch Runner.

Expands the input glob, runs the engine on each file in sorted order and writes the
artifacts. Per-file errors are recorded in the ``BatchResult``; in strict mode the
first one is re-raised and the remaining files are skipped.
"""

import glob
from pathlib import Path
from typing import List, Optional

from rich.markup import escape

from v0_rails.config import RuntimeConfig
from v0_rails.core.conversion_result import BatchResult, FileReport
from v0_rails.core.engine import TransformEngine
from v0_rails.core.errors import DiscoveryError, WriteError
from v0_rails.core.model import IR
from v0_rails.output.paths import artifact_paths
from v0_rails.output.writer import FileWriter, WriteAction
from v0_rails.utils.console import log_debug, log_error, log_info, log_warning
from v0_rails.utils.strings import pascal_case

GLOB_CHARS = frozenset("*?[")


def discover(pattern: str) -> List[Path]:
  """
  Expands ``pattern`` (``**`` is recursive) into sorted file paths.

  Args:
      pattern (str): Glob pattern.

  Returns:
      List[Path]: Matching files.

  Raises:
      DiscoveryError: If nothing matches.
  """
  files = sorted(Path(p) for p in glob.glob(pattern, recursive=True) if Path(p).is_file())
  if not files:
    raise DiscoveryError(pattern)
  return files


def glob_base(pattern: str) -> Path:
  """
  Static directory prefix of a glob (``src/components/**/*.jsx`` -> ``src/components``).
  """
  parts = []
  for part in Path(pattern).parts:
    if any(char in GLOB_CHARS for char in part):
      break
    parts.append(part)
  if len(parts) == len(Path(pattern).parts):
    # a plain file path
    parts = parts[:-1]
  return Path(*parts) if parts else Path(".")


def nested_namespace(namespace: str, relative_dir: Path) -> str:
  """Appends one constant per directory (``Ui`` + ``cards/media`` -> ``Ui::Cards::Media``)."""
  segments = [pascal_case(part.replace(" ", "_")) for part in relative_dir.parts if part not in ("", ".")]
  return "::".join([namespace] + segments)


def ir_dump_path(base: Path, ir: IR, multiple: bool) -> Path:
  """Where to dump the IR; one file per component when several inputs are processed."""
  if not multiple:
    return base
  return base.with_name(f"{base.stem}.{ir.snake_case_name}{base.suffix}")


class BatchRunner:
  """
  Runs the pipeline over every file matched by a glob.

  Args:
      config (RuntimeConfig): Options of the run.
      engine (TransformEngine, optional): Engine to use; built from ``config`` if None.
  """

  def __init__(self, config: RuntimeConfig, engine: Optional[TransformEngine] = None):
    self.config = config
    self.engine = engine or TransformEngine(config)
    self.writer = FileWriter(update=config.update)

  def run(self, pattern: str) -> BatchResult:
    """
    Converts all files matching ``pattern``.

    Args:
        pattern (str): Input glob.

    Returns:
        BatchResult: Counters and per-file listings.

    Raises:
        DiscoveryError: If no file matches.
        V0RailsError: The first per-file error, in strict mode.
    """
    files = discover(pattern)
    base = glob_base(pattern)
    result = BatchResult()
    log_info(f"Processing {len(files)} file(s) matching [path]{pattern}[/path]")

    for path in files:
      report = self.process_file(path, base, multiple=len(files) > 1)
      result.record(report)
    return result

  def process_file(self, path: Path, base: Path, multiple: bool = False) -> FileReport:
    """
    Converts one file and writes its artifacts.

    Args:
        path (Path): Source file.
        base (Path): Static base of the glob, for hierarchy mirroring.
        multiple (bool): True when the batch has several files.

    Returns:
        FileReport: Outcome of the file.
    """
    report = FileReport(file_path=str(path))
    log_debug(f"Converting [path]{path}[/path]")
    try:
      namespace = self._namespace_for(path, base)
      ir, artifacts = self.engine.convert_file(path, namespace)
      report.component = ir.name
      report.warnings = list(ir.warnings)

      if self.config.dry_run:
        print(ir.to_json())
        return report

      if self.config.ir_output_path is not None:
        self._dump_ir(ir, ir_dump_path(self.config.ir_output_path, ir, multiple))

      paths = artifact_paths(ir.snake_case_name, namespace, self.config.dest_path, self.config.root_path)
      for kind, content in artifacts.as_dict().items():
        written = self.writer.write(getattr(paths, kind), content)
        report.written.append(str(written.path))
        if written.action == WriteAction.SIDE_BY_SIDE:
          log_warning(f"[path]{written.requested}[/path] exists; wrote [path]{written.path}[/path]")

      if self.config.verbose:
        for warning in ir.warnings:
          log_warning(f"[component]{ir.name}[/component]: {escape(warning)}")
    except Exception as e:
      if self.config.strict:
        raise
      log_error(f"Failed to convert {path}: {escape(str(e))}")
      report.error = str(e)
    return report

  def _namespace_for(self, path: Path, base: Path) -> str:
    if not self.config.maintain_hierarchy:
      return self.config.namespace
    try:
      relative = path.parent.relative_to(base)
    except ValueError:
      return self.config.namespace
    return nested_namespace(self.config.namespace, relative)

  def _dump_ir(self, ir: IR, path: Path) -> None:
    try:
      path.parent.mkdir(parents=True, exist_ok=True)
      with open(path, "wt", encoding="utf-8") as f:
        f.write(ir.to_json())
    except OSError as e:
      raise WriteError(path, e) from e
    log_debug(f"IR written to [path]{path}[/path]")
