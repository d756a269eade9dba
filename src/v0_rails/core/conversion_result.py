"""
Data structures representing the output of a batch conversion.

``FileReport`` describes one processed source file; ``BatchResult`` aggregates them
into the counters and listings shown in the batch summary.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class FileWarnings(BaseModel):
  """Warnings recorded for one file."""

  file_path: str
  warnings: List[str] = Field(default_factory=list)


class FileError(BaseModel):
  """The error that stopped one file."""

  file_path: str
  error: str


class FileReport(BaseModel):
  """
  Result of converting one source file.
  """

  file_path: str = Field(..., description="Source file as discovered.")
  component: Optional[str] = Field(None, description="Component name, once extracted.")
  written: List[str] = Field(default_factory=list, description="Paths actually written.")
  warnings: List[str] = Field(default_factory=list, description="IR warnings.")
  error: Optional[str] = Field(None, description="Error message if the file failed.")

  @property
  def success(self) -> bool:
    return self.error is None


class BatchResult(BaseModel):
  """
  Aggregated outcome of a batch run.
  """

  success_count: int = 0
  warning_count: int = Field(0, description="Total number of warnings across files.")
  error_count: int = 0
  warnings: List[FileWarnings] = Field(default_factory=list)
  errors: List[FileError] = Field(default_factory=list)
  reports: List[FileReport] = Field(default_factory=list)

  def record(self, report: FileReport) -> None:
    """
    Adds a file report and updates the counters.

    Args:
        report (FileReport): Outcome of one file.
    """
    self.reports.append(report)
    if report.error is not None:
      self.error_count += 1
      self.errors.append(FileError(file_path=report.file_path, error=report.error))
      return
    self.success_count += 1
    if report.warnings:
      self.warning_count += len(report.warnings)
      self.warnings.append(FileWarnings(file_path=report.file_path, warnings=report.warnings))

  @property
  def has_errors(self) -> bool:
    """
    Check if any file failed.

    Returns:
        True if one or more errors are present.
    """
    return self.error_count > 0
