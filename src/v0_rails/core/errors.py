"""
Error taxonomy for the conversion pipeline.

* ``DiscoveryError``: the input glob matched no files. Fatal to the batch.
* ``ExtractionError``: no component could be identified in a file. Fatal to that
  file only, unless strict mode is active.
* ``WriteError``: an artifact could not be persisted. Fatal to that file.
* ``TransformationWarning``: category of the non-fatal warning strings recorded in
  ``ComponentInfo.warnings`` / ``IR.warnings``. It is never raised by the pipeline.
"""

from pathlib import Path
from typing import Union


class V0RailsError(Exception):
  """Base class for all errors raised by v0-rails."""


class DiscoveryError(V0RailsError):
  """Raised when the input pattern selects no source files."""

  def __init__(self, pattern: str):
    super().__init__(f"No files matching pattern: {pattern}")
    self.pattern = pattern


class ExtractionError(V0RailsError):
  """Raised when a source file contains no identifiable component."""

  def __init__(self, path: Union[str, Path], reason: str = "Could not determine component"):
    super().__init__(f"{reason} in file: {path}")
    self.path = str(path)


class WriteError(V0RailsError):
  """Raised when an output artifact cannot be written."""

  def __init__(self, path: Union[str, Path], cause: Exception):
    super().__init__(f"Failed to write file {path}: {cause}")
    self.path = str(path)
    self.cause = cause


class TransformationWarning(UserWarning):
  """Category for ambiguities and unsupported constructs met during transformation."""
