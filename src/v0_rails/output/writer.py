"""
File Writer.

Persists artifacts without ever destroying existing work:

* a missing file is created,
* an existing file is left untouched and the new content goes to ``<file>.new``,
* in update mode the existing file is copied to ``<file>.bak`` and overwritten.
"""

import shutil
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from v0_rails.core.errors import WriteError
from v0_rails.utils.console import log_debug


class WriteAction(str, Enum):
  CREATED = "created"
  UPDATED = "updated"
  SIDE_BY_SIDE = "side-by-side"


@dataclass(frozen=True)
class WrittenFile:
  """Where an artifact actually went."""

  requested: Path
  path: Path
  action: WriteAction
  backup: Optional[Path] = None


class FileWriter:
  """
  Writes UTF-8 artifacts.

  Args:
      update (bool): Overwrite existing files, keeping a ``.bak`` copy.
  """

  def __init__(self, update: bool = False):
    self.update = update

  def write(self, path: Path, content: str) -> WrittenFile:
    """
    Writes ``content`` to ``path`` following the create / ``.new`` / ``.bak`` rules.

    Args:
        path (Path): Requested destination.
        content (str): File content.

    Returns:
        WrittenFile: The path written and what happened to an existing file.

    Raises:
        WriteError: If a directory cannot be created or a file cannot be written.
    """
    try:
      path.parent.mkdir(parents=True, exist_ok=True)
      if not path.exists():
        result = WrittenFile(requested=path, path=path, action=WriteAction.CREATED)
      elif self.update:
        backup = path.with_name(path.name + ".bak")
        shutil.copy2(path, backup)
        result = WrittenFile(requested=path, path=path, action=WriteAction.UPDATED, backup=backup)
      else:
        target = path.with_name(path.name + ".new")
        result = WrittenFile(requested=path, path=target, action=WriteAction.SIDE_BY_SIDE)

      with open(result.path, "wt", encoding="utf-8") as f:
        f.write(content)
    except OSError as e:
      raise WriteError(path, e) from e

    log_debug(f"{result.action.value}: [path]{result.path}[/path]")
    return result
