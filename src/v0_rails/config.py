"""
Runtime Configuration Store.

Options of a conversion run. Defaults can be set in ``pyproject.toml`` under
``[tool.v0_rails]``; explicit (CLI) values override them.
"""

import re
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from v0_rails.utils.strings import namespace_path, ruby_constant_path

TOOL_SECTION = "v0_rails"
_NAMESPACE_SEGMENT = re.compile(r"[A-Za-z][A-Za-z0-9_]*")


class RuntimeConfig(BaseModel):
  """
  Global configuration container for a conversion run.
  """

  dest_path: Path = Field(Path("app/components"), description="Root directory of component classes and templates.")
  namespace: str = Field("Ui", description="Ruby namespace of generated components (e.g. 'Ui', 'Admin::Forms').")
  root_path: Path = Field(
    default_factory=Path.cwd, description="Rails project root for controllers, tests, previews and helpers."
  )
  generate_stimulus: bool = Field(False, description="Write a Stimulus controller when the component needs one.")
  update: bool = Field(False, description="Overwrite existing files, keeping a .bak copy.")
  ir_output_path: Optional[Path] = Field(None, description="Where to dump the IR as JSON.")
  strict: bool = Field(False, description="Abort the batch on the first failing file.")
  generate_tests: bool = Field(True, description="Write a Minitest component test.")
  generate_previews: bool = Field(False, description="Write a ViewComponent preview.")
  generate_helpers: bool = Field(False, description="Write a Rails helper module.")
  dry_run: bool = Field(False, description="Print the IR instead of writing files.")
  verbose: bool = Field(False, description="Log per-file progress and warnings.")
  maintain_hierarchy: bool = Field(False, description="Mirror the source directory layout in outputs.")
  enhanced_erb: bool = Field(False, description="Run the enhanced template conversion pass.")
  detect_slots: bool = Field(False, description="Map markup-valued props to ViewComponent slots.")

  @field_validator("namespace")
  @classmethod
  def validate_namespace(cls, v: str) -> str:
    """
    Ensures the namespace is a Ruby constant path.

    Args:
        v (str): Raw namespace, e.g. ``ui`` or ``admin/forms``.

    Returns:
        str: Normalized constant path (``Ui``, ``Admin::Forms``).

    Raises:
        ValueError: If a segment is not a valid constant name.
    """
    segments = [seg for seg in re.split(r"::|/", v.strip()) if seg]
    if not segments or not all(_NAMESPACE_SEGMENT.fullmatch(seg) for seg in segments):
      raise ValueError(f"Invalid namespace: '{v}'. Expected a Ruby constant path such as 'Ui' or 'Admin::Forms'.")
    return ruby_constant_path(v)

  @property
  def namespace_dir(self) -> str:
    """Directory form of the namespace (``Admin::Forms`` -> ``admin/forms``)."""
    return namespace_path(self.namespace)

  @classmethod
  def load(cls, search_path: Optional[Path] = None, **overrides: Any) -> "RuntimeConfig":
    """
    Loads configuration from pyproject.toml and overrides with CLI arguments.

    Args:
        search_path (Optional[Path]): Directory to start searching for TOML config.
        **overrides: Explicit values; ``None`` means "not given".

    Returns:
        RuntimeConfig: The fully resolved configuration object.
    """
    toml_config, toml_dir = _load_toml_settings(search_path or Path.cwd())
    values: Dict[str, Any] = {key: value for key, value in toml_config.items() if key in cls.model_fields}

    # Relative paths in the TOML file are relative to that file
    if toml_dir is not None:
      for key in ("dest_path", "root_path", "ir_output_path"):
        if key in values and values[key] is not None:
          values[key] = toml_dir / Path(values[key])

    values.update({key: value for key, value in overrides.items() if value is not None})
    return cls(**values)


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Searches ``start_path`` and its parents for 'pyproject.toml' and extracts config.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory it was found in.
  """
  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.is_file():
      with open(toml_path, "rb") as f:
        data = tomllib.load(f)
      section = data.get("tool", {}).get(TOOL_SECTION, {})
      return section, parent

  return {}, None
