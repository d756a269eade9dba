"""
Output path derivation.

Every artifact path is a pure function of the component's snake-case name, the Ruby
namespace and the configured roots.
"""

from dataclasses import dataclass
from pathlib import Path

from v0_rails.utils.strings import namespace_path


@dataclass(frozen=True)
class ArtifactPaths:
  """
  Destinations of one component's artifacts.
  """

  component: Path
  template: Path
  controller: Path
  test: Path
  preview: Path
  helper: Path


def artifact_paths(snake_name: str, namespace: str, dest_path: Path, root_path: Path) -> ArtifactPaths:
  """
  Derives the output locations of a component.

  Args:
      snake_name (str): ``IR.snake_case_name``.
      namespace (str): Ruby namespace, e.g. ``Ui`` or ``Ui::Cards``.
      dest_path (Path): Root of component classes and templates.
      root_path (Path): Rails project root.

  Returns:
      ArtifactPaths: The six destinations.
  """
  ns_dir = namespace_path(namespace)
  components = dest_path / ns_dir
  return ArtifactPaths(
    component=components / f"{snake_name}_component.rb",
    template=components / f"{snake_name}_component.html.erb",
    controller=root_path / "app" / "javascript" / "controllers" / f"{snake_name}_controller.js",
    test=root_path / "test" / "components" / ns_dir / f"{snake_name}_component_test.rb",
    preview=root_path / "test" / "components" / "previews" / ns_dir / f"{snake_name}_component_preview.rb",
    helper=root_path / "app" / "helpers" / ns_dir / f"{snake_name}_helper.rb",
  )
