"""
Component Preview Generator.

``ViewComponent::Preview`` classes with a ``default`` scenario and one scenario per
detected variant.
"""

from typing import List

from v0_rails.core.model import IR
from v0_rails.generators.component_test import component_constant, example_arguments
from v0_rails.generators.ruby_class import component_class_name
from v0_rails.utils.strings import ruby_constant_path, ruby_string


def generate_component_preview(ir: IR, namespace: str = "Ui") -> str:
  """
  Builds ``<snake>_component_preview.rb``.

  Args:
      ir (IR): The component.
      namespace (str): Ruby namespace of the component.

  Returns:
      str: The preview file.
  """
  modules = ruby_constant_path(namespace).split("::")
  constant = component_constant(ir, namespace)
  block = f" {{ {ruby_string(ir.name)} }}" if ir.is_interactive else ""

  scenarios: List[List[str]] = [
    ["def default", f"  render({constant}.new({example_arguments(ir)})){block}", "end"],
  ]
  for variant in ir.variants:
    arguments = example_arguments(ir, variant=ruby_string(variant))
    scenarios.append([f"def {variant}", f"  render({constant}.new({arguments})){block}", "end"])

  lines = ["# frozen_string_literal: true", ""]
  depth = 0
  for module in modules:
    lines.append("  " * depth + f"module {module}")
    depth += 1
  lines.append("  " * depth + f"class {component_class_name(ir)}Preview < ViewComponent::Preview")
  for index, scenario in enumerate(scenarios):
    if index:
      lines.append("")
    lines += ["  " * (depth + 1) + line for line in scenario]
  lines.append("  " * depth + "end")
  for _ in modules:
    depth -= 1
    lines.append("  " * depth + "end")
  return "\n".join(lines) + "\n"
