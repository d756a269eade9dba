"""
Helper Module Generator.

Rails view helpers wrapping ``render`` of the component. Interactive components get
one helper per variant and size; icons get a sized helper.
"""

from typing import List

from v0_rails.core.model import IR
from v0_rails.generators.component_test import component_constant
from v0_rails.utils.strings import pascal_case, ruby_constant_path, ruby_string


def helper_module_name(ir: IR) -> str:
  return f"{pascal_case(ir.name)}Helper"


def _methods(ir: IR, constant: str) -> List[List[str]]:
  snake = ir.snake_case_name
  if ir.is_interactive:
    methods = [
      [
        f"def {snake}(text = nil, **options, &block)",
        f"  component = {constant}.new(**options)",
        "  return render(component, &block) if block",
        "",
        "  render(component) { text }",
        "end",
      ]
    ]
    for variant in ir.variants:
      methods.append(
        [
          f"def {variant}_{snake}(text = nil, **options, &block)",
          f"  {snake}(text, **options.merge(variant: {ruby_string(variant)}), &block)",
          "end",
        ]
      )
    for size in ir.sizes:
      methods.append(
        [
          f"def {snake}_{size}(text = nil, **options, &block)",
          f"  {snake}(text, **options.merge(size: {ruby_string(size)}), &block)",
          "end",
        ]
      )
    return methods

  if ir.is_icon:
    return [
      [f"def {snake}(**options)", f"  render({constant}.new(**options))", "end"],
      [f"def {snake}_sized(size, **options)", f"  {snake}(**options.merge(size: size))", "end"],
    ]

  return [
    [f"def {snake}(**options, &block)", f"  render({constant}.new(**options), &block)", "end"],
    [f"def {snake}_with_content(content, **options)", f"  render({constant}.new(**options)) {{ content }}", "end"],
  ]


def generate_helper_module(ir: IR, namespace: str = "Ui") -> str:
  """
  Builds ``<snake>_helper.rb``.

  Args:
      ir (IR): The component.
      namespace (str): Ruby namespace of the component.

  Returns:
      str: The helper module.
  """
  modules = ruby_constant_path(namespace).split("::") + [helper_module_name(ir)]
  lines = ["# frozen_string_literal: true", ""]
  depth = 0
  for module in modules:
    lines.append("  " * depth + f"module {module}")
    depth += 1
  for index, method in enumerate(_methods(ir, component_constant(ir, namespace))):
    if index:
      lines.append("")
    lines += ["  " * depth + line if line else "" for line in method]
  for _ in modules:
    depth -= 1
    lines.append("  " * depth + "end")
  return "\n".join(lines) + "\n"
