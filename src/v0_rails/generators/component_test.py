"""
Component Test Generator.

Minitest scaffolds for ``ViewComponent::TestCase``. Example prop values are chosen
from the prop type alone.
"""

from typing import List, Optional

from v0_rails.core.model import IR, Prop
from v0_rails.enums import PropType
from v0_rails.generators.erb_tokens import TokenKind, parse_tag, tokenize
from v0_rails.generators.ruby_class import component_class_name, ruby_default
from v0_rails.utils.strings import ruby_constant_path, ruby_string


def example_value(prop: Prop) -> str:
  """
  Ruby example value for a prop.

  Args:
      prop (Prop): The prop.

  Returns:
      str: A literal matching the prop type, else its default (or ``nil``).
  """
  if prop.type == PropType.STRING:
    return ruby_string(f"Test {prop.name}")
  if prop.type == PropType.NUMBER:
    return "42"
  if prop.type == PropType.BOOLEAN:
    return "true"
  if prop.type == PropType.ARRAY:
    return "[]"
  if prop.type == PropType.OBJECT:
    return "{}"
  return ruby_default(prop)


def example_arguments(ir: IR, **extra: str) -> str:
  """Keyword arguments for every declared, non-slot prop."""
  slotted = set(ir.slot_props)
  pairs = [f"{p.name}: {example_value(p)}" for p in ir.props if not p.is_rest and p.name not in slotted]
  pairs += [f"{key}: {value}" for key, value in extra.items()]
  return ", ".join(pairs)


def root_tag(html: str) -> Optional[str]:
  """Name of the first tag in the markup."""
  for token in tokenize(html):
    if token.kind == TokenKind.OPEN_TAG:
      return parse_tag(token.text).name
  return None


def component_constant(ir: IR, namespace: str) -> str:
  return f"{ruby_constant_path(namespace)}::{component_class_name(ir)}"


def generate_component_test(ir: IR, namespace: str = "Ui") -> str:
  """
  Builds ``<snake>_component_test.rb``.

  Args:
      ir (IR): The component.
      namespace (str): Ruby namespace of the component.

  Returns:
      str: The test file.
  """
  modules = ruby_constant_path(namespace).split("::")
  constant = component_constant(ir, namespace)
  selector = root_tag(ir.html) or "div"

  tests: List[List[str]] = [
    [
      "def test_component_renders",
      f"  render_inline({constant}.new({example_arguments(ir)}))",
      "",
      f"  assert_selector({ruby_string(selector)})",
      "end",
    ]
  ]
  for variant in ir.variants:
    arguments = example_arguments(ir, variant=ruby_string(variant))
    tests.append(
      [
        f"def test_renders_{variant}_variant",
        f"  render_inline({constant}.new({arguments}))",
        "",
        f"  assert_selector({ruby_string(selector)})",
        "end",
      ]
    )

  lines = ["# frozen_string_literal: true", "", 'require "test_helper"', ""]
  depth = 0
  for module in modules:
    lines.append("  " * depth + f"module {module}")
    depth += 1
  lines.append("  " * depth + f"class {component_class_name(ir)}Test < ViewComponent::TestCase")
  for index, test in enumerate(tests):
    if index:
      lines.append("")
    lines += ["  " * (depth + 1) + line if line else "" for line in test]
  lines.append("  " * depth + "end")
  for _ in modules:
    depth -= 1
    lines.append("  " * depth + "end")
  return "\n".join(lines) + "\n"
