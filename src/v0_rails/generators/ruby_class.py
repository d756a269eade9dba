"""
Ruby Class Generator.

Emits the ``ViewComponent::Base`` subclass of a component: warning comments, the
namespace modules, slot declarations, readers, the keyword constructor and the helper
methods the template relies on.
"""

from typing import List, Optional

from v0_rails.core.model import IR, Prop
from v0_rails.enums import PropType
from v0_rails.generators.erb_template import has_children_placeholder
from v0_rails.utils.strings import pascal_case, ruby_constant_path, ruby_string

INDENT = "  "


def ruby_default(prop: Prop) -> str:
  """
  Ruby default of an optional prop.

  Non-literal defaults are kept in the IR as printed source; in Ruby they become
  ``nil``.
  """
  if prop.default_value is None:
    return "nil"
  if prop.type == PropType.ANY and prop.default_value != "nil":
    return "nil"
  return prop.default_value


def component_class_name(ir: IR) -> str:
  return f"{pascal_case(ir.name)}Component"


def uses_render_attributes(ir: IR) -> bool:
  """A rest prop or a spread attribute in markup needs the attribute renderer."""
  return ir.rest_prop is not None or "render_attributes(" in ir.html


def is_button(ir: IR) -> bool:
  return ir.is_interactive and ir.html.lstrip().startswith("<button")


def extra_parameters(ir: IR) -> List[str]:
  """Constructor parameters added for the component's shape, in order."""
  if ir.is_interactive:
    extra = ["variant", "size"]
  elif ir.is_icon:
    extra = ["size", "color"]
  else:
    extra = []
  return extra + ["html_class"]


class RubyClassGenerator:
  """
  Builds ``<snake>_component.rb``.

  Args:
      namespace (str): Ruby namespace, e.g. ``Ui`` or ``Admin::Forms``.
  """

  def __init__(self, namespace: str = "Ui"):
    self.modules = ruby_constant_path(namespace).split("::")

  def generate(self, ir: IR) -> str:
    lines: List[str] = [f"# WARNING: {w}" for w in ir.warnings]
    if lines:
      lines.append("")
    lines += ["# frozen_string_literal: true", ""]

    depth = 0
    for module in self.modules:
      lines.append(f"{INDENT * depth}module {module}")
      depth += 1
    lines.append(f"{INDENT * depth}class {component_class_name(ir)} < ViewComponent::Base")
    lines += [INDENT * (depth + 1) + line if line else "" for line in self.body(ir)]
    lines.append(f"{INDENT * depth}end")
    for _ in self.modules:
      depth -= 1
      lines.append(f"{INDENT * depth}end")
    return "\n".join(lines) + "\n"

  def body(self, ir: IR) -> List[str]:
    """
    Lines of the class body without indentation.

    Args:
        ir (IR): The component.

    Returns:
        List[str]: Slot declarations, readers, ``initialize`` and helper methods,
        separated by blank lines.
    """
    sections = [
      self._slots(ir),
      self._readers(ir),
      self._initialize(ir),
      self._render_attributes(ir),
      self._collection(ir),
      self._style_methods(ir),
      self._button_type(ir),
    ]
    lines: List[str] = []
    for section in sections:
      if not section:
        continue
      if lines:
        lines.append("")
      lines.extend(section)
    return lines

  def _props(self, ir: IR) -> List[Prop]:
    slotted = set(ir.slot_props)
    ordered = ir.required_props + ir.optional_props
    if ir.rest_prop is not None:
      ordered.append(ir.rest_prop)
    return [p for p in ordered if p.name not in slotted]

  def _slots(self, ir: IR) -> List[str]:
    if ir.slots:
      return [f"{slot.kind.value} :{slot.name}" for slot in ir.slots]
    if ir.is_interactive or has_children_placeholder(ir.html):
      return ["# Markup passed in the render block is available as `content`."]
    return []

  def _readers(self, ir: IR) -> List[str]:
    names = [p.name for p in self._props(ir)] + extra_parameters(ir)
    return ["attr_reader " + ", ".join(f":{name}" for name in names)]

  def _initialize(self, ir: IR) -> List[str]:
    params: List[str] = []
    assignments: List[str] = []
    rest: Optional[Prop] = None
    for prop in self._props(ir):
      if prop.is_rest:
        rest = prop
        continue
      params.append(f"{prop.name}:" if prop.required else f"{prop.name}: {ruby_default(prop)}")
      assignments.append(f"@{prop.name} = {prop.name}")
    for name in extra_parameters(ir):
      params.append(f"{name}: nil")
      assignments.append(f"@{name} = {name}")
    if rest is not None:
      params.append(f"**{rest.name}")
      assignments.append(f"@{rest.name} = {rest.name}")
    lines = [f"def initialize({', '.join(params)})"]
    lines += [INDENT + line for line in assignments]
    lines.append("end")
    return lines

  def _render_attributes(self, ir: IR) -> List[str]:
    if not uses_render_attributes(ir):
      return []
    return [
      "def render_attributes(attrs)",
      INDENT + 'attrs.to_h.except(:content).map { |key, value| "#{key}=\\"#{ERB::Util.html_escape(value)}\\"" }.join(" ").html_safe',
      "end",
    ]

  def _collection(self, ir: IR) -> List[str]:
    # The factory fills the first list-shaped keyword of ``initialize``.
    list_props = [p for p in self._props(ir) if p.is_list_like]
    if not list_props:
      return []
    return [
      "def self.build_collection(collection, **options)",
      INDENT + f"new({list_props[0].name}: collection.to_a, **options)",
      "end",
    ]

  def _style_methods(self, ir: IR) -> List[str]:
    if not ir.is_interactive:
      return []
    styles = ir.style_variants
    base = styles.base_classes if styles else ""
    lines = ["def base_classes", INDENT + ruby_string(base), "end", ""]
    lines += _case_method("variant_classes", "variant", styles.variant_classes if styles else {})
    lines.append("")
    lines += _case_method("size_classes", "size", styles.size_classes if styles else {})
    lines += [
      "",
      "def class_names",
      INDENT + '[base_classes, (variant_classes if variant), (size_classes if size), html_class].compact.reject(&:empty?).join(" ")',
      "end",
    ]
    return lines

  def _button_type(self, ir: IR) -> List[str]:
    if not is_button(ir):
      return []
    return ["def button_type", INDENT + '@type || "button"', "end"]


def _case_method(method: str, selector: str, classes: dict) -> List[str]:
  lines = [f"def {method}", INDENT + f"case {selector}.to_s"]
  for name, value in classes.items():
    lines.append(INDENT + f"when {ruby_string(name)} then {ruby_string(value)}")
  lines += [INDENT + 'else ""', INDENT + "end", "end"]
  return lines


def generate_ruby_class(ir: IR, namespace: str = "Ui") -> str:
  """Shorthand for ``RubyClassGenerator(namespace).generate(ir)``."""
  return RubyClassGenerator(namespace).generate(ir)
