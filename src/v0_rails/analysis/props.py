"""
Prop extraction from a component's first parameter.

- A plain identifier yields one synthetic ``props`` prop (object, required).
- An object destructuring pattern yields one prop per key. Defaults make the prop
  optional and decide its type from the literal kind of the default.
- A trailing rest element yields the rest prop.
"""

from typing import List, Optional, Tuple

import tree_sitter

from v0_rails.core.jsx.parser import SourceTree, function_params, named_children, param_target, unwrap_parens
from v0_rails.core.model import Prop
from v0_rails.enums import PropType
from v0_rails.utils.strings import ruby_string

SYNTHETIC_PROPS_NAME = "props"


def extract_props(tree: SourceTree, function_node: tree_sitter.Node) -> Tuple[List[Prop], List[str]]:
  """
  Builds the prop list of a component function.

  Args:
      tree (SourceTree): The parsed file.
      function_node: Declaration or function expression of the component.

  Returns:
      Tuple[List[Prop], List[str]]: Props in declaration order and extraction warnings.
  """
  params = function_params(function_node)
  if not params:
    return [], []

  target = param_target(params[0])
  if target.type != "object_pattern":
    return [Prop(name=SYNTHETIC_PROPS_NAME, type=PropType.OBJECT, required=True)], []

  props: List[Prop] = []
  warnings: List[str] = []
  seen = set()
  for child in named_children(target):
    prop, warning = _prop_from_pattern(tree, child)
    if prop is None or prop.name in seen:
      continue
    seen.add(prop.name)
    props.append(prop)
    if warning:
      warnings.append(warning)
  return props, warnings


def _prop_from_pattern(tree: SourceTree, node: tree_sitter.Node) -> Tuple[Optional[Prop], Optional[str]]:
  kind = node.type
  if kind == "shorthand_property_identifier_pattern":
    return Prop(name=tree.text(node), type=PropType.ANY, required=True), None

  if kind == "object_assignment_pattern":
    left = node.child_by_field_name("left")
    right = node.child_by_field_name("right")
    if left is None:
      return None, None
    return _defaulted_prop(tree, tree.text(left), right)

  if kind == "pair_pattern":
    key = node.child_by_field_name("key")
    value = node.child_by_field_name("value")
    if key is None:
      return None, None
    name = _key_name(tree, key)
    if value is not None and value.type == "assignment_pattern":
      return _defaulted_prop(tree, name, value.child_by_field_name("right"))
    if value is not None and value.type in ("object_pattern", "array_pattern"):
      nested_type = PropType.OBJECT if value.type == "object_pattern" else PropType.ARRAY
      return Prop(name=name, type=nested_type, required=True), None
    return Prop(name=name, type=PropType.ANY, required=True), None

  if kind == "rest_pattern":
    inner = named_children(node)
    if not inner:
      return None, None
    return Prop(name=tree.text(inner[0]), type=PropType.OBJECT, required=False, is_rest=True), None

  return None, None


def _key_name(tree: SourceTree, key: tree_sitter.Node) -> str:
  text = tree.text(key)
  if key.type == "string":
    return text[1:-1]
  if key.type == "computed_property_name":
    return text.strip("[]")
  return text


def _defaulted_prop(
  tree: SourceTree, name: str, default: Optional[tree_sitter.Node]
) -> Tuple[Prop, Optional[str]]:
  if default is None:
    return Prop(name=name, type=PropType.ANY, required=False), None
  prop_type, ruby_default = infer_default(tree, default)
  if ruby_default is None:
    source = tree.text(default)
    warning = f"Prop '{name}' has a non-literal default value: {source}. It defaults to nil in Ruby."
    return Prop(name=name, type=PropType.ANY, required=False, default_value=source), warning
  warning = None
  if prop_type in (PropType.ARRAY, PropType.OBJECT) and ruby_literal(tree, default) is None:
    source = tree.text(default)
    warning = f"Prop '{name}' has a default with non-literal entries: {source}. It defaults to {ruby_default} in Ruby."
  return Prop(name=name, type=prop_type, required=False, default_value=ruby_default), warning


def infer_default(tree: SourceTree, node: tree_sitter.Node) -> Tuple[PropType, Optional[str]]:
  """
  Classifies a default value and renders it as a Ruby literal.

  Args:
      tree (SourceTree): The parsed file.
      node: The default-value expression.

  Returns:
      Tuple[PropType, Optional[str]]: The prop type and the Ruby literal, or
      ``(ANY, None)`` when the default is not a literal.
  """
  node = unwrap_parens(node)
  kind = node.type
  if kind in ("string", "template_string"):
    literal = ruby_literal(tree, node)
    if literal is not None:
      return PropType.STRING, literal
  elif kind in ("number", "unary_expression"):
    literal = ruby_literal(tree, node)
    if literal is not None:
      return PropType.NUMBER, literal
  elif kind in ("true", "false"):
    return PropType.BOOLEAN, kind
  elif kind in ("null", "undefined"):
    return PropType.ANY, "nil"
  elif kind == "array":
    return PropType.ARRAY, ruby_literal(tree, node) or "[]"
  elif kind == "object":
    return PropType.OBJECT, ruby_literal(tree, node) or "{}"
  return PropType.ANY, None


def ruby_literal(tree: SourceTree, node: tree_sitter.Node) -> Optional[str]:
  """
  Renders a JavaScript literal as Ruby source.

  Strings, numbers, booleans, ``null``/``undefined`` and arrays or objects composed
  of those are supported. Object keys become symbols.

  Returns:
      Optional[str]: Ruby source, or None for anything that is not a plain literal.
  """
  node = unwrap_parens(node)
  kind = node.type
  text = tree.text(node)
  if kind == "string":
    return ruby_string(_unescape_js(text[1:-1]))
  if kind == "template_string":
    if any(child.type == "template_substitution" for child in node.named_children):
      return None
    return ruby_string(_unescape_js(text[1:-1]))
  if kind == "number":
    return text
  if kind == "unary_expression":
    operand = named_children(node)
    if text.startswith("-") and len(operand) == 1 and operand[0].type == "number":
      return text.replace(" ", "")
    return None
  if kind in ("true", "false"):
    return kind
  if kind in ("null", "undefined"):
    return "nil"
  if kind == "array":
    items = []
    for child in named_children(node):
      item = ruby_literal(tree, child)
      if item is None:
        return None
      items.append(item)
    return "[" + ", ".join(items) + "]"
  if kind == "object":
    pairs = []
    for child in named_children(node):
      if child.type != "pair":
        return None
      key = child.child_by_field_name("key")
      value = child.child_by_field_name("value")
      if key is None or value is None or key.type not in ("property_identifier", "string"):
        return None
      rendered = ruby_literal(tree, value)
      if rendered is None:
        return None
      key_name = _key_name(tree, key)
      if key_name.isidentifier():
        pairs.append(f"{key_name}: {rendered}")
      else:
        pairs.append(f"{ruby_string(key_name)}: {rendered}")
    return "{ " + ", ".join(pairs) + " }" if pairs else "{}"
  return None


def _unescape_js(value: str) -> str:
  return value.replace("\\'", "'").replace('\\"', '"').replace("\\`", "`")
