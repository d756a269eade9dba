"""
Source Parser adapter.

Parses JSX / TSX source with tree-sitter and adapts the concrete syntax tree into
the typed nodes of ``v0_rails.core.jsx.nodes``. Only this module and the extractor
helpers in ``v0_rails.analysis`` touch ``tree_sitter.Node`` objects.
"""

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Set, Tuple

import tree_sitter
import tree_sitter_javascript
import tree_sitter_typescript

from v0_rails.core.jsx.nodes import (
  Attribute,
  AttributeNode,
  AttributeValue,
  Call,
  Conditional,
  Element,
  Expression,
  ExpressionContainer,
  ExpressionValue,
  Fragment,
  Identifier,
  IdentifierRef,
  InlineFunction,
  Literal,
  Logical,
  MarkupChild,
  MarkupExpression,
  MarkupNode,
  MemberAccess,
  OtherExpression,
  Param,
  SpreadAttribute,
  StringValue,
  Text,
  UnsupportedChild,
  UnsupportedValue,
)
from v0_rails.enums import SourceDialect

_JSX_LANGUAGE = tree_sitter.Language(tree_sitter_javascript.language())
_TSX_LANGUAGE = tree_sitter.Language(tree_sitter_typescript.language_tsx())

MARKUP_TYPES = frozenset({"jsx_element", "jsx_self_closing_element"})
FUNCTION_TYPES = frozenset({"arrow_function", "function_expression", "function", "generator_function"})
LITERAL_TYPES = frozenset(
  {"string", "template_string", "number", "true", "false", "null", "undefined", "regex"}
)
LOGICAL_OPERATORS = frozenset({"&&", "||", "??"})
TAG_NAME_TYPES = frozenset({"identifier", "member_expression", "nested_identifier", "jsx_namespace_name"})


@dataclass
class SourceTree:
  """
  A parsed source file.

  Attributes:
      root (tree_sitter.Node): Program node.
      data (bytes): UTF-8 source the tree was built from.
      path (str): Source file identifier.
      dialect (SourceDialect): Grammar used.
  """

  root: tree_sitter.Node
  data: bytes
  path: str
  dialect: SourceDialect

  @property
  def has_errors(self) -> bool:
    return self.root.has_error

  def text(self, node: tree_sitter.Node) -> str:
    """
    Slices the source text covered by ``node``.

    Args:
        node: Any node of this tree.

    Returns:
        str: The decoded source.
    """
    return self.data[node.start_byte : node.end_byte].decode("utf-8", errors="replace")

  def span(self, start: int, end: int) -> str:
    return self.data[start:end].decode("utf-8", errors="replace")


class SourceParser:
  """
  Thin wrapper holding one tree-sitter parser per dialect.
  """

  def __init__(self) -> None:
    self._parsers: Dict[SourceDialect, tree_sitter.Parser] = {}

  def _parser(self, dialect: SourceDialect) -> tree_sitter.Parser:
    if dialect not in self._parsers:
      language = _TSX_LANGUAGE if dialect == SourceDialect.TSX else _JSX_LANGUAGE
      self._parsers[dialect] = tree_sitter.Parser(language)
    return self._parsers[dialect]

  def parse(self, source: str, path: str = "<memory>", dialect: SourceDialect = SourceDialect.JSX) -> SourceTree:
    """
    Parses source text. Syntax errors never raise; check ``SourceTree.has_errors``.

    Args:
        source (str): Component source code.
        path (str): Identifier recorded on the tree.
        dialect (SourceDialect): Grammar selection.

    Returns:
        SourceTree: The parsed file.
    """
    data = source.encode("utf-8")
    tree = self._parser(dialect).parse(data)
    return SourceTree(root=tree.root_node, data=data, path=path, dialect=dialect)


def named_children(node: tree_sitter.Node) -> List[tree_sitter.Node]:
  """Named children of ``node`` without comments."""
  return [child for child in node.named_children if child.type != "comment"]


def unwrap_parens(node: tree_sitter.Node) -> tree_sitter.Node:
  """Strips any number of enclosing ``parenthesized_expression`` wrappers."""
  while node.type == "parenthesized_expression":
    inner = named_children(node)
    if len(inner) != 1:
      break
    node = inner[0]
  return node


def walk(node: tree_sitter.Node) -> Iterator[tree_sitter.Node]:
  """Pre-order traversal of ``node`` and all its descendants."""
  stack = [node]
  while stack:
    current = stack.pop()
    yield current
    stack.extend(reversed(current.children))


def outermost_markup(node: tree_sitter.Node) -> Iterator[tree_sitter.Node]:
  """
  Yields markup nodes that are not nested inside another markup node, in document
  order. Markup inside attribute values or expression children of an outer element
  belongs to that element.
  """
  stack = [node]
  while stack:
    current = stack.pop()
    if current.type in MARKUP_TYPES:
      yield current
      continue
    stack.extend(reversed(current.children))


def clean_jsx_text(raw: str) -> str:
  """
  Applies JSX whitespace rules to a run of literal text.

  Lines are trimmed at their inner edges, whitespace-only lines are dropped, and the
  remaining lines are joined with single spaces. Text on a single line is kept as is.

  Args:
      raw (str): Source text between two structural children.

  Returns:
      str: Text as it would be rendered.
  """
  lines = raw.replace("\r\n", "\n").split("\n")
  last_non_empty = -1
  for index, line in enumerate(lines):
    if line.strip(" \t"):
      last_non_empty = index

  result = []
  for index, line in enumerate(lines):
    trimmed = line.replace("\t", " ")
    if index != 0:
      trimmed = trimmed.lstrip(" ")
    if index != len(lines) - 1:
      trimmed = trimmed.rstrip(" ")
    if trimmed:
      if index < last_non_empty:
        trimmed += " "
      result.append(trimmed)
  return "".join(result)


class NodeBuilder:
  """
  Converts tree-sitter nodes of one ``SourceTree`` into typed nodes.
  """

  def __init__(self, tree: SourceTree):
    self.tree = tree

  # --- Markup ---

  def markup(self, node: tree_sitter.Node) -> MarkupNode:
    """
    Adapts a ``jsx_element`` or ``jsx_self_closing_element``.

    Args:
        node: The markup node.

    Returns:
        MarkupNode: An Element, or a Fragment for ``<>...</>``.

    Raises:
        TypeError: If ``node`` is not a markup node.
    """
    if node.type == "jsx_self_closing_element":
      return Element(tag=self._tag_name(node), attributes=self._attributes(node), children=(), self_closing=True)
    if node.type != "jsx_element":
      raise TypeError(f"Not a markup node: {node.type}")

    open_tag = _first_of_type(node, "jsx_opening_element")
    close_tag = _first_of_type(node, "jsx_closing_element")
    children = self._children(node, open_tag, close_tag)
    if open_tag is None or _tag_name_node(open_tag) is None:
      return Fragment(children=children)
    return Element(
      tag=self._tag_name(open_tag),
      attributes=self._attributes(open_tag),
      children=children,
      self_closing=False,
    )

  def _tag_name(self, tag_node: tree_sitter.Node) -> str:
    name_node = _tag_name_node(tag_node)
    if name_node is None:
      return ""
    return "".join(self.tree.text(name_node).split())

  def _children(
    self,
    node: tree_sitter.Node,
    open_tag: Optional[tree_sitter.Node],
    close_tag: Optional[tree_sitter.Node],
  ) -> Tuple[MarkupChild, ...]:
    # Text is rebuilt from the gaps between structural children: jsx_text tokens
    # exclude the line breaks the whitespace rules depend on.
    cursor = open_tag.end_byte if open_tag is not None else node.start_byte
    end = close_tag.start_byte if close_tag is not None else node.end_byte
    children: List[MarkupChild] = []
    for child in node.children:
      if child.type in ("jsx_opening_element", "jsx_closing_element"):
        continue
      if child.type in ("jsx_text", "html_character_reference", "comment") or not child.is_named:
        continue
      self._append_text(children, cursor, child.start_byte)
      children.append(self._child(child))
      cursor = child.end_byte
    self._append_text(children, cursor, end)
    return tuple(children)

  def _append_text(self, children: List[MarkupChild], start: int, end: int) -> None:
    if end <= start:
      return
    value = clean_jsx_text(self.tree.span(start, end))
    if value:
      children.append(Text(value=value))

  def _child(self, child: tree_sitter.Node) -> MarkupChild:
    if child.type in MARKUP_TYPES:
      return self.markup(child)
    if child.type == "jsx_expression":
      return ExpressionContainer(expression=self._container_expression(child))
    return UnsupportedChild(kind=child.type, source=self.tree.text(child))

  def _container_expression(self, node: tree_sitter.Node) -> Optional[Expression]:
    inner = named_children(node)
    if not inner:
      return None
    return self.expression(inner[0])

  def _attributes(self, tag_node: tree_sitter.Node) -> Tuple[AttributeNode, ...]:
    result: List[AttributeNode] = []
    for child in tag_node.named_children:
      if child.type == "jsx_attribute":
        parts = named_children(child)
        name = self.tree.text(parts[0])
        value = self._attribute_value(parts[1]) if len(parts) > 1 else None
        result.append(Attribute(name=name, value=value))
      elif child.type == "jsx_expression":
        inner = named_children(child)
        if not inner:
          continue
        target = inner[0]
        if target.type == "spread_element":
          spread_parts = named_children(target)
          if spread_parts:
            target = spread_parts[0]
        result.append(SpreadAttribute(argument=self.expression(target)))
    return tuple(result)

  def _attribute_value(self, node: tree_sitter.Node) -> AttributeValue:
    if node.type == "string":
      return StringValue(value=self.tree.text(node)[1:-1])
    if node.type == "jsx_expression":
      return ExpressionValue(expression=self._container_expression(node))
    return UnsupportedValue(kind=node.type, source=self.tree.text(node))

  # --- Expressions ---

  def expression(self, node: tree_sitter.Node) -> Expression:
    """
    Adapts any expression node, unwrapping parentheses first.

    Args:
        node: The expression node.

    Returns:
        Expression: The matching variant; unknown kinds become OtherExpression.
    """
    node = unwrap_parens(node)
    source = self.tree.text(node)
    refs = self._refs(node)
    kind = node.type

    if kind == "identifier":
      return Identifier(source=source, refs=refs, name=source)
    if kind in ("member_expression", "subscript_expression"):
      return MemberAccess(source=source, refs=refs, root=self._member_root(node))
    if kind == "ternary_expression":
      return Conditional(
        source=source,
        refs=refs,
        test=self.expression(node.child_by_field_name("condition")),
        consequent=self.expression(node.child_by_field_name("consequence")),
        alternate=self.expression(node.child_by_field_name("alternative")),
      )
    if kind == "binary_expression":
      operator = node.child_by_field_name("operator")
      if operator is not None and operator.type in LOGICAL_OPERATORS:
        return Logical(
          source=source,
          refs=refs,
          operator=operator.type,
          left=self.expression(node.child_by_field_name("left")),
          right=self.expression(node.child_by_field_name("right")),
        )
    if kind == "call_expression":
      return self._call(node, source, refs)
    if kind in FUNCTION_TYPES:
      return self._inline_function(node, source, refs)
    if kind in MARKUP_TYPES:
      return MarkupExpression(source=source, refs=refs, node=self.markup(node))
    if kind in LITERAL_TYPES:
      return Literal(source=source, refs=refs, kind=kind)
    return OtherExpression(source=source, refs=refs, kind=kind)

  def _call(self, node: tree_sitter.Node, source: str, refs: Tuple[IdentifierRef, ...]) -> Call:
    callee_node = unwrap_parens(node.child_by_field_name("function"))
    args_node = node.child_by_field_name("arguments")
    arguments: Tuple[Expression, ...] = ()
    if args_node is not None and args_node.type == "arguments":
      arguments = tuple(self.expression(arg) for arg in named_children(args_node))

    method = None
    receiver = None
    if callee_node.type == "member_expression":
      prop = callee_node.child_by_field_name("property")
      obj = callee_node.child_by_field_name("object")
      if prop is not None and obj is not None:
        method = self.tree.text(prop)
        receiver = self.expression(obj)
    return Call(
      source=source,
      refs=refs,
      callee=self.expression(callee_node),
      arguments=arguments,
      method=method,
      receiver=receiver,
    )

  def _inline_function(
    self, node: tree_sitter.Node, source: str, refs: Tuple[IdentifierRef, ...]
  ) -> InlineFunction:
    params = tuple(self.param(p) for p in function_params(node))
    body = node.child_by_field_name("body")
    if body is None or body.type == "statement_block":
      return InlineFunction(
        source=source,
        refs=refs,
        params=params,
        body=None,
        block_source=self.tree.text(body) if body is not None else "",
      )
    return InlineFunction(source=source, refs=refs, params=params, body=self.expression(body), block_source=None)

  def param(self, node: tree_sitter.Node) -> Param:
    """Describes one formal parameter; destructuring patterns have no name."""
    target = param_target(node)
    if target.type == "identifier":
      return Param(name=self.tree.text(target), source=self.tree.text(node))
    return Param(name=None, source=self.tree.text(node))

  def _member_root(self, node: tree_sitter.Node) -> Optional[str]:
    current = node
    while True:
      current = unwrap_parens(current)
      if current.type in ("member_expression", "subscript_expression"):
        current = current.child_by_field_name("object")
      elif current.type == "call_expression":
        current = current.child_by_field_name("function")
      elif current.type == "non_null_expression":
        current = named_children(current)[0]
      else:
        break
      if current is None:
        return None
    return self.tree.text(current) if current.type == "identifier" else None

  def _refs(self, node: tree_sitter.Node) -> Tuple[IdentifierRef, ...]:
    base = node.start_byte
    found: List[IdentifierRef] = []
    self._collect_refs(node, set(), found, base)
    found.sort(key=lambda ref: ref.offset)
    return tuple(found)

  def _collect_refs(self, node: tree_sitter.Node, bound: Set[str], out: List[IdentifierRef], base: int) -> None:
    kind = node.type
    if kind == "identifier":
      name = self.tree.text(node)
      if name not in bound and name != "undefined":
        offset = len(self.tree.span(base, node.start_byte))
        out.append(IdentifierRef(offset=offset, name=name))
      return
    if kind == "shorthand_property_identifier":
      name = self.tree.text(node)
      if name not in bound:
        offset = len(self.tree.span(base, node.start_byte))
        out.append(IdentifierRef(offset=offset, name=name, shorthand=True))
      return
    if kind in FUNCTION_TYPES:
      inner_bound = set(bound)
      for param in function_params(node):
        inner_bound.update(pattern_names(self.tree, param))
      body = node.child_by_field_name("body")
      if body is not None:
        self._collect_refs(body, inner_bound, out, base)
      return
    if kind in ("jsx_opening_element", "jsx_self_closing_element", "jsx_closing_element"):
      name_node = _tag_name_node(node)
      for child in node.named_children:
        if name_node is not None and child.start_byte == name_node.start_byte and child.type == name_node.type:
          continue
        self._collect_refs(child, bound, out, base)
      return
    if kind == "jsx_attribute":
      parts = named_children(node)
      for part in parts[1:]:
        self._collect_refs(part, bound, out, base)
      return
    if kind == "variable_declarator":
      value = node.child_by_field_name("value")
      if value is not None:
        self._collect_refs(value, bound, out, base)
      return
    if kind == "pair":
      value = node.child_by_field_name("value")
      if value is not None:
        self._collect_refs(value, bound, out, base)
      return
    for child in node.named_children:
      self._collect_refs(child, bound, out, base)


def function_params(node: tree_sitter.Node) -> List[tree_sitter.Node]:
  """
  Formal parameters of a function-like node.

  Args:
      node: Function declaration, arrow function or function expression.

  Returns:
      List[tree_sitter.Node]: Parameter nodes (possibly TypeScript-wrapped).
  """
  single = node.child_by_field_name("parameter")
  if single is not None:
    return [single]
  params = node.child_by_field_name("parameters")
  if params is None:
    return []
  return named_children(params)


def param_target(node: tree_sitter.Node) -> tree_sitter.Node:
  """Strips TypeScript parameter wrappers and default-value assignments."""
  target = node
  if target.type in ("required_parameter", "optional_parameter"):
    target = target.child_by_field_name("pattern") or target
  if target.type == "assignment_pattern":
    target = target.child_by_field_name("left") or target
  return target


def pattern_names(tree: SourceTree, node: tree_sitter.Node) -> Set[str]:
  """Identifiers bound by a parameter or destructuring pattern."""
  target = param_target(node)
  if target.type in ("identifier", "shorthand_property_identifier_pattern"):
    return {tree.text(target)}
  names: Set[str] = set()
  for sub in walk(target):
    if sub.type in ("identifier", "shorthand_property_identifier_pattern"):
      parent = sub.parent
      # Skip default values: only names on the binding side are bound.
      if parent is not None and parent.type in ("assignment_pattern", "object_assignment_pattern"):
        if parent.child_by_field_name("right") == sub:
          continue
      names.add(tree.text(sub))
  return names


def _first_of_type(node: tree_sitter.Node, kind: str) -> Optional[tree_sitter.Node]:
  for child in node.children:
    if child.type == kind:
      return child
  return None


def _tag_name_node(tag_node: tree_sitter.Node) -> Optional[tree_sitter.Node]:
  name = tag_node.child_by_field_name("name")
  if name is not None:
    return name
  for child in tag_node.named_children:
    if child.type in TAG_NAME_TYPES:
      return child
    if child.type in ("jsx_attribute", "jsx_expression"):
      break
  return None
