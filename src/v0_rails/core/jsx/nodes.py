"""
Typed JSX / expression nodes.

The tree-sitter concrete syntax tree is adapted into these frozen dataclasses by
``v0_rails.core.jsx.parser.NodeBuilder``. Downstream stages dispatch over the closed
``Union`` aliases declared at the bottom of this module and never see parser objects.

Markup variants:
- Element: a tag with attributes and children (self-closing or paired).
- Fragment: ``<>...</>``, flattened into its parent when rendered.
- Text: literal text after JSX whitespace cleanup.
- ExpressionContainer: ``{expr}``; ``expression`` is None for ``{}`` / ``{/* comment */}``.
- UnsupportedChild: anything else found between tags (e.g. parse errors).

Expression variants all carry their printed ``source`` and the free identifier
references (``refs``) found inside it, so prop references can be substituted on the
root identifier only.
"""

from dataclasses import dataclass
from typing import Callable, Iterator, Optional, Tuple, Union


@dataclass(frozen=True)
class IdentifierRef:
  """
  A free identifier occurrence inside an expression's printed source.

  Attributes:
      offset (int): Character offset of the identifier in ``Expression.source``.
      name (str): The identifier.
      shorthand (bool): True for an object shorthand property (``{ title }``),
          which expands to ``title: <replacement>`` when substituted.
  """

  offset: int
  name: str
  shorthand: bool = False


@dataclass(frozen=True)
class Param:
  """
  A parameter of an inline function.

  Attributes:
      name (Optional[str]): Bound identifier, or None for destructuring patterns.
      source (str): Printed source of the parameter.
  """

  name: Optional[str]
  source: str


@dataclass(frozen=True)
class Expression:
  """Base class of all expression variants."""

  source: str
  refs: Tuple[IdentifierRef, ...]

  def substitute(self, replace: Callable[[str], Optional[str]]) -> str:
    """
    Prints the expression with selected identifiers replaced.

    Args:
        replace: Called with each free identifier; returns the replacement text or
            None to keep the identifier.

    Returns:
        str: The rewritten source text.
    """
    pieces = []
    cursor = 0
    for ref in self.refs:
      replacement = replace(ref.name)
      if replacement is None:
        continue
      pieces.append(self.source[cursor : ref.offset])
      pieces.append(f"{ref.name}: {replacement}" if ref.shorthand else replacement)
      cursor = ref.offset + len(ref.name)
    pieces.append(self.source[cursor:])
    return "".join(pieces)


@dataclass(frozen=True)
class Identifier(Expression):
  name: str


@dataclass(frozen=True)
class MemberAccess(Expression):
  """``a.b.c`` / ``a[b]`` / ``a?.b``; ``root`` is the leftmost identifier if any."""

  root: Optional[str]


@dataclass(frozen=True)
class Conditional(Expression):
  test: Expression
  consequent: Expression
  alternate: Expression


@dataclass(frozen=True)
class Logical(Expression):
  """Binary ``&&``, ``||`` or ``??``."""

  operator: str
  left: Expression
  right: Expression


@dataclass(frozen=True)
class Call(Expression):
  """
  A call expression.

  Attributes:
      callee: The called expression.
      arguments: Positional arguments, in order.
      method: Property name when the callee is a member access (``list.map`` -> ``map``).
      receiver: Object the method is called on, when ``method`` is set.
  """

  callee: Expression
  arguments: Tuple[Expression, ...]
  method: Optional[str]
  receiver: Optional[Expression]


@dataclass(frozen=True)
class InlineFunction(Expression):
  """
  Arrow function or function expression.

  ``body`` is set for expression bodies; ``block_source`` is set for block bodies.
  """

  params: Tuple[Param, ...]
  body: Optional[Expression]
  block_source: Optional[str]

  @property
  def has_block_body(self) -> bool:
    return self.body is None


@dataclass(frozen=True)
class Literal(Expression):
  """String, template, number, boolean, null, undefined or regex literal."""

  kind: str


@dataclass(frozen=True)
class MarkupExpression(Expression):
  """JSX used in expression position (``cond && <p/>``)."""

  node: "MarkupNode"


@dataclass(frozen=True)
class OtherExpression(Expression):
  """Any expression kind without dedicated handling; printed as source."""

  kind: str


# --- Attributes ---


@dataclass(frozen=True)
class StringValue:
  value: str


@dataclass(frozen=True)
class ExpressionValue:
  expression: Optional[Expression]


@dataclass(frozen=True)
class UnsupportedValue:
  kind: str
  source: str


AttributeValue = Union[None, StringValue, ExpressionValue, UnsupportedValue]


@dataclass(frozen=True)
class Attribute:
  name: str
  value: AttributeValue

  @property
  def is_event_handler(self) -> bool:
    """True for ``on<Capitalized>`` names such as ``onClick`` or ``onKeyDown``."""
    return len(self.name) > 2 and self.name.startswith("on") and self.name[2].isupper()

  @property
  def event_name(self) -> str:
    """``onKeyDown`` -> ``keydown``."""
    return self.name[2:].lower()


@dataclass(frozen=True)
class SpreadAttribute:
  argument: Expression


AttributeNode = Union[Attribute, SpreadAttribute]


# --- Markup ---


@dataclass(frozen=True)
class Element:
  tag: str
  attributes: Tuple[AttributeNode, ...]
  children: Tuple["MarkupChild", ...]
  self_closing: bool


@dataclass(frozen=True)
class Fragment:
  children: Tuple["MarkupChild", ...]


@dataclass(frozen=True)
class Text:
  value: str


@dataclass(frozen=True)
class ExpressionContainer:
  expression: Optional[Expression]


@dataclass(frozen=True)
class UnsupportedChild:
  kind: str
  source: str


MarkupNode = Union[Element, Fragment]
MarkupChild = Union[Element, Fragment, Text, ExpressionContainer, UnsupportedChild]


def iter_elements(node: Union[MarkupChild, Expression, None]) -> Iterator[Element]:
  """
  Yields every element reachable from ``node``, including elements nested in
  expressions (conditional branches, map callbacks, call arguments).

  Args:
      node: A markup child, an expression, or None.

  Yields:
      Element: Elements in document order.
  """
  if node is None:
    return
  if isinstance(node, Element):
    yield node
    for attr in node.attributes:
      if isinstance(attr, Attribute) and isinstance(attr.value, ExpressionValue):
        yield from iter_elements(attr.value.expression)
    for child in node.children:
      yield from iter_elements(child)
  elif isinstance(node, Fragment):
    for child in node.children:
      yield from iter_elements(child)
  elif isinstance(node, ExpressionContainer):
    yield from iter_elements(node.expression)
  elif isinstance(node, MarkupExpression):
    yield from iter_elements(node.node)
  elif isinstance(node, Conditional):
    for sub in (node.test, node.consequent, node.alternate):
      yield from iter_elements(sub)
  elif isinstance(node, Logical):
    yield from iter_elements(node.left)
    yield from iter_elements(node.right)
  elif isinstance(node, Call):
    yield from iter_elements(node.callee)
    for arg in node.arguments:
      yield from iter_elements(arg)
  elif isinstance(node, InlineFunction):
    yield from iter_elements(node.body)
