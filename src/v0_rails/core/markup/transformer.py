"""
Markup Transformer.

Recursively renders one typed markup root into HTML with embedded ERB directives:

- Native tags pass through; capitalized (custom component) tags are lowered, keep a
  ``data-v0-component`` marker and are recorded as references. Member tags such as
  ``Icons.Star`` use their final segment.
- Attributes are translated by ``v0_rails.core.markup.attributes``.
- Text passes through, nested elements recurse, fragments flatten, and expression
  containers go through the ``ExpressionRewriter``. Unknown child kinds become a
  diagnostic placeholder.
- Self-closing tags stay self-closing.
"""

from typing import Iterable, Sequence, Tuple

from v0_rails.core.jsx.nodes import (
  Element,
  ExpressionContainer,
  Fragment,
  MarkupChild,
  MarkupNode,
  Text,
  UnsupportedChild,
)
from v0_rails.core.markup.attributes import render_attributes
from v0_rails.core.markup.expressions import ExpressionRewriter
from v0_rails.core.markup.result import Rendered, Scope

COMPONENT_MARKER = "data-v0-component"


def resolve_tag(tag: str) -> Tuple[str, str]:
  """
  Resolves a JSX tag name.

  Args:
      tag (str): Tag as written in source.

  Returns:
      Tuple[str, str]: The HTML tag and the referenced component name ("" for native tags).
  """
  final = tag.split(".")[-1]
  if "." in tag or final[:1].isupper():
    return final.lower(), final
  return tag, ""


class MarkupTransformer:
  """
  Renders markup nodes for one component.

  Args:
      prop_names: Names of the component's props; they render as ``@name``.
  """

  def __init__(self, prop_names: Iterable[str]):
    self.scope = Scope(props=frozenset(prop_names))

  def transform(self, node: MarkupNode) -> Rendered:
    """
    Renders a markup root.

    Args:
        node (MarkupNode): Element or fragment.

    Returns:
        Rendered: HTML/ERB text with warnings and component references.
    """
    return self._node(node, self.scope)

  def _node(self, node: MarkupNode, scope: Scope) -> Rendered:
    if isinstance(node, Element):
      return self._element(node, scope)
    if isinstance(node, Fragment):
      return self._children(node.children, scope)
    raise TypeError(f"Unhandled markup node: {type(node).__name__}")

  def _element(self, node: Element, scope: Scope) -> Rendered:
    tag, reference = resolve_tag(node.tag)
    rewriter = ExpressionRewriter(scope, self._node)
    attrs = render_attributes(node.attributes, rewriter, component=bool(reference))

    marker = f' {COMPONENT_MARKER}="{reference}"' if reference else ""
    opening = f"{attrs.leading}<{tag}{marker}{attrs.text}"
    head = Rendered(warnings=attrs.warnings, references=(reference,) if reference else ())
    if node.self_closing:
      return head + Rendered(html=f"{opening} />")
    return head + self._children(node.children, scope).wrap(f"{opening}>", f"</{tag}>")

  def _children(self, children: Sequence[MarkupChild], scope: Scope) -> Rendered:
    return Rendered.join(self._child(child, scope) for child in children)

  def _child(self, child: MarkupChild, scope: Scope) -> Rendered:
    if isinstance(child, (Element, Fragment)):
      return self._node(child, scope)
    if isinstance(child, Text):
      return Rendered(html=child.value)
    if isinstance(child, ExpressionContainer):
      if child.expression is None:
        return Rendered()
      return ExpressionRewriter(scope, self._node).render(child.expression)
    if isinstance(child, UnsupportedChild):
      return Rendered.failure(f"Unsupported child node: {child.kind}")
    raise TypeError(f"Unhandled markup child: {type(child).__name__}")
