"""
Expression Rewriter.

Turns an embedded expression into ERB directives. Cases are tried in order and the
first match wins:

1. Identifier: ``<%= @prop %>`` for props, ``<%= name %>`` for anything else.
2. Member access: output directive with the root identifier substituted.
3. Ternary: ``<% if %>`` / ``<% else %>`` / ``<% end %>`` around both branches.
4. Logical AND: ``<% if left %>`` guarding the right operand, without an else.
5. ``list.map(fn)`` with an inline function: ``<% list.each do |item| %>`` loop.
   Block-bodied callbacks become a placeholder.
6. Other calls: output directive with callee and arguments substituted.
7. Anything else: output directive around the substituted source.

Only free identifiers are substituted, so property names in member chains and
parameters of nested functions are never rewritten.
"""

import html
import re
from typing import Callable, List

from v0_rails.core.jsx.nodes import (
  Call,
  Conditional,
  Expression,
  Identifier,
  InlineFunction,
  Literal,
  Logical,
  MarkupExpression,
  MarkupNode,
  MemberAccess,
  OtherExpression,
)
from v0_rails.core.markup.result import Rendered, Scope

MarkupRenderer = Callable[[MarkupNode, Scope], Rendered]

LIST_MAPPING_METHODS = frozenset({"map"})
EMPTY_LITERALS = frozenset({"null", "undefined", "false", "true"})

_LINE_BREAK = re.compile(r"\s*\n\s*")


class ExpressionRewriter:
  """
  Rewrites expressions against one scope.

  Args:
      scope (Scope): Props and bound locals.
      render_markup (MarkupRenderer): Callback rendering markup operands and branches.
  """

  def __init__(self, scope: Scope, render_markup: MarkupRenderer):
    self.scope = scope
    self.render_markup = render_markup

  def code(self, expr: Expression) -> str:
    """
    Source of ``expr`` with prop references replaced, on a single line.

    Args:
        expr (Expression): Expression to print.

    Returns:
        str: Code suitable for the inside of a directive.
    """
    if isinstance(expr, Identifier):
      return self.scope.reference(expr.name) or expr.name
    return _LINE_BREAK.sub(" ", expr.substitute(self.scope.reference)).strip()

  def render(self, expr: Expression) -> Rendered:
    """
    Renders an expression found in child position.

    Args:
        expr (Expression): The expression.

    Returns:
        Rendered: Directives and any warnings.
    """
    if isinstance(expr, Identifier):
      return self._output(expr)
    if isinstance(expr, MemberAccess):
      return self._output(expr)
    if isinstance(expr, Conditional):
      return self._conditional(expr)
    if isinstance(expr, Logical):
      return self._guard(expr) if expr.operator == "&&" else self._output(expr)
    if isinstance(expr, Call):
      if _is_list_mapping(expr):
        return self._loop(expr)
      return self._output(expr)
    if isinstance(expr, MarkupExpression):
      return self.render_markup(expr.node, self.scope)
    if isinstance(expr, Literal):
      return self._literal(expr)
    if isinstance(expr, InlineFunction):
      return Rendered.failure(f"Inline function cannot be rendered as markup: {_excerpt(expr.source)}")
    if isinstance(expr, OtherExpression):
      return self._output(expr)
    raise TypeError(f"Unhandled expression node: {type(expr).__name__}")

  def _output(self, expr: Expression) -> Rendered:
    return Rendered(html=f"<%= {self.code(expr)} %>")

  def _branch(self, expr: Expression) -> Rendered:
    if isinstance(expr, Literal) and (expr.kind in EMPTY_LITERALS or expr.source in ('""', "''", "``")):
      return Rendered()
    return self.render(expr)

  def _conditional(self, expr: Conditional) -> Rendered:
    consequent = self._branch(expr.consequent)
    alternate = self._branch(expr.alternate)
    result = consequent.wrap(f"<% if {self.code(expr.test)} %>")
    if alternate.html:
      result = result + alternate.wrap("<% else %>")
    else:
      result = result + alternate
    return result + Rendered(html="<% end %>")

  def _guard(self, expr: Logical) -> Rendered:
    return self._branch(expr.right).wrap(f"<% if {self.code(expr.left)} %>", "<% end %>")

  def _loop(self, expr: Call) -> Rendered:
    callback = expr.arguments[0]
    if not isinstance(callback, InlineFunction) or expr.receiver is None:
      return self._output(expr)
    if callback.has_block_body:
      return Rendered.failure(f"Block-bodied callback in list rendering is not supported: {_excerpt(expr.source)}")

    warnings: List[str] = []
    item = "item"
    if callback.params:
      first = callback.params[0]
      if first.name:
        item = first.name
      else:
        warnings.append(f"Destructured loop parameter {first.source} is not supported; bound as '{item}'.")
    bound = [item]
    header = f"<% {self.code(expr.receiver)}.each do |{item}| %>"
    if len(callback.params) > 1 and callback.params[1].name:
      index = callback.params[1].name
      bound.append(index)
      header = f"<% {self.code(expr.receiver)}.each_with_index do |{item}, {index}| %>"

    body = ExpressionRewriter(self.scope.bind(bound), self.render_markup)._branch(callback.body)
    return Rendered(warnings=tuple(warnings)) + body.wrap(header, "<% end %>")

  def _literal(self, expr: Literal) -> Rendered:
    if expr.kind in EMPTY_LITERALS:
      return Rendered()
    if expr.kind == "string":
      return Rendered(html=html.escape(_unquote(expr.source), quote=False))
    if expr.kind == "number":
      return Rendered(html=expr.source)
    return self._output(expr)


def _is_list_mapping(expr: Call) -> bool:
  return (
    expr.method in LIST_MAPPING_METHODS
    and expr.receiver is not None
    and len(expr.arguments) == 1
    and isinstance(expr.arguments[0], InlineFunction)
  )


def _unquote(source: str) -> str:
  body = source[1:-1]
  return body.replace("\\'", "'").replace('\\"', '"').replace("\\n", "\n")


def _excerpt(source: str, limit: int = 60) -> str:
  flat = " ".join(source.split())
  return flat if len(flat) <= limit else flat[: limit - 3] + "..."
