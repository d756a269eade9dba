"""
Attribute translation for the markup transformer.

Native elements get HTML attribute names (``className`` -> ``class``, camelCase ->
kebab-case, with React's lowercase and SVG case-sensitive exceptions) and a single
merged ``data-action`` for all their event handlers. Custom component tags keep their
prop names verbatim: the template generator turns them into constructor arguments.
"""

import html
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from v0_rails.analysis.events import resolve_handler
from v0_rails.core.escape_hatch import EscapeHatch
from v0_rails.core.jsx.nodes import (
  Attribute,
  AttributeNode,
  ExpressionValue,
  InlineFunction,
  Literal,
  MarkupExpression,
  OtherExpression,
  SpreadAttribute,
  StringValue,
  UnsupportedValue,
)
from v0_rails.core.markup.expressions import ExpressionRewriter
from v0_rails.utils.strings import kebab_case

SKIPPED_ATTRIBUTES = frozenset({"key", "ref", "dangerouslySetInnerHTML"})

RENAMED_ATTRIBUTES = {
  "className": "class",
  "htmlFor": "for",
  "xlinkHref": "xlink:href",
  "xmlLang": "xml:lang",
  "xmlnsXlink": "xmlns:xlink",
  "defaultValue": "value",
  "defaultChecked": "checked",
}

LOWERCASE_ATTRIBUTES = frozenset(
  {
    "accessKey",
    "allowFullScreen",
    "autoComplete",
    "autoFocus",
    "autoPlay",
    "cellPadding",
    "cellSpacing",
    "charSet",
    "colSpan",
    "contentEditable",
    "crossOrigin",
    "dateTime",
    "encType",
    "enterKeyHint",
    "formAction",
    "frameBorder",
    "hrefLang",
    "inputMode",
    "marginHeight",
    "marginWidth",
    "maxLength",
    "minLength",
    "noValidate",
    "playsInline",
    "readOnly",
    "referrerPolicy",
    "rowSpan",
    "spellCheck",
    "srcSet",
    "tabIndex",
    "useMap",
  }
)

PRESERVED_CASE_ATTRIBUTES = frozenset(
  {
    "viewBox",
    "preserveAspectRatio",
    "gradientTransform",
    "gradientUnits",
    "patternUnits",
    "patternContentUnits",
    "patternTransform",
    "clipPathUnits",
    "markerHeight",
    "markerWidth",
    "markerUnits",
    "maskUnits",
    "maskContentUnits",
    "filterUnits",
    "primitiveUnits",
    "pathLength",
    "refX",
    "refY",
    "spreadMethod",
    "startOffset",
    "stdDeviation",
    "textLength",
    "lengthAdjust",
    "baseFrequency",
    "numOctaves",
    "tableValues",
  }
)

BOOLEAN_ATTRIBUTES = frozenset(
  {
    "async",
    "autofocus",
    "autoplay",
    "checked",
    "controls",
    "defer",
    "disabled",
    "hidden",
    "loop",
    "multiple",
    "muted",
    "novalidate",
    "open",
    "readonly",
    "required",
    "selected",
  }
)


@dataclass(frozen=True)
class RenderedAttributes:
  """
  Attribute text of one tag.

  Attributes:
      text (str): Attributes, each preceded by a space.
      leading (str): Placeholders to emit before the tag (comments cannot go inside it).
      warnings (Tuple[str, ...]): Warnings raised.
  """

  text: str = ""
  leading: str = ""
  warnings: Tuple[str, ...] = ()


def html_attribute_name(name: str) -> str:
  """
  Maps a JSX attribute name to its HTML spelling.

  Args:
      name (str): JSX attribute name.

  Returns:
      str: ``class``, ``for``, lowercased DOM names, preserved SVG names, or kebab-case.
  """
  if name in RENAMED_ATTRIBUTES:
    return RENAMED_ATTRIBUTES[name]
  if name in LOWERCASE_ATTRIBUTES:
    return name.lower()
  if name in PRESERVED_CASE_ATTRIBUTES or ":" in name or "-" in name:
    return name
  return kebab_case(name)


def render_attributes(
  attributes: Sequence[AttributeNode], rewriter: ExpressionRewriter, component: bool = False
) -> RenderedAttributes:
  """
  Translates the attributes of one element.

  Args:
      attributes: Attributes in source order.
      rewriter (ExpressionRewriter): Rewriter bound to the element's scope.
      component (bool): True for custom component tags.

  Returns:
      RenderedAttributes: The attribute text, leading placeholders and warnings.
  """
  parts: List[str] = []
  actions: List[str] = []
  leading: List[str] = []
  warnings: List[str] = []

  for attr in attributes:
    if isinstance(attr, SpreadAttribute):
      parts.append(f" <%= render_attributes({rewriter.code(attr.argument)}) %>")
      continue
    if attr.name in SKIPPED_ATTRIBUTES:
      continue
    if attr.is_event_handler and not component:
      handler, _ = resolve_handler(attr)
      actions.append(f"{attr.event_name}->{handler}")
      continue

    name = attr.name if component else html_attribute_name(attr.name)
    rendered, failure = _attribute(name, attr, rewriter, component)
    if failure:
      placeholder, warning = EscapeHatch.mark_failure(failure)
      leading.append(placeholder)
      warnings.append(warning)
    elif rendered:
      parts.append(rendered)

  if actions:
    parts.append(f' data-action="{" ".join(actions)}"')
  return RenderedAttributes(text="".join(parts), leading="".join(leading), warnings=tuple(warnings))


def _attribute(name: str, attr: Attribute, rewriter: ExpressionRewriter, component: bool) -> Tuple[str, str]:
  value = attr.value
  if value is None:
    return f" {name}", ""
  if isinstance(value, StringValue):
    return f' {name}="{_quote(value.value)}"', ""
  if isinstance(value, UnsupportedValue):
    return "", f"Unsupported attribute value for {attr.name}: {value.kind}"
  if isinstance(value, ExpressionValue):
    expr = value.expression
    if expr is None:
      return "", ""
    if isinstance(expr, Literal):
      if expr.kind == "string":
        return f' {name}="{_quote(expr.source[1:-1])}"', ""
      if expr.kind == "number":
        return f' {name}="{expr.source}"', ""
      if expr.kind == "true":
        return f" {name}", ""
      if expr.kind in ("false", "null", "undefined"):
        return "", ""
    if isinstance(expr, (MarkupExpression, InlineFunction)):
      return "", f"Unsupported attribute value for {attr.name}: {type(expr).__name__}"
    if isinstance(expr, OtherExpression) and expr.kind == "object" and not component:
      return "", f"Unsupported attribute value for {attr.name}: object literal"
    if not component and name in BOOLEAN_ATTRIBUTES:
      return f' <%= "{name}" if {rewriter.code(expr)} %>', ""
    return f' {name}="<%= {rewriter.code(expr)} %>"', ""
  raise TypeError(f"Unhandled attribute value: {type(value).__name__}")


def _quote(value: str) -> str:
  return html.escape(html.unescape(value), quote=True).replace("&#x27;", "'")
