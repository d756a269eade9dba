"""
Event binding detection.

Works on typed markup nodes: every ``on<Capitalized>`` attribute of every element is
an event binding. The same handler resolution feeds both ``IR.events`` and the
``data-action`` attributes written by the markup transformer, so the two agree.
"""

import re
from typing import Iterable, List, Tuple

from v0_rails.core.jsx.nodes import (
  Attribute,
  Call,
  Element,
  ExpressionValue,
  Identifier,
  InlineFunction,
  MemberAccess,
  StringValue,
)
from v0_rails.core.model import EventBinding

_TRAILING_NAME = re.compile(r"([A-Za-z_$][\w$]*)\s*$")
_IDENTIFIER = re.compile(r"^[A-Za-z_$][\w$]*$")


def resolve_handler(attribute: Attribute) -> Tuple[str, List[str]]:
  """
  Determines the handler name and parameters of an event attribute.

  Args:
      attribute (Attribute): An ``on<Name>`` attribute.

  Returns:
      Tuple[str, List[str]]: Handler identifier and declared parameter names.
      Inline closures that do not call a named function get ``<event>Handler``.
  """
  synthetic = f"{attribute.event_name}Handler"
  value = attribute.value
  if isinstance(value, StringValue):
    return (value.value if _IDENTIFIER.match(value.value) else synthetic), []
  if not isinstance(value, ExpressionValue) or value.expression is None:
    return synthetic, []

  expr = value.expression
  if isinstance(expr, Identifier):
    return expr.name, []
  if isinstance(expr, MemberAccess):
    return _last_segment(expr.source) or synthetic, []
  if isinstance(expr, InlineFunction):
    params = [param.name or "param" for param in expr.params]
    if isinstance(expr.body, Call):
      return _callee_name(expr.body) or synthetic, params
    return synthetic, params
  if isinstance(expr, Call):
    return _callee_name(expr) or synthetic, []
  return synthetic, []


def _callee_name(call: Call) -> str:
  if isinstance(call.callee, Identifier):
    return call.callee.name
  if isinstance(call.callee, MemberAccess):
    return _last_segment(call.callee.source)
  return ""


def _last_segment(source: str) -> str:
  match = _TRAILING_NAME.search(source)
  return match.group(1) if match else ""


def extract_events(elements: Iterable[Element]) -> List[EventBinding]:
  """
  Collects the event bindings declared on ``elements``.

  Args:
      elements: Elements to scan, in document order.

  Returns:
      List[EventBinding]: One binding per event attribute.
  """
  events = []
  for element in elements:
    for attr in element.attributes:
      if isinstance(attr, Attribute) and attr.is_event_handler:
        handler, params = resolve_handler(attr)
        events.append(EventBinding(name=attr.event_name, handler=handler, params=params))
  return events
