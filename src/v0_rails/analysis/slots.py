"""
Slot detection.

A prop becomes a ViewComponent slot when its value is rendered directly as a child
(``{header}``) and its name is a conventional content-projection name. ``children``
is never a slot: it maps to the generic ``content`` block.
"""

from typing import Iterable, List, Optional, Sequence

from v0_rails.core.jsx.nodes import ExpressionContainer, Identifier, MarkupChild, MarkupNode, iter_elements
from v0_rails.core.model import Prop, Slot
from v0_rails.enums import SlotKind

SINGLE_SLOT_NAMES = frozenset(
  {"header", "footer", "icon", "media", "avatar", "badge", "prefix", "suffix", "leading", "trailing", "sidebar", "action"}
)
MULTI_SLOT_NAMES = frozenset({"actions", "tabs", "links", "tags", "sections", "columns"})


def detect_slots(props: Sequence[Prop], root: Optional[MarkupNode]) -> List[Slot]:
  """
  Finds props rendered as direct children that look like content slots.

  Args:
      props: The component's props.
      root: Selected markup root.

  Returns:
      List[Slot]: Slots in prop declaration order.
  """
  if root is None:
    return []
  rendered = set(_child_identifiers(root))
  slots = []
  for prop in props:
    if prop.is_rest or prop.name not in rendered:
      continue
    if prop.name in SINGLE_SLOT_NAMES:
      slots.append(Slot(name=prop.name, kind=SlotKind.RENDERS_ONE, prop=prop.name))
    elif prop.name in MULTI_SLOT_NAMES:
      slots.append(Slot(name=prop.name, kind=SlotKind.RENDERS_MANY, prop=prop.name))
  return slots


def _child_identifiers(root: MarkupNode) -> Iterable[str]:
  children: List[MarkupChild] = list(root.children)
  for element in iter_elements(root):
    children.extend(element.children)
  for child in children:
    if isinstance(child, ExpressionContainer) and isinstance(child.expression, Identifier):
      yield child.expression.name
