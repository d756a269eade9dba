"""
Component classification and style variant detection.

Interactive components (buttons and links) get variant/size switching; icon
components get SVG parameterization. Both are decided from the component name and
the root element of its markup.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from v0_rails.core.jsx.nodes import Attribute, Element, MarkupNode, StringValue
from v0_rails.core.model import StyleVariants

VARIANT_NAMES = ("primary", "secondary", "destructive", "outline", "ghost", "link")
SIZE_NAMES = ("sm", "md", "lg", "xl")

INTERACTIVE_TAGS = frozenset({"button", "a"})


@dataclass
class Classification:
  """
  Shape flags and style data derived for one component.
  """

  is_interactive: bool = False
  is_icon: bool = False
  variants: List[str] = field(default_factory=list)
  sizes: List[str] = field(default_factory=list)
  style_variants: Optional[StyleVariants] = None


def root_element(node: Optional[MarkupNode]) -> Optional[Element]:
  """First element of a markup root, looking through fragments."""
  if isinstance(node, Element):
    return node
  if node is None:
    return None
  for child in node.children:
    if isinstance(child, Element):
      return child
  return None


def static_class(element: Element) -> Optional[str]:
  """The literal ``className`` / ``class`` of an element, if any."""
  for attr in element.attributes:
    if isinstance(attr, Attribute) and attr.name in ("className", "class") and isinstance(attr.value, StringValue):
      return attr.value.value
  return None


def classify(name: str, root: Optional[MarkupNode]) -> Classification:
  """
  Classifies a component and splits its root class list.

  Args:
      name (str): Component name.
      root (Optional[MarkupNode]): Selected markup root.

  Returns:
      Classification: Flags plus variants and sizes found in the root class list.
  """
  element = root_element(root)
  lowered = name.lower()
  tag = element.tag if element is not None else ""

  is_icon = lowered.endswith("icon") or tag == "svg"
  is_interactive = not is_icon and ("button" in lowered or "link" in lowered or tag in INTERACTIVE_TAGS)
  result = Classification(is_interactive=is_interactive, is_icon=is_icon)
  if not is_interactive or element is None:
    return result

  classes = (static_class(element) or "").split()
  variant_classes = _group(classes, VARIANT_NAMES)
  size_classes = _group(classes, SIZE_NAMES)
  grouped = {cls for group in (variant_classes, size_classes) for value in group.values() for cls in value.split()}
  result.variants = list(variant_classes)
  result.sizes = list(size_classes)
  result.style_variants = StyleVariants(
    base_classes=" ".join(cls for cls in classes if cls not in grouped),
    variant_classes=variant_classes,
    size_classes=size_classes,
  )
  return result


def _group(classes: List[str], names: tuple) -> Dict[str, str]:
  grouped: Dict[str, str] = {}
  for key in names:
    pattern = re.compile(rf"(^|[-:]){re.escape(key)}($|-)")
    matches = [cls for cls in classes if pattern.search(cls)]
    if matches:
      grouped[key] = " ".join(matches)
  return grouped
