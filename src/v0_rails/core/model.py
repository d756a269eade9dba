"""
Component data model.

``ComponentInfo`` is the extraction output and holds typed markup roots, so it is a
frozen dataclass. ``Prop``, ``EventBinding``, ``Slot``, ``StyleVariants`` and ``IR``
are frozen Pydantic records; their JSON form (the IR dump) uses camelCase keys.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from v0_rails.core.jsx.nodes import MarkupNode
from v0_rails.enums import PropType, SlotKind


class _Record(BaseModel):
  model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class Prop(_Record):
  """
  A single component input.
  """

  name: str = Field(..., description="Identifier, unique within the component.")
  type: PropType = Field(PropType.ANY, description="Inferred from the literal kind of the default.")
  required: bool = Field(True, description="False when a default or rest capture is present.")
  default_value: Optional[str] = Field(
    None, description="Ruby literal text of the default, printed source for non-literals."
  )
  is_rest: bool = Field(False, description="True if the prop captures all remaining keys.")

  @property
  def is_list_like(self) -> bool:
    """Collection-named props and plural array props drive the collection factory."""
    if self.is_rest:
      return False
    return self.name in ("items", "collection", "data") or (self.type == PropType.ARRAY and self.name.endswith("s"))


class EventBinding(_Record):
  """
  A DOM event handler bound in markup.
  """

  name: str = Field(..., description="Normalized event name, e.g. 'click'.")
  handler: str = Field(..., description="Bound function identifier or a synthetic '<event>Handler'.")
  params: List[str] = Field(default_factory=list, description="Declared closure parameter names.")


class Slot(_Record):
  """
  A content-projection point replacing a markup-valued prop.
  """

  name: str
  kind: SlotKind = SlotKind.RENDERS_ONE
  prop: str = Field(..., description="Name of the prop the slot replaces.")


class StyleVariants(_Record):
  """
  Class lists of an interactive component, split by role.
  """

  base_classes: str = ""
  variant_classes: Dict[str, str] = Field(default_factory=dict)
  size_classes: Dict[str, str] = Field(default_factory=dict)


@dataclass(frozen=True)
class ComponentInfo:
  """
  Extraction output for one source file.

  Attributes:
      name: Component identifier, from the declaration or the file name.
      props: Props in declaration order.
      markup_nodes: Outermost markup roots found anywhere in the file.
      has_state_or_effects: True if a state or effect hook is called.
      events: Event bindings found on any element.
      warnings: Ordered warning strings.
      original_path: Source file identifier.
  """

  name: str
  props: Tuple[Prop, ...]
  markup_nodes: Tuple[MarkupNode, ...]
  has_state_or_effects: bool
  events: Tuple[EventBinding, ...]
  warnings: Tuple[str, ...]
  original_path: str


class IR(_Record):
  """
  Normalized, generator-agnostic model of one component.

  ``html`` is never empty: failures produce a placeholder with a ``TODO`` comment.
  """

  name: str
  snake_case_name: str
  props: List[Prop] = Field(default_factory=list)
  events: List[EventBinding] = Field(default_factory=list)
  html: str
  warnings: List[str] = Field(default_factory=list)
  needs_stimulus: bool = False
  original_path: str = ""

  component_references: List[str] = Field(default_factory=list, description="Custom components used in markup.")
  slots: List[Slot] = Field(default_factory=list)
  is_interactive: bool = False
  is_icon: bool = False
  svg_content: Optional[str] = None
  variants: List[str] = Field(default_factory=list)
  sizes: List[str] = Field(default_factory=list)
  style_variants: Optional[StyleVariants] = None

  @property
  def required_props(self) -> List[Prop]:
    return [p for p in self.props if p.required and not p.is_rest]

  @property
  def optional_props(self) -> List[Prop]:
    return [p for p in self.props if not p.required and not p.is_rest]

  @property
  def rest_prop(self) -> Optional[Prop]:
    return next((p for p in self.props if p.is_rest), None)

  @property
  def slot_props(self) -> List[str]:
    return [slot.prop for slot in self.slots]

  def to_json(self) -> str:
    """
    Serializes the IR for the debug dump.

    Returns:
        str: JSON with camelCase keys and 2-space indentation.
    """
    return self.model_dump_json(by_alias=True, indent=2)
