"""
IR Generator.

Normalizes a ``ComponentInfo`` into an ``IR``. Generation never raises: transformer
failures and missing markup become a placeholder ``html`` plus a warning.
"""

from typing import Iterable, List, Sequence

from v0_rails.analysis.slots import detect_slots
from v0_rails.analysis.styles import classify
from v0_rails.core.escape_hatch import EscapeHatch
from v0_rails.core.markup.transformer import MarkupTransformer
from v0_rails.core.model import IR, ComponentInfo, EventBinding, Prop
from v0_rails.utils.console import log_debug
from v0_rails.utils.strings import snake_case

NO_MARKUP_WARNING = "No JSX elements found in component"
STATE_WARNING = "Component uses state or effects, which may require manual Stimulus controller implementation"


class IRGenerator:
  """
  Builds the IR of one component.

  Args:
      detect_slots (bool): Map markup-valued props to ViewComponent slots.
  """

  def __init__(self, detect_slots: bool = False):
    self.detect_slots = detect_slots

  def generate(self, info: ComponentInfo) -> IR:
    """
    Produces the IR deterministically from extraction output.

    Args:
        info (ComponentInfo): Extraction output.

    Returns:
        IR: The normalized component. ``html`` is never empty.
    """
    warnings: List[str] = list(info.warnings)
    props = normalize_props(info.props)
    events = normalize_events(info.events)
    root = info.markup_nodes[0] if info.markup_nodes else None
    references: List[str] = []

    if root is None:
      html = EscapeHatch.fallback_markup(NO_MARKUP_WARNING)
      warnings.append(NO_MARKUP_WARNING)
    else:
      try:
        rendered = MarkupTransformer(p.name for p in props).transform(root)
        html = rendered.html
        warnings.extend(rendered.warnings)
        references = _unique(rendered.references)
      except Exception as e:
        log_debug(f"Transformer failure in {info.original_path}: {e!r}")
        html = EscapeHatch.fallback_markup(f"Failed to convert JSX to HTML: {e}")
        warnings.append(f"Failed to transform JSX to HTML: {e}")
      if not html.strip():
        html = EscapeHatch.fallback_markup("Component renders no markup")
        warnings.append("Component renders no markup")

    if info.has_state_or_effects:
      warnings.append(STATE_WARNING)

    shape = classify(info.name, root)
    slots = detect_slots(props, root) if self.detect_slots else []
    svg_content = html if shape.is_icon and html.lstrip().startswith("<svg") else None

    return IR(
      name=info.name,
      snake_case_name=snake_case(info.name),
      props=props,
      events=events,
      html=html,
      warnings=warnings,
      needs_stimulus=bool(events) or info.has_state_or_effects,
      original_path=info.original_path,
      component_references=references,
      slots=slots,
      is_interactive=shape.is_interactive,
      is_icon=shape.is_icon,
      svg_content=svg_content,
      variants=shape.variants,
      sizes=shape.sizes,
      style_variants=shape.style_variants,
    )


def normalize_props(props: Sequence[Prop]) -> List[Prop]:
  """Keeps declaration order, moving the rest prop (at most one) last."""
  regular = [p for p in props if not p.is_rest]
  rest = [p for p in props if p.is_rest][:1]
  return regular + rest


def normalize_events(events: Iterable[EventBinding]) -> List[EventBinding]:
  """Drops repeated bindings of the same handler to the same event."""
  seen = set()
  result = []
  for event in events:
    key = (event.name, event.handler)
    if key in seen:
      continue
    seen.add(key)
    result.append(event)
  return result


def _unique(names: Iterable[str]) -> List[str]:
  return list(dict.fromkeys(names))
