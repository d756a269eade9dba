"""
Stimulus Controller Generator.

One stub per distinct handler plus stubs suggested by the component name
(``button``, ``input``/``field``, ``dropdown``/``menu``).
"""

from typing import Dict, List

from v0_rails.core.model import IR, EventBinding
from v0_rails.generators.erb_template import controller_identifier

# name substrings -> (method, doc) stubs
CATEGORY_STUBS: List[tuple] = [
  (("button",), [("toggleActive", "Toggles the active state"), ("setLoading", "Shows or hides a loading state")]),
  (("input", "field"), [("clear", "Clears the input value"), ("setValidationState", "Marks the input valid or invalid")]),
  (("dropdown", "menu"), [("toggle", "Toggles the menu"), ("open", "Opens the menu"), ("close", "Closes the menu")]),
]


def unique_handlers(events: List[EventBinding]) -> Dict[str, List[EventBinding]]:
  """Groups bindings by handler, keeping first-seen order."""
  handlers: Dict[str, List[EventBinding]] = {}
  for event in events:
    handlers.setdefault(event.handler, []).append(event)
  return handlers


def generate_stimulus_controller(ir: IR) -> str:
  """
  Builds ``<snake>_controller.js``.

  Args:
      ir (IR): The component.

  Returns:
      str: An ES module exporting the controller class.
  """
  identifier = controller_identifier(ir)
  methods: List[List[str]] = [
    ["  connect() {", f'    console.log("{identifier} controller connected")', "  }"],
    ["  disconnect() {", f'    console.log("{identifier} controller disconnected")', "  }"],
  ]

  handlers = unique_handlers(ir.events)
  for handler, bindings in handlers.items():
    events = ", ".join(sorted({b.name for b in bindings}))
    params = bindings[0].params
    doc = [f"  // Handles {events} (data-action=\"{bindings[0].name}->{identifier}#{handler}\")"]
    if params:
      doc.append(f"  // Original callback parameters: {', '.join(params)}")
    methods.append(doc + [f"  {handler}(event) {{", "    // TODO: port the handler logic", "  }"])

  lowered = ir.name.lower()
  for keywords, stubs in CATEGORY_STUBS:
    if not any(k in lowered for k in keywords):
      continue
    for method, description in stubs:
      if method in handlers:
        continue
      methods.append([f"  // {description}", f"  {method}() {{", "  }"])

  lines = [
    'import { Controller } from "@hotwired/stimulus"',
    "",
    f"// Connects to data-controller=\"{identifier}\"",
    "export default class extends Controller {",
  ]
  for index, method in enumerate(methods):
    if index:
      lines.append("")
    lines.extend(method)
  lines.append("}")
  return "\n".join(lines) + "\n"
