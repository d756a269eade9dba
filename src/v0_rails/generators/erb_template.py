"""
ERB Template Generator.

Composes the template from ``IR.html`` in a fixed order:

1. warning comments,
2. icon SVG parameterization (icon components),
3. variant/size class switching and button content (interactive components),
4. ``data-controller`` on the root tag and qualified ``data-action`` bindings,
5. slot rendering,
6. children placeholder -> ``content``,
7. JavaScript -> Ruby normalization of directive code,
8. optional enhanced conversion,
9. component references -> ``render`` calls,
10. token-stream formatting.

Every stage edits the ERB token stream rather than the raw string.
"""

import html
import re
from typing import Callable, List, Optional

from v0_rails.core.markup.transformer import COMPONENT_MARKER
from v0_rails.core.model import IR
from v0_rails.enums import SlotKind
from v0_rails.generators import js_to_ruby
from v0_rails.generators.erb_formatter import ErbFormatter
from v0_rails.generators.erb_tokens import Tag, Token, TokenKind, parse_tag, render_tokens, tokenize
from v0_rails.utils.strings import kebab_case, pascal_case, ruby_constant_path, ruby_string

CONTROLLER_WARNING = "<%# WARNING: Could not add Stimulus controller to root element %>"
CHILDREN_PLACEHOLDERS = frozenset({"@children", "children"})

_EMBEDDED_OUTPUT = re.compile(r"<%(=|#)?\s*(.*?)\s*-?%>", re.DOTALL)
_WHOLE_OUTPUT = re.compile(r"\s*<%=\s*(.*?)\s*-?%>\s*", re.DOTALL)
_PROPS_BRACES = re.compile(r"\{\s*props\.([A-Za-z_]\w*)\s*\}")
_BARE_BRACES = re.compile(r"\{\s*([A-Za-z_]\w*)\s*\}")
_PROPS_MEMBER = re.compile(r"@props\.([A-Za-z_]\w*)")


def generate_erb_template(ir: IR, namespace: str = "Ui", enhanced: bool = False) -> str:
  """
  Builds the ERB template of a component.

  Args:
      ir (IR): The component.
      namespace (str): Ruby namespace of referenced components.
      enhanced (bool): Run the enhanced conversion pass.

  Returns:
      str: The formatted template.
  """
  template = ir.html
  if ir.warnings:
    comments = "\n".join(f"<%# WARNING: {_comment_text(w)} %>" for w in ir.warnings)
    template = f"{comments}\n\n{template}"
  if ir.is_icon and ir.svg_content:
    template = parameterize_icon(ir, template, namespace)
  if ir.is_interactive:
    template = apply_interactive_classes(template)
  if ir.needs_stimulus or ir.is_interactive:
    template = bind_controller(ir, template)
  if ir.slots:
    template = render_slots(ir, template)
  template = substitute_children(template)
  template = map_directive_code(template, js_to_ruby.convert)
  if enhanced:
    template = enhance(ir, template)
  if ir.component_references:
    template = render_component_references(template, namespace)
  return ErbFormatter().format(template)


def controller_identifier(ir: IR) -> str:
  """Stimulus identifier of the component (``TodoList`` -> ``todo-list``)."""
  return kebab_case(ir.name)


def _comment_text(text: str) -> str:
  return text.replace("%>", "% >")


def _first_open_tag(tokens: List[Token], name: Optional[str] = None) -> Optional[int]:
  for index, token in enumerate(tokens):
    if token.kind == TokenKind.OPEN_TAG and (name is None or parse_tag(token.text).name == name):
      return index
  return None


def _replace_tag(tokens: List[Token], index: int, tag: Tag) -> None:
  tokens[index] = Token(TokenKind.OPEN_TAG, tag.render())


# --- Stage 2: icons ---


def parameterize_icon(ir: IR, template: str, namespace: str) -> str:
  """
  Makes the root SVG's class, size and colors configurable.

  Args:
      ir (IR): Icon component.
      template (str): Current template.
      namespace (str): Ruby namespace for the usage comment.

  Returns:
      str: Template with a usage comment and a parameterized ``svg`` tag.
  """
  tokens = tokenize(template)
  index = _first_open_tag(tokens, "svg")
  if index is None:
    return template
  tag = parse_tag(tokens[index].text)

  css = tag.get("class")
  if css is not None and css.value:
    css.value = f"{css.value} <%= html_class %>"
  else:
    tag.set("class", "<%= html_class %>")
  for dimension in ("width", "height"):
    attr = tag.get(dimension)
    if attr is not None and attr.value and "<%" not in attr.value:
      attr.value = f"<%= size || {ruby_string(attr.value)} %>"
  for paint, fallback in (("stroke", "currentColor"), ("fill", "currentColor")):
    attr = tag.get(paint)
    if attr is not None and attr.value and attr.value != "none" and "<%" not in attr.value:
      attr.value = f"<%= color || {ruby_string(attr.value or fallback)} %>"
  _replace_tag(tokens, index, tag)

  component = f"{ruby_constant_path(namespace)}::{pascal_case(ir.name)}Component"
  usage = f'<%# Icon component for {ir.name}. Usage: render {component}.new(size: "24", color: "red") %>'
  return f"{usage}\n{render_tokens(tokens)}"


# --- Stage 3: interactive components ---


def apply_interactive_classes(template: str) -> str:
  """
  Replaces the root class list with ``class_names`` and makes the first button or
  link label overridable by the component content.
  """
  tokens = tokenize(template)
  index = _first_open_tag(tokens)
  if index is None:
    return template
  tag = parse_tag(tokens[index].text)
  tag.set("class", "<%= class_names %>")
  _replace_tag(tokens, index, tag)

  for i in range(len(tokens) - 2):
    opening, text, closing = tokens[i], tokens[i + 1], tokens[i + 2]
    if opening.kind != TokenKind.OPEN_TAG or text.kind != TokenKind.TEXT or closing.kind != TokenKind.CLOSE_TAG:
      continue
    name = parse_tag(opening.text).name
    if name in ("button", "a") and parse_tag(closing.text).name == name and text.text.strip():
      label = html.unescape(" ".join(text.text.split()))
      tokens[i + 1] = Token(TokenKind.ERB_OUTPUT, f"<%= content || {ruby_string(label)} %>")
      break
  return render_tokens(tokens)


# --- Stage 4: behavior binding ---


def bind_controller(ir: IR, template: str) -> str:
  """
  Adds ``data-controller`` to the root tag and qualifies every action binding.

  Args:
      ir (IR): The component.
      template (str): Current template.

  Returns:
      str: The bound template, or the template prefixed with a warning comment
      when there is no tag to bind.
  """
  identifier = controller_identifier(ir)
  tokens = tokenize(template)
  root = _first_open_tag(tokens)
  if root is None:
    return f"{CONTROLLER_WARNING}\n{template}"

  for index, token in enumerate(tokens):
    if token.kind != TokenKind.OPEN_TAG:
      continue
    tag = parse_tag(token.text)
    action = tag.get("data-action")
    changed = False
    if action is not None and action.value:
      action.value = " ".join(_qualify(binding, identifier) for binding in action.value.split())
      changed = True
    if index == root:
      existing = tag.get("data-controller")
      if existing is not None and existing.value:
        if identifier not in existing.value.split():
          existing.value = f"{existing.value} {identifier}"
      else:
        tag.insert(0, "data-controller", identifier)
      changed = True
    if changed:
      _replace_tag(tokens, index, tag)
  return render_tokens(tokens)


def _qualify(binding: str, identifier: str) -> str:
  if "->" not in binding or "#" in binding:
    return binding
  event, handler = binding.split("->", 1)
  return f"{event}->{identifier}#{handler}"


# --- Stages 5 and 6: slots and children ---


def render_slots(ir: IR, template: str) -> str:
  """Replaces outputs of slot props with ViewComponent slot renders."""
  slots = {f"@{slot.prop}": slot for slot in ir.slots}
  tokens = tokenize(template)
  for index, token in enumerate(tokens):
    if token.kind != TokenKind.ERB_OUTPUT or token.code not in slots:
      continue
    slot = slots[token.code]
    if slot.kind == SlotKind.RENDERS_MANY:
      item = slot.name[:-1] if slot.name.endswith("s") and len(slot.name) > 1 else "item"
      text = f"<% {slot.name}.each do |{item}| %><%= {item} %><% end %>"
      tokens[index] = Token(TokenKind.ERB_CODE, text)
    else:
      tokens[index] = Token(TokenKind.ERB_OUTPUT, f"<%= {slot.name} if {slot.name}? %>")
  return render_tokens(tokens)


def substitute_children(template: str) -> str:
  """``<%= @children %>`` -> ``<%= content %>``."""
  tokens = tokenize(template)
  for index, token in enumerate(tokens):
    if token.kind == TokenKind.ERB_OUTPUT and token.code in CHILDREN_PLACEHOLDERS:
      tokens[index] = Token(TokenKind.ERB_OUTPUT, "<%= content %>")
  return render_tokens(tokens)


def has_children_placeholder(html_text: str) -> bool:
  """True if the markup outputs the ``children`` prop."""
  return any(
    token.kind == TokenKind.ERB_OUTPUT and token.code in CHILDREN_PLACEHOLDERS for token in tokenize(html_text)
  )


# --- Stage 7: directive code ---


def map_directive_code(template: str, transform: Callable[[str], str]) -> str:
  """
  Applies ``transform`` to the code of every directive, including directives
  embedded in tag attributes. Comments are left untouched.
  """

  def rewrite(marker: str, code: str) -> str:
    if marker == "#":
      return f"<%# {code} %>"
    return f"<%{marker} {transform(code)} %>"

  tokens = tokenize(template)
  for index, token in enumerate(tokens):
    if token.is_directive:
      marker = "=" if token.kind == TokenKind.ERB_OUTPUT else ""
      tokens[index] = Token(token.kind, rewrite(marker, token.code))
    elif token.kind == TokenKind.OPEN_TAG and "<%" in token.text:
      tag = parse_tag(token.text)
      for attr in tag.attributes:
        if attr.is_directive:
          attr.name = _EMBEDDED_OUTPUT.sub(lambda m: rewrite(m.group(1) or "", m.group(2)), attr.name)
        elif attr.value is not None and "<%" in attr.value:
          attr.value = _EMBEDDED_OUTPUT.sub(lambda m: rewrite(m.group(1) or "", m.group(2)), attr.value)
      _replace_tag(tokens, index, tag)
  return render_tokens(tokens)


# --- Stage 8: enhanced conversion ---


def enhance(ir: IR, template: str) -> str:
  """
  Converts leftover prop braces in text to output directives, member access on a
  whole-props hash to key lookups, and string concatenation to interpolation.
  """
  prop_names = {prop.name for prop in ir.props}

  def braces(match: re.Match) -> str:
    name = match.group(1)
    return f"<%= @{name} %>" if name in prop_names else match.group(0)

  tokens = tokenize(template)
  for index, token in enumerate(tokens):
    if token.kind == TokenKind.TEXT:
      text = _PROPS_BRACES.sub(r"<%= @\1 %>", token.text)
      tokens[index] = Token(TokenKind.TEXT, _BARE_BRACES.sub(braces, text))
  template = render_tokens(tokens)

  def rewrite(code: str) -> str:
    return js_to_ruby.concatenation_to_interpolation(_PROPS_MEMBER.sub(r"@props[:\1]", code))

  return map_directive_code(template, rewrite)


# --- Stage 9: component references ---


def render_component_references(template: str, namespace: str) -> str:
  """
  Replaces marked custom component tags with ``render`` calls.

  Args:
      template (str): Current template.
      namespace (str): Ruby namespace of the referenced components.

  Returns:
      str: Template with ``<%= render Ns::NameComponent.new(...) %>`` calls; tags
      with children render them in a block.
  """
  return render_tokens(_render_references(tokenize(template), ruby_constant_path(namespace)))


def _render_references(tokens: List[Token], namespace: str) -> List[Token]:
  result: List[Token] = []
  index = 0
  while index < len(tokens):
    token = tokens[index]
    tag = parse_tag(token.text) if token.kind == TokenKind.OPEN_TAG else None
    marker = tag.get(COMPONENT_MARKER) if tag is not None else None
    if tag is None or marker is None:
      result.append(token)
      index += 1
      continue

    tag.remove(COMPONENT_MARKER)
    arguments = _ruby_arguments(tag)
    call = f"render {namespace}::{marker.value}Component.new" + (f"({arguments})" if arguments else "")
    if tag.self_closing:
      result.append(Token(TokenKind.ERB_OUTPUT, f"<%= {call} %>"))
      index += 1
      continue

    end = _matching_close(tokens, index, tag.name)
    inner = _render_references(tokens[index + 1 : end], namespace)
    if render_tokens(inner).strip():
      result.append(Token(TokenKind.ERB_OUTPUT, f"<%= {call} do %>"))
      result.extend(inner)
      result.append(Token(TokenKind.ERB_CODE, "<% end %>"))
    else:
      result.append(Token(TokenKind.ERB_OUTPUT, f"<%= {call} %>"))
    index = end + 1
  return result


def _matching_close(tokens: List[Token], start: int, name: str) -> int:
  depth = 0
  for index in range(start, len(tokens)):
    token = tokens[index]
    if token.kind == TokenKind.OPEN_TAG:
      tag = parse_tag(token.text)
      if tag.name == name and not tag.self_closing:
        depth += 1
    elif token.kind == TokenKind.CLOSE_TAG and parse_tag(token.text).name == name:
      depth -= 1
      if depth == 0:
        return index
  return len(tokens)


def _ruby_arguments(tag: Tag) -> str:
  arguments = []
  for attr in tag.attributes:
    if attr.is_directive:
      match = re.fullmatch(r"<%=\s*render_attributes\((.*)\)\s*%>", attr.name, re.DOTALL)
      if match:
        arguments.append(f"**{match.group(1).strip()}")
      continue
    name = "html_class" if attr.name in ("class", "className") else attr.name
    key = f"{name}:" if re.fullmatch(r"[A-Za-z_]\w*", name) else f"{ruby_string(name)}:"
    arguments.append(f"{key} {_ruby_value(attr.value)}")
  return ", ".join(arguments)


def _ruby_value(value: Optional[str]) -> str:
  if value is None:
    return "true"
  whole = _WHOLE_OUTPUT.fullmatch(value)
  if whole and "<%" not in whole.group(1):
    return whole.group(1)
  if "<%" not in value:
    return ruby_string(html.unescape(value))
  pieces = []
  cursor = 0
  for match in _EMBEDDED_OUTPUT.finditer(value):
    pieces.append(ruby_string(html.unescape(value[cursor : match.start()]))[1:-1])
    pieces.append("#{" + match.group(2) + "}")
    cursor = match.end()
  pieces.append(ruby_string(html.unescape(value[cursor:]))[1:-1])
  return '"' + "".join(pieces) + '"'
