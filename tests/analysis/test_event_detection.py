"""
Tests for event binding detection.

Verifies:
1. ``onClick={handleClick}`` -> ``click`` / ``handleClick``.
2. Inline closures calling a named function resolve to that function.
3. Other closures get the synthetic ``<event>Handler``.
4. Member handlers use their final segment.
"""


def test_identifier_handler(build_ir):
  ir = build_ir("const B = ({ handleClick }) => <button onClick={handleClick}>Go</button>;")

  assert len(ir.events) == 1
  assert ir.events[0].name == "click"
  assert ir.events[0].handler == "handleClick"
  assert ir.needs_stimulus is True


def test_inline_closure_calling_function(extract):
  info = extract("const I = () => <input onChange={(e) => setValue(e.target.value)} />;")

  event = info.events[0]
  assert event.name == "change"
  assert event.handler == "setValue"
  assert event.params == ["e"]


def test_inline_closure_without_call(extract):
  info = extract("const I = () => <input onKeyDown={(e) => e.key === 'Enter' && submit()} />;")

  event = info.events[0]
  assert event.name == "keydown"
  assert event.handler == "keydownHandler"


def test_member_handler(extract):
  info = extract("const B = ({ actions }) => <button onClick={actions.save}>Save</button>;")

  assert info.events[0].handler == "save"


def test_destructured_closure_param(extract):
  info = extract("const B = () => <button onClick={({ target }) => track(target)}>x</button>;")

  assert info.events[0].handler == "track"
  assert info.events[0].params == ["param"]


def test_events_found_on_nested_elements(extract, fixture_source):
  info = extract(fixture_source("TodoList.jsx"), path="TodoList.jsx")

  pairs = [(e.name, e.handler) for e in info.events]
  assert pairs == [
    ("change", "setNewTodo"),
    ("keypress", "keypressHandler"),
    ("click", "handleAddTodo"),
    ("change", "handleToggleTodo"),
    ("click", "handleDeleteTodo"),
  ]
