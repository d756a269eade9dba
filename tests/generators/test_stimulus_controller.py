"""
Tests for the Stimulus controller generator.
"""

from v0_rails.generators.stimulus_controller import generate_stimulus_controller, unique_handlers

CARD_CONTROLLER = """\
import { Controller } from "@hotwired/stimulus"

// Connects to data-controller="card"
export default class extends Controller {
  connect() {
    console.log("card controller connected")
  }

  disconnect() {
    console.log("card controller disconnected")
  }

  // Handles click (data-action="click->card#onClick")
  onClick(event) {
    // TODO: port the handler logic
  }
}
"""


def test_card_controller(build_ir, fixture_source):
  ir = build_ir(fixture_source("Card.jsx"), path="Card.jsx")

  assert generate_stimulus_controller(ir) == CARD_CONTROLLER


def test_todo_list_controller(build_ir, fixture_source):
  ir = build_ir(fixture_source("TodoList.jsx"), path="TodoList.jsx")
  text = generate_stimulus_controller(ir)

  assert '// Connects to data-controller="todo-list"' in text
  assert text.count("(event) {") == 5
  assert '  // Handles change (data-action="change->todo-list#setNewTodo")' in text
  assert "  // Original callback parameters: e" in text
  assert "  keypressHandler(event) {" in text


def test_shared_handler_is_declared_once(build_ir):
  ir = build_ir("const Field = ({ update }) => <div><input onChange={update} onBlur={update} /></div>;")
  text = generate_stimulus_controller(ir)

  assert list(unique_handlers(ir.events)) == ["update"]
  assert text.count("  update(event) {") == 1
  assert "  // Handles blur, change" in text


def test_category_stubs(build_ir):
  menu = generate_stimulus_controller(
    build_ir("const DropdownMenu = ({ toggle }) => <div><span onClick={toggle}>Menu</span></div>;")
  )
  assert "  toggle(event) {" in menu
  assert "  toggle() {" not in menu
  assert "  open() {" in menu
  assert "  close() {" in menu

  field = generate_stimulus_controller(build_ir("const SearchInput = () => <input type=\"search\" />;"))
  assert "  clear() {" in field
  assert "  setValidationState() {" in field
