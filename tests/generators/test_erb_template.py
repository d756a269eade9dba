"""
Tests for the ERB template generator.

Verifies each stage of template composition:
1. Controller binding and qualified actions (Card example).
2. Warning comments.
3. Interactive class switching and button labels.
4. Icon parameterization.
5. Slots, children and component references.
6. JavaScript normalization and the enhanced pass.
"""

from v0_rails.core.model import IR, Prop
from v0_rails.generators.erb_template import (
  CONTROLLER_WARNING,
  controller_identifier,
  generate_erb_template,
  has_children_placeholder,
)


def make_ir(html: str, **kwargs) -> IR:
  kwargs.setdefault("name", "Widget")
  kwargs.setdefault("snake_case_name", "widget")
  return IR(html=html, **kwargs)


def test_card_template(build_ir, fixture_source):
  ir = build_ir(fixture_source("Card.jsx"), path="Card.jsx")

  assert generate_erb_template(ir) == (
    '<div data-controller="card" class="max-w-sm rounded overflow-hidden shadow-lg">'
    '<% if @imageUrl %><img class="w-full" src="<%= @imageUrl %>" alt="<%= @title %>" /><% end %>'
    '<div class="px-6 py-4"><div class="font-bold text-xl mb-2"><%= @title %></div>'
    '<p class="text-gray-700 text-base"><%= @description %></p></div>'
    '<div class="px-6 pt-4 pb-2">'
    '<button class="bg-blue-500 hover:bg-blue-700 text-white font-bold py-2 px-4 rounded" '
    'data-action="click->card#onClick">'
    "<%= @buttonText || 'Learn More' %></button></div></div>\n"
  )


def test_todo_list_template(build_ir, fixture_source):
  ir = build_ir(fixture_source("TodoList.jsx"), path="TodoList.jsx")
  template = generate_erb_template(ir)
  lines = template.splitlines()

  assert lines[0] == "<%# WARNING: Component uses React hook: useState. This may require manual conversion. %>"
  assert lines[1].startswith("<%# WARNING: Component uses state or effects")
  assert lines[2].startswith('<div data-controller="todo-list" class=')
  assert 'data-action="change->todo-list#setNewTodo keypress->todo-list#keypressHandler"' in template
  assert "<% todos.each do |todo| %>" in template
  assert "<% if todos.length == 0 %>" in template
  assert '<%= "checked" if todo.completed %>' in template
  assert "===" not in template


def test_warning_comment_cannot_close_early():
  ir = make_ir("<div>x</div>", warnings=["uses %> here"])

  assert generate_erb_template(ir).splitlines()[0] == "<%# WARNING: uses % > here %>"


def test_interactive_button(build_ir):
  ir = build_ir('const Button = ({ onClick }) => <button className="btn btn-primary" onClick={onClick}>Save</button>;')

  assert generate_erb_template(ir) == (
    '<button data-controller="button" class="<%= class_names %>" data-action="click->button#onClick">'
    '<%= content || "Save" %></button>\n'
  )


def test_icon_parameterization(build_ir):
  source = (
    'const StarIcon = () => <svg viewBox="0 0 24 24" width="24" height="24" fill="none" '
    'stroke="currentColor"><path d="M0 0" /></svg>;'
  )
  lines = generate_erb_template(build_ir(source)).splitlines()

  assert lines[0] == (
    '<%# Icon component for StarIcon. Usage: render Ui::StarIconComponent.new(size: "24", color: "red") %>'
  )
  assert lines[1] == (
    '<svg viewBox="0 0 24 24" width="<%= size || "24" %>" height="<%= size || "24" %>" fill="none" '
    'stroke="<%= color || "currentColor" %>" class="<%= html_class %>"><path d="M0 0" /></svg>'
  )


def test_missing_root_tag_gets_controller_warning():
  ir = make_ir("<%= @label %>", needs_stimulus=True)

  assert generate_erb_template(ir) == f"{CONTROLLER_WARNING}\n<%= @label %>\n"


def test_children_become_content(build_ir):
  ir = build_ir('const Box = ({ children }) => <div className="box">{children}</div>;')

  assert has_children_placeholder(ir.html) is True
  assert generate_erb_template(ir) == '<div class="box"><%= content %></div>\n'


def test_slots(build_ir):
  source = "const Panel = ({ header, actions }) => <section><header>{header}</header><footer>{actions}</footer></section>;"
  ir = build_ir(source, detect_slots=True)

  assert generate_erb_template(ir) == (
    "<section><header><%= header if header? %></header>"
    "<footer><% actions.each do |action| %><%= action %><% end %></footer></section>\n"
  )


def test_component_references(build_ir):
  source = (
    'const Row = ({ user }) => <div><Avatar src={user.avatar} size="sm" />'
    '<Badge className="ml-2" tone={user.tone}>New</Badge></div>;'
  )
  ir = build_ir(source)

  assert generate_erb_template(ir, namespace="admin/forms") == (
    '<div><%= render Admin::Forms::AvatarComponent.new(src: @user.avatar, size: "sm") %>'
    '<%= render Admin::Forms::BadgeComponent.new(html_class: "ml-2", tone: @user.tone) do %>New<% end %></div>\n'
  )


def test_component_reference_argument_forms():
  ir = make_ir(
    '<card data-v0-component="Card" title="Hi <%= name %>!" data-id="7" open <%= render_attributes(@rest) %>></card>',
    component_references=["Card"],
  )

  assert generate_erb_template(ir) == (
    '<%= render Ui::CardComponent.new(title: "Hi #{name}!", "data-id": "7", open: true, **@rest) %>\n'
  )


def test_nested_component_references():
  ir = make_ir(
    '<list data-v0-component="List"><list data-v0-component="List"><b>x</b></list></list>',
    component_references=["List"],
  )

  assert generate_erb_template(ir) == (
    "<%= render Ui::ListComponent.new do %><%= render Ui::ListComponent.new do %><b>x</b><% end %><% end %>\n"
  )


def test_directive_code_is_normalized():
  ir = make_ir('<p title="<%= a === b %>"><%= user?.name ?? "none" %></p>')

  assert generate_erb_template(ir) == '<p title="<%= a == b %>"><%= user&.name || "none" %></p>\n'


def test_enhanced_pass():
  ir = make_ir(
    '<p>{props.title} {count} {other}</p><%= "Total: " + @count %><%= @props.name %>',
    props=[Prop(name="count")],
  )

  assert generate_erb_template(ir, enhanced=True) == (
    '<p><%= @title %> <%= @count %> {other}</p><%= "Total: #{@count}" %><%= @props[:name] %>\n'
  )
  assert "{count}" in generate_erb_template(ir)


def test_controller_identifier():
  assert controller_identifier(make_ir("<div />", name="TodoList")) == "todo-list"
