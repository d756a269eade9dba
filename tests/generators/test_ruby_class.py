"""
Tests for the Ruby component class generator.
"""

import re

from v0_rails.core.model import Prop
from v0_rails.enums import PropType
from v0_rails.generators.component_test import generate_component_test
from v0_rails.generators.helper_module import generate_helper_module
from v0_rails.generators.ruby_class import (
  RubyClassGenerator,
  extra_parameters,
  generate_ruby_class,
  ruby_default,
  uses_render_attributes,
)

CARD_CLASS = """\
# frozen_string_literal: true

module Ui
  class CardComponent < ViewComponent::Base
    attr_reader :title, :description, :imageUrl, :buttonText, :onClick, :html_class

    def initialize(title:, description:, imageUrl:, buttonText:, onClick:, html_class: nil)
      @title = title
      @description = description
      @imageUrl = imageUrl
      @buttonText = buttonText
      @onClick = onClick
      @html_class = html_class
    end
  end
end
"""

BUTTON_SOURCE = """
const Button = ({ label, disabled = false, ...rest }) => (
  <button className="btn btn-primary btn-sm" disabled={disabled} {...rest}>{label}</button>
);
"""


def test_card_class(build_ir, fixture_source):
  ir = build_ir(fixture_source("Card.jsx"), path="Card.jsx")

  assert generate_ruby_class(ir) == CARD_CLASS


def test_todo_list_class(build_ir, fixture_source):
  ir = build_ir(fixture_source("TodoList.jsx"), path="TodoList.jsx")
  text = generate_ruby_class(ir)
  lines = text.splitlines()

  assert lines[0] == "# WARNING: Component uses React hook: useState. This may require manual conversion."
  assert lines[1].startswith("# WARNING: Component uses state or effects")
  assert lines[2] == ""
  assert lines[3] == "# frozen_string_literal: true"
  assert '    def initialize(initialTodos: [], title: "Todo List", html_class: nil)' in lines
  assert "    def self.build_collection(collection, **options)" in lines
  assert "      new(initialTodos: collection.to_a, **options)" in lines


def test_interactive_class(build_ir):
  text = generate_ruby_class(build_ir(BUTTON_SOURCE))
  lines = text.splitlines()

  assert "    # Markup passed in the render block is available as `content`." in lines
  assert "    attr_reader :label, :disabled, :rest, :variant, :size, :html_class" in lines
  assert "    def initialize(label:, disabled: false, variant: nil, size: nil, html_class: nil, **rest)" in lines
  assert "      @rest = rest" in lines
  assert "    def render_attributes(attrs)" in lines
  assert "ERB::Util.html_escape(value)" in text
  assert '      "btn"' in lines
  assert '      when "primary" then "btn-primary"' in lines
  assert '      when "sm" then "btn-sm"' in lines
  assert "    def class_names" in lines
  assert '      @type || "button"' in lines
  assert text.endswith("    end\n  end\nend\n")


def test_namespace_and_slots(build_ir):
  source = "const Panel = ({ header, actions, title }) => <section><header>{header}</header><h2>{title}</h2><footer>{actions}</footer></section>;"
  ir = build_ir(source, detect_slots=True)

  assert RubyClassGenerator("admin::forms").generate(ir) == """\
# frozen_string_literal: true

module Admin
  module Forms
    class PanelComponent < ViewComponent::Base
      renders_one :header
      renders_many :actions

      attr_reader :title, :html_class

      def initialize(title:, html_class: nil)
        @title = title
        @html_class = html_class
      end
    end
  end
end
"""


def test_children_comment(build_ir):
  ir = build_ir("const Box = ({ children }) => <div>{children}</div>;")

  assert "    # Markup passed in the render block is available as `content`." in generate_ruby_class(ir)


def test_non_literal_default(build_ir):
  ir = build_ir("const Tag = ({ label = defaultLabel() }) => <span>{label}</span>;")
  text = generate_ruby_class(ir)

  assert text.startswith(
    "# WARNING: Prop 'label' has a non-literal default value: defaultLabel(). It defaults to nil in Ruby.\n"
  )
  assert "    def initialize(label: nil, html_class: nil)" in text


def test_icon_parameters(build_ir):
  ir = build_ir('const StarIcon = () => <svg viewBox="0 0 24 24"><path d="M0 0" /></svg>;')

  assert extra_parameters(ir) == ["size", "color", "html_class"]
  assert "    def initialize(size: nil, color: nil, html_class: nil)" in generate_ruby_class(ir)


def test_spread_attribute_needs_renderer(build_ir):
  ir = build_ir("const Box = ({ attrs }) => <div {...attrs}>x</div>;")

  assert ir.rest_prop is None
  assert uses_render_attributes(ir) is True


def test_ruby_default():
  assert ruby_default(Prop(name="a")) == "nil"
  assert ruby_default(Prop(name="a", type=PropType.NUMBER, required=False, default_value="3")) == "3"
  assert ruby_default(Prop(name="a", type=PropType.ANY, required=False, default_value="compute()")) == "nil"
  assert ruby_default(Prop(name="a", type=PropType.ANY, required=False, default_value="nil")) == "nil"


def test_lowercase_component_name_becomes_constant(build_ir):
  ir = build_ir("const card = ({ title }) => <div>{title}</div>;", path="card.jsx")

  assert ir.name == "card"
  assert "  class CardComponent < ViewComponent::Base" in generate_ruby_class(ir).splitlines()
  assert "  module CardHelper" in generate_helper_module(ir).splitlines()
  assert "render_inline(Ui::CardComponent.new(title: nil))" in generate_component_test(ir)


def test_collection_factory_uses_initialize_keyword(build_ir):
  ir = build_ir("const List = ({ items, title }) => <ul>{items.map(item => <li>{item}</li>)}</ul>;")
  text = generate_ruby_class(ir)

  keywords = re.search(r"def initialize\((.*)\)", text).group(1)
  factory = re.search(r"new\((\w+): collection\.to_a, \*\*options\)", text)
  assert factory is not None
  assert factory.group(1) == "items"
  assert "items:" in keywords.split(", ")
