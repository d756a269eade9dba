"""
Tests for the Markup Transformer and Expression Rewriter.

Verifies:
1. Guards render an if-directive without an else.
2. Ternaries render if/else/end around transformed branches.
3. List mapping renders an each loop with the loop variable bound.
4. Attribute translation (class, for, data-action, booleans, spreads).
5. Custom component tags are marked and recorded as references.
6. Unsupported constructs become TODO placeholders plus warnings.
"""

from v0_rails.core.jsx.parser import NodeBuilder, SourceParser, outermost_markup
from v0_rails.core.markup.transformer import MarkupTransformer, resolve_tag


def render(source: str, props=()):
  tree = SourceParser().parse(source)
  root = NodeBuilder(tree).markup(next(outermost_markup(tree.root)))
  return MarkupTransformer(props).transform(root)


def test_logical_guard_has_no_else():
  result = render("const a = <div>{show && <p>X</p>}</div>;", props=["show"])

  assert result.html == "<div><% if @show %><p>X</p><% end %></div>"
  assert "<% else %>" not in result.html


def test_conditional_branches():
  result = render("const a = <div>{ok ? <span>Yes</span> : <span>No</span>}</div>;", props=["ok"])

  assert result.html == "<div><% if @ok %><span>Yes</span><% else %><span>No</span><% end %></div>"


def test_conditional_with_null_alternate_omits_else():
  result = render("const a = <div>{ok ? <span>Yes</span> : null}</div>;", props=["ok"])

  assert result.html == "<div><% if @ok %><span>Yes</span><% end %></div>"


def test_map_renders_each_loop():
  source = "const a = <ul>{items.map(item => <li key={item.id}>{item.name}</li>)}</ul>;"
  result = render(source, props=["items"])

  assert result.html == "<ul><% @items.each do |item| %><li><%= item.name %></li><% end %></ul>"


def test_map_with_index_and_shadowing():
  source = "const a = <ol>{items.map((title, i) => <li>{i}: {title}</li>)}</ol>;"
  result = render(source, props=["items", "title"])

  assert result.html == "<ol><% @items.each_with_index do |title, i| %><li><%= i %>: <%= title %></li><% end %></ol>"


def test_block_bodied_map_is_placeholder():
  source = "const a = <ul>{items.map(item => { return <li>{item}</li>; })}</ul>;"
  result = render(source, props=["items"])

  assert "<!-- TODO: Block-bodied callback" in result.html
  assert any("Block-bodied callback" in w for w in result.warnings)


def test_expressions_substitute_props_only():
  result = render("const a = <p>{count + other.count} {format(count)}</p>;", props=["count"])

  assert result.html == "<p><%= @count + other.count %> <%= format(@count) %></p>"


def test_object_shorthand_expands_prop_reference():
  result = render("const a = <p>{format({ title, size: 2 })}</p>;", props=["title"])

  assert result.html == "<p><%= format({ title: @title, size: 2 }) %></p>"


def test_string_literal_child_is_text():
  result = render("const a = <p>{'Tom & Jerry'}</p>;")

  assert result.html == "<p>Tom &amp; Jerry</p>"


def test_attribute_translation():
  source = (
    'const a = <label className="field" htmlFor={id} tabIndex={0} onClick={open} '
    "onMouseEnter={() => highlight(id)}>x</label>;"
  )
  result = render(source, props=["id"])

  assert result.html == (
    '<label class="field" for="<%= @id %>" tabindex="0" '
    'data-action="click->open mouseenter->highlight">x</label>'
  )


def test_svg_attributes_keep_case_or_kebab():
  result = render('const a = <svg viewBox="0 0 24 24" strokeWidth={2}><path d="M0" /></svg>;')

  assert result.html == '<svg viewBox="0 0 24 24" stroke-width="2"><path d="M0" /></svg>'


def test_boolean_attribute_expression():
  result = render("const a = <button disabled={busy}>Save</button>;", props=["busy"])

  assert result.html == '<button <%= "disabled" if @busy %>>Save</button>'


def test_spread_attribute():
  result = render("const a = <div {...rest}>x</div>;", props=["rest"])

  assert result.html == "<div <%= render_attributes(@rest) %>>x</div>"


def test_key_and_ref_skipped():
  result = render("const a = <li key={id} ref={node}>x</li>;")

  assert result.html == "<li>x</li>"


def test_custom_component_reference():
  result = render('const a = <div><Avatar src={url} size="sm" /><Icons.Star /></div>;', props=["url"])

  assert result.html == (
    '<div><avatar data-v0-component="Avatar" src="<%= @url %>" size="sm" />'
    '<star data-v0-component="Star" /></div>'
  )
  assert result.references == ("Avatar", "Star")


def test_resolve_tag():
  assert resolve_tag("div") == ("div", "")
  assert resolve_tag("Button") == ("button", "Button")
  assert resolve_tag("UI.Card") == ("card", "Card")


def test_object_literal_attribute_is_placeholder():
  result = render("const a = <div style={{ color: 'red' }}>x</div>;")

  assert result.html.startswith("<!-- TODO: Unsupported attribute value for style: object literal --><div>")
  assert result.warnings == ("Unsupported attribute value for style: object literal",)


def test_whitespace_between_children():
  source = """
  const a = (
    <p>
      {count} of {total} completed
    </p>
  );
  """
  result = render(source, props=["count", "total"])

  assert result.html == "<p><%= @count %> of <%= @total %> completed</p>"
