"""
Tests for the tree-sitter adapter.

Verifies:
1. JSX whitespace rules for text children.
2. Typed markup nodes (elements, fragments, self-closing tags, attributes).
3. Typed expression variants and free identifier references.
4. TSX files parse with the TypeScript grammar.
"""

from v0_rails.core.jsx.nodes import (
  Attribute,
  Call,
  Conditional,
  Element,
  ExpressionContainer,
  ExpressionValue,
  Fragment,
  Identifier,
  InlineFunction,
  Logical,
  MarkupExpression,
  MemberAccess,
  SpreadAttribute,
  StringValue,
  Text,
)
from v0_rails.core.jsx.parser import NodeBuilder, SourceParser, clean_jsx_text, outermost_markup
from v0_rails.enums import SourceDialect


def _root(source: str, dialect: SourceDialect = SourceDialect.JSX):
  tree = SourceParser().parse(source, dialect=dialect)
  node = next(outermost_markup(tree.root))
  return NodeBuilder(tree).markup(node)


def _child_expression(source: str):
  root = _root(source)
  container = next(c for c in root.children if isinstance(c, ExpressionContainer))
  return container.expression


def test_clean_jsx_text_single_line_kept():
  assert clean_jsx_text("  Hello world ") == "  Hello world "


def test_clean_jsx_text_multiline_trimmed_and_joined():
  raw = "\n      Hello\n      world\n    "
  assert clean_jsx_text(raw) == "Hello world"


def test_clean_jsx_text_whitespace_only_dropped():
  assert clean_jsx_text("\n    \n  ") == ""


def test_clean_jsx_text_single_space_between_expressions():
  assert clean_jsx_text(" ") == " "
  assert clean_jsx_text("Hello \n  ") == "Hello"


def test_element_with_attributes():
  root = _root('const a = <img className="w-full" src={url} alt="x" />;')

  assert isinstance(root, Element)
  assert root.tag == "img"
  assert root.self_closing is True
  names = [attr.name for attr in root.attributes]
  assert names == ["className", "src", "alt"]
  assert isinstance(root.attributes[0].value, StringValue)
  assert root.attributes[0].value.value == "w-full"
  assert isinstance(root.attributes[1].value, ExpressionValue)
  assert isinstance(root.attributes[1].value.expression, Identifier)


def test_spread_and_boolean_attributes():
  root = _root("const a = <input disabled {...rest} />;")

  assert isinstance(root.attributes[0], Attribute)
  assert root.attributes[0].value is None
  assert isinstance(root.attributes[1], SpreadAttribute)
  assert root.attributes[1].argument.source == "rest"


def test_text_children_follow_whitespace_rules():
  root = _root("const a = (\n  <p>\n    Hello\n    there\n  </p>\n);")

  assert root.children == (Text(value="Hello there"),)


def test_fragment():
  root = _root("const a = <><span>A</span><span>B</span></>;")

  assert isinstance(root, Fragment)
  assert [child.tag for child in root.children] == ["span", "span"]


def test_expression_variants():
  assert isinstance(_child_expression("const a = <div>{title}</div>;"), Identifier)
  assert isinstance(_child_expression("const a = <div>{user.name}</div>;"), MemberAccess)
  assert isinstance(_child_expression("const a = <div>{ok ? 'a' : 'b'}</div>;"), Conditional)
  assert isinstance(_child_expression("const a = <div>{ok && <p>x</p>}</div>;"), Logical)
  assert isinstance(_child_expression("const a = <div>{format(x)}</div>;"), Call)
  assert isinstance(_child_expression("const a = <div>{(<b>x</b>)}</div>;"), MarkupExpression)


def test_map_call_shape():
  expr = _child_expression("const a = <ul>{items.map((item, i) => <li>{item}</li>)}</ul>;")

  assert isinstance(expr, Call)
  assert expr.method == "map"
  assert expr.receiver.source == "items"
  callback = expr.arguments[0]
  assert isinstance(callback, InlineFunction)
  assert [p.name for p in callback.params] == ["item", "i"]
  assert callback.has_block_body is False
  assert isinstance(callback.body, MarkupExpression)


def test_free_identifier_refs_skip_bound_params_and_properties():
  expr = _child_expression("const a = <ul>{items.filter(t => t.done).length}</ul>;")

  assert [ref.name for ref in expr.refs] == ["items"]


def test_substitute_replaces_only_selected_identifiers():
  expr = _child_expression("const a = <p>{count + other.count}</p>;")

  rewritten = expr.substitute(lambda name: "@count" if name == "count" else None)
  assert rewritten == "@count + other.count"


def test_tsx_dialect_parses_type_annotations():
  source = "const Tag = ({ label }: { label: string }) => <span>{label as string}</span>;"
  tree = SourceParser().parse(source, path="Tag.tsx", dialect=SourceDialect.TSX)

  assert not tree.has_errors
  assert next(outermost_markup(tree.root)).type == "jsx_element"


def test_dialect_for_suffix():
  assert SourceDialect.for_suffix(".tsx") == SourceDialect.TSX
  assert SourceDialect.for_suffix(".TS") == SourceDialect.TSX
  assert SourceDialect.for_suffix(".jsx") == SourceDialect.JSX
  assert SourceDialect.for_suffix(".js") == SourceDialect.JSX
