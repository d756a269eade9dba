"""
Tests for identifier case conversions.

Verifies:
1. Uppercase boundaries become separators (``TodoList`` -> ``todo_list``).
2. PascalCase round-trips through snake_case.
3. Namespaces normalize to constant paths and directory paths.
4. Ruby string quoting escapes quotes and interpolation.
"""

import pytest

from v0_rails.utils.strings import (
  camel_case,
  kebab_case,
  namespace_path,
  pascal_case,
  ruby_constant_path,
  ruby_string,
  snake_case,
)


@pytest.mark.parametrize(
  "name, expected",
  [
    ("TodoList", "todo_list"),
    ("Card", "card"),
    ("todoList", "todo_list"),
    ("already_snake", "already_snake"),
    ("HTMLButton", "h_t_m_l_button"),
  ],
)
def test_snake_case(name, expected):
  assert snake_case(name) == expected


def test_kebab_case():
  assert kebab_case("TodoList") == "todo-list"


def test_camel_and_pascal_case():
  assert camel_case("image_url") == "imageUrl"
  assert camel_case("aria-label") == "ariaLabel"
  assert pascal_case("todo_list") == "TodoList"
  assert pascal_case("my-card") == "MyCard"


def test_pascal_snake_round_trip():
  for name in ("TodoList", "Card", "PrimaryButtonGroup"):
    assert pascal_case(snake_case(name)) == name


def test_namespace_normalization():
  assert ruby_constant_path("ui") == "Ui"
  assert ruby_constant_path("admin::forms") == "Admin::Forms"
  assert ruby_constant_path("admin/form_fields") == "Admin::FormFields"
  assert namespace_path("Admin::FormFields") == "admin/form_fields"


def test_ruby_string_escapes():
  assert ruby_string("Learn More") == '"Learn More"'
  assert ruby_string('say "hi"') == '"say \\"hi\\""'
  assert ruby_string("#{x}") == '"\\#{x}"'
