"""
Identifier case conversions shared by the IR generator and the artifact generators.

The transliterations are deliberately simple so that they round-trip:
``pascal_case(snake_case("TodoList")) == "TodoList"``.
"""

import re

_UPPER = re.compile(r"([A-Z])")
_SEPARATED_LOWER = re.compile(r"[-_]([a-z])")


def snake_case(value: str) -> str:
  """
  Converts an identifier to snake_case.

  Every uppercase letter starts a new word, so ``TodoList`` becomes ``todo_list`` and
  ``HTMLButton`` becomes ``h_t_m_l_button``. Lowercase snake input is returned as is.

  Args:
      value (str): Identifier to convert.

  Returns:
      str: The snake_case form.
  """
  return _UPPER.sub(r"_\1", value).lstrip("_").lower()


def kebab_case(value: str) -> str:
  """Converts an identifier to kebab-case (``TodoList`` -> ``todo-list``)."""
  return snake_case(value).replace("_", "-")


def camel_case(value: str) -> str:
  """Converts snake_case or kebab-case to camelCase."""
  return _SEPARATED_LOWER.sub(lambda m: m.group(1).upper(), value)


def pascal_case(value: str) -> str:
  """
  Converts snake_case, kebab-case or camelCase to PascalCase.

  Args:
      value (str): Identifier to convert.

  Returns:
      str: The PascalCase form.
  """
  camel = camel_case(value)
  return camel[:1].upper() + camel[1:]


def ruby_constant_path(namespace: str) -> str:
  """
  Normalizes a namespace such as ``ui`` or ``admin::forms`` into ``Ui`` / ``Admin::Forms``.
  """
  segments = [seg for seg in re.split(r"::|/", namespace) if seg]
  return "::".join(pascal_case(seg) for seg in segments)


def namespace_path(namespace: str) -> str:
  """Maps a Ruby namespace to its directory path (``Admin::Forms`` -> ``admin/forms``)."""
  return "/".join(snake_case(seg) for seg in ruby_constant_path(namespace).split("::"))


def ruby_string(value: str) -> str:
  """Quotes ``value`` as a double-quoted Ruby string literal."""
  escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("#{", "\\#{")
  return f'"{escaped}"'
