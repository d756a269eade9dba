"""
String-aware JavaScript to Ruby expression normalization.

Used on the code inside ERB directives. Operators are only rewritten outside string
literals; template literals become double-quoted Ruby strings with ``#{}``
interpolation.
"""

import re
from typing import List, Tuple

_CODE_RULES: List[Tuple[re.Pattern, str]] = [
  (re.compile(r"!=="), "!="),
  (re.compile(r"==="), "=="),
  (re.compile(r"\?\?"), "||"),
  (re.compile(r"\?\.(?!\d)"), "&."),
  (re.compile(r"(?<![\w$.])(?:null|undefined)(?![\w$])"), "nil"),
]

_CONCAT_LEFT = re.compile(r"""(["'])((?:(?!\1)[^\\#])*)\1\s*\+\s*(@?[A-Za-z_][\w.]*)""")
_CONCAT_RIGHT = re.compile(r"""(@?[A-Za-z_][\w.]*)\s*\+\s*(["'])((?:(?!\2)[^\\#])*)\2""")


def _split(code: str) -> List[Tuple[str, str]]:
  """
  Splits ``code`` into ("code" | "string" | "template", text) segments.
  """
  segments: List[Tuple[str, str]] = []
  buffer = []
  i = 0
  while i < len(code):
    char = code[i]
    if char in "\"'`":
      if buffer:
        segments.append(("code", "".join(buffer)))
        buffer = []
      end = _literal_end(code, i)
      segments.append(("template" if char == "`" else "string", code[i:end]))
      i = end
      continue
    buffer.append(char)
    i += 1
  if buffer:
    segments.append(("code", "".join(buffer)))
  return segments


def _literal_end(code: str, start: int) -> int:
  quote = code[start]
  i = start + 1
  while i < len(code):
    char = code[i]
    if char == "\\":
      i += 2
      continue
    if quote == "`" and code.startswith("${", i):
      i = _substitution_end(code, i + 2) + 1
      continue
    if char == quote:
      return i + 1
    i += 1
  return len(code)


def _substitution_end(code: str, start: int) -> int:
  depth = 1
  i = start
  while i < len(code):
    char = code[i]
    if char in "\"'`":
      i = _literal_end(code, i)
      continue
    if char == "{":
      depth += 1
    elif char == "}":
      depth -= 1
      if depth == 0:
        return i
    i += 1
  return len(code)


def _template_to_ruby(literal: str) -> str:
  body = literal[1:-1] if literal.endswith("`") and len(literal) > 1 else literal[1:]
  out = []
  i = 0
  while i < len(body):
    if body.startswith("${", i):
      end = _substitution_end(body, i + 2)
      out.append("#{" + convert(body[i + 2 : end]).strip() + "}")
      i = end + 1
      continue
    char = body[i]
    if char == "\\" and i + 1 < len(body):
      nxt = body[i + 1]
      out.append(nxt if nxt in "`$" else char + nxt)
      i += 2
      continue
    if char == '"':
      out.append('\\"')
    elif body.startswith("#{", i):
      out.append("\\#")
    else:
      out.append(char)
    i += 1
  return '"' + "".join(out) + '"'


def convert(code: str) -> str:
  """
  Normalizes a JavaScript expression to Ruby.

  ``===``/``!==`` become ``==``/``!=``, ``??`` becomes ``||``, optional chaining
  becomes the safe-navigation operator, ``null``/``undefined`` become ``nil``, and
  template literals become interpolated strings.

  Args:
      code (str): Expression source.

  Returns:
      str: The Ruby expression.
  """
  result = []
  for kind, text in _split(code):
    if kind == "code":
      for pattern, replacement in _CODE_RULES:
        text = pattern.sub(replacement, text)
      result.append(text)
    elif kind == "template":
      result.append(_template_to_ruby(text))
    else:
      result.append(text)
  return "".join(result)


def concatenation_to_interpolation(code: str) -> str:
  """
  Rewrites ``"label: " + value`` and ``value + " units"`` as interpolated strings.

  Args:
      code (str): Ruby-normalized expression.

  Returns:
      str: The expression with simple concatenations interpolated.
  """
  code = _CONCAT_LEFT.sub(lambda m: '"' + m.group(2).replace('"', '\\"') + "#{" + m.group(3) + '}"', code)
  return _CONCAT_RIGHT.sub(lambda m: '"#{' + m.group(1) + "}" + m.group(3).replace('"', '\\"') + '"', code)
