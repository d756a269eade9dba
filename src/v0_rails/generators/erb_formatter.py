"""
Token-stream ERB formatter.

Final normalization of generated templates, performed in one pass over the token
stream instead of chained global substitutions:

- whitespace runs in text collapse to one space (or one line break),
- tags are re-rendered with single spaces between attributes,
- directives get exactly one space inside their delimiters,
- blank lines are removed.
"""

import re
from typing import List

from v0_rails.generators.erb_tokens import Token, TokenKind, parse_tag, tokenize

_INLINE_SPACE = re.compile(r"[ \t\f\v]+")
_BREAK = re.compile(r"[ \t]*\n\s*")
_MULTILINE = re.compile(r"\s*\n\s*")
_EMBEDDED_DIRECTIVE = re.compile(r"<%(=|#|-)?\s*(.*?)\s*-?%>", re.DOTALL)


class ErbFormatter:
  """
  Small state machine over ERB tokens.
  """

  def format(self, template: str) -> str:
    """
    Normalizes whitespace and delimiter spacing.

    Args:
        template (str): Raw template.

    Returns:
        str: Formatted template ending with a single newline.
    """
    pieces: List[str] = []
    for token in tokenize(template):
      pieces.append(self._token(token))
    lines = [line.rstrip() for line in "".join(pieces).split("\n")]
    return "\n".join(line for line in lines if line.strip()) + "\n"

  def _token(self, token: Token) -> str:
    kind = token.kind
    if kind == TokenKind.TEXT:
      return _INLINE_SPACE.sub(" ", _BREAK.sub("\n", token.text))
    if kind in (TokenKind.OPEN_TAG, TokenKind.CLOSE_TAG):
      tag = parse_tag(token.text)
      for attr in tag.attributes:
        if attr.is_directive:
          attr.name = normalize_directive(attr.name)
        elif attr.value is not None and "<%" in attr.value:
          attr.value = _EMBEDDED_DIRECTIVE.sub(lambda m: _directive(m.group(1) or "", m.group(2)), attr.value)
      return tag.render()
    if kind == TokenKind.HTML_COMMENT:
      return token.text
    return normalize_directive(token.text)


def normalize_directive(text: str) -> str:
  """``<%=x%>`` -> ``<%= x %>``; code spanning lines is joined onto one line."""
  match = _EMBEDDED_DIRECTIVE.fullmatch(text)
  if match is None:
    return text
  return _directive(match.group(1) or "", match.group(2))


def _directive(marker: str, code: str) -> str:
  code = _MULTILINE.sub(" ", code).strip()
  if marker == "-":
    marker = ""
  if not code:
    return f"<%{marker} %>"
  return f"<%{marker} {code} %>"
