"""
ERB Token Stream.

A small lexer splitting an ERB template into text, tags, comments and directives,
plus a tag model used by the template stages to edit attributes without regular
expressions over the whole document.

Directives embedded in quoted attribute values (``class="<%= x %>"``) stay inside
their tag token.
"""

import re
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional


class TokenKind(Enum):
  """Enumeration of ERB token types."""

  TEXT = auto()
  OPEN_TAG = auto()  # <div ...> or <img ... />
  CLOSE_TAG = auto()  # </div>
  HTML_COMMENT = auto()  # <!-- ... -->
  ERB_COMMENT = auto()  # <%# ... %>
  ERB_OUTPUT = auto()  # <%= ... %>
  ERB_CODE = auto()  # <% ... %>


DIRECTIVE_KINDS = frozenset({TokenKind.ERB_OUTPUT, TokenKind.ERB_CODE})


@dataclass
class Token:
  """A lexical unit."""

  kind: TokenKind
  text: str

  @property
  def is_directive(self) -> bool:
    return self.kind in DIRECTIVE_KINDS

  @property
  def code(self) -> str:
    """Ruby code of a directive or comment token, without delimiters."""
    body = self.text[2:-2]
    if body[:1] in ("=", "#", "-"):
      body = body[1:]
    if body.endswith("-"):
      body = body[:-1]
    return body.strip()


class ErbLexer:
  """
  Hand-written scanner for ERB templates.
  """

  _TAG_START = re.compile(r"</?[A-Za-z]")

  def __init__(self, text: str):
    self.text = text
    self.pos = 0
    self._tokens: List[Token] = []

  def tokenize(self) -> List[Token]:
    """
    Converts the full template into tokens. Adjacent text is merged.

    Returns:
        List[Token]: Tokens whose texts concatenate to the input.
    """
    text = self.text
    while self.pos < len(text):
      if text.startswith("<%", self.pos):
        end = self._directive_end(self.pos)
        self._emit(self._directive_kind(self.pos), end)
      elif text.startswith("<!--", self.pos):
        end = text.find("-->", self.pos + 4)
        self._emit(TokenKind.HTML_COMMENT, len(text) if end < 0 else end + 3)
      elif self._TAG_START.match(text, self.pos):
        kind = TokenKind.CLOSE_TAG if text[self.pos + 1] == "/" else TokenKind.OPEN_TAG
        self._emit(kind, self._tag_end(self.pos))
      else:
        self._emit(TokenKind.TEXT, self._text_end(self.pos))
    return self._tokens

  def _emit(self, kind: TokenKind, end: int) -> None:
    chunk = self.text[self.pos : end]
    if kind == TokenKind.TEXT and self._tokens and self._tokens[-1].kind == TokenKind.TEXT:
      self._tokens[-1].text += chunk
    else:
      self._tokens.append(Token(kind, chunk))
    self.pos = end

  def _directive_kind(self, pos: int) -> TokenKind:
    marker = self.text[pos + 2 : pos + 3]
    if marker == "#":
      return TokenKind.ERB_COMMENT
    if marker == "=":
      return TokenKind.ERB_OUTPUT
    return TokenKind.ERB_CODE

  def _directive_end(self, pos: int) -> int:
    text = self.text
    first = text.find("%>", pos + 2)
    if first < 0:
      return len(text)
    if self._directive_kind(pos) == TokenKind.ERB_COMMENT:
      return first + 2

    # A "%>" inside a Ruby string literal does not close the directive.
    quote = None
    i = pos + 2
    while i < len(text):
      char = text[i]
      if quote:
        if char == "\\":
          i += 2
          continue
        if char == quote:
          quote = None
      elif char in "\"'":
        quote = char
      elif text.startswith("%>", i):
        return i + 2
      i += 1
    # Unbalanced quotes: fall back to the first terminator.
    return first + 2

  def _tag_end(self, pos: int) -> int:
    text = self.text
    quote = None
    i = pos + 1
    while i < len(text):
      if text.startswith("<%", i):
        i = self._directive_end(i)
        continue
      char = text[i]
      if quote:
        if char == quote:
          quote = None
      elif char in "\"'":
        quote = char
      elif char == ">":
        return i + 1
      i += 1
    return len(text)

  def _text_end(self, pos: int) -> int:
    i = self.text.find("<", pos + 1)
    while i >= 0:
      if self.text.startswith("<%", i) or self.text.startswith("<!--", i) or self._TAG_START.match(self.text, i):
        return i
      i = self.text.find("<", i + 1)
    return len(self.text)


def tokenize(text: str) -> List[Token]:
  """Shorthand for ``ErbLexer(text).tokenize()``."""
  return ErbLexer(text).tokenize()


def render_tokens(tokens: List[Token]) -> str:
  return "".join(token.text for token in tokens)


@dataclass
class TagAttribute:
  """
  One attribute of a tag. Bare directives (``<%= render_attributes(x) %>``) have the
  directive as ``name`` and no value.
  """

  name: str
  value: Optional[str] = None
  quote: str = '"'

  @property
  def is_directive(self) -> bool:
    return self.name.startswith("<%")

  def render(self) -> str:
    if self.value is None:
      return self.name
    return f"{self.name}={self.quote}{self.value}{self.quote}"


@dataclass
class Tag:
  """
  Parsed open or close tag.
  """

  name: str
  attributes: List[TagAttribute] = field(default_factory=list)
  self_closing: bool = False
  closing: bool = False

  def get(self, name: str) -> Optional[TagAttribute]:
    return next((attr for attr in self.attributes if attr.name == name), None)

  def set(self, name: str, value: Optional[str]) -> None:
    """Replaces the value of ``name`` or appends the attribute."""
    existing = self.get(name)
    if existing is not None:
      existing.value = value
      existing.quote = '"'
    else:
      self.attributes.append(TagAttribute(name=name, value=value))

  def insert(self, index: int, name: str, value: Optional[str]) -> None:
    self.attributes.insert(index, TagAttribute(name=name, value=value))

  def remove(self, name: str) -> Optional[TagAttribute]:
    attr = self.get(name)
    if attr is not None:
      self.attributes.remove(attr)
    return attr

  def render(self) -> str:
    if self.closing:
      return f"</{self.name}>"
    parts = [self.name] + [attr.render() for attr in self.attributes]
    suffix = " />" if self.self_closing else ">"
    return "<" + " ".join(parts) + suffix


def parse_tag(text: str) -> Tag:
  """
  Parses the text of an ``OPEN_TAG`` or ``CLOSE_TAG`` token.

  Args:
      text (str): Tag source including angle brackets.

  Returns:
      Tag: The tag model.
  """
  if text.startswith("</"):
    return Tag(name=text[2:].rstrip(">").strip(), closing=True)

  body = text[1:-1] if text.endswith(">") else text[1:]
  match = re.match(r"[^\s/>]+", body)
  name = match.group(0) if match else ""
  tag = Tag(name=name)
  i = len(name)
  n = len(body)
  while i < n:
    char = body[i]
    if char.isspace():
      i += 1
      continue
    if char == "/":
      tag.self_closing = True
      i += 1
      continue
    if body.startswith("<%", i):
      end = body.find("%>", i + 2)
      end = n if end < 0 else end + 2
      tag.attributes.append(TagAttribute(name=body[i:end]))
      i = end
      continue
    tag.self_closing = False
    name_match = re.compile(r"[^\s=/>]+").match(body, i)
    if name_match is None:
      i += 1
      continue
    attr = TagAttribute(name=name_match.group(0))
    i = name_match.end()
    j = i
    while j < n and body[j].isspace():
      j += 1
    if j < n and body[j] == "=":
      j += 1
      while j < n and body[j].isspace():
        j += 1
      if j < n and body[j] in "\"'":
        attr.quote = body[j]
        end = _quoted_end(body, j + 1, body[j])
        attr.value = body[j + 1 : end]
        i = min(end + 1, n)
      else:
        value_match = re.compile(r"[^\s>]*").match(body, j)
        attr.value = value_match.group(0)
        attr.quote = '"'
        i = value_match.end()
    tag.attributes.append(attr)
  return tag


def _quoted_end(body: str, start: int, quote: str) -> int:
  i = start
  while i < len(body):
    if body.startswith("<%", i):
      end = body.find("%>", i + 2)
      i = len(body) if end < 0 else end + 2
      continue
    if body[i] == quote:
      return i
    i += 1
  return len(body)
