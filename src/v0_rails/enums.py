"""
Enumerations for v0-rails.

Defines the closed vocabularies shared by the extractor, the IR and the generators.
"""

from enum import Enum


class PropType(str, Enum):
  """
  Kind of a component prop, inferred from the literal kind of its default value.
  """

  STRING = "string"
  NUMBER = "number"
  BOOLEAN = "boolean"
  ARRAY = "array"
  OBJECT = "object"
  ANY = "any"


class SlotKind(str, Enum):
  """
  ViewComponent slot declaration used for a content-projection point.
  """

  RENDERS_ONE = "renders_one"
  RENDERS_MANY = "renders_many"


class SourceDialect(str, Enum):
  """
  Grammar used to parse a source file, selected from its extension.
  """

  JSX = "jsx"  # .js, .jsx, .mjs
  TSX = "tsx"  # .ts, .tsx

  @classmethod
  def for_suffix(cls, suffix: str) -> "SourceDialect":
    """
    Picks the dialect for a file extension.

    Args:
        suffix (str): File suffix including the dot (e.g. ``.tsx``).

    Returns:
        SourceDialect: TSX for TypeScript files, JSX otherwise.
    """
    return cls.TSX if suffix.lower() in (".ts", ".tsx") else cls.JSX
