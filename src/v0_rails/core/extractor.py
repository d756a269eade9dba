"""
Component Extractor.

Walks one parsed file and produces exactly one ``ComponentInfo``:

1. Candidates are collected in document order: named function declarations,
   variables bound to arrow/function expressions (directly or through wrapper calls
   such as ``memo(...)``), and anonymous default exports.
2. The first PascalCase candidate containing markup is the component; otherwise the
   first candidate containing markup. No such candidate raises ``ExtractionError``.
3. Markup roots are all outermost markup nodes of the file. When there are several,
   a warning is recorded and the first one is used downstream.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional

import tree_sitter

from v0_rails.analysis.events import extract_events
from v0_rails.analysis.hooks import detect_advanced_features, detect_hooks
from v0_rails.analysis.props import extract_props
from v0_rails.core.errors import ExtractionError
from v0_rails.core.jsx.nodes import MarkupNode, iter_elements
from v0_rails.core.jsx.parser import (
  FUNCTION_TYPES,
  MARKUP_TYPES,
  NodeBuilder,
  SourceParser,
  SourceTree,
  named_children,
  outermost_markup,
  unwrap_parens,
  walk,
)
from v0_rails.core.model import ComponentInfo
from v0_rails.enums import SourceDialect
from v0_rails.utils.strings import pascal_case

MULTIPLE_ROOTS_WARNING = "Multiple JSX elements found, using heuristics to identify the root element"
SYNTAX_ERROR_WARNING = "Source contains syntax errors; the conversion may be incomplete."


@dataclass
class _Candidate:
  name: str
  node: tree_sitter.Node

  @property
  def is_pascal_case(self) -> bool:
    return self.name[:1].isupper()

  @property
  def has_markup(self) -> bool:
    return any(sub.type in MARKUP_TYPES for sub in walk(self.node))


class ComponentExtractor:
  """
  Produces a ``ComponentInfo`` from source text or a parsed tree.
  """

  def __init__(self, parser: Optional[SourceParser] = None):
    self.parser = parser or SourceParser()

  def extract_source(self, source: str, path: str = "Component.jsx") -> ComponentInfo:
    """
    Parses and extracts in one step.

    Args:
        source (str): Component source code.
        path (str): File path; its suffix selects the grammar and its stem names
            anonymous default exports.

    Returns:
        ComponentInfo: The extracted component.
    """
    dialect = SourceDialect.for_suffix(Path(path).suffix)
    return self.extract(self.parser.parse(source, path=path, dialect=dialect))

  def extract(self, tree: SourceTree) -> ComponentInfo:
    """
    Extracts the component of a parsed file.

    Args:
        tree (SourceTree): The parsed file.

    Returns:
        ComponentInfo: The extracted component.

    Raises:
        ExtractionError: If no function containing markup exists.
    """
    candidate = self._select(list(self._candidates(tree)))
    if candidate is None:
      raise ExtractionError(tree.path)

    warnings: List[str] = []
    if tree.has_errors:
      warnings.append(SYNTAX_ERROR_WARNING)

    props, prop_warnings = extract_props(tree, candidate.node)
    warnings.extend(prop_warnings)

    hooks = detect_hooks(tree, candidate.node)
    warnings.extend(hooks.warnings)
    warnings.extend(detect_advanced_features(tree))

    builder = NodeBuilder(tree)
    roots: List[MarkupNode] = [builder.markup(node) for node in outermost_markup(tree.root)]
    if len(roots) > 1:
      warnings.append(MULTIPLE_ROOTS_WARNING)

    events = extract_events(element for root in roots for element in iter_elements(root))

    return ComponentInfo(
      name=candidate.name,
      props=tuple(props),
      markup_nodes=tuple(roots),
      has_state_or_effects=hooks.has_state_or_effects,
      events=tuple(events),
      warnings=tuple(warnings),
      original_path=tree.path,
    )

  @staticmethod
  def _select(candidates: List[_Candidate]) -> Optional[_Candidate]:
    with_markup = [c for c in candidates if c.has_markup]
    for candidate in with_markup:
      if candidate.is_pascal_case:
        return candidate
    return with_markup[0] if with_markup else None

  def _candidates(self, tree: SourceTree) -> Iterator[_Candidate]:
    default_name = pascal_case(Path(tree.path).stem.split(".")[0]) or "Component"
    for node in walk(tree.root):
      kind = node.type
      if kind in ("function_declaration", "generator_function_declaration"):
        name = node.child_by_field_name("name")
        yield _Candidate(name=tree.text(name) if name is not None else default_name, node=node)
      elif kind == "variable_declarator":
        name = node.child_by_field_name("name")
        value = node.child_by_field_name("value")
        function = _unwrap_function(value)
        if name is not None and name.type == "identifier" and function is not None:
          yield _Candidate(name=tree.text(name), node=function)
      elif kind == "export_statement" and _is_default_export(node):
        for child in named_children(node):
          if child.type in FUNCTION_TYPES and child.child_by_field_name("name") is None:
            yield _Candidate(name=default_name, node=child)
          elif child.type == "call_expression":
            function = _unwrap_function(child)
            if function is not None:
              yield _Candidate(name=default_name, node=function)


def _is_default_export(node: tree_sitter.Node) -> bool:
  return any(child.type == "default" for child in node.children)


def _unwrap_function(node: Optional[tree_sitter.Node]) -> Optional[tree_sitter.Node]:
  """Returns the function inside wrapper calls such as ``memo(forwardRef(fn))``."""
  while node is not None:
    node = unwrap_parens(node)
    if node.type in FUNCTION_TYPES:
      return node
    if node.type != "call_expression":
      return None
    args = node.child_by_field_name("arguments")
    if args is None or args.type != "arguments":
      return None
    inner = named_children(args)
    node = inner[0] if inner else None
  return None
