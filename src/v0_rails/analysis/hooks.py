"""
Detection of React hooks and advanced framework features.

Hooks are calls to ``useX`` (or ``React.useX``) inside the component body. Advanced
features are imports from ``react`` that have no server-rendered equivalent.
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional

import tree_sitter

from v0_rails.core.jsx.parser import SourceTree, named_children, unwrap_parens, walk

HOOK_NAME = re.compile(r"^use[A-Z]\w*$")

STATE_AND_EFFECT_HOOKS = frozenset({"useState", "useReducer", "useEffect", "useLayoutEffect"})

ADVANCED_FEATURES = ("useContext", "createContext", "Suspense", "lazy", "memo", "forwardRef")

REACT_MODULES = frozenset({"react"})


@dataclass
class HookUsage:
  """
  Hooks called by one component.

  Attributes:
      names (List[str]): Distinct hook names in first-call order.
      has_state_or_effects (bool): True if any state or effect hook is called.
  """

  names: List[str] = field(default_factory=list)
  has_state_or_effects: bool = False

  @property
  def warnings(self) -> List[str]:
    return [f"Component uses React hook: {name}. This may require manual conversion." for name in self.names]


def detect_hooks(tree: SourceTree, function_node: tree_sitter.Node) -> HookUsage:
  """
  Scans a component function for hook calls.

  Args:
      tree (SourceTree): The parsed file.
      function_node: The component's function node.

  Returns:
      HookUsage: Hook names and the state/effects flag.
  """
  usage = HookUsage()
  for node in walk(function_node):
    if node.type != "call_expression":
      continue
    name = _hook_name(tree, node.child_by_field_name("function"))
    if name is None:
      continue
    if name not in usage.names:
      usage.names.append(name)
    if name in STATE_AND_EFFECT_HOOKS:
      usage.has_state_or_effects = True
  return usage


def _hook_name(tree: SourceTree, callee: Optional[tree_sitter.Node]) -> Optional[str]:
  if callee is None:
    return None
  callee = unwrap_parens(callee)
  if callee.type == "identifier":
    name = tree.text(callee)
  elif callee.type == "member_expression":
    obj = callee.child_by_field_name("object")
    prop = callee.child_by_field_name("property")
    if obj is None or prop is None or tree.text(obj) != "React":
      return None
    name = tree.text(prop)
  else:
    return None
  return name if HOOK_NAME.match(name) else None


def detect_advanced_features(tree: SourceTree) -> List[str]:
  """
  Lists advanced React features imported (or referenced as ``React.X``) in a file.

  Args:
      tree (SourceTree): The parsed file.

  Returns:
      List[str]: Warning strings, one per distinct feature, in source order.
  """
  found: List[str] = []
  for node in walk(tree.root):
    name = None
    if node.type == "import_statement":
      for imported in _react_named_imports(tree, node):
        if imported in ADVANCED_FEATURES and imported not in found:
          found.append(imported)
      continue
    if node.type == "member_expression":
      obj = node.child_by_field_name("object")
      prop = node.child_by_field_name("property")
      if obj is not None and prop is not None and tree.text(obj) == "React":
        name = tree.text(prop)
    if name in ADVANCED_FEATURES and name not in found:
      found.append(name)
  return [f"Component uses advanced React feature: {name}. Manual conversion may be required." for name in found]


def _react_named_imports(tree: SourceTree, node: tree_sitter.Node) -> List[str]:
  source = node.child_by_field_name("source")
  if source is None or tree.text(source)[1:-1] not in REACT_MODULES:
    return []
  names = []
  for sub in walk(node):
    if sub.type == "import_specifier":
      name = sub.child_by_field_name("name")
      if name is None:
        parts = named_children(sub)
        name = parts[0] if parts else None
      if name is not None:
        names.append(tree.text(name))
  return names
