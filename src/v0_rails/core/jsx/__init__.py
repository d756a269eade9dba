"""
Typed JSX syntax tree and the tree-sitter adapter that builds it.
"""
