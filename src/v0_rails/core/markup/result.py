"""
Values threaded through the markup transformer.

``Rendered`` carries the produced markup together with the warnings and component
references met while producing it, so no stage needs a shared collector.
"""

from dataclasses import dataclass
from typing import FrozenSet, Iterable, Optional, Tuple

from v0_rails.core.escape_hatch import EscapeHatch


@dataclass(frozen=True)
class Rendered:
  """
  A fragment of generated markup.

  Attributes:
      html (str): The markup text.
      warnings (Tuple[str, ...]): Warnings raised while rendering, in order.
      references (Tuple[str, ...]): Custom component names used, in order.
  """

  html: str = ""
  warnings: Tuple[str, ...] = ()
  references: Tuple[str, ...] = ()

  def __add__(self, other: "Rendered") -> "Rendered":
    return Rendered(
      html=self.html + other.html,
      warnings=self.warnings + other.warnings,
      references=self.references + other.references,
    )

  def wrap(self, before: str, after: str = "") -> "Rendered":
    """Surrounds the markup, keeping warnings and references."""
    return Rendered(html=before + self.html + after, warnings=self.warnings, references=self.references)

  @classmethod
  def join(cls, parts: Iterable["Rendered"]) -> "Rendered":
    result = cls()
    for part in parts:
      result = result + part
    return result

  @classmethod
  def failure(cls, reason: str) -> "Rendered":
    """A diagnostic placeholder plus its warning."""
    placeholder, warning = EscapeHatch.mark_failure(reason)
    return cls(html=placeholder, warnings=(warning,))


@dataclass(frozen=True)
class Scope:
  """
  Names visible while rendering.

  Props are rewritten to their instance-variable storage (``@name``). Locals bound
  by loop variables shadow props of the same name.
  """

  props: FrozenSet[str]
  locals: FrozenSet[str] = frozenset()

  def reference(self, name: str) -> Optional[str]:
    """
    Storage reference for ``name``.

    Returns:
        Optional[str]: ``@name`` for props, None for locals and unknown names.
    """
    if name in self.props and name not in self.locals:
      return f"@{name}"
    return None

  def bind(self, names: Iterable[str]) -> "Scope":
    return Scope(props=self.props, locals=self.locals | frozenset(names))
