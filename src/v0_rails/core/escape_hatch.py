"""
Escape Hatch Mechanism for Untranslatable Markup.

When a construct cannot be translated, the pipeline never aborts. Instead it emits
a placeholder that carries a standardized ``TODO`` comment, so broken or partial
translations are never emitted silently, and it records a warning string next to it.
"""

from typing import Tuple


class EscapeHatch:
  """
  Builds the placeholder markup used for every unsupported construct.
  """

  MARKER = "TODO:"

  @staticmethod
  def comment(reason: str) -> str:
    """
    Inline HTML comment placeholder.

    Args:
        reason: Human-readable explanation of what could not be converted.

    Returns:
        str: ``<!-- TODO: reason -->`` with any comment terminator neutralized.
    """
    safe = reason.replace("--", "- -")
    return f"<!-- {EscapeHatch.MARKER} {safe} -->"

  @staticmethod
  def fallback_markup(reason: str) -> str:
    """
    Whole-template placeholder used when no markup could be produced.

    Args:
        reason: Explanation embedded in the diagnostic comment.

    Returns:
        str: A ``div`` wrapping the diagnostic comment.
    """
    return f"<div>{EscapeHatch.comment(reason)}</div>"

  @staticmethod
  def mark_failure(reason: str) -> Tuple[str, str]:
    """
    Pairs an inline placeholder with the warning string describing it.

    Args:
        reason: Explanation of the failure.

    Returns:
        Tuple[str, str]: (placeholder markup, warning text).
    """
    return EscapeHatch.comment(reason), reason

  @staticmethod
  def count(markup: str) -> int:
    """Number of placeholders present in ``markup``."""
    return markup.count(f"<!-- {EscapeHatch.MARKER}")
