from .convert import handle_convert, print_batch_summary

__all__ = [
  "handle_convert",
  "print_batch_summary",
]
