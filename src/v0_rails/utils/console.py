"""
Console and Logging Utilities.

All user-facing output of v0-rails goes through the standard ``logging`` module,
rendered by a ``rich`` handler. The handler is bound to a swappable console so the
CLI tests (or an embedding application) can redirect output into a buffer. Output
goes to stderr; stdout is reserved for the IR printed by a dry run.

Attributes:
    console (_ConsoleProxy): Stable module-level reference to the active Rich Console.
"""

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

SUCCESS_LEVEL_NUM = 25
logging.addLevelName(SUCCESS_LEVEL_NUM, "SUCCESS")

LOGGER_NAME = "v0_rails"

_THEME = Theme(
  {
    "logging.level.success": "green",
    "info": "dim cyan",
    "warning": "yellow",
    "error": "bold red",
    "success": "green",
    "path": "bold blue",
    "component": "bold magenta",
  }
)

logger = logging.getLogger(LOGGER_NAME)


class _ConsoleProxy:
  """
  Forwards printing to a replaceable ``rich.console.Console`` backend.

  Swapping the backend also re-binds the package logger's ``RichHandler`` so that
  log records follow the console.
  """

  def __init__(self) -> None:
    self._backend: Console = Console(theme=_THEME, stderr=True)
    self._configure_logging()

  def set_backend(self, new_console: Console) -> None:
    """
    Replaces the active console and re-binds logging to it.

    Args:
        new_console (Console): Console to write to from now on.
    """
    self._backend = new_console
    self._configure_logging()

  def reset(self) -> None:
    """Restores a fresh stderr console."""
    self._backend = Console(theme=_THEME, stderr=True)
    self._configure_logging()

  @property
  def backend(self) -> Console:
    """
    The console currently receiving output.

    Returns:
        Console: The active backend.
    """
    return self._backend

  def _configure_logging(self) -> None:
    for handler in list(logger.handlers):
      if isinstance(handler, RichHandler):
        logger.removeHandler(handler)

    rich_handler = RichHandler(
      console=self._backend,
      show_time=False,
      show_path=False,
      markup=True,
      rich_tracebacks=True,
    )
    logger.addHandler(rich_handler)
    logger.propagate = False
    if logger.level == logging.NOTSET:
      logger.setLevel(logging.INFO)

  def print(self, *args: Any, **kwargs: Any) -> None:
    self._backend.print(*args, **kwargs)

  def __getattr__(self, name: str) -> Any:
    return getattr(self._backend, name)


console = _ConsoleProxy()


def set_console(new_console: Console) -> None:
  """
  Redirects all console and log output to ``new_console``.

  Args:
      new_console (Console): The Rich console to use globally.
  """
  console.set_backend(new_console)


def reset_console() -> None:
  """Resets console and logging output to standard error."""
  console.reset()


def set_verbose(verbose: bool) -> None:
  """
  Toggles debug-level output for the package logger.

  Args:
      verbose (bool): True to emit ``log_debug`` messages.
  """
  logger.setLevel(logging.DEBUG if verbose else logging.INFO)


def log_debug(msg: str) -> None:
  """Logs a detail message, shown only in verbose mode."""
  logger.debug(msg, extra={"markup": True})


def log_info(msg: str) -> None:
  """
  Logs an informational message.

  Args:
      msg (str): The message content. May contain rich markup such as ``[path]``.
  """
  logger.info(f"ℹ️  {msg}", extra={"markup": True})


def log_success(msg: str) -> None:
  """Logs a success message at the custom SUCCESS level."""
  logger.log(SUCCESS_LEVEL_NUM, f"✅ {msg}", extra={"markup": True})


def log_warning(msg: str) -> None:
  """Logs a warning message."""
  logger.warning(f"⚠️  {msg}", extra={"markup": True})


def log_error(msg: str) -> None:
  """Logs an error message."""
  logger.error(f"❌ {msg}", extra={"markup": True})
