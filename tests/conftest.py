"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Snapshot testing fixture for generated artifacts.
- Pipeline factories (source -> ComponentInfo / IR).
- Console isolation so log output never leaks between tests.
"""

import io
import sys
from pathlib import Path
from typing import Callable, Optional

import pytest
from rich.console import Console

# Add src to path so we can import 'v0_rails' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from v0_rails.core.extractor import ComponentExtractor  # noqa: E402
from v0_rails.core.ir_generator import IRGenerator  # noqa: E402
from v0_rails.core.model import IR, ComponentInfo  # noqa: E402
from v0_rails.utils.console import reset_console, set_console, set_verbose  # noqa: E402

FIXTURES = Path(__file__).parent / "fixtures" / "components"


class SnapshotAssert:
  """
  Simple snapshot comparison logic to verify generated output stability.
  """

  def __init__(self, request: pytest.FixtureRequest):
    self.request = request
    self.test_name = request.node.name
    self.module_path = Path(request.node.path).parent
    self.snapshot_dir = self.module_path / "__snapshots__"
    self.update_mode = request.config.getoption("--update-snapshots", default=False)

  def assert_match(self, content: str, extension: str = "txt", normalizer: Optional[Callable[[str], str]] = None):
    """
    Compares content against stored file.

    Args:
        content: The actual output string.
        extension: File extension (default 'txt', 'rb', 'erb', etc).
        normalizer: Optional function to clean both content and expected string before comparison.
    """
    snapshot_file = self.snapshot_dir / f"{self.test_name}.{extension}"
    content = content.replace("\r\n", "\n")

    if self.update_mode:
      self.snapshot_dir.mkdir(parents=True, exist_ok=True)
      snapshot_file.write_text(normalizer(content) if normalizer else content, encoding="utf-8")
      return

    if not snapshot_file.exists():
      pytest.fail(f"Missing snapshot {snapshot_file.name}. Run pytest with --update-snapshots to record it.")

    expected = snapshot_file.read_text(encoding="utf-8").replace("\r\n", "\n")
    lhs, rhs = content, expected
    if normalizer:
      lhs, rhs = normalizer(lhs), normalizer(rhs)

    assert lhs == rhs, (
      f"Snapshot mismatch for {snapshot_file.name}. Run pytest with --update-snapshots to accept changes."
    )


@pytest.fixture
def snapshot(request):
  """Fixture to assert text matches a stored snapshot."""
  return SnapshotAssert(request)


@pytest.fixture
def fixture_source() -> Callable[[str], str]:
  """Reads a component from ``tests/fixtures/components``."""

  def _read(name: str) -> str:
    return (FIXTURES / name).read_text(encoding="utf-8")

  return _read


@pytest.fixture
def extract() -> Callable[..., ComponentInfo]:
  """Source -> ComponentInfo."""
  extractor = ComponentExtractor()

  def _extract(source: str, path: str = "Component.jsx") -> ComponentInfo:
    return extractor.extract_source(source, path=path)

  return _extract


@pytest.fixture
def build_ir(extract) -> Callable[..., IR]:
  """Source -> IR."""

  def _build(source: str, path: str = "Component.jsx", detect_slots: bool = False) -> IR:
    return IRGenerator(detect_slots=detect_slots).generate(extract(source, path))

  return _build


@pytest.fixture
def log_buffer():
  """
  Redirects console and log output into a recording console.

  Yields:
      Console: Call ``export_text()`` to read what was printed.
  """
  recorder = Console(file=io.StringIO(), record=True, width=200, force_terminal=False)
  set_console(recorder)
  yield recorder
  reset_console()


@pytest.fixture(autouse=True)
def quiet_logging():
  """Resets verbosity so a verbose CLI run cannot leak into other tests."""
  yield
  set_verbose(False)


def pytest_addoption(parser):
  """Add CLI flag to update snapshots."""
  parser.addoption("--update-snapshots", action="store_true", default=False, help="Update snapshots for visual tests")
