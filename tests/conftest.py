"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Snapshot testing fixture for compiled output.
- Formatter doubles so tests never need the zprint executable.
- Console capture and logging reset between tests.
"""

import io
import logging
import sys
from pathlib import Path
from typing import Callable, List, Optional

import pytest
from rich.console import Console

# Add src to path so we can import 'ysclj' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from ysclj.core.formatter import PassthroughFormatter  # noqa: E402
from ysclj.utils.console import console, reset_console, set_console  # noqa: E402


class SnapshotAssert:
  """
  Simple snapshot comparison logic to verify compiler output stability.
  """

  def __init__(self, request: pytest.FixtureRequest):
    self.request = request
    self.test_name = request.node.name
    self.module_path = Path(request.node.fspath).parent
    self.snapshot_dir = self.module_path / "__snapshots__"
    self.update_mode = request.config.getoption("--update-snapshots", default=False)

  def assert_match(self, content: str, extension: str = "txt", normalizer: Optional[Callable[[str], str]] = None):
    """
    Compares content against stored file.

    Args:
        content: The actual output string.
        extension: File extension (default 'txt', 'clj', etc).
        normalizer: Optional function to clean both content and expected string before comparison.
    """
    if not self.snapshot_dir.exists():
      self.snapshot_dir.mkdir(parents=True)

    snapshot_file = self.snapshot_dir / f"{self.test_name}.{extension}"
    content = content.replace("\r\n", "\n")

    if self.update_mode or not snapshot_file.exists():
      snapshot_file.write_text(normalizer(content) if normalizer else content, encoding="utf-8")
      if self.update_mode:
        return

    expected = snapshot_file.read_text(encoding="utf-8").replace("\r\n", "\n")

    lhs = content
    rhs = expected
    if normalizer:
      lhs = normalizer(lhs)
      rhs = normalizer(rhs)

    assert lhs == rhs, (
      f"Snapshot mismatch for {snapshot_file.name}. Run pytest with --update-snapshots to accept changes."
    )


class RecordingFormatter:
  """Formatter double that records its input and returns it unchanged."""

  def __init__(self) -> None:
    self.calls: List[str] = []

  def format(self, code: str) -> str:
    self.calls.append(code)
    return code


@pytest.fixture
def snapshot(request):
  """Fixture to assert text matches a stored snapshot."""
  return SnapshotAssert(request)


@pytest.fixture
def passthrough():
  """A formatter that leaves printed code untouched."""
  return PassthroughFormatter()


@pytest.fixture
def recording_formatter():
  return RecordingFormatter()


@pytest.fixture
def captured_console():
  """
  Redirects console output and logging into a buffer.

  Yields:
      io.StringIO: The buffer receiving all output.
  """
  buffer = io.StringIO()
  set_console(Console(file=buffer, width=200, color_system=None))
  yield buffer
  reset_console()


@pytest.fixture(autouse=True)
def restore_log_level():
  """Prevents a ``--verbose`` CLI test from leaking DEBUG logging."""
  yield
  console.set_level(logging.INFO)


def pytest_addoption(parser):
  """Add CLI flag to update snapshots."""
  parser.addoption("--update-snapshots", action="store_true", default=False, help="Update snapshots for visual tests")
