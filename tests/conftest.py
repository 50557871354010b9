"""
Shared fixtures for crawl tests.
Creates isolated temporary directory trees and in-memory collaborators for the engine.
"""
import pytest
import tempfile
from datetime import datetime, timedelta
from pathlib import Path
from typing import Dict, List, Tuple
import sys

# Add src/ to sys.path so 'dircrawl' is importable without installation
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from dircrawl.core.models import DirectoryNode, ErrorKind, FileNode, RunStatistics


class RecordingSink:
    """RecordSink that keeps every emission, in order, for assertions."""

    def __init__(self):
        self.events: List[Tuple[str, object]] = []
        self.directories: List[DirectoryNode] = []
        self.files: List[FileNode] = []
        self.errors: List[Tuple[ErrorKind, str, str]] = []
        self.summaries: List[RunStatistics] = []

    def emit_directory(self, node: DirectoryNode) -> None:
        self.directories.append(node)
        self.events.append(("dir", node))

    def emit_file(self, node: FileNode) -> None:
        self.files.append(node)
        self.events.append(("file", node))

    def emit_error(self, kind: ErrorKind, context: str, message: str) -> None:
        self.errors.append((kind, context, message))
        self.events.append(("error", kind))

    def emit_summary(self, stats: RunStatistics) -> None:
        self.summaries.append(stats)
        self.events.append(("summary", stats))

    def error_kinds(self) -> List[ErrorKind]:
        return [kind for kind, _, _ in self.errors]

    def directory_by_name(self, name: str) -> DirectoryNode:
        matches = [d for d in self.directories if d.name == name]
        assert len(matches) == 1, f"expected one directory named {name}, got {matches}"
        return matches[0]


class StepClock:
    """Clock advancing a fixed step on every call."""

    def __init__(self, start: datetime = datetime(2014, 10, 31, 12, 0, 0), step_seconds: float = 2.0):
        self.current = start
        self.step = timedelta(seconds=step_seconds)
        self.calls = 0

    def now(self) -> datetime:
        value = self.current
        self.current += self.step
        self.calls += 1
        return value


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
def sample_tree(temp_dir) -> Dict[str, Path]:
    """
    Creates a small controlled tree:

        root/
          f.txt            "test" (4 bytes)
          b/               empty (leaf)
          c/
            d.bin          1024 bytes
            e/
              g.txt        "hello world" (11 bytes)
    """
    paths = {}
    root = temp_dir / "root"
    root.mkdir()
    paths["root"] = root

    paths["f"] = root / "f.txt"
    paths["f"].write_bytes(b"test")

    paths["b"] = root / "b"
    paths["b"].mkdir()

    paths["c"] = root / "c"
    paths["c"].mkdir()
    paths["d"] = paths["c"] / "d.bin"
    paths["d"].write_bytes(b"D" * 1024)

    paths["e"] = paths["c"] / "e"
    paths["e"].mkdir()
    paths["g"] = paths["e"] / "g.txt"
    paths["g"].write_bytes(b"hello world")

    return paths
