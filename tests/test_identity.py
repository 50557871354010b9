"""
Unit tests for PathNormalizer, IdentityRegistry and Worklist.
"""
import os
import pytest

from dircrawl.core.models import WorklistEntry
from dircrawl.core.normalizer import PathNormalizer
from dircrawl.core.registry import IdentityRegistry
from dircrawl.core.worklist import Worklist


class TestPathNormalizer:
    """Canonical keys: absolute, separator-normalized, case-folded by default."""

    def test_trailing_separator_ignored(self, temp_dir):
        normalizer = PathNormalizer()
        assert normalizer.canonical_key(str(temp_dir) + os.sep) == normalizer.canonical_key(temp_dir)

    def test_dot_segments_collapsed(self, temp_dir):
        normalizer = PathNormalizer()
        dotted = os.path.join(str(temp_dir), "a", ".", "b", "..", "b")
        assert normalizer.canonical_key(dotted) == normalizer.canonical_key(temp_dir / "a" / "b")

    def test_relative_path_made_absolute(self, temp_dir, monkeypatch):
        monkeypatch.chdir(temp_dir)
        normalizer = PathNormalizer()
        assert normalizer.canonical_key("photos") == normalizer.canonical_key(os.path.join(os.getcwd(), "photos"))

    def test_case_insensitive_by_default(self, temp_dir):
        normalizer = PathNormalizer()
        assert normalizer.canonical_key(temp_dir / "Data") == normalizer.canonical_key(temp_dir / "DATA")

    @pytest.mark.skipif(os.name == "nt", reason="normcase always folds case on Windows")
    def test_case_sensitive_keeps_case(self, temp_dir):
        normalizer = PathNormalizer(case_sensitive=True)
        assert normalizer.canonical_key(temp_dir / "Data") != normalizer.canonical_key(temp_dir / "data")

    def test_symlinks_not_resolved(self, temp_dir):
        """Different names for the same directory keep different keys."""
        target = temp_dir / "target"
        target.mkdir()
        link = temp_dir / "link"
        try:
            link.symlink_to(target, target_is_directory=True)
        except (OSError, NotImplementedError):
            pytest.skip("symlinks not supported")

        normalizer = PathNormalizer()
        assert normalizer.canonical_key(link) != normalizer.canonical_key(target)


class TestIdentityRegistry:
    """Directory and file ids start at 1 and grow independently."""

    def test_first_directory_gets_id_one(self):
        registry = IdentityRegistry()
        assert registry.assign_directory_id("/a") == (1, False)

    def test_repeated_key_returns_existing_id(self):
        registry = IdentityRegistry()
        registry.assign_directory_id("/a")
        registry.assign_directory_id("/b")

        assert registry.assign_directory_id("/a") == (1, True)
        assert registry.directory_count == 2

    def test_revisit_does_not_consume_an_id(self):
        registry = IdentityRegistry()
        registry.assign_directory_id("/a")
        registry.assign_directory_id("/a")

        assert registry.assign_directory_id("/b") == (2, False)

    def test_file_ids_independent_of_directory_ids(self):
        registry = IdentityRegistry()
        registry.assign_directory_id("/a")
        registry.assign_directory_id("/b")

        assert registry.next_file_id() == 1
        assert registry.next_file_id() == 2
        assert registry.file_count == 2
        assert registry.directory_count == 2


class TestWorklist:
    """First in, first out."""

    def test_fifo_order(self):
        worklist = Worklist()
        for name in ("a", "b", "c"):
            worklist.push(WorklistEntry(path=name, depth=0, parent_id=0))

        assert [worklist.pop().path for _ in range(3)] == ["a", "b", "c"]

    def test_empty_worklist_is_falsy(self):
        worklist = Worklist()
        assert not worklist
        assert len(worklist) == 0

        worklist.push(WorklistEntry(path="a", depth=0, parent_id=0))
        assert worklist
        assert len(worklist) == 1

    def test_total_enqueued_counts_every_push(self):
        worklist = Worklist()
        worklist.push(WorklistEntry(path="a", depth=0, parent_id=0))
        worklist.pop()
        worklist.push(WorklistEntry(path="b", depth=1, parent_id=1))

        assert worklist.total_enqueued == 2

    def test_pop_on_empty_raises(self):
        with pytest.raises(IndexError):
            Worklist().pop()
