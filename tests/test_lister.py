"""
Unit tests for NodeListerImpl: separate subdirectory / file listings, error classification, metadata.
"""
import errno
import os
import pytest

from dircrawl.core import lister as lister_module
from dircrawl.core.lister import NodeListerImpl, classify_listing_error
from dircrawl.core.models import ErrorKind


class TestClassifyListingError:
    """OSError subclasses map to permission / not-found / I/O kinds."""

    @pytest.mark.parametrize("error, listing_files, expected", [
        (PermissionError(errno.EACCES, "denied"), False, ErrorKind.SUBDIR_PERMISSION_DENIED),
        (PermissionError(errno.EACCES, "denied"), True, ErrorKind.FILE_LIST_PERMISSION_DENIED),
        (FileNotFoundError(errno.ENOENT, "missing"), False, ErrorKind.SUBDIR_NOT_FOUND),
        (FileNotFoundError(errno.ENOENT, "missing"), True, ErrorKind.FILE_LIST_NOT_FOUND),
        (NotADirectoryError(errno.ENOTDIR, "not a dir"), False, ErrorKind.SUBDIR_NOT_FOUND),
        (OSError(errno.EIO, "io"), False, ErrorKind.SUBDIR_IO),
        (OSError(errno.EIO, "io"), True, ErrorKind.FILE_LIST_IO),
    ])
    def test_classification(self, error, listing_files, expected):
        assert classify_listing_error(error, listing_files) is expected


class TestNodeListerImpl:
    """Listings against a real temporary tree."""

    def test_children_and_files_are_separate(self, sample_tree):
        lister = NodeListerImpl()
        root = str(sample_tree["root"])

        children = lister.list_children(root)
        files = lister.list_files(root)

        assert children.ok and files.ok
        assert children.paths == [str(sample_tree["b"]), str(sample_tree["c"])]
        assert files.paths == [str(sample_tree["f"])]

    def test_listings_sorted(self, temp_dir):
        for name in ("zeta", "alpha", "mid"):
            (temp_dir / name).mkdir()
            (temp_dir / f"{name}.txt").write_text("x")

        lister = NodeListerImpl()

        assert [os.path.basename(p) for p in lister.list_children(str(temp_dir)).paths] == ["alpha", "mid", "zeta"]
        assert [os.path.basename(p) for p in lister.list_files(str(temp_dir)).paths] == \
            ["alpha.txt", "mid.txt", "zeta.txt"]

    def test_empty_directory(self, sample_tree):
        lister = NodeListerImpl()

        assert lister.list_children(str(sample_tree["b"])).paths == []
        assert lister.list_files(str(sample_tree["b"])).paths == []

    def test_missing_directory_classified(self, temp_dir):
        lister = NodeListerImpl()

        children = lister.list_children(str(temp_dir / "gone"))
        files = lister.list_files(str(temp_dir / "gone"))

        assert children.error is ErrorKind.SUBDIR_NOT_FOUND
        assert files.error is ErrorKind.FILE_LIST_NOT_FOUND
        assert children.paths == []
        assert children.message

    def test_permission_denied_classified(self, temp_dir, monkeypatch):
        def deny(path="."):
            raise PermissionError(errno.EACCES, "Permission denied", str(path))

        monkeypatch.setattr(lister_module.os, "scandir", deny)

        result = NodeListerImpl().list_children(str(temp_dir))

        assert result.error is ErrorKind.SUBDIR_PERMISSION_DENIED
        assert "Permission denied" in result.message

    def test_symlinked_directory_skipped_by_default(self, sample_tree):
        link = sample_tree["root"] / "link"
        try:
            link.symlink_to(sample_tree["c"], target_is_directory=True)
        except (OSError, NotImplementedError):
            pytest.skip("symlinks not supported")

        default = NodeListerImpl().list_children(str(sample_tree["root"]))
        following = NodeListerImpl(follow_symlinks=True).list_children(str(sample_tree["root"]))

        assert str(link) not in default.paths
        assert str(link) in following.paths
        # A link to a directory is never reported as a file
        assert str(link) not in NodeListerImpl().list_files(str(sample_tree["root"])).paths

    def test_is_directory(self, sample_tree):
        assert NodeListerImpl.is_directory(str(sample_tree["root"]))
        assert not NodeListerImpl.is_directory(str(sample_tree["f"]))
        assert not NodeListerImpl.is_directory(str(sample_tree["root"] / "missing"))


class TestMetadata:

    def test_stat_file_reports_size_and_times(self, sample_tree):
        info = NodeListerImpl.stat_file(str(sample_tree["d"]))

        assert info.ok
        assert info.size == 1024
        assert info.times.modified_at is not None
        assert info.times.created_at is not None

    def test_stat_directory(self, sample_tree):
        info = NodeListerImpl.stat_directory(str(sample_tree["c"]))

        assert info.ok
        assert info.times.accessed_at is not None

    def test_stat_missing_node(self, temp_dir):
        info = NodeListerImpl.stat_file(str(temp_dir / "missing"))

        assert not info.ok
        assert info.size == -1
        assert info.message
