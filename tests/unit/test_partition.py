"""
Unit tests for work partitioning and root enumeration.
"""

import os
from pathlib import Path
from unittest.mock import patch
import pytest

from filesearch.models.search_query import SearchScope
from filesearch.tools.partition import partition, partition_all, prune_nested_roots
from filesearch.tools.platforms import Platform
from filesearch.tools.roots import enumerate_roots


class FixedRootsPlatform(Platform):
    def __init__(self, roots):
        self.roots = roots

    def search_roots(self):
        return list(self.roots)


def make_symlink(target, link):
    try:
        os.symlink(target, link)
    except (OSError, NotImplementedError):
        pytest.skip("Symbolic links are not available")


class TestPartition:
    """Test cases for partition()."""

    def test_file_root(self, tmp_path):
        target = tmp_path / "single.txt"
        target.write_text("x")

        assert partition(target) == [target]

    def test_directory_root_yields_children(self, tmp_path):
        (tmp_path / "a").mkdir()
        (tmp_path / "b").mkdir()
        (tmp_path / "c.txt").write_text("x")

        items = partition(tmp_path)

        assert sorted(items) == [tmp_path / "a", tmp_path / "b", tmp_path / "c.txt"]

    def test_empty_directory_yields_itself(self, tmp_path):
        assert partition(tmp_path) == [tmp_path]

    def test_unreadable_directory_yields_itself(self, tmp_path):
        (tmp_path / "child").mkdir()

        with patch("filesearch.tools.partition.os.scandir", side_effect=PermissionError("denied")):
            assert partition(tmp_path) == [tmp_path]

    def test_missing_root_yields_nothing(self, tmp_path):
        assert partition(tmp_path / "missing") == []

    def test_symlinked_root_keeps_link_path(self, tmp_path):
        target = tmp_path / "storage" / "x1"
        target.mkdir(parents=True)
        (target / "inside.txt").write_text("x")
        link = tmp_path / "myproject"
        make_symlink(target, link)

        assert partition(link) == [link / "inside.txt"]

    def test_symlinked_children_are_left_out(self, tmp_path):
        (tmp_path / "real.txt").write_text("x")
        make_symlink(tmp_path / "real.txt", tmp_path / "alias.txt")

        assert partition(tmp_path) == [tmp_path / "real.txt"]

    def test_root_linked_to_file(self, tmp_path):
        (tmp_path / "target.txt").write_text("x")
        link = tmp_path / "shortcut.txt"
        make_symlink(tmp_path / "target.txt", link)

        assert partition(link) == [link]

    def test_dangling_root_link_yields_nothing(self, tmp_path):
        link = tmp_path / "dangling"
        make_symlink(tmp_path / "missing", link)

        assert partition(link) == []

    def test_partition_all_concatenates(self, tmp_path):
        (tmp_path / "one").mkdir()
        (tmp_path / "one" / "f.txt").write_text("x")
        (tmp_path / "two.txt").write_text("x")

        items = partition_all([tmp_path / "one", tmp_path / "two.txt", tmp_path / "missing"])

        assert items == [tmp_path / "one" / "f.txt", tmp_path / "two.txt"]

    def test_partition_all_skips_nested_roots(self, tmp_path):
        (tmp_path / "a").mkdir()
        (tmp_path / "a" / "f.txt").write_text("x")

        items = partition_all([tmp_path / "a", tmp_path, tmp_path / "a"])

        assert items == [tmp_path / "a"]


class TestPruneNestedRoots:
    """Test cases for prune_nested_roots()."""

    def test_nested_and_repeated_roots_dropped(self):
        roots = [Path("/srv/data/a"), Path("/srv/data"), Path("/opt"), Path("/srv/data")]

        assert prune_nested_roots(roots) == [Path("/srv/data"), Path("/opt")]

    def test_sibling_prefixes_are_not_nested(self):
        roots = [Path("/srv/data"), Path("/srv/database")]

        assert prune_nested_roots(roots) == roots

    def test_links_are_not_resolved(self, tmp_path):
        (tmp_path / "real").mkdir()
        make_symlink(tmp_path / "real", tmp_path / "alias")

        roots = [tmp_path / "real", tmp_path / "alias"]

        assert prune_nested_roots(roots) == roots


class TestEnumerateRoots:
    """Test cases for enumerate_roots()."""

    def test_rooted_scope_returns_path_without_checking(self):
        roots = enumerate_roots(SearchScope.rooted("/definitely/not/here"))
        assert roots == [Path("/definitely/not/here")]

    def test_rooted_scope_expands_home(self):
        roots = enumerate_roots(SearchScope.rooted("~/projects"))
        assert roots == [Path.home() / "projects"]

    def test_whole_machine_uses_platform(self):
        platform = FixedRootsPlatform([Path("/"), Path("/mnt/data")])

        roots = enumerate_roots(SearchScope.whole_machine(), platform)

        assert roots == [Path("/"), Path("/mnt/data")]

    def test_whole_machine_may_be_empty(self):
        assert enumerate_roots(SearchScope.whole_machine(), FixedRootsPlatform([])) == []
