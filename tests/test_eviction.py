"""
Tests for size-bounded eviction (remove_old_files).
"""
import os

import pytest

import fsprune.core.eviction as eviction
from fsprune.core.eviction import collect_candidates, remove_old_files
from fsprune.core.size import get_size
from fsprune.setup.config import EvictionScope

BASE_MTIME = 1_700_000_000


def names(paths):
    return [os.path.basename(p) for p in paths]


class TestScenarios:
    """The a/b/c directory: 100 bytes each, oldest to newest."""

    def test_evicts_oldest_until_under_budget(self, abc_dir):
        removed = remove_old_files(str(abc_dir), 150)

        assert names(removed) == ["a", "b"]
        assert removed == [os.path.join(str(abc_dir), "a"), os.path.join(str(abc_dir), "b")]
        assert not (abc_dir / "a").exists()
        assert not (abc_dir / "b").exists()
        assert (abc_dir / "c").exists()

    def test_under_budget_is_noop(self, abc_dir):
        assert remove_old_files(str(abc_dir), 350) == []
        assert sorted(os.listdir(abc_dir)) == ["a", "b", "c"]

    def test_size_equal_to_budget_removes_nothing(self, abc_dir):
        assert remove_old_files(str(abc_dir), 300) == []
        assert sorted(os.listdir(abc_dir)) == ["a", "b", "c"]

    def test_stops_exactly_at_budget(self, abc_dir):
        removed = remove_old_files(str(abc_dir), 200)
        assert names(removed) == ["a"]
        assert get_size(str(abc_dir)) == 200

    def test_zero_budget_removes_everything(self, abc_dir):
        removed = remove_old_files(str(abc_dir), 0)
        assert names(removed) == ["a", "b", "c"]
        assert os.listdir(abc_dir) == []


class TestProperties:

    @pytest.fixture
    def tree(self, tmp_path, file_factory):
        root = tmp_path / "tree"
        file_factory(root / "top_new.bin", 300, BASE_MTIME + 500)
        file_factory(root / "top_old.bin", 50, BASE_MTIME + 10)
        file_factory(root / "sub" / "mid.bin", 120, BASE_MTIME + 200)
        file_factory(root / "sub" / "deep" / "oldest.bin", 80, BASE_MTIME)
        file_factory(root / "sub" / "deep" / "newer.bin", 40, BASE_MTIME + 300)
        return root

    def test_size_decreases_by_removed_bytes(self, tree):
        before = get_size(str(tree))
        sizes = {}
        for dirpath, _, filenames in os.walk(tree):
            for filename in filenames:
                file_path = os.path.join(dirpath, filename)
                sizes[file_path] = os.path.getsize(file_path)

        removed = remove_old_files(str(tree), 400)
        after = get_size(str(tree))

        assert after <= before
        assert after == before - sum(sizes[p] for p in removed)
        assert after <= 400

    def test_removal_order_is_oldest_first(self, tree):
        mtimes = {}
        for dirpath, _, filenames in os.walk(tree):
            for filename in filenames:
                file_path = os.path.join(dirpath, filename)
                mtimes[file_path] = os.stat(file_path).st_mtime

        removed = remove_old_files(str(tree), 0)
        removed_mtimes = [mtimes[p] for p in removed]

        assert len(removed) == 5
        assert removed_mtimes == sorted(removed_mtimes)
        assert len(set(removed_mtimes)) == len(removed_mtimes)
        assert names(removed) == ["oldest.bin", "top_old.bin", "mid.bin", "newer.bin", "top_new.bin"]

    def test_direct_scope_ignores_subdirectories(self, tree):
        removed = remove_old_files(str(tree), 0, scope=EvictionScope.DIRECT)

        assert names(removed) == ["top_old.bin", "top_new.bin"]
        assert (tree / "sub" / "deep" / "oldest.bin").exists()

    def test_ties_break_by_path(self, tmp_path, file_factory):
        d = tmp_path / "ties"
        for name in ["zeta", "alpha", "mid"]:
            file_factory(d / name, 10, BASE_MTIME)

        removed = remove_old_files(str(d), 0)
        assert names(removed) == ["alpha", "mid", "zeta"]

    def test_dry_run_deletes_nothing(self, abc_dir):
        planned = remove_old_files(str(abc_dir), 150, dry_run=True)

        assert names(planned) == ["a", "b"]
        assert sorted(os.listdir(abc_dir)) == ["a", "b", "c"]
        assert remove_old_files(str(abc_dir), 150) == planned

    def test_shortfall_is_not_an_error(self, tmp_path, file_factory):
        d = tmp_path / "d"
        file_factory(d / "only", 100, BASE_MTIME)
        (d / "empty_sub").mkdir()

        removed = remove_old_files(str(d), 0)
        assert names(removed) == ["only"]
        assert get_size(str(d)) == 0


class TestSymlinks:

    def test_symlinks_only_directory(self, tmp_path, file_factory):
        target = file_factory(tmp_path / "outside" / "big.bin", 10_000, BASE_MTIME)
        d = tmp_path / "links"
        d.mkdir()
        for i in range(5):
            os.symlink(target, d / f"link{i}")

        assert get_size(str(d)) == 0
        assert remove_old_files(str(d), 0) == []
        assert len(os.listdir(d)) == 5
        assert os.path.exists(target)

    def test_links_are_never_evicted(self, tmp_path, file_factory):
        target = file_factory(tmp_path / "outside" / "big.bin", 10_000, BASE_MTIME - 1000)
        d = tmp_path / "mixed"
        file_factory(d / "real", 100, BASE_MTIME)
        os.symlink(target, d / "link_to_file")
        os.symlink(tmp_path / "outside", d / "link_to_dir")

        removed = remove_old_files(str(d), 0)

        assert names(removed) == ["real"]
        assert os.path.islink(d / "link_to_file")
        assert os.path.islink(d / "link_to_dir")
        assert os.path.exists(target)


class TestPartialFailure:

    def test_undeletable_file_is_skipped(self, abc_dir, monkeypatch):
        real_remove = eviction.remove_file
        blocked = os.path.join(str(abc_dir), "a")

        def flaky_remove(file_path):
            if file_path == blocked:
                raise PermissionError(13, "Permission denied", file_path)
            real_remove(file_path)

        monkeypatch.setattr(eviction, "remove_file", flaky_remove)

        removed = remove_old_files(str(abc_dir), 150)

        assert names(removed) == ["b", "c"]
        assert (abc_dir / "a").exists()
        assert not (abc_dir / "b").exists()
        assert not (abc_dir / "c").exists()

    def test_file_vanishing_before_deletion(self, abc_dir, monkeypatch):
        real_remove = eviction.remove_file
        racy = os.path.join(str(abc_dir), "b")

        def racing_remove(file_path):
            if file_path == racy:
                os.remove(file_path)
                raise FileNotFoundError(2, "No such file or directory", file_path)
            real_remove(file_path)

        monkeypatch.setattr(eviction, "remove_file", racing_remove)

        removed = remove_old_files(str(abc_dir), 150)

        assert names(removed) == ["a", "c"]
        assert os.listdir(abc_dir) == []

    def test_unreadable_subdirectory_is_left_alone(self, tmp_path, file_factory, monkeypatch):
        root = tmp_path / "root"
        file_factory(root / "old", 10, BASE_MTIME)
        file_factory(root / "new", 20, BASE_MTIME + 60)
        file_factory(root / "locked" / "hidden", 1000, BASE_MTIME - 60)
        real_scandir = os.scandir

        def fake_scandir(path):
            if os.path.basename(str(path)) == "locked":
                raise PermissionError(13, "Permission denied", str(path))
            return real_scandir(path)

        monkeypatch.setattr(eviction.os, "scandir", fake_scandir)

        removed = remove_old_files(str(root), 0)

        assert names(removed) == ["old", "new"]
        assert (root / "locked" / "hidden").exists()


class TestErrors:

    def test_missing_directory(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            remove_old_files(str(tmp_path / "nope"), 10)

    def test_file_instead_of_directory(self, tmp_path, file_factory):
        file_path = file_factory(tmp_path / "f", 10)
        with pytest.raises(NotADirectoryError):
            remove_old_files(file_path, 0)
        assert os.path.exists(file_path)

    def test_negative_budget(self, abc_dir):
        with pytest.raises(ValueError):
            remove_old_files(str(abc_dir), -1)


def test_collect_candidates_sorted_with_sizes(abc_dir):
    candidates = collect_candidates(str(abc_dir))
    assert names(c.path for c in candidates) == ["a", "b", "c"]
    assert [c.size for c in candidates] == [100, 100, 100]
    assert [c.modified_time for c in candidates] == [BASE_MTIME, BASE_MTIME + 60, BASE_MTIME + 120]


def test_undecodable_names_are_evicted(tmp_path):
    d = tmp_path / "raw"
    d.mkdir()
    raw_path = os.path.join(os.fsencode(str(d)), b"bad\xff")
    with open(raw_path, "wb") as f:
        f.write(b"x" * 10)

    removed = remove_old_files(str(d), 0)

    assert len(removed) == 1
    assert os.listdir(d) == []
