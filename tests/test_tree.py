"""Tests for tree walking and origin classification."""

from __future__ import annotations

from pathlib import Path

from bunch.tree import extension, find_affected_origins, origin_of, walk_tree


class TestExtension:
    """Test suffix extraction from file names."""

    def test_last_suffix(self) -> None:
        assert extension(Path("src/a.txt.d1")) == "d1"

    def test_no_dot(self) -> None:
        assert extension(Path("Makefile")) == ""

    def test_dotfile(self) -> None:
        assert extension(Path(".bunch")) == "bunch"

    def test_origin_of(self) -> None:
        assert origin_of(Path("src/a.txt.d1")) == Path("src/a.txt")


class TestWalkTree:
    """Test tree traversal and build output skipping."""

    def test_yields_files_and_directories(self, repo: Path, make_tree) -> None:
        make_tree({"a.txt": "", "sub/b.txt": ""})
        entries = set(walk_tree(repo))
        assert entries == {repo / "a.txt", repo / "sub", repo / "sub" / "b.txt"}

    def test_skips_build_resources(self, repo: Path, make_tree) -> None:
        make_tree({
            "build/resources/main/a.txt.d1": "copy",
            "build/classes/b.txt.d1": "compiled",
        })
        entries = set(walk_tree(repo))
        assert repo / "build" / "resources" not in entries
        assert not any("resources" in entry.parts for entry in entries)
        assert repo / "build" / "classes" / "b.txt.d1" in entries

    def test_resources_outside_build_walked(self, repo: Path, make_tree) -> None:
        make_tree({"src/resources/a.txt.d1": "x"})
        assert repo / "src" / "resources" / "a.txt.d1" in set(walk_tree(repo))

    def test_root_that_is_build_resources(self, tmp_path: Path) -> None:
        root = tmp_path / "build" / "resources"
        root.mkdir(parents=True)
        (root / "a.txt.d1").write_text("x")
        assert list(walk_tree(root)) == []

    def test_is_lazy(self, repo: Path, make_tree) -> None:
        make_tree({"a.txt": ""})
        entries = walk_tree(repo)
        assert next(entries) == repo / "a.txt"


class TestFindAffectedOrigins:
    """Test mapping patch files to their origins."""

    def test_maps_patches_to_origins(self, repo: Path, make_tree) -> None:
        make_tree({
            "a.txt": "base",
            "a.txt.d1": "d1",
            "sub/b.kt.d2": "d2",
            "c.txt.other": "ignored",
        })
        origins = find_affected_origins(repo, ["d1", "d2"])
        assert origins == {repo / "a.txt", repo / "sub" / "b.kt"}

    def test_patches_of_same_origin_collapse(self, repo: Path, make_tree) -> None:
        make_tree({"a.txt.d1": "one", "a.txt.d2": "two"})
        assert find_affected_origins(repo, {"d1", "d2"}) == {repo / "a.txt"}

    def test_origin_suffix_not_a_donor(self, repo: Path, make_tree) -> None:
        make_tree({"a.txt.173": "origin branch copy"})
        assert find_affected_origins(repo, ["as32"]) == set()

    def test_build_resources_ignored(self, repo: Path, make_tree) -> None:
        make_tree({"build/resources/a.txt.d1": "x"})
        assert find_affected_origins(repo, ["d1"]) == set()

    def test_suffixed_directory_included(self, repo: Path) -> None:
        (repo / "pkg.d1").mkdir()
        assert find_affected_origins(repo, ["d1"]) == {repo / "pkg"}

    def test_missing_root(self, tmp_path: Path) -> None:
        assert find_affected_origins(tmp_path / "missing", ["d1"]) == set()
