"""
Tests for override resolution — nearest-first upward walk bounded by a root.
"""

from pathlib import Path

import pytest

from docbundle.core.services.overrides import override_chain, resolve_override


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    """projects/team/app plus a sibling outside the projects root."""
    root = tmp_path / "projects"
    (root / "team" / "app").mkdir(parents=True)
    (tmp_path / "elsewhere").mkdir()
    return root


class TestOverrideChain:
    def test_nearest_first_up_to_root(self, tree: Path):
        chain = override_chain(tree / "team" / "app", tree)
        assert chain == [
            (tree / "team" / "app").resolve(),
            (tree / "team").resolve(),
            tree.resolve(),
        ]

    def test_start_at_root(self, tree: Path):
        assert override_chain(tree, tree) == [tree.resolve()]

    def test_outside_root_is_empty(self, tree: Path):
        assert override_chain(tree.parent / "elsewhere", tree) == []

    def test_parent_of_root_is_outside(self, tree: Path):
        assert override_chain(tree.parent, tree) == []


class TestResolveOverride:
    def test_own_directory_wins(self, tree: Path):
        app = tree / "team" / "app"
        (app / "rules.md").write_text("app")
        (tree / "team" / "rules.md").write_text("team")
        (tree / "rules.md").write_text("root")

        found = resolve_override(app, tree, "rules.md")
        assert found is not None
        assert found.read_text() == "app"

    def test_parent_used_when_own_missing(self, tree: Path):
        (tree / "team" / "rules.md").write_text("team")
        found = resolve_override(tree / "team" / "app", tree, "rules.md")
        assert found is not None
        assert found.read_text() == "team"

    def test_root_itself_is_checked(self, tree: Path):
        (tree / "rules.md").write_text("root")
        found = resolve_override(tree / "team" / "app", tree, "rules.md")
        assert found is not None
        assert found.read_text() == "root"

    def test_nothing_found(self, tree: Path):
        assert resolve_override(tree / "team" / "app", tree, "rules.md") is None

    def test_never_looks_above_root(self, tree: Path):
        (tree.parent / "rules.md").write_text("above")
        assert resolve_override(tree / "team" / "app", tree, "rules.md") is None

    def test_start_outside_root_inspects_nothing(self, tree: Path):
        outside = tree.parent / "elsewhere"
        (outside / "rules.md").write_text("outside")
        seen: list[Path] = []

        def predicate(path: Path) -> bool:
            seen.append(path)
            return path.exists()

        assert resolve_override(outside, tree, "rules.md", predicate) is None
        assert seen == []

    def test_multi_part_name_with_predicate(self, tree: Path):
        skill = tree / "team" / "skills" / "review"
        skill.mkdir(parents=True)
        (tree / "team" / "app" / "skills").mkdir()
        (tree / "team" / "app" / "skills" / "review").write_text("not a dir")

        found = resolve_override(
            tree / "team" / "app", tree, Path("skills") / "review", Path.is_dir
        )
        assert found == skill.resolve()

    def test_deterministic(self, tree: Path):
        (tree / "team" / "rules.md").write_text("team")
        first = resolve_override(tree / "team" / "app", tree, "rules.md")
        second = resolve_override(tree / "team" / "app", tree, "rules.md")
        assert first == second
