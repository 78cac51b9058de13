"""
Tests for configuration loading — builds.yml parsing and validation.
"""

import textwrap
from pathlib import Path

import pytest

from docbundle.core.config.loader import ConfigError, find_config_file, load_config


@pytest.fixture
def valid_builds_yml(tmp_path: Path) -> Path:
    """Create a valid builds.yml in a temp directory."""
    content = textwrap.dedent("""\
        builds:
          - name: Project 1
            project: projects/project1/main.project.md
            output: output1/CLAUDE.local.md
            common:
              - common/style.md
              - common/testing.md
            skills:
              - review
            link_to: ~/code/project1/CLAUDE.local.md
          - name: Project 2
            project: projects/project2/main.project.md
            output: output2/CLAUDE.local.md
            common: []
    """)
    path = tmp_path / "builds.yml"
    path.write_text(content)
    return path


class TestLoadConfig:
    """Tests for load_config()."""

    def test_load_valid_config(self, valid_builds_yml: Path):
        config = load_config(valid_builds_yml)
        assert len(config.builds) == 2
        assert config.builds[0].name == "Project 1"
        assert config.builds[1].name == "Project 2"

    def test_fields_populated(self, valid_builds_yml: Path):
        first = load_config(valid_builds_yml).get_build("Project 1")
        assert first is not None
        assert first.common == ["common/style.md", "common/testing.md"]
        assert first.skills == ["review"]
        assert first.link_to == "~/code/project1/CLAUDE.local.md"

    def test_skills_absent_is_none(self, valid_builds_yml: Path):
        second = load_config(valid_builds_yml).get_build("Project 2")
        assert second is not None
        assert second.skills is None
        assert second.link_to is None

    def test_null_common_is_empty(self, tmp_path: Path):
        path = tmp_path / "builds.yml"
        path.write_text("builds:\n  - name: a\n    project: p.md\n    output: o.md\n    common:\n")
        assert load_config(path).builds[0].common == []

    def test_empty_file_is_zero_builds(self, tmp_path: Path):
        path = tmp_path / "builds.yml"
        path.write_text("")
        assert load_config(path).builds == []

    def test_no_builds_key_is_zero_builds(self, tmp_path: Path):
        path = tmp_path / "builds.yml"
        path.write_text("other: 1\n")
        assert load_config(path).builds == []

    def test_missing_file_raises(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "nonexistent.yml")

    def test_invalid_yaml_raises(self, tmp_path: Path):
        path = tmp_path / "builds.yml"
        path.write_text("builds: [")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(path)

    def test_non_mapping_raises(self, tmp_path: Path):
        path = tmp_path / "builds.yml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ConfigError, match="Expected a YAML mapping"):
            load_config(path)

    def test_missing_required_field_raises(self, tmp_path: Path):
        path = tmp_path / "builds.yml"
        path.write_text("builds:\n  - name: a\n    project: p.md\n")
        with pytest.raises(ConfigError, match="Invalid builds configuration"):
            load_config(path)


class TestFindConfigFile:
    """Tests for find_config_file()."""

    def test_find_in_current_dir(self, valid_builds_yml: Path):
        found = find_config_file(valid_builds_yml.parent)
        assert found is not None
        assert found.name == "builds.yml"

    def test_find_in_parent_dir(self, valid_builds_yml: Path):
        child = valid_builds_yml.parent / "projects" / "project1"
        child.mkdir(parents=True)
        found = find_config_file(child)
        assert found is not None
        assert found == valid_builds_yml.resolve()

    def test_not_found(self, tmp_path: Path):
        empty = tmp_path / "empty"
        empty.mkdir()
        # May find one higher up on the real filesystem; only assert it isn't ours
        found = find_config_file(empty)
        assert found is None or found.parent != empty
