"""Tests for gitinfogen.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from gitinfogen.config import ConfigError, GitInfoConfig, load_config
from gitinfogen.diagnostics import SourceLocation
from gitinfogen.models import TargetDescriptor


def test_load_config_returns_defaults_when_missing(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.delenv("GITINFOGEN_GIT", raising=False)
    config = load_config(tmp_path)

    assert isinstance(config, GitInfoConfig)
    assert config.root == tmp_path.resolve()
    assert config.git.executable == "git"
    assert config.output.directory == tmp_path.resolve() / "obj" / "generated"
    assert config.output.templates_dir is None
    assert config.targets == []


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".gitinfogen.yml"
    config_file.write_text(
        """
git:
  executable: /usr/local/bin/git
output:
  directory: build/generated
  templates_dir: templates
targets:
  - name: BuildInfo
    namespace: App
  - name: Repository
    namespace: App.Data
    kind: struct
    type_parameters: [T]
    full_name: App.Data.Repository<T>
    location:
      path: src/Repository.cs
      line: 7
      column: 22
""",
        encoding="utf-8",
    )

    config = load_config(config_file)
    root = tmp_path.resolve()

    assert config.git.executable == "/usr/local/bin/git"
    assert config.output.directory == root / "build" / "generated"
    assert config.output.templates_dir == root / "templates"
    assert config.targets[0] == TargetDescriptor(name="BuildInfo", namespace="App")
    assert config.targets[1] == TargetDescriptor(
        name="Repository",
        namespace="App.Data",
        full_name="App.Data.Repository<T>",
        kind="struct",
        type_parameters=("T",),
        location=SourceLocation(path="src/Repository.cs", line=7, column=22),
    )


def test_load_config_environment_overrides_default_executable(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("GITINFOGEN_GIT", "/opt/git/bin/git")
    assert load_config(tmp_path).git.executable == "/opt/git/bin/git"


def test_load_config_empty_file_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / ".gitinfogen.yml").write_text("\n", encoding="utf-8")
    assert load_config(tmp_path).targets == []


def test_load_config_rejects_non_mapping_root(tmp_path: Path) -> None:
    (tmp_path / ".gitinfogen.yml").write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_rejects_target_without_name(tmp_path: Path) -> None:
    (tmp_path / ".gitinfogen.yml").write_text("targets:\n  - namespace: App\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="missing a name"):
        load_config(tmp_path)


def test_load_config_reports_yaml_syntax_errors(tmp_path: Path) -> None:
    (tmp_path / ".gitinfogen.yml").write_text("targets: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="Failed to parse"):
        load_config(tmp_path)
