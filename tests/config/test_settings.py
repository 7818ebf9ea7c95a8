"""Tests for WalidatorSettings — unified settings with TOML source."""

from __future__ import annotations

from pathlib import Path

import click
import pytest
from pydantic import ValidationError

from walidator.config.settings import CONFIG_ENV_VAR, WalidatorSettings, find_config


class TestFindConfig:
    def test_none_when_absent(self, project_root: Path) -> None:
        assert find_config(project_root) is None

    def test_walks_up(self, project_root: Path, write_config) -> None:
        path = write_config("")
        nested = project_root / "x" / "y"
        nested.mkdir(parents=True)
        assert find_config(nested) == path

    def test_defaults_to_cwd(self, project_root: Path, write_config) -> None:
        assert find_config() == write_config("")

    def test_env_var_wins(self, project_root: Path, write_config, monkeypatch: pytest.MonkeyPatch) -> None:
        write_config("")
        other = project_root / "other.toml"
        other.write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(other))
        assert find_config(project_root) == other

    def test_env_var_missing_file(self, project_root: Path, write_config, monkeypatch: pytest.MonkeyPatch) -> None:
        write_config("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(project_root / "missing.toml"))
        assert find_config(project_root) is None


class TestDefaults:
    def test_all_defaults(self, project_root: Path) -> None:
        settings = WalidatorSettings.from_cli(project_root=project_root)
        assert settings.project_root == project_root
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.verbose is False
        assert settings.validator.tag_name == "validate"
        assert settings.plugins.enabled is True
        assert settings.patterns == {}
        assert settings.fields == {}

    def test_frozen(self, project_root: Path) -> None:
        settings = WalidatorSettings.from_cli(project_root=project_root)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_sections(self, project_root: Path, write_config) -> None:
        write_config(
            '[validator]\ntag_name = "rules"\n'
            '[patterns]\nslug = "^[a-z-]+$"\n'
            '[fields]\n"origin.lat" = "required,latitude"\n'
        )
        settings = WalidatorSettings.from_cli(project_root=project_root)
        assert settings.validator.tag_name == "rules"
        assert settings.patterns == {"slug": "^[a-z-]+$"}
        assert settings.fields == {"origin.lat": "required,latitude"}
        assert settings.config_path == project_root / "walidator.toml"

    def test_walk_up_discovery(self, project_root: Path, write_config) -> None:
        write_config('[validator]\ntag_name = "found"\n')
        nested = project_root / "a" / "b"
        nested.mkdir(parents=True)
        settings = WalidatorSettings.from_cli(project_root=nested)
        assert settings.validator.tag_name == "found"

    def test_root_defaults_to_config_parent(self, project_root: Path, write_config) -> None:
        write_config("")
        settings = WalidatorSettings.from_cli(config_path=str(project_root / "walidator.toml"))
        assert settings.project_root == project_root

    def test_explicit_config_path(self, project_root: Path) -> None:
        custom = project_root / "custom" / "my.toml"
        custom.parent.mkdir()
        custom.write_text("[plugins]\nenabled = false\n")
        settings = WalidatorSettings.from_cli(config_path=str(custom))
        assert settings.plugins.enabled is False
        assert settings.config_path == custom

    def test_missing_explicit_config(self, project_root: Path) -> None:
        with pytest.raises(click.ClickException, match="not found"):
            WalidatorSettings.from_cli(config_path=str(project_root / "nope.toml"))

    def test_invalid_toml(self, project_root: Path, write_config) -> None:
        write_config("[validator\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            WalidatorSettings.from_cli(project_root=project_root)

    def test_empty_tag_name_rejected(self, project_root: Path, write_config) -> None:
        write_config('[validator]\ntag_name = "  "\n')
        with pytest.raises(ValidationError):
            WalidatorSettings.from_cli(project_root=project_root)

    def test_sparse_file_keeps_other_defaults(self, project_root: Path, write_config) -> None:
        write_config('[patterns]\nsku = "^[A-Z]{3}-\\\\d{4}$"\n')
        settings = WalidatorSettings.from_cli(project_root=project_root)
        assert settings.patterns == {"sku": r"^[A-Z]{3}-\d{4}$"}
        assert settings.plugins.enabled is True
        assert settings.validator.tag_name == "validate"


class TestPriority:
    def test_env_overrides_toml(self, project_root: Path, write_config, monkeypatch: pytest.MonkeyPatch) -> None:
        write_config('[validator]\ntag_name = "from_toml"\n')
        monkeypatch.setenv("WALIDATOR_VALIDATOR__TAG_NAME", "from_env")
        settings = WalidatorSettings.from_cli(project_root=project_root)
        assert settings.validator.tag_name == "from_env"

    def test_cli_flags_override_env(self, project_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("WALIDATOR_VERBOSE", "false")
        settings = WalidatorSettings.from_cli(project_root=project_root, verbose=True)
        assert settings.verbose is True

    def test_plugins_flag_overrides_toml(self, project_root: Path, write_config) -> None:
        write_config("[plugins]\nenabled = true\n")
        settings = WalidatorSettings.from_cli(project_root=project_root, plugins={"enabled": False})
        assert settings.plugins.enabled is False
