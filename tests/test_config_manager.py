"""Unit tests for settings loading and layering."""

import os
from pathlib import Path

import pytest
import yaml

from mediatidy.config import (
    ConfigError,
    ConfigManager,
    DEFAULT_CONFIG_PATH,
    MediaTidyConfig,
    build_config,
    environment_layer,
    merge_layers,
)


def _write_settings(path: Path, data: object) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


def test_default_path_lives_in_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    manager = ConfigManager(env={})

    assert manager.config_path == DEFAULT_CONFIG_PATH.expanduser()
    assert manager.config_path == tmp_path / ".mediatidy" / "config.yaml"


def test_config_path_variable_selects_file(tmp_path: Path) -> None:
    path = tmp_path / "elsewhere.yaml"
    env = {"MEDIATIDY_CONFIG": str(path)}

    assert ConfigManager(env=env).config_path == path
    assert ConfigManager(tmp_path / "cli.yaml", env=env).config_path == tmp_path / "cli.yaml"


def test_missing_file_means_defaults_and_is_not_created(tmp_path: Path) -> None:
    manager = ConfigManager(tmp_path / "config.yaml", env={})

    config = manager.load()

    assert config == MediaTidyConfig()
    assert config.default_args == ["-s"]
    assert config.season_dir_name == "Season XX"
    assert not manager.config_path.exists()


def test_empty_file_means_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("# nothing configured yet\n", encoding="utf-8")

    assert ConfigManager(path, env={}).load() == MediaTidyConfig()


def test_layers_apply_in_order(tmp_path: Path) -> None:
    path = _write_settings(
        tmp_path / "config.yaml",
        {
            "target_dirs": ["/srv/tv"],
            "ignored_directories": ["tmp"],
            "walker": {"max_workers": 2, "follow_symlinks": True},
        },
    )
    env = {
        "MEDIATIDY_WORKERS": "6",
        "MEDIATIDY_IGNORED_DIRECTORIES": os.pathsep.join(["tmp", ".cache"]),
        "MEDIATIDY_DEFAULT_ARGS": "-s  -x",
        "UNRELATED": "1",
    }

    config = ConfigManager(path, env=env).load(overrides={"walker": {"max_workers": 3}})

    assert config.target_dirs == ["/srv/tv"]
    assert config.ignored_directories == ["tmp", ".cache"]
    assert config.default_args == ["-s", "-x"]
    # command line beats environment; unrelated section fields survive
    assert config.walker.max_workers == 3
    assert config.walker.follow_symlinks is True


def test_include_env_false_skips_variables(tmp_path: Path) -> None:
    manager = ConfigManager(tmp_path / "config.yaml", env={"MEDIATIDY_SEASON_DIR_NAME": "S XX"})

    assert manager.load(include_env=False).season_dir_name == "Season XX"
    assert manager.load().season_dir_name == "S XX"


def test_environment_layer_nests_sections() -> None:
    layer = environment_layer(
        {
            "MEDIATIDY_TARGET_DIRS": os.pathsep.join(["/tv", "", "/anime"]),
            "MEDIATIDY_LOG_LEVEL": "debug",
            "MEDIATIDY_FOLLOW_SYMLINKS": "true",
        }
    )

    assert layer == {
        "target_dirs": ["/tv", "/anime"],
        "logging": {"level": "debug"},
        "walker": {"follow_symlinks": "true"},
    }
    config = build_config(layer)
    assert config.logging.level == "DEBUG"
    assert config.walker.follow_symlinks is True


def test_merge_layers_replaces_lists_and_merges_sections() -> None:
    merged = merge_layers(
        {"target_dirs": ["/a", "/b"], "walker": {"max_workers": 2}},
        {"target_dirs": ["/c"], "walker": {"follow_symlinks": True}},
    )

    assert merged == {
        "target_dirs": ["/c"],
        "walker": {"max_workers": 2, "follow_symlinks": True},
    }


@pytest.mark.parametrize("content", ["- not-a-mapping", "target_dirs: [unclosed"])
def test_malformed_file_raises_config_error(tmp_path: Path, content: str) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError):
        ConfigManager(path, env={}).load()


def test_unknown_keys_are_rejected(tmp_path: Path) -> None:
    path = _write_settings(tmp_path / "config.yaml", {"season_folder": "S XX"})

    with pytest.raises(ConfigError, match="season_folder"):
        ConfigManager(path, env={}).load()


@pytest.mark.parametrize(
    ("layer", "location"),
    [
        ({"walker": {"max_workers": 0}}, "walker.max_workers"),
        ({"walker": {"max_workers": "many"}}, "walker.max_workers"),
        ({"season_dir_name": ""}, "season_dir_name"),
        ({"season_dir_name": "XX"}, "season_dir_name"),
        ({"logging": {"level": "LOUD"}}, "logging.level"),
        ({"target_dirs": "/srv/tv"}, "target_dirs"),
    ],
)
def test_invalid_values_name_their_location(layer: dict, location: str) -> None:
    with pytest.raises(ConfigError, match=location):
        build_config(layer)


def test_season_template_without_placeholder_is_allowed() -> None:
    assert build_config({"season_dir_name": "Specials"}).season_dir_name == "Specials"
