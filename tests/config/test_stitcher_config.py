from __future__ import annotations

from pathlib import Path

import pytest

from stitcher.core.config import ConfigManager, StitcherConfig, load_config
from stitcher.core.exceptions import ConfigError
from stitcher.core.utils.merge import deep_merge


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_bundled_defaults(tmp_path):
    cfg = ConfigManager(tmp_path, environ={}).load()
    assert cfg == StitcherConfig()
    assert cfg.root_exclude == ("*.partial.html",)
    assert cfg.render_options.detect_cycles is True
    assert cfg.render_options.max_depth is None


def test_project_file_overrides_defaults(tmp_path):
    _write(
        tmp_path / ".stitcher.yml",
        "partialGlob: 'partials/*.html'\nrender:\n  maxDepth: 8\nrootExclude: ['+', 'drafts/*']\n",
    )
    cfg = ConfigManager(tmp_path, environ={}).load()
    assert cfg.partial_glob == "partials/*.html"
    assert cfg.max_depth == 8
    assert cfg.detect_cycles is True
    assert cfg.root_exclude == ("*.partial.html", "drafts/*")


def test_yaml_extension_is_found(tmp_path):
    _write(tmp_path / ".stitcher.yaml", "encoding: latin-1\n")
    assert ConfigManager(tmp_path, environ={}).load().encoding == "latin-1"


def test_explicit_config_path(tmp_path):
    path = _write(tmp_path / "conf" / "site.yml", "rootGlob: 'pages/**/*.html'\n")
    assert load_config(config_path=path).root_glob == "pages/**/*.html"


def test_missing_explicit_config_raises(tmp_path):
    with pytest.raises(ConfigError, match="Config file not found"):
        ConfigManager(tmp_path, config_path=tmp_path / "missing.yml", environ={}).load()


def test_env_overrides(tmp_path):
    _write(tmp_path / ".stitcher.yml", "render:\n  maxDepth: 8\n")
    environ = {
        "STITCHER_ROOTGLOB": "site/*.html",
        "STITCHER_RENDER__MAXDEPTH": "3",
        "STITCHER_RENDER__DETECTCYCLES": "false",
        "STITCHER_LOGGING__LEVEL": "info",
        "OTHER_VAR": "ignored",
    }
    cfg = ConfigManager(tmp_path, environ=environ).load()
    assert cfg.root_glob == "site/*.html"
    assert cfg.max_depth == 3
    assert cfg.detect_cycles is False
    assert cfg.log_level == "INFO"


def test_cli_overrides_win_over_env(tmp_path):
    environ = {"STITCHER_VERBOSE": "false", "STITCHER_PARTIALGLOB": "env/*.html"}
    cfg = ConfigManager(tmp_path, environ=environ).load({"verbose": True, "partialGlob": "cli/*.html"})
    assert cfg.verbose is True
    assert cfg.partial_glob == "cli/*.html"
    assert cfg.effective_log_level == "DEBUG"


def test_env_value_coercion(tmp_path):
    manager = ConfigManager(tmp_path, environ={})
    assert manager._coerce_type("true") is True
    assert manager._coerce_type("null") is None
    assert manager._coerce_type("12") == 12
    assert manager._coerce_type("1.5") == 1.5
    assert manager._coerce_type('["a", "b"]') == ["a", "b"]
    assert manager._coerce_type("**/*.html") == "**/*.html"


def test_schema_violation_names_location(tmp_path):
    _write(tmp_path / ".stitcher.yml", "render:\n  maxDepth: -1\n")
    with pytest.raises(ConfigError) as excinfo:
        ConfigManager(tmp_path, environ={}).load()
    assert excinfo.value.context["path"] == "render.maxDepth"


def test_unknown_key_is_rejected(tmp_path):
    _write(tmp_path / ".stitcher.yml", "rootGlobs: '*.html'\n")
    with pytest.raises(ConfigError, match="Invalid configuration"):
        ConfigManager(tmp_path, environ={}).load()


def test_non_mapping_file_is_rejected(tmp_path):
    _write(tmp_path / ".stitcher.yml", "- just\n- a list\n")
    with pytest.raises(ConfigError, match="must contain a mapping"):
        ConfigManager(tmp_path, environ={}).load()


def test_invalid_yaml_is_config_error(tmp_path):
    _write(tmp_path / ".stitcher.yml", "rootGlob: [unclosed\n")
    with pytest.raises(ConfigError, match="Cannot read config"):
        ConfigManager(tmp_path, environ={}).load()


def test_defaults_are_not_mutated_between_loads(tmp_path):
    ConfigManager(tmp_path, environ={}).load({"rootExclude": ["+", "x/*"]})
    assert ConfigManager(tmp_path, environ={}).load().root_exclude == ("*.partial.html",)


def test_deep_merge_does_not_mutate_inputs():
    base = {"render": {"detectCycles": True}, "rootExclude": ["a"]}
    merged = deep_merge(base, {"render": {"maxDepth": 2}, "rootExclude": ["b"]})
    assert merged == {"render": {"detectCycles": True, "maxDepth": 2}, "rootExclude": ["b"]}
    assert base == {"render": {"detectCycles": True}, "rootExclude": ["a"]}


def test_split_env_key_error_suggests_joined_name(tmp_path):
    manager = ConfigManager(tmp_path, environ={"STITCHER_ROOT_GLOB": "pages/*.html"})
    with pytest.raises(ConfigError) as excinfo:
        manager.load()
    err = excinfo.value
    assert "did you mean STITCHER_ROOTGLOB?" in str(err)
    assert err.context["hint"].startswith("STITCHER_ROOT_GLOB set 'root'")


def test_valid_env_keys_give_no_hint(tmp_path):
    _write(tmp_path / ".stitcher.yml", "render:\n  maxDepth: -1\n")
    manager = ConfigManager(tmp_path, environ={"STITCHER_ROOTGLOB": "pages/*.html"})
    with pytest.raises(ConfigError) as excinfo:
        manager.load()
    assert "hint" not in excinfo.value.context
