"""
Tests for polybase.config.json loading.
"""
import json

from core.config import CONFIG_FILENAME, DEFAULT_EXTENSIONS, DEFAULT_IGNORE_PATTERNS, Config, config_template, load_config


def _write_config(directory, data):
    path = directory / CONFIG_FILENAME
    path.write_text(data if isinstance(data, str) else json.dumps(data), encoding="utf-8")
    return path


def test_defaults_without_file():
    config = load_config()
    assert config == Config()
    assert config.target == "2023"
    assert config.ignore_patterns == DEFAULT_IGNORE_PATTERNS
    assert config.include_extensions == DEFAULT_EXTENSIONS
    assert config.source is None


def test_loads_file_from_working_directory(isolated_config):
    path = _write_config(
        isolated_config,
        {
            "target": "2024",
            "ignorePatterns": ["vendor"],
            "includeExtensions": [".js"],
            "output": "json",
            "customPolyfills": {"Array.prototype.toSorted": "array.prototype.tosorted"},
        },
    )
    config = load_config()
    assert config.target == "2024"
    assert config.ignore_patterns == ("vendor",)
    assert config.include_extensions == (".js",)
    assert config.output == "json"
    assert config.custom_polyfills == {"Array.prototype.toSorted": "array.prototype.tosorted"}
    assert config.source == str(path)


def test_malformed_json_falls_back(isolated_config, capsys):
    _write_config(isolated_config, '{"target": "2024",')
    assert load_config() == Config()
    assert "Invalid config file" in capsys.readouterr().err


def test_non_object_falls_back(isolated_config, capsys):
    _write_config(isolated_config, [1, 2])
    assert load_config() == Config()
    assert "expected a JSON object" in capsys.readouterr().err


def test_wrong_type_keeps_key_default(isolated_config, capsys):
    _write_config(isolated_config, {"target": "2024", "ignorePatterns": "node_modules", "output": "pdf"})
    config = load_config()
    assert config.target == "2024"
    assert config.ignore_patterns == DEFAULT_IGNORE_PATTERNS
    assert config.output == "console"
    err = capsys.readouterr().err
    assert "'ignorePatterns' must be a list of strings" in err
    assert "'output' must be one of" in err


def test_numeric_target(isolated_config):
    _write_config(isolated_config, {"target": 2024})
    assert load_config().target == "2024"


def test_boolean_target_rejected(isolated_config):
    _write_config(isolated_config, {"target": True})
    assert load_config().target == "2023"


def test_extensions_normalized(isolated_config):
    _write_config(isolated_config, {"includeExtensions": ["JS", "tsx", ".Mjs", ""]})
    assert load_config().include_extensions == (".js", ".tsx", ".mjs")


def test_invalid_custom_polyfills_ignored(isolated_config, capsys):
    _write_config(isolated_config, {"customPolyfills": {"Array.prototype.at": 1}})
    assert load_config().custom_polyfills == {}
    assert "customPolyfills" in capsys.readouterr().err


def test_explicit_path(tmp_path):
    path = tmp_path / "custom.json"
    path.write_text(json.dumps({"target": "2024"}), encoding="utf-8")
    assert load_config(str(path)).target == "2024"


def test_explicit_missing_path_warns(tmp_path, capsys):
    config = load_config(str(tmp_path / "missing.json"))
    assert config == Config()
    assert "Config file not found" in capsys.readouterr().err


def test_env_path(tmp_path, monkeypatch):
    path = tmp_path / "env.json"
    path.write_text(json.dumps({"target": "2024"}), encoding="utf-8")
    monkeypatch.setenv("POLYBASE_CONFIG", str(path))
    assert load_config().target == "2024"


def test_template_loads_cleanly(isolated_config, capsys):
    _write_config(isolated_config, config_template())
    config = load_config()
    assert config.target == "2023"
    assert "*.test.js" in config.ignore_patterns
    assert config.custom_polyfills == {"Array.prototype.toSorted": "array.prototype.tosorted"}
    assert capsys.readouterr().err == ""
