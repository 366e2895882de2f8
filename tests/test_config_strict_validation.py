from __future__ import annotations

from pathlib import Path

import pytest

from rules.config import ConfigError, load_config


def _write_config(repo_root: Path, toml_content: str) -> None:
    (repo_root / "modgraph.toml").write_text(toml_content, encoding="utf-8")


def test_missing_config_uses_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert config.graph.core_key == "core"
    assert config.validator.error_penalty == 20
    assert config.validator.warning_penalty == 5
    assert config.validator.min_description_length == 20


def test_empty_config_accepted(tmp_path: Path) -> None:
    _write_config(tmp_path, "")

    config = load_config(tmp_path)

    assert config.graph.core_key == "core"


def test_valid_config_accepted(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
[graph]
core_key = "platform"

[validator]
warning_penalty = 2
min_description_length = 40
""".strip(),
    )

    config = load_config(tmp_path)

    assert config.graph.core_key == "platform"
    assert config.validator.warning_penalty == 2
    assert config.validator.min_description_length == 40
    assert config.validator.error_penalty == 20


def test_unknown_top_level_key_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "bogus_key = true")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_unknown_nested_key_rejected(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
[validator]
error_penalty = 10
bogus = true
""".strip(),
    )

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_negative_penalty_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "[validator]\nwarning_penalty = -1")

    with pytest.raises(ConfigError, match="Invalid config"):
        load_config(tmp_path)


def test_empty_core_key_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, '[graph]\ncore_key = ""')

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_invalid_version_pattern_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "[validator]\nversion_pattern = '(unclosed'")

    with pytest.raises(ConfigError, match="version_pattern"):
        load_config(tmp_path)


def test_invalid_toml_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "[graph\ncore_key = 1")

    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_config(tmp_path)
