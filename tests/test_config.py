"""Tests for TOML configuration parsing."""

from pathlib import Path

import pytest

from citenav.config import DEFAULT_SUFFIXES, NavConfig


def write_config(tmp_path: Path, body: str) -> Path:
    p = tmp_path / "citenav.toml"
    p.write_text(body, encoding="utf-8")
    return p


class TestNavConfig:
    def test_defaults(self, tmp_path):
        cfg = NavConfig.from_toml(write_config(tmp_path, f'[notes]\nroot = "{tmp_path}"\n'))
        assert cfg.notes_root == tmp_path.resolve()
        assert cfg.bibliography_root is None
        assert cfg.suffixes == DEFAULT_SUFFIXES
        assert cfg.media_order == "lexicographic"
        assert cfg.log_level == "INFO"
        assert cfg.log_file is None

    def test_full(self, tmp_path):
        body = f"""
[notes]
root = "{tmp_path}"
ignore = ["archive/**"]
suffixes = ["org", ".md"]

[bibliography]
root = "{tmp_path / 'lit'}"

[ordering]
media = "chronological"

[logging]
level = "debug"
file = "{tmp_path / 'citenav.log'}"
"""
        cfg = NavConfig.from_toml(write_config(tmp_path, body))
        assert cfg.ignore == ["archive/**"]
        assert cfg.suffixes == [".org", ".md"]
        assert cfg.bibliography_root == (tmp_path / "lit").resolve()
        assert cfg.media_order == "chronological"
        assert cfg.log_level == "DEBUG"
        assert cfg.log_file == str(tmp_path / "citenav.log")

    def test_expands_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("CITENAV_TEST_ROOT", str(tmp_path))
        cfg = NavConfig.from_toml(write_config(tmp_path, '[notes]\nroot = "$CITENAV_TEST_ROOT"\n'))
        assert cfg.notes_root == tmp_path.resolve()

    def test_string_paths_converted(self, tmp_path):
        cfg = NavConfig(notes_root=str(tmp_path), bibliography_root=str(tmp_path))
        assert isinstance(cfg.notes_root, Path)
        assert isinstance(cfg.bibliography_root, Path)

    def test_missing_root(self, tmp_path):
        with pytest.raises(ValueError, match="root"):
            NavConfig.from_toml(write_config(tmp_path, "[ordering]\nmedia = \"lexicographic\"\n"))

    def test_invalid_media_order(self, tmp_path):
        body = f'[notes]\nroot = "{tmp_path}"\n[ordering]\nmedia = "numeric"\n'
        with pytest.raises(ValueError, match="media order"):
            NavConfig.from_toml(write_config(tmp_path, body))

    def test_invalid_log_level(self, tmp_path):
        body = f'[notes]\nroot = "{tmp_path}"\n[logging]\nlevel = "LOUD"\n'
        with pytest.raises(ValueError, match="log level"):
            NavConfig.from_toml(write_config(tmp_path, body))

    def test_empty_suffixes(self, tmp_path):
        body = f'[notes]\nroot = "{tmp_path}"\nsuffixes = []\n'
        with pytest.raises(ValueError, match="suffix"):
            NavConfig.from_toml(write_config(tmp_path, body))
