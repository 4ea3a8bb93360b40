"""Tests for TOML config file loading."""

from __future__ import annotations

from pathlib import Path

from tokenweave.cli import build_parser, load_config, resolve_options


def _resolve(tmp_path: Path, *flags: str):
    src = tmp_path / "lib.rs"
    src.write_text("")
    ns = build_parser().parse_args([str(src), *flags])
    return resolve_options(ns)


class TestLoadConfig:
    def test_missing_config_returns_empty(self, tmp_path: Path) -> None:
        assert load_config(None, tmp_path) == {}

    def test_explicit_path(self, tmp_path: Path) -> None:
        cfg = tmp_path / "custom.toml"
        cfg.write_text("final_newline = true\n")
        assert load_config(cfg, tmp_path) == {"final_newline": True}

    def test_auto_discover_tokenweave_toml(self, tmp_path: Path) -> None:
        cfg = tmp_path / "tokenweave.toml"
        cfg.write_text("[check]\ndiff = true\n")
        assert load_config(None, tmp_path) == {"check": {"diff": True}}


class TestConfigMerge:
    def test_defaults(self, tmp_path: Path) -> None:
        opts = _resolve(tmp_path)
        assert opts.final_newline is False
        assert opts.diff is False
        assert opts.check is False

    def test_config_final_newline(self, tmp_path: Path) -> None:
        (tmp_path / "tokenweave.toml").write_text("final_newline = true\n")
        assert _resolve(tmp_path).final_newline is True

    def test_config_diff(self, tmp_path: Path) -> None:
        (tmp_path / "tokenweave.toml").write_text("[check]\ndiff = true\n")
        assert _resolve(tmp_path).diff is True

    def test_cli_flag_overrides_config(self, tmp_path: Path) -> None:
        (tmp_path / "tokenweave.toml").write_text("final_newline = false\n")
        assert _resolve(tmp_path, "--final-newline").final_newline is True

    def test_wrong_type_ignored(self, tmp_path: Path) -> None:
        (tmp_path / "tokenweave.toml").write_text('final_newline = "yes"\ncheck = 3\n')
        opts = _resolve(tmp_path)
        assert opts.final_newline is False
        assert opts.diff is False

    def test_explicit_config_flag(self, tmp_path: Path) -> None:
        cfg = tmp_path / "alt.toml"
        cfg.write_text("[check]\ndiff = true\n")
        assert _resolve(tmp_path, "--config", str(cfg)).diff is True

    def test_explicit_config_skips_discovery(self, tmp_path: Path) -> None:
        (tmp_path / "tokenweave.toml").write_text("final_newline = true\n")
        cfg = tmp_path / "alt.toml"
        cfg.write_text("")
        assert _resolve(tmp_path, "--config", str(cfg)).final_newline is False
