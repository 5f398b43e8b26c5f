"""Tests for TOML config file loading."""

from __future__ import annotations

import argparse
from pathlib import Path

import pytest

from intcalc.cli import build_parser, load_config, main, resolve_options


class TestLoadConfig:
    def test_missing_config_returns_empty(self, tmp_path: Path) -> None:
        assert load_config(None, tmp_path) == {}

    def test_explicit_path(self, tmp_path: Path) -> None:
        cfg = tmp_path / "custom.toml"
        cfg.write_text("[eval]\nstrict = true\n")
        result = load_config(cfg, tmp_path)
        assert result["eval"] == {"strict": True}

    def test_auto_discover_intcalc_toml(self, tmp_path: Path) -> None:
        cfg = tmp_path / "intcalc.toml"
        cfg.write_text("[eval]\nbits = 32\n")
        result = load_config(None, tmp_path)
        assert result["eval"] == {"bits": 32}


class TestConfigMerge:
    def _resolve(self, tmp_path: Path, *argv: str):
        ns = build_parser().parse_args(["1", *argv])
        return resolve_options(ns, search_dir=tmp_path)

    def test_defaults_without_config(self, tmp_path: Path) -> None:
        opts = self._resolve(tmp_path)
        assert opts.eval_options.strict is False
        assert opts.eval_options.bits == 64
        assert opts.eval_options.max_depth == 64

    def test_config_values_merged(self, tmp_path: Path) -> None:
        (tmp_path / "intcalc.toml").write_text(
            "[eval]\nstrict = true\nbits = 16\nmax_depth = 4\n"
        )
        opts = self._resolve(tmp_path)
        assert opts.eval_options.strict is True
        assert opts.eval_options.bits == 16
        assert opts.eval_options.max_depth == 4

    def test_cli_overrides_config(self, tmp_path: Path) -> None:
        (tmp_path / "intcalc.toml").write_text("[eval]\nstrict = true\nbits = 16\n")
        opts = self._resolve(tmp_path, "--no-strict", "--bits", "32")
        assert opts.eval_options.strict is False
        assert opts.eval_options.bits == 32

    def test_zero_bits_means_unbounded(self, tmp_path: Path) -> None:
        (tmp_path / "intcalc.toml").write_text("[eval]\nbits = 0\n")
        opts = self._resolve(tmp_path)
        assert opts.eval_options.bits is None

    def test_wrong_types_ignored(self, tmp_path: Path) -> None:
        (tmp_path / "intcalc.toml").write_text(
            '[eval]\nstrict = "yes"\nbits = true\nmax_depth = 2.5\n'
        )
        opts = self._resolve(tmp_path)
        assert opts.eval_options.strict is False
        assert opts.eval_options.bits == 64
        assert opts.eval_options.max_depth == 64

    def test_explicit_config_flag(self, tmp_path: Path) -> None:
        cfg = tmp_path / "other.toml"
        cfg.write_text("[eval]\nmax_depth = 2\n")
        opts = self._resolve(tmp_path, "--config", str(cfg))
        assert opts.eval_options.max_depth == 2

    def test_invalid_config_value_raises(self, tmp_path: Path) -> None:
        (tmp_path / "intcalc.toml").write_text("[eval]\nmax_depth = -3\n")
        with pytest.raises(argparse.ArgumentTypeError, match="max_depth"):
            self._resolve(tmp_path)


class TestConfigEndToEnd:
    def test_config_in_cwd_applies(self, tmp_path: Path, monkeypatch, capsys) -> None:
        (tmp_path / "intcalc.toml").write_text("[eval]\nstrict = true\n")
        monkeypatch.chdir(tmp_path)
        assert main(["1 2"]) == 1
        assert "after complete expression" in capsys.readouterr().err

    def test_malformed_toml_returns_2(self, tmp_path: Path, monkeypatch, capsys) -> None:
        (tmp_path / "intcalc.toml").write_text("[eval\n")
        monkeypatch.chdir(tmp_path)
        assert main(["1"]) == 2
        assert "invalid config file" in capsys.readouterr().err
