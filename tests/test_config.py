"""
Tests for the .evmlint.yml loader.
"""

from evmlint.config import EvmLintConfig


def test_defaults_without_file(tmp_path):
    cfg = EvmLintConfig.load(tmp_path)
    assert cfg.report.space_limited is False
    assert cfg.report.debug is False
    assert cfg.report.strict is False
    assert cfg.scan.contracts == []


def test_kebab_case_keys(tmp_path):
    (tmp_path / ".evmlint.yml").write_text(
        "report:\n  space-limited: true\n  strict: true\nscan:\n  contracts: [Token, Vault]\n"
    )
    cfg = EvmLintConfig.load(tmp_path)
    assert cfg.report.space_limited is True
    assert cfg.report.strict is True
    assert cfg.report.debug is False
    assert cfg.scan.contracts == ["Token", "Vault"]


def test_snake_case_and_yaml_extension(tmp_path):
    (tmp_path / ".evmlint.yaml").write_text("report:\n  space_limited: true\n  debug: true\n")
    cfg = EvmLintConfig.load(tmp_path)
    assert cfg.report.space_limited is True
    assert cfg.report.debug is True


def test_empty_file(tmp_path):
    (tmp_path / ".evmlint.yml").write_text("")
    assert EvmLintConfig.load(tmp_path) == EvmLintConfig()


def test_round_trip(tmp_path):
    cfg = EvmLintConfig()
    cfg.report.strict = True
    cfg.scan.contracts = ["Store"]
    (tmp_path / ".evmlint.yml").write_text(cfg.to_yaml())
    assert EvmLintConfig.load(tmp_path) == cfg
