import logging

import pytest

from recursiver import DEFAULT_GEN_LEN, GeneratorConfig, parse_args


def test_parse_args_defaults(monkeypatch):
    monkeypatch.delenv("RECURSIVER_GEN_LEN", raising=False)
    monkeypatch.delenv("RECURSIVER_DTYPE", raising=False)
    args = parse_args([])
    assert args.gen_len == DEFAULT_GEN_LEN
    assert args.dtype == "float64"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("RECURSIVER_GEN_LEN", "42")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    cfg = GeneratorConfig.from_env()
    assert cfg.gen_len == 42
    assert cfg.log_level == "DEBUG"


def test_config_from_args():
    ns = parse_args(["--gen-len", "7", "--dtype", "float32"])
    cfg = GeneratorConfig.from_args(ns)
    assert cfg.gen_len == 7
    assert cfg.dtype == "float32"


def test_negative_gen_len_rejected():
    with pytest.raises(SystemExit):
        parse_args(["--gen-len", "-3"])
    with pytest.raises(ValueError):
        GeneratorConfig(gen_len=-1)


def test_configure_logging_applies_level(monkeypatch):
    seen = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: seen.update(kw))
    GeneratorConfig(log_level="debug").configure_logging()
    assert seen["level"] == logging.DEBUG
    GeneratorConfig(log_level="bogus").configure_logging()
    assert seen["level"] == logging.INFO
