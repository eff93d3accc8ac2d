"""Tests for configuration loading."""

import os

import pytest

from nestscan.config import DEFAULT_EXCLUDE_NAMES, DEFAULT_TIMEOUT, ConfigError, load_config


def test_defaults():
    cfg = load_config({})
    assert cfg.svn_binary == "svn"
    assert cfg.timeout == DEFAULT_TIMEOUT
    assert cfg.exclude_names == DEFAULT_EXCLUDE_NAMES
    assert cfg.exclude_paths == ()
    assert cfg.admin_names == frozenset({".svn"})
    assert cfg.use_filter is True


def test_environment():
    cfg = load_config({
        "NESTSCAN_SVN": "/usr/local/bin/svn",
        "NESTSCAN_TIMEOUT": "12.5",
        "NESTSCAN_EXCLUDE": "build, dist,,",
        "SVN_ASP_DOT_NET_HACK": "1",
    })
    assert cfg.svn_binary == "/usr/local/bin/svn"
    assert cfg.timeout == 12.5
    assert {"build", "dist"} <= cfg.exclude_names
    assert "" not in cfg.exclude_names
    assert cfg.admin_names == frozenset({"_svn"})


def test_overrides_beat_environment():
    cfg = load_config(
        {"NESTSCAN_SVN": "env-svn", "NESTSCAN_TIMEOUT": "12"},
        svn_binary="cli-svn",
        timeout=3,
        exclude_names=["generated"],
        exclude_paths=["~/skip"],
        use_filter=False,
    )
    assert cfg.svn_binary == "cli-svn"
    assert cfg.timeout == 3
    assert "generated" in cfg.exclude_names
    assert "node_modules" in cfg.exclude_names
    assert cfg.exclude_paths == (os.path.abspath(os.path.expanduser("~/skip")),)
    assert cfg.use_filter is False


@pytest.mark.parametrize("raw", ["0", "-1", "soon"])
def test_bad_timeout_from_environment(raw):
    with pytest.raises(ConfigError):
        load_config({"NESTSCAN_TIMEOUT": raw})


def test_bad_timeout_override():
    with pytest.raises(ConfigError):
        load_config({}, timeout=0)


@pytest.mark.parametrize("raw", ["nan", "inf"])
def test_non_finite_timeout(raw):
    with pytest.raises(ConfigError):
        load_config({"NESTSCAN_TIMEOUT": raw})
