"""Tests for node resolution."""

from nestscan.models import (
    BoundaryNode,
    Described,
    DescribeFailure,
    NotVersioned,
    SvnError,
)
from nestscan.resolver import placeholder_url, resolve


def _describer(outcome):
    calls = []

    def describe(path):
        calls.append(path)
        return outcome

    describe.calls = calls
    return describe


def test_resolve_described_boundary():
    describer = _describer(Described("svn://host/libA", "svn://host"))
    node = resolve("/repo/libA", describer)
    assert node == BoundaryNode("/repo/libA", "svn://host/libA", "svn://host")
    assert node.error is None
    assert not node.is_placeholder
    assert describer.calls == ["/repo/libA"]


def test_resolve_not_versioned_is_none():
    assert resolve("/repo/tools", _describer(NotVersioned("E155007"))) is None


def test_resolve_url_without_root_is_none():
    assert resolve("/repo/odd", _describer(Described("svn://host/odd", None))) is None


def test_resolve_root_without_url_is_none():
    assert resolve("/repo/odd", _describer(Described(None, "svn://host"))) is None


def test_resolve_empty_urls_is_none():
    assert resolve("/repo/odd", _describer(Described("", ""))) is None


def test_resolve_failure_uses_placeholder_urls():
    error = SvnError("E155037", "Previous operation has not finished")
    node = resolve("/repo/broken", _describer(DescribeFailure(error)))
    assert node is not None
    assert node.error == error
    assert node.has_error
    assert node.is_placeholder
    assert node.url == node.repository_root_url == placeholder_url("/repo/broken")
    assert node.url.startswith("file://")


def test_resolve_never_raises():
    def explode(path):
        raise RuntimeError("backend crashed")

    node = resolve("/repo/x", explode)
    assert node is not None
    assert node.error.code is None
    assert "backend crashed" in node.error.message
    assert node.url.startswith("file://")


def test_placeholder_url_is_absolute_file_uri():
    url = placeholder_url("relative/dir")
    assert url.startswith("file:///")
    assert url.endswith("/relative/dir")


def test_placeholder_url_escapes_spaces():
    assert placeholder_url("/tmp/has space") == "file:///tmp/has%20space"


def test_svn_error_str():
    assert str(SvnError("E155036", "upgrade required")) == "E155036: upgrade required"
    assert str(SvnError(None, "svn executable not found: svn")) == "svn executable not found: svn"
