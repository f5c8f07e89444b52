"""Tests for the filesystem scope."""

from __future__ import annotations

import json
from pathlib import Path

from deskbridge.fs.scope import check_access, load_fs_scope
from deskbridge.fs.types import AllowedRoot, FsScope


def _scope(tmp_path: Path) -> FsScope:
    return FsScope(
        allowed_roots=[
            AllowedRoot(path=str(tmp_path / "projects"), allow_write=True),
            AllowedRoot(path=str(tmp_path / "templates")),
        ],
        blocked_patterns=[str(tmp_path / "projects" / "secret")],
    )


class TestCheckAccess:
    def test_no_scope_allows_everything(self):
        assert check_access("/anywhere", None, write=True) is True

    def test_read_under_allowed_root(self, tmp_path):
        scope = _scope(tmp_path)
        assert check_access(str(tmp_path / "templates" / "basic"), scope, write=False) is True

    def test_write_needs_allow_write(self, tmp_path):
        scope = _scope(tmp_path)
        assert check_access(str(tmp_path / "templates" / "basic"), scope, write=True) is False
        assert check_access(str(tmp_path / "projects" / "new"), scope, write=True) is True

    def test_root_itself_is_allowed(self, tmp_path):
        assert check_access(str(tmp_path / "projects"), _scope(tmp_path), write=True) is True

    def test_outside_roots_denied(self, tmp_path):
        assert check_access(str(tmp_path / "elsewhere"), _scope(tmp_path), write=False) is False

    def test_sibling_prefix_not_matched(self, tmp_path):
        assert check_access(str(tmp_path / "projects-old"), _scope(tmp_path), write=False) is False

    def test_blocked_pattern_wins(self, tmp_path):
        scope = _scope(tmp_path)
        assert check_access(str(tmp_path / "projects" / "secret" / "keys"), scope, write=False) is False

    def test_parent_traversal_resolved(self, tmp_path):
        scope = _scope(tmp_path)
        sneaky = str(tmp_path / "projects" / ".." / "elsewhere")
        assert check_access(sneaky, scope, write=False) is False

    def test_home_expansion(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        scope = FsScope(allowed_roots=[AllowedRoot(path="~/projects", allow_write=True)])
        assert check_access(str(tmp_path / "projects" / "a"), scope, write=True) is True


class TestLoadFsScope:
    def test_missing_file_returns_none(self, tmp_path):
        assert load_fs_scope(tmp_path / "missing.json") is None

    def test_loads_valid_file(self, tmp_path):
        scope_file = tmp_path / "fs-scope.json"
        scope_file.write_text(json.dumps({
            "allowed_roots": [{"path": "/data", "allow_write": True}],
            "blocked_patterns": ["/data/private"],
        }))

        scope = load_fs_scope(scope_file)

        assert scope is not None
        assert scope.allowed_roots[0].path == "/data"
        assert scope.allowed_roots[0].allow_write is True
        assert scope.blocked_patterns == ["/data/private"]

    def test_blocked_patterns_optional(self, tmp_path):
        scope_file = tmp_path / "fs-scope.json"
        scope_file.write_text(json.dumps({"allowed_roots": []}))
        scope = load_fs_scope(scope_file)
        assert scope is not None
        assert scope.blocked_patterns == []

    def test_invalid_json_returns_none(self, tmp_path):
        scope_file = tmp_path / "fs-scope.json"
        scope_file.write_text("{not json")
        assert load_fs_scope(scope_file) is None

    def test_wrong_shape_returns_none(self, tmp_path):
        scope_file = tmp_path / "fs-scope.json"
        scope_file.write_text(json.dumps({"allowed_roots": "everything"}))
        assert load_fs_scope(scope_file) is None
