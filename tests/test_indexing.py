"""Tests for the file-system indexing services."""

from __future__ import annotations

import pytest

from cbom_scanner.exceptions import IndexingError
from cbom_scanner.indexing import GoIndexService, JavaIndexService, PythonIndexService
from cbom_scanner.models.language import Language


def _touch(root, rel, content=""):
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


class TestFileSystemIndex:
    def test_extension_per_language(self, project):
        assert [u.relative_path for u in JavaIndexService(project).index()] == [
            "src/main/java/app/Crypto.java"
        ]
        assert [u.relative_path for u in PythonIndexService(project).index()] == ["tools/digest.py"]
        assert [u.relative_path for u in GoIndexService(project).index()] == ["cmd/main.go"]

    def test_units_carry_language_and_absolute_path(self, project):
        unit = PythonIndexService(project).index()[0]
        assert unit.language is Language.PYTHON
        assert unit.path == project / "tools" / "digest.py"

    def test_sorted_by_relative_path(self, tmp_path):
        for rel in ["z.py", "a/b.py", "a.py", "m/n/o.py"]:
            _touch(tmp_path, rel)
        units = PythonIndexService(tmp_path).index()
        assert [u.relative_path for u in units] == ["a.py", "a/b.py", "m/n/o.py", "z.py"]

    def test_skip_dirs(self, tmp_path):
        _touch(tmp_path, "app.py")
        _touch(tmp_path, ".git/hooks/hook.py")
        _touch(tmp_path, "node_modules/pkg/x.py")
        _touch(tmp_path, "__pycache__/app.py")
        units = PythonIndexService(tmp_path).index()
        assert [u.relative_path for u in units] == ["app.py"]

    def test_uppercase_extension_accepted(self, tmp_path):
        _touch(tmp_path, "Legacy.JAVA")
        assert len(JavaIndexService(tmp_path).index()) == 1

    def test_missing_root(self, tmp_path):
        with pytest.raises(IndexingError) as exc_info:
            GoIndexService(tmp_path / "nope").index()
        assert exc_info.value.language == "go"


class TestExclusions:
    def test_case_insensitive_substring(self, tmp_path):
        _touch(tmp_path, "src/App.java")
        _touch(tmp_path, "src/Test/AppTest.java")
        _touch(tmp_path, "Generated/Stub.java")
        svc = JavaIndexService(tmp_path)
        svc.set_exclusion_patterns([" TEST/", "generated"])
        assert [u.relative_path for u in svc.index()] == ["src/App.java"]

    def test_patterns_normalized(self, tmp_path):
        svc = PythonIndexService(tmp_path)
        svc.set_exclusion_patterns(["  Vendor ", "", "  "])
        assert svc.exclusion_patterns == frozenset({"vendor"})

    def test_none_disables(self, tmp_path):
        _touch(tmp_path, "vendor/x.py")
        svc = PythonIndexService(tmp_path)
        svc.set_exclusion_patterns(["vendor"])
        svc.set_exclusion_patterns(None)
        assert len(svc.index()) == 1
