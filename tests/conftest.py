"""Shared pytest fixtures for cbom-scanner tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from cbom_scanner.indexing.base import IndexingService
from cbom_scanner.models.cbom import CBOM, AssetLocation, AssetRecord
from cbom_scanner.models.language import Language
from cbom_scanner.models.scan import IndexedUnit, PartialScanResult
from cbom_scanner.scanning.base import ScannerService
from cbom_scanner.selector import ScanTarget


def _make_record(
    name: str = "AES",
    file_path: str = "src/Main.java",
    line: int = 1,
    column: int = 0,
    asset_type: str = "algorithm",
    primitive: str = "block-cipher",
    language: str = "java",
    context: str = "",
) -> AssetRecord:
    return AssetRecord(
        asset_type=asset_type,
        name=name,
        location=AssetLocation(file_path=file_path, line=line, column=column),
        language=language,
        primitive=primitive,
        detection_context=context,
    )


class FakeIndexer(IndexingService):
    """Returns preset units and records every call in a shared list."""

    def __init__(self, language, units=None, error=None, calls=None):
        self._language = language
        self.units = list(units or [])
        self.error = error
        self.patterns = None
        self.calls = calls if calls is not None else []

    @property
    def language(self):
        return self._language

    def set_exclusion_patterns(self, patterns):
        self.calls.append(("exclude", self._language.value))
        self.patterns = frozenset(patterns or ())

    def index(self):
        self.calls.append(("index", self._language.value))
        if self.error is not None:
            raise self.error
        return list(self.units)


class FakeScanner(ScannerService):
    """Returns a preset PartialScanResult and records every call."""

    def __init__(
        self,
        language,
        records=(),
        files=0,
        lines=0,
        start=0,
        end=0,
        error=None,
        calls=None,
    ):
        self._language = language
        self.records = list(records)
        self.files = files
        self.lines = lines
        self.start = start
        self.end = end
        self.error = error
        self.received = None
        self.calls = calls if calls is not None else []

    @property
    def language(self):
        return self._language

    def scan(self, units):
        self.calls.append(("scan", self._language.value))
        self.received = list(units)
        if self.error is not None:
            raise self.error
        return PartialScanResult(
            language=self._language,
            cbom=CBOM.from_records(self.records),
            files_scanned=self.files,
            lines_scanned=self.lines,
            start_time=self.start,
            end_time=self.end,
        )


@pytest.fixture
def make_record():
    return _make_record


@pytest.fixture
def calls():
    """Shared call log for fake services."""
    return []


@pytest.fixture
def make_target(calls):
    """Factory for ScanTargets backed by fake services sharing the ``calls`` log."""

    def _factory(
        language: Language,
        records=(),
        files: int = 0,
        lines: int = 0,
        start: int = 0,
        end: int = 0,
        units=None,
        index_error: Exception | None = None,
        scan_error: Exception | None = None,
    ) -> ScanTarget:
        if units is None:
            units = [
                IndexedUnit(
                    path=Path(f"/project/unit{i}"),
                    relative_path=f"unit{i}",
                    language=language,
                )
                for i in range(files)
            ]
        return ScanTarget(
            language=language,
            indexer=FakeIndexer(language, units=units, error=index_error, calls=calls),
            scanner=FakeScanner(
                language,
                records=records,
                files=files,
                lines=lines,
                start=start,
                end=end,
                error=scan_error,
                calls=calls,
            ),
        )

    return _factory


@pytest.fixture
def project(tmp_path):
    """A small multi-language project tree."""
    root = tmp_path / "project"
    (root / "src" / "main" / "java" / "app").mkdir(parents=True)
    (root / "src" / "main" / "java" / "app" / "Crypto.java").write_text(
        "package app;\n"
        "\n"
        "import javax.crypto.Cipher;\n"
        "\n"
        "class Crypto {\n"
        "    Cipher c = Cipher.getInstance(\"AES/GCM/NoPadding\");\n"
        "}\n"
    )
    (root / "tools").mkdir()
    (root / "tools" / "digest.py").write_text(
        "import hashlib\n"
        "\n"
        "def digest(data):\n"
        "    return hashlib.sha256(data).hexdigest()\n"
    )
    (root / "cmd").mkdir()
    (root / "cmd" / "main.go").write_text(
        "package main\n"
        "\n"
        "import \"crypto/sha256\"\n"
        "\n"
        "func main() {\n"
        "\t_ = sha256.Sum256([]byte(\"x\"))\n"
        "}\n"
    )
    return root
