"""Persist CBOMs under the output directory and publish the glob pattern."""

from __future__ import annotations

import json
import os
import re
import tempfile
from pathlib import Path

import structlog

from cbom_scanner.exceptions import WriteError
from cbom_scanner.models.cbom import CBOM

log = structlog.get_logger(__name__)

FILE_PREFIX = "cbom"


def slug(s: str) -> str:
    s = re.sub(r"\s+", "-", s.strip())
    s = re.sub(r"[^A-Za-z0-9._-]+", "_", s)
    return s


class ReportWriter:
    """
    Writes ``cbom.json`` (or ``cbom_<hint>.json``) into the output directory.

    Files are written to a temporary sibling and renamed into place, so a failed
    write never leaves a partial ``cbom*.json`` behind.
    """

    def __init__(self, output_dir: Path, results_sink: Path | None = None) -> None:
        self.output_dir = Path(output_dir)
        self.results_sink = Path(results_sink) if results_sink else None
        self.written: list[Path] = []
        self._dir_ready = False

    @property
    def pattern(self) -> str:
        """Glob matching every artifact this writer produces."""
        return f"{self.output_dir}/{FILE_PREFIX}*.json"

    def path_for(self, destination_hint: str | None = None) -> Path:
        name = FILE_PREFIX
        if destination_hint and slug(destination_hint):
            name += "_" + slug(destination_hint)
        return self.output_dir / f"{name}.json"

    def remove_stale(self) -> list[Path]:
        """Delete ``cbom*.json`` files left by earlier runs."""
        if not self.output_dir.is_dir():
            return []
        removed: list[Path] = []
        for stale in sorted(self.output_dir.glob(f"{FILE_PREFIX}*.json")):
            if stale.is_file() and stale not in self.written:
                try:
                    stale.unlink()
                except OSError as e:
                    raise WriteError(f"Cannot remove stale report {stale}: {e}") from e
                removed.append(stale)
        if removed:
            log.info("writer.stale_removed", files=[str(p) for p in removed])
        return removed

    def write(self, cbom: CBOM, destination_hint: str | None = None) -> Path:
        """Serialize the CBOM as CycloneDX JSON and return the written path."""
        target = self.path_for(destination_hint)
        payload = json.dumps(cbom.to_cyclonedx(), ensure_ascii=False, indent=2) + "\n"
        tmp_name: str | None = None
        try:
            if not self._dir_ready:
                self.output_dir.mkdir(parents=True, exist_ok=True)
                self._dir_ready = True
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.output_dir,
                prefix=".tmp-",
                suffix=".json",
                delete=False,
            ) as fh:
                tmp_name = fh.name
                fh.write(payload)
            os.replace(tmp_name, target)
            tmp_name = None
        except OSError as e:
            raise WriteError(f"Cannot write CBOM to {target}: {e}") from e
        finally:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)

        self.written.append(target)
        log.info("writer.written", path=str(target), assets=len(cbom))
        return target

    def publish_pattern(self) -> str | None:
        """Append ``pattern=<glob>`` to the results sink, if one is configured."""
        if self.results_sink is None:
            return None
        line = f"pattern={self.pattern}\n"
        try:
            with self.results_sink.open("a", encoding="utf-8") as fh:
                fh.write(line)
        except OSError as e:
            raise WriteError(f"Cannot append to results sink {self.results_sink}: {e}") from e
        log.info("writer.pattern_published", sink=str(self.results_sink), pattern=self.pattern)
        return line.rstrip("\n")
