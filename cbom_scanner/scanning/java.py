"""Java scanner. Requires compiled classes unless told otherwise."""

from __future__ import annotations

from pathlib import Path

import structlog

from cbom_scanner.models.language import Language
from cbom_scanner.scanning.base import PatternScannerService

log = structlog.get_logger(__name__)


class JavaScannerService(PatternScannerService):
    """
    Java scanner with build-related options.

    require_build: fail the scan unless compiled .class files exist under a
        registered class directory (default True).
    dependency dirs: searched for .jar archives that make up the scan classpath.
    class dirs: searched for compiled .class output.
    """

    _language = Language.JAVA

    def __init__(self, project_root: Path, require_build: bool = True) -> None:
        super().__init__(project_root)
        self.require_build = require_build
        self.dependency_dirs: list[Path] = []
        self.class_dirs: list[Path] = []
        self.classpath: list[Path] = []

    def set_require_build(self, require_build: bool) -> None:
        self.require_build = require_build

    def add_dependency_dir(self, path: str | Path | None) -> None:
        """Register a directory to search for dependency jars. None is ignored."""
        if path is None or str(path).strip() == "":
            return
        p = Path(path).expanduser()
        if p not in self.dependency_dirs:
            self.dependency_dirs.append(p)

    def add_class_dir(self, path: str | Path | None) -> None:
        """Register a directory to search for compiled classes. None is ignored."""
        if path is None or str(path).strip() == "":
            return
        p = Path(path).expanduser()
        if p not in self.class_dirs:
            self.class_dirs.append(p)

    def check_prerequisites(self) -> list[str]:
        if not self.require_build:
            return []
        for class_dir in self.class_dirs:
            if class_dir.is_dir() and next(class_dir.rglob("*.class"), None) is not None:
                return []
        searched = ", ".join(str(d) for d in self.class_dirs) or "<none>"
        return [
            f"no compiled .class files found under {searched}; build the project first "
            "or disable the build requirement"
        ]

    def prepare(self) -> None:
        self.classpath = self._collect_jars()
        log.info(
            "java.classpath",
            jars=len(self.classpath),
            dependency_dirs=[str(d) for d in self.dependency_dirs],
            require_build=self.require_build,
        )

    def _collect_jars(self) -> list[Path]:
        jars: list[Path] = []
        for dep_dir in self.dependency_dirs:
            if not dep_dir.is_dir():
                log.debug("java.dependency_dir_missing", path=str(dep_dir))
                continue
            jars.extend(sorted(dep_dir.rglob("*.jar")))
        return jars
