"""Resolve configured languages and build their (indexer, scanner) pairs."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

import structlog

from cbom_scanner.exceptions import ConfigurationError
from cbom_scanner.indexing.base import IndexingService
from cbom_scanner.models.language import Language
from cbom_scanner.scanning.base import ScannerService

if TYPE_CHECKING:
    from cbom_scanner.core.config import ScanSettings

log = structlog.get_logger(__name__)


def _split(value: str | Iterable[str] | None) -> list[str]:
    if value is None:
        return []
    items = value.split(",") if isinstance(value, str) else list(value)
    return [s.strip() for s in items if s and s.strip()]


def resolve_languages(value: str | Iterable[str] | None) -> tuple[Language, ...]:
    """
    Resolve a language list to Language members.

    Absent or empty selects every language in enumeration order. Duplicates
    collapse to their first occurrence.

    Raises:
        ConfigurationError: A name is not a known language.
    """
    names = _split(value)
    if not names:
        return tuple(Language)
    selected: list[Language] = []
    for name in names:
        language = Language.parse(name)
        if language not in selected:
            selected.append(language)
    return tuple(selected)


def parse_exclusion_patterns(value: str | Iterable[str] | None) -> frozenset[str]:
    """Comma-separated patterns to a set of trimmed, lower-cased substrings."""
    return frozenset(s.lower() for s in _split(value))


@dataclass(frozen=True)
class ScanTarget:
    """One language with the services that index and scan it."""

    language: Language
    indexer: IndexingService
    scanner: ScannerService


@dataclass
class LanguageDescriptor:
    """How to build the service pair of one language."""

    language: Language
    indexer_factory: Callable[[ScanSettings], IndexingService]
    scanner_factory: Callable[[ScanSettings], ScannerService]


class LanguageRegistry:
    """Registration center for language service pairs."""

    def __init__(self) -> None:
        self._languages: dict[Language, LanguageDescriptor] = {}

    def register(self, descriptor: LanguageDescriptor) -> None:
        self._languages[descriptor.language] = descriptor
        log.debug("registry.registered", language=descriptor.language.value)

    def get(self, language: Language) -> LanguageDescriptor | None:
        return self._languages.get(language)

    def list_all(self) -> list[LanguageDescriptor]:
        return list(self._languages.values())


def _java_scanner(settings: ScanSettings) -> ScannerService:
    from cbom_scanner.scanning.java import JavaScannerService

    scanner = JavaScannerService(settings.project_root, require_build=settings.java_require_build)
    for path in settings.java_dependency_dirs:
        scanner.add_dependency_dir(path)
    for path in settings.java_class_dirs:
        scanner.add_class_dir(path)
    return scanner


def create_default_registry() -> LanguageRegistry:
    """Create registry with every supported language registered."""
    from cbom_scanner.indexing.go import GoIndexService
    from cbom_scanner.indexing.java import JavaIndexService
    from cbom_scanner.indexing.python import PythonIndexService
    from cbom_scanner.scanning.go import GoScannerService
    from cbom_scanner.scanning.python import PythonScannerService

    registry = LanguageRegistry()
    registry.register(
        LanguageDescriptor(
            language=Language.JAVA,
            indexer_factory=lambda s: JavaIndexService(s.project_root),
            scanner_factory=_java_scanner,
        )
    )
    registry.register(
        LanguageDescriptor(
            language=Language.PYTHON,
            indexer_factory=lambda s: PythonIndexService(s.project_root),
            scanner_factory=lambda s: PythonScannerService(s.project_root),
        )
    )
    registry.register(
        LanguageDescriptor(
            language=Language.GO,
            indexer_factory=lambda s: GoIndexService(s.project_root),
            scanner_factory=lambda s: GoScannerService(s.project_root),
        )
    )
    return registry


class LanguageSelector:
    """Maps each configured language to a fresh (indexer, scanner) pair."""

    def __init__(self, settings: ScanSettings, registry: LanguageRegistry | None = None) -> None:
        self.settings = settings
        self.registry = registry or create_default_registry()

    def select(self) -> list[ScanTarget]:
        targets: list[ScanTarget] = []
        for language in self.settings.languages:
            desc = self.registry.get(language)
            if desc is None:
                raise ConfigurationError(f"No services registered for language '{language.value}'")
            targets.append(
                ScanTarget(
                    language=language,
                    indexer=desc.indexer_factory(self.settings),
                    scanner=desc.scanner_factory(self.settings),
                )
            )
        log.info("selector.targets", languages=[t.language.value for t in targets])
        return targets
