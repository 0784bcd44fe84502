"""Run configuration, built once at process start and read-only afterwards."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from cbom_scanner.exceptions import ConfigurationError
from cbom_scanner.models.language import Language
from cbom_scanner.selector import parse_exclusion_patterns, resolve_languages

DEFAULT_OUTPUT_DIR = Path("cbom")


def parse_bool(value: str | bool | None, default: bool) -> bool:
    """Only a (case-insensitive) "true" is true; absent means the default."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return value.strip().lower() == "true"


class ScanConfiguration(BaseModel):
    """The languages to scan and the exclusion patterns applied to candidate paths."""

    model_config = ConfigDict(frozen=True)

    languages: tuple[Language, ...]
    exclusion_patterns: frozenset[str] = frozenset()


class ScanSettings(BaseModel):
    """Everything a run needs. No other module reads the process environment."""

    model_config = ConfigDict(frozen=True)

    project_root: Path
    output_dir: Path = DEFAULT_OUTPUT_DIR
    languages: tuple[Language, ...] = tuple(Language)
    exclusion_patterns: frozenset[str] = frozenset()
    results_sink: Path | None = None
    java_require_build: bool = True
    java_dependency_dirs: tuple[Path, ...] = ()
    java_class_dirs: tuple[Path, ...] = ()
    max_workers: int = Field(default=1, ge=1)

    @field_validator("project_root")
    @classmethod
    def _root_must_be_dir(cls, v: Path) -> Path:
        if not v.is_dir():
            raise ValueError(f"project root is not a directory: {v}")
        return v.resolve()

    @property
    def scan_configuration(self) -> ScanConfiguration:
        return ScanConfiguration(
            languages=self.languages, exclusion_patterns=self.exclusion_patterns
        )

    @classmethod
    def build(
        cls,
        project_root: str | Path | None,
        output_dir: str | Path | None = None,
        languages: str | Iterable[str] | None = None,
        exclude: str | Iterable[str] | None = None,
        results_sink: str | Path | None = None,
        java_require_build: str | bool | None = None,
        java_jar_dir: str | Path | None = None,
        home: Path | None = None,
        max_workers: int | str | None = None,
    ) -> ScanSettings:
        """Build settings from raw values as they arrive from the CLI or environment.

        Raises:
            ConfigurationError: Missing project root, unknown language or invalid value.
        """
        if project_root is None or str(project_root).strip() == "":
            raise ConfigurationError("Missing project root (set GITHUB_WORKSPACE or pass PROJECT_ROOT)")
        root = Path(project_root).expanduser().resolve()

        dependency_dirs: list[Path] = [root]
        if home is not None:
            dependency_dirs += [home / ".m2" / "repository", home / ".gradle"]
        if java_jar_dir:
            dependency_dirs.append(Path(java_jar_dir).expanduser())

        try:
            return cls(
                project_root=root,
                output_dir=Path(output_dir) if output_dir else DEFAULT_OUTPUT_DIR,
                languages=resolve_languages(languages),
                exclusion_patterns=parse_exclusion_patterns(exclude),
                results_sink=Path(results_sink) if results_sink else None,
                java_require_build=parse_bool(java_require_build, True),
                java_dependency_dirs=tuple(dependency_dirs),
                java_class_dirs=(root,),
                max_workers=max_workers if max_workers not in (None, "") else 1,
            )
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
            )
            raise ConfigurationError(f"Invalid configuration: {problems}") from e
