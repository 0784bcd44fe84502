"""Scan orchestrator: run every language pipeline and fold the fragments into one CBOM."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from concurrent.futures import ThreadPoolExecutor

import structlog

from cbom_scanner.exceptions import CBOMScannerError, IndexingError, ScanningError
from cbom_scanner.merger import merge
from cbom_scanner.models.cbom import CBOM
from cbom_scanner.models.scan import AggregateStatistics, PartialScanResult
from cbom_scanner.progress import ProgressTracker
from cbom_scanner.selector import ScanTarget

log = structlog.get_logger(__name__)


class ScanOrchestrator:
    """
    Drive Indexing -> Scanning for each target and aggregate the results.

    Per target, in the given order:
      1. push the exclusion patterns into the indexer
      2. index the project
      3. scan the indexed units
      4. fold the fragment into the consolidated CBOM
      5. add the fragment's counts and duration to the statistics

    Any failure aborts the run. A partial inventory is never returned.

    With max_workers > 1 the (index, scan) pairs run on a thread pool. Each
    worker owns its target's services, and fragments are folded only after all
    workers have finished, in target order.
    """

    def __init__(self, max_workers: int = 1) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be >= 1")
        self.max_workers = max_workers
        self.progress = ProgressTracker()
        self.fragments: list[PartialScanResult] = []

    def run_all(
        self,
        targets: Sequence[ScanTarget],
        exclusion_patterns: Iterable[str] | None = None,
    ) -> tuple[CBOM, AggregateStatistics]:
        """Run every target and return the consolidated CBOM with aggregate statistics."""
        progress = ProgressTracker()
        self.progress = progress  # expose last run's progress for callers
        self.fragments = []
        patterns = frozenset(exclusion_patterns or ())

        if self.max_workers > 1 and len(targets) > 1:
            results: Iterable[PartialScanResult] = self._run_parallel(targets, patterns, progress)
        else:
            results = self._run_sequential(targets, patterns, progress)

        consolidated: CBOM | None = None
        statistics = AggregateStatistics()
        fragments: list[PartialScanResult] = []
        for result in results:
            fragments.append(result)
            if consolidated is None:
                consolidated = result.cbom
            else:
                consolidated = merge(consolidated, result.cbom)
            statistics.add(result)
            log.info(
                "orchestrator.language_done",
                language=result.language.value,
                files=result.files_scanned,
                lines=result.lines_scanned,
                assets=len(result.cbom),
                duration_ms=result.duration_ms,
            )

        self.fragments = fragments
        if consolidated is None:
            consolidated = CBOM.empty()

        log.info(
            "orchestrator.done",
            languages=[lang.value for lang in statistics.languages],
            files=statistics.files_scanned,
            lines=statistics.lines_scanned,
            seconds=statistics.elapsed_seconds,
            assets=len(consolidated),
        )
        return consolidated, statistics

    def _run_sequential(
        self,
        targets: Sequence[ScanTarget],
        patterns: frozenset[str],
        progress: ProgressTracker,
    ) -> Iterator[PartialScanResult]:
        for target in targets:
            yield self._run_target(target, patterns, progress)

    def _run_parallel(
        self,
        targets: Sequence[ScanTarget],
        patterns: frozenset[str],
        progress: ProgressTracker,
    ) -> list[PartialScanResult]:
        workers = min(self.max_workers, len(targets))
        log.info("orchestrator.parallel", workers=workers, targets=len(targets))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="cbom-scan") as pool:
            futures = [pool.submit(self._run_target, t, patterns, progress) for t in targets]
        # Every worker has finished here; result() re-raises the first failure in target order.
        return [f.result() for f in futures]

    @staticmethod
    def _run_target(
        target: ScanTarget,
        patterns: frozenset[str],
        progress: ProgressTracker,
    ) -> PartialScanResult:
        lang = target.language.value
        log.info("orchestrator.language_start", language=lang, exclusions=sorted(patterns))

        phase = f"index:{lang}"
        progress.start(phase)
        try:
            target.indexer.set_exclusion_patterns(patterns)
            units = target.indexer.index()
        except Exception as e:
            progress.fail(phase, str(e))
            if isinstance(e, CBOMScannerError):
                raise
            raise IndexingError(lang, str(e)) from e
        progress.complete(phase, detail=f"units={len(units)}")

        phase = f"scan:{lang}"
        progress.start(phase)
        try:
            result = target.scanner.scan(units)
        except Exception as e:
            progress.fail(phase, str(e))
            if isinstance(e, CBOMScannerError):
                raise
            raise ScanningError(lang, str(e)) from e
        progress.complete(
            phase,
            detail=f"files={result.files_scanned}, lines={result.lines_scanned}, "
            f"assets={len(result.cbom)}",
        )
        return result
