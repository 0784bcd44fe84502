"""Merge CBOM fragments: union of asset records, last write wins on identity collisions."""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from cbom_scanner.models.cbom import CBOM

log = structlog.get_logger(__name__)


class CBOMMerger:
    """
    Merge CBOM fragments without duplicating or dropping asset records.

    Records are never merged field by field. When both inputs hold the same
    identity key the incoming record replaces the base record in place.
    Cross-language fragments scan disjoint files, so collisions normally only
    happen when the same unit is reported twice.
    """

    @staticmethod
    def merge(base: CBOM, incoming: CBOM) -> CBOM:
        """Return a new CBOM holding the union of base and incoming."""
        if len(incoming) == 0:
            return CBOM(base.assets)

        assets = base.assets
        for key, record in incoming.assets.items():
            if key in assets:
                log.debug(
                    "merger.collision",
                    identity_key=key,
                    old_file=assets[key].location.file_path,
                    new_file=record.location.file_path,
                )
            assets[key] = record
        return CBOM(assets)

    @classmethod
    def merge_all(cls, fragments: Iterable[CBOM]) -> CBOM:
        """Fold fragments left to right. An empty sequence yields an empty CBOM."""
        consolidated: CBOM | None = None
        for fragment in fragments:
            if consolidated is None:
                consolidated = fragment
            else:
                consolidated = cls.merge(consolidated, fragment)
        return consolidated if consolidated is not None else CBOM.empty()


def merge(base: CBOM, incoming: CBOM) -> CBOM:
    return CBOMMerger.merge(base, incoming)
