"""CBOM data model: asset records keyed by identity."""

from __future__ import annotations

import uuid
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from cbom_scanner import __version__

ASSET_TYPES = ("algorithm", "protocol", "related-crypto-material", "certificate")


@dataclass(frozen=True)
class AssetLocation:
    """Where an asset was observed. file_path is relative to the project root."""

    file_path: str
    line: int
    column: int = 0


@dataclass(frozen=True)
class AssetRecord:
    """
    One detected cryptographic asset.
    Records are immutable; a re-scan produces a new record with the same identity key.
    """

    asset_type: str  # one of ASSET_TYPES
    name: str  # e.g. "AES-256-GCM", "SHA-256", "TLSv1.2"
    location: AssetLocation
    language: str = ""
    primitive: str = ""  # CycloneDX primitive: "ae", "hash", "signature", ...
    detection_context: str = ""
    properties: tuple[tuple[str, str], ...] = field(default_factory=tuple)

    @property
    def identity_key(self) -> str:
        loc = self.location
        key = f"{self.asset_type}:{self.name.lower()}@{loc.file_path}:{loc.line}:{loc.column}"
        if self.primitive:
            key += f"#{self.primitive}"
        return key

    @property
    def bom_ref(self) -> str:
        return str(uuid.uuid5(uuid.NAMESPACE_URL, self.identity_key))

    def to_component(self) -> dict[str, Any]:
        """Render as a CycloneDX 1.6 cryptographic-asset component."""
        crypto: dict[str, Any] = {"assetType": self.asset_type}
        if self.asset_type == "algorithm":
            crypto["algorithmProperties"] = {"primitive": self.primitive or "unknown"}
        elif self.asset_type == "protocol":
            crypto["protocolProperties"] = {"type": self.primitive or "unknown"}
        elif self.asset_type == "related-crypto-material":
            crypto["relatedCryptoMaterialProperties"] = {"type": self.primitive or "unknown"}

        component: dict[str, Any] = {
            "type": "cryptographic-asset",
            "bom-ref": self.bom_ref,
            "name": self.name,
            "cryptoProperties": crypto,
            "evidence": {
                "occurrences": [
                    {
                        "location": self.location.file_path,
                        "line": self.location.line,
                        "offset": self.location.column,
                        "additionalContext": self.detection_context,
                    }
                ]
            },
        }
        props = [{"name": "cbom:language", "value": self.language}] if self.language else []
        props.extend({"name": k, "value": v} for k, v in self.properties)
        if props:
            component["properties"] = props
        return component


class CBOM:
    """
    Cryptography Bill of Materials.

    An ordered mapping from identity key to AssetRecord. Keys are unique by
    construction; use cbom_scanner.merger.merge to combine two instances.
    """

    def __init__(self, assets: dict[str, AssetRecord] | None = None) -> None:
        self._assets: dict[str, AssetRecord] = dict(assets or {})

    @classmethod
    def empty(cls) -> CBOM:
        return cls()

    @classmethod
    def from_records(cls, records: Iterable[AssetRecord]) -> CBOM:
        """Build a CBOM; a later record replaces an earlier one with the same key."""
        assets: dict[str, AssetRecord] = {}
        for record in records:
            assets[record.identity_key] = record
        return cls(assets)

    @property
    def assets(self) -> dict[str, AssetRecord]:
        """Copy of the key -> record mapping."""
        return dict(self._assets)

    def keys(self) -> list[str]:
        return list(self._assets)

    def records(self) -> list[AssetRecord]:
        return list(self._assets.values())

    def get(self, key: str) -> AssetRecord | None:
        return self._assets.get(key)

    def __len__(self) -> int:
        return len(self._assets)

    def __iter__(self) -> Iterator[AssetRecord]:
        return iter(self._assets.values())

    def __contains__(self, key: object) -> bool:
        return key in self._assets

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CBOM):
            return NotImplemented
        return self._assets == other._assets

    def __repr__(self) -> str:
        return f"CBOM(assets={len(self._assets)})"

    def to_cyclonedx(self) -> dict[str, Any]:
        """Render the whole CBOM as a CycloneDX 1.6 JSON document."""
        return {
            "bomFormat": "CycloneDX",
            "specVersion": "1.6",
            "serialNumber": f"urn:uuid:{uuid.uuid4()}",
            "version": 1,
            "metadata": {
                "timestamp": datetime.now(timezone.utc).replace(microsecond=0).isoformat(),
                "tools": {
                    "components": [
                        {
                            "type": "application",
                            "name": "cbom-scanner",
                            "version": __version__,
                        }
                    ]
                },
            },
            "components": [record.to_component() for record in self._assets.values()],
        }
