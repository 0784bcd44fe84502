"""Line-oriented crypto asset detector driven by a pattern table."""

from __future__ import annotations

from cbom_scanner.models.cbom import AssetLocation, AssetRecord
from cbom_scanner.models.language import Language
from cbom_scanner.scanning.patterns import (
    BLOCK_COMMENTS,
    COMMENT_PREFIXES,
    PATTERNS_BY_LANGUAGE,
    CryptoPattern,
    refine_primitive,
)


class CryptoDetector:
    """Match a language's pattern table against source text."""

    def __init__(self, language: Language, patterns: list[CryptoPattern] | None = None) -> None:
        self.language = language
        self.patterns = patterns if patterns is not None else PATTERNS_BY_LANGUAGE[language]
        self._comment_prefixes = COMMENT_PREFIXES.get(language, ())
        self._block = BLOCK_COMMENTS.get(language)

    def detect(self, source: str, relative_path: str) -> list[AssetRecord]:
        records: list[AssetRecord] = []
        in_block = False
        for line_no, line in enumerate(source.splitlines(), start=1):
            stripped = line.strip()
            if in_block:
                in_block = self._block[1] not in stripped
                continue
            if not stripped or stripped.startswith(self._comment_prefixes):
                continue
            if self._block and stripped.startswith(self._block[0]):
                in_block = self._block[1] not in stripped[len(self._block[0]):]
                continue
            for pattern in self.patterns:
                for match in pattern.regex.finditer(line):
                    records.append(self._record(pattern, match, relative_path, line_no, stripped))
        return records

    def _record(self, pattern, match, relative_path, line_no, context) -> AssetRecord:
        name = pattern.name or match.group("name")
        if pattern.uppercase:
            name = name.upper().replace("_", "-")
        primitive = pattern.primitive
        if pattern.asset_type == "algorithm":
            primitive = refine_primitive(name, primitive)
        return AssetRecord(
            asset_type=pattern.asset_type,
            name=name,
            location=AssetLocation(file_path=relative_path, line=line_no, column=match.start()),
            language=self.language.value,
            primitive=primitive,
            detection_context=context[:200],
        )
