"""Go indexing: .go sources."""

from __future__ import annotations

from cbom_scanner.indexing.base import FileSystemIndexService
from cbom_scanner.models.language import Language


class GoIndexService(FileSystemIndexService):
    _language = Language.GO
    extensions = (".go",)
