"""Java indexing: .java sources."""

from __future__ import annotations

from cbom_scanner.indexing.base import FileSystemIndexService
from cbom_scanner.models.language import Language


class JavaIndexService(FileSystemIndexService):
    _language = Language.JAVA
    extensions = (".java",)
