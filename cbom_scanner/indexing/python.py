"""Python indexing: .py sources."""

from __future__ import annotations

from cbom_scanner.indexing.base import FileSystemIndexService
from cbom_scanner.models.language import Language


class PythonIndexService(FileSystemIndexService):
    _language = Language.PYTHON
    extensions = (".py",)
