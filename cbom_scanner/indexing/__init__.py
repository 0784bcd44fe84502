"""Per-language indexing services."""

from cbom_scanner.indexing.base import FileSystemIndexService, IndexingService
from cbom_scanner.indexing.go import GoIndexService
from cbom_scanner.indexing.java import JavaIndexService
from cbom_scanner.indexing.python import PythonIndexService

__all__ = [
    "FileSystemIndexService",
    "GoIndexService",
    "IndexingService",
    "JavaIndexService",
    "PythonIndexService",
]
