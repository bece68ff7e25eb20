"""Directory and search models driven by the runtime."""

from .explorer import Explorer, load_directory
from .filtered import FilteredEntries
from .search import SearchMode, SearchResult, get_recursive_metadata, search
from .types import PARENT_DIR_NAME, DirMetadata, DiskEntry, FileMetadata
from .viewport import Viewport

__all__ = [
    "PARENT_DIR_NAME",
    "DirMetadata",
    "DiskEntry",
    "Explorer",
    "FileMetadata",
    "FilteredEntries",
    "SearchMode",
    "SearchResult",
    "Viewport",
    "get_recursive_metadata",
    "load_directory",
    "search",
]
