from .base import DataSource, Page
from .files import FileSource
from .memory import MemorySource

__all__ = [
    "DataSource",
    "Page",
    "FileSource",
    "MemorySource",
]
