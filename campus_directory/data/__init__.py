"""Data access for the campus directory."""

from .config import DirectoryConfig
from .directory_db import DirectoryDatabase, FieldPatterns, StoreError
from .models import DirectoryRecord, RecordKind

__all__ = [
    "DirectoryConfig",
    "DirectoryDatabase",
    "FieldPatterns",
    "StoreError",
    "DirectoryRecord",
    "RecordKind",
]
