"""Project Store for ProjectOS.

Manages project documents: Markdown files with YAML front matter in one directory.
"""

from .codec import DocumentDecodeError, decode, decode_header, encode
from .types import FailureKind, ProjectDocument, ProjectSummary, StoreResult
from .store import ProjectStore, get_project_store

__all__ = [
    "DocumentDecodeError",
    "decode",
    "decode_header",
    "encode",
    "FailureKind",
    "ProjectDocument",
    "ProjectSummary",
    "StoreResult",
    "ProjectStore",
    "get_project_store",
]
