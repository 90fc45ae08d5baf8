"""
Project Store for ProjectOS.

Handles persistence and retrieval of project documents in a flat directory.
The directory listing is the index: one Markdown file per project, its
basename being the project identifier.
"""

import os
from pathlib import Path
from typing import List, Optional, Union

from ..shared.config import DOCUMENT_SUFFIX, MAX_DOCUMENT_BYTES, get_projects_dir
from ..shared.logger import get_logger
from .codec import DocumentDecodeError, decode, decode_header
from .types import FailureKind, ProjectDocument, ProjectSummary, StoreResult

logger = get_logger("store", __name__)


class ProjectStore:
    """Service for managing project documents under one root directory."""

    def __init__(
        self,
        root: Union[str, Path],
        suffix: str = DOCUMENT_SUFFIX,
        max_document_bytes: int = MAX_DOCUMENT_BYTES,
    ) -> None:
        """
        Initialize the Project Store.

        The root directory is not touched here; it is created on first use.

        Args:
            root: Directory holding the project files.
            suffix: File suffix identifying project documents.
            max_document_bytes: Largest encoded document accepted by create.

        Raises:
            ValueError: If suffix is empty.
        """
        if not suffix:
            raise ValueError("Document suffix is required")
        self.root = Path(root).expanduser()
        self.suffix = suffix
        self.max_document_bytes = max_document_bytes

    def ensure_root(self) -> None:
        """Create the root directory (and parents) if missing. Idempotent."""
        self.root.mkdir(parents=True, exist_ok=True)

    def validate_identifier(self, identifier: object) -> Optional[str]:
        """Check that an identifier names a file directly inside the root.

        No file is created or read; only the resolved path is inspected.

        Args:
            identifier: Candidate filename.

        Returns:
            A human-readable reason if the identifier is rejected, None if valid.
        """
        if not isinstance(identifier, str) or not identifier.strip():
            return "Project identifier cannot be empty"
        if "\x00" in identifier:
            return "Project identifier contains a NUL byte"
        separators = {"/", "\\", os.sep, os.altsep} - {None}
        if any(sep in identifier for sep in separators):
            return f"Project identifier must not contain path separators: {identifier!r}"
        if identifier in (".", ".."):
            return f"Project identifier is not a file name: {identifier!r}"
        if not identifier.endswith(self.suffix) or len(identifier) == len(self.suffix):
            return f"Project identifier must end with '{self.suffix}': {identifier!r}"

        root = self.root.resolve()
        if (root / identifier).resolve().parent != root:
            return f"Project identifier resolves outside the project directory: {identifier!r}"
        return None

    def path_for(self, identifier: str) -> Path:
        return self.root / identifier

    def exists(self, identifier: str) -> bool:
        """Advisory existence check; a concurrent writer may change the answer."""
        if self.validate_identifier(identifier) is not None:
            return False
        return self.path_for(identifier).is_file()

    def list_projects(self) -> List[ProjectSummary]:
        """List every project document as a summary of its front matter.

        Files are returned in directory-enumeration order, which is not
        stable across platforms. A file that cannot be read or whose front
        matter cannot be parsed is skipped; the rest of the listing is
        unaffected.

        Returns:
            List of ProjectSummary objects ({identifier, **metadata}).
        """
        try:
            self.ensure_root()
            with os.scandir(self.root) as it:
                entries = [entry for entry in it if entry.name.endswith(self.suffix)]
        except OSError as e:
            logger.error(f"Failed to list project directory {self.root}: {e}", exc_info=True)
            return []

        summaries: List[ProjectSummary] = []
        for entry in entries:
            try:
                if not entry.is_file():
                    continue
                with open(entry.path, "r", encoding="utf-8", newline="") as f:
                    metadata = decode_header(f.read())
            except (OSError, UnicodeDecodeError, DocumentDecodeError) as e:
                logger.warning(
                    f"Skipping unreadable project file '{entry.name}'",
                    extra={"payload": {"identifier": entry.name, "error": str(e)}},
                )
                continue
            summaries.append(ProjectSummary.from_metadata(entry.name, metadata))

        logger.info(f"Listed {len(summaries)} projects")
        return summaries

    def read_project(self, identifier: str) -> Optional[ProjectDocument]:
        """Read and fully decode one project document.

        Args:
            identifier: Filename of the project.

        Returns:
            ProjectDocument, or None if the identifier is invalid or does not
            resolve to a readable UTF-8 file.
        """
        error = self.validate_identifier(identifier)
        if error:
            logger.warning(error, extra={"payload": {"identifier": str(identifier)}})
            return None

        try:
            with open(self.path_for(identifier), "r", encoding="utf-8", newline="") as f:
                text = f.read()
        except FileNotFoundError:
            logger.info(f"Project not found: {identifier}")
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(
                f"Failed to read project '{identifier}': {e}",
                extra={"payload": {"identifier": identifier, "error": str(e)}},
            )
            return None

        metadata, narrative = decode(text)
        return ProjectDocument(identifier=identifier, metadata=metadata, narrative=narrative)

    def create_project(self, identifier: str, encoded_text: str, overwrite: bool = False) -> StoreResult:
        """Write an encoded document verbatim under the given identifier.

        Without `overwrite`, an existing file is left untouched and the
        result is an `already_exists` failure. The file is opened in
        exclusive-create mode, so two racing creates cannot both succeed.

        Args:
            identifier: Filename of the new project.
            encoded_text: Full document text (front matter + narrative).
            overwrite: Replace an existing file with the same identifier.

        Returns:
            StoreResult; failures carry `validation`, `already_exists` or `io`.
        """
        error = self.validate_identifier(identifier)
        if error:
            logger.warning(
                f"Rejected project identifier: {error}",
                extra={"payload": {"identifier": str(identifier), "error_kind": FailureKind.VALIDATION.value}},
            )
            return StoreResult.failure(FailureKind.VALIDATION, error, identifier if isinstance(identifier, str) else None)

        if not isinstance(encoded_text, str):
            return StoreResult.failure(FailureKind.VALIDATION, "Project content must be text", identifier)
        size = len(encoded_text.encode("utf-8"))
        if size > self.max_document_bytes:
            return StoreResult.failure(
                FailureKind.VALIDATION,
                f"Project content is {size} bytes, limit is {self.max_document_bytes}",
                identifier,
            )

        try:
            self.ensure_root()
            with open(self.path_for(identifier), "w" if overwrite else "x", encoding="utf-8", newline="") as f:
                f.write(encoded_text)
        except FileExistsError:
            logger.warning(f"Project already exists: {identifier}")
            return StoreResult.failure(
                FailureKind.ALREADY_EXISTS, f"Project already exists: {identifier}", identifier
            )
        except OSError as e:
            logger.error(f"Failed to create project '{identifier}': {e}", exc_info=True)
            return StoreResult.failure(FailureKind.IO, f"Failed to write project: {e.strerror or e}", identifier)

        logger.info(
            f"Created project '{identifier}'",
            extra={"payload": {"identifier": identifier, "bytes": size, "overwrite": overwrite}},
        )
        return StoreResult.ok(identifier)


_project_store: Optional[ProjectStore] = None


def get_project_store() -> ProjectStore:
    """Get or initialize the process-wide ProjectStore (lazy initialization).

    Returns:
        ProjectStore bound to PROJECTS_DIR for the lifetime of the process.
    """
    global _project_store
    if _project_store is None:
        _project_store = ProjectStore(get_projects_dir())
        logger.info(f"ProjectStore bound to {_project_store.root}")
    return _project_store
