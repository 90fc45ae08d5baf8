"""
Project Store Domain Models for ProjectOS.

Defines Pydantic models for project documents, list summaries and store outcomes.
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class FailureKind(str, Enum):
    """Why an operation failed; shared by the store, gateway and assistant."""

    VALIDATION = "validation"
    ALREADY_EXISTS = "already_exists"
    IO = "io"
    PROVIDER = "provider"
    TIMEOUT = "timeout"
    CANCELLED = "cancelled"


class ProjectDocument(BaseModel):
    """A fully decoded project file."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "identifier": "roof-project.md",
                "metadata": {
                    "title": "Roof Project",
                    "status": "not_started",
                    "startDate": "2026-02-01",
                },
                "narrative": "# Description\nReplace the east roof.",
            }
        }
    )

    identifier: str = Field(..., description="Filename addressing the document in the store")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Front matter, keys preserved verbatim")
    narrative: str = Field("", description="Markdown body following the front matter")


class ProjectSummary(BaseModel):
    """Lightweight project entry for list views.

    Metadata keys are carried as extra fields, so a summary serializes
    to {"identifier": ..., "title": ..., "status": ..., ...}.
    """

    model_config = ConfigDict(extra="allow")

    identifier: str = Field(..., description="Filename addressing the document in the store")

    @classmethod
    def from_metadata(cls, identifier: str, metadata: Dict[str, Any]) -> "ProjectSummary":
        """Build a summary from decoded front matter.

        Field names must be strings, so non-string YAML keys are stringified
        (`2026: x` lists as "2026"). `read_project` keeps the original keys.
        A front matter key named `identifier` is dropped in favor of the filename.
        """
        fields = {str(k): v for k, v in metadata.items() if k != "identifier"}
        return cls.model_validate({**fields, "identifier": identifier})

    @property
    def metadata(self) -> Dict[str, Any]:
        return dict(self.model_extra or {})


class StoreResult(BaseModel):
    """Outcome of a store write."""

    success: bool
    identifier: Optional[str] = None
    error: Optional[str] = None
    error_kind: Optional[FailureKind] = None

    @classmethod
    def ok(cls, identifier: str) -> "StoreResult":
        return cls(success=True, identifier=identifier)

    @classmethod
    def failure(cls, kind: FailureKind, error: str, identifier: Optional[str] = None) -> "StoreResult":
        return cls(success=False, identifier=identifier, error=error, error_kind=kind)
