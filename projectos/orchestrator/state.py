"""
Models passed between the command interpreter, the assistant gateway and
the assistant service.
"""

from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..project.types import FailureKind


class ConversationTurn(BaseModel):
    """One role-tagged message sent to the completion provider."""

    role: Literal["system", "user", "assistant"]
    content: str


class CreationCommand(BaseModel):
    """A validated instruction to write a new project document."""

    model_config = ConfigDict(frozen=True)

    target_identifier: str = Field(..., min_length=1, description="Filename of the new project")
    encoded_document: str = Field(..., min_length=1, description="Full file text, written verbatim")


class CreatePayload(BaseModel):
    """Shape of the JSON object the assistant emits for a creation command."""

    action: str
    filename: str
    content: str

    @field_validator("filename", "content")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value


class InterpretationKind(str, Enum):
    CREATE = "create"
    PLAIN = "plain"


class Interpretation(BaseModel):
    """Classification of one assistant reply."""

    kind: InterpretationKind
    text: str = Field(..., description="The raw assistant output, unchanged")
    command: Optional[CreationCommand] = None

    @property
    def is_command(self) -> bool:
        return self.kind == InterpretationKind.CREATE


class GatewayResult(BaseModel):
    """Outcome of one provider round-trip."""

    success: bool
    content: Optional[str] = None
    error: Optional[str] = None
    error_kind: Optional[FailureKind] = None
    duration_ms: Optional[float] = None

    @classmethod
    def failure(cls, kind: FailureKind, error: str, duration_ms: Optional[float] = None) -> "GatewayResult":
        return cls(success=False, error=error, error_kind=kind, duration_ms=duration_ms)


class OutcomeKind(str, Enum):
    CREATED = "created"
    REPLY = "reply"
    ERROR = "error"


class AssistantOutcome(BaseModel):
    """Terminal result of handling one user instruction.

    Every outcome carries `message`, so callers can render created, reply
    and error outcomes the same way.
    """

    kind: OutcomeKind
    message: str
    identifier: Optional[str] = None
    error_kind: Optional[FailureKind] = None

    @classmethod
    def created(cls, identifier: str) -> "AssistantOutcome":
        return cls(kind=OutcomeKind.CREATED, message=f"Created project {identifier}", identifier=identifier)

    @classmethod
    def reply(cls, text: str) -> "AssistantOutcome":
        return cls(kind=OutcomeKind.REPLY, message=text)

    @classmethod
    def error(cls, kind: FailureKind, reason: str, identifier: Optional[str] = None) -> "AssistantOutcome":
        return cls(kind=OutcomeKind.ERROR, message=reason, error_kind=kind, identifier=identifier)


class ChatRequest(BaseModel):
    """Request body for the assistant chat endpoint."""

    message: str = Field(..., min_length=1)
    history: List[ConversationTurn] = Field(default_factory=list)


class CreateProjectRequest(BaseModel):
    """Request body for the create project endpoint."""

    filename: str
    content: str
    overwrite: bool = False
