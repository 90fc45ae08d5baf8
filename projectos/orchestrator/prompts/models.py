"""
Prompt metadata models for tracking which assistant preamble was used.
"""

import hashlib
from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, Field


class PromptUse(BaseModel):
    """Metadata about the preamble sent with a conversation.

    Records where the template came from and its hash, so a logged
    exchange can be traced back to the exact instructions the provider saw.
    """
    prompt_name: str = Field(..., description="Name of the prompt (e.g., 'assistant-preamble')")
    resolved_source: Literal["file", "default"] = Field(
        ...,
        description="Source of the prompt: 'file' if loaded from ASSISTANT_PREAMBLE_PATH, 'default' otherwise"
    )
    retrieved_at: str = Field(..., description="ISO timestamp when prompt was loaded")
    prompt_hash: str = Field(..., description="SHA256 hash of the prompt template")

    @classmethod
    def from_template(
        cls,
        prompt_name: str,
        template: str,
        resolved_source: Literal["file", "default"],
    ) -> "PromptUse":
        return cls(
            prompt_name=prompt_name,
            resolved_source=resolved_source,
            retrieved_at=datetime.now(timezone.utc).isoformat(),
            prompt_hash=hashlib.sha256(template.encode("utf-8")).hexdigest(),
        )
