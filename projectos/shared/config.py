"""
Shared configuration for ProjectOS.

Centralizes storage paths, provider settings and timeouts using environment variables.
All modules should use these constants instead of hardcoded values.
"""

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

# ============================================
# Project Store
# ============================================

# Root directory holding one Markdown file per project
PROJECTS_DIR: str = os.getenv(
    "PROJECTS_DIR", os.path.join(os.path.expanduser("~"), "Documents", "AiProjectOS")
)
# Only files with this suffix are treated as project documents
DOCUMENT_SUFFIX: str = os.getenv("DOCUMENT_SUFFIX", ".md")
# Upper bound for a single encoded document written by create
MAX_DOCUMENT_BYTES: int = int(os.getenv("MAX_DOCUMENT_BYTES", str(256 * 1024)))

# ============================================
# Completion Provider (OpenAI-compatible)
# ============================================
LLM_BASE_URL: str = os.getenv("LLM_BASE_URL", "http://localhost:9000/v1")
LLM_API_KEY: Optional[str] = os.getenv("LLM_API_KEY")
LLM_MODEL_NAME: str = os.getenv("LLM_MODEL_NAME", "gpt-4o-mini")

# Optional file replacing the built-in assistant preamble
ASSISTANT_PREAMBLE_PATH: Optional[str] = os.getenv("ASSISTANT_PREAMBLE_PATH")

# ============================================
# Timeout Matrix (seconds)
# ============================================
TIMEOUT_MATRIX = {
    "LLM_CALL": int(os.getenv("TIMEOUT_LLM_CALL", "60")),
}

# ============================================
# HTTP API
# ============================================
API_HOST: str = os.getenv("API_HOST", "127.0.0.1")
API_PORT: int = int(os.getenv("API_PORT", "8000"))
MOCK_LLM_PORT: int = int(os.getenv("MOCK_LLM_PORT", "9000"))

# ============================================
# Environment Variable Names (for reference)
# ============================================
# PROJECTS_DIR=~/Documents/AiProjectOS
# DOCUMENT_SUFFIX=.md
# LLM_BASE_URL=https://api.openai.com/v1
# LLM_API_KEY=sk-...
# LLM_MODEL_NAME=gpt-4o-mini
# TIMEOUT_LLM_CALL=60
# LOG_FORMAT=text|json
# DEBUG_PROMPTS=false


class AssistantSettings(BaseModel):
    """Provider settings injected into the assistant gateway."""

    base_url: str = Field(..., description="OpenAI-compatible base URL")
    model: str = Field(..., description="Model identifier sent with each request")
    api_key: Optional[str] = Field(None, description="Bearer credential, if the provider needs one")
    timeout_seconds: float = Field(60, gt=0, description="Deadline for a single provider call")
    preamble_path: Optional[str] = Field(None, description="File overriding the default preamble")


# ============================================
# Helper Functions
# ============================================

def get_projects_dir() -> Path:
    """Get the project store root directory from environment or default."""
    return Path(PROJECTS_DIR).expanduser()


def get_llm_api_key() -> Optional[str]:
    """Centralized provider credential lookup with OPENAI_API_KEY fallback."""
    return LLM_API_KEY or os.getenv("OPENAI_API_KEY")


def get_assistant_settings() -> AssistantSettings:
    """Build the gateway settings from the environment-driven constants."""
    return AssistantSettings(
        base_url=LLM_BASE_URL,
        model=LLM_MODEL_NAME,
        api_key=get_llm_api_key(),
        timeout_seconds=TIMEOUT_MATRIX["LLM_CALL"],
        preamble_path=ASSISTANT_PREAMBLE_PATH,
    )
