"""Shared configuration, logging and provider client for ProjectOS."""

from .config import (
    PROJECTS_DIR,
    DOCUMENT_SUFFIX,
    MAX_DOCUMENT_BYTES,
    LLM_BASE_URL,
    LLM_MODEL_NAME,
    TIMEOUT_MATRIX,
    AssistantSettings,
    get_projects_dir,
    get_assistant_settings,
)
from .logger import get_logger

__all__ = [
    "PROJECTS_DIR",
    "DOCUMENT_SUFFIX",
    "MAX_DOCUMENT_BYTES",
    "LLM_BASE_URL",
    "LLM_MODEL_NAME",
    "TIMEOUT_MATRIX",
    "AssistantSettings",
    "get_projects_dir",
    "get_assistant_settings",
    "get_logger",
]
