"""
Command interpreter for assistant replies.

Decides whether a reply is a project creation command (a fenced ```json
block holding {"action": "create", "filename": ..., "content": ...}) or
plain conversational text. Malformed commands are never errors; they fall
back to plain text with the reply unchanged.

Pure and synchronous: no I/O, no shared state.
"""

import json
import re
from typing import Any, Dict, Optional

from pydantic import ValidationError

from ..shared.config import DOCUMENT_SUFFIX
from .state import CreatePayload, CreationCommand, Interpretation, InterpretationKind

CREATE_ACTION = "create"

_FENCED_JSON_RE = re.compile(r"```[ \t]*json\b[ \t]*(?P<body>.*?)```", re.DOTALL | re.IGNORECASE)


def find_json_object(text: str) -> Optional[Dict[str, Any]]:
    """Return the first fenced json block in `text` that parses to an object."""
    for match in _FENCED_JSON_RE.finditer(text):
        try:
            data = json.loads(match.group("body"))
        except (ValueError, RecursionError):
            # Besides JSONDecodeError: oversized integer literals and deep nesting
            continue
        if isinstance(data, dict):
            return data
    return None


def _plain(text: str) -> Interpretation:
    return Interpretation(kind=InterpretationKind.PLAIN, text=text)


def interpret(text: str, suffix: str = DOCUMENT_SUFFIX) -> Interpretation:
    """Classify an assistant reply.

    Args:
        text: Raw assistant output.
        suffix: Required filename suffix for creation commands.

    Returns:
        Interpretation of kind CREATE carrying a CreationCommand, or PLAIN
        carrying `text` unchanged.
    """
    data = find_json_object(text)
    if data is None or data.get("action") != CREATE_ACTION:
        return _plain(text)

    try:
        payload = CreatePayload.model_validate(data)
    except ValidationError:
        return _plain(text)

    if not payload.filename.endswith(suffix) or len(payload.filename) == len(suffix):
        return _plain(text)

    command = CreationCommand(target_identifier=payload.filename, encoded_document=payload.content)
    return Interpretation(kind=InterpretationKind.CREATE, text=text, command=command)
