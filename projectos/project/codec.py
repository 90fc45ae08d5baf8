"""
Document codec for project files.

A project file is YAML front matter between two `---` lines followed by the
Markdown narrative:

    ---
    title: Roof Project
    status: not_started
    startDate: 2026-02-01
    ---
    # Description

Text without a front matter block decodes to empty metadata and the whole
text as narrative.
"""

import re
from typing import Any, Dict, Optional, Tuple

import yaml

DELIMITER = "---"

# Used with .match(), so the opening delimiter is anchored at the start of the text
_FRONT_MATTER_RE = re.compile(
    r"---[ \t]*\r?\n(?P<header>.*?)^---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)
_BOM = "\ufeff"


class DocumentDecodeError(ValueError):
    """Raised by the strict header reader when front matter cannot be parsed."""


def _split(text: str) -> Optional[Tuple[str, str]]:
    """Return (header, narrative) if the text opens with front matter."""
    offset = 1 if text.startswith(_BOM) else 0
    match = _FRONT_MATTER_RE.match(text, offset)
    if match is None:
        return None
    return match.group("header"), text[match.end():]


def _load_header(header: str) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(header) if header.strip() else None
    except (yaml.YAMLError, ValueError) as e:
        # Date-shaped values that are not calendar dates raise ValueError
        raise DocumentDecodeError(f"Invalid front matter: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise DocumentDecodeError(f"Front matter must be a mapping, got {type(data).__name__}")
    return data


def decode(text: str) -> Tuple[Dict[str, Any], str]:
    """Split a document into (metadata, narrative).

    Never raises: a header that is not valid YAML (or not a mapping) is
    treated as absent, returning ({}, text).
    """
    parts = _split(text)
    if parts is None:
        return {}, text
    header, narrative = parts
    try:
        return _load_header(header), narrative
    except DocumentDecodeError:
        return {}, text


def decode_header(text: str) -> Dict[str, Any]:
    """Parse only the front matter of a document.

    Raises:
        DocumentDecodeError: If a header is present but cannot be parsed.
    """
    parts = _split(text)
    if parts is None:
        return {}
    return _load_header(parts[0])


def encode(metadata: Dict[str, Any], narrative: str) -> str:
    """Serialize metadata as front matter and append the narrative."""
    header = ""
    if metadata:
        header = yaml.safe_dump(
            dict(metadata),
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
        )
    return f"{DELIMITER}\n{header}{DELIMITER}\n{narrative}"
