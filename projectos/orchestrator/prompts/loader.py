"""
Loader for the assistant preamble.

Reads the template from ASSISTANT_PREAMBLE_PATH when configured, falling
back to the built-in default when the file is missing or empty.
"""

from datetime import date
from pathlib import Path
from typing import Optional, Tuple, Union

from ...shared.logger import get_logger
from .defaults import DEFAULT_ASSISTANT_PREAMBLE, TODAY_PLACEHOLDER
from .models import PromptUse

logger = get_logger("assistant", __name__)

PREAMBLE_NAME = "assistant-preamble"


def load_preamble(path: Optional[Union[str, Path]] = None) -> Tuple[str, PromptUse]:
    """Load the preamble template and describe where it came from.

    Args:
        path: Optional file overriding the default template.

    Returns:
        Tuple of (template, PromptUse metadata).
    """
    if path:
        preamble_file = Path(path).expanduser()
        try:
            raw = preamble_file.read_text(encoding="utf-8")
        except OSError as e:
            logger.warning(f"Preamble file unreadable, using default: {preamble_file} ({e})")
        else:
            if raw.strip():
                return raw, PromptUse.from_template(PREAMBLE_NAME, raw, "file")
            logger.warning(f"Preamble file empty, using default: {preamble_file}")

    return DEFAULT_ASSISTANT_PREAMBLE, PromptUse.from_template(
        PREAMBLE_NAME, DEFAULT_ASSISTANT_PREAMBLE, "default"
    )


def render_preamble(template: str, today: date) -> str:
    """Substitute today's date into the template."""
    return template.replace(TODAY_PLACEHOLDER, today.isoformat())
