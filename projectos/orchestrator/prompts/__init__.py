"""
Assistant prompts for ProjectOS.

Provides the built-in preamble with an optional file override.
"""

from .defaults import DEFAULT_ASSISTANT_PREAMBLE
from .loader import PREAMBLE_NAME, load_preamble, render_preamble
from .models import PromptUse

__all__ = [
    "DEFAULT_ASSISTANT_PREAMBLE",
    "PREAMBLE_NAME",
    "load_preamble",
    "render_preamble",
    "PromptUse",
]
