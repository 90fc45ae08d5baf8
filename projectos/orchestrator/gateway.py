"""
Assistant gateway: one request/response exchange with the completion provider.

Prepends the behavioral preamble to the caller's turns, calls the provider
with an explicit deadline, and reports the outcome as a GatewayResult. No
exception from the transport crosses this boundary, and nothing is retried.
"""

import threading
import time
from datetime import date
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

import requests
from pydantic import ValidationError

from ..project.types import FailureKind
from ..shared import llm_client
from ..shared.config import AssistantSettings
from ..shared.logger import get_logger
from ..shared.utils import get_local_today
from .prompts import load_preamble, render_preamble
from .state import ConversationTurn, GatewayResult

logger = get_logger("assistant", __name__)

TurnLike = Union[ConversationTurn, Dict[str, Any]]


class AssistantGateway:
    """Sends conversations to an OpenAI-compatible completion provider."""

    def __init__(
        self,
        settings: AssistantSettings,
        preamble: Optional[str] = None,
        today: Callable[[], date] = get_local_today,
    ) -> None:
        """
        Args:
            settings: Provider endpoint, model, credential and default timeout.
            preamble: Template overriding both the default and settings.preamble_path.
            today: Clock used to fill the date into the preamble.
        """
        self.settings = settings
        if preamble is None:
            preamble, prompt_use = load_preamble(settings.preamble_path)
            logger.info(
                "Assistant preamble loaded",
                extra={"payload": prompt_use.model_dump()},
            )
        self.preamble = preamble
        self._today = today

    def build_messages(self, turns: Sequence[TurnLike]) -> List[Dict[str, str]]:
        """Prepend the rendered preamble to the caller's turns.

        Raises:
            ValidationError: If a turn is not a valid role-tagged message.
        """
        system = ConversationTurn(role="system", content=render_preamble(self.preamble, self._today()))
        validated = [ConversationTurn.model_validate(turn) for turn in turns]
        return [turn.model_dump() for turn in [system, *validated]]

    def converse(
        self,
        turns: Sequence[TurnLike],
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> GatewayResult:
        """Send the conversation and wait for the single completion.

        Blocks until the provider answers, fails, or the deadline passes.
        A set `cancel_event` stops the call from being sent; if it is set
        while the request is in flight, the reply is discarded.

        Args:
            turns: Role-tagged turns, oldest first.
            timeout: Deadline in seconds; defaults to settings.timeout_seconds.
            cancel_event: Optional cancellation signal from the caller.

        Returns:
            GatewayResult with the reply text, or a failure kind and reason.
        """
        deadline = timeout if timeout is not None else self.settings.timeout_seconds

        try:
            messages = self.build_messages(turns)
        except ValidationError as e:
            return GatewayResult.failure(FailureKind.VALIDATION, f"Invalid conversation turn: {e.errors()[0]['msg']}")

        if cancel_event is not None and cancel_event.is_set():
            return GatewayResult.failure(FailureKind.CANCELLED, "Request cancelled before it was sent")

        start = time.monotonic()
        try:
            content = llm_client.chat_completion(
                base_url=self.settings.base_url,
                model=self.settings.model,
                messages=messages,
                api_key=self.settings.api_key,
                timeout=deadline,
            )
        except requests.Timeout:
            return GatewayResult.failure(
                FailureKind.TIMEOUT,
                f"Assistant did not respond within {deadline:g} seconds",
                _elapsed_ms(start),
            )
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else "unknown"
            return GatewayResult.failure(
                FailureKind.PROVIDER, f"Provider returned HTTP {status}", _elapsed_ms(start)
            )
        except requests.ConnectionError as e:
            return GatewayResult.failure(FailureKind.PROVIDER, f"Connection failed: {e}", _elapsed_ms(start))
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Assistant request failed: {e}", exc_info=True)
            return GatewayResult.failure(FailureKind.PROVIDER, str(e) or "Connection failed", _elapsed_ms(start))

        if cancel_event is not None and cancel_event.is_set():
            return GatewayResult.failure(
                FailureKind.CANCELLED, "Request cancelled while waiting for the assistant", _elapsed_ms(start)
            )

        return GatewayResult(success=True, content=content, duration_ms=_elapsed_ms(start))


def _elapsed_ms(start: float) -> float:
    return round((time.monotonic() - start) * 1000, 1)
