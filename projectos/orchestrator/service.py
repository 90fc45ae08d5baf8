"""
Assistant service: turns one user instruction into a terminal outcome.

    instruction -> gateway -> interpreter -> (store.create_project) -> outcome

This is the only place where failures from the gateway and the store are
turned into an `error` outcome for the caller.
"""

import threading
from typing import Optional, Sequence

from ..project.store import ProjectStore, get_project_store
from ..project.types import FailureKind
from ..shared.config import get_assistant_settings
from ..shared.logger import get_logger
from .gateway import AssistantGateway, TurnLike
from .interpreter import interpret
from .state import AssistantOutcome, ConversationTurn

logger = get_logger("assistant", __name__)


class AssistantService:
    """Wires the assistant gateway, command interpreter and project store."""

    def __init__(self, gateway: AssistantGateway, store: ProjectStore) -> None:
        self.gateway = gateway
        self.store = store

    def handle_instruction(
        self,
        instruction: str,
        history: Optional[Sequence[TurnLike]] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> AssistantOutcome:
        """Handle one user instruction.

        Args:
            instruction: The user's message.
            history: Earlier turns of the conversation, oldest first.
            cancel_event: Optional cancellation signal for the provider call.

        Returns:
            AssistantOutcome of kind created, reply or error.
        """
        turns = [*(history or []), ConversationTurn(role="user", content=instruction)]
        result = self.gateway.converse(turns, cancel_event=cancel_event)
        if not result.success:
            logger.warning(
                f"Assistant call failed: {result.error}",
                extra={"payload": {"error_kind": result.error_kind.value, "duration_ms": result.duration_ms}},
            )
            return AssistantOutcome.error(result.error_kind, f"Assistant request failed: {result.error}")

        interpretation = interpret(result.content, suffix=self.store.suffix)
        if not interpretation.is_command:
            return AssistantOutcome.reply(interpretation.text)

        command = interpretation.command
        error = self.store.validate_identifier(command.target_identifier)
        if error:
            logger.warning(
                f"Assistant proposed an invalid project identifier: {error}",
                extra={"payload": {"identifier": command.target_identifier}},
            )
            return AssistantOutcome.error(FailureKind.VALIDATION, error, command.target_identifier)

        stored = self.store.create_project(command.target_identifier, command.encoded_document)
        if not stored.success:
            return AssistantOutcome.error(stored.error_kind, stored.error, command.target_identifier)

        logger.info(
            f"Assistant created project '{command.target_identifier}'",
            extra={"payload": {"identifier": command.target_identifier}},
        )
        return AssistantOutcome.created(command.target_identifier)


_assistant_service: Optional[AssistantService] = None


def get_assistant_service() -> AssistantService:
    """Get or initialize the AssistantService (lazy initialization)."""
    global _assistant_service
    if _assistant_service is None:
        _assistant_service = AssistantService(
            AssistantGateway(get_assistant_settings()),
            get_project_store(),
        )
    return _assistant_service
