"""
Chat Service

One chat exchange with the Senali assistant:

1. Check the user can pay for the message
2. Collect recent conversation and family context
3. Call the LLM
4. Persist both messages, charge the credit
5. Extract symptom observations into matching profiles

Nothing is stored or charged when the model fails or answers empty.
"""

import time
from datetime import timedelta
from typing import Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from senali.config import get_settings
from senali.config.logging_config import get_logger
from senali.config.settings import Settings
from senali.domain.clock import as_utc, utcnow
from senali.domain.enums.content import MessageRole
from senali.domain.models.chat import ChatReply, ChatTurn
from senali.infrastructure.database.models.chat_message_model import ChatMessageModel
from senali.infrastructure.database.models.user_model import UserModel
from senali.infrastructure.database.repositories.chat_message_repository import (
    ChatMessageRepository,
)
from senali.infrastructure.llm.provider import LLMProvider, LLMProviderError
from senali.infrastructure.metrics.prometheus_metrics import track_chat_message
from senali.services.billing.subscription_service import SubscriptionService
from senali.services.errors import InsufficientCreditsError, ModelOutputError
from senali.services.profiles.profile_service import ProfileService
from senali.services.prompt.prompt_builder import PromptBuilder
from senali.services.screening.symptom_extractor import SymptomExtractor

logger = get_logger(__name__)


class ChatService:
    """
    Chat pipeline for one user message.

    Usage:
        service = ChatService(session, llm)
        reply = await service.send_message(user, "My son Sam won't sit still")
    """

    def __init__(
        self,
        session: AsyncSession,
        llm: LLMProvider,
        *,
        prompt_builder: Optional[PromptBuilder] = None,
        extractor: Optional[SymptomExtractor] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._llm = llm
        self._messages = ChatMessageRepository(session)
        self._billing = SubscriptionService(session)
        self._profiles = ProfileService(session, policy=self._billing.policy)
        self._prompt_builder = prompt_builder or PromptBuilder(self._settings.openai)
        self._extractor = extractor or SymptomExtractor()

    async def send_message(
        self,
        user: UserModel,
        message: str,
        context: Optional[Sequence[ChatTurn]] = None,
    ) -> ChatReply:
        """
        Answer a message.

        Args:
            user: Authenticated account (attached to the session)
            message: The parent's message
            context: Client-supplied prior turns; stored history when None

        Raises:
            InsufficientCreditsError: Not enough credits (402)
            ModelOutputError: Empty reply (502)
            LLMProviderError: Provider failure
        """
        try:
            self._billing.ensure_can_afford(user)
        except InsufficientCreditsError:
            track_chat_message("no_credits")
            raise

        limit = self._settings.chat_history_limit
        if context is not None:
            history = list(context)[-limit:] if limit > 0 else []
        else:
            stored = await self._messages.recent_for_user(user.id, limit)
            history = [ChatTurn(role=m.role, content=m.content) for m in stored]

        family = await self._profiles.family_members(user)
        prompt = self._prompt_builder.build_chat(
            message,
            history=history,
            family=family,
            history_limit=limit,
        )

        sent_at = utcnow()
        started = time.monotonic()
        try:
            response = await self._llm.generate(prompt)
        except LLMProviderError:
            track_chat_message("failed")
            raise

        processing_time_ms = int((time.monotonic() - started) * 1000)

        if response.is_empty:
            track_chat_message("failed")
            raise ModelOutputError("No response generated")

        await self._messages.create(ChatMessageModel(
            user_id=user.id,
            role=MessageRole.USER.value,
            content=message,
            created_at=sent_at,
        ))
        # Keep the reply strictly after the question in history order
        replied_at = max(utcnow(), sent_at + timedelta(microseconds=1))
        assistant = await self._messages.create(ChatMessageModel(
            user_id=user.id,
            role=MessageRole.ASSISTANT.value,
            content=response.content,
            tokens=response.total_tokens,
            created_at=replied_at,
        ))

        remaining = await self._billing.spend(user, feature="chat")

        findings = self._extractor.extract(message)
        updated = await self._profiles.apply_chat_findings(user, findings)

        track_chat_message("answered")
        logger.info(
            "Chat message answered",
            user_id=user.id,
            tokens=response.total_tokens,
            latency_ms=response.latency_ms,
            history_messages=len(history),
            profiles_updated=len(updated),
        )

        return ChatReply(
            response=response.content,
            model=response.model or self._llm.default_model,
            tokens=response.total_tokens,
            processing_time_ms=processing_time_ms,
            remaining_credits=remaining,
            timestamp=as_utc(assistant.created_at),
        )

    async def history(self, user: UserModel, limit: int = 50) -> Sequence[ChatMessageModel]:
        """Stored messages, oldest first."""
        return await self._messages.recent_for_user(user.id, limit)

    async def clear_history(self, user: UserModel) -> int:
        """Delete all stored messages; returns how many were removed."""
        deleted = await self._messages.delete_for_user(user.id)
        logger.info("Chat history cleared", user_id=user.id, deleted=deleted)
        return deleted
