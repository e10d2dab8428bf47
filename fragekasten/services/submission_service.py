"""
Submission Service
==================

Processes one anonymous question: sanitize, validate length, persist,
notify the owner. Each failure is raised as a FragekastenError whose
registry entry decides the HTTP status:

    FKS-API-001  length out of bounds      (nothing stored, nothing sent)
    FKS-DB-001   storage insert failed     (nothing sent)
    FKS-NTF-001  webhook delivery failed   (question stays stored)
"""

import logging
from typing import Optional

from fragekasten.config import settings
from fragekasten.core.async_utils import run_sync
from fragekasten.core.errors import FragekastenError
from fragekasten.models.question import Question
from fragekasten.services.notification_service import (
    DiscordWebhookSink,
    NotificationDeliveryError,
    build_question_notification,
)
from fragekasten.services.question_store import QuestionStore, QuestionStoreError
from fragekasten.utils.sanitization import strip_markdown

logger = logging.getLogger(__name__)


class SubmissionService:
    def __init__(
        self,
        store: QuestionStore,
        sink: DiscordWebhookSink,
        min_length: int,
        max_length: int,
        ttl_seconds: int,
        owner_name: str,
        notify_user_id: Optional[int] = None,
    ):
        self.store = store
        self.sink = sink
        self.min_length = min_length
        self.max_length = max_length
        self.ttl_seconds = ttl_seconds
        self.owner_name = owner_name
        self.notify_user_id = notify_user_id

    def is_valid_length(self, content: str) -> bool:
        """Both bounds are inclusive."""
        return self.min_length <= len(content) <= self.max_length

    async def submit(self, raw_content: str, ip_address: str, user_agent: str) -> Question:
        """Store *raw_content* as a new question and notify the owner.

        Raises:
            FragekastenError: FKS-API-001, FKS-DB-001 or FKS-NTF-001.
        """
        content = strip_markdown(raw_content.strip())

        if not self.is_valid_length(content):
            raise FragekastenError(
                "FKS-API-001",
                detail="A question was submitted but it failed to validate length requirements, rejecting.",
                context={"length": len(content), "min_length": self.min_length, "max_length": self.max_length},
            )

        try:
            question = await run_sync(
                self.store.insert, content, ip_address, user_agent, self.ttl_seconds
            )
        except (QuestionStoreError, TimeoutError) as exc:
            raise FragekastenError(
                "FKS-DB-001",
                detail=f"Failed to insert question into the database: {exc}",
            ) from exc

        payload = build_question_notification(content, self.owner_name, self.notify_user_id)
        try:
            await self.sink.deliver(payload)
        except NotificationDeliveryError as exc:
            raise FragekastenError(
                "FKS-NTF-001",
                detail=f"Failed to send question via webhook: {exc}",
                context={
                    "question_id": question.id,
                    "status_code": exc.status_code,
                    "response_body": exc.detail,
                },
            ) from exc

        logger.info("question_accepted", extra={"question_id": question.id, "length": len(content)})
        return question


_submission_service: Optional[SubmissionService] = None


def get_submission_service() -> SubmissionService:
    """FastAPI dependency returning the process-wide SubmissionService."""
    global _submission_service
    if _submission_service is None:
        _submission_service = SubmissionService(
            store=QuestionStore(),
            sink=DiscordWebhookSink(settings.discord_webhook_url),
            min_length=settings.page_question_min_length,
            max_length=settings.page_question_max_length,
            ttl_seconds=settings.question_ttl_seconds,
            owner_name=settings.page_owner_name,
            notify_user_id=settings.discord_user_id,
        )
    return _submission_service
