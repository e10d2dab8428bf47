"""Request and webhook payload schemas."""

from typing import List

from pydantic import BaseModel


class QuestionPayload(BaseModel):
    content: str


class WebhookEmbed(BaseModel):
    title: str
    description: str
    color: int
    timestamp: str  # ISO-8601


class WebhookPayload(BaseModel):
    username: str
    content: str
    embeds: List[WebhookEmbed]
