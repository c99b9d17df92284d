"""
Assistant chat service: build request -> call upstream -> normalize reply.
"""

from dataclasses import dataclass
from typing import Optional

from tsea.assistant.client import AssistantClient
from tsea.assistant.reply_normalizer import ReplyShape, resolve_reply
from tsea.assistant.request_builder import AssistantConfig, build_request
from tsea.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ChatReply:
    persona: str
    model: Optional[str]
    reply: str
    shape: ReplyShape
    has_content: bool


class AssistantService:
    """One chat turn against a configured persona."""

    def __init__(self, config: AssistantConfig, client: AssistantClient):
        self.config = config
        self.client = client

    async def chat(self, which: str, message: str) -> ChatReply:
        """
        Run a single chat turn.

        ConfigurationError and UpstreamError propagate to the caller. A reply
        without usable text comes back with the "(no content)" placeholder.
        """
        request = build_request(which, message, self.config)
        payload = await self.client.complete(request)
        resolved = resolve_reply(payload)
        if not resolved.has_content:
            logger.info(
                "Assistant reply had no content",
                extra={"persona": request.persona.value},
            )
        return ChatReply(
            persona=request.persona.value,
            model=request.model,
            reply=resolved.display_text(),
            shape=resolved.shape,
            has_content=resolved.has_content,
        )
