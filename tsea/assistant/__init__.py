"""
Assistant - persona request building, upstream calls and reply normalization.
"""

from tsea.assistant.client import AssistantClient
from tsea.assistant.personas import Persona, parse_persona
from tsea.assistant.reply_normalizer import (
    NO_CONTENT_PLACEHOLDER,
    ReplyShape,
    ResolvedReply,
    extract_reply_text,
    resolve_reply,
)
from tsea.assistant.request_builder import (
    ApiStyle,
    AssistantConfig,
    AssistantRequest,
    build_request,
)
from tsea.assistant.service import AssistantService, ChatReply

__all__ = [
    "AssistantClient",
    "Persona",
    "parse_persona",
    "NO_CONTENT_PLACEHOLDER",
    "ReplyShape",
    "ResolvedReply",
    "extract_reply_text",
    "resolve_reply",
    "ApiStyle",
    "AssistantConfig",
    "AssistantRequest",
    "build_request",
    "AssistantService",
    "ChatReply",
]
