"""
Reply normalizer - one canonical text out of any known upstream reply shape.

Known shapes, in resolution priority order:

1. FLATTENED         {"output_text": "..."}
2. OUTPUT_MESSAGE    {"output": [{"type": "message", "content": [{"type": "output_text", "text": "..."}]}]}
3. OUTPUT_TEXT_ITEM  {"output": [{"type": "output_text", "text": "..."}]}
4. LEGACY_MESSAGE    {"message": {"content": [{"text": {"value": "..."}}]}}
5. CHAT_COMPLETION   {"choices": [{"message": {"content": "..."}}]}

Anything else resolves to UNKNOWN with no text.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional, Tuple

from tsea.errors import NoContentError

NO_CONTENT_PLACEHOLDER = "(no content)"


class ReplyShape(str, Enum):
    FLATTENED = "flattened"
    OUTPUT_MESSAGE = "output_message"
    OUTPUT_TEXT_ITEM = "output_text_item"
    LEGACY_MESSAGE = "legacy_message"
    CHAT_COMPLETION = "chat_completion"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ResolvedReply:
    shape: ReplyShape
    text: Optional[str] = None

    @property
    def has_content(self) -> bool:
        return self.text is not None

    def display_text(self) -> str:
        return self.text if self.text is not None else NO_CONTENT_PLACEHOLDER

    def require_text(self) -> str:
        """The reply text; raises NoContentError when there is none."""
        if self.text is None:
            raise NoContentError()
        return self.text


def _clean(value: Any) -> Optional[str]:
    """The string as received, or None for non-strings and blank strings."""
    if isinstance(value, str) and value.strip():
        return value
    return None


def _entry_text(entry: Any) -> Optional[str]:
    """Text of a content entry; accepts both "text": "..." and "text": {"value": "..."}."""
    if not isinstance(entry, dict):
        return None
    text = entry.get("text")
    if isinstance(text, dict):
        text = text.get("value")
    return _clean(text)


def _list_field(doc: Any, key: str) -> List[Any]:
    if isinstance(doc, dict):
        value = doc.get(key)
        if isinstance(value, list):
            return value
    return []


# ── Per-shape extractors ─────────────────────────────────────────────────

def _from_flattened(payload: dict) -> Optional[str]:
    return _clean(payload.get("output_text"))


def _from_message_content(content: List[Any]) -> Optional[str]:
    for wanted in ("output_text", "text"):
        for entry in content:
            if isinstance(entry, dict) and entry.get("type") == wanted:
                text = _entry_text(entry)
                if text:
                    return text
    for entry in content:
        text = _entry_text(entry)
        if text:
            return text
    return None


def _from_output_messages(payload: dict) -> Optional[str]:
    for item in _list_field(payload, "output"):
        if not isinstance(item, dict) or item.get("type") != "message":
            continue
        text = _from_message_content(_list_field(item, "content"))
        if text:
            return text
    return None


def _from_output_text_items(payload: dict) -> Optional[str]:
    for item in _list_field(payload, "output"):
        if isinstance(item, dict) and item.get("type") == "output_text":
            text = _entry_text(item)
            if text:
                return text
    return None


def _from_legacy_message(payload: dict) -> Optional[str]:
    content = _list_field(payload.get("message"), "content")
    if not content:
        return None
    return _entry_text(content[0])


def _from_chat_completion(payload: dict) -> Optional[str]:
    choices = _list_field(payload, "choices")
    if not choices or not isinstance(choices[0], dict):
        return None
    message = choices[0].get("message")
    if not isinstance(message, dict):
        return None
    return _clean(message.get("content"))


_RESOLUTION_ORDER: Tuple[Tuple[ReplyShape, Callable[[dict], Optional[str]]], ...] = (
    (ReplyShape.FLATTENED, _from_flattened),
    (ReplyShape.OUTPUT_MESSAGE, _from_output_messages),
    (ReplyShape.OUTPUT_TEXT_ITEM, _from_output_text_items),
    (ReplyShape.LEGACY_MESSAGE, _from_legacy_message),
    (ReplyShape.CHAT_COMPLETION, _from_chat_completion),
)


def resolve_reply(payload: Any) -> ResolvedReply:
    """Resolve a raw upstream document to the first shape yielding text."""
    if isinstance(payload, dict):
        for shape, extract in _RESOLUTION_ORDER:
            text = extract(payload)
            if text is not None:
                return ResolvedReply(shape=shape, text=text)
    return ResolvedReply(shape=ReplyShape.UNKNOWN)


def extract_reply_text(payload: Any) -> Optional[str]:
    """Canonical reply text, or None when the payload carries no usable text."""
    return resolve_reply(payload).text
