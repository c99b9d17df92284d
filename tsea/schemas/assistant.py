"""
Assistant chat schemas.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class ChatMessageIn(BaseModel):
    """User message for one persona."""

    # Plain string so unknown personas reach the builder and fail closed there
    persona: str = Field("icator", max_length=50)
    message: str = Field(..., min_length=1, max_length=4000)


class ChatMessageOut(BaseModel):
    persona: str
    model: Optional[str] = None
    reply: str
    shape: str
    has_content: bool


class PersonaOut(BaseModel):
    id: str
    description: str
    configured: bool


class PersonaListOut(BaseModel):
    personas: List[PersonaOut]
