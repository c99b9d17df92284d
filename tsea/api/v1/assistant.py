"""
Assistant chat endpoints - proxy one message to a persona and normalize the reply.
"""

from fastapi import APIRouter, status

from tsea.api.deps import Assistant, CurrentUser
from tsea.assistant.personas import PERSONA_DESCRIPTIONS, Persona
from tsea.errors import ConfigurationError
from tsea.logging_config import get_logger
from tsea.schemas.assistant import ChatMessageIn, ChatMessageOut, PersonaListOut, PersonaOut

logger = get_logger(__name__)
router = APIRouter()


@router.get("/personas", response_model=PersonaListOut)
async def list_personas(_: CurrentUser, assistant: Assistant):
    """Available personas and whether each one can currently be served."""
    personas = []
    for persona in Persona:
        configured = bool(
            assistant.config.model_for(persona) or assistant.config.assistant_id_for(persona)
        )
        personas.append(
            PersonaOut(
                id=persona.value,
                description=PERSONA_DESCRIPTIONS[persona],
                configured=configured,
            )
        )
    return PersonaListOut(personas=personas)


@router.post("/chat", response_model=ChatMessageOut, status_code=status.HTTP_200_OK)
async def chat(body: ChatMessageIn, user: CurrentUser, assistant: Assistant):
    """
    Send one message to an assistant persona.

    Unknown personas and missing configuration return 503 before any upstream
    call; upstream failures return 502. A reply with no text is returned as
    "(no content)".
    """
    try:
        result = await assistant.chat(body.persona, body.message)
    except ConfigurationError:
        logger.warning(
            "Assistant persona not configured",
            extra={"persona": body.persona, "user_id": str(user.id)},
        )
        raise

    logger.info(
        "Chat turn",
        extra={
            "persona": result.persona,
            "user_id": str(user.id),
            "shape": result.shape.value,
            "has_content": result.has_content,
        },
    )
    return ChatMessageOut(
        persona=result.persona,
        model=result.model,
        reply=result.reply,
        shape=result.shape.value,
        has_content=result.has_content,
    )
