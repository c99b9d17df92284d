"""
Request builder for the remote inference API.

Two upstream contracts are supported:

- "responses" style: {model, input, assistant_id} posted to /responses,
  used when the persona has a remote assistant id configured.
- "chat" style: {model, messages: [system, user]} posted to /chat/completions.

Building never touches the network. A persona that cannot be served raises
ConfigurationError before any call is attempted.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from tsea.assistant.personas import SYSTEM_PROMPTS, Persona, parse_persona
from tsea.config import Settings
from tsea.errors import ConfigurationError


class ApiStyle(str, Enum):
    CHAT = "chat"
    RESPONSES = "responses"


CHAT_COMPLETIONS_PATH = "/chat/completions"
RESPONSES_PATH = "/responses"


@dataclass(frozen=True)
class AssistantConfig:
    """Persona-level model and assistant configuration."""

    default_model: str = ""
    api_style: ApiStyle = ApiStyle.CHAT
    persona_models: Mapping[str, str] = field(default_factory=dict)
    persona_assistant_ids: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_settings(cls, settings: Settings) -> "AssistantConfig":
        try:
            style = ApiStyle(settings.assistant_api_style.strip().lower())
        except ValueError:
            raise ConfigurationError(
                f"Unknown assistant API style '{settings.assistant_api_style}'"
            ) from None
        return cls(
            default_model=(settings.openai_default_model or "").strip(),
            api_style=style,
            persona_models=dict(settings.persona_models),
            persona_assistant_ids=dict(settings.persona_assistant_ids),
        )

    def model_for(self, persona: Persona) -> str:
        return (self.persona_models.get(persona.value) or self.default_model or "").strip()

    def assistant_id_for(self, persona: Persona) -> Optional[str]:
        value = (self.persona_assistant_ids.get(persona.value) or "").strip()
        return value or None


@dataclass(frozen=True)
class AssistantRequest:
    """A request document ready to post to the upstream API."""

    persona: Persona
    path: str
    body: Dict[str, Any]

    @property
    def model(self) -> Optional[str]:
        return self.body.get("model")


def build_request(which: str, user_message: str, config: AssistantConfig) -> AssistantRequest:
    """
    Build the upstream request for a persona.

    Raises:
        ConfigurationError: unknown persona, or neither an assistant id nor
            a model is configured for it.
    """
    persona = parse_persona(which)
    if persona is None:
        raise ConfigurationError(f"No persona configured for '{which}'")

    model = config.model_for(persona)
    assistant_id = config.assistant_id_for(persona)

    if config.api_style is ApiStyle.RESPONSES and assistant_id:
        body: Dict[str, Any] = {"input": user_message, "assistant_id": assistant_id}
        if model:
            body = {"model": model, **body}
        return AssistantRequest(persona=persona, path=RESPONSES_PATH, body=body)

    if model:
        return AssistantRequest(
            persona=persona,
            path=CHAT_COMPLETIONS_PATH,
            body={
                "model": model,
                "messages": [
                    {"role": "system", "content": SYSTEM_PROMPTS[persona]},
                    {"role": "user", "content": user_message},
                ],
            },
        )

    raise ConfigurationError(f"No model or assistant configured for persona '{persona.value}'")
