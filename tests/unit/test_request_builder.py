"""Unit tests for persona request building."""

import pytest

from tsea.assistant.personas import SYSTEM_PROMPTS, Persona, parse_persona
from tsea.assistant.request_builder import (
    CHAT_COMPLETIONS_PATH,
    RESPONSES_PATH,
    ApiStyle,
    AssistantConfig,
    build_request,
)
from tsea.config import Settings
from tsea.errors import ConfigurationError


class TestParsePersona:
    def test_known_ids_case_insensitive(self):
        assert parse_persona("ICATOR") is Persona.ICATOR
        assert parse_persona("  evolve ") is Persona.EVOLVE

    def test_unknown_is_none(self):
        assert parse_persona("oracle") is None
        assert parse_persona(None) is None

    def test_every_persona_has_a_prompt(self):
        assert set(SYSTEM_PROMPTS) == set(Persona)


class TestChatStyle:
    def test_system_and_user_messages(self):
        config = AssistantConfig(default_model="gpt-test")
        request = build_request("evaluate", "Is this a good setup?", config)

        assert request.path == CHAT_COMPLETIONS_PATH
        assert request.model == "gpt-test"
        assert request.body["messages"] == [
            {"role": "system", "content": SYSTEM_PROMPTS[Persona.EVALUATE]},
            {"role": "user", "content": "Is this a good setup?"},
        ]

    def test_persona_model_overrides_default(self):
        config = AssistantConfig(default_model="gpt-small", persona_models={"design": "gpt-large"})
        assert build_request("design", "hi", config).model == "gpt-large"
        assert build_request("generate", "hi", config).model == "gpt-small"

    def test_assistant_id_ignored_in_chat_style(self):
        config = AssistantConfig(default_model="gpt-test", persona_assistant_ids={"icator": "asst_1"})
        request = build_request("icator", "hi", config)
        assert request.path == CHAT_COMPLETIONS_PATH
        assert "assistant_id" not in request.body


class TestResponsesStyle:
    def test_assistant_id_request(self):
        config = AssistantConfig(
            default_model="gpt-test",
            api_style=ApiStyle.RESPONSES,
            persona_assistant_ids={"icator": "asst_123"},
        )
        request = build_request("icator", "Explain stops", config)
        assert request.path == RESPONSES_PATH
        assert request.body == {"model": "gpt-test", "input": "Explain stops", "assistant_id": "asst_123"}

    def test_assistant_id_without_model(self):
        config = AssistantConfig(api_style=ApiStyle.RESPONSES, persona_assistant_ids={"evolve": "asst_9"})
        request = build_request("evolve", "hi", config)
        assert request.body == {"input": "hi", "assistant_id": "asst_9"}
        assert request.model is None

    def test_falls_back_to_chat_without_assistant_id(self):
        config = AssistantConfig(default_model="gpt-test", api_style=ApiStyle.RESPONSES)
        assert build_request("design", "hi", config).path == CHAT_COMPLETIONS_PATH


class TestConfigurationErrors:
    def test_unknown_persona(self):
        with pytest.raises(ConfigurationError, match="oracle"):
            build_request("oracle", "hi", AssistantConfig(default_model="gpt-test"))

    def test_nothing_configured(self):
        with pytest.raises(ConfigurationError):
            build_request("icator", "hi", AssistantConfig())

    def test_config_from_settings(self):
        settings = Settings(
            openai_default_model="gpt-x",
            assistant_api_style="Responses",
            persona_assistant_ids={"icator": "asst_1"},
        )
        config = AssistantConfig.from_settings(settings)
        assert config.api_style is ApiStyle.RESPONSES
        assert config.assistant_id_for(Persona.ICATOR) == "asst_1"
        assert config.model_for(Persona.ICATOR) == "gpt-x"

    def test_unknown_api_style(self):
        with pytest.raises(ConfigurationError):
            AssistantConfig.from_settings(Settings(assistant_api_style="stream"))
