"""
Unit tests for chat, suggestions and pricing helpers.
"""

import json

import pytest

from app.core.exceptions import FeatureUnavailable
from app.services.llm import (
    GenerationError,
    GenerativeClient,
    generate_chat_response,
    generate_smart_suggestions,
    strip_code_fence,
)
from app.services.pricing import pricing_breakdown


def test_strip_code_fence():
    assert strip_code_fence('```json\n{"a": 1}\n```') == '{"a": 1}'
    assert strip_code_fence('```\n[1]\n```') == "[1]"
    assert strip_code_fence('  {"a": 1} ') == '{"a": 1}'


def test_client_without_key_is_disabled():
    client = GenerativeClient(api_key="")
    assert client.enabled is False
    with pytest.raises(FeatureUnavailable):
        client.generate("hello")


def test_chat_without_history_sends_message_only(fake_llm):
    fake_llm.reply = "Hi there"
    assert generate_chat_response(fake_llm, "hello") == "Hi there"
    assert fake_llm.prompts == ["hello"]


def test_chat_uses_last_five_turns_as_context(fake_llm):
    fake_llm.reply = "ok"
    history = [{"role": "user", "content": f"message {i}"} for i in range(8)]
    generate_chat_response(fake_llm, "latest", history)

    prompt = fake_llm.prompts[0]
    assert prompt.startswith("Context: ")
    assert "message 2" not in prompt
    assert "message 3" in prompt and "message 7" in prompt
    assert prompt.endswith("User: latest\n\nAssistant:")


def test_chat_propagates_generation_error(fake_llm):
    fake_llm.error = GenerationError("boom")
    with pytest.raises(GenerationError):
        generate_chat_response(fake_llm, "hello")


def test_suggestions_parse_json_array(fake_llm):
    fake_llm.reply = json.dumps(["Linear Algebra", "Statistics", "SQL", "Pandas", "Docker", "Git"])
    result = generate_smart_suggestions(fake_llm, ["Python"], ["help with numpy"])
    assert result == ["Linear Algebra", "Statistics", "SQL", "Pandas", "Docker"]


@pytest.mark.parametrize("reply", ["not json", json.dumps({"a": 1})])
def test_suggestions_empty_on_bad_reply(fake_llm, reply):
    fake_llm.reply = reply
    assert generate_smart_suggestions(fake_llm, [], []) == []


def test_suggestions_empty_when_unconfigured(fake_llm):
    fake_llm.enabled = False
    assert generate_smart_suggestions(fake_llm, ["Python"], []) == []


def test_pricing_breakdown_default_fee():
    p = pricing_breakdown(100, 2)
    assert p.subtotal == 200
    assert p.platform_fee == pytest.approx(25)
    assert p.total == 200
    assert p.tutor_receives == pytest.approx(175)
    assert p.platform_fee_percentage == 12.5


def test_pricing_breakdown_custom_fee():
    p = pricing_breakdown(60, 1.5, platform_fee_percentage=10)
    assert p.subtotal == 90
    assert p.platform_fee == pytest.approx(9)
    assert p.tutor_receives == pytest.approx(81)
