"""
Tests for the input adapter and the generateContent payload builder.
"""
import json

import pytest

from gemini_relay.services.relay import ChatRequest, ChatTurn, GenerationConfig
from gemini_relay.services.relay.errors import ValidationError
from gemini_relay.services.relay.request_builder import (
    build_generate_content_payload,
    parse_chat_request,
)

DEFAULT_MODEL = "gemini-2.0-flash"


def _request(*pairs, model_id=DEFAULT_MODEL) -> ChatRequest:
    return ChatRequest(
        turns=tuple(ChatTurn(role=r, content=c) for r, c in pairs),
        model_id=model_id,
    )


# ============================================================================
# parse_chat_request
# ============================================================================


def test_parse_keeps_turn_order_and_default_model(observer):
    body = {
        "messages": [
            {"role": "user", "content": "What is a healthy heart rate?"},
            {"role": "assistant", "content": "60 to 100 beats per minute."},
            {"role": "user", "content": "What about during exercise?"},
        ]
    }

    request = parse_chat_request(body, DEFAULT_MODEL, observer)

    assert [t.content for t in request.turns] == [
        "What is a healthy heart rate?",
        "60 to 100 beats per minute.",
        "What about during exercise?",
    ]
    assert request.model_id == DEFAULT_MODEL
    assert observer.events == [
        ("chat_request.validated", {"turn_count": 3, "model": DEFAULT_MODEL})
    ]


def test_parse_passes_unknown_model_through():
    body = {"messages": [{"role": "user", "content": "hi"}], "model": "not-a-real-model"}
    assert parse_chat_request(body, DEFAULT_MODEL).model_id == "not-a-real-model"


def test_parse_blank_model_falls_back_to_default():
    body = {"messages": [{"role": "user", "content": "hi"}], "model": "  "}
    assert parse_chat_request(body, DEFAULT_MODEL).model_id == DEFAULT_MODEL


@pytest.mark.parametrize("body", [{}, {"messages": []}, {"messages": None}])
def test_parse_rejects_missing_turns(body):
    with pytest.raises(ValidationError) as exc_info:
        parse_chat_request(body, DEFAULT_MODEL)
    assert exc_info.value.reason == "missing_turns"


@pytest.mark.parametrize("body", [None, [], "messages", 42])
def test_parse_rejects_non_object_body(body):
    with pytest.raises(ValidationError) as exc_info:
        parse_chat_request(body, DEFAULT_MODEL)
    assert exc_info.value.reason == "invalid_body"


@pytest.mark.parametrize(
    "messages",
    [
        [{"role": "user"}],
        [{"role": "user", "content": ""}],
        [{"content": "no role"}],
        [{"role": "user", "content": 5}],
        ["plain string"],
        "not a list",
    ],
)
def test_parse_rejects_invalid_turns(messages):
    with pytest.raises(ValidationError) as exc_info:
        parse_chat_request({"messages": messages}, DEFAULT_MODEL)
    assert exc_info.value.reason == "invalid_turn"


def test_chat_request_is_immutable():
    request = _request(("user", "hi"))
    with pytest.raises(Exception):
        request.model_id = "other"
    with pytest.raises(Exception):
        request.turns[0].content = "changed"


# ============================================================================
# build_generate_content_payload
# ============================================================================


def test_payload_has_one_block_per_turn_with_mapped_roles():
    request = _request(
        ("user", "first"),
        ("assistant", "second"),
        ("system", "third"),
        ("user", "fourth"),
    )

    payload = build_generate_content_payload(request, GenerationConfig())

    assert payload["contents"] == [
        {"role": "user", "parts": [{"text": "first"}]},
        {"role": "model", "parts": [{"text": "second"}]},
        {"role": "model", "parts": [{"text": "third"}]},
        {"role": "user", "parts": [{"text": "fourth"}]},
    ]


def test_payload_uses_default_generation_config():
    payload = build_generate_content_payload(_request(("user", "hi")), GenerationConfig())
    assert payload["generationConfig"] == {
        "temperature": 0.9,
        "topK": 40,
        "topP": 0.95,
        "maxOutputTokens": 8192,
    }


def test_payload_uses_configured_generation_parameters():
    generation = GenerationConfig(temperature=0.2, top_k=10, top_p=0.5, max_output_tokens=256)
    payload = build_generate_content_payload(_request(("user", "hi")), generation)
    assert payload["generationConfig"] == {
        "temperature": 0.2,
        "topK": 10,
        "topP": 0.5,
        "maxOutputTokens": 256,
    }


def test_building_twice_gives_identical_bytes():
    request = _request(("user", "Привет"), ("assistant", "Hello!"), ("user", "Again"))

    first = json.dumps(build_generate_content_payload(request, GenerationConfig()))
    second = json.dumps(build_generate_content_payload(request, GenerationConfig()))

    assert first == second


def test_payload_does_not_alias_request_content():
    request = _request(("user", "hi"))
    payload = build_generate_content_payload(request, GenerationConfig())
    payload["contents"][0]["parts"][0]["text"] = "mutated"
    assert request.turns[0].content == "hi"
