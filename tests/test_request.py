"""Request Builder tests: message shape, prompt fallback and wire omission."""
import json

import pytest

from pixelprompt.constants import FALLBACK_PROMPT
from pixelprompt.vision.request import ImagePart, TextPart, build_request, to_wire


def make_request(prompt="What is this?", **kwargs):
    return build_request(prompt, "AAAA", "image/png", kwargs.pop("max_tokens", 300), "gpt-4o", **kwargs)


def test_build_request_has_one_user_message_with_text_then_image():
    request = make_request()

    assert request.model == "gpt-4o"
    assert request.max_tokens == 300
    [message] = request.messages
    assert message.role == "user"
    assert message.content == (
        TextPart("What is this?"),
        ImagePart("data:image/png;base64,AAAA"),
    )


@pytest.mark.parametrize("prompt", ["", "   ", "\n\t", None])
def test_blank_prompt_uses_fallback(prompt):
    request = make_request(prompt)
    assert request.messages[0].content[0] == TextPart(FALLBACK_PROMPT)


@pytest.mark.parametrize("max_tokens", [0, -1, True, 2.5, "300"])
def test_invalid_max_tokens_rejected(max_tokens):
    with pytest.raises(ValueError, match="max_tokens"):
        make_request(max_tokens=max_tokens)


def test_empty_model_rejected():
    with pytest.raises(ValueError, match="model"):
        build_request("hi", "AAAA", "image/png", 10, " ")


def test_wire_shape_matches_chat_completions():
    wire = to_wire(make_request())

    assert wire == {
        "model": "gpt-4o",
        "messages": [
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": "What is this?"},
                    {"type": "image_url", "image_url": {"url": "data:image/png;base64,AAAA"}},
                ],
            }
        ],
        "max_tokens": 300,
    }


@pytest.mark.parametrize("detail", [None, "low"])
def test_wire_omits_fields_a_part_does_not_carry(detail):
    wire = to_wire(make_request(detail=detail))
    text_part, image_part = wire["messages"][0]["content"]

    assert "image_url" not in text_part
    assert "text" not in image_part
    assert "null" not in json.dumps(wire)


def test_wire_includes_detail_when_set():
    wire = to_wire(make_request(detail="high"))
    assert wire["messages"][0]["content"][1]["image_url"]["detail"] == "high"


def test_wire_omits_detail_when_unset():
    wire = to_wire(make_request())
    assert "detail" not in wire["messages"][0]["content"][1]["image_url"]
