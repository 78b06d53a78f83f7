"""Request Builder — multimodal chat requests and their wire shape."""
import logging
from dataclasses import dataclass
from typing import Any, Optional, Union

from pixelprompt.constants import (
    DATA_URI_TEMPLATE,
    FALLBACK_PROMPT,
    MSG_PROMPT_EMPTY,
    PART_IMAGE_URL,
    PART_TEXT,
    ROLE_USER,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TextPart:
    text: str


@dataclass(frozen=True)
class ImagePart:
    url: str
    detail: Optional[str] = None


ContentPart = Union[TextPart, ImagePart]


@dataclass(frozen=True)
class Message:
    role: str
    content: tuple[ContentPart, ...]


@dataclass(frozen=True)
class ChatRequest:
    model: str
    messages: tuple[Message, ...]
    max_tokens: int


def build_request(
    prompt_text: Optional[str],
    transport_text: str,
    mime_type: str,
    max_tokens: int,
    model: str,
    *,
    detail: Optional[str] = None,
) -> ChatRequest:
    match max_tokens:
        case bool():
            raise ValueError(f"max_tokens must be a positive integer, got {max_tokens!r}")
        case int() as n if n > 0:
            pass
        case _:
            raise ValueError(f"max_tokens must be a positive integer, got {max_tokens!r}")

    match model:
        case str() as m if m.strip():
            pass
        case _:
            raise ValueError("model must be a non-empty string")

    match (prompt_text or "").strip():
        case "":
            logger.warning(MSG_PROMPT_EMPTY)
            prompt = FALLBACK_PROMPT
        case _:
            prompt = prompt_text

    image_url = DATA_URI_TEMPLATE % (mime_type, transport_text)
    return ChatRequest(
        model=model,
        messages=(
            Message(
                role=ROLE_USER,
                content=(TextPart(prompt), ImagePart(image_url, detail)),
            ),
        ),
        max_tokens=max_tokens,
    )


# ── wire format ───────────────────────────────────────────────────────────────


def _part_to_wire(part: ContentPart) -> dict[str, Any]:
    """Flatten a content part; fields the part does not carry are left out entirely."""
    match part:
        case TextPart(text=text):
            return {"type": PART_TEXT, "text": text}
        case ImagePart(url=url, detail=None):
            return {"type": PART_IMAGE_URL, "image_url": {"url": url}}
        case ImagePart(url=url, detail=detail):
            return {"type": PART_IMAGE_URL, "image_url": {"url": url, "detail": detail}}
        case _:
            raise TypeError(f"Unknown content part: {part!r}")


def to_wire(request: ChatRequest) -> dict[str, Any]:
    return {
        "model": request.model,
        "messages": [
            {"role": m.role, "content": [_part_to_wire(p) for p in m.content]}
            for m in request.messages
        ],
        "max_tokens": request.max_tokens,
    }
