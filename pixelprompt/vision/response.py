"""Response model and classifier for chat completion bodies.

Every body, well-formed or not, ends up as exactly one ClassifiedResult:
Success, ApiError, TransportError or ParseError. Nothing here raises.
"""
import json
import logging
from dataclasses import dataclass
from typing import Any, Optional, Union

from pixelprompt.constants import (
    CAUSE_NOT_AN_OBJECT,
    CAUSE_UNRECOGNIZED_SHAPE,
    MSG_NO_RESPONSE_BODY,
    MSG_RESULT_API_ERROR,
    MSG_RESULT_EMPTY,
    MSG_RESULT_PARSE,
    MSG_RESULT_SUCCESS,
    MSG_RESULT_TRANSPORT,
    MSG_SECONDARY_PARSE_FAILED,
    RAW_BODY_PREVIEW,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ErrorDetail:
    message: str
    type: str
    param: Optional[str] = None
    code: Optional[str] = None


@dataclass(frozen=True)
class Choice:
    content: str
    finish_reason: Optional[str]


@dataclass(frozen=True)
class ChatResponse:
    choices: tuple[Choice, ...] = ()
    error: Optional[ErrorDetail] = None


# ── classified results ────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Success:
    text: str
    finish_reason: Optional[str]

    @property
    def is_empty(self) -> bool:
        """True when the body parsed but the model's content was blank."""
        return self.text == ""


@dataclass(frozen=True)
class ApiError:
    detail: ErrorDetail
    status: Optional[int] = None


@dataclass(frozen=True)
class TransportError:
    status: Optional[int]
    raw_body: str
    reason: Optional[str] = None


@dataclass(frozen=True)
class ParseError:
    raw_body: str
    cause: str


ClassifiedResult = Union[Success, ApiError, TransportError, ParseError]


# ── parsing ───────────────────────────────────────────────────────────────────


def _optional_str(value: Any) -> Optional[str]:
    match value:
        case None:
            return None
        case str():
            return value
        case _:
            return str(value)


def _parse_error(payload: Any) -> Optional[ErrorDetail]:
    """Best-effort: an error field of any other shape counts as absent."""
    match payload:
        case None:
            return None
        case str() as message:
            return ErrorDetail(message=message, type="")
        case dict():
            return ErrorDetail(
                message=_optional_str(payload.get("message")) or "",
                type=_optional_str(payload.get("type")) or "",
                param=_optional_str(payload.get("param")),
                code=_optional_str(payload.get("code")),
            )
        case _:
            return None


def _parse_choice(payload: Any) -> Choice:
    match payload:
        case {"message": dict() as message, **rest}:
            content = message.get("content")
            match content:
                case None | str():
                    pass
                case _:
                    raise ValueError(f"message content has unexpected type {type(content).__name__}")
            return Choice(
                content=content or "",
                finish_reason=_optional_str(rest.get("finish_reason")),
            )
        case _:
            raise ValueError("choice has no message object")


def parse_chat_response(raw: str) -> ChatResponse:
    """Parse a chat completion body. Raises on anything that is not a JSON object."""
    payload = json.loads(raw)
    match payload:
        case dict():
            pass
        case _:
            raise ValueError(CAUSE_NOT_AN_OBJECT)
    choices = payload.get("choices") or []
    if not isinstance(choices, list):
        raise ValueError("choices is not a list")
    return ChatResponse(
        choices=tuple(_parse_choice(c) for c in choices),
        error=_parse_error(payload.get("error")),
    )


# ── classification ────────────────────────────────────────────────────────────


def classify_response(raw: str) -> ClassifiedResult:
    """Classify the body of a completed 2xx exchange."""
    try:
        response = parse_chat_response(raw)
    except Exception as exc:
        return ParseError(raw_body=raw, cause=f"{type(exc).__name__}: {exc}")

    match response:
        case ChatResponse(choices=(first, *_)):
            return Success(text=first.content.strip(), finish_reason=first.finish_reason)
        case ChatResponse(error=ErrorDetail() as detail):
            return ApiError(detail=detail)
        case _:
            return ParseError(raw_body=raw, cause=CAUSE_UNRECOGNIZED_SHAPE)


def classify_failure(
    status: Optional[int], raw: str, reason: Optional[str] = None
) -> ClassifiedResult:
    """Classify a failed exchange, preferring a structured error embedded in the body."""
    detail: Optional[ErrorDetail] = None
    if raw:
        try:
            detail = parse_chat_response(raw).error
        except Exception as exc:
            logger.debug(MSG_SECONDARY_PARSE_FAILED, exc)

    match detail:
        case ErrorDetail():
            return ApiError(detail=detail, status=status)
        case _:
            return TransportError(status=status, raw_body=raw, reason=reason)


def describe(result: ClassifiedResult) -> str:
    """One line telling the user what happened and at which stage."""
    match result:
        case Success(text="", finish_reason=reason):
            return MSG_RESULT_EMPTY % reason
        case Success(text=text):
            return MSG_RESULT_SUCCESS % text
        case ApiError(detail=d, status=status):
            where = f" (HTTP {status})" if status is not None else ""
            return MSG_RESULT_API_ERROR % (where, d.message, d.type, d.code)
        case TransportError(status=status, raw_body=raw, reason=reason):
            shown = "n/a" if status is None else status
            return MSG_RESULT_TRANSPORT % (shown, reason or raw[:RAW_BODY_PREVIEW] or MSG_NO_RESPONSE_BODY)
        case ParseError(raw_body=raw, cause=cause):
            return MSG_RESULT_PARSE % (cause, raw[:RAW_BODY_PREVIEW] or MSG_NO_RESPONSE_BODY)
        case _:
            raise TypeError(f"Unknown result: {result!r}")
