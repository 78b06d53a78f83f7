from dataclasses import dataclass
from typing import Optional
import os
from dotenv import load_dotenv

from pixelprompt.constants import (
    API_KEY_PLACEHOLDER,
    DEFAULT_JPEG_QUALITY,
    DEFAULT_MAX_TOKENS,
    DEFAULT_PROMPT,
    DEFAULT_TIMEOUT_SECONDS,
    IMAGE_FORMAT_JPEG,
    IMAGE_FORMAT_PNG,
    OPENAI_BASE_URL,
    OPENAI_VISION_MODEL,
)
from pixelprompt.encoding.encoder import ImageFormat, Lossless, Lossy


@dataclass(frozen=True)
class Config:
    openai_api_key: str
    openai_base_url: str
    vision_model: str
    prompt: str
    max_tokens: int
    image_format_name: str
    jpeg_quality: int
    image_detail: Optional[str]
    timeout: float
    log_level: str

    @classmethod
    def from_env(cls) -> "Config":
        load_dotenv()

        api_key = os.getenv("OPENAI_API_KEY")
        base_url = os.getenv("OPENAI_BASE_URL") or OPENAI_BASE_URL
        model = os.getenv("VISION_MODEL") or OPENAI_VISION_MODEL
        prompt = os.getenv("VISION_PROMPT", DEFAULT_PROMPT)
        max_tokens = os.getenv("VISION_MAX_TOKENS", str(DEFAULT_MAX_TOKENS))
        image_format = os.getenv("VISION_IMAGE_FORMAT", IMAGE_FORMAT_JPEG)
        jpeg_quality = os.getenv("VISION_JPEG_QUALITY", str(DEFAULT_JPEG_QUALITY))
        image_detail = os.getenv("VISION_IMAGE_DETAIL") or None
        timeout = os.getenv("VISION_TIMEOUT", str(DEFAULT_TIMEOUT_SECONDS))
        log_level = os.getenv("LOG_LEVEL", "INFO")

        return cls._validate(
            openai_api_key=api_key,
            openai_base_url=base_url.rstrip("/"),
            vision_model=model,
            prompt=prompt,
            max_tokens=_to_number(int, "VISION_MAX_TOKENS", max_tokens),
            image_format_name=image_format.strip().lower(),
            jpeg_quality=_to_number(int, "VISION_JPEG_QUALITY", jpeg_quality),
            image_detail=image_detail,
            timeout=_to_number(float, "VISION_TIMEOUT", timeout),
            log_level=log_level,
        )

    @staticmethod
    def _validate(
        openai_api_key: Optional[str],
        openai_base_url: str,
        vision_model: str,
        prompt: str,
        max_tokens: int,
        image_format_name: str,
        jpeg_quality: int,
        image_detail: Optional[str],
        timeout: float,
        log_level: str,
    ) -> "Config":
        match openai_api_key:
            case None | "":
                raise ValueError("OPENAI_API_KEY must be set in .env")
            case str() as key if key.strip() == API_KEY_PLACEHOLDER:
                raise ValueError("OPENAI_API_KEY still holds the placeholder value")
            case _:
                pass

        match max_tokens:
            case n if n > 0:
                pass
            case _:
                raise ValueError("VISION_MAX_TOKENS must be a positive integer")

        match image_format_name:
            case "jpeg" | "jpg" | "png":
                pass
            case other:
                raise ValueError(f"VISION_IMAGE_FORMAT must be jpeg or png, got {other!r}")

        match timeout:
            case t if t > 0:
                pass
            case _:
                raise ValueError("VISION_TIMEOUT must be positive")

        return Config(
            openai_api_key=openai_api_key,
            openai_base_url=openai_base_url,
            vision_model=vision_model,
            prompt=prompt,
            max_tokens=max_tokens,
            image_format_name=IMAGE_FORMAT_PNG if image_format_name == IMAGE_FORMAT_PNG else IMAGE_FORMAT_JPEG,
            jpeg_quality=jpeg_quality,
            image_detail=image_detail,
            timeout=timeout,
            log_level=log_level,
        )

    def image_format(self) -> ImageFormat:
        match self.image_format_name:
            case "png":
                return Lossless()
            case _:
                return Lossy(self.jpeg_quality)


def _to_number(kind: type, name: str, raw: str):
    try:
        return kind(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc
