"""ImageRecognizer — read back, encode, build and send in one invocation."""
import logging
from typing import Any, Optional

from pixelprompt.config import Config
from pixelprompt.constants import (
    MSG_CONTENT,
    MSG_CONTENT_EMPTY,
    MSG_ENCODED,
    MSG_FINISH_REASON,
    MSG_PIPELINE_DONE,
    MSG_PIPELINE_START,
)
from pixelprompt.encoding.encoder import encode, to_transport_text
from pixelprompt.surface.backend import SurfaceBackend
from pixelprompt.surface.reader import read_surface
from pixelprompt.vision.client import VisionClient
from pixelprompt.vision.request import build_request
from pixelprompt.vision.response import ClassifiedResult, Success, describe

logger = logging.getLogger(__name__)


class ImageRecognizer:
    """Runs one source image through the vision model and returns the classified outcome.

    Readback and encoding failures raise ConversionError subclasses before
    anything is sent; the network stage always returns a ClassifiedResult.
    """

    def __init__(self, config: Config, backend: SurfaceBackend, client: VisionClient) -> None:
        self._config = config
        self._backend = backend
        self._client = client

    async def recognize(self, source: Any, prompt: Optional[str] = None) -> ClassifiedResult:
        config = self._config
        logger.info(MSG_PIPELINE_START, config.vision_model, config.max_tokens)

        with read_surface(source, self._backend) as buffer:
            encoded = encode(buffer, config.image_format())
        transport = to_transport_text(encoded)
        logger.info(MSG_ENCODED, transport.mime_type, len(encoded.data), len(transport.text))

        request = build_request(
            config.prompt if prompt is None else prompt,
            transport.text,
            transport.mime_type,
            config.max_tokens,
            config.vision_model,
            detail=config.image_detail,
        )
        result = await self._client.send(request)

        match result:
            case Success(text="", finish_reason=reason):
                logger.warning(MSG_CONTENT_EMPTY)
                logger.debug(MSG_FINISH_REASON, reason)
            case Success(text=text, finish_reason=reason):
                logger.info(MSG_CONTENT, text)
                logger.debug(MSG_FINISH_REASON, reason)
            case _:
                logger.error(describe(result))

        logger.info(MSG_PIPELINE_DONE)
        return result
