"""OpenAIVisionClient — OpenAI chat completions vision backend."""
import logging
from typing import Optional

import httpx
from openai import APIStatusError, AsyncOpenAI, OpenAIError

from pixelprompt.constants import (
    DEFAULT_TIMEOUT_SECONDS,
    MSG_RAW_RESPONSE,
    MSG_RESPONSE_FAILED,
    MSG_RESPONSE_OK,
    MSG_SENDING,
    OPENAI_BASE_URL,
)
from pixelprompt.vision.client import VisionClient
from pixelprompt.vision.request import ChatRequest, to_wire
from pixelprompt.vision.response import ClassifiedResult, classify_failure, classify_response

logger = logging.getLogger(__name__)


class OpenAIVisionClient(VisionClient):

    def __init__(
        self,
        api_key: str,
        base_url: str = OPENAI_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url
        self._timeout = timeout
        self._http_client = http_client

    async def send(self, request: ChatRequest) -> ClassifiedResult:
        client = AsyncOpenAI(
            api_key=self._api_key,
            base_url=self._base_url,
            timeout=self._timeout,
            max_retries=0,
            http_client=self._http_client,
        )
        logger.info(MSG_SENDING, self._base_url)
        try:
            return await self._exchange(client, request)
        finally:
            # An injected http_client belongs to the caller.
            if self._http_client is None:
                await client.close()

    async def _exchange(self, client: AsyncOpenAI, request: ChatRequest) -> ClassifiedResult:
        try:
            raw = await client.chat.completions.with_raw_response.create(**to_wire(request))
        except APIStatusError as exc:
            body = exc.response.text
            logger.error(MSG_RESPONSE_FAILED, exc.status_code, exc.message)
            logger.debug(MSG_RAW_RESPONSE, body)
            return classify_failure(exc.status_code, body)
        except OpenAIError as exc:
            # Connection errors and timeouts; no HTTP status exists.
            logger.error(MSG_RESPONSE_FAILED, None, exc)
            return classify_failure(None, "", reason=str(exc))

        body = raw.http_response.text
        logger.info(MSG_RESPONSE_OK, raw.http_response.status_code)
        logger.debug(MSG_RAW_RESPONSE, body)
        return classify_response(body)
