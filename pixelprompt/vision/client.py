"""VisionClient — abstract base for chat-completion vision backends."""
from abc import ABC, abstractmethod

from pixelprompt.vision.request import ChatRequest
from pixelprompt.vision.response import ClassifiedResult


class VisionClient(ABC):
    @abstractmethod
    async def send(self, request: ChatRequest) -> ClassifiedResult:
        """POST the request once and classify the outcome. Never raises except on cancellation."""
        ...
