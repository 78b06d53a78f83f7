"""Entry point — wires Config → RasterBackend → OpenAIVisionClient → ImageRecognizer."""
import asyncio
import logging
import sys
from typing import Optional

from PIL import Image
from rich.logging import RichHandler

from pixelprompt.config import Config
from pixelprompt.constants import MSG_CONVERSION_FAILED, MSG_STARTING, MSG_USAGE
from pixelprompt.errors import ConversionError
from pixelprompt.recognizer import ImageRecognizer
from pixelprompt.surface.raster import RasterBackend
from pixelprompt.vision.openai import OpenAIVisionClient
from pixelprompt.vision.response import Success, describe

logger = logging.getLogger(__name__)


def _setup_logging(level: str) -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    list(map(root.removeHandler, root.handlers[:]))
    root.addHandler(RichHandler(rich_tracebacks=True))


def main(argv: Optional[list[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    match args:
        case [path, *_]:
            pass
        case _:
            print(MSG_USAGE, file=sys.stderr)
            return 2

    config = Config.from_env()
    _setup_logging(config.log_level)
    logger.info(MSG_STARTING)

    client = OpenAIVisionClient(
        config.openai_api_key,
        base_url=config.openai_base_url,
        timeout=config.timeout,
    )
    recognizer = ImageRecognizer(config, RasterBackend(), client)

    try:
        with Image.open(path) as image:
            image.load()
            result = asyncio.run(recognizer.recognize(image))
    except (ConversionError, OSError, ValueError) as exc:
        logger.error(MSG_CONVERSION_FAILED, exc)
        return 1

    print(describe(result))
    match result:
        case Success():
            return 0
        case _:
            return 1


if __name__ == "__main__":
    sys.exit(main())
