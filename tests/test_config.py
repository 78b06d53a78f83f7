"""TDD: Config tests written FIRST"""
import pytest

from pixelprompt.config import Config
from pixelprompt.encoding.encoder import Lossless, Lossy

ENV_VARS = (
    "OPENAI_API_KEY",
    "OPENAI_BASE_URL",
    "VISION_MODEL",
    "VISION_PROMPT",
    "VISION_MAX_TOKENS",
    "VISION_IMAGE_FORMAT",
    "VISION_JPEG_QUALITY",
    "VISION_IMAGE_DETAIL",
    "VISION_TIMEOUT",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.setattr("pixelprompt.config.load_dotenv", lambda **_: None)
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_config_from_env_success(monkeypatch):
    """Happy-path: only the key is required."""
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")

    config = Config.from_env()

    assert config.openai_api_key == "sk-test"


def test_config_defaults(monkeypatch):
    """Optional fields have sensible defaults."""
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")

    config = Config.from_env()

    assert config.openai_base_url == "https://api.openai.com/v1"
    assert config.vision_model == "gpt-4o"
    assert config.prompt == "Describe this image in detail."
    assert config.max_tokens == 300
    assert config.image_format() == Lossy(85)
    assert config.image_detail is None
    assert config.timeout == 60.0
    assert config.log_level == "INFO"


def test_config_fields_from_env(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("OPENAI_BASE_URL", "https://proxy.local/v1/")
    monkeypatch.setenv("VISION_MODEL", "gpt-4o-mini")
    monkeypatch.setenv("VISION_PROMPT", "Count the apples.")
    monkeypatch.setenv("VISION_MAX_TOKENS", "50")
    monkeypatch.setenv("VISION_IMAGE_FORMAT", "PNG")
    monkeypatch.setenv("VISION_IMAGE_DETAIL", "low")
    monkeypatch.setenv("VISION_TIMEOUT", "12.5")

    config = Config.from_env()

    assert config.openai_base_url == "https://proxy.local/v1"
    assert config.vision_model == "gpt-4o-mini"
    assert config.prompt == "Count the apples."
    assert config.max_tokens == 50
    assert config.image_format() == Lossless()
    assert config.image_detail == "low"
    assert config.timeout == 12.5


def test_config_quality_is_clamped_not_rejected(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("VISION_JPEG_QUALITY", "400")

    assert Config.from_env().image_format() == Lossy(100)


def test_config_missing_key_fails():
    """Missing OPENAI_API_KEY must raise."""
    with pytest.raises(ValueError, match="OPENAI_API_KEY"):
        Config.from_env()


def test_config_placeholder_key_fails(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "YOUR_SECURE_API_KEY")

    with pytest.raises(ValueError, match="placeholder"):
        Config.from_env()


@pytest.mark.parametrize("value", ["0", "-3", "many"])
def test_config_bad_max_tokens_fails(monkeypatch, value):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("VISION_MAX_TOKENS", value)

    with pytest.raises(ValueError, match="VISION_MAX_TOKENS"):
        Config.from_env()


def test_config_unknown_format_fails(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("VISION_IMAGE_FORMAT", "webp")

    with pytest.raises(ValueError, match="VISION_IMAGE_FORMAT"):
        Config.from_env()


def test_config_immutable(monkeypatch):
    """Frozen dataclass: attribute assignment must fail."""
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    config = Config.from_env()

    with pytest.raises(Exception):
        config.openai_api_key = "other"
