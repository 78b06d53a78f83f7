"""All magic values live here — no inline literals anywhere else."""

# OpenAI chat completions endpoint
OPENAI_BASE_URL = "https://api.openai.com/v1"
OPENAI_VISION_MODEL = "gpt-4o"
API_KEY_PLACEHOLDER = "YOUR_SECURE_API_KEY"
DEFAULT_TIMEOUT_SECONDS: float = 60.0

# Request shape
ROLE_USER = "user"
PART_TEXT = "text"
PART_IMAGE_URL = "image_url"
DATA_URI_TEMPLATE = "data:%s;base64,%s"
DEFAULT_MAX_TOKENS = 300
DEFAULT_PROMPT = "Describe this image in detail."
# Substituted when the configured prompt is blank.
FALLBACK_PROMPT = "What's in this image?"

# Image encoding
MIME_JPEG = "image/jpeg"
MIME_PNG = "image/png"
PIL_FORMAT_JPEG = "JPEG"
PIL_FORMAT_PNG = "PNG"
PIXEL_MODE = "RGBA"
JPEG_PIXEL_MODE = "RGB"
BYTES_PER_PIXEL = 4
QUALITY_MIN = 1
QUALITY_MAX = 100
DEFAULT_JPEG_QUALITY = 85
MAX_POOLED_SURFACES = 4
IMAGE_FORMAT_JPEG = "jpeg"
IMAGE_FORMAT_PNG = "png"

# Response classification
CAUSE_UNRECOGNIZED_SHAPE = "unrecognized shape"
CAUSE_NOT_AN_OBJECT = "response body is not a JSON object"
RAW_BODY_PREVIEW = 300

# Log messages
MSG_PIPELINE_START = "Starting image analysis (model=%s, max_tokens=%d)"
MSG_PIPELINE_DONE = "Image analysis finished"
MSG_READBACK_OK = "Read back %dx%d surface"
MSG_ENCODED = "Encoded image as %s (%d bytes, %d base64 chars)"
MSG_PROMPT_EMPTY = "Prompt is empty — using default prompt"
MSG_SENDING = "Sending request to %s"
MSG_RESPONSE_OK = "Response received (HTTP %d)"
MSG_RESPONSE_FAILED = "Request failed (HTTP %s): %s"
MSG_RAW_RESPONSE = "Raw response: %s"
MSG_CONTENT = "Extracted content:\n%s"
MSG_CONTENT_EMPTY = "Response content is empty"
MSG_FINISH_REASON = "Finish reason: %s"
MSG_SECONDARY_PARSE_FAILED = "Could not parse error body: %s"

# User-facing result descriptions
MSG_RESULT_SUCCESS = "%s"
MSG_RESULT_EMPTY = "Model returned an empty answer (finish reason: %s)"
MSG_RESULT_API_ERROR = "API error%s: %s (type: %s, code: %s)"
MSG_RESULT_TRANSPORT = "Transport error (HTTP %s): %s"
MSG_RESULT_PARSE = "Could not parse response: %s — raw body: %s"
MSG_NO_RESPONSE_BODY = "no response body"

# Entry point
MSG_STARTING = "Starting pixelprompt…"
MSG_USAGE = "Usage: pixelprompt <image-path>"
MSG_CONVERSION_FAILED = "Image conversion failed: %s"
