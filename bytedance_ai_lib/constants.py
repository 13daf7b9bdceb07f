"""
Constants and environment-driven defaults for the ByteDance AI library.

Values that a deployment may want to change are read from environment
variables sharing the ``BYTE_DANCE_`` prefix; everything else (endpoint paths,
vendor codes) is fixed by the remote API.
"""

import os


class _DontChangeMe:
    MAIN_ENV_PREFIX = "BYTE_DANCE_"


# =============================================================================
# ENDPOINTS
# =============================================================================
# Base URL of the Ark chat completion service
DEFAULT_CHAT_BASE_URL = os.environ.get(
    f"{_DontChangeMe.MAIN_ENV_PREFIX}CHAT_BASE_URL",
    "https://ark.cn-beijing.volces.com",
).strip()

# Base URL of the speech (TTS/ASR) service
DEFAULT_SPEECH_BASE_URL = os.environ.get(
    f"{_DontChangeMe.MAIN_ENV_PREFIX}SPEECH_BASE_URL",
    "https://openspeech.bytedance.com",
).strip()

CHAT_COMPLETIONS_PATH = "/api/v3/chat/completions"
SPEECH_PATH = "/api/v1/tts"
SPEECH_STREAM_PATH = "/api/v1/tts/ws_binary"
TRANSCRIPTIONS_PATH = "/v1/audio/transcriptions"
TRANSLATIONS_PATH = "/v1/audio/translations"

# Marker closing a server-sent-events chat stream
SSE_DONE_SENTINEL = "[DONE]"
SSE_DATA_PREFIX = "data:"

# File name attached to multipart audio uploads
DEFAULT_AUDIO_FILE_NAME = "audio.webm"

# =============================================================================
# TRANSPORT
# =============================================================================
# Connect/read timeout (seconds) of outgoing requests
DEFAULT_TIMEOUT = int(
    os.environ.get(f"{_DontChangeMe.MAIN_ENV_PREFIX}TIMEOUT", "60").strip()
)

# Number of connection retries done by the HTTP adapter itself
DEFAULT_CONNECT_RETRIES = 0

# =============================================================================
# RETRY
# =============================================================================
DEFAULT_RETRY_MAX_ATTEMPTS = 10
DEFAULT_RETRY_INITIAL_INTERVAL_SEC = 2.0
DEFAULT_RETRY_MULTIPLIER = 5.0
DEFAULT_RETRY_MAX_INTERVAL_SEC = 3 * 60.0

# =============================================================================
# SPEECH SERVICE CODES
# =============================================================================
SPEECH_SUCCESS_CODE = 3000
# Concurrency limit exceeded, backend busy, backend timeout
SPEECH_TRANSIENT_CODES = [3003, 3005, 3030]
# ``operation`` of a one-shot and of a streamed synthesis request
SPEECH_OPERATION_QUERY = "query"
SPEECH_OPERATION_SUBMIT = "submit"

# =============================================================================
# ENVIRONMENT VARIABLE NAMES
# =============================================================================
ENV_API_KEY = f"{_DontChangeMe.MAIN_ENV_PREFIX}API_KEY"
ENV_SPEECH_API_KEY = f"{_DontChangeMe.MAIN_ENV_PREFIX}SPEECH_API_KEY"
ENV_SPEECH_APP_ID = f"{_DontChangeMe.MAIN_ENV_PREFIX}SPEECH_APP_ID"
ENV_MODEL_END_POINT = "MODEL_END_POINT"
ENV_LOG_LEVEL = f"{_DontChangeMe.MAIN_ENV_PREFIX}LOG_LEVEL"

# Default logging level
DEFAULT_LOG_LEVEL = os.environ.get(ENV_LOG_LEVEL, "INFO").strip()
