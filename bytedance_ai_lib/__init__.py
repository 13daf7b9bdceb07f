from bytedance_ai_lib.api.audio import ByteDanceAudioApi
from bytedance_ai_lib.api.chat import ByteDanceChatApi
from bytedance_ai_lib.config import ByteDanceSettings
from bytedance_ai_lib.core.messages import Media, Message, MessageType
from bytedance_ai_lib.core.prompt import (
    AudioTranscriptionPrompt,
    Prompt,
    SpeechPrompt,
)
from bytedance_ai_lib.core.retry import RetryListener, RetryTemplate
from bytedance_ai_lib.data_models.options import (
    ByteDanceAudioSpeechOptions,
    ByteDanceAudioTranscriptionOptions,
    ByteDanceChatOptions,
)
from bytedance_ai_lib.exceptions import (
    ApiError,
    AuthenticationError,
    ByteDanceAiError,
    InvalidArgumentError,
    NonTransientApiError,
    RateLimitError,
    TransientApiError,
    UnsupportedOperationError,
)
from bytedance_ai_lib.services.chat_model import ByteDanceChatModel
from bytedance_ai_lib.services.speech_model import ByteDanceAudioSpeechModel
from bytedance_ai_lib.services.transcription_model import (
    ByteDanceAudioTranscriptionModel,
)

__all__ = [
    "ByteDanceChatApi",
    "ByteDanceAudioApi",
    "ByteDanceSettings",
    "ByteDanceChatModel",
    "ByteDanceAudioSpeechModel",
    "ByteDanceAudioTranscriptionModel",
    "ByteDanceChatOptions",
    "ByteDanceAudioSpeechOptions",
    "ByteDanceAudioTranscriptionOptions",
    "Media",
    "Message",
    "MessageType",
    "Prompt",
    "SpeechPrompt",
    "AudioTranscriptionPrompt",
    "RetryTemplate",
    "RetryListener",
    "ByteDanceAiError",
    "ApiError",
    "TransientApiError",
    "NonTransientApiError",
    "RateLimitError",
    "AuthenticationError",
    "InvalidArgumentError",
    "UnsupportedOperationError",
]
