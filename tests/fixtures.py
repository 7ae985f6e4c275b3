"""
Test Fixtures

Sample Yandex Cloud payloads for converter, stream and provider tests.
"""

FOLDER_ID = "b1gtestfolder"
API_KEY = "AQVN-test-key"
CHAT_MODEL = "yandexgpt/latest"
CHAT_MODEL_URI = f"gpt://{FOLDER_ID}/{CHAT_MODEL}"

COMPLETION_URL = "https://llm.api.cloud.yandex.net/foundationModels/v1/completion"
EMBEDDING_URL = "https://llm.api.cloud.yandex.net/foundationModels/v1/textEmbedding"
IMAGE_URL = "https://llm.api.cloud.yandex.net/foundationModels/v1/imageGenerationAsync"
OPERATION_URL = "https://operation.api.cloud.yandex.net/operations"
STT_URL = "https://stt.api.cloud.yandex.net/speech/v1/stt:recognize"

# =============================================================================
# Completion Responses
# =============================================================================

COMPLETION_TEXT_RESPONSE = {
    "result": {
        "alternatives": [
            {
                "message": {"role": "assistant", "text": "Hello! How can I help?"},
                "status": "ALTERNATIVE_STATUS_FINAL",
            }
        ],
        "usage": {
            "inputTextTokens": "12",
            "completionTokens": "7",
            "totalTokens": "19",
            "completionTokensDetails": {"reasoningTokens": "0"},
        },
        "modelVersion": "23.10.2024",
    }
}

COMPLETION_TOOL_CALL_RESPONSE = {
    "result": {
        "alternatives": [
            {
                "message": {
                    "role": "assistant",
                    "toolCallList": {
                        "toolCalls": [
                            {
                                "functionCall": {
                                    "name": "get_weather",
                                    "arguments": {"city": "Moscow"},
                                }
                            },
                            {
                                "functionCall": {
                                    "name": "get_time",
                                    "arguments": {"timezone": "Europe/Moscow"},
                                }
                            },
                        ]
                    },
                },
                "status": "ALTERNATIVE_STATUS_TOOL_CALLS",
            }
        ],
        "usage": {
            "inputTextTokens": "40",
            "completionTokens": "22",
            "totalTokens": "62",
        },
        "modelVersion": "23.10.2024",
    }
}

COMPLETION_TRUNCATED_RESPONSE = {
    "result": {
        "alternatives": [
            {
                "message": {"role": "assistant", "text": "Once upon a"},
                "status": "ALTERNATIVE_STATUS_TRUNCATED_FINAL",
            }
        ],
        "usage": {"inputTextTokens": "5", "completionTokens": "3", "totalTokens": "8"},
        "modelVersion": "23.10.2024",
    }
}

COMPLETION_TWO_PAYLOADS_RESPONSE = {
    "result": {
        "alternatives": [
            {
                "message": {
                    "role": "assistant",
                    "text": "Hi",
                    "toolCallList": {
                        "toolCalls": [{"functionCall": {"name": "f", "arguments": {}}}]
                    },
                },
                "status": "ALTERNATIVE_STATUS_FINAL",
            }
        ]
    }
}

# =============================================================================
# Stream Chunks (one full snapshot per chunk)
# =============================================================================

STREAM_TEXT_CHUNKS = [
    {
        "result": {
            "alternatives": [
                {
                    "message": {"role": "assistant", "text": "Hel"},
                    "status": "ALTERNATIVE_STATUS_PARTIAL",
                }
            ],
            "usage": {"inputTextTokens": "10", "completionTokens": "5", "totalTokens": "15"},
            "modelVersion": "23.10.2024",
        }
    },
    {
        "result": {
            "alternatives": [
                {
                    "message": {"role": "assistant", "text": "Hello"},
                    "status": "ALTERNATIVE_STATUS_FINAL",
                }
            ],
            "usage": {"inputTextTokens": "10", "completionTokens": "12", "totalTokens": "22"},
            "modelVersion": "23.10.2024",
        }
    },
]

STREAM_TOOL_CALL_CHUNKS = [
    {
        "result": {
            "alternatives": [
                {
                    "message": {"role": "assistant"},
                    "status": "ALTERNATIVE_STATUS_PARTIAL",
                }
            ],
            "usage": {"inputTextTokens": "40", "completionTokens": "0", "totalTokens": "40"},
            "modelVersion": "23.10.2024",
        }
    },
    COMPLETION_TOOL_CALL_RESPONSE,
]

# =============================================================================
# Embedding / Image / Transcription
# =============================================================================

EMBEDDING_RESPONSE = {
    "embedding": [0.0123, -0.0456, 0.0789],
    "numTokens": "4",
    "modelVersion": "06.12.2023",
}

IMAGE_OPERATION_STARTED = {
    "id": "fbveu1sntj7tbvvqb6rc",
    "description": "",
    "createdAt": None,
    "createdBy": "",
    "modifiedAt": None,
    "done": False,
    "metadata": None,
}

IMAGE_OPERATION_RUNNING = dict(IMAGE_OPERATION_STARTED)

IMAGE_OPERATION_DONE = {
    **IMAGE_OPERATION_STARTED,
    "done": True,
    "response": {
        "@type": "type.googleapis.com/yandex.cloud.ai.foundation_models.v1.image_generation.ImageGenerationResponse",
        "image": "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg==",
        "modelVersion": "",
    },
}

IMAGE_OPERATION_FAILED = {
    **IMAGE_OPERATION_STARTED,
    "done": True,
    "error": {
        "code": 3,
        "message": "it is not possible to generate an image from this request because it may violate the terms of use",
        "details": [],
    },
}

IMAGE_OPERATION_DONE_WITHOUT_IMAGE = {
    **IMAGE_OPERATION_STARTED,
    "done": True,
    "response": {"modelVersion": ""},
}

STT_RESPONSE = {"result": "привет мир"}
STT_EMPTY_RESPONSE = {"result": ""}
