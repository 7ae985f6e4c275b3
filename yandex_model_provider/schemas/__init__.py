"""
Yandex Cloud Schemas Module

Request payloads are described with TypedDicts (they are built by the
encoders as plain dicts). Inbound payloads are validated with pydantic models
so that malformed responses and stream chunks are rejected early.
"""

from enum import Enum
from typing import Any, Dict, List, Literal, Optional, TypedDict, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class FinishStatus(str, Enum):
    """Alternative status reported by the completion API."""
    UNSPECIFIED = "ALTERNATIVE_STATUS_UNSPECIFIED"
    PARTIAL = "ALTERNATIVE_STATUS_PARTIAL"
    TRUNCATED_FINAL = "ALTERNATIVE_STATUS_TRUNCATED_FINAL"
    FINAL = "ALTERNATIVE_STATUS_FINAL"
    CONTENT_FILTER = "ALTERNATIVE_STATUS_CONTENT_FILTER"
    TOOL_CALLS = "ALTERNATIVE_STATUS_TOOL_CALLS"


class ToolChoiceMode(str, Enum):
    """Overall tool-calling mode."""
    UNSPECIFIED = "TOOL_CHOICE_MODE_UNSPECIFIED"  # Server default, which is AUTO
    NONE = "NONE"
    AUTO = "AUTO"
    REQUIRED = "REQUIRED"


class ReasoningMode(str, Enum):
    """Reasoning configuration of the completion."""
    UNSPECIFIED = "REASONING_MODE_UNSPECIFIED"
    DISABLED = "DISABLED"
    ENABLED_HIDDEN = "ENABLED_HIDDEN"


YandexMessageRole = Literal["assistant", "user", "system"]


# =============================================================================
# Completion Request Types
# =============================================================================

class YandexFunctionCall(TypedDict):
    """Function call issued by the model."""
    name: str
    arguments: Any  # Structured value matching the function parameters


class YandexToolCall(TypedDict):
    """Tool call wrapper."""
    functionCall: YandexFunctionCall


class YandexToolCallList(TypedDict):
    toolCalls: List[YandexToolCall]


class YandexFunctionResult(TypedDict):
    """Result of an executed function."""
    name: str
    content: str  # JSON text


class YandexToolResult(TypedDict):
    functionResult: YandexFunctionResult


class YandexToolResultList(TypedDict):
    toolResults: List[YandexToolResult]


class YandexTextMessage(TypedDict):
    """Message carrying plain text."""
    role: YandexMessageRole
    text: str


class YandexToolCallMessage(TypedDict):
    """Message carrying tool calls."""
    role: YandexMessageRole
    toolCallList: YandexToolCallList


class YandexToolResultMessage(TypedDict):
    """Message carrying tool results."""
    role: YandexMessageRole
    toolResultList: YandexToolResultList


# A vendor message carries exactly one kind of payload
YandexMessage = Union[
    YandexTextMessage,
    YandexToolCallMessage,
    YandexToolResultMessage,
]


class YandexFunctionDef(TypedDict, total=False):
    """Function definition within a tool."""
    name: str
    description: str
    parameters: Dict[str, Any]
    strict: bool


class YandexTool(TypedDict):
    function: YandexFunctionDef


class YandexToolChoiceModeSpec(TypedDict):
    mode: str  # ToolChoiceMode value


class YandexToolChoiceFunctionSpec(TypedDict):
    functionName: str


YandexToolChoice = Union[YandexToolChoiceModeSpec, YandexToolChoiceFunctionSpec]


class YandexCompletionOptions(TypedDict, total=False):
    """Configuration options for completion generation."""
    stream: bool
    temperature: float
    maxTokens: int
    reasoningOptions: str  # ReasoningMode value


class YandexJsonSchema(TypedDict):
    schema: Dict[str, Any]


class YandexCompletionRequest(TypedDict, total=False):
    """Completion request body."""
    modelUri: str  # gpt://{folder}/{model}
    completionOptions: YandexCompletionOptions
    tools: List[YandexTool]
    messages: List[YandexMessage]
    # Only one of jsonObject, jsonSchema
    jsonObject: bool
    jsonSchema: YandexJsonSchema
    parallelToolCalls: bool
    toolChoice: YandexToolChoice


class YandexImageMessage(TypedDict):
    text: str
    weight: float  # Negative values are negative prompts


class YandexImageGenerationRequest(TypedDict):
    """Image generation request body."""
    modelUri: str  # art://{folder}/{model}
    messages: List[YandexImageMessage]
    generationOptions: Dict[str, Any]


class YandexEmbeddingRequest(TypedDict, total=False):
    modelUri: str  # emb://{folder}/{model}
    text: str
    dim: str


# =============================================================================
# Inbound Models
# =============================================================================

class YandexModel(BaseModel):
    """Base for inbound payloads: camelCase on the wire, snake_case in code."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        protected_namespaces=(),
    )


class FunctionCallModel(YandexModel):
    name: str
    arguments: Any = None


class ToolCallModel(YandexModel):
    function_call: FunctionCallModel


class ToolCallListModel(YandexModel):
    tool_calls: List[ToolCallModel] = Field(default_factory=list)


class FunctionResultModel(YandexModel):
    name: str
    content: str = ""


class ToolResultModel(YandexModel):
    function_result: FunctionResultModel


class ToolResultListModel(YandexModel):
    tool_results: List[ToolResultModel] = Field(default_factory=list)


class MessageModel(YandexModel):
    """
    Inbound vendor message.

    At most one payload may be present. An in-progress stream snapshot can
    legitimately carry none.
    """

    role: str = "assistant"
    text: Optional[str] = None
    tool_call_list: Optional[ToolCallListModel] = None
    tool_result_list: Optional[ToolResultListModel] = None

    @model_validator(mode="after")
    def check_single_payload(self) -> "MessageModel":
        present = [
            name
            for name, value in (
                ("text", self.text),
                ("toolCallList", self.tool_call_list),
                ("toolResultList", self.tool_result_list),
            )
            if value is not None
        ]
        if len(present) > 1:
            raise ValueError(
                f"message carries more than one payload: {', '.join(present)}"
            )
        return self


class AlternativeModel(YandexModel):
    message: MessageModel = Field(default_factory=MessageModel)
    status: FinishStatus = FinishStatus.UNSPECIFIED


class CompletionTokensDetailsModel(YandexModel):
    reasoning_tokens: int = 0


class UsageModel(YandexModel):
    """Token usage; the API encodes the numbers as decimal strings."""

    input_text_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0
    completion_tokens_details: Optional[CompletionTokensDetailsModel] = None


class CompletionResultModel(YandexModel):
    alternatives: List[AlternativeModel] = Field(default_factory=list)
    usage: Optional[UsageModel] = None
    model_version: Optional[str] = None


class CompletionResponseModel(YandexModel):
    """Completion response body, also the shape of every stream chunk."""

    result: CompletionResultModel


class EmbeddingResponseModel(YandexModel):
    embedding: List[float]
    num_tokens: int = 0
    model_version: Optional[str] = None


class OperationErrorModel(YandexModel):
    code: int = 0
    message: str = ""
    details: List[Dict[str, Any]] = Field(default_factory=list)


class ImageGenerationResponseModel(YandexModel):
    image: Optional[str] = None  # base64 encoded
    model_version: Optional[str] = None


class OperationModel(YandexModel):
    """Long-running operation."""

    id: str
    description: Optional[str] = None
    created_at: Optional[str] = None
    created_by: Optional[str] = None
    modified_at: Optional[str] = None
    done: bool = False
    metadata: Optional[Dict[str, Any]] = None
    response: Optional[ImageGenerationResponseModel] = None
    error: Optional[OperationErrorModel] = None


class TranscriptionResponseModel(YandexModel):
    result: str = ""


__all__ = [
    # Enums
    "FinishStatus",
    "ToolChoiceMode",
    "ReasoningMode",
    # Request types
    "YandexMessageRole",
    "YandexMessage",
    "YandexTextMessage",
    "YandexToolCallMessage",
    "YandexToolResultMessage",
    "YandexToolCall",
    "YandexToolResult",
    "YandexTool",
    "YandexToolChoice",
    "YandexCompletionOptions",
    "YandexCompletionRequest",
    "YandexImageGenerationRequest",
    "YandexEmbeddingRequest",
    # Inbound models
    "MessageModel",
    "AlternativeModel",
    "UsageModel",
    "CompletionResultModel",
    "CompletionResponseModel",
    "EmbeddingResponseModel",
    "OperationModel",
    "OperationErrorModel",
    "TranscriptionResponseModel",
]
