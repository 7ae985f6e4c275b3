"""
Unified Model Type Definitions

These types provide a vendor-neutral representation for chat prompts,
results and streaming events. Application code works with these types only;
the converters translate them to and from the Yandex wire format.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, AsyncIterator, Awaitable, Callable, Dict, List, Optional, Union


class Role(str, Enum):
    """Unified role representation."""
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


class ContentBlockType(str, Enum):
    """Types of content blocks in messages."""
    TEXT = "text"
    FILE = "file"
    REASONING = "reasoning"
    TOOL_CALL = "tool-call"
    TOOL_RESULT = "tool-result"
    TOOL_APPROVAL_RESPONSE = "tool-approval-response"


class ToolType(str, Enum):
    """Tool declaration kinds."""
    FUNCTION = "function"
    PROVIDER = "provider"  # Provider-defined tools (web search etc.)


class ToolChoiceType(str, Enum):
    """Tool choice options."""
    AUTO = "auto"
    NONE = "none"
    REQUIRED = "required"
    TOOL = "tool"  # Specific tool by name


class UnifiedFinishReason(str, Enum):
    """Unified finish reason."""
    STOP = "stop"
    LENGTH = "length"
    TOOL_CALLS = "tool-calls"
    OTHER = "other"


class StreamPartType(str, Enum):
    """Types of streaming events."""
    STREAM_START = "stream-start"
    RAW = "raw"
    TEXT_DELTA = "text-delta"
    TEXT_END = "text-end"
    TOOL_INPUT_START = "tool-input-start"
    TOOL_INPUT_END = "tool-input-end"
    TOOL_CALL = "tool-call"
    FINISH = "finish"


@dataclass
class TextBlock:
    """Text content block."""
    type: ContentBlockType = field(default=ContentBlockType.TEXT, init=False)
    text: str = ""


@dataclass
class FileBlock:
    """File content block."""
    type: ContentBlockType = field(default=ContentBlockType.FILE, init=False)
    data: Union[str, bytes] = ""  # base64 string, URL or raw bytes
    media_type: str = "application/octet-stream"
    filename: Optional[str] = None


@dataclass
class ReasoningBlock:
    """Reasoning content block."""
    type: ContentBlockType = field(default=ContentBlockType.REASONING, init=False)
    text: str = ""


@dataclass
class ToolCallBlock:
    """Tool/function call content block."""
    type: ContentBlockType = field(default=ContentBlockType.TOOL_CALL, init=False)
    tool_call_id: str = ""
    tool_name: str = ""
    # Structured arguments, never a JSON string
    input: Any = None


@dataclass
class ToolResultBlock:
    """Tool/function result content block."""
    type: ContentBlockType = field(default=ContentBlockType.TOOL_RESULT, init=False)
    tool_call_id: str = ""
    tool_name: str = ""
    output: Any = None


@dataclass
class ToolApprovalResponseBlock:
    """Answer to a tool execution approval request."""
    type: ContentBlockType = field(
        default=ContentBlockType.TOOL_APPROVAL_RESPONSE, init=False
    )
    approval_id: str = ""
    approved: bool = False
    reason: Optional[str] = None


# Union type for all content blocks
ContentBlock = Union[
    TextBlock,
    FileBlock,
    ReasoningBlock,
    ToolCallBlock,
    ToolResultBlock,
    ToolApprovalResponseBlock,
]


@dataclass
class UnifiedMessage:
    """
    Unified message representation.

    ``content`` may be a plain string, which is shorthand for a single text
    block. Block order is presentation order.
    """
    role: Role
    content: Union[str, List[ContentBlock]] = field(default_factory=list)

    def get_blocks(self) -> List[ContentBlock]:
        """Return content as a list of blocks."""
        if isinstance(self.content, str):
            return [TextBlock(text=self.content)]
        return list(self.content)

    def get_text_content(self) -> str:
        """Extract text content from all text blocks."""
        return "".join(
            b.text for b in self.get_blocks() if isinstance(b, TextBlock)
        )


@dataclass
class ToolDeclaration:
    """Unified tool declaration."""
    name: str
    type: ToolType = ToolType.FUNCTION
    description: Optional[str] = None
    parameters: Dict[str, Any] = field(default_factory=dict)  # JSON Schema
    # Provider-defined tool arguments
    args: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ToolChoice:
    """Unified tool choice configuration."""
    type: ToolChoiceType = ToolChoiceType.AUTO
    tool_name: Optional[str] = None  # For TOOL type


@dataclass
class ResponseFormat:
    """Requested output format."""
    type: str = "text"  # text or json
    schema: Optional[Dict[str, Any]] = None
    name: Optional[str] = None
    description: Optional[str] = None


@dataclass
class ChatProviderOptions:
    """Yandex specific chat options."""
    reasoning_mode: Optional[str] = None  # a ReasoningMode value
    parallel_tool_calls: Optional[bool] = None


@dataclass
class CallOptions:
    """Options of a single generate/stream call."""
    prompt: List[UnifiedMessage] = field(default_factory=list)
    tools: Optional[List[ToolDeclaration]] = None
    tool_choice: Optional[ToolChoice] = None
    temperature: Optional[float] = None
    max_output_tokens: Optional[int] = None
    response_format: Optional[ResponseFormat] = None
    headers: Dict[str, Optional[str]] = field(default_factory=dict)
    provider_options: Optional[ChatProviderOptions] = None
    include_raw_chunks: bool = False


@dataclass
class EmbeddingOptions:
    """Options of an embedding call."""
    values: List[str] = field(default_factory=list)
    headers: Dict[str, Optional[str]] = field(default_factory=dict)


@dataclass
class ImageOptions:
    """Options of an image generation call."""
    prompt: Optional[str] = None
    aspect_ratio: Optional[str] = None  # "W:H"
    seed: Optional[int] = None
    headers: Dict[str, Optional[str]] = field(default_factory=dict)


@dataclass
class TranscriptionOptions:
    """
    Options of a transcription call.

    Recognition settings are sent as query parameters; ``None`` means the
    documented default.
    """
    audio: Union[bytes, str] = b""  # raw bytes or base64 string
    lang: Optional[str] = None  # auto, ru-RU, en-US, ...
    format: Optional[str] = None  # lpcm or oggopus
    sample_rate_hertz: Optional[int] = None  # 48000, 16000, 8000
    topic: Optional[str] = None  # general, general:rc, general:deprecated
    profanity_filter: Optional[bool] = None
    raw_results: Optional[bool] = None
    headers: Dict[str, Optional[str]] = field(default_factory=dict)


@dataclass
class CallWarning:
    """Non-fatal problem found while preparing a call."""
    type: str = "unsupported"
    feature: str = ""
    details: Optional[str] = None


@dataclass
class Usage:
    """Token usage snapshot."""
    input_tokens: int = 0
    output_tokens: int = 0
    total_tokens: Optional[int] = None
    reasoning_tokens: int = 0

    def __post_init__(self):
        if self.total_tokens is None:
            self.total_tokens = self.input_tokens + self.output_tokens


@dataclass
class FinishReason:
    """Unified finish reason together with the raw vendor status."""
    unified: UnifiedFinishReason = UnifiedFinishReason.STOP
    raw: Optional[str] = None


@dataclass
class ResponseMetadata:
    """Response information useful for diagnostics."""
    model_id: str = ""
    model_version: Optional[str] = None
    headers: Dict[str, str] = field(default_factory=dict)
    body: Any = None


@dataclass
class GenerateResult:
    """Result of a non-streaming chat call."""
    content: List[ContentBlock] = field(default_factory=list)
    finish_reason: FinishReason = field(default_factory=FinishReason)
    usage: Usage = field(default_factory=Usage)
    warnings: List[CallWarning] = field(default_factory=list)
    request_body: Optional[Dict[str, Any]] = None
    response: ResponseMetadata = field(default_factory=ResponseMetadata)

    def get_text_content(self) -> str:
        """Extract text content from all text blocks."""
        return "".join(b.text for b in self.content if isinstance(b, TextBlock))

    def get_tool_calls(self) -> List[ToolCallBlock]:
        """Extract all tool call blocks."""
        return [b for b in self.content if isinstance(b, ToolCallBlock)]


@dataclass
class StreamPart:
    """
    Unified stream event.

    Only the fields relevant to ``type`` are set.
    """
    type: StreamPartType

    # Block addressing (text-delta, text-end, tool-input-*)
    id: Optional[str] = None

    # For STREAM_START
    warnings: Optional[List[CallWarning]] = None

    # For TEXT_DELTA
    delta: Optional[str] = None

    # For TOOL_INPUT_START and TOOL_CALL
    tool_name: Optional[str] = None
    tool_call_id: Optional[str] = None
    input: Any = None

    # For FINISH
    finish_reason: Optional[FinishReason] = None
    usage: Optional[Usage] = None

    # For RAW
    raw_value: Optional[str] = None


@dataclass
class StreamResult:
    """
    Result of a streaming chat call.

    The response is released when ``stream`` is exhausted. A stream abandoned
    early should be closed with ``aclose`` or by using the result as an async
    context manager.
    """
    stream: AsyncIterator[StreamPart]
    request_body: Optional[Dict[str, Any]] = None
    response: ResponseMetadata = field(default_factory=ResponseMetadata)
    on_close: Optional[Callable[[], Awaitable[None]]] = field(default=None, repr=False)

    async def aclose(self) -> None:
        aclose = getattr(self.stream, "aclose", None)
        if aclose is not None:
            await aclose()
        if self.on_close is not None:
            await self.on_close()

    async def __aenter__(self) -> "StreamResult":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()


@dataclass
class EmbeddingResult:
    """Result of an embedding call."""
    embeddings: List[List[float]] = field(default_factory=list)
    usage_tokens: int = 0
    warnings: List[CallWarning] = field(default_factory=list)
    response: ResponseMetadata = field(default_factory=ResponseMetadata)


@dataclass
class ImageResult:
    """Result of an image generation call."""
    images: List[str] = field(default_factory=list)  # base64 encoded
    warnings: List[CallWarning] = field(default_factory=list)
    response: ResponseMetadata = field(default_factory=ResponseMetadata)


@dataclass
class TranscriptionResult:
    """Result of a transcription call."""
    text: str = ""
    warnings: List[CallWarning] = field(default_factory=list)
    request_body: Optional[str] = None  # Encoded query string
    response: ResponseMetadata = field(default_factory=ResponseMetadata)
