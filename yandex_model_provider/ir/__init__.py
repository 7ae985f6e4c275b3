"""
Unified Model Module

Provides the vendor-neutral representation of prompts, results and stream
events that the Yandex converters translate to and from.
"""

from .types import (
    # Core types
    UnifiedMessage,
    ContentBlock,
    ToolDeclaration,
    ToolChoice,
    ResponseFormat,
    ChatProviderOptions,
    CallOptions,
    EmbeddingOptions,
    ImageOptions,
    TranscriptionOptions,
    CallWarning,
    Usage,
    FinishReason,
    ResponseMetadata,
    GenerateResult,
    StreamPart,
    StreamResult,
    EmbeddingResult,
    ImageResult,
    TranscriptionResult,
    # Content block types
    TextBlock,
    FileBlock,
    ReasoningBlock,
    ToolCallBlock,
    ToolResultBlock,
    ToolApprovalResponseBlock,
    # Enums
    Role,
    ContentBlockType,
    ToolType,
    ToolChoiceType,
    UnifiedFinishReason,
    StreamPartType,
)

__all__ = [
    # Core types
    "UnifiedMessage",
    "ContentBlock",
    "ToolDeclaration",
    "ToolChoice",
    "ResponseFormat",
    "ChatProviderOptions",
    "CallOptions",
    "EmbeddingOptions",
    "ImageOptions",
    "TranscriptionOptions",
    "CallWarning",
    "Usage",
    "FinishReason",
    "ResponseMetadata",
    "GenerateResult",
    "StreamPart",
    "StreamResult",
    "EmbeddingResult",
    "ImageResult",
    "TranscriptionResult",
    # Content block types
    "TextBlock",
    "FileBlock",
    "ReasoningBlock",
    "ToolCallBlock",
    "ToolResultBlock",
    "ToolApprovalResponseBlock",
    # Enums
    "Role",
    "ContentBlockType",
    "ToolType",
    "ToolChoiceType",
    "UnifiedFinishReason",
    "StreamPartType",
]
