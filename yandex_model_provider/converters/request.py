"""
Yandex Completion Request Encoder

Converts unified prompts, tool declarations and call options into the body
of a Yandex Foundation Models completion request.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Tuple

from ..ir import (
    CallOptions,
    CallWarning,
    ContentBlock,
    FileBlock,
    ReasoningBlock,
    ResponseFormat,
    Role,
    TextBlock,
    ToolApprovalResponseBlock,
    ToolCallBlock,
    ToolChoice,
    ToolChoiceType,
    ToolDeclaration,
    ToolResultBlock,
    ToolType,
    UnifiedMessage,
)
from ..schemas import (
    ReasoningMode,
    ToolChoiceMode,
    YandexCompletionRequest,
    YandexMessage,
    YandexMessageRole,
    YandexTool,
    YandexToolChoice,
)
from .exceptions import UnsupportedContentError, ValidationError

logger = logging.getLogger(__name__)


class YandexChatEncoder:
    """Encodes unified chat calls to the Yandex completion format."""

    def encode_request(
        self,
        options: CallOptions,
        *,
        model_uri: str,
        stream: bool = False,
    ) -> Tuple[YandexCompletionRequest, List[CallWarning]]:
        """
        Build a completion request body.

        Args:
            options: Call options holding the prompt and generation settings
            model_uri: Model URI, gpt://{folder}/{model}
            stream: Whether partial results should be streamed

        Returns:
            (request body, warnings collected during conversion)

        Raises:
            UnsupportedContentError: Prompt contains content the API cannot express
        """
        messages, message_warnings = self.encode_messages(options.prompt)
        tools, tool_warnings = self.encode_tools(options.tools)

        completion_options: Dict[str, Any] = {"stream": stream}
        if options.temperature is not None:
            completion_options["temperature"] = options.temperature
        if options.max_output_tokens is not None:
            completion_options["maxTokens"] = options.max_output_tokens

        provider_options = options.provider_options
        if provider_options and provider_options.reasoning_mode is not None:
            completion_options["reasoningOptions"] = self._encode_reasoning_mode(
                provider_options.reasoning_mode
            )

        payload: YandexCompletionRequest = {
            "modelUri": model_uri,
            "completionOptions": completion_options,
            "messages": messages,
            "tools": tools,
            "toolChoice": self.encode_tool_choice(options.tool_choice),
        }

        json_schema = self._encode_response_format(options.response_format)
        if json_schema is not None:
            payload["jsonSchema"] = {"schema": json_schema}

        if provider_options and provider_options.parallel_tool_calls is not None:
            payload["parallelToolCalls"] = provider_options.parallel_tool_calls

        return payload, message_warnings + tool_warnings

    def encode_messages(
        self, messages: List[UnifiedMessage]
    ) -> Tuple[List[YandexMessage], List[CallWarning]]:
        """
        Encode unified messages.

        Every content block becomes its own vendor message, because a vendor
        message holds a single kind of payload.
        """
        warnings: List[CallWarning] = []
        result: List[YandexMessage] = []

        for message_index, msg in enumerate(messages):
            role = self._map_role(msg.role)
            for block_index, block in enumerate(msg.get_blocks()):
                result.append(
                    self._encode_block(block, role, message_index, block_index)
                )

        return result, warnings

    def _encode_block(
        self,
        block: ContentBlock,
        role: YandexMessageRole,
        message_index: int,
        block_index: int,
    ) -> YandexMessage:
        """Encode a single content block into one vendor message."""
        if isinstance(block, str):
            return {"role": role, "text": block}

        if isinstance(block, TextBlock):
            return {"role": role, "text": block.text}

        if isinstance(block, ToolCallBlock):
            return {
                "role": role,
                "toolCallList": {
                    "toolCalls": [
                        {
                            "functionCall": {
                                "name": block.tool_name,
                                "arguments": block.input,
                            }
                        }
                    ]
                },
            }

        if isinstance(block, ToolResultBlock):
            # The API takes tool results from the user side only
            return {
                "role": "user",
                "toolResultList": {
                    "toolResults": [
                        {
                            "functionResult": {
                                "name": block.tool_name,
                                "content": self._serialize_output(block),
                            }
                        }
                    ]
                },
            }

        if isinstance(block, FileBlock):
            raise UnsupportedContentError("file", message_index, block_index)
        if isinstance(block, ReasoningBlock):
            raise UnsupportedContentError("reasoning", message_index, block_index)
        if isinstance(block, ToolApprovalResponseBlock):
            raise UnsupportedContentError(
                "tool-approval-response", message_index, block_index
            )

        raise ValidationError(
            field=f"prompt[{message_index}].content[{block_index}]",
            message="Unknown content block",
            value=block,
        )

    def _serialize_output(self, block: ToolResultBlock) -> str:
        try:
            return json.dumps(block.output, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise ValidationError(
                field="output",
                message=f"Tool result of '{block.tool_name}' is not JSON serializable: {e}",
                value=block.output,
                expected="JSON-representable value",
            ) from e

    def encode_tools(
        self, tools: Optional[List[ToolDeclaration]]
    ) -> Tuple[List[YandexTool], List[CallWarning]]:
        """Encode tool declarations, dropping the kinds the API lacks."""
        warnings: List[CallWarning] = []
        result: List[YandexTool] = []

        for tool in tools or []:
            if tool.type != ToolType.FUNCTION:
                logger.debug("Dropping non-function tool: name=%s", tool.name)
                warnings.append(
                    CallWarning(
                        type="unsupported",
                        feature="non function tools",
                        details=f"Tool '{tool.name}' was not sent",
                    )
                )
                continue

            function: Dict[str, Any] = {"name": tool.name}
            if tool.description is not None:
                function["description"] = tool.description
            function["parameters"] = tool.parameters
            function["strict"] = True
            result.append({"function": function})

        return result, warnings

    def _encode_reasoning_mode(self, mode: str) -> str:
        try:
            return ReasoningMode(mode).value
        except ValueError as e:
            raise ValidationError(
                field="provider_options.reasoning_mode",
                message=f"Unknown reasoning mode: {mode}",
                value=mode,
                expected=", ".join(m.value for m in ReasoningMode),
            ) from e

    def encode_tool_choice(self, choice: Optional[ToolChoice]) -> YandexToolChoice:
        """Encode tool choice; no choice maps to the unspecified mode."""
        if choice is None:
            return {"mode": ToolChoiceMode.UNSPECIFIED.value}
        if choice.type == ToolChoiceType.TOOL:
            if not choice.tool_name:
                raise ValidationError(
                    field="tool_choice.tool_name",
                    message="Tool name is required for a forced tool choice",
                )
            return {"functionName": choice.tool_name}

        mode_map = {
            ToolChoiceType.AUTO: ToolChoiceMode.AUTO,
            ToolChoiceType.NONE: ToolChoiceMode.NONE,
            ToolChoiceType.REQUIRED: ToolChoiceMode.REQUIRED,
        }
        return {"mode": mode_map[choice.type].value}

    def _encode_response_format(
        self, fmt: Optional[ResponseFormat]
    ) -> Optional[Dict[str, Any]]:
        """Return the JSON schema to enforce, if any."""
        if fmt is None or fmt.type != "json":
            return None
        return fmt.schema

    def _map_role(self, role: Role) -> YandexMessageRole:
        """Map unified role to Yandex role; unknown roles become system."""
        role_map: Dict[Role, YandexMessageRole] = {
            Role.ASSISTANT: "assistant",
            Role.USER: "user",
        }
        return role_map.get(role, "system")
