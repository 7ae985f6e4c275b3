"""
Yandex Completion Response Decoder

Converts completion responses (and stream snapshots, which share the shape)
into unified content blocks, a finish reason and token usage.
"""

import json
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

import pydantic

from ..ir import (
    ContentBlock,
    FinishReason,
    TextBlock,
    ToolCallBlock,
    ToolResultBlock,
    UnifiedFinishReason,
    Usage,
)
from ..schemas import AlternativeModel, CompletionResponseModel, UsageModel
from .exceptions import ValidationError
from .finish_reason import map_finish_status


@dataclass
class DecodedCompletion:
    """Decoded completion response."""
    content: List[ContentBlock] = field(default_factory=list)
    finish_reason: FinishReason = field(default_factory=FinishReason)
    usage: Optional[Usage] = None
    model_version: Optional[str] = None


class YandexChatDecoder:
    """Decodes Yandex completion responses to the unified model."""

    def parse_response(self, payload: Any) -> CompletionResponseModel:
        """
        Validate a raw response body.

        Raises:
            ValidationError: Payload does not look like a completion response
        """
        try:
            return CompletionResponseModel.model_validate(payload)
        except pydantic.ValidationError as e:
            raise ValidationError(
                field="result",
                message=f"Invalid completion response: {e.error_count()} error(s)",
                expected="{result: {alternatives, usage, modelVersion}}",
                details={
                    "errors": e.errors(
                        include_url=False, include_context=False, include_input=False
                    )
                },
            ) from e

    def decode_response(self, payload: Any) -> DecodedCompletion:
        """Decode a completion response body."""
        response = self.parse_response(payload)
        content, finish_reason = self.decode_alternatives(
            response.result.alternatives
        )
        usage = None
        if response.result.usage is not None:
            usage = self.convert_usage(response.result.usage)
        return DecodedCompletion(
            content=content,
            finish_reason=finish_reason,
            usage=usage,
            model_version=response.result.model_version,
        )

    def decode_alternatives(
        self, alternatives: Sequence[AlternativeModel]
    ) -> Tuple[List[ContentBlock], FinishReason]:
        """
        Decode alternatives into content and a finish reason.

        The status of the last alternative wins. Multiple candidates are not
        reconciled.
        """
        finish_reason = FinishReason(unified=UnifiedFinishReason.STOP, raw=None)
        content: List[ContentBlock] = []

        for alternative in alternatives:
            finish_reason = map_finish_status(alternative.status)
            message = alternative.message

            if message.text:
                content.append(TextBlock(text=message.text))
            elif message.tool_call_list is not None:
                for tc in message.tool_call_list.tool_calls:
                    content.append(
                        ToolCallBlock(
                            tool_call_id=self._generate_id(),
                            tool_name=tc.function_call.name,
                            input=tc.function_call.arguments,
                        )
                    )
            elif message.tool_result_list is not None:
                for tr in message.tool_result_list.tool_results:
                    content.append(
                        ToolResultBlock(
                            tool_call_id=self._generate_id(),
                            tool_name=tr.function_result.name,
                            output=self._parse_output(
                                tr.function_result.name, tr.function_result.content
                            ),
                        )
                    )

        return content, finish_reason

    def convert_usage(self, usage: UsageModel) -> Usage:
        """Convert vendor usage (decimal strings on the wire) to unified usage."""
        details = usage.completion_tokens_details
        return Usage(
            input_tokens=usage.input_text_tokens,
            output_tokens=usage.completion_tokens,
            total_tokens=usage.total_tokens
            or (usage.input_text_tokens + usage.completion_tokens),
            reasoning_tokens=details.reasoning_tokens if details else 0,
        )

    def _parse_output(self, name: str, content: str) -> Any:
        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            raise ValidationError(
                field="functionResult.content",
                message=f"Tool result of '{name}' is not valid JSON",
                value=content,
                expected="JSON text",
            ) from e

    @staticmethod
    def _generate_id() -> str:
        # The API does not identify calls; downstream needs ids to pair them
        return str(uuid.uuid4())


def usage_to_dict(usage: Usage) -> Dict[str, int]:
    """Flatten usage for logging."""
    return {
        "input_tokens": usage.input_tokens,
        "output_tokens": usage.output_tokens,
        "total_tokens": usage.total_tokens or 0,
        "reasoning_tokens": usage.reasoning_tokens,
    }
