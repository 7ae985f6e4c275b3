"""
Stream Transducer Module

Turns the chunked body of a streaming completion into unified stream parts.

Every chunk is a complete completion response describing the alternatives as
they stand at that moment, not a diff against the previous chunk.
"""

import json
import logging
from enum import Enum
from typing import (
    Any,
    AsyncIterator,
    Iterable,
    Iterator,
    List,
    Optional,
    Sequence,
    Union,
)

import pydantic

from ..converters import YandexChatDecoder, usage_to_dict
from ..converters.exceptions import (
    MalformedChunkError,
    StreamConversionError,
    ValidationError,
)
from ..ir import (
    CallWarning,
    FinishReason,
    StreamPart,
    StreamPartType,
    TextBlock,
    ToolCallBlock,
    UnifiedFinishReason,
    Usage,
)
from ..schemas import CompletionResponseModel

logger = logging.getLogger(__name__)

# All text deltas of a response belong to one logical text block
TEXT_BLOCK_ID = "0"


class StreamState(str, Enum):
    """Lifecycle of a stream transducer."""
    NOT_STARTED = "not-started"
    STREAMING = "streaming"
    FINISHED = "finished"


class ChunkDecoder:
    """
    Splits a byte stream into JSON documents.

    - The API writes one JSON document per line
    - Supports CRLF (\\r\\n)
    - Blank lines are skipped
    - An unterminated last document is returned by flush()
    """

    def __init__(self) -> None:
        self._buf = b""

    def feed(self, chunk: bytes) -> List[str]:
        """Append bytes and return the documents completed by them."""
        if not chunk:
            return []

        data = self._buf + chunk
        lines = data.split(b"\n")
        self._buf = lines.pop()  # Keep last incomplete line
        return [doc for doc in (self._decode(line) for line in lines) if doc]

    def flush(self) -> List[str]:
        """Return whatever is left once the byte stream ended."""
        doc = self._decode(self._buf)
        self._buf = b""
        return [doc] if doc else []

    @staticmethod
    def _decode(line: bytes) -> str:
        return line.decode("utf-8", errors="replace").strip()


class StreamTransducer:
    """
    Stateful converter from completion chunks to unified stream parts.

    Event order per stream:
        stream-start, then per chunk (raw?, text-delta | tool-input-start,
        tool-input-end, tool-call)*, then text-end and finish.

    The finish reason and usage of the last chunk that reported them are
    published by the finish event. Intermediate PARTIAL statuses are simply
    overwritten.
    """

    def __init__(
        self,
        warnings: Optional[Sequence[CallWarning]] = None,
        *,
        include_raw_chunks: bool = False,
        diff_text_snapshots: bool = False,
    ):
        """
        Args:
            warnings: Request conversion warnings, published by stream-start
            include_raw_chunks: Emit a raw part with the text of every chunk
            diff_text_snapshots: Send only the text not sent yet when a chunk
                extends the previous snapshot. By default every chunk's text
                is sent as a delta in full.
        """
        self.warnings: List[CallWarning] = list(warnings or [])
        self.include_raw_chunks = include_raw_chunks
        self.diff_text_snapshots = diff_text_snapshots

        self.state = StreamState.NOT_STARTED
        self.finish_reason = FinishReason(unified=UnifiedFinishReason.STOP, raw=None)
        self.usage = Usage()
        self.model_version: Optional[str] = None
        self.chunk_count = 0

        self._sent_text = ""
        self._decoder = YandexChatDecoder()

    def start(self) -> List[StreamPart]:
        """Enter the streaming state and emit stream-start."""
        if self.state != StreamState.NOT_STARTED:
            raise StreamConversionError(
                f"Cannot start a stream in state '{self.state.value}'"
            )
        self.state = StreamState.STREAMING
        return [StreamPart(type=StreamPartType.STREAM_START, warnings=self.warnings)]

    def feed(self, chunk: Union[str, bytes]) -> List[StreamPart]:
        """
        Process one chunk and return the parts it produces.

        Raises:
            MalformedChunkError: Chunk is not a completion response
            StreamConversionError: Stream not started or already finished
        """
        if self.state != StreamState.STREAMING:
            raise StreamConversionError(
                f"Cannot process a chunk in state '{self.state.value}'",
                chunk_index=self.chunk_count,
            )

        chunk_index = self.chunk_count
        self.chunk_count += 1
        text = chunk.decode("utf-8", errors="replace") if isinstance(chunk, bytes) else chunk

        parts: List[StreamPart] = []
        if self.include_raw_chunks:
            parts.append(StreamPart(type=StreamPartType.RAW, raw_value=text))

        response = self._parse_chunk(text, chunk_index)
        result = response.result

        if result.usage is not None:
            self.usage = self._decoder.convert_usage(result.usage)
        if result.model_version:
            self.model_version = result.model_version

        try:
            content, finish_reason = self._decoder.decode_alternatives(
                result.alternatives
            )
        except ValidationError as e:
            raise MalformedChunkError(
                e.message, chunk_index=chunk_index, raw_chunk=text
            ) from e
        self.finish_reason = finish_reason

        for block in content:
            if isinstance(block, TextBlock):
                delta = self._text_delta(block.text)
                if delta:
                    parts.append(
                        StreamPart(
                            type=StreamPartType.TEXT_DELTA,
                            id=TEXT_BLOCK_ID,
                            delta=delta,
                        )
                    )
            elif isinstance(block, ToolCallBlock):
                # Arguments always arrive whole, so input start/end are adjacent
                parts.extend(
                    [
                        StreamPart(
                            type=StreamPartType.TOOL_INPUT_START,
                            id=block.tool_call_id,
                            tool_name=block.tool_name,
                        ),
                        StreamPart(
                            type=StreamPartType.TOOL_INPUT_END,
                            id=block.tool_call_id,
                        ),
                        StreamPart(
                            type=StreamPartType.TOOL_CALL,
                            tool_call_id=block.tool_call_id,
                            tool_name=block.tool_name,
                            input=block.input,
                        ),
                    ]
                )

        return parts

    def finish(self) -> List[StreamPart]:
        """Close the text block and emit the finish event."""
        if self.state != StreamState.STREAMING:
            raise StreamConversionError(
                f"Cannot finish a stream in state '{self.state.value}'"
            )
        self.state = StreamState.FINISHED
        logger.debug(
            "Stream finished: chunks=%d finish_reason=%s raw=%s usage=%s",
            self.chunk_count,
            self.finish_reason.unified.value,
            self.finish_reason.raw,
            usage_to_dict(self.usage),
        )
        return [
            StreamPart(type=StreamPartType.TEXT_END, id=TEXT_BLOCK_ID),
            StreamPart(
                type=StreamPartType.FINISH,
                finish_reason=self.finish_reason,
                usage=self.usage,
            ),
        ]

    async def transduce(
        self, byte_chunks: AsyncIterator[bytes]
    ) -> AsyncIterator[StreamPart]:
        """
        Drive the transducer over a response byte stream.

        If the byte stream fails or the consumer is cancelled, no text-end or
        finish part is produced.
        """
        for part in self.start():
            yield part

        framer = ChunkDecoder()
        async for data in byte_chunks:
            for document in framer.feed(data):
                for part in self.feed(document):
                    yield part

        for document in framer.flush():
            for part in self.feed(document):
                yield part

        for part in self.finish():
            yield part

    def _parse_chunk(self, text: str, chunk_index: int) -> CompletionResponseModel:
        try:
            data: Any = json.loads(text)
        except json.JSONDecodeError as e:
            raise MalformedChunkError(
                f"Chunk {chunk_index} is not valid JSON: {e.msg}",
                chunk_index=chunk_index,
                raw_chunk=text,
            ) from e
        try:
            return CompletionResponseModel.model_validate(data)
        except pydantic.ValidationError as e:
            raise MalformedChunkError(
                f"Chunk {chunk_index} is not a completion response: "
                f"{e.error_count()} error(s)",
                chunk_index=chunk_index,
                raw_chunk=text,
            ) from e

    def _text_delta(self, text: str) -> str:
        if not self.diff_text_snapshots:
            return text
        if text.startswith(self._sent_text):
            delta = text[len(self._sent_text):]
        else:
            delta = text
        self._sent_text = text
        return delta


def convert_stream_sync(
    chunks: Iterable[Union[str, bytes]],
    warnings: Optional[Sequence[CallWarning]] = None,
    *,
    include_raw_chunks: bool = False,
    diff_text_snapshots: bool = False,
) -> Iterator[StreamPart]:
    """
    Convert already framed chunks synchronously.

    Each item of ``chunks`` must be one complete JSON document.

    Yields:
        Unified stream parts, stream-start first and finish last
    """
    transducer = StreamTransducer(
        warnings,
        include_raw_chunks=include_raw_chunks,
        diff_text_snapshots=diff_text_snapshots,
    )
    yield from transducer.start()
    for chunk in chunks:
        yield from transducer.feed(chunk)
    yield from transducer.finish()


__all__ = [
    "TEXT_BLOCK_ID",
    "StreamState",
    "ChunkDecoder",
    "StreamTransducer",
    "convert_stream_sync",
]
