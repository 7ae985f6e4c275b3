"""
Unit Tests for the Stream Transducer
"""

import json
from typing import AsyncIterator, List

import pytest

from yandex_model_provider.converters.exceptions import (
    MalformedChunkError,
    StreamConversionError,
)
from yandex_model_provider.ir import CallWarning, StreamPart, StreamPartType, UnifiedFinishReason
from yandex_model_provider.stream import (
    TEXT_BLOCK_ID,
    ChunkDecoder,
    StreamState,
    StreamTransducer,
    convert_stream_sync,
)

from tests.fixtures import STREAM_TEXT_CHUNKS, STREAM_TOOL_CALL_CHUNKS


def _types(parts: List[StreamPart]) -> List[StreamPartType]:
    return [p.type for p in parts]


async def _bytes(*pieces: bytes) -> AsyncIterator[bytes]:
    for piece in pieces:
        yield piece


async def _collect(stream: AsyncIterator[StreamPart]) -> List[StreamPart]:
    return [part async for part in stream]


class TestStreamEventOrder:
    """Tests for the emitted event sequence."""

    def test_zero_chunks(self):
        """An empty stream still starts, closes the text block and finishes"""
        parts = list(convert_stream_sync([]))

        assert _types(parts) == [
            StreamPartType.STREAM_START,
            StreamPartType.TEXT_END,
            StreamPartType.FINISH,
        ]
        assert parts[1].id == TEXT_BLOCK_ID
        assert parts[2].finish_reason.unified == UnifiedFinishReason.STOP
        assert parts[2].finish_reason.raw is None
        assert parts[2].usage.input_tokens == 0
        assert parts[2].usage.output_tokens == 0

    def test_stream_start_carries_warnings(self):
        warning = CallWarning(type="unsupported", feature="non function tools")

        parts = list(convert_stream_sync([], [warning]))

        assert parts[0].type == StreamPartType.STREAM_START
        assert parts[0].warnings == [warning]

    def test_text_snapshots_are_emitted_in_full(self):
        chunks = [json.dumps(c) for c in STREAM_TEXT_CHUNKS]

        parts = list(convert_stream_sync(chunks))

        assert _types(parts) == [
            StreamPartType.STREAM_START,
            StreamPartType.TEXT_DELTA,
            StreamPartType.TEXT_DELTA,
            StreamPartType.TEXT_END,
            StreamPartType.FINISH,
        ]
        assert [p.delta for p in parts[1:3]] == ["Hel", "Hello"]
        assert {p.id for p in parts[1:4]} == {TEXT_BLOCK_ID}
        assert parts[-1].finish_reason.unified == UnifiedFinishReason.STOP

    def test_diff_text_snapshots(self):
        chunks = [json.dumps(c) for c in STREAM_TEXT_CHUNKS]

        parts = list(convert_stream_sync(chunks, diff_text_snapshots=True))

        deltas = [p.delta for p in parts if p.type == StreamPartType.TEXT_DELTA]
        assert deltas == ["Hel", "lo"]

    def test_final_chunk_with_two_tool_calls(self):
        """Each tool call yields start/end/call, then text-end and finish"""
        chunks = [json.dumps(c) for c in STREAM_TOOL_CALL_CHUNKS]

        parts = list(convert_stream_sync(chunks))

        assert _types(parts) == [
            StreamPartType.STREAM_START,
            StreamPartType.TOOL_INPUT_START,
            StreamPartType.TOOL_INPUT_END,
            StreamPartType.TOOL_CALL,
            StreamPartType.TOOL_INPUT_START,
            StreamPartType.TOOL_INPUT_END,
            StreamPartType.TOOL_CALL,
            StreamPartType.TEXT_END,
            StreamPartType.FINISH,
        ]
        first, second = parts[1:4], parts[4:7]
        for start, end, call in (first, second):
            assert start.id == end.id == call.tool_call_id
            assert start.tool_name == call.tool_name
        assert first[0].id != second[0].id
        assert first[2].tool_name == "get_weather"
        assert first[2].input == {"city": "Moscow"}
        assert second[2].tool_name == "get_time"
        assert parts[-1].finish_reason.unified == UnifiedFinishReason.TOOL_CALLS
        assert parts[-1].finish_reason.raw == "ALTERNATIVE_STATUS_TOOL_CALLS"

    def test_usage_last_value_wins(self):
        chunks = [json.dumps(c) for c in STREAM_TEXT_CHUNKS]

        parts = list(convert_stream_sync(chunks))

        usage = parts[-1].usage
        assert usage.input_tokens == 10
        assert usage.output_tokens == 12

    def test_usage_kept_when_later_chunk_omits_it(self):
        last = json.loads(json.dumps(STREAM_TEXT_CHUNKS[1]))
        del last["result"]["usage"]
        chunks = [json.dumps(STREAM_TEXT_CHUNKS[0]), json.dumps(last)]

        parts = list(convert_stream_sync(chunks))

        assert parts[-1].usage.output_tokens == 5

    def test_raw_chunks(self):
        chunks = [json.dumps(c) for c in STREAM_TEXT_CHUNKS]

        parts = list(convert_stream_sync(chunks, include_raw_chunks=True))

        assert _types(parts)[:3] == [
            StreamPartType.STREAM_START,
            StreamPartType.RAW,
            StreamPartType.TEXT_DELTA,
        ]
        assert parts[1].raw_value == chunks[0]


class TestStreamErrors:
    """Tests for malformed input and illegal transitions."""

    def test_invalid_json_chunk(self):
        transducer = StreamTransducer()
        transducer.start()

        with pytest.raises(MalformedChunkError) as exc_info:
            transducer.feed("{not json")

        assert exc_info.value.chunk_index == 0
        assert exc_info.value.raw_chunk == "{not json"

    def test_chunk_without_result(self):
        transducer = StreamTransducer()
        transducer.start()
        transducer.feed(json.dumps(STREAM_TEXT_CHUNKS[0]))

        with pytest.raises(MalformedChunkError) as exc_info:
            transducer.feed(json.dumps({"alternatives": []}))

        assert exc_info.value.chunk_index == 1
        assert isinstance(exc_info.value, StreamConversionError)

    def test_feed_before_start(self):
        with pytest.raises(StreamConversionError):
            StreamTransducer().feed(json.dumps(STREAM_TEXT_CHUNKS[0]))

    def test_feed_after_finish(self):
        transducer = StreamTransducer()
        transducer.start()
        transducer.finish()

        assert transducer.state == StreamState.FINISHED
        with pytest.raises(StreamConversionError):
            transducer.feed(json.dumps(STREAM_TEXT_CHUNKS[0]))

    def test_start_twice(self):
        transducer = StreamTransducer()
        transducer.start()

        with pytest.raises(StreamConversionError):
            transducer.start()


class TestTransduce:
    """Tests for the async driver over a byte stream."""

    @pytest.mark.asyncio
    async def test_split_documents(self):
        """Documents split across byte chunks are reassembled"""
        body = b"".join(json.dumps(c).encode() + b"\n" for c in STREAM_TEXT_CHUNKS)
        pieces = [body[:7], body[7:60], body[60:]]

        parts = await _collect(StreamTransducer().transduce(_bytes(*pieces)))

        assert _types(parts) == [
            StreamPartType.STREAM_START,
            StreamPartType.TEXT_DELTA,
            StreamPartType.TEXT_DELTA,
            StreamPartType.TEXT_END,
            StreamPartType.FINISH,
        ]

    @pytest.mark.asyncio
    async def test_last_document_without_newline(self):
        body = json.dumps(STREAM_TEXT_CHUNKS[1]).encode()

        parts = await _collect(StreamTransducer().transduce(_bytes(body)))

        assert [p.delta for p in parts if p.type == StreamPartType.TEXT_DELTA] == ["Hello"]

    @pytest.mark.asyncio
    async def test_source_failure_stops_without_finish(self):
        async def failing() -> AsyncIterator[bytes]:
            yield json.dumps(STREAM_TEXT_CHUNKS[0]).encode() + b"\n"
            raise ConnectionError("connection reset")

        transducer = StreamTransducer()
        parts: List[StreamPart] = []
        with pytest.raises(ConnectionError):
            async for part in transducer.transduce(failing()):
                parts.append(part)

        assert StreamPartType.FINISH not in _types(parts)
        assert transducer.state == StreamState.STREAMING


class TestChunkDecoder:
    """Tests for newline framing."""

    def test_crlf_and_blank_lines(self):
        decoder = ChunkDecoder()

        docs = decoder.feed(b'{"a": 1}\r\n\r\n{"b"')
        assert docs == ['{"a": 1}']

        docs = decoder.feed(b": 2}\n")
        assert docs == ['{"b": 2}']
        assert decoder.flush() == []

    def test_flush_returns_tail(self):
        decoder = ChunkDecoder()
        assert decoder.feed(b'{"a": 1}') == []
        assert decoder.flush() == ['{"a": 1}']

    def test_multibyte_character_split(self):
        data = '{"text": "снег"}\n'.encode("utf-8")
        decoder = ChunkDecoder()

        docs = decoder.feed(data[:13]) + decoder.feed(data[13:])

        assert docs == ['{"text": "снег"}']
