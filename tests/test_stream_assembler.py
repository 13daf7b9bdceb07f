"""
Unit tests for the assembly of streamed chunks into chat responses.
"""

from unittest.mock import Mock

from bytedance_ai_lib.core.stream_assembler import (
    StreamAssembler,
    chunk_to_chat_completion,
)
from bytedance_ai_lib.data_models.chat import ChatCompletionChunk


def _chunk(cid, content, role=None, finish=None):
    delta = {"content": content}
    if role is not None:
        delta["role"] = role
    return ChatCompletionChunk.model_validate(
        {
            "id": cid,
            "created": 1,
            "model": "ep-test",
            "object": "chat.completion.chunk",
            "choices": [{"index": 0, "delta": delta, "finish_reason": finish}],
        }
    )


def _completions(*chunks):
    return [chunk_to_chat_completion(c) for c in chunks]


class TestChunkConversion:
    """Chunk to completion mapping."""

    def test_delta_becomes_message(self):
        completion = chunk_to_chat_completion(_chunk("a", "Hi", role="assistant", finish="stop"))
        assert completion.id == "a"
        assert completion.model == "ep-test"
        assert completion.object == "chat.completion.chunk"
        assert completion.choices[0].message.content == "Hi"
        assert completion.choices[0].finish_reason.value == "stop"

    def test_usage_only_chunk_has_no_choices(self):
        chunk = ChatCompletionChunk.model_validate(
            {"id": "a", "choices": [], "usage": {"total_tokens": 3}}
        )
        completion = chunk_to_chat_completion(chunk)
        assert completion.choices == []
        assert completion.usage.total_tokens == 3


class TestRoleTracking:
    """The first role seen for an id is reused by the following chunks."""

    def test_role_propagates_to_later_chunks(self):
        assembler = StreamAssembler()
        responses = list(
            assembler.assemble(
                _completions(
                    _chunk("c1", "Hel", role="assistant"),
                    _chunk("c1", "lo"),
                    _chunk("c1", "", finish="stop"),
                )
            )
        )

        props = [r.result.output.properties for r in responses]
        assert [p["role"] for p in props] == ["assistant"] * 3
        assert [p["id"] for p in props] == ["c1"] * 3
        assert [p["finishReason"] for p in props] == ["", "", "stop"]
        assert [r.result.output.content for r in responses] == ["Hel", "lo", ""]

    def test_first_role_wins(self):
        assembler = StreamAssembler()
        list(
            assembler.assemble(
                _completions(
                    _chunk("c1", "a", role="assistant"),
                    _chunk("c1", "b", role="user"),
                )
            )
        )
        assert assembler.role_of("c1") == "assistant"

    def test_unknown_id_has_no_role(self):
        assembler = StreamAssembler()
        response = assembler.to_chat_response(_completions(_chunk("c2", "x"))[0])
        assert response.result.output.properties["role"] is None

    def test_roles_are_kept_per_id(self):
        assembler = StreamAssembler()
        list(
            assembler.assemble(
                _completions(
                    _chunk("c1", "a", role="assistant"),
                    _chunk("c2", "b", role="system"),
                )
            )
        )
        assert assembler.roles == {"c1": "assistant", "c2": "system"}

    def test_finish_reason_sets_generation_metadata(self):
        assembler = StreamAssembler()
        first, last = assembler.assemble(
            _completions(_chunk("c1", "a", role="assistant"), _chunk("c1", "", finish="length"))
        )
        assert first.result.metadata.finish_reason is None
        assert last.result.metadata.finish_reason == "length"


class TestAssemblyFailures:
    """Conversion errors and function-call buffering."""

    def test_conversion_error_yields_empty_response(self):
        logger = Mock()
        assembler = StreamAssembler(logger=logger)
        bad = ChatCompletionChunk.model_validate(
            {
                "id": "c1",
                "choices": [
                    {"index": 0, "delta": {"content": [{"type": "text", "text": "x"}]}}
                ],
            }
        )

        responses = list(
            assembler.assemble(_completions(bad, _chunk("c1", "ok", role="assistant")))
        )

        assert responses[0].results == []
        assert responses[1].result.output.content == "ok"
        logger.error.assert_called_once()

    def test_function_call_completions_are_handed_to_handler(self):
        handler = Mock(side_effect=lambda completions: completions[-1:])
        assembler = StreamAssembler(
            is_function_call=lambda c: c.id == "tool",
            function_call_handler=handler,
        )

        responses = list(
            assembler.assemble(
                _completions(
                    _chunk("tool", "{", role="assistant"),
                    _chunk("tool", "}", finish="stop"),
                    _chunk("c1", "after", role="assistant"),
                )
            )
        )

        handler.assert_called_once()
        assert [c.choices[0].message.content for c in handler.call_args.args[0]] == [
            "{",
            "}",
        ]
        assert [r.result.output.content for r in responses] == ["}", "after"]

    def test_stream_end_flushes_pending_function_call(self):
        handler = Mock(side_effect=lambda completions: completions)
        assembler = StreamAssembler(
            is_function_call=lambda c: True, function_call_handler=handler
        )
        responses = list(assembler.assemble(_completions(_chunk("tool", "{"))))
        handler.assert_called_once()
        assert responses[0].result.output.content == "{"
