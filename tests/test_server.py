"""Tests for the session dispatcher, driven through in-memory streams."""

import io

import pytest

from ja_tokenizer_sidecar.errors import FramingError, RequestError
from ja_tokenizer_sidecar.framing import END_OF_STREAM, MessageFramer, encode_message
from ja_tokenizer_sidecar.server import SessionDispatcher


def run_session(pipeline, *messages, strict=False):
    """Serve ``messages`` and return (answered count, decoded responses)."""

    writer = io.BytesIO()
    reader = io.BytesIO(b"".join(encode_message(m) for m in messages))
    dispatcher = SessionDispatcher(MessageFramer(reader, writer), pipeline, strict=strict)
    answered = dispatcher.serve_forever()

    responses = []
    out = MessageFramer(io.BytesIO(writer.getvalue()), io.BytesIO())
    while True:
        response = out.receive()
        if response is END_OF_STREAM:
            break
        responses.append(response)
    return answered, responses


def test_get_version(pipeline):
    _, responses = run_session(pipeline, {"action": "get_version", "sequence": "abc"})
    assert responses == [{"sequence": "abc", "data": {"version": 1}}]


@pytest.mark.parametrize("sequence", ["abc", 42, 1.5, None, {"id": [1, "x"]}, [True]])
def test_sequence_is_echoed_by_value(pipeline, sequence):
    _, responses = run_session(
        pipeline,
        {"action": "get_version", "sequence": sequence, "params": {"ignored": True}},
    )
    assert responses[0]["sequence"] == sequence


def test_parse_text(pipeline):
    _, responses = run_session(
        pipeline,
        {"action": "parse_text", "sequence": 1, "params": {"text": "Hello world"}},
    )
    assert [r["source"] for r in responses[0]["data"]] == ["Hello", " ", "world"]


def test_parse_empty_text(pipeline):
    _, responses = run_session(
        pipeline, {"action": "parse_text", "sequence": 1, "params": {"text": ""}}
    )
    assert responses == [{"sequence": 1, "data": []}]


def test_requests_are_answered_in_order(pipeline):
    answered, responses = run_session(
        pipeline,
        {"action": "parse_text", "sequence": 1, "params": {"text": "   "}},
        {"action": "get_version", "sequence": 2},
        {"action": "parse_text", "sequence": 3, "params": {"text": "猫"}},
    )
    assert answered == 3
    assert [r["sequence"] for r in responses] == [1, 2, 3]
    assert responses[0]["data"][0]["source"] == "   "
    assert responses[2]["data"][0]["source"] == "猫"


def test_empty_stream_closes_session(pipeline):
    assert run_session(pipeline) == (0, [])


@pytest.mark.parametrize(
    "message, code",
    [
        ({"action": "shutdown", "sequence": 5}, "unknown_action"),
        ({"sequence": 5}, "unknown_action"),
        ({"action": "parse_text", "sequence": 5}, "invalid_params"),
        ({"action": "parse_text", "sequence": 5, "params": {"text": 3}}, "invalid_params"),
        ({"action": "parse_text", "sequence": 5, "params": "text"}, "invalid_params"),
    ],
)
def test_malformed_request_gets_error_reply(pipeline, message, code):
    answered, responses = run_session(
        pipeline, message, {"action": "get_version", "sequence": 6}
    )
    assert answered == 2
    assert responses[0]["sequence"] == 5
    assert responses[0]["error"]["code"] == code
    assert "data" not in responses[0]
    assert responses[1] == {"sequence": 6, "data": {"version": 1}}


def test_non_object_request(pipeline):
    _, responses = run_session(pipeline, ["get_version"])
    assert responses[0]["sequence"] is None
    assert responses[0]["error"]["code"] == "invalid_request"


def test_strict_mode_aborts_on_unknown_action(pipeline):
    with pytest.raises(RequestError) as excinfo:
        run_session(pipeline, {"action": "nope", "sequence": 1}, strict=True)
    assert excinfo.value.code == "unknown_action"


def test_truncated_frame_is_fatal(pipeline):
    reader = io.BytesIO(encode_message({"action": "get_version", "sequence": 1})[:-2])
    dispatcher = SessionDispatcher(MessageFramer(reader, io.BytesIO()), pipeline)
    with pytest.raises(FramingError):
        dispatcher.serve_forever()
