import pytest

from loz.errors import AuthError, RateLimitError, TransportError
from loz.models.params import CompletionParameters
from loz.pipeline import CompletionPipeline


def build(config, stream=True, prompt="hi"):
    return CompletionParameters.from_settings(config, model="fake-model", prompt=prompt, stream=stream)


def test_streaming_writes_fragments_in_order(config, make_client, out, recording_console):
    client = make_client(replies=[["Hel", "lo", " there"]])
    pipeline = CompletionPipeline(client, console=recording_console, out=out)

    answer = pipeline.run(build(config))

    assert answer == "Hello there"
    assert out.getvalue() == "Hello there\n"
    assert pipeline.last_model == "fake-model"


def test_streaming_and_non_streaming_answers_match(config, make_client, out, recording_console):
    fragments = ["a", "b", "c"]
    streamed = CompletionPipeline(make_client(replies=[fragments]), console=recording_console, out=out).run(build(config))
    whole = CompletionPipeline(make_client(replies=[fragments]), console=recording_console, out=out).run(build(config, stream=False))
    assert streamed == whole == "abc"


def test_non_streaming_writes_nothing(config, make_client, out, recording_console):
    pipeline = CompletionPipeline(make_client(replies=[["done"]]), console=recording_console, out=out)
    assert pipeline.run(build(config, stream=False)) == "done"
    assert out.getvalue() == ""


def test_client_without_streaming_emits_single_fragment(config, make_client, out, recording_console):
    client = make_client(replies=[["one", "two"]], streaming=False)
    pipeline = CompletionPipeline(client, console=recording_console, out=out)
    assert pipeline.run(build(config)) == "onetwo"
    assert out.getvalue() == "onetwo\n"


@pytest.mark.parametrize("error,message", [
    (AuthError("bad key", status_code=401), "Invalid API key"),
    (RateLimitError("slow down", status_code=429), "API request limit reached"),
    (TransportError("connection refused"), "Request failed: connection refused"),
])
def test_provider_errors_become_empty_answer(config, make_client, out, recording_console, error, message):
    errors = recording_console
    pipeline = CompletionPipeline(make_client(replies=[error]), console=errors, out=out)

    assert pipeline.run(build(config)) == ""
    assert message in errors.text
    assert pipeline.last_model is None


def test_interrupted_stream_keeps_partial_output(config, make_client, out, recording_console):
    errors = recording_console
    client = make_client(replies=[["partial ", "answer", TransportError("reset by peer")]])
    pipeline = CompletionPipeline(client, console=errors, out=out)

    assert pipeline.run(build(config)) == ""
    assert out.getvalue() == "partial answer\n"
    assert "interrupted" in errors.text


def test_keyboard_interrupt_propagates(config, make_client, out, recording_console):
    pipeline = CompletionPipeline(make_client(replies=[["x", KeyboardInterrupt()]]), console=recording_console, out=out)
    with pytest.raises(KeyboardInterrupt):
        pipeline.run(build(config))


def test_switch_client(config, make_client, out, recording_console):
    first = make_client(replies=[["one"]])
    second = make_client(replies=[["two"]], model="other")
    pipeline = CompletionPipeline(first, console=recording_console, out=out)
    pipeline.switch_client(second)
    assert pipeline.run(build(config, stream=False)) == "two"
    assert first.calls == []
