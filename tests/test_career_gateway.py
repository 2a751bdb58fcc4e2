"""Tests for the feature methods of :class:`CareerGateway`."""

import json

import httpx
import pytest

from conftest import StubBackend, make_generic_gateway, replying, request_json

from career_assistant.domain.entities import (
    ChatRole,
    ConversationTurn,
    JobMetadata,
    ReferralMessage,
)
from career_assistant.domain.exceptions import (
    OperationCancelledError,
    ProviderConnectionError,
    ProviderHTTPError,
    ResponseDecodeError,
)
from career_assistant.domain.value_objects import CancelToken
from career_assistant.services import output_schemas, prompts
from career_assistant.services.career_gateway import CareerGateway

MALFORMED = '{"title": "Backend Engineer", '


# ── Chat ────────────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_chat_turn_on_generic_path_delivers_words_in_order():
    gateway = make_generic_gateway(replying("Focus on Go roles in Berlin"))
    received: list[str] = []

    await gateway.chat_turn([], "Where should I apply?", received.append)

    assert received == ["Focus ", "on ", "Go ", "roles ", "in ", "Berlin "]


@pytest.mark.asyncio
async def test_chat_sends_system_instruction_history_and_message():
    captured: list[httpx.Request] = []
    gateway = make_generic_gateway(replying("ok", captured))
    history = [ConversationTurn.user("hi"), ConversationTurn.assistant("hello")]

    await gateway.chat_turn(history, "next", lambda chunk: None)

    messages = request_json(captured[0])["messages"]
    assert messages[0] == {"role": "system", "content": prompts.CHAT_SYSTEM_INSTRUCTION}
    assert messages[1:] == [
        {"role": "user", "content": "hi"},
        {"role": "assistant", "content": "hello"},
        {"role": "user", "content": "next"},
    ]


@pytest.mark.asyncio
async def test_chat_snapshots_history_at_call_time():
    stub = StubBackend(chunks=["a", "b"])
    gateway = CareerGateway(stub)
    history = [ConversationTurn.user("first")]

    stream = gateway.stream_chat(history, "second")
    history.append(ConversationTurn.user("added later"))
    received = [chunk async for chunk in stream]

    assert received == ["a", "b"]
    sent = stub.calls[0]["messages"]
    assert [t.text for t in sent] == ["first", "second"]
    assert sent[-1].role is ChatRole.USER


@pytest.mark.asyncio
async def test_chat_turn_awaits_async_callbacks():
    gateway = CareerGateway(StubBackend(chunks=["x", "y"]))
    received = []

    async def on_chunk(chunk):
        received.append(chunk)

    await gateway.chat_turn([], "go", on_chunk)

    assert received == ["x", "y"]


@pytest.mark.asyncio
async def test_chat_turn_stops_when_cancelled_between_chunks():
    gateway = make_generic_gateway(replying("one two three"))
    token = CancelToken()
    received = []

    def on_chunk(chunk):
        received.append(chunk)
        token.cancel()

    with pytest.raises(OperationCancelledError):
        await gateway.chat_turn([], "hi", on_chunk, cancel=token)

    assert received == ["one "]


@pytest.mark.asyncio
async def test_cancelled_feature_call_sends_nothing():
    captured = []
    gateway = make_generic_gateway(replying("[]", captured))
    token = CancelToken()
    token.cancel()

    with pytest.raises(OperationCancelledError):
        await gateway.search_jobs("data engineer", cancel=token)

    assert captured == []


# ── Deep reasoning ──────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_deep_reasoning_requests_reasoning_mode():
    stub = StubBackend(reply="Step 1 ...")
    gateway = CareerGateway(stub)

    text = await gateway.deep_reasoning([ConversationTurn.user("context")], "Plan my switch")

    assert text == "Step 1 ..."
    call = stub.calls[0]
    assert call["reasoning"] is True
    assert [t.text for t in call["messages"]] == ["context", "Plan my switch"]


@pytest.mark.asyncio
async def test_deep_reasoning_empty_reply_placeholder():
    gateway = CareerGateway(StubBackend(reply=""))
    assert await gateway.deep_reasoning([], "anything") == prompts.NO_RESPONSE_TEXT


@pytest.mark.asyncio
async def test_deep_reasoning_placeholder_applies_on_generic_path():
    gateway = make_generic_gateway(replying(None))
    assert await gateway.deep_reasoning([], "anything") == "No response generated."


# ── Job search ──────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_job_search_end_to_end_on_generic_provider():
    reply = (
        '[{"id":"1","title":"Backend Engineer","company":"Acme","location":"Remote",'
        '"matchScore":90,"tags":["Go"],"postedAt":"1d ago"}]'
    )
    captured: list[httpx.Request] = []
    gateway = make_generic_gateway(replying(reply, captured))

    jobs = await gateway.search_jobs("backend engineer")

    assert len(jobs) == 1
    assert jobs[0].match_score == 90
    assert isinstance(jobs[0].match_score, int)
    assert jobs[0].tags == ["Go"]
    body = request_json(captured[0])
    assert body["response_format"] == {"type": "json_object"}
    assert '"backend engineer"' in body["messages"][-1]["content"]


@pytest.mark.asyncio
async def test_job_search_uses_canonical_schema_and_system_instruction(stub):
    stub.reply = "[]"
    await CareerGateway(stub).search_jobs("data engineer")

    call = stub.calls[0]
    assert call["schema"] is output_schemas.JOB_LISTINGS
    assert call["system_prompt"] == prompts.JOB_SEARCH_SYSTEM_INSTRUCTION


# ── Fallbacks vs propagation ────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_malformed_json_fallbacks():
    gateway = CareerGateway(StubBackend(reply=MALFORMED))

    assert await gateway.search_jobs("x") == []
    assert await gateway.generate_referral("cv", "jd", "Sam", "Alumni", "Email") == (
        ReferralMessage(subject="", message_body="", explanation="")
    )
    assert await gateway.extract_job_metadata("page") == JobMetadata(
        title="Unknown", company="Unknown"
    )


@pytest.mark.asyncio
async def test_malformed_json_propagates_for_resume_features():
    gateway = CareerGateway(StubBackend(reply=MALFORMED))

    with pytest.raises(ResponseDecodeError):
        await gateway.analyze_resume("cv text")
    with pytest.raises(ResponseDecodeError):
        await gateway.tailor_resume("cv text", "jd text", "Germany")


@pytest.mark.asyncio
async def test_metadata_falls_back_when_provider_unreachable():
    def handler(request):
        raise httpx.ConnectError("no route to host", request=request)

    gateway = make_generic_gateway(handler)

    assert await gateway.extract_job_metadata("page") == JobMetadata.unknown()


@pytest.mark.asyncio
async def test_connection_errors_propagate_elsewhere():
    def handler(request):
        raise httpx.ConnectError("no route to host", request=request)

    gateway = make_generic_gateway(handler)

    with pytest.raises(ProviderConnectionError):
        await gateway.search_jobs("x")


@pytest.mark.asyncio
async def test_http_401_fails_every_generic_feature():
    gateway = make_generic_gateway(lambda request: httpx.Response(401, text="invalid key"))
    calls = [
        gateway.chat_turn([], "hi", lambda chunk: None),
        gateway.deep_reasoning([], "think"),
        gateway.search_jobs("backend engineer"),
        gateway.analyze_resume("cv"),
        gateway.tailor_resume("cv", "jd"),
        gateway.generate_cover_letter("cv", "jd"),
        gateway.generate_referral("cv", "jd", "Sam", "Friend", "LinkedIn"),
        gateway.extract_job_metadata("page"),
    ]

    for call in calls:
        with pytest.raises(ProviderHTTPError) as exc_info:
            await call
        assert "401" in str(exc_info.value)
        assert "invalid key" in str(exc_info.value)


# ── Resume features ─────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_analyze_resume_decodes_record():
    payload = {
        "score": 80,
        "summary": "Good",
        "strengths": ["a"],
        "weaknesses": ["b"],
        "improvements": ["c"],
    }
    stub = StubBackend(reply=json.dumps(payload))

    analysis = await CareerGateway(stub).analyze_resume("my resume")

    assert analysis.score == 80
    assert analysis.improvements == ["c"]
    assert "my resume" in stub.calls[0]["prompt"]
    assert stub.calls[0]["schema"] is output_schemas.RESUME_ANALYSIS


@pytest.mark.asyncio
async def test_tailor_prompt_carries_market_and_contact_rule(stub):
    with pytest.raises(ResponseDecodeError):
        await CareerGateway(stub).tailor_resume("cv", "jd", "Canada")

    prompt = stub.calls[0]["prompt"]
    assert "job market in: Canada" in prompt
    assert "Do NOT invent" in prompt


@pytest.mark.asyncio
async def test_cover_letter_is_plain_text_and_may_be_empty():
    stub = StubBackend(reply="")
    assert await CareerGateway(stub).generate_cover_letter("cv", "jd") == ""
    assert stub.calls[0]["op"] == "complete"
    assert stub.calls[0]["reasoning"] is False


@pytest.mark.asyncio
async def test_referral_decodes_record():
    stub = StubBackend(
        reply='{"subject": "Quick ask", "messageBody": "Hi Sam", "explanation": "Short."}'
    )

    message = await CareerGateway(stub).generate_referral("cv", "jd", "Sam", "Alumni", "LinkedIn")

    assert message == ReferralMessage(subject="Quick ask", message_body="Hi Sam", explanation="Short.")
    prompt = stub.calls[0]["prompt"]
    assert "send to Sam" in prompt
    assert "Platform: LinkedIn" in prompt
