import asyncio

import google.generativeai as genai
import pytest
from google.api_core import exceptions as google_exceptions
from google.generativeai import protos
from google.generativeai.types import AsyncGenerateContentResponse

from interviewer.config import Config
from interviewer.errors import UpstreamAuthError, UpstreamTransportError
from interviewer.interviewers import create_interviewer
from interviewer.interviewers.gemini import GeminiInterviewer, translate_error
from interviewer.models import Turn
from interviewer.prompt import SYSTEM_INSTRUCTION

FinishReason = protos.Candidate.FinishReason
BlockReason = protos.GenerateContentResponse.PromptFeedback.BlockReason


def _candidate(finish_reason=FinishReason.STOP, text="Tell me about yourself.", ratings=()):
    return protos.Candidate(
        finish_reason=finish_reason,
        content=protos.Content(role="model", parts=[protos.Part(text=text)]),
        safety_ratings=list(ratings),
    )


def _response(*candidates, block_reason=None):
    result = protos.GenerateContentResponse(candidates=list(candidates))
    if block_reason is not None:
        result.prompt_feedback = protos.GenerateContentResponse.PromptFeedback(block_reason=block_reason)
    return AsyncGenerateContentResponse.from_response(result)


@pytest.fixture
def interviewer():
    return GeminiInterviewer(api_key="test-key", model="gemini-test", timeout=0)


@pytest.fixture
def gemini_calls(monkeypatch):
    """Patch the network call of the real SDK model and record each request."""
    calls = {"response": _response(_candidate()), "delay": 0, "requests": []}

    async def _generate_content_async(self, contents, **kwargs):
        calls["requests"].append({"model": self, "contents": contents})
        if calls["delay"]:
            await asyncio.sleep(calls["delay"])
        return calls["response"]

    monkeypatch.setattr(genai.GenerativeModel, "generate_content_async", _generate_content_async)
    return calls


def _instruction_text(model) -> str:
    return "".join(part.text for part in model._system_instruction.parts)


def test_requires_api_key(monkeypatch):
    monkeypatch.setattr(Config, "GOOGLE_API_KEY", None)
    with pytest.raises(ValueError, match="GOOGLE_API_KEY"):
        GeminiInterviewer()


def test_factory_builds_gemini(monkeypatch):
    monkeypatch.setattr(Config, "GOOGLE_API_KEY", "test-key")
    assert isinstance(create_interviewer(" Gemini "), GeminiInterviewer)


def test_factory_rejects_unknown_type():
    with pytest.raises(ValueError, match="Unknown interviewer 'ollama'"):
        create_interviewer("ollama")


def test_first_turn_context_uses_job_title(interviewer):
    context = interviewer.build_invocation_context([], "  Sales Consultant ")
    assert context.history == []
    assert context.is_first_turn
    assert 'for the role of "Sales Consultant"' in context.system_instruction


@pytest.mark.parametrize("job_title", ["", None, "   "])
def test_first_turn_context_defaults_job_title(interviewer, job_title):
    context = interviewer.build_invocation_context([], job_title)
    assert 'for the role of "a position"' in context.system_instruction


def test_later_turns_replay_history_without_instruction(interviewer):
    history = [
        Turn("user", "Start the interview"),
        Turn("model", "Tell me about yourself."),
        Turn("user", "I sell cars."),
        Turn("model", "Why cars?"),
    ]
    context = interviewer.build_invocation_context(history, "Sales")
    assert context.system_instruction is None
    assert not context.is_first_turn
    assert context.history == [
        {"role": "user", "parts": [{"text": "Start the interview"}]},
        {"role": "model", "parts": [{"text": "Tell me about yourself."}]},
        {"role": "user", "parts": [{"text": "I sell cars."}]},
        {"role": "model", "parts": [{"text": "Why cars?"}]},
    ]


@pytest.mark.asyncio
async def test_first_turn_sends_fresh_instruction(interviewer, gemini_calls):
    reply = await interviewer.reply("Start", [], "Mechanic")

    assert reply == "Tell me about yourself."
    request = gemini_calls["requests"][0]
    assert 'for the role of "Mechanic"' in _instruction_text(request["model"])
    assert request["contents"] == [{"role": "user", "parts": [{"text": "Start"}]}]


@pytest.mark.asyncio
async def test_later_turn_falls_back_to_persona(interviewer, gemini_calls):
    gemini_calls["response"] = _response(_candidate(text="Why?"))
    history = [Turn("user", "Start"), Turn("model", "Tell me about yourself.")]

    reply = await interviewer.reply("I fix engines.", history, "Mechanic")

    assert reply == "Why?"
    request = gemini_calls["requests"][0]
    assert _instruction_text(request["model"]) == SYSTEM_INSTRUCTION
    assert request["contents"] == [
        {"role": "user", "parts": [{"text": "Start"}]},
        {"role": "model", "parts": [{"text": "Tell me about yourself."}]},
        {"role": "user", "parts": [{"text": "I fix engines."}]},
    ]
    assert history == [Turn("user", "Start"), Turn("model", "Tell me about yourself.")]


@pytest.mark.asyncio
async def test_stop_reply_is_verbatim(interviewer, gemini_calls):
    gemini_calls["response"] = _response(_candidate(FinishReason.STOP, "Describe a hard sale."))
    assert await interviewer.reply("Hi", []) == "Describe a hard sale."


@pytest.mark.asyncio
async def test_max_tokens_reply_is_truncated(interviewer, gemini_calls):
    gemini_calls["response"] = _response(_candidate(FinishReason.MAX_TOKENS, "Hello"))
    assert await interviewer.reply("Hi", []) == "Hello ... (truncated)"


@pytest.mark.asyncio
async def test_empty_response_is_incomplete(interviewer, gemini_calls):
    gemini_calls["response"] = AsyncGenerateContentResponse.from_response(protos.GenerateContentResponse())
    assert await interviewer.reply("Hi", []) == "I received an incomplete response. Please try again."


@pytest.mark.asyncio
async def test_blocked_prompt_is_content_restricted(interviewer, gemini_calls):
    gemini_calls["response"] = _response(block_reason=BlockReason.OTHER)
    assert await interviewer.reply("Hi", []) == "I cannot respond due to content restrictions (OTHER)."


@pytest.mark.asyncio
async def test_safety_stop_names_blocked_category(interviewer, gemini_calls):
    ratings = [
        protos.SafetyRating(
            category=protos.HarmCategory.HARM_CATEGORY_HATE_SPEECH,
            probability=protos.SafetyRating.HarmProbability.LOW,
        ),
        protos.SafetyRating(
            category=protos.HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT,
            probability=protos.SafetyRating.HarmProbability.HIGH,
            blocked=True,
        ),
    ]
    gemini_calls["response"] = _response(_candidate(FinishReason.SAFETY, "", ratings))
    assert await interviewer.reply("Hi", []) == (
        "My response was blocked due to safety concerns (HARM_CATEGORY_DANGEROUS_CONTENT). "
        "Let's try a different question."
    )


@pytest.mark.asyncio
async def test_other_finish_reason_is_incomplete(interviewer, gemini_calls):
    gemini_calls["response"] = _response(_candidate(FinishReason.RECITATION, "partial"))
    assert await interviewer.reply("Hi", []) == "Incomplete response (Reason: RECITATION). Please try again."


@pytest.mark.asyncio
async def test_timeout_is_reported_as_service_issue(interviewer, gemini_calls):
    interviewer.timeout = 0.01
    gemini_calls["delay"] = 1

    reply = await interviewer.reply("Hi", [])

    assert reply == "AI service issue: the request timed out. Try again later."


def _raise(exc):
    async def _send(context, user_message):
        raise exc
    return _send


@pytest.mark.asyncio
async def test_invalid_api_key(monkeypatch, interviewer):
    exc = google_exceptions.InvalidArgument("API key not valid. Please pass a valid API key.")
    monkeypatch.setattr(interviewer, "_send", _raise(exc))
    assert await interviewer.reply("Hi", []) == "API configuration issue. Contact the administrator."


@pytest.mark.asyncio
async def test_structured_service_error(monkeypatch, interviewer):
    monkeypatch.setattr(interviewer, "_send", _raise(google_exceptions.ResourceExhausted("Quota exceeded")))
    assert await interviewer.reply("Hi", []) == "AI service error: Quota exceeded"


@pytest.mark.asyncio
async def test_client_error(monkeypatch, interviewer):
    exc = google_exceptions.RetryError("Deadline exceeded", cause=None)
    monkeypatch.setattr(interviewer, "_send", _raise(exc))
    reply = await interviewer.reply("Hi", [])
    assert reply.startswith("AI service issue: Deadline exceeded")
    assert reply.endswith(". Try again later.")


@pytest.mark.asyncio
async def test_unexpected_error_is_generic(monkeypatch, interviewer):
    monkeypatch.setattr(interviewer, "_send", _raise(KeyError("parts")))
    assert await interviewer.reply("Hi", []) == "Internal error. Please try again later."


def test_translate_error():
    assert isinstance(translate_error(Exception("API key not valid")), UpstreamAuthError)
    assert isinstance(translate_error(asyncio.TimeoutError()), UpstreamTransportError)
    err = google_exceptions.InternalServerError("boom")
    assert translate_error(err) is err
