"""Gemini-backed interviewer."""

import asyncio
import logging
from typing import Sequence

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

from interviewer.config import Config
from interviewer.errors import UpstreamAuthError, UpstreamTransportError
from interviewer.interviewers.base import BaseInterviewer, InvocationContext
from interviewer.models import Turn
from interviewer.outcomes import (
    Failed,
    Incomplete,
    ContentRestricted,
    Outcome,
    classify_response,
)
from interviewer.prompt import SYSTEM_INSTRUCTION

logger = logging.getLogger("interviewer.gemini")


def translate_error(exc: Exception) -> Exception:
    """Map SDK and transport exceptions onto the service's error taxonomy.

    Structured API errors are returned unchanged so their message survives.
    """
    if "API key not valid" in str(exc):
        return UpstreamAuthError(str(exc))
    if isinstance(exc, asyncio.TimeoutError):
        return UpstreamTransportError("the request timed out")
    if isinstance(exc, google_exceptions.GoogleAPICallError) and exc.message:
        return exc
    if isinstance(exc, google_exceptions.GoogleAPIError):
        return UpstreamTransportError(str(exc))
    return exc


def classify_error(exc: Exception) -> Failed:
    err = translate_error(exc)
    if isinstance(err, UpstreamAuthError):
        return Failed("auth")
    if isinstance(err, google_exceptions.GoogleAPICallError):
        return Failed("service", err.message)
    if isinstance(err, UpstreamTransportError):
        return Failed("transport", str(err))
    return Failed("internal")


class GeminiInterviewer(BaseInterviewer):
    """Google Gemini-based interviewer."""

    def __init__(self, api_key: str = None, model: str = None, timeout: float = None):
        """Initialize Gemini interviewer.

        Args:
            api_key: Gemini API key (defaults to Config.GOOGLE_API_KEY)
            model: Model name to use (defaults to Config.GEMINI_MODEL)
            timeout: Seconds to wait for a reply, 0 waits forever
                (defaults to Config.GEMINI_TIMEOUT_SECONDS)
        """
        self.api_key = api_key or Config.GOOGLE_API_KEY
        self.model_name = model or Config.GEMINI_MODEL
        self.timeout = Config.GEMINI_TIMEOUT_SECONDS if timeout is None else timeout

        if not self.api_key:
            raise ValueError(
                "GOOGLE_API_KEY is required. Please set it in your .env file or environment variables. "
                "Get your API key from: https://aistudio.google.com/app/apikey"
            )

        genai.configure(api_key=self.api_key)

    def _build_model(self, system_instruction: str):
        return genai.GenerativeModel(
            self.model_name,
            generation_config=Config.generation_config(),
            system_instruction=system_instruction,
        )

    async def _send(self, context: InvocationContext, user_message: str):
        # Blocked and empty responses come back unchecked.
        model = self._build_model(context.system_instruction or SYSTEM_INSTRUCTION)
        contents = context.history + [Turn(role="user", text=user_message).to_content()]
        call = model.generate_content_async(contents)
        if self.timeout and self.timeout > 0:
            return await asyncio.wait_for(call, timeout=self.timeout)
        return await call

    async def resolve(self, user_message: str, history: Sequence[Turn], job_title: str = "") -> Outcome:
        """Run one turn against Gemini and classify the result."""
        try:
            context = self.build_invocation_context(history, job_title)
            response = await self._send(context, user_message)
        except Exception as e:
            logger.error("Gemini API error: %s", e, exc_info=True)
            return classify_error(e)

        outcome = classify_response(response)

        if isinstance(outcome, (ContentRestricted, Incomplete)):
            logger.warning("Gemini returned no usable reply: %s", outcome)
        return outcome

    async def reply(self, user_message: str, history: Sequence[Turn], job_title: str = "") -> str:
        outcome = await self.resolve(user_message, history, job_title)
        return outcome.render()
