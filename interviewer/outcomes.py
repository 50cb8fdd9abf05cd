from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union

FINISH_STOP = "STOP"
FINISH_MAX_TOKENS = "MAX_TOKENS"
FINISH_SAFETY = "SAFETY"


@dataclass(frozen=True)
class Success:
    text: str

    def render(self) -> str:
        return self.text


@dataclass(frozen=True)
class Truncated:
    text: str

    def render(self) -> str:
        return f"{self.text} ... (truncated)"


@dataclass(frozen=True)
class Blocked:
    """Generation stopped by a safety filter on a known category."""
    category: str

    def render(self) -> str:
        return (
            f"My response was blocked due to safety concerns ({self.category}). "
            "Let's try a different question."
        )


@dataclass(frozen=True)
class ContentRestricted:
    """The prompt itself was blocked, so no candidates came back."""
    reason: str

    def render(self) -> str:
        return f"I cannot respond due to content restrictions ({self.reason})."


@dataclass(frozen=True)
class Incomplete:
    reason: Optional[str] = None

    def render(self) -> str:
        if self.reason is None:
            return "I received an incomplete response. Please try again."
        return f"Incomplete response (Reason: {self.reason}). Please try again."


@dataclass(frozen=True)
class Failed:
    kind: str  # "auth" | "service" | "transport" | "internal"
    detail: str = ""

    def render(self) -> str:
        if self.kind == "auth":
            return "API configuration issue. Contact the administrator."
        if self.kind == "service":
            return f"AI service error: {self.detail}"
        if self.kind == "transport":
            return f"AI service issue: {self.detail}. Try again later."
        return "Internal error. Please try again later."


Outcome = Union[Success, Truncated, Blocked, ContentRestricted, Incomplete, Failed]


def enum_name(value: Any) -> str:
    """Upstream enums expose ``.name``; plain strings pass through."""
    return getattr(value, "name", None) or str(value)


def candidate_text(candidate: Any) -> str:
    content = getattr(candidate, "content", None)
    parts = getattr(content, "parts", None) or []
    return "".join(getattr(p, "text", "") or "" for p in parts)


def classify_prompt_feedback(feedback: Any) -> Outcome:
    block_reason = getattr(feedback, "block_reason", None)
    if block_reason:
        return ContentRestricted(enum_name(block_reason))
    return Incomplete()


def classify_candidate(candidate: Any) -> Outcome:
    finish_reason = enum_name(getattr(candidate, "finish_reason", None))

    if finish_reason == FINISH_SAFETY:
        ratings = getattr(candidate, "safety_ratings", None) or []
        blocked = next((r for r in ratings if getattr(r, "blocked", False)), None)
        if blocked is not None:
            return Blocked(enum_name(blocked.category))

    if finish_reason not in (FINISH_STOP, FINISH_MAX_TOKENS):
        return Incomplete(finish_reason)

    text = candidate_text(candidate)
    if finish_reason == FINISH_MAX_TOKENS:
        return Truncated(text)
    return Success(text)


def classify_response(response: Any) -> Outcome:
    """Map a generateContent response onto exactly one outcome."""
    candidates = getattr(response, "candidates", None) if response is not None else None
    if not candidates:
        return classify_prompt_feedback(getattr(response, "prompt_feedback", None))
    return classify_candidate(candidates[0])
