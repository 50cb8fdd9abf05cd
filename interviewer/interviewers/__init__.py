"""Interviewer registry."""

from typing import Callable, Dict

from interviewer.interviewers.base import BaseInterviewer, InvocationContext
from interviewer.interviewers.gemini import GeminiInterviewer

INTERVIEWERS: Dict[str, Callable[[], BaseInterviewer]] = {
    "gemini": GeminiInterviewer,
}


def create_interviewer(interviewer_type: str = "gemini") -> BaseInterviewer:
    factory = INTERVIEWERS.get(interviewer_type.strip().lower())
    if factory is None:
        raise ValueError(
            f"Unknown interviewer '{interviewer_type}'. Valid: {', '.join(INTERVIEWERS)}"
        )
    return factory()


__all__ = ["create_interviewer", "BaseInterviewer", "InvocationContext", "INTERVIEWERS"]
