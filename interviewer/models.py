"""Data models for the mock interviewer."""

import asyncio
import time
from dataclasses import dataclass, field
from typing import List, Literal


@dataclass(frozen=True)
class Turn:
    """A single message in the interview, tagged with its speaker."""
    role: Literal["user", "model"]
    text: str

    def to_dict(self):
        return {
            "role": self.role,
            "text": self.text
        }

    def to_content(self):
        """Gemini chat content shape."""
        return {
            "role": self.role,
            "parts": [{"text": self.text}]
        }


@dataclass
class InterviewSession:
    """Server-side state for one browser session."""
    session_id: str
    job_title: str = ""
    history: List[Turn] = field(default_factory=list)
    created_at: float = field(default_factory=time.time)
    last_seen: float = field(default_factory=time.time)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False, compare=False)

    def reset(self, job_title: str = ""):
        """Start a new interview; keep the stored job title unless a new one is given."""
        self.history = []
        if job_title and job_title.strip():
            self.job_title = job_title

    def record_exchange(self, message: str, reply: str):
        self.history.append(Turn(role="user", text=message))
        self.history.append(Turn(role="model", text=reply))

    def to_dict(self):
        return {
            "jobTitle": self.job_title,
            "history": [turn.to_dict() for turn in self.history]
        }
