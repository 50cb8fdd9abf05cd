import sys
from pathlib import Path
from typing import List

import pytest


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from interviewer.interviewers import BaseInterviewer  # noqa: E402


class FakeInterviewer(BaseInterviewer):
    """Records every call and answers with canned replies."""

    def __init__(self, replies: List[str] = None, error: Exception = None):
        self.replies = list(replies or [])
        self.error = error
        self.calls = []

    async def reply(self, user_message, history, job_title=""):
        self.calls.append({
            "message": user_message,
            "history": list(history),
            "job_title": job_title,
            "context": self.build_invocation_context(history, job_title),
        })
        if self.error is not None:
            raise self.error
        if self.replies:
            return self.replies.pop(0)
        return f"echo: {user_message}"


@pytest.fixture(autouse=True)
def _test_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("APP_ENV", "development")
    monkeypatch.setenv("GOOGLE_API_KEY", "test-key")


@pytest.fixture
def fake_interviewer() -> FakeInterviewer:
    return FakeInterviewer()
