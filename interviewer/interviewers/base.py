"""Abstract base class for AI interviewers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Dict, Optional, Sequence

from interviewer.models import Turn
from interviewer.prompt import build_initial_context


@dataclass
class InvocationContext:
    """What the model sees besides the new message.

    ``system_instruction`` is only set on the opening turn; later turns replay
    ``history`` and rely on the interviewer persona instead.
    """
    system_instruction: Optional[str] = None
    history: List[Dict] = field(default_factory=list)

    @property
    def is_first_turn(self) -> bool:
        return self.system_instruction is not None


class BaseInterviewer(ABC):
    """Abstract base class for all interviewer implementations."""

    @abstractmethod
    async def reply(self, user_message: str, history: Sequence[Turn], job_title: str = "") -> str:
        """Send message to the interviewer and get its reply.

        Implementations map every upstream failure to display text instead of
        raising.

        Args:
            user_message: Candidate's message
            history: Prior turns of this interview, oldest first
            job_title: Role being interviewed for, may be empty

        Returns:
            Text to show the candidate
        """
        pass

    def build_invocation_context(self, history: Sequence[Turn], job_title: str = "") -> InvocationContext:
        """Build the model context for the next turn.

        Args:
            history: Prior turns, never modified
            job_title: Role being interviewed for

        Returns:
            Fresh instruction with no history on the first turn, otherwise the
            replayed history with no instruction
        """
        if not history:
            return InvocationContext(system_instruction=build_initial_context(job_title), history=[])
        return InvocationContext(history=[turn.to_content() for turn in history])
