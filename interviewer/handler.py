from __future__ import annotations

import logging
from typing import Optional

from interviewer.errors import ServiceUnavailable
from interviewer.interviewers import BaseInterviewer
from interviewer.models import InterviewSession

logger = logging.getLogger("interviewer.handler")


async def handle_turn(
    session: InterviewSession,
    interviewer: BaseInterviewer,
    message: str,
    job_title: Optional[str] = None,
    start_interview: bool = False,
) -> str:
    """
    Run one interview turn for ``session``.

    A start signal clears the history first. History only grows, by one
    user turn and one model turn, when the interviewer returns a reply.

    Raises:
      ServiceUnavailable: the interviewer raised; history is left untouched.
    """
    async with session.lock:
        if start_interview:
            session.reset(job_title or "")

        logger.info(
            'Received request: message="%s", history_length=%d, jobTitle="%s"',
            message[:80],
            len(session.history),
            job_title or "",
        )

        try:
            reply = await interviewer.reply(message, list(session.history), session.job_title)
        except Exception as e:
            logger.exception("Interviewer failed for session %s: %s", session.session_id, e)
            raise ServiceUnavailable() from e

        session.record_exchange(message, reply)
        return reply
