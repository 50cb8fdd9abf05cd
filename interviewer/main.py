"""FastAPI backend for the mock interviewer."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from starlette.middleware.sessions import SessionMiddleware

from interviewer.config import Config
from interviewer.errors import ServiceUnavailable
from interviewer.handler import handle_turn
from interviewer.interviewers import BaseInterviewer, create_interviewer
from interviewer.models import InterviewSession
from interviewer.sessions import SessionStore

logging.basicConfig(
    level=Config.LOG_LEVEL.upper(),
    format="[%(asctime)s] %(levelname)s - %(name)s - %(message)s",
)
logger = logging.getLogger("interviewer.api")

SESSION_ID_KEY = "sid"

# Global state
session_store = SessionStore(ttl_seconds=Config.SESSION_MAX_AGE_SECONDS)
interviewer: Optional[BaseInterviewer] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Allowing requests from: %s", Config.FRONTEND_URL)
    for problem in Config.validate():
        logger.warning("Missing configuration: %s", problem)
    yield


app = FastAPI(title="Mock Interviewer", lifespan=lifespan)

# Session cookie only carries the session id; state lives in session_store
app.add_middleware(
    SessionMiddleware,
    secret_key=Config.SESSION_SECRET,
    session_cookie="interview_session",
    max_age=Config.SESSION_MAX_AGE_SECONDS,
    same_site="none" if Config.is_production() else "lax",
    https_only=Config.is_production(),
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[Config.FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["GET", "HEAD", "PUT", "PATCH", "POST", "DELETE"],
    allow_headers=["*"],
)


# Request models
class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    job_title: Optional[str] = Field(default=None, alias="jobTitle")
    start_interview: bool = Field(default=False, alias="startInterview")


async def get_session_store() -> SessionStore:
    return session_store


async def get_interviewer() -> Optional[BaseInterviewer]:
    """Create the interviewer on first use; None when it cannot be configured."""
    global interviewer
    if interviewer is None:
        try:
            interviewer = create_interviewer(Config.INTERVIEWER_TYPE)
            logger.info("Interviewer initialized: %s", Config.INTERVIEWER_TYPE)
        except (ValueError, RuntimeError) as e:
            logger.error("ERROR initializing interviewer: %s", e)
            return None
    return interviewer


async def get_session(request: Request, store: SessionStore = Depends(get_session_store)) -> InterviewSession:
    """Resolve the caller's interview session from the signed cookie."""
    session = store.get_or_create(request.session.get(SESSION_ID_KEY))
    request.session[SESSION_ID_KEY] = session.session_id
    return session


def service_unavailable(error: ServiceUnavailable = None) -> JSONResponse:
    error = error or ServiceUnavailable()
    return JSONResponse(status_code=500, content={"error": error.public_message})


@app.post("/api/chat")
async def chat(
    body: ChatRequest,
    session: InterviewSession = Depends(get_session),
    interviewer: Optional[BaseInterviewer] = Depends(get_interviewer),
):
    """Send the candidate's message to the interviewer and return its reply."""
    if interviewer is None:
        return service_unavailable()

    try:
        reply = await handle_turn(
            session,
            interviewer,
            body.message,
            job_title=body.job_title,
            start_interview=body.start_interview,
        )
    except ServiceUnavailable as e:
        return service_unavailable(e)

    return {"reply": reply}


@app.get("/api/chat/history")
async def chat_history(session: InterviewSession = Depends(get_session)):
    """Get the interview history for the caller's session."""
    return session.to_dict()


@app.get("/health")
async def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=Config.HOST, port=Config.PORT)
