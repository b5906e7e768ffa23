"""
BMC Router - guided Business Model Canvas sessions
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from deps import get_session_store, get_question_service, get_summary_service, get_design_service
from services.session_store import SessionStore
from services.question_service import QuestionService
from services.summary_service import SummaryService
from services.design_service import DesignService
from config.bmc_sections import TOTAL_SECTIONS
from models.session import VALID_MODES
from utils.responses import success_response, error_response
from errors import SessionNotFound
from utils.shared_utils import log_endpoint_event

logger = logging.getLogger(__name__)

bmc_router = APIRouter(prefix="/api", tags=["bmc"])


# Request models
class SessionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    student_id: Optional[str] = Field(None, alias="studentId")


class AnswerRequest(SessionRequest):
    answer: Optional[str] = None


class ModeSwitchRequest(SessionRequest):
    mode: Optional[str] = None


def _session_not_found(student_id: str):
    return error_response("session_not_found", status=404, message=f"No active session found for '{student_id}'")


def _missing_student_id():
    return error_response("missing_student_id", status=400, message="studentId is required")


@bmc_router.post("/start")
async def start_session(request: SessionRequest, store: SessionStore = Depends(get_session_store)):
    """Start (or restart) a canvas session for a student"""
    if not request.student_id:
        return _missing_student_id()

    store.start(request.student_id)
    log_endpoint_event("/api/start", request.student_id)
    return success_response(
        data={"studentId": request.student_id, "progress": 0, "totalSections": TOTAL_SECTIONS},
        message="Session started"
    )


@bmc_router.post("/next")
async def next_question(request: SessionRequest, questions: QuestionService = Depends(get_question_service)):
    """Ask the guiding question for the session's current canvas section"""
    if not request.student_id:
        return _missing_student_id()

    try:
        question = await questions.next_question(request.student_id)
    except SessionNotFound:
        return _session_not_found(request.student_id)

    session = questions.store.require(request.student_id)
    return success_response(data={
        "question": question,
        "progress": session.progress,
        "totalSections": TOTAL_SECTIONS,
    })


@bmc_router.post("/answer")
async def submit_answer(request: AnswerRequest, questions: QuestionService = Depends(get_question_service)):
    """Record the student's answer to the current section"""
    if not request.student_id:
        return _missing_student_id()
    if request.answer is None or not request.answer.strip():
        return error_response("missing_answer", status=400, message="answer is required")

    try:
        progress = questions.submit_answer(request.student_id, request.answer.strip())
    except SessionNotFound:
        return _session_not_found(request.student_id)

    return success_response(
        data={"progress": progress, "totalSections": TOTAL_SECTIONS},
        message="Answer saved"
    )


@bmc_router.post("/summary")
async def final_summary(request: SessionRequest, summaries: SummaryService = Depends(get_summary_service)):
    """Summarize every answer recorded so far"""
    if not request.student_id:
        return _missing_student_id()

    try:
        summary = await summaries.final_summary(request.student_id)
    except SessionNotFound:
        return _session_not_found(request.student_id)

    session = summaries.store.require(request.student_id)
    return success_response(data={"summary": summary, "bmcData": dict(session.answers)})


@bmc_router.get("/chat/history/{student_id}")
async def chat_history(student_id: str, store: SessionStore = Depends(get_session_store)):
    session = store.get(student_id)
    if session is None:
        return success_response(data={"history": []})

    return success_response(data={
        "history": [message.to_dict() for message in session.chat],
        "mode": session.mode,
        "bmcProgress": session.progress,
        "bmcData": dict(session.answers),
    })


@bmc_router.post("/mode/switch")
async def switch_mode(request: ModeSwitchRequest, design: DesignService = Depends(get_design_service)):
    """Switch a session between the canvas questionnaire and the design assistant"""
    if not request.student_id:
        return _missing_student_id()
    if request.mode not in VALID_MODES:
        return error_response(
            "invalid_mode",
            status=400,
            message=f"mode must be one of: {', '.join(VALID_MODES)}"
        )

    design.switch_mode(request.student_id, request.mode)
    return success_response(data={"mode": request.mode}, message=f"Mode switched to {request.mode}")
