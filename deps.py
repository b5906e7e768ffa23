"""
FastAPI dependencies for the conversational services.

The session store, text-generation client and retry policy are created once
in main.py and kept on app.state; everything else is built per request
around them. Tests override get_retry_policy / get_session_store.
"""
from fastapi import Request, Depends

from services.retry_policy import RetryPolicy
from services.text_generation_client import TextGenerationClient
from services.session_store import SessionStore
from services.question_service import QuestionService
from services.summary_service import SummaryService
from services.design_service import DesignService


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.session_store


def get_retry_policy(request: Request) -> RetryPolicy:
    return request.app.state.retry_policy


def get_text_client(request: Request) -> TextGenerationClient:
    return request.app.state.text_client


def get_question_service(
    store: SessionStore = Depends(get_session_store),
    retry_policy: RetryPolicy = Depends(get_retry_policy),
) -> QuestionService:
    return QuestionService(store, retry_policy)


def get_summary_service(
    store: SessionStore = Depends(get_session_store),
    retry_policy: RetryPolicy = Depends(get_retry_policy),
) -> SummaryService:
    return SummaryService(store, retry_policy)


def get_design_service(
    store: SessionStore = Depends(get_session_store),
    retry_policy: RetryPolicy = Depends(get_retry_policy),
) -> DesignService:
    return DesignService(store, retry_policy)
