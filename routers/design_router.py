"""
Design Router - free-form design assistant and saved designs
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession

from database import get_db
from deps import get_design_service
from services.design_service import DesignService
from crud.design import DesignRepository
from utils.responses import success_response, error_response
from utils.shared_utils import log_endpoint_event

logger = logging.getLogger(__name__)

design_router = APIRouter(prefix="/api", tags=["design"])


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    student_id: Optional[str] = Field(None, alias="studentId")
    message: Optional[str] = None


class SuggestionsRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    student_id: Optional[str] = Field(None, alias="studentId")
    project_type: Optional[str] = Field(None, alias="projectType")


class SaveDesignRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    student_id: Optional[str] = Field(None, alias="studentId")
    design_type: Optional[str] = Field(None, alias="designType")
    design_data: Optional[str] = Field(None, alias="designData")


@design_router.post("/chat")
async def chat(request: ChatRequest, design: DesignService = Depends(get_design_service)):
    """Free-form message to the design assistant"""
    if not request.student_id or not request.message or not request.message.strip():
        return error_response("missing_fields", status=400, message="Student ID and message are required")

    response = await design.respond(request.student_id, request.message.strip())
    session = design.store.get(request.student_id)
    log_endpoint_event("/api/chat", request.student_id)

    return success_response(data={
        "response": response,
        "mode": session.mode if session else "design",
    })


@design_router.post("/design/suggestions")
async def design_suggestions(request: SuggestionsRequest, design: DesignService = Depends(get_design_service)):
    if not request.student_id or not request.project_type:
        return error_response("missing_fields", status=400, message="Student ID and project type are required")

    suggestions = await design.suggestions(request.project_type)
    return success_response(data={"suggestions": suggestions, "projectType": request.project_type})


@design_router.post("/design/save")
async def save_design(request: SaveDesignRequest, db: AsyncSession = Depends(get_db)):
    if not request.student_id or not request.design_type:
        return error_response("missing_fields", status=400, message="Student ID and design type are required")

    design_id = await DesignRepository(db).save(request.student_id, request.design_type, request.design_data or "")
    return success_response(data={"id": design_id}, message="✅ Design saved successfully")


@design_router.get("/designs/{student_id}")
async def list_designs(student_id: str, db: AsyncSession = Depends(get_db)):
    designs = await DesignRepository(db).list_for_student(student_id)
    return success_response(data={"designs": [design.to_dict() for design in designs]})
