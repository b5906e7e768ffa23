"""
Projects router - student project submissions with logo and PDF uploads
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from auth import get_current_user
from database import get_db
from crud.project import ProjectRepository
from utils.responses import success_response
from utils.file_storage import validate_upload, write_upload, remove_uploads
from utils.security_utils import LOGO, DOCUMENT
from utils.shared_utils import clean_text, log_endpoint_event
from config.settings import UPLOADS_DIR

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/projects", tags=["projects"])


@router.post("")
async def create_project(
    student_name: Optional[str] = Form(None),
    project_title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    phone: Optional[str] = Form(None),
    logo: Optional[UploadFile] = File(None),
    pdf_file: Optional[UploadFile] = File(None),
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Save a project submission. Both uploads are validated before either is
    written; files are stored under a generated name and only their paths go
    to the database. Stored files are removed again if the row is not saved.
    """
    validated_logo = await validate_upload(logo, LOGO)
    validated_pdf = await validate_upload(pdf_file, DOCUMENT)

    stored_paths = []
    try:
        logo_path = await write_upload(validated_logo, uploads_dir=UPLOADS_DIR)
        stored_paths.append(logo_path)
        pdf_path = await write_upload(validated_pdf, uploads_dir=UPLOADS_DIR)
        stored_paths.append(pdf_path)

        project_id = await ProjectRepository(db).insert({
            "student_name": clean_text(student_name),
            "project_title": clean_text(project_title),
            "description": clean_text(description),
            "phone": clean_text(phone),
            "logo": logo_path,
            "pdf_file": pdf_path,
        })
        await db.commit()
    except Exception:
        logger.error("Project submission failed, removing its stored uploads")
        await remove_uploads(stored_paths)
        raise

    log_endpoint_event("/api/projects", None, "success", {"project_id": project_id, "user_id": current_user["user_id"]})

    return success_response(
        data={"id": project_id, "logo": logo_path, "pdf_file": pdf_path},
        message="✅ Project saved",
        status=201
    )


@router.get("")
async def list_projects(db: AsyncSession = Depends(get_db)):
    """All projects, newest first"""
    projects = await ProjectRepository(db).list_all_by_recency()
    return success_response(data={"projects": [project.to_dict() for project in projects]})
