"""
ProjectRepository for database operations on Project model
"""

from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from database_models import Project


class ProjectRepository:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def insert(self, record: dict) -> int:
        """
        Persist a project submission.

        Args:
            record: student_name, project_title, description, phone,
                logo and pdf_file (paths, may be None)

        Returns:
            The new project's id
        """
        project = Project(
            student_name=record.get("student_name"),
            project_title=record.get("project_title"),
            description=record.get("description"),
            phone=record.get("phone"),
            logo=record.get("logo"),
            pdf_file=record.get("pdf_file"),
        )
        self.db.add(project)
        await self.db.flush()
        await self.db.refresh(project)
        return project.id

    async def list_all_by_recency(self) -> List[Project]:
        result = await self.db.execute(
            select(Project).order_by(Project.created_at.desc(), Project.id.desc())
        )
        return list(result.scalars().all())
